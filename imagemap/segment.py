"""Segmentation driver: locate, fill and trace regions until none remain."""

import itertools
import logging
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Dict, Iterator, List, Optional, Sequence

from imagemap.contour import trace_contour
from imagemap.fill import flood_fill
from imagemap.grid import PixelGrid, as_color
from imagemap.locate import find_next_region
from imagemap.types import (
    Color,
    RegionSet,
    SentinelCollisionError,
    TracedRegion,
)

logger = logging.getLogger(__name__)

# Tried first when picking a sentinel, keyed by channel count
SENTINEL_PREFERENCE: Dict[int, Color] = {
    1: (255,),
    3: (255, 0, 0),
    4: (255, 0, 0, 255),
}


class SegmentationState(Enum):
    """Where a segmentation run currently is."""

    SCANNING = auto()
    FILLING = auto()
    TRACING = auto()
    DONE = auto()


@dataclass
class SegmentationResult:
    """Regions found by one run, in discovery order."""

    reference_color: Color
    sentinel_color: Color
    regions: List[TracedRegion] = field(default_factory=list)

    @property
    def polygons(self) -> RegionSet:
        return tuple(region.polygon for region in self.regions)

    @property
    def pixel_count(self) -> int:
        return sum(region.pixel_count for region in self.regions)


def choose_sentinel_color(grid: PixelGrid, reserved: Sequence[Color] = ()) -> Color:
    """Pick a color that does not occur anywhere in the grid nor in reserved."""
    present = set(grid.colors())
    present.update(as_color(c) for c in reserved)
    preferred = SENTINEL_PREFERENCE.get(grid.channels)

    candidates = itertools.product(range(256), repeat=grid.channels)
    if preferred is not None:
        candidates = itertools.chain([preferred], candidates)

    for candidate in candidates:
        if tuple(candidate) not in present:
            return tuple(candidate)

    raise SentinelCollisionError("Every candidate sentinel color occurs in the image")


def check_reference(grid: PixelGrid, reference_color: Color) -> None:
    """Reject a reference color that could never match a grid pixel.

    Raises:
        ValueError: If the color does not have one value per grid channel
    """
    if len(reference_color) != grid.channels:
        raise ValueError(
            f"Reference color {reference_color} has {len(reference_color)} channels, "
            f"grid has {grid.channels}"
        )


def check_sentinel(grid: PixelGrid, reference_color: Color, sentinel_color: Color) -> None:
    """Make sure consumed pixels can never be mistaken for unprocessed ones.

    Raises:
        ValueError: If the sentinel does not have one value per grid channel
        SentinelCollisionError: If the sentinel equals the reference color
            or already occurs in the grid
    """
    if len(sentinel_color) != grid.channels:
        raise ValueError(
            f"Sentinel color {sentinel_color} has {len(sentinel_color)} channels, "
            f"grid has {grid.channels}"
        )
    if sentinel_color == reference_color:
        raise SentinelCollisionError(
            f"Sentinel color {sentinel_color} equals the reference color"
        )
    if grid.contains(sentinel_color):
        raise SentinelCollisionError(
            f"Sentinel color {sentinel_color} already occurs in the image"
        )


class Segmenter:
    """Enumerates every region of a reference color in a pixel grid.

    Each region is located by a row-major scan, consumed by a flood fill that
    recolors it with the sentinel color, and traced. Regions are processed one
    at a time because every scan relies on all earlier fills being applied.
    """

    def __init__(self, sentinel_color: Optional[Color] = None):
        """Initialize the segmenter.

        Args:
            sentinel_color: Color written over consumed regions. Must not occur
                in the input; None picks an unused color per run.
        """
        self.sentinel_color = as_color(sentinel_color) if sentinel_color is not None else None
        self.state = SegmentationState.DONE

    def resolve_sentinel(
        self,
        grid: PixelGrid,
        reference_color: Color,
        sentinel_color: Optional[Color] = None,
    ) -> Color:
        """Return the sentinel for this grid after checking it is reserved.

        An explicit sentinel_color overrides the one given at construction.
        """
        reference_color = as_color(reference_color)
        check_reference(grid, reference_color)

        sentinel = as_color(sentinel_color) if sentinel_color is not None else self.sentinel_color
        if sentinel is None:
            sentinel = choose_sentinel_color(grid, reserved=[reference_color])
        check_sentinel(grid, reference_color, sentinel)
        return sentinel

    def iter_regions(
        self,
        grid: PixelGrid,
        reference_color: Color,
        sentinel_color: Optional[Color] = None,
    ) -> Iterator[TracedRegion]:
        """Yield regions of reference_color one by one, recoloring the grid.

        If iteration is abandoned midway the grid is left partially
        recolored; start again from a fresh copy.

        Raises:
            ValueError: If a color does not have one value per grid channel
            SentinelCollisionError: If the sentinel color is not reserved
        """
        reference_color = as_color(reference_color)
        sentinel_color = self.resolve_sentinel(grid, reference_color, sentinel_color)

        # Everything before the last seed is already known not to match
        cursor = 0
        self.state = SegmentationState.SCANNING
        while True:
            seed = find_next_region(grid, reference_color, cursor)
            if seed is None:
                self.state = SegmentationState.DONE
                return
            cursor = seed.y * grid.width + seed.x

            self.state = SegmentationState.FILLING
            mask = flood_fill(grid, seed, sentinel_color)

            self.state = SegmentationState.TRACING
            polygon = trace_contour(mask)
            region = TracedRegion(seed=seed, polygon=polygon, pixel_count=int(mask.sum()))
            logger.debug(
                f"Region at ({seed.x}, {seed.y}): {region.pixel_count} pixels, "
                f"{len(polygon)} boundary points"
            )

            self.state = SegmentationState.SCANNING
            yield region

    def run(self, grid: PixelGrid, reference_color: Color) -> SegmentationResult:
        """Segment grid completely.

        Args:
            grid: Grid to segment, recolored in place
            reference_color: Color of the regions to enumerate

        Returns:
            SegmentationResult with regions in discovery order

        Raises:
            ValueError: If a color does not have one value per grid channel
            SentinelCollisionError: If the sentinel color is not reserved
        """
        reference_color = as_color(reference_color)
        sentinel = self.resolve_sentinel(grid, reference_color)

        result = SegmentationResult(reference_color=reference_color, sentinel_color=sentinel)
        result.regions.extend(self.iter_regions(grid, reference_color, sentinel))

        logger.info(
            f"Segmented {len(result.regions)} regions of color {reference_color} "
            f"({result.pixel_count} pixels)"
        )
        return result


def segment(
    grid: PixelGrid,
    reference_color: Color,
    sentinel_color: Optional[Color] = None,
) -> RegionSet:
    """Return one boundary polygon per region of reference_color.

    Convenience wrapper around Segmenter. The grid is recolored in place.

    Example:
        >>> polygons = segment(grid, (0, 0, 255))
    """
    return Segmenter(sentinel_color).run(grid, reference_color).polygons
