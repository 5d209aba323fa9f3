"""Common types, configuration and exceptions for imagemap."""

from dataclasses import dataclass
from typing import NamedTuple, Optional, Tuple

import numpy as np

# Type aliases
Color = Tuple[int, ...]
OccupancyMask = np.ndarray


class Coordinate(NamedTuple):
    """Integer pixel position, x = column, y = row."""

    x: int
    y: int


Polygon = Tuple[Coordinate, ...]
RegionSet = Tuple[Polygon, ...]


@dataclass(frozen=True)
class TracedRegion:
    """One enumerated region: where it was found, its outline and its size."""

    seed: Coordinate
    polygon: Polygon
    pixel_count: int


@dataclass
class ImageMapConfig:
    """Configuration for the image map pipeline."""

    # Reference color selection (reference_color wins when both are set)
    reference_point: Optional[Tuple[int, int]] = None
    reference_color: Optional[Color] = None

    # Fill color written over consumed pixels, None picks an unused color
    sentinel_color: Optional[Color] = None

    # Area export
    min_points: int = 30
    point_stride: int = 5
    map_name: str = "map"
    href_prefix: str = "#Area"

    # Marker overlay
    seed_marker_radius: int = 5
    point_marker_radius: int = 1

    def __post_init__(self):
        if self.min_points < 1:
            raise ValueError(f"min_points must be >= 1, got {self.min_points}")
        if self.point_stride < 1:
            raise ValueError(f"point_stride must be >= 1, got {self.point_stride}")


class ImageMapError(Exception):
    """Base exception for image map generation errors."""

    pass


class GridBoundsError(ImageMapError):
    """Exception raised when a pixel outside the grid is dereferenced."""

    pass


class ContourError(ImageMapError):
    """Exception raised during boundary tracing."""

    pass


class SentinelCollisionError(ImageMapError):
    """Exception raised when the sentinel fill color is not reserved."""

    pass


class ExportError(ImageMapError):
    """Exception raised while writing the image map."""

    pass
