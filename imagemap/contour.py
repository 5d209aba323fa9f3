"""Boundary tracing module using Moore-neighbor contour following."""

import logging
from typing import Dict, List, Optional, Tuple

import numpy as np

from imagemap.types import ContourError, Coordinate, OccupancyMask, Polygon

logger = logging.getLogger(__name__)

# Moore neighborhood ring, starting south and walking the compass
MOORE_NEIGHBORHOOD: Tuple[Tuple[int, int], ...] = (
    (0, 1),    # S
    (-1, 1),   # SW
    (-1, 0),   # W
    (-1, -1),  # NW
    (0, -1),   # N
    (1, -1),   # NE
    (1, 0),    # E
    (1, 1),    # SE
)
RING_INDEX: Dict[Tuple[int, int], int] = {
    offset: i for i, offset in enumerate(MOORE_NEIGHBORHOOD)
}


def _is_set(mask: OccupancyMask, x: int, y: int) -> bool:
    """Mask lookup where anything outside the mask counts as background."""
    h, w = mask.shape
    return 0 <= x < w and 0 <= y < h and bool(mask[y, x])


def find_start_point(mask: OccupancyMask) -> Optional[Tuple[Coordinate, Coordinate]]:
    """Find where tracing starts and the point it is considered to come from.

    Rows are scanned from the bottom up and each row from left to right. The
    first set pixel is the start; the pixel just before it in that row (which
    may lie outside the mask) is the initial backtrack point.

    Returns:
        (start, backtrack) or None if the mask has no set pixel
    """
    rows = np.flatnonzero(mask.any(axis=1))
    if len(rows) == 0:
        return None

    y = int(rows[-1])
    x = int(np.flatnonzero(mask[y])[0])
    return Coordinate(x, y), Coordinate(x - 1, y)


def _next_boundary_point(
    mask: OccupancyMask, boundary: Coordinate, backtrack: Coordinate
) -> Optional[Tuple[Coordinate, Coordinate]]:
    """Walk the ring around boundary, starting just after backtrack.

    Returns:
        (next boundary point, new backtrack point), or None when no neighbor
        of boundary is set
    """
    offset = (backtrack.x - boundary.x, backtrack.y - boundary.y)
    if offset not in RING_INDEX:
        raise ContourError(
            f"Backtrack point {tuple(backtrack)} is not a neighbor of {tuple(boundary)}"
        )
    index = RING_INDEX[offset]

    previous = backtrack
    for step in range(1, len(MOORE_NEIGHBORHOOD)):
        dx, dy = MOORE_NEIGHBORHOOD[(index + step) % len(MOORE_NEIGHBORHOOD)]
        candidate = Coordinate(boundary.x + dx, boundary.y + dy)
        if _is_set(mask, candidate.x, candidate.y):
            return candidate, previous
        previous = candidate

    return None


def trace_contour(mask: OccupancyMask) -> Polygon:
    """Trace the outer boundary of the single region in mask.

    Follows the 8-connected perimeter with Moore-neighbor tracing and stops
    as soon as the walk comes back to the start pixel. The start pixel is not
    repeated at the end of the polygon.

    Args:
        mask: Boolean (H, W) mask holding one connected region

    Returns:
        Boundary pixels in traversal order; a single isolated pixel yields a
        one-point polygon

    Raises:
        ContourError: If the mask is empty or the walk never closes
    """
    found = find_start_point(mask)
    if found is None:
        raise ContourError("Cannot trace a contour in an empty mask")
    start, backtrack = found

    polygon: List[Coordinate] = [start]
    boundary = start

    max_steps = 8 * int(np.count_nonzero(mask)) + 8
    for _ in range(max_steps):
        step = _next_boundary_point(mask, boundary, backtrack)
        if step is None:
            break
        boundary, backtrack = step
        if boundary == start:
            break
        polygon.append(boundary)
    else:
        raise ContourError(
            f"Contour starting at {tuple(start)} did not close after {max_steps} steps"
        )

    logger.debug(f"Traced {len(polygon)} boundary points from ({start.x}, {start.y})")
    return tuple(polygon)
