"""Region discovery: row-major scan for the next unprocessed pixel."""

from typing import Optional

import numpy as np

from imagemap.grid import PixelGrid
from imagemap.types import Color, Coordinate


def find_next_region(
    grid: PixelGrid, color: Color, start: int = 0
) -> Optional[Coordinate]:
    """Return the first pixel of the given color in row-major order.

    Args:
        grid: Grid to scan
        color: Color of pixels not yet consumed by a fill
        start: Flat index (y * width + x) to resume scanning from. Callers
            may only pass an index when no earlier pixel can match.

    Returns:
        Coordinate of the first matching pixel, or None if there is none
    """
    flat = grid.color_mask(color).ravel()
    hits = np.flatnonzero(flat[start:])
    if len(hits) == 0:
        return None

    index = start + int(hits[0])
    return Coordinate(index % grid.width, index // grid.width)
