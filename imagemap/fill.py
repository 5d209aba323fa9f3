"""Region filling: 4-connected flood fill with an explicit work stack."""

import logging
from typing import Tuple

import numpy as np

from imagemap.grid import PixelGrid, as_color
from imagemap.types import Color, Coordinate, OccupancyMask

logger = logging.getLogger(__name__)

# Axis neighbors pushed for every filled pixel
TOWER_OFFSETS: Tuple[Tuple[int, int], ...] = ((1, 0), (-1, 0), (0, 1), (0, -1))


def flood_fill(grid: PixelGrid, seed: Coordinate, fill_color: Color) -> OccupancyMask:
    """Fill the 4-connected region containing seed and return its mask.

    The color under the seed becomes the reference color. Every reachable
    pixel of that color is marked in the returned mask and recolored to
    fill_color in the grid, so a later scan for the reference color can no
    longer find it.

    Args:
        grid: Grid to fill, modified in place
        seed: Starting pixel
        fill_color: Color written over every visited pixel

    Returns:
        Boolean (H, W) mask, all False if seed lies outside the grid
    """
    mask = np.zeros((grid.height, grid.width), dtype=bool)

    x, y = seed
    if not grid.in_bounds(x, y):
        return mask

    fill_color = as_color(fill_color)
    # Pixels still showing the seed's color; only visited ones change below
    matches = grid.color_mask(grid.get(x, y))
    h, w = matches.shape

    stack = [(x, y)]
    while stack:
        tx, ty = stack.pop()

        # Bounds and visited checks happen on pop
        if not (0 <= tx < w and 0 <= ty < h) or mask[ty, tx]:
            continue
        if not matches[ty, tx]:
            continue

        mask[ty, tx] = True

        for dx, dy in TOWER_OFFSETS:
            stack.append((tx + dx, ty + dy))

    grid.data[mask] = fill_color[0] if grid.data.ndim == 2 else fill_color

    logger.debug(f"Filled {int(mask.sum())} pixels from seed ({x}, {y})")
    return mask
