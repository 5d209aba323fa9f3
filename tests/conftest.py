"""Pytest configuration and fixtures."""

import numpy as np
import pytest
from PIL import Image

from imagemap.grid import PixelGrid

BACKGROUND = (200, 200, 200)
REGION = (0, 0, 255)


def make_grid(width, height, squares=(), background=BACKGROUND, color=REGION):
    """Build an RGB grid with filled rectangles given as (x, y, w, h)."""
    data = np.empty((height, width, 3), dtype=np.uint8)
    data[:, :] = background
    for x, y, w, h in squares:
        data[y:y + h, x:x + w] = color
    return PixelGrid(data)


def rect_mask(width, height, x, y, w, h):
    """Boolean (height, width) mask with one filled rectangle."""
    mask = np.zeros((height, width), dtype=bool)
    mask[y:y + h, x:x + w] = True
    return mask


def rect_ring(x, y, w, h):
    """Set of outer ring pixels of a rectangle."""
    return {
        (px, py)
        for py in range(y, y + h)
        for px in range(x, x + w)
        if px in (x, x + w - 1) or py in (y, y + h - 1)
    }


@pytest.fixture
def square_grid():
    """10x10 grid with a 4x4 region square at offset (3, 3)."""
    return make_grid(10, 10, [(3, 3, 4, 4)])


@pytest.fixture
def two_square_grid():
    """10x10 grid with two disjoint 3x3 region squares."""
    return make_grid(10, 10, [(1, 1, 3, 3), (6, 5, 3, 3)])


@pytest.fixture
def square_png(tmp_path, square_grid):
    """square_grid written to a PNG file."""
    path = tmp_path / "square.png"
    Image.fromarray(square_grid.data).save(path)
    return path
