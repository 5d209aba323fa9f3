"""Tests for the pixel grid."""

import numpy as np
import pytest

from imagemap.grid import PixelGrid, as_color
from imagemap.types import GridBoundsError

from conftest import BACKGROUND, REGION, make_grid


class TestPixelGrid:
    """Test cases for PixelGrid access."""

    def test_dimensions(self):
        """Width is the column count, height the row count."""
        grid = PixelGrid(np.zeros((4, 7, 3), dtype=np.uint8))

        assert grid.width == 7
        assert grid.height == 4
        assert grid.channels == 3

    def test_get_set_uses_x_y(self):
        """get/set address pixels as (column, row)."""
        grid = make_grid(5, 3)
        grid.set(4, 1, REGION)

        assert grid.get(4, 1) == REGION
        assert tuple(grid.data[1, 4]) == REGION
        assert grid.get(1, 1) == BACKGROUND

    def test_out_of_bounds_access_raises(self):
        """Dereferencing a pixel outside the grid is a logic fault."""
        grid = make_grid(3, 3)

        with pytest.raises(GridBoundsError):
            grid.get(3, 0)
        with pytest.raises(GridBoundsError):
            grid.set(0, -1, REGION)

    def test_grayscale_grid(self):
        """Single channel grids use one-value colors."""
        grid = PixelGrid(np.zeros((2, 2), dtype=np.uint8))
        grid.set(1, 0, (7,))

        assert grid.get(1, 0) == (7,)
        assert grid.contains((7,))
        assert grid.channels == 1

    def test_color_mask(self):
        """color_mask marks exactly the matching pixels."""
        grid = make_grid(6, 6, [(1, 2, 2, 3)])
        mask = grid.color_mask(REGION)

        assert mask.shape == (6, 6)
        assert mask.sum() == 6
        assert mask[2:5, 1:3].all()

    def test_color_mask_channel_mismatch(self):
        """A color with the wrong channel count matches nothing."""
        grid = make_grid(3, 3)

        assert not grid.color_mask((200, 200, 200, 255)).any()

    def test_colors_and_copy(self):
        """colors lists distinct colors; copy is independent."""
        grid = make_grid(4, 4, [(0, 0, 1, 1)])
        clone = grid.copy()
        clone.set(3, 3, (1, 2, 3))

        assert set(grid.colors()) == {BACKGROUND, REGION}
        assert grid.get(3, 3) == BACKGROUND

    def test_rejects_bad_shape(self):
        """Only 2D and 3D arrays are grids."""
        with pytest.raises(ValueError):
            PixelGrid(np.zeros((2, 2, 2, 2)))

    def test_filled(self):
        """filled builds a uniform grid."""
        grid = PixelGrid.filled(3, 2, (9, 8, 7))

        assert grid.width == 3 and grid.height == 2
        assert grid.colors() == [(9, 8, 7)]


def test_as_color():
    """as_color normalizes scalars, lists and numpy pixels."""
    assert as_color(5) == (5,)
    assert as_color([1, 2, 3]) == (1, 2, 3)
    assert as_color(np.array([4, 5, 6], dtype=np.uint8)) == (4, 5, 6)
