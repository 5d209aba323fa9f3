"""Tests for region discovery."""

import numpy as np

from imagemap.fill import flood_fill
from imagemap.grid import PixelGrid
from imagemap.locate import find_next_region
from imagemap.types import Coordinate

from conftest import BACKGROUND, REGION, make_grid


class TestFindNextRegion:
    """Test cases for find_next_region."""

    def test_row_major_order(self):
        """The topmost row wins, then the leftmost column."""
        grid = make_grid(6, 6, [(4, 1, 1, 1), (1, 2, 1, 1), (0, 5, 1, 1)])

        assert find_next_region(grid, REGION) == Coordinate(4, 1)

    def test_none_when_absent(self):
        grid = make_grid(5, 5)

        assert find_next_region(grid, REGION) is None

    def test_finds_background(self, square_grid):
        assert find_next_region(square_grid, BACKGROUND) == Coordinate(0, 0)

    def test_skips_filled_region(self, two_square_grid):
        """A consumed region is never found again."""
        first = find_next_region(two_square_grid, REGION)
        flood_fill(two_square_grid, first, (255, 0, 0))

        second = find_next_region(two_square_grid, REGION)

        assert first == Coordinate(1, 1)
        assert second == Coordinate(6, 5)

    def test_resume_from_index(self):
        """Scanning can resume at a flat index."""
        grid = make_grid(5, 5, [(1, 0, 1, 1), (3, 2, 1, 1)])

        assert find_next_region(grid, REGION, start=2) == Coordinate(3, 2)
        assert find_next_region(grid, REGION, start=1) == Coordinate(1, 0)
        assert find_next_region(grid, REGION, start=14) is None

    def test_empty_grid(self):
        grid = PixelGrid(np.zeros((0, 0, 3), dtype=np.uint8))

        assert find_next_region(grid, REGION) is None
