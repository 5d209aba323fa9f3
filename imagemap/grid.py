"""Pixel grid: the mutable raster the segmentation works on."""

from typing import List, Sequence, Union

import numpy as np

from imagemap.types import Color, GridBoundsError


def as_color(value: Union[int, Sequence[int], np.ndarray]) -> Color:
    """Normalize a scalar, sequence or numpy pixel into a Color tuple."""
    arr = np.atleast_1d(np.asarray(value))
    return tuple(int(v) for v in arr.ravel())


class PixelGrid:
    """Read/write view over an (H, W) or (H, W, C) array of colors.

    Pixels are addressed as (x, y) with x the column and y the row. The grid
    never changes size; recoloring happens in place on the wrapped array.
    """

    def __init__(self, data: np.ndarray):
        if data.ndim not in (2, 3):
            raise ValueError(f"Expected (H, W) or (H, W, C) array, got shape {data.shape}")
        self.data = data

    @classmethod
    def from_array(cls, array: np.ndarray, copy: bool = True) -> "PixelGrid":
        """Wrap an image array, copying it unless told otherwise."""
        array = np.asarray(array)
        return cls(array.copy() if copy else array)

    @classmethod
    def filled(cls, width: int, height: int, color: Color) -> "PixelGrid":
        """Create a grid of a single color."""
        color = as_color(color)
        data = np.empty((height, width, len(color)), dtype=np.uint8)
        data[:, :] = color
        return cls(data)

    @property
    def width(self) -> int:
        return self.data.shape[1]

    @property
    def height(self) -> int:
        return self.data.shape[0]

    @property
    def channels(self) -> int:
        return 1 if self.data.ndim == 2 else self.data.shape[2]

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def _check(self, x: int, y: int) -> None:
        if not self.in_bounds(x, y):
            raise GridBoundsError(
                f"Pixel ({x}, {y}) outside {self.width}x{self.height} grid"
            )

    def get(self, x: int, y: int) -> Color:
        self._check(x, y)
        return as_color(self.data[y, x])

    def set(self, x: int, y: int, color: Color) -> None:
        self._check(x, y)
        self.data[y, x] = color[0] if self.data.ndim == 2 else color

    def color_mask(self, color: Color) -> np.ndarray:
        """Boolean (H, W) mask of pixels equal to color."""
        color = as_color(color)
        if len(color) != self.channels:
            return np.zeros((self.height, self.width), dtype=bool)
        if self.data.ndim == 2:
            return self.data == color[0]
        return np.all(self.data == np.asarray(color), axis=2)

    def contains(self, color: Color) -> bool:
        return bool(self.color_mask(color).any())

    def colors(self) -> List[Color]:
        """Distinct colors present in the grid, in sorted order."""
        pixels = self.data.reshape(-1, self.channels)
        return [as_color(c) for c in np.unique(pixels, axis=0)]

    def copy(self) -> "PixelGrid":
        return PixelGrid(self.data.copy())

    def __repr__(self) -> str:
        return f"PixelGrid({self.width}x{self.height}, channels={self.channels})"
