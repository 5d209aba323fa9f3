"""Raster image ingestion into a PixelGrid."""
from pathlib import Path
from typing import Union

import numpy as np
from PIL import Image
from PIL import ImageOps

from imagemap.grid import PixelGrid
from imagemap.types import Color, ImageMapError


def load_grid(path: Union[str, Path]) -> PixelGrid:
    """
    Load an image file as a PixelGrid.

    Colors are kept exactly as stored: RGB images stay RGB, images with an
    alpha channel become RGBA and everything else (palette, grayscale, CMYK)
    is converted to RGB. No compositing or color management is applied,
    since region matching compares exact pixel values.

    Args:
        path: Path to image file

    Returns:
        PixelGrid backed by a uint8 (H, W, 3) or (H, W, 4) array

    Raises:
        FileNotFoundError: If file doesn't exist
        ImageMapError: If file cannot be decoded
    """
    path = Path(path)

    if not path.exists():
        raise FileNotFoundError(f"Image file not found: {path}")

    if not path.is_file():
        raise ImageMapError(f"Path is not a file: {path}")

    try:
        with Image.open(path) as img:
            # Apply EXIF orientation so coordinates match what a browser shows
            img = ImageOps.exif_transpose(img)

            has_alpha = img.mode in ('RGBA', 'LA', 'PA') or (
                img.mode == 'P' and 'transparency' in img.info
            )
            target = 'RGBA' if has_alpha else 'RGB'
            if img.mode != target:
                img = img.convert(target)

            return PixelGrid(np.array(img, dtype=np.uint8))

    except (IOError, OSError) as e:
        raise ImageMapError(f"Failed to load image {path}: {e}") from e


def clamp_point(grid: PixelGrid, x: int, y: int) -> tuple:
    """Clamp a pick point into the grid."""
    return (
        min(max(x, 0), grid.width - 1),
        min(max(y, 0), grid.height - 1),
    )


def sample_color(grid: PixelGrid, x: int, y: int) -> Color:
    """
    Sample the reference color at a picked pixel.

    Raises:
        ImageMapError: If (x, y) lies outside the image
    """
    if not grid.in_bounds(x, y):
        raise ImageMapError(
            f"Pick point ({x}, {y}) is outside the {grid.width}x{grid.height} image"
        )
    return grid.get(x, y)
