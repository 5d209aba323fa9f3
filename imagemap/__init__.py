"""imagemap: turn same-colored raster regions into clickable polygon outlines.

Regions are flood filled from a seed pixel, their outer boundary is traced with
Moore-neighbor contour following, and the resulting polygons can be exported as
an HTML image map.
"""

from imagemap.types import (
    Coordinate,
    ImageMapConfig,
    ImageMapError,
    SentinelCollisionError,
)
from imagemap.grid import PixelGrid
from imagemap.segment import segment, Segmenter

__version__ = "0.1.0"
__all__ = [
    "Coordinate",
    "ImageMapConfig",
    "ImageMapError",
    "SentinelCollisionError",
    "PixelGrid",
    "segment",
    "Segmenter",
]
