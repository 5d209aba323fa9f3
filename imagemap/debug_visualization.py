"""Marker overlay and outline rendering for segmentation results."""
from pathlib import Path
from typing import Optional, Sequence, Tuple, Union

import cv2
import numpy as np
from PIL import Image, ImageDraw

from imagemap.html_export import sample_points, select_polygons
from imagemap.types import ImageMapConfig, TracedRegion

SEED_MARKER_COLOR = (255, 255, 0)    # yellow
POINT_MARKER_COLOR = (0, 0, 255)     # blue


def _to_rgb(image: np.ndarray) -> np.ndarray:
    if image.ndim == 2:
        image = np.stack([image] * 3, axis=-1)
    return np.ascontiguousarray(image[:, :, :3], dtype=np.uint8)


def render_markers(
    image: np.ndarray,
    regions: Sequence[TracedRegion],
    config: Optional[ImageMapConfig] = None,
) -> np.ndarray:
    """
    Draw region markers on top of the source image.

    Every region seed gets a yellow circle. Boundary points that end up in
    the image map (same filtering and sampling as the HTML export) get a
    small blue dot.

    Args:
        image: Source image (H, W), (H, W, 3) or (H, W, 4), uint8
        regions: Traced regions in discovery order
        config: Marker and export settings. Uses defaults if None.

    Returns:
        RGB uint8 image with markers
    """
    config = config or ImageMapConfig()
    canvas = Image.fromarray(_to_rgb(image))
    draw = ImageDraw.Draw(canvas)

    r = config.seed_marker_radius
    for region in regions:
        x, y = region.seed
        draw.ellipse([x - r, y - r, x + r, y + r], fill=SEED_MARKER_COLOR)

    r = config.point_marker_radius
    kept = select_polygons([region.polygon for region in regions], config.min_points)
    for polygon in kept:
        for x, y in sample_points(polygon, config.point_stride):
            draw.ellipse([x - r, y - r, x + r, y + r], fill=POINT_MARKER_COLOR)

    return np.array(canvas)


def render_outlines(
    shape: Tuple[int, int],
    regions: Sequence[TracedRegion],
    thickness: int = 1,
) -> np.ndarray:
    """
    Draw every traced outline as a closed polyline on a black canvas.

    Args:
        shape: (height, width) of the canvas
        regions: Traced regions
        thickness: Line thickness in pixels

    Returns:
        RGB uint8 image
    """
    h, w = shape
    canvas = np.zeros((h, w, 3), dtype=np.uint8)

    rng = np.random.default_rng(42)
    for region in regions:
        color = tuple(int(c) for c in rng.integers(64, 256, size=3))
        pts = np.array(region.polygon, dtype=np.int32).reshape(-1, 1, 2)
        cv2.polylines(canvas, [pts], True, color, thickness)

    return canvas


def save_image(image: np.ndarray, output_path: Union[str, Path]) -> None:
    """Save a uint8 image array as PNG (or whatever the suffix says)."""
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    Image.fromarray(image).save(output_path)
