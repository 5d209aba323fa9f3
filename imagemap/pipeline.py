"""Main pipeline orchestrator for imagemap."""

import logging
from pathlib import Path
from typing import List, Optional, Tuple, Union

import numpy as np

from imagemap.debug_visualization import render_markers, render_outlines, save_image
from imagemap.grid import PixelGrid, as_color
from imagemap.html_export import regions_to_html, save_html
from imagemap.raster_ingest import clamp_point, load_grid, sample_color
from imagemap.segment import SegmentationResult, Segmenter
from imagemap.types import Color, ImageMapConfig, ImageMapError

logger = logging.getLogger(__name__)

# Pixel sampled when no reference is configured
DEFAULT_PICK_POINT = (200, 200)


class ImageMapPipeline:
    """Image to HTML image map pipeline."""

    def __init__(self, config: Optional[ImageMapConfig] = None):
        """Initialize pipeline with configuration.

        Args:
            config: Pipeline configuration. Uses defaults if None.
        """
        self.config = config or ImageMapConfig()
        self.debug_stages: List[Tuple[str, np.ndarray]] = []
        self.result: Optional[SegmentationResult] = None

    def reference_color(self, grid: PixelGrid) -> Color:
        """Resolve the color whose regions become map areas."""
        if self.config.reference_color is not None:
            return as_color(self.config.reference_color)
        if self.config.reference_point is None:
            x, y = clamp_point(grid, *DEFAULT_PICK_POINT)
        else:
            x, y = self.config.reference_point
        return sample_color(grid, x, y)

    def segment(self, grid: PixelGrid, debug: bool = False) -> SegmentationResult:
        """Segment a grid without touching it; a private copy is recolored.

        Args:
            grid: Source grid
            debug: If True, collect intermediate stage images

        Returns:
            SegmentationResult for the configured reference color
        """
        self.debug_stages = []
        if debug:
            self.debug_stages.append(("1_original", grid.data))

        reference = self.reference_color(grid)
        logger.info(f"Segmenting {grid!r} for reference color {reference}")
        working = grid.copy()
        result = Segmenter(self.config.sentinel_color).run(working, reference)

        if debug:
            self.debug_stages.append(("2_consumed", working.data))
            self.debug_stages.append(
                ("3_outlines", render_outlines((grid.height, grid.width), result.regions))
            )
            self.debug_stages.append(
                ("4_markers", render_markers(grid.data, result.regions, self.config))
            )

        self.result = result
        return result

    def write_debug_stages(self, directory: Union[str, Path]) -> List[Path]:
        """Write the collected debug stages as PNG files.

        Returns:
            Paths written, in stage order
        """
        directory = Path(directory)
        written = []
        for stage_name, stage_image in self.debug_stages:
            path = directory / f"{stage_name}.png"
            save_image(stage_image, path)
            written.append(path)
        return written

    def process(
        self,
        image_path: Union[str, Path],
        output_path: Optional[Union[str, Path]] = None,
        image_src: Optional[str] = None,
        overlay_path: Optional[Union[str, Path]] = None,
        debug: bool = False,
    ) -> str:
        """Process an image into an HTML image map.

        Args:
            image_path: Path to input image
            output_path: Optional path to save the HTML document
            image_src: <img src> value, defaults to the image file name
            overlay_path: Optional path to save a marker overlay PNG
            debug: If True, collect intermediate stage images

        Returns:
            HTML string

        Raises:
            FileNotFoundError: If input file doesn't exist
            ImageMapError: If processing fails
        """
        try:
            grid = load_grid(image_path)
            result = self.segment(grid, debug=debug)

            html = regions_to_html(
                result.polygons,
                image_src or Path(image_path).name,
                self.config,
            )

            if output_path:
                save_html(html, output_path)

            if overlay_path:
                save_image(render_markers(grid.data, result.regions, self.config), overlay_path)

            return html

        except (FileNotFoundError, ImageMapError):
            raise
        except Exception as e:
            raise ImageMapError(f"Pipeline processing failed: {e}") from e


def process_image(
    image_path: Union[str, Path],
    output_path: Optional[Union[str, Path]] = None,
    config: Optional[ImageMapConfig] = None,
) -> str:
    """Process an image into an HTML image map.

    Convenience function for one-off processing.

    Example:
        >>> html = process_image("map.png", "map.html",
        ...                      ImageMapConfig(reference_point=(200, 200)))
    """
    pipeline = ImageMapPipeline(config)
    return pipeline.process(image_path, output_path)
