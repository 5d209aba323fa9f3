"""HTML image map export for traced regions."""
import logging
from html import escape
from pathlib import Path
from typing import Iterable, List, Optional, Sequence, Union

from imagemap.types import Coordinate, ExportError, ImageMapConfig, Polygon

logger = logging.getLogger(__name__)


def sample_points(polygon: Polygon, stride: int) -> List[Coordinate]:
    """
    Keep every stride-th point of a polygon, starting with the first.

    Args:
        polygon: Boundary points in trace order
        stride: Keep one point out of this many

    Returns:
        Sampled points in trace order
    """
    if stride < 1:
        raise ValueError(f"stride must be >= 1, got {stride}")
    return list(polygon[::stride])


def format_coords(points: Sequence[Coordinate]) -> str:
    """Format points as the flat x,y,x,y list an <area> coords attribute takes."""
    return ','.join(f"{p.x},{p.y}" for p in points)


def area_tag(points: Sequence[Coordinate], href: str) -> str:
    """
    Build one polygon <area> element.

    Args:
        points: Polygon vertices in order
        href: Link target of the area

    Returns:
        <area> element string
    """
    return (
        f'<area shape="polygon" coords="{format_coords(points)}" '
        f'href="{escape(href)}" />'
    )


def select_polygons(polygons: Iterable[Polygon], min_points: int) -> List[Polygon]:
    """Drop polygons too small to make a usable clickable area."""
    kept = []
    for i, polygon in enumerate(polygons):
        if len(polygon) < min_points:
            logger.debug(f"Skipping region {i}: {len(polygon)} < {min_points} points")
            continue
        kept.append(polygon)
    return kept


def regions_to_html(
    polygons: Iterable[Polygon],
    image_src: str,
    config: Optional[ImageMapConfig] = None,
) -> str:
    """
    Render polygons as an HTML page holding an image map.

    Polygons with fewer than config.min_points points are left out and the
    remaining ones are numbered from 1 in discovery order.

    Args:
        polygons: Region outlines in discovery order
        image_src: Value for the <img src> attribute
        config: Export settings. Uses defaults if None.

    Returns:
        HTML document string
    """
    config = config or ImageMapConfig()
    map_name = escape(config.map_name)

    lines = [
        '<!doctype html><html><head></head><body>',
        f'<img src="{escape(image_src)}" alt="" usemap="#{map_name}" />',
        f'<map name="{map_name}">',
    ]

    kept = select_polygons(polygons, config.min_points)
    for area_no, polygon in enumerate(kept, start=1):
        points = sample_points(polygon, config.point_stride)
        lines.append(area_tag(points, f"{config.href_prefix}{area_no}"))

    lines.append('</map>')
    lines.append('</body></html>')

    logger.info(f"Exported {len(kept)} areas to image map '{config.map_name}'")
    return '\n'.join(lines) + '\n'


def save_html(html: str, output_path: Union[str, Path]) -> None:
    """
    Save an HTML document to file.

    Args:
        html: HTML document string
        output_path: Output file path

    Raises:
        ExportError: If the file cannot be written
    """
    output_path = Path(output_path)
    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(html, encoding='utf-8')
    except OSError as e:
        raise ExportError(f"Failed to write {output_path}: {e}") from e
