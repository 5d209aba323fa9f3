"""Command-line interface for imagemap."""

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Tuple

from imagemap.pipeline import ImageMapPipeline
from imagemap.types import ImageMapConfig


def int_tuple(text: str) -> Tuple[int, ...]:
    """Parse a comma-separated list of integers such as '255,0,0'."""
    try:
        return tuple(int(part.strip()) for part in text.split(','))
    except ValueError:
        raise argparse.ArgumentTypeError(f"Expected comma-separated integers, got '{text}'")


def point(text: str) -> Tuple[int, int]:
    """Parse an 'X,Y' pixel position."""
    values = int_tuple(text)
    if len(values) != 2:
        raise argparse.ArgumentTypeError(f"Expected X,Y, got '{text}'")
    return values


def create_parser() -> argparse.ArgumentParser:
    """Create argument parser for CLI."""
    parser = argparse.ArgumentParser(
        prog="imagemap",
        description="Generate an HTML image map from same-colored image regions",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Regions sharing the color of pixel (200, 200)
  imagemap states.png

  # Pick the reference pixel explicitly and write a marker overlay
  imagemap states.png -o map.html --at 120,80 --overlay markers.png

  # Use an explicit color and keep smaller shapes
  imagemap states.png --color 255,255,255 --min-points 8 --stride 2
        """,
    )

    parser.add_argument("input", help="Input image file path")

    parser.add_argument(
        "-o",
        "--output",
        default=None,
        help="Output HTML file path (default: input name with .html extension)",
    )

    pick = parser.add_mutually_exclusive_group()
    pick.add_argument(
        "--at",
        type=point,
        default=None,
        help="Pixel X,Y whose color selects the regions (default: 200,200 clamped to the image)",
    )
    pick.add_argument(
        "--color",
        type=int_tuple,
        default=None,
        help="Reference color as R,G,B or R,G,B,A",
    )

    parser.add_argument(
        "--sentinel",
        type=int_tuple,
        default=None,
        help="Color written over processed pixels; must not occur in the image (default: auto)",
    )

    parser.add_argument(
        "--min-points",
        type=int,
        default=30,
        help="Skip regions whose outline has fewer points (default: 30)",
    )

    parser.add_argument(
        "--stride",
        type=int,
        default=5,
        help="Emit every Nth outline point as an area vertex (default: 5)",
    )

    parser.add_argument(
        "--image-src",
        default=None,
        help="src attribute of the <img> tag (default: input file name)",
    )

    parser.add_argument(
        "--overlay", default=None, help="Save a PNG with region and point markers"
    )

    parser.add_argument(
        "--debug", action="store_true", help="Save intermediate stage images"
    )

    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable debug logging"
    )

    return parser


def main(args: Optional[list] = None) -> int:
    """Main entry point for CLI.

    Args:
        args: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0 for success, 1 for error)
    """
    parser = create_parser()
    parsed = parser.parse_args(args)

    if parsed.verbose:
        logging.basicConfig(
            level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s"
        )

    input_path = Path(parsed.input)
    if parsed.output:
        output_path = parsed.output
    else:
        output_path = str(input_path.with_suffix(".html"))

    try:
        config = ImageMapConfig(
            reference_point=parsed.at,
            reference_color=parsed.color,
            sentinel_color=parsed.sentinel,
            min_points=parsed.min_points,
            point_stride=parsed.stride,
        )
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    try:
        print(f"Input: {parsed.input}")
        print(f"Output: {output_path}")

        pipeline = ImageMapPipeline(config)
        pipeline.process(
            parsed.input,
            output_path,
            image_src=parsed.image_src,
            overlay_path=parsed.overlay,
            debug=parsed.debug,
        )

        result = pipeline.result
        print(f"  Reference color: {result.reference_color}")
        print(f"  Regions found: {len(result.regions)}")
        if parsed.overlay:
            print(f"  Overlay saved: {parsed.overlay}")

        if parsed.debug:
            stage_dir = Path(output_path).with_name(f"{Path(output_path).stem}_stages")
            for path in pipeline.write_debug_stages(stage_dir):
                print(f"  Saved stage: {path}")

        return 0

    except FileNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except Exception as e:
        print(f"Error processing image: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
