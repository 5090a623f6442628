"""Command-line entry point: render a scene file to an image.

Usage:
    raycast [options] WIDTH HEIGHT INPUT OUTPUT

Options:
    --arch {auto,cpu,gpu}   Taichi backend (default: auto, GPU with CPU fallback)
    --format {ppm,png}      Output format (default: from OUTPUT's extension, PPM
                            unless it ends in .png)
    --preview               Show the rendered image in a Matplotlib window
    -v, --verbose           Enable debug logging
    -q, --quiet             Suppress progress output

Example:
    raycast 640 480 scenes/basic.json basic.ppm
"""

from __future__ import annotations

import argparse
import logging
import sys
import time
from collections.abc import Sequence

import taichi as ti

from raycast.errors import RaycastError
from raycast.scene.reader import load_scene

logger = logging.getLogger(__name__)


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        prog="raycast",
        description="Render a scene description by ray casting.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("width", help="Image width in pixels (positive integer)")
    parser.add_argument("height", help="Image height in pixels (positive integer)")
    parser.add_argument("input", help="Scene description file")
    parser.add_argument("output", help="Output image file")
    parser.add_argument(
        "--arch",
        choices=("auto", "cpu", "gpu"),
        default="auto",
        help="Taichi backend (default: auto)",
    )
    parser.add_argument(
        "--format",
        choices=("ppm", "png"),
        default=None,
        help="Output format (default: from the output file extension)",
    )
    parser.add_argument(
        "--preview",
        action="store_true",
        help="Show the rendered image in a preview window",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        help="Suppress progress output",
    )
    return parser.parse_args(argv)


def parse_dimension(name: str, value: str) -> int:
    """Parse an image dimension, which must be a positive integer.

    Raises:
        ValueError: If the value is not a positive integer.
    """
    try:
        result = int(value)
    except ValueError:
        raise ValueError(f"Invalid {name} {value!r}, must be a positive integer") from None
    if result <= 0:
        raise ValueError(f"Invalid {name} {value!r}, must be a positive integer")
    return result


def init_taichi(arch: str, quiet: bool = False) -> None:
    """Initialize Taichi on the requested backend."""
    if arch == "cpu":
        ti.init(arch=ti.cpu)
        return

    # Use GPU if available, fall back to CPU
    try:
        ti.init(arch=ti.gpu)
        if not quiet:
            print("Using GPU backend")
    except Exception:
        if arch == "gpu":
            raise
        ti.init(arch=ti.cpu)
        if not quiet:
            print("Using CPU backend")


def main(argv: Sequence[str] | None = None) -> int:
    """Main entry point."""
    args = parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        width = parse_dimension("width", args.width)
        height = parse_dimension("height", args.height)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    try:
        scene = load_scene(args.input)
    except RaycastError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    init_taichi(args.arch, quiet=args.quiet)

    # Lazy imports: these modules declare Taichi fields, so Taichi must be
    # initialized first
    from raycast.core.render import render
    from raycast.preview.export import save_image

    start_time = time.time()
    try:
        raster = render(scene, width, height)
        save_image(raster, args.output, fmt=args.format)
    except (RaycastError, ValueError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if not args.quiet:
        print(f"Saved to: {args.output}")
        print(f"Total time: {time.time() - start_time:.2f}s")
    logger.debug("Rendered %d shapes at %dx%d", len(scene.shapes), width, height)

    if args.preview:
        from raycast.preview.display import show_preview

        show_preview(raster)

    return 0


if __name__ == "__main__":
    sys.exit(main())
