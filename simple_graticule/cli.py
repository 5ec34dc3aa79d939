"""
Command-line interface for SimpleGraticule package.

Provides argparse-based CLI with subcommands for previewing a graticule and
inspecting the interval chosen at a given zoom.

Usage:
    simple-graticule render --bounds -180 180 -90 90 --output world.png
    simple-graticule render --bounds 0 1024 -768 0 --config graticule.yaml --output map.png
    simple-graticule interval --zoom 3
    simple-graticule interval --zoom 10 --span 0.3
"""

import argparse
import math
import sys
from typing import Optional

from .api import render_graticule
from .config import GraticuleConfig
from .exceptions import GraticuleError, InvalidParameterError
from .geometry import Bounds
from .host import simple_scale
from .interval import round_half_up, select_interval
from .logging_config import MODULE_LOGGERS, setup_logging
from .constants import INTERVAL_PRECISION, MAX_DETAIL_ZOOM, REFERENCE_SPAN_PX


def setup_logging_from_args(args: argparse.Namespace) -> None:
    """
    Configure logging based on command-line arguments.

    Args:
        args: Parsed command-line arguments with verbose, quiet, log_file
    """
    if getattr(args, 'quiet', False):
        verbosity = -1  # WARNING
    elif getattr(args, 'verbose', False):
        verbosity = 1  # DEBUG
    else:
        verbosity = 0  # INFO

    setup_logging(
        verbosity=verbosity,
        log_file=getattr(args, 'log_file', None),
        trace=getattr(args, 'trace', None),
    )


def load_config(config_path: Optional[str]) -> GraticuleConfig:
    """
    Load configuration from file, or defaults when no path is given.

    Raises:
        GraticuleError: If the file content is invalid
        FileNotFoundError: If the file does not exist
    """
    if config_path is None:
        return GraticuleConfig()
    return GraticuleConfig.load_from_file(config_path)


def cmd_render(args: argparse.Namespace) -> int:
    """Handle 'render' subcommand."""
    west, east, south, north = args.bounds
    try:
        config = load_config(args.config)
        if args.no_origin_label:
            config.show_origin_label = False
        if args.align_latitude:
            config.align_latitude = True
        config.validate()

        output_path = render_graticule(
            Bounds(south=south, west=west, north=north, east=east),
            args.output,
            width_px=args.width,
            height_px=args.height,
            dpi=args.dpi,
            config=config,
            background_color=args.background_color,
            zoom_snap=args.zoom_snap,
        )
    except (GraticuleError, FileNotFoundError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(f"Success! Graticule saved to: {output_path}")
    return 0


def cmd_interval(args: argparse.Namespace) -> int:
    """Handle 'interval' subcommand."""
    span = args.span
    try:
        if span is None and math.isfinite(args.zoom) and args.zoom != 0 and args.zoom < MAX_DETAIL_ZOOM:
            # Planar CRS: 2**zoom pixels per map unit.
            scale = simple_scale(args.zoom)
            if scale == 0:
                raise InvalidParameterError(f"Zoom {args.zoom} is too far out to measure a span")
            span = round_half_up((2 * args.pixels) / scale, INTERVAL_PRECISION)
        interval = select_interval(args.zoom, span)
    except GraticuleError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(interval)
    return 0


def main(argv: Optional[list] = None) -> int:
    """Main entry point for CLI."""
    parser = argparse.ArgumentParser(
        prog="simple-graticule",
        description="Preview coordinate grids for planar maps",
        formatter_class=argparse.RawDescriptionHelpFormatter
    )

    def _add_common_args(p: argparse.ArgumentParser) -> None:
        p.add_argument(
            "-v", "--verbose",
            action="store_true",
            help="Enable DEBUG logging"
        )
        p.add_argument(
            "-q", "--quiet",
            action="store_true",
            help="Suppress INFO logging (WARNING+ only)"
        )
        p.add_argument(
            "--log-file",
            type=str,
            help="Write logs to file"
        )
        p.add_argument(
            "--trace",
            action="append",
            choices=sorted(MODULE_LOGGERS),
            help="Log one stage at DEBUG (repeatable)"
        )

    _add_common_args(parser)
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # ========================================================================
    # render subcommand
    # ========================================================================
    parser_render = subparsers.add_parser(
        "render",
        help="Render the graticule for a viewport to an image"
    )
    _add_common_args(parser_render)
    parser_render.add_argument(
        "--bounds",
        type=float,
        nargs=4,
        required=True,
        metavar=("WEST", "EAST", "SOUTH", "NORTH"),
        help="Viewport extent in map units"
    )
    parser_render.add_argument(
        "--output", "-o",
        type=str,
        required=True,
        help="Output image path (format from suffix, e.g. .png, .svg)"
    )
    parser_render.add_argument(
        "--width",
        type=int,
        default=800,
        help="Image width in pixels (default: 800)"
    )
    parser_render.add_argument(
        "--height",
        type=int,
        default=600,
        help="Image height in pixels (default: 600)"
    )
    parser_render.add_argument(
        "--dpi",
        type=int,
        default=100,
        help="Output resolution (default: 100)"
    )
    parser_render.add_argument(
        "--config",
        type=str,
        help="Path to graticule configuration file (YAML or JSON)"
    )
    parser_render.add_argument(
        "--no-origin-label",
        action="store_true",
        help="Do not draw the [0,0] origin label"
    )
    parser_render.add_argument(
        "--align-latitude",
        action="store_true",
        help="Snap latitude lines to multiples of the interval"
    )
    parser_render.add_argument(
        "--zoom-snap",
        type=float,
        default=1.0,
        help="Round the derived zoom to a multiple of this step, 0 disables (default: 1)"
    )
    parser_render.add_argument(
        "--background-color",
        type=str,
        default="white",
        help="Image background color (Matplotlib color spec)"
    )
    parser_render.set_defaults(func=cmd_render)

    # ========================================================================
    # interval subcommand
    # ========================================================================
    parser_interval = subparsers.add_parser(
        "interval",
        help="Print the grid interval chosen at a zoom level"
    )
    _add_common_args(parser_interval)
    parser_interval.add_argument(
        "--zoom",
        type=float,
        required=True,
        help="Zoom level (2**zoom pixels per map unit)"
    )
    parser_interval.add_argument(
        "--span",
        type=float,
        default=None,
        help="Map-unit width of the reference span (default: derived from zoom)"
    )
    parser_interval.add_argument(
        "--pixels",
        type=int,
        default=REFERENCE_SPAN_PX,
        help=f"Reference offset in pixels either side of centre (default: {REFERENCE_SPAN_PX})"
    )
    parser_interval.set_defaults(func=cmd_interval)

    args = parser.parse_args(argv)

    if not hasattr(args, 'func'):
        parser.print_help()
        return 1

    setup_logging_from_args(args)

    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
