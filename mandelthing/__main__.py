"""
Command line entry point: python -m mandelthing
"""

import argparse
import logging
import sys
from dataclasses import replace

from .app import run
from .colormaps import get_colormap, list_colormap_names
from .config import DEFAULT_SETTINGS_PATH, RenderConfig, load_settings
from .errors import MandelThingError


def build_parser():
    parser = argparse.ArgumentParser(
        prog="mandelthing",
        description="Interactive Mandelbrot set viewer.",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument(
        "--settings",
        default=DEFAULT_SETTINGS_PATH,
        help="JSON settings file with maxdepth, width and height",
    )
    parser.add_argument(
        "--width",
        type=int,
        default=None,
        help="image width in pixels (overrides the settings file)",
    )
    parser.add_argument(
        "--height",
        type=int,
        default=None,
        help="image height in pixels (overrides the settings file)",
    )
    parser.add_argument(
        "--max-depth",
        type=int,
        dest="max_depth",
        default=None,
        help="maximum iteration depth (overrides the settings file)",
    )
    parser.add_argument(
        "--palette",
        choices=list_colormap_names(),
        default="Blue",
        help="color ramp used for escaped points",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="enable debug logging",
    )
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    settings = load_settings(args.settings)
    overrides = {
        name: value
        for name, value in (("width", args.width), ("height", args.height), ("max_depth", args.max_depth))
        if value is not None
    }
    config = replace(RenderConfig.from_settings(settings), **overrides)
    try:
        config.validate()
    except MandelThingError as e:
        logging.getLogger(__name__).error("Cannot start: %s", e)
        return 2

    run(config, get_colormap(args.palette))
    return 0


if __name__ == "__main__":
    sys.exit(main())
