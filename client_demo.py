#!/usr/bin/env python3
#
# PROJECT: raster-cli-renderer
# MODULE: client_demo.py
# STATUS: Level 2 - Implementation
# LOG_REF: 2026-10-19
#

import curses
import argparse
import logging
import sys
import os

# Ensure local package is importable
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from raster_cli_renderer.app import main
from raster_cli_renderer.color import parse_hex_color


def parse_args(argv=None):
    epilog = """\
examples:
  %(prog)s                                   Spinning demo pyramid
  %(prog)s --demo cube                       Vertex-colored cube
  %(prog)s model.txt                         Load a v/f mesh file (0-based faces)
  %(prog)s model.obj --index-base 1          OBJ-style 1-based faces
  %(prog)s model.txt --color #FF8800 --flat  Uncolored mesh, flat orange
  %(prog)s --log-file raster.log --verbose   Debug log written to a file

keys: arrows/wasd spin, +/- dolly, z depth test, i interpolation, r repaint, q quit
"""
    parser = argparse.ArgumentParser(
        description="Terminal triangle rasterizer",
        epilog=epilog,
        formatter_class=argparse.RawDescriptionHelpFormatter
    )
    parser.add_argument("model", nargs='?', help="Path to a v/f mesh file")
    parser.add_argument("--index-base", type=int, default=0,
                        help="Index of the first vertex in face records (default: 0)")
    parser.add_argument("--demo", choices=("pyramid", "cube"), default="pyramid",
                        help="Built-in mesh when no model is given (default: pyramid)")
    parser.add_argument("--rows", type=int, default=None,
                        help="Grid rows (default: terminal height minus the HUD)")
    parser.add_argument("--cols", type=int, default=None,
                        help="Grid columns (default: terminal width)")
    parser.add_argument("--fov", type=float, default=90.0,
                        help="Horizontal field of view in degrees (default: 90)")
    parser.add_argument("--fps", type=float, default=30.0,
                        help="Target frames per second (default: 30)")
    parser.add_argument("--distance", type=float, default=2.0,
                        help="Initial camera distance from the origin (default: 2.0)")
    parser.add_argument("--color", default="#FFFFFF",
                        help="Vertex color for uncolored meshes, #RRGGBB (default: #FFFFFF)")
    parser.add_argument("--no-color", action="store_true",
                        help="Disable color output")
    parser.add_argument("--no-zbuffer", action="store_true",
                        help="Draw faces in order without depth testing")
    parser.add_argument("--flat", action="store_true",
                        help="Flat per-face color instead of interpolated vertex color")
    parser.add_argument("--linear-levels", action="store_true",
                        help="Evenly spaced palette levels instead of sqrt-spaced")
    parser.add_argument("--no-border", action="store_true",
                        help="Do not draw a border around the grid")
    parser.add_argument("--log-file", default=None,
                        help="Write log output to this file (curses owns the terminal)")
    parser.add_argument("--verbose", action="store_true",
                        help="Log at DEBUG level")
    args = parser.parse_args(argv)

    if not 0.0 < args.fov < 180.0:
        parser.error("--fov must be between 0 and 180 degrees")
    if parse_hex_color(args.color) is None:
        parser.error(f"invalid --color {args.color!r}")
    return args


def setup_logging(args):
    if not args.log_file:
        logging.getLogger().addHandler(logging.NullHandler())
        return
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s",
        handlers=[logging.FileHandler(args.log_file)],
    )


if __name__ == "__main__":
    args = parse_args()
    setup_logging(args)
    try:
        curses.wrapper(lambda s: main(s, args))
    except KeyboardInterrupt:
        pass
    except Exception as e:
        logging.getLogger("client_demo").exception("viewer crashed")
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
