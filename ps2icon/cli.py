"""Command-line front end: extract geometry and texture from a PS2 icon file.

Examples:
    ps2icon -f foo.icn
        Extracts foo.icn to default.obj, default.mtl and default.tga.

    ps2icon -f foo.icn -o out.obj -ot out.tga
        Extracts foo.icn to out.obj, out.mtl and out.tga.
"""

import argparse
import logging
import sys

from . import __version__
from .convert_options import (
    DEFAULT_OBJ_OUTPUT, DEFAULT_TEXTURE_OUTPUT, ConvertOptions,
)
from .errors import IconError
from .pipeline import configure_logging, convert

_log = logging.getLogger("ps2icon")


def build_parser():
    parser = argparse.ArgumentParser(
        prog="ps2icon",
        description="Extract geometry and texture from a PS2 icon file.",
        epilog="Examples:" + __doc__.split("Examples:", 1)[1],
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("-f", "--input-file", required=True,
                        help="PS2 icon file used as input")
    parser.add_argument("-o", "--output-file", default=DEFAULT_OBJ_OUTPUT,
                        help="name of the OBJ destination file (default: %(default)s)")
    parser.add_argument("-ot", "--output-texture", default=DEFAULT_TEXTURE_OUTPUT,
                        help="texture output file; the extension picks the image "
                             "format (default: %(default)s)")
    parser.add_argument("-m", "--output-material", default=None,
                        help="MTL destination file (default: OBJ name with .mtl)")
    parser.add_argument("--no-material", action="store_true",
                        help="do not write an MTL material library")
    parser.add_argument("-s", "--scale", type=float, default=1.0,
                        help="uniform scale applied to vertex positions")
    parser.add_argument("--frame", type=int, default=0,
                        help="animation frame to export (0 = base pose)")
    parser.add_argument("--flip-v", action="store_true",
                        help="write texture coordinates as v = 1 - v")
    parser.add_argument("-v", "--verbose", action="count", default=0,
                        help="activate verbose output (twice for debug output)")
    parser.add_argument("--version", action="version",
                        version=f"%(prog)s {__version__}")
    return parser


def options_from_args(args):
    return ConvertOptions(
        input_file=args.input_file,
        obj_output_file=args.output_file,
        texture_output_file=args.output_texture,
        mtl_output_file=args.output_material,
        write_material=not args.no_material,
        scale=args.scale,
        frame=args.frame,
        flip_v=args.flip_v,
        verbose=args.verbose,
    )


def main(argv=None):
    """Run the converter; returns the process exit status."""
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose)

    options = options_from_args(args)
    try:
        result = convert(options)
    except OSError as e:
        _log.error("File error: %s", e)
        return 1
    except IconError as e:
        _log.error("Could not convert %r: %s", options.input_file, e)
        return 1

    for path in result.written:
        _log.info("Wrote %s", path)
    _log.info("Success")
    return 0


if __name__ == "__main__":
    sys.exit(main())
