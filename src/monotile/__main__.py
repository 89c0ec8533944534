#!/usr/bin/env python3
"""
Command-line front end: write the "hat" monotile as STL.

Usage:
    python -m monotile [-r] [-o FILE.stl] [--binary] [--dxf FILE.dxf]
                       [--config FILE.yaml] [--unit MM] [--inset FRAC] [-v]

Examples:
    # ASCII STL on stdout
    python -m monotile > hat.stl

    # reflected tile, binary STL plus a DXF of the outlines
    python -m monotile -r --binary -o hat-r.stl --dxf hat-r.dxf
"""

import argparse
import logging
import sys

from monotile.config import DEFAULT, load_config
from monotile.dxf import write_dxf
from monotile.errors import InvariantViolation
from monotile.io.stl import write_stl
from monotile.tile import monotile, monotile_outlines

logger = logging.getLogger("monotile")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="monotile",
        description="Produce an STL description of the einstein hat monotile.",
    )
    parser.add_argument("-r", "--reflect", action="store_true",
                        help="produce the reflected (reversed) tile")
    parser.add_argument("-o", "--output", default=None,
                        help="STL output file (default: stdout)")
    parser.add_argument("--binary", action="store_true",
                        help="write binary STL (requires --output)")
    parser.add_argument("--dxf", default=None,
                        help="also write the kite outlines to this DXF file")
    parser.add_argument("--config", default=None,
                        help="YAML file with unit, inset and height")
    parser.add_argument("--unit", type=float, default=None,
                        help="size of one kite unit in mm")
    parser.add_argument("--inset", type=float, default=None,
                        help="groove inset as a fraction of a unit")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="enable debug logging")
    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="monotile: %(message)s",
    )

    if args.binary and args.output is None:
        parser.error("--binary requires --output")

    try:
        config = load_config(args.config) if args.config else DEFAULT
        config = config.with_overrides(unit=args.unit, inset=args.inset)
    except (OSError, ValueError) as e:
        parser.error(str(e))

    logger.debug("config: %s", config)

    try:
        # build everything before touching the output
        solids = list(monotile(args.reflect, config))
        outlines = list(monotile_outlines(args.reflect, config)) if args.dxf else []
    except InvariantViolation as e:
        print(f"monotile: {e}", file=sys.stderr)
        return 1

    target = args.output if args.output is not None else sys.stdout
    count = write_stl(solids, target, binary=args.binary)
    logger.info("wrote %d solids, %d facets", len(solids), count)

    if args.dxf:
        write_dxf(outlines, args.dxf)
        logger.info("wrote %d outlines to %s", len(outlines), args.dxf)

    return 0


if __name__ == "__main__":
    sys.exit(main())
