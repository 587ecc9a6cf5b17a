"""Command-line entry point."""

from __future__ import annotations

import argparse
import logging
import sys

from .errors import InterpreterError
from .parser import read_source
from .run import run
from .run_types import BoundsPolicy, EofPolicy, VMConfig
from . import constants

logger = logging.getLogger(__name__)


def _positive_int(raw: str) -> int:
    value = int(raw)
    if value < 1:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got {raw}")
    return value


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bfvm", description="Interpret an 8-instruction tape program"
    )
    parser.add_argument("file", help="Program source file")
    parser.add_argument(
        "--memory-size",
        "-m",
        type=_positive_int,
        default=constants.DEFAULT_MEMORY_SIZE,
        help=f"Tape size in cells (default: {constants.DEFAULT_MEMORY_SIZE})",
    )
    parser.add_argument(
        "--on-eof",
        default=EofPolicy.ERROR.value,
        choices=[p.value for p in EofPolicy],
        help="Input instruction behaviour at end of input (default: error)",
    )
    parser.add_argument(
        "--out-of-bounds",
        default=BoundsPolicy.ERROR.value,
        choices=[p.value for p in BoundsPolicy],
        help="Tape access outside its bounds (default: error)",
    )
    parser.add_argument(
        "--max-steps",
        "-n",
        type=_positive_int,
        default=None,
        help="Abort after this many instructions (default: unlimited)",
    )
    parser.add_argument(
        "--stats",
        action="store_true",
        help="Print pipeline statistics to stderr after the run",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable debug logging to stderr",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(name)s: %(message)s",
        stream=sys.stderr,
    )

    config = VMConfig(
        memory_size=args.memory_size,
        eof_policy=EofPolicy(args.on_eof),
        bounds_policy=BoundsPolicy(args.out_of_bounds),
        max_steps=args.max_steps,
        report_stats=args.stats,
    )

    try:
        source = read_source(args.file)
    except OSError as e:
        print(f"error: cannot read {args.file}: {e.strerror}", file=sys.stderr)
        return 1

    try:
        run(source, config)
    except InterpreterError as e:
        logger.debug("Execution aborted", exc_info=True)
        print(f"error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
