"""Source cleaning and program loading."""

from __future__ import annotations

import logging
from pathlib import Path

from .ir import Program
from . import constants

logger = logging.getLogger(__name__)


def clean_source(source: str) -> str:
    """Drop every character that is not one of the eight instructions."""
    return "".join(c for c in source if c in constants.INSTRUCTION_ALPHABET)


def parse_program(source: str, clean: bool = True) -> Program:
    """Build a Program from raw source text.

    With ``clean=False`` the text is taken verbatim, so foreign symbols reach
    the engine and fail there with InvalidInstruction.
    """
    return Program(text=clean_source(source) if clean else source)


def read_source(path: str | Path) -> str:
    """Read a program file and concatenate its lines without separators."""
    with open(path, encoding="latin-1") as f:
        return "".join(line.rstrip("\r\n") for line in f)


def load_program(path: str | Path) -> Program:
    """Read a program file, join its lines and filter to the alphabet."""
    program = parse_program(read_source(path))
    logger.info("Loaded %d instructions from %s", len(program), path)
    return program
