"""Instruction symbols and interpreter defaults."""

from __future__ import annotations

INC_POINTER = ">"
DEC_POINTER = "<"
INC_MEMORY = "+"
DEC_MEMORY = "-"
OUTPUT = "."
INPUT = ","
JUMP_IF_ZERO = "["
JUMP_IF_NOT_ZERO = "]"

INSTRUCTION_ALPHABET: frozenset[str] = frozenset(
    {
        INC_POINTER,
        DEC_POINTER,
        INC_MEMORY,
        DEC_MEMORY,
        OUTPUT,
        INPUT,
        JUMP_IF_ZERO,
        JUMP_IF_NOT_ZERO,
    }
)

DEFAULT_MEMORY_SIZE = 100  # cells
CELL_MODULUS = 256

BACKEND_STDIO = "stdio"
BACKEND_BUFFERED = "buffered"

DUMP_LINE_WIDTH = 60
