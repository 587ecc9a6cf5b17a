"""Instruction set and the immutable instruction stream."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict

from .errors import InvalidInstruction
from . import constants


class Opcode(str, Enum):
    # Pointer movement
    INC_POINTER = constants.INC_POINTER
    DEC_POINTER = constants.DEC_POINTER
    # Memory mutation
    INC_MEMORY = constants.INC_MEMORY
    DEC_MEMORY = constants.DEC_MEMORY
    # I/O
    OUTPUT = constants.OUTPUT
    INPUT = constants.INPUT
    # Control flow
    JUMP_IF_ZERO = constants.JUMP_IF_ZERO
    JUMP_IF_NOT_ZERO = constants.JUMP_IF_NOT_ZERO


_SYMBOL_TO_OPCODE: dict[str, Opcode] = {op.value: op for op in Opcode}


class Program(BaseModel):
    """Ordered, 0-indexed instruction stream. Read-only once built."""

    model_config = ConfigDict(frozen=True)

    text: str

    def __len__(self) -> int:
        return len(self.text)

    def __getitem__(self, index: int) -> str:
        return self.text[index]

    def __str__(self) -> str:
        return self.text

    def opcode_at(self, index: int) -> Opcode:
        """Decode the symbol at *index*, failing on anything outside the alphabet."""
        char = self.text[index]
        opcode = _SYMBOL_TO_OPCODE.get(char)
        if opcode is None:
            raise InvalidInstruction(char, index)
        return opcode
