"""Execution context types (pure data, no business logic)."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .brackets import BracketCache
from .ir import Opcode
from . import constants


@dataclass
class VMState:
    """Everything one run mutates: the two pointers, the tape and the bracket cache.

    Created per execution and owned by the caller; nothing is shared between runs.
    """

    memory: bytearray = field(
        default_factory=lambda: bytearray(constants.DEFAULT_MEMORY_SIZE)
    )
    instruction_pointer: int = 0
    data_pointer: int = 0
    cache: BracketCache = field(default_factory=BracketCache)

    @classmethod
    def initial(cls, memory_size: int = constants.DEFAULT_MEMORY_SIZE) -> VMState:
        return cls(memory=bytearray(memory_size))

    def to_dict(self) -> dict:
        return {
            "instruction_pointer": self.instruction_pointer,
            "data_pointer": self.data_pointer,
            "memory": list(self.memory),
            "bracket_pairs": self.cache.to_dict(),
        }


@dataclass(frozen=True)
class StepResult:
    """Effect of executing a single instruction."""

    opcode: Opcode
    jump_target: int | None = None  # ip assigned by a taken jump
    output_byte: int | None = None
    input_byte: int | None = None

    def to_dict(self) -> dict:
        d: dict[str, Any] = {"opcode": self.opcode.value}
        if self.jump_target is not None:
            d["jump_target"] = self.jump_target
        if self.output_byte is not None:
            d["output_byte"] = self.output_byte
        if self.input_byte is not None:
            d["input_byte"] = self.input_byte
        return d
