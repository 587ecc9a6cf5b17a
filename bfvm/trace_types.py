"""Trace data types for step-by-step execution replay."""

from __future__ import annotations

from dataclasses import dataclass, field

from .run_types import ExecutionStats
from .vm_types import StepResult, VMState


@dataclass(frozen=True)
class TraceStep:
    """A single step in the execution trace.

    Captures the instruction executed, its effect, and a deep-copied
    snapshot of the VMState after the instruction pointer advanced.
    """

    step_index: int
    instruction_index: int
    instruction: str
    result: StepResult
    vm_state: VMState


@dataclass(frozen=True)
class ExecutionTrace:
    """Complete trace of an execution run.

    Contains the initial VMState (before any instruction) and a list of
    TraceStep snapshots for each instruction that was actually executed.
    """

    steps: list[TraceStep] = field(default_factory=list)
    stats: ExecutionStats = field(default_factory=ExecutionStats)
    initial_state: VMState | None = None

    @property
    def output(self) -> bytes:
        return bytes(
            s.result.output_byte
            for s in self.steps
            if s.result.output_byte is not None
        )
