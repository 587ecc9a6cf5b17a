"""Run pipeline data types (pure data, no business logic)."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from . import constants


class EofPolicy(Enum):
    """What an input instruction does once input is exhausted."""

    ERROR = "error"
    ZERO = "zero"
    UNCHANGED = "unchanged"


class BoundsPolicy(Enum):
    """How tape accesses outside [0, memory_size) are treated."""

    ERROR = "error"
    WRAP = "wrap"
    GROW = "grow"


@dataclass(frozen=True)
class VMConfig:
    """Groups VM execution configuration."""

    memory_size: int = constants.DEFAULT_MEMORY_SIZE
    eof_policy: EofPolicy = EofPolicy.ERROR
    bounds_policy: BoundsPolicy = BoundsPolicy.ERROR
    max_steps: int | None = None
    report_stats: bool = False

    def __post_init__(self):
        if self.memory_size < 1:
            raise ValueError(f"memory_size must be positive, got {self.memory_size}")
        if self.max_steps is not None and self.max_steps < 0:
            raise ValueError(f"max_steps must be non-negative, got {self.max_steps}")


@dataclass
class ExecutionStats:
    """Returned execution metrics from execute_program."""

    steps: int = 0
    bytes_read: int = 0
    bytes_written: int = 0
    loops_resolved: int = 0
    final_memory_size: int = 0


@dataclass
class PipelineStats:
    """Timing and size statistics for each pipeline stage."""

    source_bytes: int = 0
    source_lines: int = 0

    # Stage timings (seconds)
    clean_time: float = 0.0
    execution_time: float = 0.0
    total_time: float = 0.0

    # Output sizes
    instruction_count: int = 0

    # Execution stats
    execution_steps: int = 0
    bytes_read: int = 0
    bytes_written: int = 0
    loops_resolved: int = 0

    def report(self) -> str:
        lines = [
            "═══ Pipeline Statistics ═══",
            f"  Source: {self.source_lines} lines, {self.source_bytes} bytes",
            "",
            f"  {'Stage':<20} {'Time':>10}  {'Output':>30}",
            f"  {'─' * 20} {'─' * 10}  {'─' * 30}",
        ]

        stages = [
            ("Clean", self.clean_time, f"{self.instruction_count} instructions"),
            (
                "Execute (VM)",
                self.execution_time,
                f"{self.execution_steps} steps, {self.loops_resolved} loops",
            ),
        ]
        for name, t, output in stages:
            time_str = f"{t * 1000:>8.1f}ms"
            lines.append(f"  {name:<20} {time_str:>10}  {output:>30}")

        lines.append(f"  {'─' * 20} {'─' * 10}  {'─' * 30}")
        lines.append(f"  {'Total':<20} {self.total_time * 1000:>8.1f}ms")
        lines.append("")
        lines.append(
            f"  I/O: {self.bytes_read} bytes read, {self.bytes_written} bytes written"
        )
        return "\n".join(lines)
