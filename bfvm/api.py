"""Composable API functions for the interpreter pipelines.

Each function corresponds to a CLI workflow but is callable programmatically
without argparse.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from .io_backend import BufferedBackend
from .ir import Program
from .parser import clean_source, load_program, parse_program  # noqa: F401
from .program_stats import count_opcodes, max_loop_depth
from .run import execute_program, execute_program_traced
from .run_types import ExecutionStats, VMConfig
from .trace_types import ExecutionTrace
from .vm_types import VMState
from . import constants

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExecutionOutcome:
    """Final state, collected output and metrics of an in-memory run."""

    vm_state: VMState
    output: bytes
    stats: ExecutionStats


def dump_program(source: str, width: int = constants.DUMP_LINE_WIDTH) -> str:
    """Clean *source* and return it as indexed fixed-width lines.

    Args:
        source: Raw program text.
        width: Instructions per line.

    Returns:
        A multi-line string; each line starts with the index of its first
        instruction.
    """
    text = clean_source(source)
    return "\n".join(
        f"{start:>6}  {text[start : start + width]}"
        for start in range(0, len(text), width)
    )


def program_stats(source: str) -> dict[str, int]:
    """Clean *source* and return opcode frequency counts.

    Returns:
        A dict mapping opcode names to their occurrence counts.
    """
    return count_opcodes(parse_program(source))


def loop_depth(source: str) -> int:
    """Deepest loop nesting in *source*."""
    return max_loop_depth(parse_program(source))


def execute_source(
    source: str | Program,
    input_data: bytes | str = b"",
    config: VMConfig = VMConfig(),
) -> ExecutionOutcome:
    """Run a program against in-memory input and capture its output.

    Args:
        source: Raw program text or an already built Program.
        input_data: Bytes consumed by input instructions, in order.
        config: Execution configuration.

    Returns:
        An ExecutionOutcome with final state, output bytes and stats.
    """
    program = source if isinstance(source, Program) else parse_program(source)
    io = BufferedBackend(input_data)
    vm, stats = execute_program(program, config, io)
    return ExecutionOutcome(vm_state=vm, output=bytes(io.output), stats=stats)


def execute_traced(
    source: str | Program,
    input_data: bytes | str = b"",
    config: VMConfig = VMConfig(),
) -> ExecutionTrace:
    """Run a program in memory with full trace recording.

    Returns:
        An ExecutionTrace with initial_state, steps, and stats.
    """
    program = source if isinstance(source, Program) else parse_program(source)
    logger.info("execute_traced: %d instructions", len(program))
    _vm, trace = execute_program_traced(program, config, BufferedBackend(input_data))
    return trace
