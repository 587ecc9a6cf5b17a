"""Orchestrator — run() entry point and the fetch-decode-execute loop."""

from __future__ import annotations

import copy
import logging
import sys
import time

from .errors import StepLimitExceeded
from .io_backend import IOBackend, StdioBackend
from .ir import Program
from .parser import parse_program
from .run_types import ExecutionStats, PipelineStats, VMConfig
from .trace_types import ExecutionTrace, TraceStep
from .vm import step
from .vm_types import StepResult, VMState

logger = logging.getLogger(__name__)


def _check_step_limit(config: VMConfig, steps: int) -> None:
    if config.max_steps is not None and steps >= config.max_steps:
        raise StepLimitExceeded(config.max_steps)


def _record(stats: ExecutionStats, result: StepResult) -> None:
    stats.steps += 1
    if result.input_byte is not None:
        stats.bytes_read += 1
    if result.output_byte is not None:
        stats.bytes_written += 1


def _finish(stats: ExecutionStats, vm: VMState) -> ExecutionStats:
    stats.loops_resolved = len(vm.cache)
    stats.final_memory_size = len(vm.memory)
    logger.info(
        "Halted after %d steps (%d loops resolved, %d bytes out)",
        stats.steps,
        stats.loops_resolved,
        stats.bytes_written,
    )
    return stats


def execute_program(
    program: Program,
    config: VMConfig = VMConfig(),
    io: IOBackend | None = None,
) -> tuple[VMState, ExecutionStats]:
    """Execute *program* until the instruction pointer runs off its end.

    Args:
        program: Cleaned instruction stream.
        config: Execution configuration (tape size, policies, step limit).
        io: Byte I/O backend; defaults to the process's stdin/stdout.

    Returns:
        Tuple of (final VMState, ExecutionStats).

    Raises:
        InterpreterError: any fatal condition; nothing is recovered.
    """
    io = io if io is not None else StdioBackend()
    vm = VMState.initial(config.memory_size)
    stats = ExecutionStats()

    while vm.instruction_pointer < len(program):
        _check_step_limit(config, stats.steps)
        result = step(vm, program, config, io)
        _record(stats, result)

    return (vm, _finish(stats, vm))


def execute_program_traced(
    program: Program,
    config: VMConfig = VMConfig(),
    io: IOBackend | None = None,
) -> tuple[VMState, ExecutionTrace]:
    """Execute *program* and record a trace of every step.

    Identical to execute_program() but deep-copies the VMState after each
    instruction so callers can replay the execution step by step.

    Returns:
        Tuple of (final VMState, ExecutionTrace with per-step snapshots).
    """
    io = io if io is not None else StdioBackend()
    vm = VMState.initial(config.memory_size)
    initial_state = copy.deepcopy(vm)
    stats = ExecutionStats()
    trace_steps: list[TraceStep] = []

    while vm.instruction_pointer < len(program):
        _check_step_limit(config, stats.steps)
        ip = vm.instruction_pointer
        result = step(vm, program, config, io)
        _record(stats, result)

        # Snapshot the VM state after the step
        trace_steps.append(
            TraceStep(
                step_index=len(trace_steps),
                instruction_index=ip,
                instruction=program[ip],
                result=result,
                vm_state=copy.deepcopy(vm),
            )
        )

    trace = ExecutionTrace(
        steps=trace_steps,
        stats=_finish(stats, vm),
        initial_state=initial_state,
    )
    return (vm, trace)


def run(
    source: str,
    config: VMConfig = VMConfig(),
    io: IOBackend | None = None,
) -> VMState:
    """End-to-end: clean → build program → execute.

    Args:
        source: Raw program text; non-instruction characters are dropped.
        config: Execution configuration. With ``report_stats`` the pipeline
            statistics report is written to stderr.
        io: Byte I/O backend; defaults to stdin/stdout.
    """
    pipeline_start = time.perf_counter()
    stats = PipelineStats(
        source_bytes=len(source.encode("utf-8")),
        source_lines=source.count("\n")
        + (1 if source and not source.endswith("\n") else 0),
    )

    t0 = time.perf_counter()
    program = parse_program(source)
    stats.clean_time = time.perf_counter() - t0
    stats.instruction_count = len(program)

    exec_start = time.perf_counter()
    vm, exec_stats = execute_program(program, config, io)
    stats.execution_time = time.perf_counter() - exec_start

    stats.execution_steps = exec_stats.steps
    stats.bytes_read = exec_stats.bytes_read
    stats.bytes_written = exec_stats.bytes_written
    stats.loops_resolved = exec_stats.loops_resolved
    stats.total_time = time.perf_counter() - pipeline_start

    if config.report_stats:
        print(stats.report(), file=sys.stderr)

    return vm
