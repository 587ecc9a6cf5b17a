"""Execution engine — per-instruction transitions and dispatch."""

from __future__ import annotations

from typing import Callable

from .errors import InputExhausted, MemoryAccessError
from .io_backend import IOBackend
from .ir import Opcode, Program
from .run_types import BoundsPolicy, EofPolicy, VMConfig
from .vm_types import StepResult, VMState
from . import constants


def _cell_index(vm: VMState, config: VMConfig) -> int:
    """Map the data pointer to a tape index according to the bounds policy."""
    dp = vm.data_pointer
    size = len(vm.memory)
    if 0 <= dp < size:
        return dp
    if config.bounds_policy == BoundsPolicy.WRAP:
        return dp % size
    if config.bounds_policy == BoundsPolicy.GROW and dp >= size:
        vm.memory.extend(bytes(dp + 1 - size))
        return dp
    raise MemoryAccessError(dp, size, vm.instruction_pointer)


def _inc_pointer(vm, program, config, io) -> StepResult:
    vm.data_pointer += 1
    return StepResult(Opcode.INC_POINTER)


def _dec_pointer(vm, program, config, io) -> StepResult:
    vm.data_pointer -= 1
    return StepResult(Opcode.DEC_POINTER)


def _inc_memory(vm, program, config, io) -> StepResult:
    i = _cell_index(vm, config)
    vm.memory[i] = (vm.memory[i] + 1) % constants.CELL_MODULUS
    return StepResult(Opcode.INC_MEMORY)


def _dec_memory(vm, program, config, io) -> StepResult:
    i = _cell_index(vm, config)
    vm.memory[i] = (vm.memory[i] - 1) % constants.CELL_MODULUS
    return StepResult(Opcode.DEC_MEMORY)


def _output(vm, program, config, io) -> StepResult:
    value = vm.memory[_cell_index(vm, config)]
    io.write_byte(value)
    return StepResult(Opcode.OUTPUT, output_byte=value)


def _input(vm, program, config, io) -> StepResult:
    i = _cell_index(vm, config)
    value = io.read_byte()
    if value is None:
        if config.eof_policy == EofPolicy.ERROR:
            raise InputExhausted(vm.instruction_pointer)
        if config.eof_policy == EofPolicy.ZERO:
            vm.memory[i] = 0
        return StepResult(Opcode.INPUT)
    vm.memory[i] = value
    return StepResult(Opcode.INPUT, input_byte=value)


def _jump_if_zero(vm, program, config, io) -> StepResult:
    # Resolve (or hit the cache) before testing, so an unmatched opener fails
    # on its first visit whatever the cell holds.
    close_index = vm.cache.closing_for(program.text, vm.instruction_pointer)
    if vm.memory[_cell_index(vm, config)] == 0:
        vm.instruction_pointer = close_index
        return StepResult(Opcode.JUMP_IF_ZERO, jump_target=close_index)
    return StepResult(Opcode.JUMP_IF_ZERO)


def _jump_if_not_zero(vm, program, config, io) -> StepResult:
    if vm.memory[_cell_index(vm, config)] != 0:
        open_index = vm.cache.opening_for(vm.instruction_pointer)
        vm.instruction_pointer = open_index
        return StepResult(Opcode.JUMP_IF_NOT_ZERO, jump_target=open_index)
    return StepResult(Opcode.JUMP_IF_NOT_ZERO)


Handler = Callable[[VMState, Program, VMConfig, IOBackend], StepResult]

DISPATCH_TABLE: dict[Opcode, Handler] = {
    Opcode.INC_POINTER: _inc_pointer,
    Opcode.DEC_POINTER: _dec_pointer,
    Opcode.INC_MEMORY: _inc_memory,
    Opcode.DEC_MEMORY: _dec_memory,
    Opcode.OUTPUT: _output,
    Opcode.INPUT: _input,
    Opcode.JUMP_IF_ZERO: _jump_if_zero,
    Opcode.JUMP_IF_NOT_ZERO: _jump_if_not_zero,
}


def step(vm: VMState, program: Program, config: VMConfig, io: IOBackend) -> StepResult:
    """Execute the instruction at the current ip, then advance ip by one.

    A taken jump assigns ip to the matching bracket first, so the advance
    lands on the instruction just past it.
    """
    opcode = program.opcode_at(vm.instruction_pointer)
    result = DISPATCH_TABLE[opcode](vm, program, config, io)
    vm.instruction_pointer += 1
    return result
