"""Tests for execute_program — whole-program behaviour of the engine."""

import pytest

from bfvm.errors import (
    InputExhausted,
    MemoryAccessError,
    StepLimitExceeded,
    UnmatchedBracket,
    UnpairedClosingBracket,
)
from bfvm.io_backend import BufferedBackend
from bfvm.parser import parse_program
from bfvm.run import execute_program
from bfvm.run_types import BoundsPolicy, EofPolicy, VMConfig

HELLO_WORLD = (
    "++++++++[>++++[>++>+++>+++>+<<<<-]>+>+>->>+[<]<-]"
    ">>.>---.+++++++..+++.>>.<-.<.+++.------.--------.>>+.>++."
)


def _run(source, input_data=b"", config=VMConfig()):
    io = BufferedBackend(input_data)
    vm, stats = execute_program(parse_program(source), config, io)
    return vm, stats, bytes(io.output)


class TestInitialState:
    def test_empty_program_halts_immediately(self):
        vm, stats, out = _run("")
        assert stats.steps == 0
        assert out == b""
        assert vm.instruction_pointer == 0

    def test_default_tape_is_100_zero_cells(self):
        vm, _, _ = _run("")
        assert len(vm.memory) == 100
        assert not any(vm.memory)

    def test_configured_tape_size(self):
        vm, _, _ = _run("", config=VMConfig(memory_size=16))
        assert len(vm.memory) == 16


class TestArithmeticPrograms:
    def test_eight_increments_then_output(self):
        _, _, out = _run("+" * 8 + ".")
        assert out == bytes([8])

    def test_256_increments_wrap_to_zero(self):
        _, _, out = _run("+" * 256 + ".")
        assert out == bytes([0])

    def test_clear_loop_leaves_cell_zero(self):
        vm, stats, _ = _run("+++[-]")
        assert vm.memory[0] == 0
        assert vm.instruction_pointer == 6
        # 3 increments, then [ once, and - ] three times
        assert stats.steps == 3 + 1 + 3 * 2

    def test_skipped_loop_body_never_runs(self):
        vm, _, out = _run("[+.]>+")
        assert out == b""
        assert vm.memory[0] == 0
        assert vm.memory[1] == 1

    def test_move_value_between_cells(self):
        vm, _, _ = _run("+++++[>++<-]")
        assert vm.memory[0] == 0
        assert vm.memory[1] == 10

    def test_hello_world(self):
        _, _, out = _run(HELLO_WORLD)
        assert out == b"Hello World!\n"

    def test_comments_are_ignored(self):
        _, _, out = _run("add three: +++ and print it .")
        assert out == bytes([3])


class TestInput:
    def test_input_round_trip(self):
        _, _, out = _run(",.", input_data=b"\x9c")
        assert out == b"\x9c"

    def test_inputs_consumed_in_order(self):
        _, stats, out = _run(",>,<.>.", input_data=b"ab")
        assert out == b"ab"
        assert stats.bytes_read == 2
        assert stats.bytes_written == 2

    def test_eof_is_fatal_by_default(self):
        with pytest.raises(InputExhausted):
            _run(",")

    def test_cat_with_zero_eof(self):
        config = VMConfig(eof_policy=EofPolicy.ZERO)
        _, _, out = _run(",[.,]", input_data=b"echo", config=config)
        assert out == b"echo"


class TestBracketErrors:
    def test_unmatched_opener_fails_before_output(self):
        io = BufferedBackend()
        with pytest.raises(UnmatchedBracket) as exc_info:
            execute_program(parse_program("[.+"), VMConfig(), io)
        assert exc_info.value.index == 0
        assert io.output == bytearray()

    def test_unmatched_opener_fails_even_when_cell_nonzero(self):
        with pytest.raises(UnmatchedBracket) as exc_info:
            _run("+>+<[")
        assert exc_info.value.index == 4

    def test_output_before_unmatched_opener_is_kept(self):
        io = BufferedBackend()
        with pytest.raises(UnmatchedBracket):
            execute_program(parse_program("+.["), VMConfig(), io)
        assert io.output == bytearray(b"\x01")

    def test_stray_closer_fails_when_reached(self):
        with pytest.raises(UnpairedClosingBracket) as exc_info:
            _run("+]")
        assert exc_info.value.index == 1

    def test_stray_closer_on_zero_cell_is_a_no_op(self):
        vm, _, out = _run("]+.")
        assert out == bytes([1])

    def test_malformed_brackets_are_not_rejected_at_load_time(self):
        program = parse_program("]][")
        assert len(program) == 3

    def test_stray_closer_after_finished_loop_runs_fine(self):
        vm, _, out = _run("+[-]].")
        assert out == bytes([0])
        assert vm.instruction_pointer == 6

    def test_program_ending_inside_skipped_loop(self):
        with pytest.raises(UnmatchedBracket):
            _run("+[-][")


class TestBoundsPolicies:
    def test_out_of_range_access_is_fatal_by_default(self):
        with pytest.raises(MemoryAccessError):
            _run(">" * 100 + "+")

    def test_moving_out_and_back_without_access_is_allowed(self):
        vm, _, _ = _run("<<<>>>+")
        assert vm.memory[0] == 1

    def test_wrap_policy(self):
        config = VMConfig(memory_size=10, bounds_policy=BoundsPolicy.WRAP)
        vm, _, _ = _run("<+", config=config)
        assert vm.memory[9] == 1

    def test_grow_policy(self):
        config = VMConfig(memory_size=2, bounds_policy=BoundsPolicy.GROW)
        vm, stats, _ = _run(">>>>+", config=config)
        assert vm.memory[4] == 1
        assert stats.final_memory_size == 5


class TestStepLimit:
    def test_unbounded_by_default(self):
        _, stats, _ = _run("+" * 1000)
        assert stats.steps == 1000

    def test_infinite_loop_stopped_by_limit(self):
        with pytest.raises(StepLimitExceeded) as exc_info:
            _run("+[]", config=VMConfig(max_steps=50))
        assert exc_info.value.steps == 50

    def test_limit_equal_to_program_length_is_enough(self):
        _, stats, _ = _run("+++", config=VMConfig(max_steps=3))
        assert stats.steps == 3


class TestStats:
    def test_loops_resolved_counts_executed_openers(self):
        _, stats, _ = _run("+[-]>[+]")
        assert stats.loops_resolved == 2

    def test_each_run_has_fresh_state(self):
        program = parse_program("+.")
        first = BufferedBackend()
        second = BufferedBackend()
        execute_program(program, VMConfig(), first)
        execute_program(program, VMConfig(), second)
        assert first.output == second.output == bytearray(b"\x01")


class TestConfigValidation:
    def test_rejects_empty_tape(self):
        with pytest.raises(ValueError):
            VMConfig(memory_size=0)

    def test_rejects_negative_step_limit(self):
        with pytest.raises(ValueError):
            VMConfig(max_steps=-1)
