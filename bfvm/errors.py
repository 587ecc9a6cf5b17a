"""Interpreter error taxonomy.

Every failure the engine can report derives from :class:`InterpreterError`.
None of them are recovered internally; they propagate to whoever started the
run (the CLI turns them into a diagnostic and a non-zero exit code).
"""

from __future__ import annotations


class InterpreterError(Exception):
    """Base class for all fatal interpreter errors."""

    pass


class UnmatchedBracket(InterpreterError):
    """An opening bracket has no closing bracket in the rest of the program."""

    def __init__(self, index: int):
        self.index = index
        super().__init__(f"Could not find a closing bracket for opening bracket at index {index}")


class UnpairedClosingBracket(InterpreterError):
    """A closing bracket was reached before its opening bracket ever executed."""

    def __init__(self, index: int):
        self.index = index
        super().__init__(f"Encountered closing bracket of loop at {index} before opening bracket")


class InvalidInstruction(InterpreterError):
    """A symbol outside the instruction alphabet reached the engine."""

    def __init__(self, char: str, index: int):
        self.char = char
        self.index = index
        super().__init__(f"Invalid instruction char {char!r} at index {index}")


class InputExhausted(InterpreterError):
    """An input instruction ran with no input left."""

    def __init__(self, index: int):
        self.index = index
        super().__init__(f"Input exhausted while reading at instruction {index}")


class MemoryAccessError(InterpreterError):
    """The data pointer addressed a cell outside the tape."""

    def __init__(self, data_pointer: int, memory_size: int, index: int):
        self.data_pointer = data_pointer
        self.memory_size = memory_size
        self.index = index
        super().__init__(
            f"Data pointer {data_pointer} out of range for tape of "
            f"{memory_size} cells (instruction {index})"
        )


class StepLimitExceeded(InterpreterError):
    """Execution ran for more than the configured number of steps."""

    def __init__(self, steps: int):
        self.steps = steps
        super().__init__(f"Step limit of {steps} exceeded")
