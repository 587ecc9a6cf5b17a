"""Byte I/O backends for the input and output instructions."""

from __future__ import annotations

import sys
from abc import ABC, abstractmethod
from typing import BinaryIO

from . import constants


class IOBackend(ABC):
    """Source of input bytes and sink for output bytes."""

    @abstractmethod
    def read_byte(self) -> int | None:
        """Block for one byte of input; None once input is exhausted."""
        ...

    @abstractmethod
    def write_byte(self, value: int) -> None: ...


class StdioBackend(IOBackend):
    """Backend bound to the process's binary stdin/stdout."""

    def __init__(self, stdin: BinaryIO | None = None, stdout: BinaryIO | None = None):
        self._stdin = stdin if stdin is not None else sys.stdin.buffer
        self._stdout = stdout if stdout is not None else sys.stdout.buffer

    def read_byte(self) -> int | None:
        data = self._stdin.read(1)
        if not data:
            return None
        return data[0]

    def write_byte(self, value: int) -> None:
        self._stdout.write(bytes((value,)))
        self._stdout.flush()


class BufferedBackend(IOBackend):
    """In-memory backend: fixed input bytes, collected output bytes."""

    def __init__(self, input_data: bytes | str = b""):
        if isinstance(input_data, str):
            input_data = input_data.encode("latin-1")
        self._input = input_data
        self._position = 0
        self.output = bytearray()

    def read_byte(self) -> int | None:
        if self._position >= len(self._input):
            return None
        value = self._input[self._position]
        self._position += 1
        return value

    def write_byte(self, value: int) -> None:
        self.output.append(value)

    @property
    def output_text(self) -> str:
        return self.output.decode("latin-1")


def get_backend(name: str, input_data: bytes | str = b"") -> IOBackend:
    """Factory for I/O backends.

    Args:
        name: "stdio" or "buffered"
        input_data: Input bytes for the buffered backend.
    """
    if name == constants.BACKEND_STDIO:
        return StdioBackend()
    if name == constants.BACKEND_BUFFERED:
        return BufferedBackend(input_data)
    raise ValueError(f"Unknown backend: {name}")
