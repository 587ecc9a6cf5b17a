"""Matching loop openers to their closers."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterator, Sequence

from .errors import UnmatchedBracket, UnpairedClosingBracket
from . import constants

logger = logging.getLogger(__name__)


def resolve_closing(instructions: Sequence[str], open_index: int) -> int:
    """Return the index of the closing bracket matching the opener at *open_index*.

    Scans forward counting nesting depth; pure, so repeated calls for the same
    opener always agree.

    Raises:
        UnmatchedBracket: the stream ends before the depth returns to zero.
    """
    depth = 1
    index = open_index
    while depth != 0:
        index += 1
        if index >= len(instructions):
            raise UnmatchedBracket(open_index)
        symbol = instructions[index]
        if symbol == constants.JUMP_IF_ZERO:
            depth += 1
        elif symbol == constants.JUMP_IF_NOT_ZERO:
            depth -= 1
    return index


@dataclass
class BracketCache:
    """Bidirectional opener <-> closer map, filled lazily as loops execute.

    Both directions are written together, so every closer maps back to exactly
    one opener. Entries are never invalidated: the program text cannot change
    during a run.
    """

    closers: dict[int, int] = field(default_factory=dict)
    openers: dict[int, int] = field(default_factory=dict)

    def closing_for(self, instructions: Sequence[str], open_index: int) -> int:
        """Get-or-resolve the closer for *open_index*."""
        close_index = self.closers.get(open_index)
        if close_index is None:
            close_index = resolve_closing(instructions, open_index)
            self.closers[open_index] = close_index
            self.openers[close_index] = open_index
            logger.debug("Resolved bracket pair %d -> %d", open_index, close_index)
        return close_index

    def opening_for(self, close_index: int) -> int:
        """Look up the opener paired with *close_index*.

        Raises:
            UnpairedClosingBracket: no opener for this closer has executed yet.
        """
        try:
            return self.openers[close_index]
        except KeyError:
            raise UnpairedClosingBracket(close_index) from None

    def pairs(self) -> Iterator[tuple[int, int]]:
        return iter(sorted(self.closers.items()))

    def __len__(self) -> int:
        return len(self.closers)

    def __contains__(self, open_index: object) -> bool:
        return open_index in self.closers

    def to_dict(self) -> dict[int, int]:
        return dict(self.closers)
