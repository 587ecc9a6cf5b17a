"""Pure functions for computing statistics over instruction streams."""

from __future__ import annotations

from collections import Counter

from bfvm.ir import Opcode, Program


def count_opcodes(program: Program) -> dict[str, int]:
    """Return a frequency map of opcode names in the given program.

    Args:
        program: A cleaned instruction stream.

    Returns:
        A dict mapping opcode name strings to their occurrence counts.
        Empty dict for an empty program.

    Raises:
        InvalidInstruction: the program holds a symbol outside the alphabet.
    """
    return dict(Counter(program.opcode_at(i).name for i in range(len(program))))


def max_loop_depth(program: Program) -> int:
    """Deepest bracket nesting reached while scanning left to right.

    Stray closers are counted as closing nothing; the scan never fails.
    """
    depth = deepest = 0
    for symbol in program.text:
        if symbol == Opcode.JUMP_IF_ZERO.value:
            depth += 1
            deepest = max(deepest, depth)
        elif symbol == Opcode.JUMP_IF_NOT_ZERO.value and depth > 0:
            depth -= 1
    return deepest
