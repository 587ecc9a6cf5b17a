"""Tape interpreter package."""

from .run import run  # noqa: F401
from .api import (  # noqa: F401
    clean_source,
    load_program,
    dump_program,
    program_stats,
    execute_source,
    execute_traced,
)
