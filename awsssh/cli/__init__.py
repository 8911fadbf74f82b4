"""CLI argument parsing and entry points."""

from __future__ import annotations

from awsssh.cli.parsing import (
    build_connection_spec,
    flag_value,
    prompt_with_default,
)

__all__ = [
    "build_connection_spec",
    "flag_value",
    "prompt_with_default",
]
