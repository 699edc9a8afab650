"""
CLI helpers for inspecting the semantics registry.
"""

from .utils import (
    console,
    print_error,
    build_indicator_table,
    build_pairing_table,
    build_validation_table,
    summarize,
)

__all__ = [
    "console",
    "print_error",
    "build_indicator_table",
    "build_pairing_table",
    "build_validation_table",
    "summarize",
]
