"""
Utility modules.
"""

from .logger import get_logger, setup_logger, SemanticsLogger

__all__ = [
    "get_logger",
    "setup_logger",
    "SemanticsLogger",
]
