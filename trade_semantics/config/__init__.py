"""
Configuration management.
"""

from .config import (
    Config,
    get_config,
    reload_config,
    LogConfig,
    SemanticsConfig,
)

__all__ = [
    "Config",
    "get_config",
    "reload_config",
    "LogConfig",
    "SemanticsConfig",
]
