"""
Configuration management for the semantics engine.
Loads settings from environment variables with sensible defaults.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from ..rules.types import PriceSource


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "y")


@dataclass
class LogConfig:
    """Logging configuration."""
    level: str = "INFO"
    log_dir: str = "logs"
    log_to_file: bool = False

    def __post_init__(self):
        self.level = self.level.upper()
        if self.level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"LOG_LEVEL must be a logging level name, got '{self.level}'")


@dataclass
class SemanticsConfig:
    """
    Schema registry and condition validation settings.

    Attributes:
        max_conditions: Cap on conditions in one rule set (None disables)
        default_price_source: Source assumed for price subjects without one
    """
    max_conditions: Optional[int] = 10
    default_price_source: PriceSource = field(default=PriceSource.CLOSE)

    def __post_init__(self):
        if self.max_conditions is not None and self.max_conditions <= 0:
            raise ValueError(
                f"SEMANTICS_MAX_CONDITIONS must be positive, got {self.max_conditions}"
            )


class Config:
    """
    Central configuration manager.

    Loads configuration from environment variables and provides
    typed access to all settings.
    """

    _instance: Optional['Config'] = None

    def __new__(cls, *args, **kwargs):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._initialized = False
        return cls._instance

    def __init__(self, env_file: str = ".env"):
        if self._initialized:
            return

        env_path = Path(env_file)
        if env_path.exists():
            load_dotenv(env_path, override=True)

        self.log = self._load_log_config()
        self.semantics = self._load_semantics_config()

        self._initialized = True

    def _load_log_config(self) -> LogConfig:
        """Load logging configuration from environment."""
        return LogConfig(
            level=os.getenv("LOG_LEVEL", "INFO"),
            log_dir=os.getenv("LOG_DIR", "logs"),
            log_to_file=_env_bool("LOG_TO_FILE", "false"),
        )

    def _load_semantics_config(self) -> SemanticsConfig:
        """Load schema/validation configuration from environment."""
        max_raw = os.getenv("SEMANTICS_MAX_CONDITIONS", "10").strip()
        try:
            max_conditions = int(max_raw) if max_raw else 10
        except ValueError:
            raise ValueError(
                f"SEMANTICS_MAX_CONDITIONS must be an integer, got '{max_raw}'"
            ) from None
        # 0 disables the cap
        max_conditions_opt = max_conditions if max_conditions != 0 else None

        source_raw = os.getenv("SEMANTICS_DEFAULT_PRICE_SOURCE", "close").strip().lower()
        try:
            default_source = PriceSource(source_raw)
        except ValueError:
            valid = [s.value for s in PriceSource]
            raise ValueError(
                f"SEMANTICS_DEFAULT_PRICE_SOURCE must be one of {valid}, got '{source_raw}'"
            ) from None

        return SemanticsConfig(
            max_conditions=max_conditions_opt,
            default_price_source=default_source,
        )

    def summary(self) -> dict:
        """Get a printable summary of the active configuration."""
        return {
            "log_level": self.log.level,
            "log_dir": self.log.log_dir,
            "log_to_file": self.log.log_to_file,
            "max_conditions": self.semantics.max_conditions,
            "default_price_source": self.semantics.default_price_source.value,
        }


def get_config() -> Config:
    """Get the global configuration instance."""
    return Config()


def reload_config(env_file: str = ".env") -> Config:
    """Drop the cached instance and load configuration again."""
    Config._instance = None
    return Config(env_file)
