"""
Logging system for the semantics engine.
Provides human-readable console logs with optional file output.
"""

import logging
from datetime import datetime
from pathlib import Path
from typing import Optional


# ANSI color codes for terminal output
class Colors:
    RESET = "\033[0m"
    RED = "\033[91m"
    GREEN = "\033[92m"
    YELLOW = "\033[93m"
    CYAN = "\033[96m"
    WHITE = "\033[97m"
    BOLD = "\033[1m"


class ColoredFormatter(logging.Formatter):
    """Custom formatter with colors for console output."""

    LEVEL_COLORS = {
        logging.DEBUG: Colors.CYAN,
        logging.INFO: Colors.GREEN,
        logging.WARNING: Colors.YELLOW,
        logging.ERROR: Colors.RED,
        logging.CRITICAL: Colors.BOLD + Colors.RED,
    }

    def format(self, record):
        color = self.LEVEL_COLORS.get(record.levelno, Colors.WHITE)
        # Format a copy so file handlers sharing the record stay uncolored
        record = logging.makeLogRecord(record.__dict__)
        record.levelname = f"{color}{record.levelname}{Colors.RESET}"
        record.msg = f"{color}{record.msg}{Colors.RESET}"
        return super().format(record)


class SemanticsLogger:
    """
    Central logging system for the semantics engine.

    Features:
    - Console output with colors
    - Optional dated file output
    - Separate logger for rejected conditions
    """

    _instance: Optional['SemanticsLogger'] = None
    _initialized: bool = False

    def __new__(cls, *args, **kwargs):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self, log_dir: Optional[str] = None, log_level: str = "INFO"):
        if SemanticsLogger._initialized:
            return

        self.log_dir = Path(log_dir) if log_dir else None
        if self.log_dir is not None:
            self.log_dir.mkdir(parents=True, exist_ok=True)

        self.main_logger = self._create_logger("semantics", log_level)
        self.validation_logger = self._create_logger(
            "semantics.validation", log_level, "validation"
        )

        SemanticsLogger._initialized = True

    def _create_logger(self, name: str, level: str, file_prefix: str = None) -> logging.Logger:
        """Create a configured logger instance."""
        logger = logging.getLogger(name)
        logger.setLevel(getattr(logging, level.upper()))
        logger.handlers.clear()
        logger.propagate = False

        console_handler = logging.StreamHandler()
        console_handler.setFormatter(ColoredFormatter(
            "%(asctime)s | %(levelname)s | %(message)s",
            datefmt="%H:%M:%S"
        ))
        logger.addHandler(console_handler)

        if self.log_dir is not None:
            prefix = file_prefix or "semantics"
            log_file = self.log_dir / f"{prefix}_{datetime.now().strftime('%Y%m%d')}.log"
            file_handler = logging.FileHandler(log_file, encoding='utf-8')
            file_handler.setFormatter(logging.Formatter(
                "%(asctime)s | %(levelname)s | %(name)s | %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S"
            ))
            logger.addHandler(file_handler)

        return logger

    def info(self, msg: str, *args, **kwargs):
        """Log info message."""
        self.main_logger.info(msg, *args, **kwargs)

    def debug(self, msg: str, *args, **kwargs):
        """Log debug message."""
        self.main_logger.debug(msg, *args, **kwargs)

    def warning(self, msg: str, *args, **kwargs):
        """Log warning message."""
        self.main_logger.warning(msg, *args, **kwargs)

    def error(self, msg: str, *args, **kwargs):
        """Log error message."""
        self.main_logger.error(msg, *args, **kwargs)

    def rejection(self, indicator: str, reason: str, **kwargs):
        """
        Log a rejected condition.

        Args:
            indicator: Indicator id the condition was checked against
            reason: ReasonCode name
            **kwargs: Additional context (subject, target, operator, ...)
        """
        parts = [f"[REJECTED:{reason}]", f"indicator={indicator}"]
        for key, value in kwargs.items():
            parts.append(f"{key}={value}")
        self.validation_logger.info(" | ".join(parts))


# Global logger instance
_logger: Optional[SemanticsLogger] = None


def get_logger() -> SemanticsLogger:
    """Get or create the global logger instance from configuration."""
    global _logger
    if _logger is None:
        from ..config.config import get_config

        log_config = get_config().log
        log_dir = log_config.log_dir if log_config.log_to_file else None
        _logger = SemanticsLogger(log_dir, log_config.level)
    return _logger


def setup_logger(log_dir: Optional[str] = None, log_level: str = "INFO") -> SemanticsLogger:
    """Initialize the logger with custom settings."""
    global _logger
    SemanticsLogger._initialized = False
    SemanticsLogger._instance = None
    _logger = SemanticsLogger(log_dir, log_level)
    return _logger
