"""
================================================================================
Logging Setup
================================================================================

Centralized Loguru configuration for UI test runs.

Settings (read from RunConfiguration):
    - logLevel: DEBUG / INFO / WARNING / ERROR (default INFO)
    - logFormat: Loguru format string
    - logFile: optional file sink with rotation and retention

================================================================================
"""

import sys
from pathlib import Path
from typing import Optional

from loguru import logger

from .configuration import RunConfiguration


DEFAULT_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} | {message}"

_logger_initialized: bool = False


def init_logger(config: Optional[RunConfiguration] = None, level: str = None) -> None:
    """
    Initializes the global Loguru logger with consistent configuration.

    Call once at the start of a test run. Later calls are ignored until
    ``reset_logger()``.

    Args:
        config: Run configuration holding the logging settings
        level: Log level override
    """
    global _logger_initialized

    if _logger_initialized:
        return

    config = config or RunConfiguration()
    log_level = (level or config.get("logLevel", "INFO")).upper()
    log_format = config.get("logFormat", DEFAULT_FORMAT)

    logger.remove()
    logger.add(
        sys.stderr,
        level=log_level,
        format=log_format,
        colorize=True,
        backtrace=True,
        diagnose=True,
    )

    log_file = config.get("logFile")
    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            log_file,
            level=log_level,
            format=log_format.replace("{level: <8}", "{level}"),  # Remove padding for file
            rotation=config.get("logRotation", "10 MB"),
            retention=config.get("logRetention", "7 days"),
            compression="zip",
        )

    _logger_initialized = True
    logger.debug(f"Logger initialized with level: {log_level}")


def reset_logger() -> None:
    """Allow ``init_logger`` to reconfigure sinks (used by tests)."""
    global _logger_initialized
    _logger_initialized = False


__all__ = [
    "DEFAULT_FORMAT",
    "init_logger",
    "reset_logger",
]
