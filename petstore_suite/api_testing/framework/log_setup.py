"""
================================================================================
Logging Setup
================================================================================

Centralized Loguru configuration shared by the pytest hooks and the
command-line runner.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Any, Optional

from loguru import logger


DEFAULT_LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "{name}:{function}:{line} | {message}"
)

_logger_initialized: bool = False


def init_logger(
    level: Optional[str] = None,
    format_str: Optional[str] = None,
    config: Optional[Any] = None,
) -> None:
    """
    Initializes the global Loguru logger with consistent configuration.

    Safe to call more than once; only the first call installs sinks.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR). Defaults to config value.
        format_str: Custom log format string. Defaults to config value.
        config: Object exposing ``get(key, default)``. Creates a ConfigLoader if None.
    """
    global _logger_initialized

    if _logger_initialized:
        return

    if config is None:
        from .config_loader import ConfigLoader
        config = ConfigLoader()

    log_level = (level or config.get("logging.level", "INFO")).upper()
    log_format = format_str or config.get("logging.format", DEFAULT_LOG_FORMAT)

    logger.remove()
    logger.add(
        sys.stderr,
        level=log_level,
        format=log_format,
        colorize=True,
        backtrace=True,
        diagnose=False,
    )

    log_file = config.get("logging.file", None)
    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            log_file,
            level=log_level,
            format=log_format.replace("{level: <8}", "{level}"),
            rotation=config.get("logging.rotation", "10 MB"),
            retention=config.get("logging.retention", "7 days"),
            compression="zip",
            colorize=False,
        )

    _logger_initialized = True
    logger.debug(f"Logger initialized with level: {log_level}")


def reset_logger() -> None:
    """Allow init_logger to install sinks again (used by unit tests)."""
    global _logger_initialized
    _logger_initialized = False


__all__ = [
    "DEFAULT_LOG_FORMAT",
    "init_logger",
    "reset_logger",
]
