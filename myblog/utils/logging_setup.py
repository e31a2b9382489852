"""
Logging configuration utilities.

This module provides standardized logging setup for the server process and
the management commands.
"""

import logging
import sys
from pathlib import Path
from typing import Optional, Union

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "warning": logging.WARNING,
    "error": logging.ERROR,
    "critical": logging.CRITICAL,
}


def parse_level(level: Union[str, int, None], default: int = logging.INFO) -> int:
    """
    Convert a configured level name ("debug", "info", "warn", "error") to a
    logging level.

    Unknown names fall back to ``default``.
    """
    if isinstance(level, int):
        return level
    if not level:
        return default
    return _LEVELS.get(level.strip().lower(), default)


def setup_logging(
    name: str = None,
    level: Union[str, int] = logging.INFO,
    log_file: Optional[Path] = None,
    console: bool = True,
    format_string: str = DEFAULT_FORMAT,
) -> logging.Logger:
    """
    Set up logging with optional file and console handlers.

    Args:
        name: Logger name (defaults to root logger if None)
        level: Logging level or level name (default: INFO)
        log_file: Path to log file (optional)
        console: Whether to add console handler (default: True)
        format_string: Log message format

    Returns:
        Configured logger instance

    Example:
        >>> logger = setup_logging("myblog", level="debug")
        >>> logger.info("Application started")
    """
    level = parse_level(level)
    logger = logging.getLogger(name)
    logger.setLevel(level)

    # Clear existing handlers to avoid duplicates
    logger.handlers.clear()

    formatter = logging.Formatter(format_string)

    if console:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(level)
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path)
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger

