"""Centralized logging configuration for receiptparse.

Usage:
    from receiptparse.runtime import get_logger
    logger = get_logger(__name__)

    logger.debug("Which rule classified a line, which total was chosen")
    logger.info("Parsed: Costco Wholesale, 2025-12-09, $63.97, 2 items")

Environment variables:
    RECEIPTPARSE_LOG_LEVEL: Log level name (DEBUG, INFO, WARNING, ERROR) or
        number. Default: INFO
"""

import logging
import os
import sys
from typing import TextIO

LOG_LEVEL_ENV = "RECEIPTPARSE_LOG_LEVEL"
DEFAULT_LOG_LEVEL = logging.INFO

# Parent logger for every module in the package; the pure parser modules log
# through logging.getLogger(__name__) and land here too.
LOGGER_NAMESPACE = "receiptparse"

LOG_FORMAT = "%(levelname)s [%(name)s] %(message)s"
LOG_FORMAT_DEBUG = "%(levelname)s [%(name)s:%(lineno)d] %(message)s"

_handler: logging.Handler | None = None


def _parse_level(value: str | int | None) -> int | None:
    """Turn "debug", "WARN", "10" or 10 into a logging level; None if unknown."""
    if value is None:
        return None
    if isinstance(value, int):
        return value
    text = value.strip().upper()
    if not text:
        return None
    if text.isdigit():
        return int(text)
    if text == "WARN":
        text = "WARNING"
    level = logging.getLevelName(text)
    return level if isinstance(level, int) else None


def _formatter_for(level: int) -> logging.Formatter:
    return logging.Formatter(LOG_FORMAT_DEBUG if level <= logging.DEBUG else LOG_FORMAT)


def configure_logging(level: str | int | None = None, stream: TextIO | None = None) -> None:
    """Attach a single stderr handler to the package logger.

    Args:
        level: Log level to use. If None, reads RECEIPTPARSE_LOG_LEVEL or
               uses DEFAULT_LOG_LEVEL.
        stream: Output stream (default: sys.stderr)

    Calling this again is a no-op; use set_log_level() to change the level.
    """
    global _handler

    if _handler is not None:
        return

    resolved = _parse_level(level)
    if resolved is None:
        resolved = _parse_level(os.environ.get(LOG_LEVEL_ENV))
    if resolved is None:
        resolved = DEFAULT_LOG_LEVEL

    _handler = logging.StreamHandler(stream or sys.stderr)
    _handler.setFormatter(_formatter_for(resolved))

    package_logger = logging.getLogger(LOGGER_NAMESPACE)
    package_logger.setLevel(resolved)
    package_logger.addHandler(_handler)
    package_logger.propagate = False


def get_logger(name: str) -> logging.Logger:
    """Get a logger under the package namespace.

    Args:
        name: Module name, typically __name__

    Returns:
        Configured logger instance
    """
    configure_logging()

    if name == LOGGER_NAMESPACE or name.startswith(f"{LOGGER_NAMESPACE}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{LOGGER_NAMESPACE}.{name}")


def set_log_level(level: str | int) -> None:
    """Change the package log level at runtime (e.g. for a --verbose flag)."""
    resolved = _parse_level(level)
    if resolved is None:
        raise ValueError(f"Unknown log level: {level!r}")

    package_logger = logging.getLogger(LOGGER_NAMESPACE)
    package_logger.setLevel(resolved)
    for handler in package_logger.handlers:
        handler.setFormatter(_formatter_for(resolved))
