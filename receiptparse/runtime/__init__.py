"""Runtime infrastructure for receiptparse.

This package provides process/runtime services including:
- Logging setup via get_logger()
- Path resolution via get_paths(), ProjectPaths
- Store rule loading via load_store_rules()

Usage:
    from receiptparse.runtime import get_logger, get_paths, load_store_rules

    logger = get_logger(__name__)
    rules = load_store_rules()
"""

from receiptparse.runtime.logging import (
    DEFAULT_LOG_LEVEL,
    LOG_FORMAT,
    LOG_FORMAT_DEBUG,
    configure_logging,
    get_logger,
    set_log_level,
)
from receiptparse.runtime.paths import ProjectPaths, get_paths, reset_paths
from receiptparse.runtime.store_rules import load_store_rules

__all__ = [
    # Logging
    "get_logger",
    "configure_logging",
    "set_log_level",
    "DEFAULT_LOG_LEVEL",
    "LOG_FORMAT",
    "LOG_FORMAT_DEBUG",
    # Rules
    "load_store_rules",
    # Paths
    "get_paths",
    "reset_paths",
    "ProjectPaths",
]
