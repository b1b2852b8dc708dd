"""Centralized path management for receiptparse.

This module provides a single source of truth for configuration paths.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

CONFIG_DIR_ENV = "RECEIPTPARSE_CONFIG_DIR"


def _get_project_root() -> Path:
    """Determine the project root directory."""
    # receiptparse/runtime/paths.py -> receiptparse/runtime -> receiptparse -> project root
    return Path(__file__).parent.parent.parent


@dataclass
class ProjectPaths:
    """Container for all project-related paths.

    All paths are computed relative to the project root, ensuring consistency
    across all modules regardless of the current working directory.
    """

    root: Path = field(default_factory=_get_project_root)
    # Overrides root / "config" when set (defaults to $RECEIPTPARSE_CONFIG_DIR)
    config_dir: Path | None = field(default_factory=lambda: _config_dir_from_env())

    def __post_init__(self) -> None:
        # Ensure root is resolved to absolute path
        self.root = self.root.resolve()

    # --- Configuration paths ---
    @property
    def config(self) -> Path:
        """Configuration directory (config/ or $RECEIPTPARSE_CONFIG_DIR)."""
        if self.config_dir is not None:
            return self.config_dir
        return self.root / "config"

    @property
    def store_rules(self) -> Path:
        """Project-level retailer identification rules TOML file."""
        return self.config / "store_rules.toml"


def _config_dir_from_env() -> Path | None:
    value = os.environ.get(CONFIG_DIR_ENV, "").strip()
    return Path(value).expanduser() if value else None


# Module-level singleton
_paths: ProjectPaths | None = None


def get_paths() -> ProjectPaths:
    """Get the singleton ProjectPaths instance.

    Returns:
        The global ProjectPaths instance.
    """
    global _paths
    if _paths is None:
        _paths = ProjectPaths()
    return _paths


def reset_paths() -> None:
    """Drop the cached ProjectPaths so the environment is read again."""
    global _paths
    _paths = None
