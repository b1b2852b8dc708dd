"""Runtime loader for retailer identification rules."""

from __future__ import annotations

import tomllib
from functools import lru_cache
from pathlib import Path

from receiptparse.receipt.store_rules import StoreRule, StoreRulesError, build_store_rules
from receiptparse.runtime.logging import get_logger
from receiptparse.runtime.paths import get_paths

logger = get_logger(__name__)


@lru_cache(maxsize=4)
def load_store_rules(config_path: str | None = None) -> tuple[StoreRule, ...]:
    """
    Load store rules from store_rules.toml, followed by the built-in defaults.

    Args:
        config_path: Optional TOML path override. If None, uses default project path.

    Returns:
        Ordered tuple of store rules; project rules first.

    Raises:
        StoreRulesError: The file is not valid TOML or contains a malformed rule.
    """
    path = Path(config_path) if config_path is not None else get_paths().store_rules
    if not path.exists():
        if config_path is not None:
            logger.warning("Store rules file not found: %s (using defaults)", path)
        return build_store_rules()

    try:
        with open(path, "rb") as f:
            config = tomllib.load(f)
    except tomllib.TOMLDecodeError as exc:
        raise StoreRulesError(f"{path}: {exc}") from exc

    try:
        rules = build_store_rules([config])
    except StoreRulesError as exc:
        raise StoreRulesError(f"{path}: {exc}") from exc
    logger.debug("Loaded %d store rule(s) from %s", len(rules), path)
    return rules
