"""Retailer identification rules for receipt text.

Each rule pairs a case-insensitive regex with the canonical store name
reported for receipts that contain it. Rules are checked in order and the
first hit wins, so more specific names (a warehouse club) must come before
generic chains.

To add a retailer:
1. Append a StoreRule to DEFAULT_STORE_RULES below, or
2. Add a [[rules]] table with `name` and `pattern` to the project's
   store_rules.toml (project rules are checked before the defaults)
"""

import re
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any


class StoreRulesError(ValueError):
    """Raised when a store rule config entry is malformed."""


@dataclass(frozen=True)
class StoreRule:
    """One retailer marker and the name reported for it."""

    name: str
    pattern: re.Pattern[str]


def _rule(name: str, pattern: str) -> StoreRule:
    return StoreRule(name=name, pattern=re.compile(pattern, re.IGNORECASE))


DEFAULT_STORE_RULES: tuple[StoreRule, ...] = (
    _rule("Costco Wholesale", r"COSTCO\s*WHOLESALE"),
    _rule("Walmart", r"WALMART"),
    _rule("Target", r"TARGET"),
    _rule("Safeway", r"SAFEWAY"),
    _rule("Kroger", r"KROGER"),
)


def build_store_rules(configs: Sequence[Mapping[str, Any]] | None = None) -> tuple[StoreRule, ...]:
    """
    Build the ordered store rule list from in-memory TOML configs.

    Rules from earlier configs come first; the built-in defaults come last.

    Raises:
        StoreRulesError: a rule lacks a name or pattern, or the pattern is not
            a valid regex.
    """
    rules: list[StoreRule] = []
    for config in configs or ():
        for idx, raw_rule in enumerate(config.get("rules", []), start=1):
            if not isinstance(raw_rule, Mapping):
                raise StoreRulesError(f"rule {idx} is not a table")
            name = str(raw_rule.get("name", "")).strip()
            pattern = str(raw_rule.get("pattern", "")).strip()
            if not name or not pattern:
                raise StoreRulesError(f"rule {idx} needs both 'name' and 'pattern'")
            try:
                rules.append(_rule(name, pattern))
            except re.error as exc:
                raise StoreRulesError(f"rule {idx} ({name}): invalid pattern {pattern!r}: {exc}") from exc
    rules.extend(DEFAULT_STORE_RULES)
    return tuple(rules)
