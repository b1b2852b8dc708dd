"""Receipt text parsing, formatting and store identification."""

from .formatter import format_parsed_receipt
from .store_rules import DEFAULT_STORE_RULES, StoreRule, StoreRulesError, build_store_rules
from .text_parser import parse_receipt_text

__all__ = [
    "DEFAULT_STORE_RULES",
    "StoreRule",
    "StoreRulesError",
    "build_store_rules",
    "format_parsed_receipt",
    "parse_receipt_text",
]
