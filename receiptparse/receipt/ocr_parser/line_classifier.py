"""Classify single OCR receipt lines for the item state machine."""

import re
from collections.abc import Callable
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Any

from .common import (
    ITEM_NUMBER_PATTERN,
    MIN_NAME_LENGTH,
    STREET_LINE_PATTERN,
    TAX_CODE_PATTERN,
    clean_item_name,
    normalize_item_number,
    parse_discount,
    parse_price,
)


class LineKind(Enum):
    """Line categories, listed in classification precedence order."""

    SKIP_RETAIN = "skip_retain"  # noise; pending items/prices survive it
    SKIP_CLEAR = "skip_clear"  # noise that ends a tabular block
    DISCOUNT = "discount"
    ITEM_WITH_PRICE = "item_with_price"
    PRICE = "price"
    ITEM = "item"
    UNRECOGNIZED = "unrecognized"


@dataclass(frozen=True)
class ClassifiedLine:
    kind: LineKind
    item_number: str | None = None
    name: str = ""
    price: Decimal | None = None
    tax_code: str | None = None
    # Discount amount: set for DISCOUNT lines and for SKIP_RETAIN lines that
    # carry a trailing discount token (e.g. "0000366341 / 1935001 8.00-A").
    discount: Decimal | None = None


UNRECOGNIZED = ClassifiedLine(LineKind.UNRECOGNIZED)

# Noise that can sit between an item name and its price
RETAIN_CONTEXT_PATTERNS = [
    # Warehouse barcode / item cross-reference: "0000366341 / 1935001"
    re.compile(r"^0{4,}\d*\s*/\s*\d+"),
    # Long digit-only runs (register/transaction barcodes)
    re.compile(r"^\d{10,}$"),
    # Section markers
    re.compile(r"^SUB\s*TOTAL\b", re.IGNORECASE),
    re.compile(r"^(?:TOTAL\s+)?TAX\b", re.IGNORECASE),
    re.compile(r"^\**\s*TOTAL\b(?!\s+NUMBER)", re.IGNORECASE),
    # Masked card numbers: "XXXXXXXXXXXX5089", "**** 1234"
    re.compile(r"^[X*]{4,}[\s-]*\d{4}\b", re.IGNORECASE),
    # Card application id: "AID: A0000000031010"
    re.compile(r"^AID\b", re.IGNORECASE),
]

# Lone letter runs keep context unless a block-ending rule names them
LONE_TOKEN = re.compile(r"^[A-Za-z]{1,6}$")

# Noise that ends the current item/price block
CLEAR_CONTEXT_PATTERNS = [
    # Store banners
    re.compile(r"^COSTCO", re.IGNORECASE),
    re.compile(r"^WHOLESALE", re.IGNORECASE),
    re.compile(r"^(?:WALMART|TARGET|SAFEWAY|KROGER)\b", re.IGNORECASE),
    # Balance/approval/card network
    re.compile(r"BALANCE", re.IGNORECASE),
    re.compile(r"^CHANGE\b", re.IGNORECASE),
    re.compile(r"APPROVED", re.IGNORECASE),
    re.compile(r"\b(?:VISA|MASTERCARD|AMEX|AMERICAN\s+EXPRESS|DISCOVER|INTERAC)\b", re.IGNORECASE),
    # Member/terminal/transaction metadata
    re.compile(r"\bMEMBER\b", re.IGNORECASE),
    re.compile(r"TERMINAL", re.IGNORECASE),
    re.compile(r"\bTRAN(?:SACTION)?\s*(?:ID|#)", re.IGNORECASE),
    re.compile(r"^(?:RESP|SEQ|APP|AUTH|REF|OP)\s*#?\s*:", re.IGNORECASE),
    re.compile(r"^WHSE\b", re.IGNORECASE),
    # Date-led lines: "12/09/2025 13:35 388 11 109 630"
    re.compile(r"^\d{1,2}[/-]\d{1,2}[/-]\d{2,4}\b"),
    # Store number markers: "#388", "Bloomingdale #371"
    re.compile(r"(?:^|\s)#\s?\d{1,5}$"),
    # Address lines: street number + street suffix, or "City, ST 12345".
    # Item names are upper case, so the longer suffix list is title case only.
    re.compile(STREET_LINE_PATTERN),
    re.compile(r"^\d{1,5}\s+.*\b(?:STREET|ROAD|AVENUE|AVE|BOULEVARD|BLVD|HIGHWAY|HWY|PARKWAY|PKWY)\.?$"),
    re.compile(r",\s*[A-Z]{2}\s+\d{5}(?:-\d{4})?$"),
    # Tax-rate lines: "A 7.5% Tax", "E 1.75% TAX"
    re.compile(r"\d+(?:\.\d+)?\s*%.*\bTAX\b|\bTAX\b.*\d+(?:\.\d+)?\s*%", re.IGNORECASE),
    # Promotional banners and footer counts
    re.compile(r"THANK\s*YOU", re.IGNORECASE),
    re.compile(r"INSTANT\s+SAVINGS", re.IGNORECASE),
    re.compile(r"PLEASE\s+COME\s+AGAIN", re.IGNORECASE),
    re.compile(r"TOTAL\s+NUMBER\s+OF\s+ITEMS", re.IGNORECASE),
    re.compile(r"ITEMS\s+SOLD", re.IGNORECASE),
]

# "8.00-A", "800-A", "5.00-"; OCR may glue it to the end of another line
DISCOUNT_TOKEN = re.compile(r"(?:^|\s)\$?(\d+(?:\.\d{2})?)-\s*(" + TAX_CODE_PATTERN + r")?$")

ITEM_WITH_PRICE_LINE = re.compile(
    r"^(?:[A-Z]\s+)?(" + ITEM_NUMBER_PATTERN + r")\s+(.+?)\s+(\d+\.\d{2})\s*(" + TAX_CODE_PATTERN + r")?\s*$",
    re.IGNORECASE,
)
PRICE_LINE = re.compile(r"^(\d+\.\d{2})\s*(" + TAX_CODE_PATTERN + r")?$")
ITEM_LINE = re.compile(r"^(?:[A-Z]\s+)?(" + ITEM_NUMBER_PATTERN + r")\s+(.+)$", re.IGNORECASE)


def _is_non_ascii_garbage(line: str) -> bool:
    """Return True if most visible characters are non-ASCII (unreadable OCR)."""
    visible = [c for c in line if not c.isspace()]
    if not visible:
        return False
    non_ascii = sum(1 for c in visible if ord(c) > 127)
    return non_ascii * 2 > len(visible)


def _is_stray_token(line: str) -> bool:
    """Lone 1-6 letter token: stray tax codes ("E", "H"), "TAX", "Seq"; not "COSTCO" or "VISA"."""
    return LONE_TOKEN.match(line) is not None and not _match_clear_context(line)


def _match_retain_context(line: str) -> bool:
    return (
        _is_non_ascii_garbage(line)
        or _is_stray_token(line)
        or any(p.search(line) for p in RETAIN_CONTEXT_PATTERNS)
    )


def _match_clear_context(line: str) -> bool:
    return any(p.search(line) for p in CLEAR_CONTEXT_PATTERNS)


def _classify_retain_context(line: str, _match: Any) -> ClassifiedLine:
    discount_match = DISCOUNT_TOKEN.search(line)
    discount = parse_discount(discount_match.group(1)) if discount_match else None
    return ClassifiedLine(LineKind.SKIP_RETAIN, discount=discount)


def _classify_clear_context(_line: str, _match: Any) -> ClassifiedLine:
    return ClassifiedLine(LineKind.SKIP_CLEAR)


def _classify_discount(_line: str, match: re.Match[str]) -> ClassifiedLine:
    amount = parse_discount(match.group(1))
    if amount is None:
        return UNRECOGNIZED
    return ClassifiedLine(LineKind.DISCOUNT, discount=amount, tax_code=match.group(2))


def _classify_item_with_price(_line: str, match: re.Match[str]) -> ClassifiedLine:
    name = clean_item_name(match.group(2))
    price = parse_price(match.group(3))
    if len(name) < MIN_NAME_LENGTH or price is None:
        return UNRECOGNIZED
    return ClassifiedLine(
        LineKind.ITEM_WITH_PRICE,
        item_number=normalize_item_number(match.group(1)),
        name=name,
        price=price,
        tax_code=match.group(4),
    )


def _classify_price(_line: str, match: re.Match[str]) -> ClassifiedLine:
    price = parse_price(match.group(1))
    if price is None:
        return UNRECOGNIZED
    return ClassifiedLine(LineKind.PRICE, price=price, tax_code=match.group(2))


def _classify_item(_line: str, match: re.Match[str]) -> ClassifiedLine:
    name = clean_item_name(match.group(2))
    if len(name) < MIN_NAME_LENGTH:
        return UNRECOGNIZED
    return ClassifiedLine(LineKind.ITEM, item_number=normalize_item_number(match.group(1)), name=name)


# (predicate, handler) pairs in precedence order. Order matters: discounts
# must be tested before prices, and noise before anything item-shaped.
_CLASSIFICATION_RULES: list[tuple[Callable[[str], Any], Callable[[str, Any], ClassifiedLine]]] = [
    (_match_retain_context, _classify_retain_context),
    (_match_clear_context, _classify_clear_context),
    (DISCOUNT_TOKEN.search, _classify_discount),
    (ITEM_WITH_PRICE_LINE.match, _classify_item_with_price),
    (PRICE_LINE.match, _classify_price),
    (ITEM_LINE.match, _classify_item),
]


def classify_line(line: str) -> ClassifiedLine:
    """
    Classify one receipt line.

    The first rule whose predicate matches decides the category. A line whose
    shape matches but whose values fail validation (price out of range, name
    too short) is UNRECOGNIZED rather than retried against later rules.
    """
    text = line.strip()
    if not text:
        return UNRECOGNIZED
    for predicate, handler in _CLASSIFICATION_RULES:
        match = predicate(text)
        if match:
            return handler(text, match)
    return UNRECOGNIZED
