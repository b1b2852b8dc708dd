"""Store/address/date/total extraction helpers."""

import logging
import re
from collections.abc import Sequence
from datetime import date
from decimal import Decimal

from receiptparse.domain.receipt import Line, ParsedItem, StoreAddress, round_cents

from ..store_rules import DEFAULT_STORE_RULES, StoreRule
from .common import STREET_SUFFIXES, is_standalone_amount, parse_amount

logger = logging.getLogger(__name__)

# Addresses are printed in the receipt header
ADDRESS_HEADER_LINES = 15

# Lines scanned after a "**** TOTAL" marker for the total amount
TOTAL_LOOKAHEAD_LINES = 15

_STREET = r"\d+\s+[A-Za-z0-9 .'#-]*?\b(?i:" + STREET_SUFFIXES + r")\.?"
_CITY_STATE_ZIP = r"([A-Za-z][A-Za-z .'-]*?),\s*([A-Z]{2})\s+(\d{5})(?:-\d{4})?"

# "1901 W 22nd St, Oak Brook, IL 60523"
SINGLE_LINE_ADDRESS = re.compile(r"^(" + _STREET + r"),\s*" + _CITY_STATE_ZIP + r"$")
# "1901 West 22nd Street" followed by "Oak Brook, IL 60523"
STREET_LINE = re.compile(r"^(" + _STREET + r")$")
CITY_STATE_ZIP_LINE = re.compile(r"^" + _CITY_STATE_ZIP + r"$")
# Anything "Words, ST 12345" in the header
LOOSE_CITY_STATE_ZIP = re.compile(r"\b" + _CITY_STATE_ZIP + r"\b")

# Tried in order; 2-digit years are 20YY
DATE_PATTERNS = [
    re.compile(r"(?<!\d)(\d{1,2})/(\d{1,2})/(\d{4})(?!\d)"),
    re.compile(r"(?<!\d)(\d{1,2})/(\d{1,2})/(\d{2})(?!\d)"),
    re.compile(r"(?<!\d)(\d{1,2})-(\d{1,2})-(\d{4})(?!\d)"),
    re.compile(r"(?<!\d)(\d{1,2})-(\d{1,2})-(\d{2})(?!\d)"),
]

TOTAL_MARKER = re.compile(r"^\*+\s*TOTAL\b", re.IGNORECASE)

# Lines after the total marker that end the payment summary block
POST_TOTAL_MARKERS = re.compile(
    r"^CHANGE\b|APPROVED|\b(?:VISA|MASTERCARD|AMEX|AMERICAN\s+EXPRESS|DISCOVER|INTERAC)\b|"
    r"\d+(?:\.\d+)?\s*%|TOTAL\s+NUMBER\s+OF\s+ITEMS|INSTANT\s+SAVINGS",
    re.IGNORECASE,
)

# "SUB TOTAL 10.00" is a subtotal, not the total
INLINE_TOTAL_PATTERNS = [
    re.compile(r"(?<!SUB)(?<!SUB )(?<!SUB-)\bTOTAL\s*:?\s*\$?\s*(\d+\.\d{2})\b", re.IGNORECASE),
    re.compile(r"\bBALANCE\s+DUE\s*:?\s*\$?\s*(\d+\.\d{2})\b", re.IGNORECASE),
]


def _extract_store_name(full_text: str, store_rules: Sequence[StoreRule] = DEFAULT_STORE_RULES) -> str:
    """Return the canonical name of the first store rule found in the text, or ""."""
    for rule in store_rules:
        if rule.pattern.search(full_text):
            return rule.name
    return ""


def _extract_address(lines: Sequence[Line]) -> StoreAddress:
    """
    Extract the store address from the receipt header.

    Strategy order (first hit wins):
    1. One line: "1901 W 22nd St, Oak Brook, IL 60523"
    2. Two lines: street line, then "Oak Brook, IL 60523"
    3. Loose "City, ST 12345" anywhere in the header (no street)
    """
    header = [line.text for line in lines[:ADDRESS_HEADER_LINES]]

    for text in header:
        match = SINGLE_LINE_ADDRESS.match(text)
        if match:
            return StoreAddress(
                location=match.group(1).strip(),
                city=match.group(2).strip(),
                state=match.group(3),
                zip_code=match.group(4),
            )

    for street_text, city_text in zip(header, header[1:]):
        street_match = STREET_LINE.match(street_text)
        if not street_match:
            continue
        city_match = CITY_STATE_ZIP_LINE.match(city_text)
        if city_match:
            return StoreAddress(
                location=street_match.group(1).strip(),
                city=city_match.group(1).strip(),
                state=city_match.group(2),
                zip_code=city_match.group(3),
            )

    for text in header:
        match = LOOSE_CITY_STATE_ZIP.search(text)
        if match:
            return StoreAddress(city=match.group(1).strip(), state=match.group(2), zip_code=match.group(3))

    return StoreAddress()


def _extract_date(full_text: str) -> date | None:
    """Extract the purchase date (returns None if unknown)."""
    for pattern in DATE_PATTERNS:
        for match in pattern.finditer(full_text):
            month, day, year = (int(group) for group in match.groups())
            if year < 100:
                year += 2000
            try:
                return date(year, month, day)
            except ValueError:
                continue
    return None


def _extract_marked_total(lines: Sequence[Line]) -> Decimal | None:
    """
    Find the total printed after the first "**** TOTAL" marker.

    Multi-column OCR can print subtotal, tax and total after the marker in
    any order; the total is the largest of them.
    """
    texts = [line.text for line in lines]
    for i, text in enumerate(texts):
        if not TOTAL_MARKER.match(text):
            continue
        candidates: list[Decimal] = []
        for following in texts[i + 1 : i + 1 + TOTAL_LOOKAHEAD_LINES]:
            if POST_TOTAL_MARKERS.search(following):
                break
            if is_standalone_amount(following):
                amount = parse_amount(following)
                if amount is not None:
                    candidates.append(amount)
        return max(candidates) if candidates else None
    return None


def _extract_total(lines: Sequence[Line], full_text: str, items: Sequence[ParsedItem]) -> Decimal:
    """
    Extract the grand total.

    Priority order:
    1. Largest standalone amount after the "**** TOTAL" marker
    2. Inline "TOTAL $NN.NN", then "BALANCE DUE $NN.NN"
    3. Sum of item totals (0 with no items)
    """
    marked_total = _extract_marked_total(lines)
    if marked_total is not None:
        logger.debug("Total %s from TOTAL marker block", marked_total)
        return marked_total

    for pattern in INLINE_TOTAL_PATTERNS:
        match = pattern.search(full_text)
        if match:
            amount = parse_amount(match.group(1))
            if amount is not None:
                logger.debug("Total %s from inline pattern", amount)
                return amount

    summed = round_cents(sum((item.total_price for item in items), Decimal("0")))
    logger.debug("Total %s summed from %d item(s)", summed, len(items))
    return max(summed, Decimal("0.00"))
