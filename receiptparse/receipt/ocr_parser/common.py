"""Shared constants and helpers for OCR receipt parsing."""

import re
from decimal import Decimal, InvalidOperation

from receiptparse.domain.receipt import Line

# Accepted price range: MIN_PRICE <= price < MAX_PRICE
MIN_PRICE = Decimal("0.01")
MAX_PRICE = Decimal("10000")

# Names shorter than this after cleaning are not items
MIN_NAME_LENGTH = 2

# Item numbers: 4-7 digits. A leading "$" or "S" is an OCR misread of "8".
# Some warehouse codes carry one trailing letter (e.g. "10251B").
ITEM_NUMBER_PATTERN = r"(?:[$S]\d{3,6}|\d{4,7})[A-Z]?"

# Single-letter tax codes printed after prices ("11.99 A", "12.59 E")
TAX_CODE_PATTERN = r"[A-Z]"

STREET_SUFFIXES = (
    "Street|St|Road|Rd|Avenue|Ave|Boulevard|Blvd|Drive|Dr|Lane|Ln|Highway|Hwy|Parkway|Pkwy|Trail|Way|Plaza|Court|Ct"
)
# "1901 West 22nd Street", "505 West Army Trail Road"
STREET_LINE_PATTERN = r"^\d{1,6}\s+[A-Za-z0-9 .'-]*\b(?:" + STREET_SUFFIXES + r")\.?$"

STANDALONE_AMOUNT = re.compile(r"^\d+\.\d{2}$")


def split_receipt_lines(text: str) -> list[Line]:
    """Split OCR text into trimmed, non-empty lines numbered in receipt order."""
    if not text:
        return []
    stripped = (raw.strip() for raw in text.split("\n"))
    return [Line(text=line, order=i) for i, line in enumerate(line for line in stripped if line)]


def parse_amount(token: str) -> Decimal | None:
    """Parse a decimal amount token; None if it does not parse."""
    try:
        amount = Decimal(token)
    except InvalidOperation:
        return None
    if not amount.is_finite():
        return None
    return amount


def parse_price(token: str) -> Decimal | None:
    """Parse a price token and enforce MIN_PRICE <= price < MAX_PRICE."""
    price = parse_amount(token)
    if price is None or not (MIN_PRICE <= price < MAX_PRICE):
        return None
    return price


def parse_discount(token: str) -> Decimal | None:
    """
    Parse a discount token such as "8.00" or "800".

    OCR often drops the decimal point from discount lines ("800-A" for
    "8.00-A"), so a token without a point is read as cents.
    """
    amount = parse_amount(token)
    if amount is None:
        return None
    if "." not in token:
        amount = amount / 100
    if not (MIN_PRICE <= amount < MAX_PRICE):
        return None
    return amount


def normalize_item_number(raw: str) -> str:
    """Undo the "$"/"S" for "8" OCR confusion in a leading item-number digit."""
    if raw[:1] in ("$", "S"):
        return "8" + raw[1:]
    return raw


def clean_item_name(name: str) -> str:
    """Clean up an item name from OCR artifacts."""
    # Leftover item-number digits glued to the name
    name = re.sub(r"^\d{5,7}\s*", "", name.strip())
    name = re.sub(r"\s+", " ", name)
    # Stray tax-code letter in front of the name ("E PEDIASURE")
    name = re.sub(r"^[A-Z]\s+", "", name)
    return name.strip()


def is_standalone_amount(text: str) -> bool:
    """Return True if the whole line is exactly one NN.NN amount."""
    return STANDALONE_AMOUNT.match(text) is not None
