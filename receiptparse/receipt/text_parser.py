"""Parse raw OCR receipt text into structured ParsedReceiptData."""

import logging
from collections.abc import Sequence

from receiptparse.domain.receipt import ParsedReceiptData

from .date_utils import placeholder_receipt_date
from .ocr_parser import (
    _extract_address,
    _extract_date,
    _extract_items,
    _extract_store_name,
    _extract_total,
    merge_duplicate_items,
    split_receipt_lines,
)
from .store_rules import DEFAULT_STORE_RULES, StoreRule

logger = logging.getLogger(__name__)


def parse_receipt_text(text: str, store_rules: Sequence[StoreRule] | None = None) -> ParsedReceiptData:
    """
    Parse OCR text of a store receipt.

    This is a best-effort, heuristic parser; it never raises for malformed
    input. Fields that cannot be found keep their defaults (empty strings,
    today's date, zero total, no items).

    Args:
        text: Text extracted from a receipt image by an OCR engine
        store_rules: Ordered retailer rules; defaults to DEFAULT_STORE_RULES

    Returns:
        ParsedReceiptData with merged items sorted by receipt order
    """
    text = text or ""
    lines = split_receipt_lines(text)
    if not lines:
        return ParsedReceiptData(
            purchase_date=placeholder_receipt_date(),
            purchase_date_is_placeholder=True,
            raw_text=text,
        )

    store_name = _extract_store_name(text, store_rules if store_rules is not None else DEFAULT_STORE_RULES)
    address = _extract_address(lines)
    purchase_date = _extract_date(text)
    date_is_placeholder = False
    if purchase_date is None:
        purchase_date = placeholder_receipt_date()
        date_is_placeholder = True

    items = merge_duplicate_items(_extract_items(lines))
    total = _extract_total(lines, text, items)

    logger.debug("Parsed receipt: store=%r items=%d total=%s", store_name, len(items), total)
    return ParsedReceiptData(
        store_name=store_name,
        store_location=address.location,
        store_city=address.city,
        store_state=address.state,
        store_zip=address.zip_code,
        purchase_date=purchase_date,
        purchase_date_is_placeholder=date_is_placeholder,
        total_amount=total,
        items=items,
        raw_text=text,
    )
