"""Composable OCR receipt text parser components."""

from .common import split_receipt_lines
from .fields_parser import (
    _extract_address,
    _extract_date,
    _extract_store_name,
    _extract_total,
)
from .item_merge import merge_duplicate_items, merge_key
from .items_text_parser import ItemExtractor, _extract_items
from .line_classifier import ClassifiedLine, LineKind, classify_line

__all__ = [
    "ClassifiedLine",
    "ItemExtractor",
    "LineKind",
    "_extract_address",
    "_extract_date",
    "_extract_items",
    "_extract_store_name",
    "_extract_total",
    "classify_line",
    "merge_duplicate_items",
    "merge_key",
    "split_receipt_lines",
]
