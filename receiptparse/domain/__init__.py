"""Core domain models for receiptparse.

This module provides the data models shared by the parser and its callers:
- ParsedReceiptData, ParsedItem: the structured parse result
- RawItem, PendingItem, PendingPrice, PendingDiscount: item extraction state

Usage:
    from receiptparse.domain import ParsedReceiptData, ParsedItem
"""

from receiptparse.domain.receipt import (
    Line,
    ParsedItem,
    ParsedReceiptData,
    PendingDiscount,
    PendingItem,
    PendingPrice,
    RawItem,
    StoreAddress,
    round_cents,
)

__all__ = [
    "Line",
    "ParsedItem",
    "ParsedReceiptData",
    "PendingDiscount",
    "PendingItem",
    "PendingPrice",
    "RawItem",
    "StoreAddress",
    "round_cents",
]
