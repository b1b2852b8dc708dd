"""Heuristic parser for OCR text of store receipts."""

from receiptparse.receipt.text_parser import parse_receipt_text

__all__ = ["parse_receipt_text"]
