"""Unified command-line interface for receiptparse.

Usage:
    receiptparse parse <file> [--json] [--store-rules PATH]
    receiptparse parse - < receipt.txt
    receiptparse serve [--host] [--port]
"""
