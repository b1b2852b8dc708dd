"""Receipt command handlers used by the unified CLI."""

import argparse
import json
import sys
from pathlib import Path

from receiptparse.receipt.formatter import format_parsed_receipt
from receiptparse.receipt.store_rules import StoreRulesError
from receiptparse.receipt.text_parser import parse_receipt_text
from receiptparse.runtime import get_logger, load_store_rules

logger = get_logger(__name__)


def _read_receipt_text(source: str) -> str:
    """Read receipt text from a file path, or stdin when source is "-"."""
    if source == "-":
        return sys.stdin.read()
    return Path(source).read_text(encoding="utf-8", errors="replace")


def cmd_parse(args: argparse.Namespace) -> None:
    """Parse an OCR text file and print a review summary or JSON."""
    if args.file != "-" and not Path(args.file).is_file():
        logger.error("Receipt text file not found: %s", args.file)
        print(f"Error: file not found: {args.file}")
        sys.exit(1)

    try:
        store_rules = load_store_rules(args.store_rules)
    except StoreRulesError as exc:
        print(f"Error: invalid store rules: {exc}")
        sys.exit(1)

    receipt = parse_receipt_text(_read_receipt_text(args.file), store_rules=store_rules)

    if args.json:
        print(json.dumps(receipt.to_dict(), indent=2))
    else:
        print(format_parsed_receipt(receipt), end="")


def cmd_serve(args: argparse.Namespace) -> None:
    """Start the FastAPI server for parsing receipt text."""
    import uvicorn

    from receiptparse.runtime import receipt_server as server

    print(f"Starting receipt parser on {args.host}:{args.port}")
    print(f"Parse endpoint: http://{args.host}:{args.port}/parse")
    print("Press Ctrl+C to stop")

    uvicorn.run(server.app, host=args.host, port=args.port)
