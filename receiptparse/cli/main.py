#!/usr/bin/env python3

import argparse
import logging
from collections.abc import Callable, Sequence

from receiptparse.runtime import configure_logging, set_log_level


def _coerce_exit_code(code: object) -> int:
    if code is None:
        return 0
    if isinstance(code, int):
        return code
    return 1


def _run_command(command: Callable[[argparse.Namespace], None], args: argparse.Namespace) -> int:
    """
    Normalize command handlers that call sys.exit().

    This keeps process termination centralized in this module's entrypoint.
    """
    try:
        command(args)
    except SystemExit as exc:
        return _coerce_exit_code(exc.code)
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    """Main entry point for the CLI."""
    parser = argparse.ArgumentParser(
        prog="receiptparse",
        description="Parse OCR text of store receipts",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Commands:
  parse <file> [--json]      Parse receipt text ("-" reads stdin)
  serve [--host] [--port]    Start the HTTP parse server

Notes:
  Store rules are read from $RECEIPTPARSE_CONFIG_DIR/store_rules.toml
  (default: config/store_rules.toml) unless --store-rules is given.
""",
    )

    parser.add_argument("-v", "--verbose", action="store_true", help="Log parser decisions at DEBUG level")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # parse command
    parse_parser = subparsers.add_parser("parse", help="Parse OCR receipt text")
    parse_parser.add_argument("file", help='Path to a text file with OCR output, or "-" for stdin')
    parse_parser.add_argument("--json", action="store_true", help="Print the parsed receipt as JSON")
    parse_parser.add_argument(
        "--store-rules",
        default=None,
        help="Path to a store_rules.toml file (default: project config)",
    )

    # serve command
    serve_parser = subparsers.add_parser("serve", help="Start the HTTP parse server")
    serve_parser.add_argument("--host", default="127.0.0.1", help="Host to bind to (default: 127.0.0.1)")
    serve_parser.add_argument("--port", type=int, default=8080, help="Port to bind to (default: 8080)")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    configure_logging()
    if args.verbose:
        set_log_level(logging.DEBUG)

    if args.command == "parse":
        from receiptparse.cli.receipt import cmd_parse

        return _run_command(cmd_parse, args)
    elif args.command == "serve":
        from receiptparse.cli.receipt import cmd_serve

        return _run_command(cmd_serve, args)

    return 1


def run() -> None:
    """Console script entry point."""
    raise SystemExit(main())


if __name__ == "__main__":
    run()
