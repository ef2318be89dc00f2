"""Main CLI entry point for chatsafe."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from .. import __version__
from ..cli.analyze import analyze_file, analyze_text
from ..codec.decoder import unserialize
from ..codec.encoder import serialize


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the chatsafe CLI.

    Args:
        argv: Command line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    parser = argparse.ArgumentParser(
        prog="chatsafe",
        description="chatsafe: Chat-Safe Serializer",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  chatsafe --encode data.json            Encode a JSON document
  chatsafe --decode message.txt          Decode an encoded string to JSON
  chatsafe --analyze message.txt         Show token breakdown of an encoded string
  chatsafe --version                     Show version
        """,
    )

    group = parser.add_mutually_exclusive_group()
    group.add_argument(
        "--encode",
        metavar="FILE",
        type=str,
        help="Encode the JSON document in FILE ('-' for stdin)",
    )
    group.add_argument(
        "--decode",
        metavar="FILE",
        type=str,
        help="Decode the encoded string in FILE ('-' for stdin) and print it as JSON",
    )
    group.add_argument(
        "--analyze",
        metavar="FILE",
        type=str,
        help="Validate the encoded string in FILE and show token counts",
    )

    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log codec debug messages to stderr",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"chatsafe {__version__}",
    )

    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    command = next(
        (name for name in ("encode", "decode", "analyze") if getattr(args, name)), None
    )

    # If no command specified, show help
    if command is None:
        parser.print_help()
        return 0

    source = getattr(args, command)
    if source != "-" and not Path(source).exists():
        print(f"Error: File not found: {source}", file=sys.stderr)
        return 1

    try:
        if command == "analyze" and source != "-":
            analyze_file(Path(source))
        elif command == "analyze":
            analyze_text(_read_input(source).rstrip("\r\n"), source="<stdin>")
        elif command == "encode":
            print(serialize(json.loads(_read_input(source))))
        else:
            value = unserialize(_read_input(source).rstrip("\r\n"))
            print(json.dumps(value, indent=2, ensure_ascii=False))
        return 0
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


def _read_input(source: str) -> str:
    if source == "-":
        return sys.stdin.read()
    return Path(source).read_text(encoding="utf-8")


if __name__ == "__main__":
    sys.exit(main())
