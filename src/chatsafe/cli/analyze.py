"""Encoded string analysis CLI command."""

from __future__ import annotations

from pathlib import Path

from ..codec.decoder import unserialize
from ..utils.sizing import token_counts


def analyze_file(file_path: Path) -> None:
    """Analyze an encoded string stored in a file.

    Trailing newlines are ignored, since encoded strings never contain them.

    Args:
        file_path: Path to a file holding one encoded string
    """
    text = file_path.read_text(encoding="utf-8").rstrip("\r\n")
    analyze_text(text, source=str(file_path))


def analyze_text(text: str, source: str = "<input>") -> None:
    """Validate an encoded string and print a token breakdown.

    Args:
        text: Encoded string
        source: Name shown in the header

    Raises:
        FormatError: If text is not a valid encoded string
    """
    # Full decode first so malformed input is reported, not half-counted
    unserialize(text)
    counts = token_counts(text)
    total_tokens = sum(counts.values())

    print("|" * 7, "chatsafe: Chat-Safe Serializer", "|" * 7)
    print(f"{source}: {len(text)} chars, {total_tokens} token{'s' if total_tokens != 1 else ''}")
    print()

    print(f"{'-' * 27} Tokens {'-' * 27}")
    for kind, count in sorted(counts.items(), key=lambda item: (-item[1], item[0])):
        dots = "." * max(1, 54 - len(kind) - len(str(count)))
        print(f"        {kind}{dots}{count}")
    print()

    print(f"{'=' * 24} Summary {'=' * 24}")
    tables = counts.get("table", 0) + counts.get("empty_table", 0)
    strings = counts.get("string", 0) + counts.get("escaped_string", 0)
    print(f"Tables written in full: {tables}, referenced again: {counts.get('table_ref', 0)}")
    print(f"Strings written in full: {strings}, referenced again: {counts.get('string_ref', 0)}")
    print()
