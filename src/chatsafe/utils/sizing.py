"""Encoded size and token statistics utilities.

This module provides functions to measure encoded strings, mostly to see how
much the back-references save on a given payload.
"""

from __future__ import annotations

from collections import Counter
from typing import Any, Optional

from ..codec.encoder import serialize
from ..codec.tokens import scan
from ..models.options import CodecOptions

TOKEN_KINDS: dict[str, str] = {
    "z": "nil",
    "t": "true",
    "f": "false",
    "n": "number",
    "d": "float",
    "s": "string",
    "~": "escaped_string",
    "S": "empty_string",
    "<": "string_ref",
    "e": "empty_table",
    "T": "table",
    "r": "table_ref",
}


def encoded_size(value: Any, options: Optional[CodecOptions] = None) -> int:
    """Calculate the length of the encoded form of a value in characters.

    Args:
        value: Value to measure
        options: Codec options, as for serialize()

    Returns:
        Number of characters, version field included

    Raises:
        EncodeError: If value cannot be serialized

    Example:
        >>> encoded_size({"a": 5})
        8  # '1:Tsa:5z'
    """
    return len(serialize(value, options))


def token_counts(text: str) -> dict[str, int]:
    """Count the tokens of an encoded string by kind.

    A ``z`` closing a table is counted as ``table_end``, any other ``z`` as
    ``nil``. Bare digits are counted as ``digit``.

    Args:
        text: Encoded string

    Returns:
        Dictionary mapping token kind names to occurrences

    Raises:
        FormatError: If text cannot be scanned

    Example:
        >>> token_counts("1:T1sb:sa:5z")
        {'table': 1, 'digit': 2, 'string': 2, 'table_end': 1}
    """
    counts: Counter[str] = Counter()
    # Each open table is a stack entry counting the values read inside it
    open_tables: list[int] = []

    for token in scan(text):
        if token.code == "z" and open_tables and open_tables[-1] % 2 == 0:
            counts["table_end"] += 1
            open_tables.pop()
            _count_value(open_tables)
            continue

        counts["digit" if token.code.isdigit() else TOKEN_KINDS[token.code]] += 1
        if token.code == "T":
            open_tables.append(0)
        else:
            _count_value(open_tables)

    return dict(counts)


def _count_value(open_tables: list[int]) -> None:
    if open_tables:
        open_tables[-1] += 1
