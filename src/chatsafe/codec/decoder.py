"""Chat-safe text decoder.

This module provides the unserialize() function that converts a string
produced by serialize() back into dicts, strings, numbers, booleans and None,
restoring shared and circular tables.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from ..exceptions import FormatError, FormatReason
from ..models.options import CodecOptions
from .escape import unescape
from .numeric import read_float, read_number
from .refs import ReferenceTable, is_referenceable
from .tokens import (
    DIGITS,
    EMPTY_STRING,
    EMPTY_TABLE,
    ESCAPED_STRING,
    FALSE,
    FLOAT,
    NIL,
    NUMBER,
    STRING,
    STRING_REF,
    TABLE,
    TABLE_REF,
    TRUE,
    TokenReader,
)

logger = logging.getLogger(__name__)

_CONSTANTS: dict[str, Any] = {
    NIL: None,
    TRUE: True,
    FALSE: False,
    EMPTY_STRING: "",
    **{digit: int(digit) for digit in DIGITS},
}


class _DecodeContext:
    """State owned by a single unserialize() call."""

    def __init__(self, text: str, options: CodecOptions) -> None:
        self.reader = TokenReader(text)
        self.tables: ReferenceTable[dict] = ReferenceTable("table")
        self.strings: ReferenceTable[str] = ReferenceTable("string")
        self.max_depth = options.max_depth
        self.depth = 0

    def release(self) -> None:
        self.tables.clear()
        self.strings.clear()


def unserialize(text: str, options: Optional[CodecOptions] = None) -> Any:
    """Decode a string produced by serialize().

    Tables always come back as dicts; a table reached through several paths
    in the encoded data is the same dict object at each of them.

    Args:
        text: Encoded string
        options: Limits for this call (defaults to CodecOptions())

    Returns:
        The decoded value

    Raises:
        FormatError: If text is not a str, is empty, has an unknown version
            or code, is truncated, holds an out-of-range back-reference, has
            bytes after the value, or nests deeper than options.max_depth

    Examples:
        ```python
        from chatsafe import unserialize

        unserialize("1:n45:")         # 45
        unserialize("1:T1sb:sa:5z")   # {1: 'b', 'a': 5}

        node = unserialize("1:Tsself:r0:z")
        assert node["self"] is node
        ```
    """
    try:
        value = _unserialize(text, options or CodecOptions())
    except FormatError as e:
        logger.debug(f"unserialize failed: {e}")
        raise FormatError(f"unserialize: {e}", e.reason) from e
    except RecursionError as e:
        logger.debug("unserialize hit the interpreter recursion limit")
        raise FormatError(
            "unserialize: data nested too deeply for the interpreter stack",
            FormatReason.TOO_DEEP,
        ) from e
    return value


def _unserialize(text: str, options: CodecOptions) -> Any:
    if not isinstance(text, str):
        raise FormatError(
            f"expected str, got {type(text).__name__}", FormatReason.WRONG_INPUT_TYPE
        )

    context = _DecodeContext(text, options)
    try:
        reader = context.reader
        reader.read_version()
        value = _read_value(context)
        if not reader.at_end():
            raise FormatError(
                f"garbage at position {reader.position()}", FormatReason.TRAILING_GARBAGE
            )
        logger.debug(
            f"unserialized {len(text)} chars into {type(value).__name__} "
            f"({len(context.tables)} tables, {len(context.strings)} referenceable strings)"
        )
    finally:
        context.release()
    return value


def _read_value(context: _DecodeContext) -> Any:
    """Read a single value.

    Args:
        context: Call context to read from

    Returns:
        Decoded value

    Raises:
        FormatError: If the data at the cursor is invalid or truncated
    """
    reader = context.reader
    position = reader.position()
    code = reader.read_code()

    if code in _CONSTANTS:
        return _CONSTANTS[code]

    if code == EMPTY_TABLE:
        table: dict = {}
        context.tables.add(table)
        return table

    if code == TABLE:
        return _read_table(context)

    if code == TABLE_REF:
        return context.tables.resolve(reader.read_int_field())

    if code == STRING or code == ESCAPED_STRING:
        field = reader.read_field()
        value = unescape(field) if code == ESCAPED_STRING else field
        if is_referenceable(field):
            context.strings.add(value)
        return value

    if code == STRING_REF:
        return context.strings.resolve(reader.read_int_field())

    if code == NUMBER:
        return read_number(reader.read_field())

    if code == FLOAT:
        mantissa = reader.read_field()
        exponent = reader.read_field()
        return read_float(mantissa, exponent)

    raise FormatError(f"unknown code {code!r} at position {position}", FormatReason.UNKNOWN_TAG)


def _read_table(context: _DecodeContext) -> dict:
    # Register before reading entries so references to this table inside it resolve
    table: dict = {}
    context.tables.add(table)

    context.depth += 1
    if context.depth > context.max_depth:
        raise FormatError(
            f"nesting too deep (max_depth={context.max_depth})", FormatReason.TOO_DEEP
        )

    while True:
        position = context.reader.position()
        key = _read_value(context)
        if key is None:
            break
        if isinstance(key, dict):
            raise FormatError(f"table used as key at position {position}", FormatReason.INVALID_KEY)
        table[key] = _read_value(context)

    context.depth -= 1
    return table
