"""Chat-safe text encoder.

This module provides the serialize() function that converts a tree (or graph)
of dicts, lists, strings, numbers, booleans and None into a printable string
free of control characters, ``:`` and ``|``.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, Optional, Union

from ..exceptions import EncodeError, UnsupportedValueError
from ..models.options import CodecOptions
from .escape import escape, needs_escape
from .numeric import write_number
from .refs import ReferenceTable, is_referenceable
from .tokens import (
    EMPTY_STRING,
    EMPTY_TABLE,
    ESCAPED_STRING,
    FALSE,
    NIL,
    STRING,
    STRING_REF,
    TABLE,
    TABLE_END,
    TABLE_REF,
    TRUE,
    TokenWriter,
)

logger = logging.getLogger(__name__)

Table = Union[dict, list, tuple]

_KEY_TYPES = (bool, int, float, str)


class _EncodeContext:
    """State owned by a single serialize() call."""

    def __init__(self, options: CodecOptions) -> None:
        self.writer = TokenWriter()
        self.tables: ReferenceTable[Table] = ReferenceTable("table")
        self.strings: ReferenceTable[str] = ReferenceTable("string")
        self.max_depth = options.max_depth
        self.depth = 0

    def release(self) -> None:
        self.tables.clear()
        self.strings.clear()


def serialize(value: Any, options: Optional[CodecOptions] = None) -> str:
    """Encode a value to a chat-safe string.

    Tables (dicts, and lists/tuples which are written with keys 1..n) that are
    reachable more than once are written once and referenced afterwards, so
    shared and circular structures survive the round trip. Repeated strings
    longer than four encoded bytes are referenced the same way.

    Args:
        value: None, bool, int, finite float, str, dict, list or tuple,
            nested arbitrarily
        options: Limits for this call (defaults to CodecOptions())

    Returns:
        Encoded string, starting with the format version

    Raises:
        UnsupportedValueError: If a function, object, non-finite float or
            invalid table key is reachable from value
        EncodeError: If value is nested deeper than options.max_depth

    Examples:
        ```python
        from chatsafe import serialize

        serialize(45)            # '1:n45:'
        serialize("FooBar")      # '1:sFooBar:'
        serialize({1: "b", "a": 5})  # '1:T1sb:sa:5z'

        node = {"name": "root"}
        node["self"] = node
        serialize(node)          # '1:Tsname:sroot:sself:r0:z'
        ```
    """
    context = _EncodeContext(options or CodecOptions())
    context.writer.write_version()
    try:
        _write_value(context, value)
        encoded = context.writer.to_text()
        logger.debug(
            f"serialized {type(value).__name__} into {len(encoded)} chars "
            f"({len(context.tables)} tables, {len(context.strings)} referenceable strings)"
        )
    except EncodeError as e:
        logger.debug(f"serialize failed: {e}")
        raise type(e)(f"serialize: {e}") from e
    except RecursionError as e:
        logger.debug("serialize hit the interpreter recursion limit")
        raise EncodeError("serialize: value nested too deeply for the interpreter stack") from e
    finally:
        context.release()
    return encoded


def _write_value(context: _EncodeContext, value: Any) -> None:
    """Write a single value.

    Args:
        context: Call context to write to
        value: Value to write

    Raises:
        EncodeError: If value or anything inside it cannot be written
    """
    writer = context.writer

    # Constants
    if value is None:
        writer.write_code(NIL)
        return
    if value is True:
        writer.write_code(TRUE)
        return
    if value is False:
        writer.write_code(FALSE)
        return

    if isinstance(value, str):
        _write_string(context, value)
        return

    if isinstance(value, (int, float)):
        write_number(writer, value)
        return

    if isinstance(value, (dict, list, tuple)):
        _write_table(context, value)
        return

    raise UnsupportedValueError(f"cannot serialize {type(value).__name__}")


def _write_string(context: _EncodeContext, value: str) -> None:
    writer = context.writer
    if value == "":
        writer.write_code(EMPTY_STRING)
        return

    ref = context.strings.get(value)
    if ref is not None:
        writer.write_field(STRING_REF, str(ref))
        return

    if needs_escape(value):
        escaped, _ = escape(value)
        writer.write_field(ESCAPED_STRING, escaped)
    else:
        escaped = value
        writer.write_field(STRING, escaped)

    if is_referenceable(escaped):
        context.strings.register(value, value)


def _write_table(context: _EncodeContext, table: Table) -> None:
    writer = context.writer

    # Claim the id before visiting children so cycles point back here
    ref = context.tables.register(id(table), table)
    if ref is not None:
        writer.write_field(TABLE_REF, str(ref))
        return

    if not table:
        writer.write_code(EMPTY_TABLE)
        return

    context.depth += 1
    if context.depth > context.max_depth:
        raise EncodeError(f"nesting too deep (max_depth={context.max_depth})")

    writer.write_code(TABLE)
    for key, item in _table_entries(table):
        _check_key(key)
        _write_value(context, key)
        _write_value(context, item)
    writer.write_code(TABLE_END)

    context.depth -= 1


def _table_entries(table: Table) -> Iterable[tuple[Any, Any]]:
    if isinstance(table, dict):
        return table.items()
    return enumerate(table, start=1)


def _check_key(key: Any) -> None:
    if key is None:
        raise UnsupportedValueError("cannot serialize None as a table key")
    if not isinstance(key, _KEY_TYPES):
        raise UnsupportedValueError(f"cannot serialize {type(key).__name__} as a table key")
