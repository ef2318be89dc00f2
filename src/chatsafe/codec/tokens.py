"""Token-level writing and reading utilities.

This module provides the low-level output buffer and input cursor used by the
encoder and decoder, plus a lexical scanner over encoded strings. A token is a
one-character type code, optionally followed by one or two ``:``-terminated
payload fields.
"""

from __future__ import annotations

import re
from typing import Iterator, NamedTuple

from ..exceptions import FormatError, FormatReason

FORMAT_VERSION = 1

TERMINATOR = ":"

# Type codes
NIL = "z"
TRUE = "t"
FALSE = "f"
EMPTY_STRING = "S"
NUMBER = "n"
FLOAT = "d"
STRING = "s"
ESCAPED_STRING = "~"
STRING_REF = "<"
EMPTY_TABLE = "e"
TABLE = "T"
TABLE_REF = "r"
TABLE_END = NIL  # nil can never be a key

DIGITS = "0123456789"

# Number of payload fields following each code
PAYLOAD_FIELDS: dict[str, int] = {
    NIL: 0,
    TRUE: 0,
    FALSE: 0,
    EMPTY_STRING: 0,
    EMPTY_TABLE: 0,
    TABLE: 0,
    NUMBER: 1,
    STRING: 1,
    ESCAPED_STRING: 1,
    STRING_REF: 1,
    TABLE_REF: 1,
    FLOAT: 2,
    **{digit: 0 for digit in DIGITS},
}

_INT_RE = re.compile(r"[-+]?[0-9]+")


def parse_int(field: str) -> int:
    """Convert a decimal field to int.

    Raises:
        FormatError: If the field is not a decimal integer or has too many digits
    """
    try:
        return int(field)
    except ValueError as e:
        raise FormatError(f"invalid integer: {e}", FormatReason.INVALID_NUMBER) from e


class TokenWriter:
    """Appends tokens to an in-memory text buffer.

    Example:
        >>> writer = TokenWriter()
        >>> writer.write_version()
        >>> writer.write_code(TABLE)
        >>> writer.write_field(STRING, "key")
        >>> writer.write_code("5")
        >>> writer.write_code(TABLE_END)
        >>> writer.to_text()
        '1:Tskey:5z'
    """

    def __init__(self) -> None:
        """Initialize an empty token writer."""
        self._parts: list[str] = []

    def write_version(self, version: int = FORMAT_VERSION) -> None:
        """Write the format version field.

        The version is always terminated, so it can never be confused with
        a single-digit value token.
        """
        self._append(f"{version}{TERMINATOR}")

    def write_code(self, code: str) -> None:
        """Write a payload-less token.

        Args:
            code: Single-character type code
        """
        self._append(code)

    def write_field(self, code: str, payload: str) -> None:
        """Write a type code followed by one terminated payload field.

        Args:
            code: Single-character type code
            payload: Field text, which must not contain the terminator
        """
        self._append(f"{code}{payload}{TERMINATOR}")

    def write_fields(self, code: str, first: str, second: str) -> None:
        """Write a type code followed by two terminated payload fields."""
        self._append(f"{code}{first}{TERMINATOR}{second}{TERMINATOR}")

    def _append(self, text: str) -> None:
        self._parts.append(text)

    def to_text(self) -> str:
        """Join the buffer into the encoded string."""
        return "".join(self._parts)


class TokenReader:
    """Consumes tokens from an encoded string, left to right.

    Example:
        >>> reader = TokenReader("1:n45:")
        >>> reader.read_version()
        1
        >>> reader.read_code()
        'n'
        >>> reader.read_field()
        '45'
        >>> reader.at_end()
        True
    """

    def __init__(self, text: str) -> None:
        """Initialize a token reader over the given text.

        Args:
            text: Encoded string to read

        Raises:
            FormatError: If text is empty
        """
        if not text:
            raise FormatError("empty input", FormatReason.EMPTY_INPUT)
        self._text = text
        self._position = 0

    def read_version(self) -> int:
        """Read and check the format version field.

        Returns:
            The version number

        Raises:
            FormatError: If the field is unterminated or not the supported version
        """
        field = self.read_field()
        # Only the canonical spelling is accepted, not "01" or "+1"
        if field != str(FORMAT_VERSION):
            raise FormatError(f"unknown format version: {field!r}", FormatReason.UNKNOWN_VERSION)
        return FORMAT_VERSION

    def read_code(self) -> str:
        """Read a single type code.

        Raises:
            FormatError: If no more characters are available
        """
        if self._position >= len(self._text):
            raise FormatError("unterminated serialized data", FormatReason.UNTERMINATED)
        code = self._text[self._position]
        self._position += 1
        return code

    def read_field(self) -> str:
        """Read a terminated payload field, consuming the terminator.

        Raises:
            FormatError: If the terminator is missing or the field is empty
        """
        end = self._text.find(TERMINATOR, self._position)
        if end < 0:
            raise FormatError("unterminated serialized data", FormatReason.UNTERMINATED)
        if end == self._position:
            raise FormatError(
                f"empty field at position {self._position}", FormatReason.UNTERMINATED
            )
        field = self._text[self._position : end]
        self._position = end + 1
        return field

    def read_int_field(self) -> int:
        """Read a terminated field holding a decimal integer.

        Raises:
            FormatError: If the field is unterminated or not an integer
        """
        start = self._position
        field = self.read_field()
        if not _INT_RE.fullmatch(field):
            raise FormatError(
                f"invalid integer {field!r} at position {start}", FormatReason.INVALID_NUMBER
            )
        return parse_int(field)

    def position(self) -> int:
        """Return the current read position in characters."""
        return self._position

    def at_end(self) -> bool:
        """Return True once every character has been consumed."""
        return self._position >= len(self._text)


class Token(NamedTuple):
    """A lexical token of an encoded string."""

    code: str
    fields: tuple[str, ...]
    position: int


def scan(text: str) -> Iterator[Token]:
    """Walk the tokens of an encoded string without building values.

    The version field is checked and skipped. Structure (key/value pairing,
    back-reference bounds, escapes) is not validated; use unserialize() for that.

    Args:
        text: Encoded string

    Yields:
        Tokens in stream order

    Raises:
        FormatError: On empty input, unknown version, unknown code, or a
            missing terminator

    Example:
        >>> [token.code for token in scan("1:T1sb:sa:5z")]
        ['T', '1', 's', 's', '5', 'z']
    """
    if not isinstance(text, str):
        raise FormatError(
            f"expected str, got {type(text).__name__}", FormatReason.WRONG_INPUT_TYPE
        )
    reader = TokenReader(text)
    reader.read_version()
    while not reader.at_end():
        position = reader.position()
        code = reader.read_code()
        count = PAYLOAD_FIELDS.get(code)
        if count is None:
            raise FormatError(
                f"unknown code {code!r} at position {position}", FormatReason.UNKNOWN_TAG
            )
        fields = tuple(reader.read_field() for _ in range(count))
        yield Token(code, fields, position)
