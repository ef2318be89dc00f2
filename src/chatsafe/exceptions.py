"""Exception hierarchy for chatsafe.

This module defines all custom exceptions used throughout the package.
All exceptions inherit from ChatsafeError for easy catching of any chatsafe-specific error.
"""

from __future__ import annotations

import enum


class FormatReason(str, enum.Enum):
    """Why an encoded string was rejected by the decoder."""

    EMPTY_INPUT = "empty input"
    WRONG_INPUT_TYPE = "wrong input type"
    UNKNOWN_VERSION = "unknown format version"
    UNKNOWN_TAG = "unknown code"
    UNTERMINATED = "unterminated serialized data"
    REFERENCE_OUT_OF_RANGE = "back-reference out of bound"
    TRAILING_GARBAGE = "garbage after value"
    INVALID_NUMBER = "invalid number"
    INVALID_ESCAPE = "unknown escape sequence"
    INVALID_KEY = "invalid table key"
    TOO_DEEP = "nesting too deep"


class ChatsafeError(Exception):
    """Base exception for all chatsafe errors."""

    pass


class EncodeError(ChatsafeError):
    """Raised when serializing a value fails.

    Examples:
        - Structure nested deeper than the configured max_depth
        - Interpreter recursion limit hit while walking the value
    """

    pass


class UnsupportedValueError(EncodeError):
    """Raised when a value of an unsupported kind is reachable from the input.

    Examples:
        - Functions, generators, modules, open files
        - Non-finite floats (inf, nan)
        - None or a table used as a table key
    """

    pass


class DecodeError(ChatsafeError):
    """Raised when unserializing a string fails."""

    pass


class FormatError(DecodeError):
    """Raised when an encoded string is malformed.

    The ``reason`` attribute tells which rule was violated.

    Examples:
        - Empty input, or input that is not a string
        - Unknown format version or type code
        - Field missing its ``:`` terminator
        - Table or string back-reference beyond the ids issued so far
        - Bytes left over after a complete value
    """

    def __init__(self, message: str, reason: FormatReason = FormatReason.UNKNOWN_TAG) -> None:
        super().__init__(message)
        self.reason = reason
