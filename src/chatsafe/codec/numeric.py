"""Number encoding and decoding.

Numbers take one of three forms on the wire:

- ``0`` to ``9``: integers 0-9 as a bare digit, no code and no terminator
- ``n<decimal>:``: anything whose 14-significant-digit decimal text parses
  back to the same value, plus every int
- ``d<mantissa>:<exponent>:``: the remaining floats, split with frexp() into
  a 53-bit integer mantissa and a binary exponent, so they round-trip
  bit for bit
"""

from __future__ import annotations

import math
import re
from typing import Union

from ..exceptions import FormatError, FormatReason, UnsupportedValueError
from .tokens import DIGITS, FLOAT, NUMBER, TokenWriter, parse_int

Number = Union[int, float]

MANTISSA_BITS = 53

# Precision of the decimal form, matching the channel's host formatter
DECIMAL_FORMAT = ".14g"

_INT_RE = re.compile(r"[-+]?[0-9]+")
_DECIMAL_RE = re.compile(r"[-+]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][-+]?[0-9]+)?")


_SMALL_INTS = frozenset(range(len(DIGITS)))


def is_small_int(value: Number) -> bool:
    """Return True if value is written as a bare digit."""
    return value in _SMALL_INTS


def split_float(value: float) -> tuple[int, int]:
    """Split a finite float into an integer mantissa and a binary exponent.

    ``value == mantissa * 2 ** exponent`` holds exactly.

    Example:
        >>> split_float(1 / 3)
        (6004799503160661, -54)
    """
    mantissa, exponent = math.frexp(value)
    return int(round(mantissa * 2**MANTISSA_BITS)), exponent - MANTISSA_BITS


def write_number(writer: TokenWriter, value: Number) -> None:
    """Write an int or float in its shortest exact form.

    Args:
        writer: TokenWriter to append to
        value: Number to write

    Raises:
        UnsupportedValueError: If value is inf or nan
    """
    if isinstance(value, float) and not math.isfinite(value):
        raise UnsupportedValueError(f"cannot serialize non-finite number {value!r}")

    if is_small_int(value):
        writer.write_code(DIGITS[int(value)])
        return

    if isinstance(value, int):
        try:
            text = str(int(value))
        except ValueError as e:
            # Beyond sys.get_int_max_str_digits()
            raise UnsupportedValueError(f"cannot serialize int: {e}") from e
        writer.write_field(NUMBER, text)
        return

    value = float(value)
    text = format(value, DECIMAL_FORMAT)
    if float(text) == value:
        writer.write_field(NUMBER, text)
        return

    mantissa, exponent = split_float(value)
    writer.write_fields(FLOAT, str(mantissa), str(exponent))


def read_number(field: str) -> Number:
    """Parse the payload of an ``n`` token.

    Integer-looking payloads give an int, the rest a float.

    Raises:
        FormatError: If field is not a finite decimal number
    """
    if _INT_RE.fullmatch(field):
        return parse_int(field)
    if _DECIMAL_RE.fullmatch(field):
        value = float(field)
        if math.isfinite(value):
            return value
    raise FormatError(f"invalid number {field!r}", FormatReason.INVALID_NUMBER)


def read_float(mantissa_field: str, exponent_field: str) -> float:
    """Recombine the two payload fields of a ``d`` token.

    Raises:
        FormatError: If either field is not an integer or the value overflows
    """
    if not (_INT_RE.fullmatch(mantissa_field) and _INT_RE.fullmatch(exponent_field)):
        raise FormatError(
            f"invalid float fields {mantissa_field!r}, {exponent_field!r}",
            FormatReason.INVALID_NUMBER,
        )
    try:
        return math.ldexp(parse_int(mantissa_field), parse_int(exponent_field))
    except OverflowError as e:
        raise FormatError(
            f"float out of range: {mantissa_field}:{exponent_field}", FormatReason.INVALID_NUMBER
        ) from e
