"""Test number encoding with exact float round-trip."""

import math
import struct

import pytest

from chatsafe import FormatError, FormatReason, serialize, unserialize
from chatsafe.codec.numeric import read_float, read_number, split_float, write_number
from chatsafe.codec.tokens import TokenWriter


def _bits(value: float) -> bytes:
    return struct.pack(">d", value)


def _write(value) -> str:
    writer = TokenWriter()
    write_number(writer, value)
    return writer.to_text()


class TestNumberForms:
    """Test which wire form each number takes."""

    def test_small_ints(self):
        """Integers 0-9 are bare digits."""
        assert [_write(i) for i in range(10)] == list("0123456789")

    def test_ints(self):
        """Other ints are decimal text, whatever their size."""
        assert _write(45) == "n45:"
        assert _write(-7) == "n-7:"
        assert _write(2**70) == "n1180591620717411303424:"

    def test_short_decimal_floats(self):
        """Floats with a short exact decimal form stay decimal."""
        assert _write(0.5) == "n0.5:"
        assert _write(-2.25) == "n-2.25:"
        assert _write(45.0) == "n45:"
        assert _write(1e300) == "n1e+300:"

    def test_long_floats_use_mantissa_form(self):
        """Floats needing more than 14 digits are split."""
        assert _write(1 / 3) == "d6004799503160661:-54:"
        assert _write(math.pi).startswith("d")
        assert _write(0.1 + 0.2).startswith("d")

    def test_split_float(self):
        """split_float is exact."""
        for value in (1 / 3, math.pi, -math.e, 5e-324, 1.7976931348623157e308):
            mantissa, exponent = split_float(value)
            assert abs(mantissa) < 2**53
            assert math.ldexp(mantissa, exponent) == value


class TestNumberRoundTrip:
    """Test decode(encode(x)) == x bit for bit."""

    @pytest.mark.parametrize(
        "value",
        [
            1 / 3,
            2 / 3,
            math.pi,
            -math.e,
            0.1 + 0.2,
            1e-300,
            5e-324,
            2.2250738585072014e-308,
            1.7976931348623157e308,
            -1.7976931348623157e308,
            123456789.123456789,
            12345678901234567.0,
        ],
    )
    def test_exact(self, value):
        """Floats survive the round trip unchanged."""
        decoded = unserialize(serialize(value))
        assert _bits(float(decoded)) == _bits(value)

    def test_large_int_exact(self):
        """Ints beyond double precision keep every digit."""
        value = 2**100 + 1
        assert unserialize(serialize(value)) == value


class TestNumberParsing:
    """Test parsing of numeric payloads."""

    def test_read_number(self):
        """Decimal payloads parse to int or float."""
        assert read_number("45") == 45
        assert isinstance(read_number("45"), int)
        assert read_number("-0.5") == -0.5
        assert read_number("1e+300") == 1e300
        assert read_number(".5") == 0.5

    @pytest.mark.parametrize("field", ["abc", "1_000", " 1", "inf", "nan", "1e999", "0x10", "--1"])
    def test_read_number_invalid(self, field):
        """Non-decimal payloads are rejected."""
        with pytest.raises(FormatError) as exc_info:
            read_number(field)
        assert exc_info.value.reason is FormatReason.INVALID_NUMBER

    def test_read_float(self):
        """Mantissa and exponent recombine exactly."""
        assert read_float("6004799503160661", "-54") == 1 / 3
        assert read_float("-1", "0") == -1.0

    @pytest.mark.parametrize("fields", [("1.5", "0"), ("1", "x"), ("1", "99999")])
    def test_read_float_invalid(self, fields):
        """Malformed or overflowing fields are rejected."""
        with pytest.raises(FormatError) as exc_info:
            read_float(*fields)
        assert exc_info.value.reason is FormatReason.INVALID_NUMBER
