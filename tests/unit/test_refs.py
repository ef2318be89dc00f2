"""Unit tests for back-reference numbering."""

from __future__ import annotations

import pytest

from chatsafe import FormatError, FormatReason, ReferenceTable
from chatsafe.codec.refs import is_referenceable


class TestReferenceTable:
    """Test id assignment and lookup."""

    def test_register_first_seen_order(self) -> None:
        """Test ids are dense and issued in first-seen order."""
        table: ReferenceTable[str] = ReferenceTable("string")
        assert table.register("alpha", "alpha") is None
        assert table.register("beta", "beta") is None
        assert table.register("alpha", "alpha") == 0
        assert table.register("beta", "beta") == 1
        assert len(table) == 2

    def test_get(self) -> None:
        """Test lookup without registering."""
        table: ReferenceTable[str] = ReferenceTable("string")
        assert table.get("alpha") is None
        table.register("alpha", "alpha")
        assert table.get("alpha") == 0
        assert len(table) == 1

    def test_identity_keys(self) -> None:
        """Test equal but distinct tables get distinct ids."""
        first: dict = {}
        second: dict = {}
        table: ReferenceTable[dict] = ReferenceTable("table")
        assert table.register(id(first), first) is None
        assert table.register(id(second), second) is None
        assert table.register(id(first), first) == 0

    def test_add_and_resolve(self) -> None:
        """Test the decode side returns the same objects."""
        first: dict = {}
        table: ReferenceTable[dict] = ReferenceTable("table")
        assert table.add(first) == 0
        assert table.add({}) == 1
        assert table.resolve(0) is first

    @pytest.mark.parametrize("ref", [-1, 2, 100])
    def test_resolve_out_of_range(self, ref: int) -> None:
        """Test ids not issued yet are rejected."""
        table: ReferenceTable[str] = ReferenceTable("string")
        table.add("aaaaa")
        table.add("bbbbb")
        with pytest.raises(FormatError, match="invalid string back-reference") as exc_info:
            table.resolve(ref)
        assert exc_info.value.reason is FormatReason.REFERENCE_OUT_OF_RANGE

    def test_clear(self) -> None:
        """Test clearing restarts numbering."""
        table: ReferenceTable[str] = ReferenceTable("string")
        table.register("alpha", "alpha")
        table.clear()
        assert len(table) == 0
        assert table.register("beta", "beta") is None
        assert table.get("beta") == 0


class TestStringEligibility:
    """Test which strings get a back-reference id."""

    @pytest.mark.parametrize(
        "escaped,expected",
        [
            ("abcd", False),
            ("abcde", True),
            ("ab~1c", True),
            ("éé", False),  # 4 bytes
            ("ééé", True),  # 3 characters, 6 bytes
            ("\U0001f600", False),  # 4 bytes
            ("a\U0001f600", True),
        ],
    )
    def test_counts_utf8_bytes(self, escaped: str, expected: bool) -> None:
        """Test eligibility is decided on the UTF-8 byte length."""
        assert is_referenceable(escaped) is expected

    def test_lone_surrogate(self) -> None:
        """Test a lone surrogate is measured instead of raising."""
        assert is_referenceable("a\ud800b")
