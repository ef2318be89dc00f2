"""Pytest configuration and shared fixtures."""

from __future__ import annotations

from typing import Any

import pytest


@pytest.fixture
def shared_graph() -> dict[str, Any]:
    """Table graph with a shared table and a cycle.

    ``a = {1: 5, 2: b, 3: c, 4: c}`` and ``b = {1: 8, 2: a}``.
    """
    a: dict[Any, Any] = {1: 5}
    b: dict[Any, Any] = {1: 8, 2: a}
    c: dict[Any, Any] = {}
    a[2] = b
    a[3] = c
    a[4] = c
    return a


@pytest.fixture
def unsafe_text() -> str:
    """String made only of characters that must be escaped."""
    return "".join(chr(code) for code in range(33)) + "\x7f:~|"
