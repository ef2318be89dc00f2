"""Utility functions for chatsafe.

This module provides size calculation and token statistics.
"""

from __future__ import annotations

from .sizing import TOKEN_KINDS, encoded_size, token_counts

__all__ = [
    "encoded_size",
    "token_counts",
    "TOKEN_KINDS",
]
