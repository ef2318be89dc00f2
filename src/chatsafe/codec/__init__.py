"""Chat-safe text codec for chatsafe.

This module provides serialization and unserialization of nested values to
printable strings that avoid control characters, ``:`` and ``|``.
"""

from __future__ import annotations

from .decoder import unserialize
from .encoder import serialize
from .escape import escape, unescape
from .refs import ReferenceTable
from .tokens import FORMAT_VERSION, Token, TokenReader, TokenWriter, scan

__all__ = [
    "serialize",
    "unserialize",
    "escape",
    "unescape",
    "scan",
    "Token",
    "TokenReader",
    "TokenWriter",
    "ReferenceTable",
    "FORMAT_VERSION",
]
