"""chatsafe: Chat-Safe Serializer

A Python library that turns nested data into compact, printable strings safe
to send over text channels that mangle control characters and reserve ``:``
and ``|``, and turns them back again.

Key Features:
- dicts, lists, strings, ints, floats, booleans and None
- Shared and circular tables survive the round trip
- Repeated long strings are sent once and referenced afterwards
- Floats round-trip bit for bit
- No global state: every call is independent and thread-safe

Quick Start:
    >>> from chatsafe import serialize, unserialize
    >>>
    >>> data = serialize({"name": "Foo Bar", "level": 60, "tags": ["a", "b"]})
    >>> unserialize(data)
    {'name': 'Foo Bar', 'level': 60, 'tags': {1: 'a', 2: 'b'}}
"""

from __future__ import annotations

from .codec import (
    FORMAT_VERSION,
    ReferenceTable,
    Token,
    TokenReader,
    TokenWriter,
    escape,
    scan,
    serialize,
    unescape,
    unserialize,
)
from .exceptions import (
    ChatsafeError,
    DecodeError,
    EncodeError,
    FormatError,
    FormatReason,
    UnsupportedValueError,
)
from .models import CodecOptions
from .utils import encoded_size, token_counts

__version__ = "0.1.0"

__all__ = [
    # Core API
    "serialize",
    "unserialize",
    "CodecOptions",
    "FORMAT_VERSION",
    # Exceptions
    "ChatsafeError",
    "EncodeError",
    "UnsupportedValueError",
    "DecodeError",
    "FormatError",
    "FormatReason",
    # Building blocks
    "escape",
    "unescape",
    "scan",
    "Token",
    "TokenReader",
    "TokenWriter",
    "ReferenceTable",
    # Sizing
    "encoded_size",
    "token_counts",
    # Version
    "__version__",
]
