"""Codec options and chatsafe-specific Pydantic configuration.

This module provides the CodecOptions model accepted by serialize() and
unserialize().
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_MAX_DEPTH = 200


class CodecOptions(BaseModel):
    """Tunable limits for a single serialize/unserialize call.

    The wire format itself has no knobs: every option here only decides
    which inputs are refused, never how an accepted value is written.

    Example:
        >>> from chatsafe import CodecOptions, serialize
        >>> opts = CodecOptions(max_depth=16)
        >>> serialize({"a": {"b": 1}}, options=opts)
        '1:Tsa:Tsb:1zz'

    Attributes:
        max_depth: Deepest table nesting accepted, counting the outermost
            table as depth 1. Deeper input raises instead of exhausting
            the interpreter stack.
    """

    model_config = ConfigDict(
        strict=False,
        validate_assignment=True,
        extra="forbid",
    )

    max_depth: int = Field(default=DEFAULT_MAX_DEPTH, ge=1, le=10000)
