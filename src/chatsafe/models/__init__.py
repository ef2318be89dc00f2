"""Pydantic models for chatsafe configuration."""

from __future__ import annotations

from .options import DEFAULT_MAX_DEPTH, CodecOptions

__all__ = [
    "CodecOptions",
    "DEFAULT_MAX_DEPTH",
]
