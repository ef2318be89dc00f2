"""String escaping for chat-safe payloads.

Characters that would break the encoded string or the channel carrying it are
replaced by two-character sequences starting with ``~``:

- ``~`` becomes ``~~``
- ``:`` becomes ``~1``
- ``|`` becomes ``~2``
- DEL (127) becomes ``~?``
- code points 0 to 32 become ``~`` followed by chr(64 + code)
"""

from __future__ import annotations

import re

from ..exceptions import FormatError, FormatReason

ESCAPE_MARKER = "~"

_ESCAPES: dict[str, str] = {
    ESCAPE_MARKER: ESCAPE_MARKER * 2,
    ":": ESCAPE_MARKER + "1",
    "|": ESCAPE_MARKER + "2",
    "\x7f": ESCAPE_MARKER + "?",
}
_ESCAPES.update({chr(code): ESCAPE_MARKER + chr(64 + code) for code in range(33)})

_UNESCAPES: dict[str, str] = {seq: raw for raw, seq in _ESCAPES.items()}

_FORBIDDEN_RE = re.compile(r"[\x00-\x20\x7f:~|]")
_SEQUENCE_RE = re.compile(r"~.?", re.DOTALL)


def needs_escape(text: str) -> bool:
    """Return True if text contains any character that must be escaped."""
    return _FORBIDDEN_RE.search(text) is not None


def escape(text: str) -> tuple[str, int]:
    """Escape every forbidden character of text.

    Returns:
        Tuple of (escaped text, number of characters escaped)

    Example:
        >>> escape("Foo Bar !")
        ('Foo~`Bar~`!', 2)
    """
    return _FORBIDDEN_RE.subn(lambda match: _ESCAPES[match.group()], text)


def _unescape_sequence(match: re.Match[str]) -> str:
    sequence = match.group()
    try:
        return _UNESCAPES[sequence]
    except KeyError:
        raise FormatError(
            f"unknown escape sequence {sequence!r} at offset {match.start()}",
            FormatReason.INVALID_ESCAPE,
        ) from None


def unescape(text: str) -> str:
    """Reverse escape().

    Raises:
        FormatError: On an unknown sequence or a trailing lone ``~``

    Example:
        >>> unescape("a~1b")
        'a:b'
    """
    return _SEQUENCE_RE.sub(_unescape_sequence, text)
