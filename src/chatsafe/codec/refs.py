"""Back-reference numbering for tables and strings.

Ids are dense, start at 0 and are handed out in first-seen order. The encoder
and the decoder visit values in the same depth-first order, so both sides
issue the same id to the same table or string without ever transmitting it.
"""

from __future__ import annotations

from typing import Generic, Hashable, Optional, TypeVar

from ..exceptions import FormatError, FormatReason

T = TypeVar("T")

# Strings whose encoded form is this many bytes or shorter are never referenced
STRING_REF_MIN_LENGTH = 4


def is_referenceable(escaped: str) -> bool:
    """Return True if a string with this escaped form gets a back-reference id.

    Length is counted in UTF-8 bytes, so "ééé" (three characters, six bytes)
    qualifies. Both sides judge the escaped form, which is all the decoder sees.
    """
    return len(escaped.encode("utf-8", "surrogatepass")) > STRING_REF_MIN_LENGTH


class ReferenceTable(Generic[T]):
    """Maps identities to sequential ids (encode) and ids to objects (decode).

    One instance is used per namespace (tables, strings) per call.

    Example:
        >>> tables = ReferenceTable("table")
        >>> tables.register(id(obj), obj) is None  # first sighting
        True
        >>> tables.register(id(obj), obj)
        0
    """

    def __init__(self, kind: str) -> None:
        self.kind = kind
        self._ids: dict[Hashable, int] = {}
        self._objects: list[T] = []

    def __len__(self) -> int:
        return len(self._objects)

    def get(self, key: Hashable) -> Optional[int]:
        """Return the id previously issued for key, if any."""
        return self._ids.get(key)

    def register(self, key: Hashable, obj: T) -> Optional[int]:
        """Return the existing id for key, or issue the next one.

        Args:
            key: Identity of the object (``id()`` for tables, content for strings)
            obj: The object itself, kept alive until the call ends

        Returns:
            The existing id if key was seen before, None if it was just registered
        """
        ref = self._ids.get(key)
        if ref is not None:
            return ref
        self._ids[key] = self.add(obj)
        return None

    def add(self, obj: T) -> int:
        """Issue the next id to obj and return it."""
        self._objects.append(obj)
        return len(self._objects) - 1

    def resolve(self, ref: int) -> T:
        """Return the object holding id ref.

        Raises:
            FormatError: If ref has not been issued yet
        """
        if ref < 0 or ref >= len(self._objects):
            raise FormatError(
                f"invalid {self.kind} back-reference: {ref} (only {len(self._objects)} issued)",
                FormatReason.REFERENCE_OUT_OF_RANGE,
            )
        return self._objects[ref]

    def clear(self) -> None:
        """Forget every issued id."""
        self._ids.clear()
        self._objects.clear()
