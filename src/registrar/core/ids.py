"""Identity allocation.

Each entity kind draws from its own strictly increasing counter. The
starting offsets (1001 / 5001 / 7001 by default) only make IDs easy to tell
apart in listings; uniqueness comes from never reusing a value.
"""

from __future__ import annotations

from enum import Enum

DEFAULT_OFFSETS: dict[str, int] = {
    "student": 1001,
    "course": 5001,
    "enrollment": 7001,
}


class IdKind(str, Enum):
    """Entity kinds that receive allocated IDs."""

    STUDENT = "student"
    COURSE = "course"
    ENROLLMENT = "enrollment"


class IdentityAllocator:
    """Hands out monotonically increasing IDs per entity kind."""

    def __init__(self, offsets: dict[str, int] | None = None):
        merged = {**DEFAULT_OFFSETS, **(offsets or {})}
        self._next: dict[IdKind, int] = {kind: merged[kind.value] for kind in IdKind}

    def next_id(self, kind: IdKind) -> int:
        """Consume and return the next ID for ``kind``."""
        value = self._next[kind]
        self._next[kind] = value + 1
        return value

    def peek(self, kind: IdKind) -> int:
        """Return the ID that the next ``next_id(kind)`` call will produce."""
        return self._next[kind]
