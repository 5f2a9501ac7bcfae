"""
Per-edge route cache.

Every directed edge u -> v owns one RouteSlot. A slot maps a destination
identifier to the remainder of a verified shortest path: the nodes strictly
after v, ending at the destination. An empty suffix means v is the
destination. A missing entry means "unknown", never "unreachable".
"""

from __future__ import annotations

import threading
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class CacheEntry:
    """
    One memoized route hint.

    Attributes:
        suffix: Nodes after the edge's far end, through the destination
        generation: Web topology generation the hint was written at
    """

    suffix: tuple[int, ...]
    generation: int


class RouteSlot:
    """
    Route hints stored on a single directed edge, keyed by destination.

    Each slot carries its own lock so concurrent queries serialize per edge
    rather than on the whole web. Entries are immutable, so a reader never
    observes a half-written suffix.
    """

    __slots__ = ("_entries", "_lock")

    def __init__(self) -> None:
        self._entries: dict[int, CacheEntry] = {}
        self._lock = threading.Lock()

    def get(self, dest: int) -> CacheEntry | None:
        with self._lock:
            return self._entries.get(dest)

    def set(self, dest: int, suffix: tuple[int, ...], generation: int) -> CacheEntry:
        """Store a hint, replacing any earlier one for the same destination."""
        entry = CacheEntry(suffix=tuple(suffix), generation=generation)
        with self._lock:
            self._entries[dest] = entry
        return entry

    def discard(self, dest: int, expected: CacheEntry | None = None) -> bool:
        """
        Drop the hint for a destination. Returns whether one was dropped.

        If `expected` is given, the hint is only dropped while it is still
        that exact entry, so a newer hint written in the meantime survives.
        """
        with self._lock:
            current = self._entries.get(dest)
            if current is None or (expected is not None and current is not expected):
                return False
            del self._entries[dest]
            return True

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def count(self, generation: int | None = None) -> int:
        """Number of hints, only those written at `generation` if given."""
        with self._lock:
            if generation is None:
                return len(self._entries)
            return sum(1 for entry in self._entries.values() if entry.generation == generation)

    def destinations(self, generation: int | None = None) -> list[int]:
        with self._lock:
            return sorted(
                dest
                for dest, entry in self._entries.items()
                if generation is None or entry.generation == generation
            )

    def __len__(self) -> int:
        return self.count()

    def __repr__(self) -> str:
        return f"RouteSlot(destinations={self.destinations()})"
