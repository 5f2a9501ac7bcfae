"""
De-duplicating name dictionary.

Maps node names to compact integer identifiers and back. Identifiers are
issued sequentially from 0 on first sight of a name and are never reused
or removed, so they stay valid for the lifetime of the web.
"""

from __future__ import annotations

import threading
from collections.abc import Iterator

from spiderweb.errors import UnknownIdentifier


class Dictionary:
    """
    Bidirectional interner between node names and identifiers.

    Attributes:
        _ids: Dict mapping name to identifier
        _names: List of names, indexed by identifier
    """

    def __init__(self) -> None:
        self._ids: dict[str, int] = {}
        self._names: list[str] = []
        self._lock = threading.Lock()

    def intern(self, name: str) -> int:
        """
        Get the identifier for a name, allocating one if it is new.

        Args:
            name: Node name

        Returns:
            The name's identifier
        """
        ident = self._ids.get(name)
        if ident is not None:
            return ident

        with self._lock:
            # Re-check: another thread may have interned it meanwhile
            ident = self._ids.get(name)
            if ident is None:
                ident = len(self._names)
                self._names.append(name)
                self._ids[name] = ident
            return ident

    def resolve(self, ident: int) -> str:
        """Get the name for an identifier. Raises UnknownIdentifier if absent."""
        if 0 <= ident < len(self._names):
            return self._names[ident]
        raise UnknownIdentifier(ident)

    def lookup(self, name: str) -> int | None:
        """Get the identifier for a name, or None if never interned."""
        return self._ids.get(name)

    def __contains__(self, name: object) -> bool:
        return name in self._ids

    def __len__(self) -> int:
        return len(self._names)

    def __iter__(self) -> Iterator[tuple[int, str]]:
        return iter(list(enumerate(self._names)))

    def __repr__(self) -> str:
        return f"Dictionary(size={len(self)})"
