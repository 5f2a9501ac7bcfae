"""
Unit tests for the name Dictionary.
"""

import threading

import pytest

from spiderweb.errors import UnknownIdentifier
from spiderweb.graph import Dictionary


class TestIntern:
    """Test identifier allocation."""

    def test_first_ids_are_sequential(self):
        """New names get 0, 1, 2, ... in order of first sight."""
        names = Dictionary()
        assert names.intern("hello") == 0
        assert names.intern("world") == 1

    def test_repeat_returns_same_id(self):
        """Interning a known name returns its existing id."""
        names = Dictionary()
        first = names.intern("hello")
        names.intern("world")
        assert names.intern("hello") == first
        assert len(names) == 2

    def test_concurrent_intern_is_bijective(self):
        """Threads interning overlapping names never split one name across ids."""
        names = Dictionary()
        words = [f"w{i % 50}" for i in range(500)]

        def worker():
            for w in words:
                names.intern(w)

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(names) == 50
        assert sorted(names.intern(w) for w in set(words)) == list(range(50))


class TestResolve:
    """Test identifier -> name lookups."""

    def test_resolve_round_trip(self):
        """Every issued id resolves back to its name."""
        names = Dictionary()
        for word in ("jqt", "rhn", "xhk"):
            assert names.resolve(names.intern(word)) == word

    def test_resolve_unknown_raises(self):
        """Ids never issued raise UnknownIdentifier."""
        names = Dictionary()
        names.intern("only")
        with pytest.raises(UnknownIdentifier):
            names.resolve(1)
        with pytest.raises(UnknownIdentifier):
            names.resolve(-1)

    def test_unknown_identifier_is_lookup_error(self):
        """Callers catching LookupError also catch UnknownIdentifier."""
        with pytest.raises(LookupError):
            Dictionary().resolve(0)


class TestLookup:
    """Test non-allocating name lookups."""

    def test_lookup_missing_is_none(self):
        """Looking up a new name does not intern it."""
        names = Dictionary()
        assert names.lookup("ghost") is None
        assert "ghost" not in names
        assert len(names) == 0

    def test_iteration_in_id_order(self):
        """Iteration yields (id, name) pairs in id order."""
        names = Dictionary()
        for word in ("c", "a", "b"):
            names.intern(word)
        assert list(names) == [(0, "c"), (1, "a"), (2, "b")]
