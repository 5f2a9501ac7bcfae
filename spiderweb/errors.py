"""
Spiderweb exception hierarchy.

Shared by the dictionary, web, loader and API so every module raises
and catches the same types. A disconnected query is not an error; it
comes back as a SearchResult status.
"""

from __future__ import annotations


class SpiderwebError(Exception):
    """Base for all spiderweb-specific errors."""


class UnknownNode(SpiderwebError, LookupError):  # noqa: N818
    """A node name was never added to the web."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Unknown node: {name!r}")


class UnknownIdentifier(SpiderwebError, LookupError):  # noqa: N818
    """An identifier was not issued by this dictionary."""

    def __init__(self, ident: int) -> None:
        self.ident = ident
        super().__init__(f"Unknown identifier: #{ident}")


class InvalidEdgeRemoval(SpiderwebError, ValueError):  # noqa: N818
    """Strict removal of an edge that is not in the web."""

    def __init__(self, one: str, two: str) -> None:
        self.one = one
        self.two = two
        super().__init__(f"No edge between {one!r} and {two!r}")


class ParseError(SpiderwebError, ValueError):
    """Malformed adjacency input.

    ``line_number`` is 1-based; 0 means the error is not tied to a line.
    """

    def __init__(self, message: str, line_number: int = 0) -> None:
        self.line_number = line_number
        if line_number:
            message = f"line {line_number}: {message}"
        super().__init__(message)


class TopologyError(SpiderwebError):
    """An internal web invariant was violated (e.g. asymmetric adjacency)."""
