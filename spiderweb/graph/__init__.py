"""
Graph storage module.

Provides the web and its building blocks:
- Dictionary: Name <-> identifier interner
- Web: Undirected adjacency with per-edge route caches
- RouteSlot: Destination-keyed route hints on one directed edge
- remove_link: Edge removal with lazy hint invalidation
"""

from spiderweb.graph.dictionary import Dictionary
from spiderweb.graph.invalidator import remove_link
from spiderweb.graph.routes import CacheEntry, RouteSlot
from spiderweb.graph.web import Link, Web

__all__ = ["CacheEntry", "Dictionary", "Link", "RouteSlot", "Web", "remove_link"]
