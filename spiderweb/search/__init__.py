"""
Search module.

Provides the breadth-first path search over a web:
- PathFinder: Runs queries, follows and writes route hints
- Explorer: One frontier unit of a query
- VisitedRegistry: First-arrival depths shared by a query's explorers
- SearchResult: Outcome of a query, with SearchStats counters
"""

from spiderweb.search.pathfinder import PathFinder
from spiderweb.search.state import (
    Advance,
    Explorer,
    SearchResult,
    SearchStats,
    SearchStatus,
    Step,
)
from spiderweb.search.visited import VisitedRegistry

__all__ = [
    "Advance",
    "Explorer",
    "PathFinder",
    "SearchResult",
    "SearchStats",
    "SearchStatus",
    "Step",
    "VisitedRegistry",
]
