"""
Spiderweb.

An undirected graph of named nodes that answers shortest-hop path
queries and remembers partial routes on its edges, so later queries
sharing sub-paths skip re-exploring the graph.
"""

from spiderweb.api import build, count_reachable, dump, find_path, remove_edge
from spiderweb.errors import (
    InvalidEdgeRemoval,
    ParseError,
    SpiderwebError,
    TopologyError,
    UnknownIdentifier,
    UnknownNode,
)
from spiderweb.graph import Web
from spiderweb.search import SearchResult, SearchStatus

__version__ = "0.1.0"

__all__ = [
    "InvalidEdgeRemoval",
    "ParseError",
    "SearchResult",
    "SearchStatus",
    "SpiderwebError",
    "TopologyError",
    "UnknownIdentifier",
    "UnknownNode",
    "Web",
    "build",
    "count_reachable",
    "dump",
    "find_path",
    "remove_edge",
]
