"""
Data loading module.

Reads and writes web topologies as adjacency text or msgpack link graphs.

Usage:
    from spiderweb.data import load_web

    web = load_web("data/web.txt")
"""

from spiderweb.data.loader import (
    format_adjacency,
    load_link_graph,
    load_web,
    parse_lines,
    save_link_graph,
)

__all__ = [
    "format_adjacency",
    "load_link_graph",
    "load_web",
    "parse_lines",
    "save_link_graph",
]
