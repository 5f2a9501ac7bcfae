"""
Public operations on a web, addressed by node name.

Usage:
    from spiderweb import build, dump, find_path, remove_edge

    web = build(["A: B D", "B: C E", "D: E"])
    result = find_path(web, "A", "E")
    result.path          # ['A', 'B', 'E']
    remove_edge(web, "B", "E")
    print(dump(web, fmt="graphviz"))
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from spiderweb.config import DUMP_FORMATS, SEARCH_WORKERS
from spiderweb.data.loader import format_adjacency, parse_lines
from spiderweb.graph.web import Web
from spiderweb.search.pathfinder import PathFinder
from spiderweb.search.state import SearchResult, SearchStatus

logger = logging.getLogger(__name__)


def build(lines: Iterable[str]) -> Web:
    """Build a web from adjacency lines (see spiderweb.data.loader)."""
    return parse_lines(lines)


def find_path(
    web: Web,
    source_name: str,
    dest_name: str,
    workers: int | None = None,
) -> SearchResult:
    """
    Find a shortest-hop path between two named nodes.

    Args:
        web: Web to search
        source_name: Starting node
        dest_name: Destination node
        workers: Threads per search round (defaults to config SEARCH_WORKERS)

    Returns:
        SearchResult with status FOUND and the path, or DISCONNECTED

    Raises:
        UnknownNode: If either name is not in the web
    """
    source = web.ident(source_name)
    dest = web.ident(dest_name)

    with PathFinder(web, workers=workers or SEARCH_WORKERS) as finder:
        path, stats = finder.find(source, dest)

    if path is None:
        logger.info(
            f"No path from '{source_name}' to '{dest_name}' "
            f"({stats.rounds} rounds, {stats.dead_ends} dead ends)"
        )
        return SearchResult(
            source=source_name,
            destination=dest_name,
            status=SearchStatus.DISCONNECTED,
            stats=stats,
        )

    names = [web.get_name(ident) for ident in path]
    logger.info(
        f"Found path ({len(path) - 1} hops, {stats.commits} cached steps): "
        f"{' -> '.join(names)}"
    )
    return SearchResult(
        source=source_name,
        destination=dest_name,
        status=SearchStatus.FOUND,
        path=names,
        stats=stats,
    )


def remove_edge(web: Web, one_name: str, two_name: str, strict: bool = False) -> bool:
    """
    Remove the link between two named nodes.

    Removing a link that does not exist is a no-op unless strict is set.

    Returns:
        True if a link was removed

    Raises:
        UnknownNode: If either name is not in the web
        InvalidEdgeRemoval: If strict and the nodes are not linked
    """
    one = web.ident(one_name)
    two = web.ident(two_name)
    return web.remove_edge(one, two, strict=strict)


def dump(web: Web, fmt: str = "text") -> str:
    """
    Export a web's topology for diagnostics.

    Args:
        web: Web to export
        fmt: "text" (adjacency lines, readable by build()) or "graphviz"

    Raises:
        ValueError: If fmt is unknown
    """
    if fmt == "text":
        return format_adjacency(web)
    if fmt == "graphviz":
        return web.to_graphviz()
    available = ", ".join(DUMP_FORMATS)
    raise ValueError(f"Unknown dump format '{fmt}'. Available: {available}")


def count_reachable(web: Web, name: str) -> int:
    """Count nodes reachable from a named node, including itself."""
    return web.count_reachable(web.ident(name))
