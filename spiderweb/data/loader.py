"""
Loading and exporting web topologies.

Two formats are supported:
- Adjacency text: one node per line, then the nodes it links to.
  Either `jqt: rhn xhk nvd` or `jqt rhn xhk nvd`. Each edge is declared
  once and is bidirectional; blank lines and `#` comments are skipped.
- Link graph msgpack: a map of node name to list of linked node names.

Only topology is ever stored; route hints are rebuilt by searching.

Usage:
    from spiderweb.data.loader import load_web, parse_lines

    web = parse_lines(["A: B D", "B: C E"])
    web = load_web("data/web.txt")
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path

import msgpack

from spiderweb.errors import ParseError
from spiderweb.graph.web import Web

logger = logging.getLogger(__name__)


def _split_line(line: str, line_number: int) -> tuple[str, list[str]]:
    """Split one adjacency line into its source name and neighbor names."""
    if ":" in line:
        source, _, rest = line.partition(":")
        source = source.strip()
        if not source or len(source.split()) != 1:
            raise ParseError(f"expected a single node name before ':', got {source!r}", line_number)
        return source, rest.split()

    tokens = line.split()
    return tokens[0], tokens[1:]


def parse_lines(lines: Iterable[str], web: Web | None = None) -> Web:
    """
    Build a web from adjacency lines.

    Args:
        lines: Adjacency text, one node per line
        web: Existing web to extend (a new one is created if None)

    Returns:
        The populated web

    Raises:
        ParseError: If a line has no usable node name
    """
    web = web if web is not None else Web()

    for line_number, raw in enumerate(lines, start=1):
        line = raw.strip()
        if not line or line.startswith("#"):
            continue

        source_name, neighbor_names = _split_line(line, line_number)
        source = web.add_node(source_name)
        for name in neighbor_names:
            neighbor = web.add_node(name)
            if neighbor == source:
                logger.warning(f"Line {line_number}: ignoring self-link on '{name}'")
                continue
            if not web.add_edge(source, neighbor):
                logger.warning(
                    f"Line {line_number}: duplicate link '{source_name}' <-> '{name}'"
                )

    logger.info(f"Parsed web with {len(web):,} nodes and {web.edge_count():,} links")
    return web


def format_adjacency(web: Web) -> str:
    """
    Render a web as adjacency text that parse_lines() reads back.

    Each edge is listed once, under its lower-numbered endpoint. Isolated
    nodes get a line of their own.
    """
    lines = []
    for ident, name in web.names:
        neighbors = web.neighbors(ident)
        later = [web.get_name(n) for n in neighbors if n > ident]
        if later:
            lines.append(f"{name}: {' '.join(later)}")
        elif not neighbors:
            lines.append(f"{name}:")
    return "\n".join(lines) + ("\n" if lines else "")


def load_link_graph(path: str | Path, web: Web | None = None) -> Web:
    """
    Load a msgpack link graph ({name: [neighbor names]}) into a web.

    Raises:
        ParseError: If the file does not hold a map of names to name lists
    """
    path = Path(path)
    logger.info(f"Loading link graph from {path}...")
    with open(path, "rb") as f:
        data = msgpack.load(f, raw=False)

    if not isinstance(data, dict):
        raise ParseError(f"{path}: expected a map of node names, got {type(data).__name__}")

    web = web if web is not None else Web()
    for source_name, neighbor_names in data.items():
        if not isinstance(source_name, str) or not isinstance(neighbor_names, list):
            raise ParseError(f"{path}: bad entry for {source_name!r}")
        source = web.add_node(source_name)
        for name in neighbor_names:
            web.add_edge(source, web.add_node(str(name)))

    logger.info(f"Loaded {len(web):,} nodes and {web.edge_count():,} links")
    return web


def save_link_graph(web: Web, path: str | Path) -> None:
    """Write a web's topology as a msgpack link graph."""
    path = Path(path)
    data = {
        name: [web.get_name(n) for n in web.neighbors(ident) if n > ident]
        for ident, name in web.names
    }
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "wb") as f:
        msgpack.pack(data, f)
    logger.info(f"Saved link graph with {len(data):,} nodes to {path}")


def load_web(path: str | Path) -> Web:
    """Load a web from adjacency text, or msgpack if the suffix is .msgpack."""
    path = Path(path)
    if path.suffix == ".msgpack":
        return load_link_graph(path)

    logger.info(f"Loading adjacency list from {path}...")
    with open(path, encoding="utf-8") as f:
        return parse_lines(f)
