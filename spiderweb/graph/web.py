"""
The web: a mutable, undirected graph of named nodes.

Usage:
    from spiderweb.graph import Web

    web = Web()
    a, b = web.add_node("A"), web.add_node("B")
    web.add_edge(a, b)
    web.neighbors(a)       # (b,)
    web.cache_get(a, b, b) # route hint written by a search, or None

Edges are stored as two directed adjacencies, each owning a RouteSlot of
memoized route hints. Hints are written by PathFinder after a successful
search and read back by later searches to avoid re-exploring shared
sub-paths.
"""

from __future__ import annotations

import logging
import threading
from collections import deque
from dataclasses import dataclass

import numpy as np

from spiderweb.config import BLANK_NAME, DEBUG_CHECKS
from spiderweb.errors import TopologyError, UnknownIdentifier, UnknownNode
from spiderweb.graph.dictionary import Dictionary
from spiderweb.graph.routes import CacheEntry, RouteSlot

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Link:
    """
    One undirected edge, seen from both ends.

    Attributes:
        one: Lower-numbered endpoint
        two: Higher-numbered endpoint
        forward: Number of current hints cached on one -> two
        backward: Number of current hints cached on two -> one
    """

    one: int
    two: int
    forward: int
    backward: int

    @property
    def traffic(self) -> int:
        """Both endpoints plus every destination routed across this link."""
        return 2 + self.forward + self.backward

    @property
    def ends(self) -> tuple[int, int]:
        return (self.one, self.two)


class Web:
    """
    Adjacency over interned node identifiers, with per-edge route caches.

    Structural changes (adding/removing edges) take a web-wide lock; route
    hints are guarded per slot. Every edge added after a hint was written
    bumps the topology generation, which retires that hint: a new edge can
    only shorten routes, so an older hint may no longer be a shortest one.

    Attributes:
        names: Dictionary of node names
        generation: Count of edge insertions that changed the topology
    """

    def __init__(self, debug_checks: bool = DEBUG_CHECKS) -> None:
        """
        Initialize an empty web.

        Args:
            debug_checks: Verify adjacency symmetry after every mutation
        """
        self.names = Dictionary()
        self._ports: dict[int, dict[int, RouteSlot]] = {}
        self._lock = threading.RLock()
        self._generation = 0
        self._debug_checks = debug_checks

    @property
    def generation(self) -> int:
        return self._generation

    # =========================================================================
    # Nodes
    # =========================================================================

    def add_node(self, name: str) -> int:
        """
        Place a node in the web. It must be linked to become reachable.

        Returns:
            The node's identifier (existing one if already present)
        """
        ident = self.names.intern(name)
        with self._lock:
            self._ports.setdefault(ident, {})
        return ident

    def ident(self, name: str) -> int:
        """Get the identifier for a node name. Raises UnknownNode if absent."""
        ident = self.names.lookup(name)
        if ident is None:
            raise UnknownNode(name)
        return ident

    def get_name(self, ident: int) -> str:
        """Get a node's name, falling back to a placeholder for stray ids."""
        try:
            return self.names.resolve(ident)
        except UnknownIdentifier:
            return BLANK_NAME

    def nodes(self) -> list[int]:
        """All node identifiers, in ascending order."""
        with self._lock:
            return sorted(self._ports)

    def __contains__(self, name: object) -> bool:
        return name in self.names

    def __len__(self) -> int:
        return len(self._ports)

    # =========================================================================
    # Edges
    # =========================================================================

    def add_edge(self, one: int, two: int) -> bool:
        """
        Create a bidirectional link between two nodes.

        Idempotent: linking an already-linked pair changes nothing, including
        the route hints on it.

        Returns:
            True if a new edge was created
        """
        if one == two:
            logger.debug(f"Ignoring self-loop on '{self.get_name(one)}'")
            return False

        with self._lock:
            ports_one = self._ports.setdefault(one, {})
            ports_two = self._ports.setdefault(two, {})
            if two in ports_one:
                return False
            ports_one[two] = RouteSlot()
            ports_two[one] = RouteSlot()
            self._generation += 1
            if self._debug_checks:
                self.check_symmetry()
        return True

    def has_edge(self, one: int, two: int) -> bool:
        with self._lock:
            return two in self._ports.get(one, {})

    def neighbors(self, ident: int) -> tuple[int, ...]:
        """Snapshot of a node's neighbors, in ascending identifier order."""
        with self._lock:
            return tuple(sorted(self._ports.get(ident, ())))

    def degree(self, ident: int) -> int:
        with self._lock:
            return len(self._ports.get(ident, ()))

    def edge_count(self) -> int:
        """Number of undirected edges."""
        with self._lock:
            return sum(len(ports) for ports in self._ports.values()) // 2

    def remove_edge(self, one: int, two: int, strict: bool = False) -> bool:
        """
        Remove the bidirectional link between two nodes.

        See spiderweb.graph.invalidator for which route hints this discards.

        Returns:
            True if an edge was removed
        """
        from spiderweb.graph.invalidator import remove_link

        return remove_link(self, one, two, strict=strict)

    def detach(self, one: int, two: int) -> tuple[RouteSlot, RouteSlot] | None:
        """
        Unlink both directions of an edge and hand back their slots.

        Low-level half of remove_edge: the caller decides what to do with the
        hints left in the returned slots. Returns None if there was no edge.
        """
        with self._lock:
            if two not in self._ports.get(one, {}):
                return None
            slots = (self._ports[one].pop(two), self._ports[two].pop(one))
            if self._debug_checks:
                self.check_symmetry()
            return slots

    # =========================================================================
    # Route Cache
    # =========================================================================

    def slot(self, src: int, dst: int) -> RouteSlot | None:
        """The route slot on the directed edge src -> dst, if the edge exists."""
        with self._lock:
            return self._ports.get(src, {}).get(dst)

    def cache_entry(self, src: int, dst: int, dest: int) -> CacheEntry | None:
        """
        Get the current route hint entry on src -> dst towards a destination.

        Returns None if the edge is gone or no hint exists. A hint written
        before the latest edge insertion is retired: it is dropped from its
        slot and reads as unknown.
        """
        slot = self.slot(src, dst)
        if slot is None:
            return None
        entry = slot.get(dest)
        if entry is None:
            return None
        if entry.generation != self._generation:
            slot.discard(dest, entry)
            return None
        return entry

    def cache_get(self, src: int, dst: int, dest: int) -> tuple[int, ...] | None:
        """Get the route hint suffix on src -> dst towards a destination, or None."""
        entry = self.cache_entry(src, dst, dest)
        return entry.suffix if entry is not None else None

    def cache_set(
        self,
        src: int,
        dst: int,
        dest: int,
        suffix: tuple[int, ...],
        generation: int | None = None,
    ) -> None:
        """
        Store a route hint on src -> dst, replacing any earlier one.

        Args:
            src: Edge start
            dst: Edge end
            dest: Destination the hint routes towards
            suffix: Nodes after dst, through dest
            generation: Topology generation the route was found under
                (defaults to the current one)
        """
        slot = self.slot(src, dst)
        if slot is None:
            raise TopologyError(
                f"Cannot cache route on missing edge "
                f"'{self.get_name(src)}' -> '{self.get_name(dst)}'"
            )
        if generation is None:
            generation = self._generation
        slot.set(dest, tuple(suffix), generation)

    def cache_purge(
        self,
        src: int,
        dst: int,
        dest: int,
        expected: CacheEntry | None = None,
    ) -> bool:
        """
        Drop one route hint. Returns whether anything was dropped.

        With `expected`, only that exact entry is dropped; a hint rewritten
        since it was read is kept.
        """
        slot = self.slot(src, dst)
        if slot is None:
            return False
        return slot.discard(dest, expected)

    def is_walkable(self, start: int, suffix: tuple[int, ...]) -> bool:
        """Check that every hop of start -> suffix[0] -> ... still exists."""
        with self._lock:
            current = start
            for nxt in suffix:
                if nxt not in self._ports.get(current, {}):
                    return False
                current = nxt
        return True

    def hint_is_intact(self, dst: int, dest: int, suffix: tuple[int, ...]) -> bool:
        """Check that a hint read off an edge ending at dst still walks to dest."""
        if not suffix:
            return dst == dest
        return suffix[-1] == dest and self.is_walkable(dst, suffix)

    def route_to(self, ident: int, dest: int) -> int | None:
        """
        If a node knows how to route to a destination, the neighbor to go to.

        Only hints that still walk over live edges count. Returning None does
        not mean there is no path, only that none has been discovered yet.
        """
        for neighbor in self.neighbors(ident):
            if neighbor == dest:
                return neighbor
            suffix = self.cache_get(ident, neighbor, dest)
            if suffix is not None and self.hint_is_intact(neighbor, dest, suffix):
                return neighbor
        return None

    def clear_routes(self) -> None:
        """Remove all cached route hints, keeping every edge."""
        with self._lock:
            for ports in self._ports.values():
                for slot in ports.values():
                    slot.clear()
        logger.debug("Cleared all route hints")

    def cached_route_count(self) -> int:
        """Number of current route hints across all directed edges."""
        with self._lock:
            generation = self._generation
            return sum(
                slot.count(generation) for ports in self._ports.values() for slot in ports.values()
            )

    # =========================================================================
    # Topology Queries
    # =========================================================================

    def count_reachable(self, ident: int) -> int:
        """Count how many nodes are reachable from a node, including itself."""
        if ident not in self._ports:
            return 0
        seen = {ident}
        queue = deque([ident])
        while queue:
            for neighbor in self.neighbors(queue.popleft()):
                if neighbor not in seen:
                    seen.add(neighbor)
                    queue.append(neighbor)
        return len(seen)

    def links(self) -> list[Link]:
        """Every undirected edge once, lower identifier first."""
        with self._lock:
            generation = self._generation
            return [
                Link(
                    one=one,
                    two=two,
                    forward=slot.count(generation),
                    backward=self._ports[two][one].count(generation),
                )
                for one in sorted(self._ports)
                for two, slot in sorted(self._ports[one].items())
                if one < two
            ]

    def check_symmetry(self) -> None:
        """Raise TopologyError if any edge is present in only one direction."""
        with self._lock:
            for one, ports in self._ports.items():
                for two in ports:
                    if one not in self._ports.get(two, {}):
                        raise TopologyError(
                            f"Asymmetric edge: '{self.get_name(one)}' -> "
                            f"'{self.get_name(two)}' has no reverse"
                        )

    # =========================================================================
    # Diagnostics
    # =========================================================================

    def adjacency_matrix(self) -> np.ndarray:
        """Dense 0/1 adjacency matrix, rows and columns in identifier order."""
        size = len(self.names)
        matrix = np.zeros((size, size), dtype=np.uint8)
        with self._lock:
            for one, ports in self._ports.items():
                if ports:
                    matrix[one, list(ports)] = 1
        return matrix

    def to_graphviz(self) -> str:
        """
        Render the web as a Graphviz document.

        Edges point from lower to higher identifiers. Labels count how many
        destinations are routed across each edge: `up` from lower to higher,
        `dn` from higher to lower, each including the far endpoint itself.
        """
        lines = ["digraph {"]
        for ident in self.nodes():
            lines.append(f'    "{ident}" [label = "{self.get_name(ident)}/{ident}"];')
        for link in self.links():
            lines.append(
                f'    "{link.one}" -> "{link.two}" '
                f'[label = "up {1 + link.forward} dn {1 + link.backward}"];'
            )
        lines.append("}")
        return "\n".join(lines) + "\n"

    def validate(self) -> dict[str, bool]:
        """Run consistency checks on the web."""
        try:
            self.check_symmetry()
            symmetric = True
        except TopologyError:
            symmetric = False

        with self._lock:
            no_self_loops = all(ident not in ports for ident, ports in self._ports.items())
            ids_resolve = all(0 <= ident < len(self.names) for ident in self._ports)

        return {
            "symmetric": symmetric,
            "no_self_loops": no_self_loops,
            "identifiers_resolve": ids_resolve,
            "counts_match": len(self._ports) == len(self.names),
        }

    def stats(self) -> dict:
        """Get statistics about the web."""
        with self._lock:
            degrees = np.fromiter(
                (len(ports) for ports in self._ports.values()),
                dtype=np.int64,
                count=len(self._ports),
            )
        has_nodes = degrees.size > 0
        return {
            "nodes": int(degrees.size),
            "edges": int(degrees.sum()) // 2,
            "isolated_nodes": int(np.count_nonzero(degrees == 0)),
            "mean_degree": float(degrees.mean()) if has_nodes else 0.0,
            "max_degree": int(degrees.max()) if has_nodes else 0,
            "cached_routes": self.cached_route_count(),
            "generation": self._generation,
        }

    def __repr__(self) -> str:
        return f"Web(nodes={len(self)}, edges={self.edge_count()}, generation={self._generation})"
