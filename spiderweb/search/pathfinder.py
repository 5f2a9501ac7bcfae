"""
Shortest-hop path search over a web, using and feeding its route caches.

The search front expands in rings from the source. Every round, each live
explorer moves exactly one hop, so the first explorer to stand on the
destination has a shortest path. Explorers sitting on a node that already
knows a route to the destination follow that single hint instead of
fanning out; when the search succeeds, every edge on the winning path
learns the route in both directions.
"""

from __future__ import annotations

import logging
import threading
import time
from concurrent.futures import ThreadPoolExecutor

from spiderweb.config import PARALLEL_FRONTIER_MIN, SEARCH_WORKERS
from spiderweb.errors import TopologyError
from spiderweb.graph.routes import CacheEntry
from spiderweb.graph.web import Web
from spiderweb.search.state import Advance, Explorer, SearchStats, Step
from spiderweb.search.visited import VisitedRegistry

logger = logging.getLogger(__name__)


class PathFinder:
    """
    Runs round-synchronous breadth-first queries against one web.

    A single PathFinder may serve many queries, one at a time per caller;
    independent PathFinders may query the same web concurrently.

    Each round, an explorer does exactly one of:
    1. Converge, if it is on the destination.
    2. Commit: step to the one neighbor whose route hint leads to the
       destination, spawning nothing else.
    3. Branch: spawn a child on every neighbor not already claimed at this
       depth or shallower (never straight back where it came from).
    4. Die, if it has nowhere legal to go.

    A hint is only trusted if its whole suffix still walks over live edges;
    a broken one is purged after the query and the explorer branches instead.
    """

    def __init__(self, web: Web, workers: int = SEARCH_WORKERS) -> None:
        """
        Initialize the path finder.

        Args:
            web: Web to search
            workers: Threads advancing explorers within a round (1 = inline)
        """
        self._web = web
        self._workers = max(1, workers)
        self._executor: ThreadPoolExecutor | None = None

    def __enter__(self) -> PathFinder:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        """Shut down the worker pool, if one was started."""
        if self._executor is not None:
            self._executor.shutdown(wait=True)
            self._executor = None

    def find(self, source: int, dest: int) -> tuple[list[int] | None, SearchStats]:
        """
        Find a shortest-hop path between two nodes.

        Args:
            source: Starting node identifier
            dest: Destination node identifier

        Returns:
            (path, stats) where path lists identifiers from source to dest
            inclusive, or is None if the two are not connected
        """
        start_time = time.perf_counter()
        stats = SearchStats(spawned=1)

        if source == dest:
            stats.elapsed_ms = (time.perf_counter() - start_time) * 1000
            return [source], stats

        generation = self._web.generation
        visited = VisitedRegistry(source)
        frontier = [Explorer(node=source, path=(source,))]
        stale: dict[tuple[int, int], CacheEntry] = {}
        winner: tuple[int, ...] | None = None

        while frontier:
            stats.rounds += 1
            converged = threading.Event()
            advances = self._advance_round(frontier, dest, visited, converged)

            next_frontier: list[Explorer] = []
            for explorer, advance in zip(frontier, advances, strict=True):
                stats.record(advance)
                for src, dst, entry in advance.stale:
                    stale.setdefault((src, dst), entry)
                if advance.step is Step.CONVERGED and winner is None:
                    winner = explorer.path
                next_frontier.extend(advance.children)

            if winner is not None:
                break

            logger.debug(
                f"Round {stats.rounds}: {len(frontier)} explorers -> "
                f"{len(next_frontier)} at depth {stats.rounds}"
            )
            frontier = next_frontier

        for (src, dst), entry in sorted(stale.items(), key=lambda item: item[0]):
            if self._web.cache_purge(src, dst, dest, expected=entry):
                stats.stale_hints += 1

        path = list(winner) if winner is not None else None
        if path is not None:
            self._write_back(path, generation)

        stats.elapsed_ms = (time.perf_counter() - start_time) * 1000
        return path, stats

    def _advance_round(
        self,
        frontier: list[Explorer],
        dest: int,
        visited: VisitedRegistry,
        converged: threading.Event,
    ) -> list[Advance]:
        """Advance every explorer one hop, in parallel when it pays off."""
        if self._workers == 1 or len(frontier) < PARALLEL_FRONTIER_MIN:
            return [self._advance(e, dest, visited, converged) for e in frontier]

        if self._executor is None:
            self._executor = ThreadPoolExecutor(
                max_workers=self._workers,
                thread_name_prefix="spider",
            )
        # map() yields in submission order, which keeps tie-breaks stable
        return list(
            self._executor.map(
                lambda explorer: self._advance(explorer, dest, visited, converged),
                frontier,
            )
        )

    def _advance(
        self,
        explorer: Explorer,
        dest: int,
        visited: VisitedRegistry,
        converged: threading.Event,
    ) -> Advance:
        """Move one explorer by one round."""
        if explorer.node == dest:
            converged.set()
            return Advance(step=Step.CONVERGED)

        # Someone already won this round; nothing deeper matters
        if converged.is_set():
            return Advance(step=Step.CANCELLED)

        depth = explorer.depth + 1
        candidates = [
            n for n in self._web.neighbors(explorer.node) if n != explorer.arrived_from
        ]
        stale: list[tuple[int, int, CacheEntry]] = []

        hint = self._follow_hint(explorer.node, candidates, dest, stale)
        if hint is not None:
            if visited.claim(hint, depth):
                return Advance(step=Step.COMMITTED, children=[explorer.step_to(hint)], stale=stale)
            return Advance(step=Step.DEAD_END, stale=stale)

        children = [explorer.step_to(n) for n in candidates if visited.claim(n, depth)]
        if not children:
            return Advance(step=Step.DEAD_END, stale=stale)
        return Advance(step=Step.BRANCHED, children=children, stale=stale)

    def _follow_hint(
        self,
        node: int,
        candidates: list[int],
        dest: int,
        stale: list[tuple[int, int, CacheEntry]],
    ) -> int | None:
        """
        Pick the neighbor a live route hint points to, if any.

        Candidates are scanned in identifier order and the first intact hint
        wins. Hints whose suffix no longer walks to the destination are
        reported in `stale` and skipped.
        """
        for neighbor in candidates:
            entry = self._web.cache_entry(node, neighbor, dest)
            if entry is None:
                continue
            if self._web.hint_is_intact(neighbor, dest, entry.suffix):
                return neighbor
            stale.append((node, neighbor, entry))
        return None

    def _write_back(self, path: list[int], generation: int) -> None:
        """Teach every edge on a winning path the route, in both directions."""
        source, dest = path[0], path[-1]
        reverse = path[::-1]
        for route, target in ((path, dest), (reverse, source)):
            for i in range(len(route) - 1):
                try:
                    self._web.cache_set(
                        route[i], route[i + 1], target, tuple(route[i + 2:]), generation
                    )
                except TopologyError as e:
                    # An edge on the path was removed while we searched
                    logger.warning(f"Skipping route hint: {e}")
