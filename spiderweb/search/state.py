"""
Search state dataclasses for tracking path queries.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from spiderweb.graph.routes import CacheEntry


class SearchStatus(str, Enum):
    """Outcome of a path query."""

    FOUND = "found"
    DISCONNECTED = "disconnected"


class Step(str, Enum):
    """What an explorer did in one round."""

    CONVERGED = "converged"
    COMMITTED = "committed"
    BRANCHED = "branched"
    DEAD_END = "dead_end"
    CANCELLED = "cancelled"


@dataclass(frozen=True, slots=True)
class Explorer:
    """
    One frontier unit ("spider") of a breadth-first query.

    Attributes:
        node: Node the explorer is sitting on
        path: Nodes visited from the query source, including node
        arrived_from: Previous node, never stepped back to (None at the source)
    """

    node: int
    path: tuple[int, ...]
    arrived_from: int | None = None

    @property
    def depth(self) -> int:
        """Hops taken from the source."""
        return len(self.path) - 1

    def step_to(self, node: int) -> Explorer:
        """Spawn a child one hop further along."""
        return Explorer(node=node, path=self.path + (node,), arrived_from=self.node)


@dataclass
class Advance:
    """
    Result of advancing one explorer by one round.

    Attributes:
        step: What the explorer did
        children: Explorers for the next round
        stale: (src, dst, entry) for each hint towards the destination that
            failed its walk, with the entry as it was read
    """

    step: Step
    children: list[Explorer] = field(default_factory=list)
    stale: list[tuple[int, int, CacheEntry]] = field(default_factory=list)


@dataclass
class SearchStats:
    """
    Counters for one query.

    Attributes:
        rounds: Rounds advanced before the loop stopped
        spawned: Explorers created, including the first one
        commits: Moves that followed a route hint
        branches: Moves that fanned out to all undominated neighbors
        dead_ends: Explorers discarded with nowhere to go
        stale_hints: Route hints purged because their suffix was broken
        elapsed_ms: Wall time of the query in milliseconds
    """

    rounds: int = 0
    spawned: int = 0
    commits: int = 0
    branches: int = 0
    dead_ends: int = 0
    stale_hints: int = 0
    elapsed_ms: float = 0.0

    def record(self, advance: Advance) -> None:
        """Fold one explorer's round into the counters."""
        self.spawned += len(advance.children)
        if advance.step is Step.COMMITTED:
            self.commits += 1
        elif advance.step is Step.BRANCHED:
            self.branches += 1
        elif advance.step is Step.DEAD_END:
            self.dead_ends += 1


@dataclass(frozen=True)
class SearchResult:
    """
    Complete record of a finished query.

    Attributes:
        source: Source node name
        destination: Destination node name
        status: FOUND or DISCONNECTED
        path: Node names from source to destination inclusive (empty if not found)
        stats: Search counters
    """

    source: str
    destination: str
    status: SearchStatus
    path: list[str] = field(default_factory=list)
    stats: SearchStats = field(default_factory=SearchStats)

    @property
    def found(self) -> bool:
        return self.status is SearchStatus.FOUND

    @property
    def hops(self) -> int | None:
        """Number of edges on the path, or None if disconnected."""
        return len(self.path) - 1 if self.found else None

    def __str__(self) -> str:
        if not self.found:
            return f"{self.source} -/-> {self.destination} (disconnected)"
        return " -> ".join(self.path)
