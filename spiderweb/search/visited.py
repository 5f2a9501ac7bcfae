"""
Per-query visited registry shared by all explorers of one search.
"""

from __future__ import annotations

import threading


class VisitedRegistry:
    """
    Records the depth at which each node was first reached.

    The first explorer to claim a node at a given depth owns it; any later
    claim at an equal or greater depth is refused, and that explorer drops
    the branch. Claims are atomic, so explorers advanced on parallel workers
    never both believe they own a node.
    """

    def __init__(self, source: int) -> None:
        self._depths: dict[int, int] = {source: 0}
        self._lock = threading.Lock()

    def claim(self, node: int, depth: int) -> bool:
        """Claim a node at a depth. Returns False if it is dominated."""
        with self._lock:
            seen = self._depths.get(node)
            if seen is not None and seen <= depth:
                return False
            self._depths[node] = depth
            return True

    def depth_of(self, node: int) -> int | None:
        with self._lock:
            return self._depths.get(node)

    def __contains__(self, node: object) -> bool:
        with self._lock:
            return node in self._depths

    def __len__(self) -> int:
        with self._lock:
            return len(self._depths)
