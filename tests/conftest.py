"""
Pytest configuration and shared fixtures.

This file is automatically loaded by pytest and provides
fixtures available to all test files.
"""

import random
from collections import deque
from pathlib import Path

import pytest

from spiderweb import build
from spiderweb.graph import Web


def bfs_hops(web: Web, start: str, target: str) -> int | None:
    """Reference shortest-hop distance by plain BFS, ignoring route hints."""
    start_idx = web.ident(start)
    target_idx = web.ident(target)
    if start_idx == target_idx:
        return 0

    queue = deque([start_idx])
    depth = {start_idx: 0}
    while queue:
        current = queue.popleft()
        for neighbor in web.neighbors(current):
            if neighbor in depth:
                continue
            depth[neighbor] = depth[current] + 1
            if neighbor == target_idx:
                return depth[neighbor]
            queue.append(neighbor)
    return None


def assert_valid_path(web: Web, path: list[str], start: str, target: str) -> None:
    """Path runs from start to target over existing links without repeats."""
    assert path[0] == start
    assert path[-1] == target
    assert len(set(path)) == len(path)
    for one, two in zip(path, path[1:]):
        assert web.has_edge(web.ident(one), web.ident(two)), f"no link {one} <-> {two}"


@pytest.fixture
def project_root() -> Path:
    """Return the project root directory."""
    return Path(__file__).parent.parent


@pytest.fixture
def cycle_lines() -> list[str]:
    """Adjacency for A-B, A-D, B-C, B-E, C-F, C-H, D-E, E-H, F-I, H-I."""
    return [
        "A: B D",
        "B: C E",
        "C: F H",
        "D: E",
        "E: H",
        "F: I",
        "H: I",
    ]


@pytest.fixture
def cycle_web(cycle_lines) -> Web:
    """A freshly built web over the cycle graph."""
    return build(cycle_lines)


@pytest.fixture
def random_lines():
    """Factory for seeded random adjacency lists over nodes n0..n{size-1}."""

    def make(seed: int, size: int = 12, edge_prob: float = 0.2) -> list[str]:
        rng = random.Random(seed)
        lines = []
        for i in range(size):
            neighbors = [f"n{j}" for j in range(i + 1, size) if rng.random() < edge_prob]
            lines.append(f"n{i}: {' '.join(neighbors)}")
        return lines

    return make


@pytest.fixture
def oracle():
    """The reference BFS distance function."""
    return bfs_hops


@pytest.fixture
def check_path():
    """The path validity assertion."""
    return assert_valid_path
