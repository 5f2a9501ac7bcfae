#!/usr/bin/env python3
"""
Validate a web graph file and the path search against it.

Usage:
    python scripts/validate_graph.py
    python scripts/validate_graph.py --graph data/link_graph.msgpack --samples 50
"""

import argparse
import logging
import random
import sys
import time
from collections import deque
from pathlib import Path

# Fix Windows console encoding for Unicode output
if sys.platform == "win32":
    sys.stdout.reconfigure(encoding="utf-8", errors="replace")

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from dotenv import load_dotenv  # noqa: E402

load_dotenv(project_root / ".env")

from spiderweb import api  # noqa: E402 - must be after sys.path modification
from spiderweb.config import DEFAULT_GRAPH_PATH, LOG_LEVEL, get_missing_data_files  # noqa: E402
from spiderweb.data import load_web  # noqa: E402
from spiderweb.graph import Web  # noqa: E402

# Configure logging
logging.basicConfig(
    level=LOG_LEVEL,
    format="%(message)s",
)
logger = logging.getLogger(__name__)


def bfs_hops(web: Web, start: int, target: int) -> int | None:
    """Plain BFS distance, ignoring route hints entirely."""
    if start == target:
        return 0
    depth = {start: 0}
    queue = deque([start])
    while queue:
        current = queue.popleft()
        for neighbor in web.neighbors(current):
            if neighbor in depth:
                continue
            depth[neighbor] = depth[current] + 1
            if neighbor == target:
                return depth[neighbor]
            queue.append(neighbor)
    return None


def load_and_validate(path: Path) -> Web | None:
    """Load the web and run its consistency checks."""
    print("\n=== Loading Web ===\n")

    start_time = time.time()
    web = load_web(path)
    print(f"Load time: {time.time() - start_time:.2f} seconds")

    print("\n=== Web Statistics ===\n")
    for key, value in web.stats().items():
        print(f"  {key}: {value:,}" if isinstance(value, int) else f"  {key}: {value:.2f}")

    print("\n=== Validation Checks ===\n")
    all_valid = True
    for check, passed in web.validate().items():
        status = "✓" if passed else "✗"
        print(f"  {status} {check}")
        if not passed:
            all_valid = False

    return web if all_valid else None


def check_sample_queries(web: Web, samples: int, seed: int) -> bool:
    """Compare random queries against plain BFS, twice each (cold, then cached)."""
    print("\n=== Sample Queries ===\n")

    rng = random.Random(seed)
    nodes = web.nodes()
    all_passed = True

    for _ in range(samples):
        one, two = rng.choice(nodes), rng.choice(nodes)
        expected = bfs_hops(web, one, two)
        one_name, two_name = web.get_name(one), web.get_name(two)

        for attempt in ("cold", "cached"):
            result = api.find_path(web, one_name, two_name)
            if result.hops != expected:
                print(f"  ✗ {one_name} -> {two_name} ({attempt}): got {result.hops}, expected {expected}")
                all_passed = False

        if expected is None:
            print(f"  ✓ {one_name} -/-> {two_name} (disconnected)")
        else:
            print(f"  ✓ {one_name} -> {two_name}: {expected} hops")

    print(f"\n  Route hints now cached: {web.cached_route_count():,}")
    return all_passed


def main() -> int:
    """Main validation routine."""
    parser = argparse.ArgumentParser(description="Validate a spiderweb graph file")
    parser.add_argument("--graph", type=Path, default=DEFAULT_GRAPH_PATH)
    parser.add_argument("--samples", type=int, default=20)
    parser.add_argument("--seed", type=int, default=0)
    args = parser.parse_args()

    print("=" * 60)
    print("Spiderweb Graph Validation")
    print("=" * 60)

    if not args.graph.exists():
        print(f"\n✗ Graph file {args.graph} not found. Cannot continue.")
        missing = get_missing_data_files()
        if missing:
            print(f"  Missing data files: {', '.join(missing)}")
        return 1

    web = load_and_validate(args.graph)
    if web is None:
        print("\n✗ Validation checks failed.")
        return 1

    if len(web) == 0:
        print("\n⚠ Web is empty; skipping sample queries.")
        return 0

    if not check_sample_queries(web, args.samples, args.seed):
        print("\n✗ Sample query checks failed.")
        return 1

    print("\n" + "=" * 60)
    print("✓ All validation checks passed!")
    print("=" * 60)
    return 0


if __name__ == "__main__":
    sys.exit(main())
