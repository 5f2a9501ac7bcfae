#!/usr/bin/env python3
"""
Spiderweb CLI - Query shortest paths on a web loaded from disk.

Usage:
    python scripts/route.py --graph data/web.txt --query A I
    python scripts/route.py --graph data/web.txt --query D I --cut E H --query D I
    python scripts/route.py --graph data/link_graph.msgpack --dump graphviz > web.gv
    python scripts/route.py --graph data/web.txt --interactive

Queries and cuts run in the order given, so a later query sees the route
hints and removed links left by earlier ones.

Interactive commands:
    path <from> <to>   - find a shortest path
    cut <a> <b>        - remove the link between two nodes
    reach <node>       - count nodes reachable from a node
    dump [text|graphviz]
    stats              - print web statistics
    quit               - exit
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from dotenv import load_dotenv  # noqa: E402

load_dotenv(project_root / ".env")

from spiderweb import api  # noqa: E402 - must be after .env is loaded
from spiderweb.config import (  # noqa: E402
    DEFAULT_GRAPH_PATH,
    DUMP_FORMATS,
    LOG_FORMAT,
    LOG_LEVEL,
    SEARCH_WORKERS,
)
from spiderweb.data import load_web  # noqa: E402
from spiderweb.errors import SpiderwebError  # noqa: E402
from spiderweb.graph import Web  # noqa: E402


class _OrderedAction(argparse.Action):
    """Collect --query and --cut into one list, keeping command-line order."""

    def __call__(self, parser, namespace, values, option_string=None):
        steps = getattr(namespace, "steps", None) or []
        steps.append((self.dest, values))
        namespace.steps = steps


def parse_args() -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Query shortest paths on a spiderweb graph",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )

    parser.add_argument(
        "--graph",
        type=Path,
        default=DEFAULT_GRAPH_PATH,
        help=f"Adjacency text or .msgpack link graph (default: {DEFAULT_GRAPH_PATH})",
    )
    parser.add_argument(
        "--query",
        nargs=2,
        metavar=("FROM", "TO"),
        action=_OrderedAction,
        help="Find a shortest path (repeatable)",
    )
    parser.add_argument(
        "--cut",
        nargs=2,
        metavar=("A", "B"),
        action=_OrderedAction,
        help="Remove the link between two nodes (repeatable)",
    )
    parser.add_argument(
        "--dump",
        choices=DUMP_FORMATS,
        default=None,
        help="Print the web after all queries and cuts",
    )
    parser.add_argument(
        "--workers",
        type=int,
        default=SEARCH_WORKERS,
        help=f"Threads per search round (default: {SEARCH_WORKERS})",
    )
    parser.add_argument(
        "--interactive",
        "-i",
        action="store_true",
        help="Read commands from stdin after running the given steps",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose logging",
    )

    args = parser.parse_args()
    if getattr(args, "steps", None) is None:
        args.steps = []
    return args


def print_result(result) -> None:
    """Print one query result."""
    if not result.found:
        print(f"No path: '{result.source}' and '{result.destination}' are not connected")
        return
    print(f"Path ({result.hops} hops): {' -> '.join(result.path)}")
    stats = result.stats
    print(
        f"  rounds={stats.rounds} explorers={stats.spawned} cached_steps={stats.commits} "
        f"stale_hints={stats.stale_hints} time={stats.elapsed_ms:.1f}ms"
    )


def run_command(web: Web, parts: list[str], workers: int) -> bool:
    """
    Execute one interactive command.

    Returns:
        False if the session should end
    """
    cmd = parts[0].lower()

    if cmd in ("quit", "exit"):
        return False

    if cmd == "path":
        if len(parts) != 3:
            print("Usage: path <from> <to>")
            return True
        print_result(api.find_path(web, parts[1], parts[2], workers=workers))
        return True

    if cmd == "cut":
        if len(parts) != 3:
            print("Usage: cut <a> <b>")
            return True
        if api.remove_edge(web, parts[1], parts[2]):
            print(f"Removed link {parts[1]} <-> {parts[2]}")
        else:
            print(f"No link between {parts[1]} and {parts[2]}")
        return True

    if cmd == "reach":
        if len(parts) != 2:
            print("Usage: reach <node>")
            return True
        print(f"{api.count_reachable(web, parts[1]):,} nodes reachable from {parts[1]}")
        return True

    if cmd == "dump":
        fmt = parts[1] if len(parts) > 1 else "text"
        print(api.dump(web, fmt=fmt), end="")
        return True

    if cmd == "stats":
        for key, value in web.stats().items():
            print(f"  {key}: {value:,}" if isinstance(value, int) else f"  {key}: {value:.2f}")
        return True

    print(f"Unknown command: {cmd}")
    print("Supported commands: path, cut, reach, dump, stats, quit")
    return True


def interactive(web: Web, workers: int) -> None:
    """Read commands from stdin until quit or end of input."""
    print("Enter commands (path, cut, reach, dump, stats, quit).")
    while True:
        try:
            line = input("> ")
        except EOFError:
            print()
            break

        parts = line.split()
        if not parts:
            continue

        try:
            if not run_command(web, parts, workers):
                break
        except (SpiderwebError, ValueError) as e:
            print(f"[Error] {e}")


def main() -> int:
    """Main entry point."""
    args = parse_args()

    log_level = logging.DEBUG if args.verbose else LOG_LEVEL
    logging.basicConfig(level=log_level, format=LOG_FORMAT, datefmt="%H:%M:%S")

    if not args.graph.exists():
        print(f"Error: graph file not found: {args.graph}", file=sys.stderr)
        return 1

    try:
        web = load_web(args.graph)
    except SpiderwebError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(f"Loaded {len(web):,} nodes and {web.edge_count():,} links from {args.graph}")

    exit_code = 0
    for kind, (one, two) in args.steps:
        try:
            if kind == "query":
                result = api.find_path(web, one, two, workers=args.workers)
                print_result(result)
                if not result.found:
                    exit_code = 1
            else:
                removed = api.remove_edge(web, one, two)
                print(f"Cut {one} <-> {two}" if removed else f"No link {one} <-> {two} to cut")
        except SpiderwebError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1

    if args.interactive:
        try:
            interactive(web, args.workers)
        except KeyboardInterrupt:
            print("\nInterrupted")
            return 130

    if args.dump:
        print(api.dump(web, fmt=args.dump), end="")

    return exit_code


if __name__ == "__main__":
    sys.exit(main())
