"""
Edge removal and route-hint invalidation.

Removing an edge discards the two route slots that live on it and nothing
else. Hints on other edges that routed across the removed edge further
downstream are left in place: a hint only commits a search to its next
single hop, and PathFinder re-walks a hint's suffix before trusting it.
A hint whose suffix crosses the gap is ignored when it is next consulted,
the search branches from that node instead, and the hint is purged then.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from spiderweb.errors import InvalidEdgeRemoval

if TYPE_CHECKING:
    from spiderweb.graph.web import Web

logger = logging.getLogger(__name__)


def remove_link(web: Web, one: int, two: int, strict: bool = False) -> bool:
    """
    Delete the bidirectional link between two nodes and both of its slots.

    Args:
        web: Web to mutate
        one: First endpoint
        two: Second endpoint
        strict: Raise InvalidEdgeRemoval instead of ignoring a missing edge

    Returns:
        True if an edge was removed, False if there was none

    Raises:
        InvalidEdgeRemoval: If strict and the edge does not exist
    """
    one_name = web.get_name(one)
    two_name = web.get_name(two)

    slots = web.detach(one, two)
    if slots is None:
        if strict:
            raise InvalidEdgeRemoval(one_name, two_name)
        logger.debug(f"No link '{one_name}' <-> '{two_name}' to remove")
        return False

    forward, backward = slots
    dropped = len(forward) + len(backward)
    # Readers that grabbed a slot before the detach must not see its hints
    forward.clear()
    backward.clear()

    logger.info(
        f"Removed link '{one_name}' <-> '{two_name}' "
        f"({dropped} route hints dropped)"
    )
    return True
