"""K shortest loopless paths over an OverlayGraph.

The enumeration itself is networkx's Yen-style
``shortest_simple_paths``; this module only adapts the overlay to it.
"""

from __future__ import annotations

from itertools import islice
from typing import Any, Dict, List, Optional

import networkx as nx

from trafficsplit.exceptions import UnknownVertex
from trafficsplit.lib.network import DISCONNECTED, VertexID
from trafficsplit.lib.overlay import OverlayGraph
from trafficsplit.lib.path import Path
from trafficsplit.logging import get_logger

__all__ = ["k_shortest_paths"]

logger = get_logger(__name__)


def k_shortest_paths(
    overlay: OverlayGraph,
    source_id: VertexID,
    sink_id: VertexID,
    k: int,
) -> List[Path]:
    """Return up to k loopless paths from source_id to sink_id.

    Edges hidden by the overlay are invisible to the search, and every
    path weight is the sum of overlay edge weights at search time. Paths
    come back in non-decreasing weight order; ties keep the order in which
    networkx discovers them, which is deterministic for a given network.

    Args:
        overlay: Overlay to search. It is only read.
        source_id: Origin vertex id.
        sink_id: Destination vertex id.
        k: Maximum number of paths to return.

    Returns:
        Fewer than k paths when the overlay cannot supply that many; an
        empty list when no route exists or an endpoint is removed.

    Raises:
        ValueError: If k < 1.
        UnknownVertex: If an endpoint is not in the base network.
    """
    if k < 1:
        raise ValueError(f"k must be at least 1, got {k}.")

    network = overlay.network
    for vid in (source_id, sink_id):
        if not network.vertex_exists(vid):
            raise UnknownVertex(vid)
    if overlay.is_vertex_removed(source_id) or overlay.is_vertex_removed(sink_id):
        logger.debug("Endpoint of %s->%s is removed", source_id, sink_id)
        return []
    if source_id == sink_id:
        return [Path((source_id,), 0.0)]

    def overlay_weight(u: VertexID, v: VertexID, _: Dict[str, Any]) -> Optional[float]:
        # networkx treats a None weight as a hidden edge
        weight = overlay.edge_weight(u, v)
        return None if weight == DISCONNECTED else weight

    generator = nx.shortest_simple_paths(
        network.as_networkx(), source_id, sink_id, weight=overlay_weight
    )
    try:
        routes = list(islice(generator, k))
    except nx.NetworkXNoPath:
        logger.debug("No path from %s to %s", source_id, sink_id)
        return []

    paths = [Path(tuple(route), _route_weight(overlay, route)) for route in routes]
    logger.debug(
        "Found %d of %d requested paths from %s to %s",
        len(paths),
        k,
        source_id,
        sink_id,
    )
    return paths


def _route_weight(overlay: OverlayGraph, route: List[VertexID]) -> float:
    return sum(
        (overlay.edge_weight(u, v) for u, v in zip(route, route[1:])),
        0.0,
    )
