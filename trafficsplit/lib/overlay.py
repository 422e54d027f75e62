"""OverlayGraph: a mutable closure overlay over a read-only NetworkView."""

from __future__ import annotations

from dataclasses import dataclass
from typing import FrozenSet, Iterable, List, Optional, Set

from trafficsplit.lib.network import (
    DISCONNECTED,
    EdgePair,
    NetworkView,
    Vertex,
    VertexID,
)
from trafficsplit.logging import get_logger

__all__ = ["OverlayGraph", "OverlayState"]

logger = get_logger(__name__)


@dataclass(frozen=True)
class OverlayState:
    """Immutable snapshot of an overlay's removal sets.

    Attributes:
        removed_vertex_ids: Suppressed vertex ids.
        removed_edges: Suppressed directed (source_id, sink_id) pairs.
    """

    removed_vertex_ids: FrozenSet[VertexID] = frozenset()
    removed_edges: FrozenSet[EdgePair] = frozenset()


class OverlayGraph:
    """Hides vertices and directed edges of a base network without mutating it.

    The overlay holds the base NetworkView by reference together with two
    removal sets. Every read re-derives its answer from the base network
    filtered through the current removal sets; nothing is cached, so a
    mutation is visible to the very next query.

    Removing a vertex implicitly hides every edge touching it. Edge removal
    is directional: removing (a, b) leaves (b, a) untouched.

    Queries never raise for unknown or removed ids. Absence is reported as
    an empty set, None, or DISCONNECTED.

    Example:
        ```python
        overlay = OverlayGraph(network)
        overlay.remove_edge((1, 3))
        overlay.edge_weight(1, 3)                  # DISCONNECTED
        overlay.edge_weight_ignoring_overlay(1, 3) # base weight
        ```

    Mutations require exclusive access. Concurrent readers are safe only
    while no thread mutates the removal sets.
    """

    def __init__(
        self,
        network: NetworkView,
        removed_vertex_ids: Iterable[VertexID] = (),
        removed_edges: Iterable[EdgePair] = (),
    ) -> None:
        """
        Args:
            network: Base network to filter. Not copied.
            removed_vertex_ids: Initial vertex ids to suppress.
            removed_edges: Initial directed pairs to suppress.
        """
        self._network = network
        self._removed_vertex_ids: Set[VertexID] = set(removed_vertex_ids)
        self._removed_edges: Set[EdgePair] = {(s, t) for s, t in removed_edges}

    @property
    def network(self) -> NetworkView:
        """The wrapped base network."""
        return self._network

    @property
    def removed_vertex_ids(self) -> FrozenSet[VertexID]:
        return frozenset(self._removed_vertex_ids)

    @property
    def removed_edges(self) -> FrozenSet[EdgePair]:
        return frozenset(self._removed_edges)

    #
    # Mutation
    #
    def remove_vertices(self, vertex_ids: Iterable[VertexID]) -> None:
        """Suppress every vertex id given. Unknown ids are accepted."""
        vertex_ids = list(vertex_ids)
        self._removed_vertex_ids.update(vertex_ids)
        logger.debug("Removed vertices %s", vertex_ids)

    def remove_edges(self, pairs: Iterable[EdgePair]) -> None:
        """Suppress every directed (source_id, sink_id) pair given."""
        pairs = [(s, t) for s, t in pairs]
        self._removed_edges.update(pairs)
        logger.debug("Removed edges %s", pairs)

    def remove_vertex(self, vertex_id: VertexID) -> None:
        self.remove_vertices((vertex_id,))

    def remove_edge(self, pair: EdgePair) -> None:
        self.remove_edges((pair,))

    def restore_all_edges(self) -> None:
        self._removed_edges.clear()
        logger.debug("Restored all edges")

    def restore_edge(self, pair: EdgePair) -> None:
        source_id, sink_id = pair
        self._removed_edges.discard((source_id, sink_id))

    def restore_all_vertices(self) -> None:
        self._removed_vertex_ids.clear()
        logger.debug("Restored all vertices")

    def restore_vertex(self, vertex_id: VertexID) -> None:
        self._removed_vertex_ids.discard(vertex_id)

    def snapshot(self) -> OverlayState:
        """Return the current removal sets as an immutable OverlayState."""
        return OverlayState(self.removed_vertex_ids, self.removed_edges)

    def restore_state(self, state: OverlayState) -> None:
        """Replace both removal sets with those held by a snapshot."""
        self._removed_vertex_ids = set(state.removed_vertex_ids)
        self._removed_edges = set(state.removed_edges)
        logger.debug(
            "Restored overlay state: %d vertices, %d edges removed",
            len(self._removed_vertex_ids),
            len(self._removed_edges),
        )

    #
    # Queries
    #
    def is_vertex_removed(self, vertex_id: VertexID) -> bool:
        return vertex_id in self._removed_vertex_ids

    def is_edge_removed(self, source_id: VertexID, sink_id: VertexID) -> bool:
        """True if the pair is hidden, directly or through an endpoint."""
        return (
            source_id in self._removed_vertex_ids
            or sink_id in self._removed_vertex_ids
            or (source_id, sink_id) in self._removed_edges
        )

    def edge_weight(self, source_id: VertexID, sink_id: VertexID) -> float:
        """Weight of source_id -> sink_id as seen through the overlay.

        Returns:
            DISCONNECTED if either endpoint or the exact directed pair is
            removed; otherwise the base network's weight, which is itself
            DISCONNECTED when no such edge exists.
        """
        if self.is_edge_removed(source_id, sink_id):
            return DISCONNECTED
        return self._network.weight(source_id, sink_id)

    def edge_weight_ignoring_overlay(
        self, source_id: VertexID, sink_id: VertexID
    ) -> float:
        """Base network weight of source_id -> sink_id, ignoring all removals."""
        return self._network.weight(source_id, sink_id)

    def adjacent_vertices(self, vertex_id: VertexID) -> Set[Vertex]:
        """Out-neighbors of vertex_id reachable through the overlay."""
        if vertex_id in self._removed_vertex_ids:
            return set()
        return {
            Vertex(sink_id)
            for sink_id in self._network.out_neighbors(vertex_id)
            if sink_id not in self._removed_vertex_ids
            and (vertex_id, sink_id) not in self._removed_edges
        }

    def precedent_vertices(self, vertex_id: VertexID) -> Set[Vertex]:
        """In-neighbors of vertex_id reachable through the overlay."""
        if vertex_id in self._removed_vertex_ids:
            return set()
        return {
            Vertex(source_id)
            for source_id in self._network.in_neighbors(vertex_id)
            if source_id not in self._removed_vertex_ids
            and (source_id, vertex_id) not in self._removed_edges
        }

    def all_vertices(self) -> List[Vertex]:
        """Base vertices in base order, minus removed ones."""
        return [
            Vertex(vid)
            for vid in self._network.all_vertex_ids()
            if vid not in self._removed_vertex_ids
        ]

    def vertex_by_id(self, vertex_id: VertexID) -> Optional[Vertex]:
        """The Vertex for vertex_id, or None if removed or unknown."""
        if vertex_id in self._removed_vertex_ids:
            return None
        if not self._network.vertex_exists(vertex_id):
            return None
        return Vertex(vertex_id)

    def __repr__(self) -> str:
        return (
            f"OverlayGraph({self._network!r}, "
            f"removed_vertices={len(self._removed_vertex_ids)}, "
            f"removed_edges={len(self._removed_edges)})"
        )
