"""Base road network: vertices, weights and the NetworkView interface."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable, List, Protocol, Set, Tuple, runtime_checkable

import networkx as nx

from trafficsplit.exceptions import UnknownVertex

VertexID = int
EdgePair = Tuple[VertexID, VertexID]

# Weight reported for any pair without a traversable edge.
DISCONNECTED: float = math.inf


@dataclass(frozen=True)
class Vertex:
    """
    A road network vertex. Equality and hashing are by id only.

    Attributes:
        id (VertexID): Non-negative integer identifier.
    """

    id: VertexID

    def __str__(self) -> str:
        return str(self.id)


@runtime_checkable
class NetworkView(Protocol):
    """
    Read-only interface an OverlayGraph filters.

    Implementations must never be mutated while an overlay over them is
    being queried.

    as_networkx() goes beyond plain graph queries: k_shortest_paths hands
    the returned DiGraph to networkx and filters it through the overlay
    with a weight callable, so it never calls adjacent_vertices() or
    precedent_vertices(). A view that cannot expose a networkx.DiGraph
    can be filtered by an OverlayGraph but not searched.
    """

    def weight(self, source_id: VertexID, sink_id: VertexID) -> float: ...

    def out_neighbors(self, vertex_id: VertexID) -> Set[VertexID]: ...

    def in_neighbors(self, vertex_id: VertexID) -> Set[VertexID]: ...

    def all_vertex_ids(self) -> List[VertexID]: ...

    def vertex_exists(self, vertex_id: VertexID) -> bool: ...

    def as_networkx(self) -> nx.DiGraph: ...


class RoadNetwork:
    """
    A static directed road network backed by a networkx.DiGraph.

    Vertices are non-negative integer ids; every edge carries a finite,
    non-negative "weight" attribute. Adding an edge never creates its
    endpoints implicitly.
    """

    def __init__(self, graph: nx.DiGraph | None = None) -> None:
        """
        Args:
            graph: An existing DiGraph to wrap. It is held by reference and
                its node/edge data must follow the conventions above.
        """
        self._graph = graph if graph is not None else nx.DiGraph()

    @classmethod
    def from_edges(
        cls,
        vertex_count: int,
        edges: Iterable[Tuple[VertexID, VertexID, float]],
    ) -> RoadNetwork:
        """
        Build a network with vertices 0..vertex_count-1 and the given edges.

        Args:
            vertex_count: Number of vertices.
            edges: (source_id, sink_id, weight) triples.

        Returns:
            A new RoadNetwork.

        Raises:
            ValueError: On a negative vertex count or any invalid edge.
        """
        if vertex_count < 0:
            raise ValueError(f"Vertex count must be non-negative, got {vertex_count}.")
        network = cls()
        for vid in range(vertex_count):
            network.add_vertex(vid)
        for source_id, sink_id, weight in edges:
            network.add_edge(source_id, sink_id, weight)
        return network

    #
    # Construction
    #
    def add_vertex(self, vertex_id: VertexID) -> Vertex:
        """
        Add a vertex, disallowing duplicates.

        Raises:
            ValueError: If the id is negative, not an int, or already present.
        """
        if isinstance(vertex_id, bool) or not isinstance(vertex_id, int):
            raise ValueError(f"Vertex id must be an integer, got {vertex_id!r}.")
        if vertex_id < 0:
            raise ValueError(f"Vertex id must be non-negative, got {vertex_id}.")
        if vertex_id in self._graph:
            raise ValueError(f"Vertex '{vertex_id}' already exists in this network.")
        self._graph.add_node(vertex_id)
        return Vertex(vertex_id)

    def add_edge(self, source_id: VertexID, sink_id: VertexID, weight: float) -> None:
        """
        Add (or overwrite) the directed edge source_id -> sink_id.

        Raises:
            ValueError: If an endpoint is missing or the weight is not a
                finite non-negative number.
        """
        if source_id not in self._graph:
            raise ValueError(f"Source vertex '{source_id}' does not exist.")
        if sink_id not in self._graph:
            raise ValueError(f"Sink vertex '{sink_id}' does not exist.")
        weight = float(weight)
        if not math.isfinite(weight) or weight < 0:
            raise ValueError(
                f"Edge {source_id}->{sink_id} weight must be finite and non-negative, "
                f"got {weight}."
            )
        self._graph.add_edge(source_id, sink_id, weight=weight)

    #
    # NetworkView
    #
    def weight(self, source_id: VertexID, sink_id: VertexID) -> float:
        data = self._graph.get_edge_data(source_id, sink_id)
        if data is None:
            return DISCONNECTED
        return data["weight"]

    def out_neighbors(self, vertex_id: VertexID) -> Set[VertexID]:
        if vertex_id not in self._graph:
            return set()
        return set(self._graph.successors(vertex_id))

    def in_neighbors(self, vertex_id: VertexID) -> Set[VertexID]:
        if vertex_id not in self._graph:
            return set()
        return set(self._graph.predecessors(vertex_id))

    def all_vertex_ids(self) -> List[VertexID]:
        return list(self._graph.nodes)

    def vertex_exists(self, vertex_id: VertexID) -> bool:
        return vertex_id in self._graph

    def as_networkx(self) -> nx.DiGraph:
        return self._graph

    #
    # Convenience
    #
    def vertex(self, vertex_id: VertexID) -> Vertex:
        """
        Return the Vertex for an id.

        Raises:
            UnknownVertex: If the id is not in the network.
        """
        if vertex_id not in self._graph:
            raise UnknownVertex(vertex_id)
        return Vertex(vertex_id)

    @property
    def vertex_count(self) -> int:
        return self._graph.number_of_nodes()

    @property
    def edge_count(self) -> int:
        return self._graph.number_of_edges()

    def __repr__(self) -> str:
        return f"RoadNetwork(vertices={self.vertex_count}, edges={self.edge_count})"
