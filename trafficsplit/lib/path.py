"""Immutable route value returned by the path search."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterator, Tuple

from trafficsplit.lib.network import Vertex, VertexID


@dataclass(frozen=True)
class Path:
    """
    A loopless route through the network.

    Attributes:
        vertex_ids (Tuple[VertexID, ...]): Vertex ids from origin to destination,
            inclusive. A single id denotes the trivial self-path.
        weight (float): Sum of traversed edge weights as reported by the
            overlay at search time.
    """

    vertex_ids: Tuple[VertexID, ...]
    weight: float

    def __post_init__(self) -> None:
        if not self.vertex_ids:
            raise ValueError("A path must contain at least one vertex.")
        # DISCONNECTED (inf) is allowed; negative and NaN weights are not
        if not self.weight >= 0:
            raise ValueError(f"Path weight must be non-negative, got {self.weight!r}.")
        # Normalise lists and other sequences so paths stay hashable.
        object.__setattr__(self, "vertex_ids", tuple(self.vertex_ids))

    @property
    def src(self) -> VertexID:
        """Return the first vertex id (the origin)."""
        return self.vertex_ids[0]

    @property
    def dst(self) -> VertexID:
        """Return the last vertex id (the destination)."""
        return self.vertex_ids[-1]

    @property
    def vertices(self) -> Tuple[Vertex, ...]:
        return tuple(Vertex(vid) for vid in self.vertex_ids)

    @property
    def edges(self) -> Tuple[Tuple[VertexID, VertexID], ...]:
        """
        Return the ordered (source_id, sink_id) pairs traversed by the path.
        Empty for a trivial self-path.
        """
        return tuple(zip(self.vertex_ids, self.vertex_ids[1:]))

    def __len__(self) -> int:
        return len(self.vertex_ids)

    def __iter__(self) -> Iterator[VertexID]:
        return iter(self.vertex_ids)

    def __lt__(self, other: Any) -> bool:
        """
        Compare two paths by weight.

        Returns NotImplemented if `other` is not a Path.
        """
        if not isinstance(other, Path):
            return NotImplemented
        return self.weight < other.weight

    def __str__(self) -> str:
        return "-".join(str(vid) for vid in self.vertex_ids)
