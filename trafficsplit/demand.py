"""Demand and allocation records exchanged with the allocation engine."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from trafficsplit.exceptions import InvalidDemand
from trafficsplit.lib.network import VertexID


def _is_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


@dataclass(frozen=True, slots=True)
class DemandRecord:
    """
    Travel demand between one origin and one destination.

    Attributes:
        origin_id (VertexID): Origin vertex id.
        destination_id (VertexID): Destination vertex id.
        demand_count (int): Number of trips (vehicles) to split across routes.
    """

    origin_id: VertexID
    destination_id: VertexID
    demand_count: int

    def __post_init__(self) -> None:
        for name in ("origin_id", "destination_id"):
            value = getattr(self, name)
            if not _is_int(value) or value < 0:
                raise InvalidDemand(
                    f"{name} must be a non-negative integer, got {value!r}."
                )
        if not _is_int(self.demand_count):
            raise InvalidDemand(
                f"demand_count must be an integer, got {self.demand_count!r}."
            )
        if self.demand_count < 0:
            raise InvalidDemand(
                f"demand_count must be non-negative, got {self.demand_count}."
            )


@dataclass(frozen=True, slots=True)
class AllocationRecord:
    """
    A share of one demand assigned to one route.

    Attributes:
        vertex_ids (Tuple[VertexID, ...]): Route from origin to destination.
        allocated_count (int): Trips assigned to the route, always positive.
    """

    vertex_ids: Tuple[VertexID, ...]
    allocated_count: int

    def __post_init__(self) -> None:
        if not _is_int(self.allocated_count) or self.allocated_count <= 0:
            raise ValueError(
                f"allocated_count must be a positive integer, got {self.allocated_count!r}."
            )
