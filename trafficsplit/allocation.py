"""Split origin/destination demand across alternative routes.

Each candidate route gets a decay score ``exp(-weight * scale)``; demand is
shared in proportion to the scores and floored to whole trips. Shares are
computed with exact rational arithmetic. Flooring loss is not redistributed,
so the emitted counts may sum to less than the demand.
"""

from __future__ import annotations

import math
from fractions import Fraction
from typing import Callable, Iterable, Iterator, List, Optional, Sequence

from trafficsplit.config import ALLOCATION_CONFIG
from trafficsplit.demand import AllocationRecord, DemandRecord
from trafficsplit.exceptions import InvalidDemand
from trafficsplit.lib.ksp import k_shortest_paths
from trafficsplit.lib.network import VertexID
from trafficsplit.lib.overlay import OverlayGraph
from trafficsplit.lib.path import Path
from trafficsplit.logging import get_logger

__all__ = ["AllocationEngine", "PathSearch", "decay_score"]

logger = get_logger(__name__)

PathSearch = Callable[[OverlayGraph, VertexID, VertexID, int], List[Path]]


def decay_score(weight: float, scale: float) -> float:
    """Return exp(-weight * scale); 0.0 for a DISCONNECTED (infinite) weight."""
    return math.exp(-weight * scale)


class AllocationEngine:
    """Turns ranked candidate paths into integer flow assignments.

    The engine keeps no per-demand state: allocate() is a pure function of
    its inputs, and route() only reads the overlay it is given.

    Attributes:
        scale: Positive decay constant applied to path weights.
        k: Number of candidate paths requested from the search.
        search: Callable returning ranked candidate paths for an overlay.
    """

    def __init__(
        self,
        scale: Optional[float] = None,
        k: Optional[int] = None,
        search: PathSearch = k_shortest_paths,
    ) -> None:
        self.scale = ALLOCATION_CONFIG.scale if scale is None else scale
        self.k = ALLOCATION_CONFIG.k if k is None else k
        self.search = search
        if not self.scale > 0:
            raise ValueError(f"scale must be positive, got {self.scale!r}")
        if self.k < 1:
            raise ValueError(f"k must be at least 1, got {self.k!r}")

    def score(self, path: Path) -> float:
        return decay_score(path.weight, self.scale)

    def allocate(
        self, demand: DemandRecord, candidate_paths: Sequence[Path]
    ) -> List[AllocationRecord]:
        """Split demand across candidate paths.

        Candidates are taken in the order given, which must already be
        non-decreasing by weight; they are never re-sorted. Paths whose
        share floors to zero are omitted.

        Args:
            demand: The demand to split.
            candidate_paths: Non-empty ranked candidates for the demand's pair.

        Returns:
            Allocation records in candidate order.

        Raises:
            InvalidDemand: If candidate_paths is empty or the demand count
                is negative.
        """
        if demand.demand_count < 0:
            raise InvalidDemand(
                f"demand_count must be non-negative, got {demand.demand_count}."
            )
        if not candidate_paths:
            raise InvalidDemand(
                f"No candidate paths given for {demand.origin_id}->{demand.destination_id}."
            )

        scores = [self.score(path) for path in candidate_paths]
        # Exact shares: emitted counts never sum past the demand
        exact_scores = [Fraction(score) for score in scores]
        total = sum(exact_scores)
        if total == 0:
            logger.debug(
                "All candidates for %s->%s are disconnected",
                demand.origin_id,
                demand.destination_id,
            )
            return []

        records: List[AllocationRecord] = []
        for path, score, exact in zip(candidate_paths, scores, exact_scores):
            allocated = (exact * demand.demand_count) // total
            logger.debug(
                "Path %s weight=%s score=%.6g allocated=%d",
                path,
                path.weight,
                score,
                allocated,
            )
            if allocated == 0:
                continue
            records.append(AllocationRecord(path.vertex_ids, allocated))
        return records

    def route(
        self, demand: DemandRecord, overlay: OverlayGraph
    ) -> List[AllocationRecord]:
        """Search candidate paths for a demand and allocate it.

        A pair with no route through the overlay yields no records.

        Raises:
            UnknownVertex: If an endpoint is not in the base network.
        """
        candidates = self.search(
            overlay, demand.origin_id, demand.destination_id, self.k
        )
        if not candidates:
            logger.info(
                "No route from %s to %s; %d trips unassigned",
                demand.origin_id,
                demand.destination_id,
                demand.demand_count,
            )
            return []
        return self.allocate(demand, candidates)

    def route_all(
        self, demands: Iterable[DemandRecord], overlay: OverlayGraph
    ) -> Iterator[AllocationRecord]:
        """Route every demand in order against one overlay state."""
        total_demand = 0
        total_allocated = 0
        for demand in demands:
            total_demand += demand.demand_count
            for record in self.route(demand, overlay):
                total_allocated += record.allocated_count
                yield record
        logger.info(
            "Allocated %d of %d trips (%d lost to rounding or missing routes)",
            total_allocated,
            total_demand,
            total_demand - total_allocated,
        )
