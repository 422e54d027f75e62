"""trafficsplit: demand splitting across alternative routes under road closures.

Primary API:
    RoadNetwork - static directed road network (networkx-backed)
    OverlayGraph - removes vertices/edges from a network without mutating it
    k_shortest_paths() - ranked loopless candidate routes through an overlay
    AllocationEngine - splits demand across candidates by exp(-weight * scale)

Example:
    from trafficsplit import AllocationEngine, DemandRecord, OverlayGraph, RoadNetwork

    net = RoadNetwork.from_edges(3, [(0, 1, 10.0), (1, 2, 10.0), (0, 2, 30.0)])
    overlay = OverlayGraph(net)
    overlay.remove_edge((0, 2))

    records = AllocationEngine().route(DemandRecord(0, 2, 100), overlay)
"""

from __future__ import annotations

from trafficsplit import cli, logging
from trafficsplit.allocation import AllocationEngine, decay_score
from trafficsplit.config import ALLOCATION_CONFIG, AllocationConfig
from trafficsplit.demand import AllocationRecord, DemandRecord
from trafficsplit.exceptions import InvalidDemand, TrafficSplitError, UnknownVertex
from trafficsplit.lib.ksp import k_shortest_paths
from trafficsplit.lib.network import DISCONNECTED, NetworkView, RoadNetwork, Vertex
from trafficsplit.lib.overlay import OverlayGraph, OverlayState
from trafficsplit.lib.path import Path
from trafficsplit.scenario import ClosureScenario

__version__ = "0.1.0"

__all__ = [
    "__version__",
    # Model
    "Vertex",
    "Path",
    "NetworkView",
    "RoadNetwork",
    "DISCONNECTED",
    "OverlayGraph",
    "OverlayState",
    "ClosureScenario",
    "DemandRecord",
    "AllocationRecord",
    # Algorithms
    "k_shortest_paths",
    "AllocationEngine",
    "decay_score",
    # Config and errors
    "AllocationConfig",
    "ALLOCATION_CONFIG",
    "TrafficSplitError",
    "InvalidDemand",
    "UnknownVertex",
    # Utilities
    "cli",
    "logging",
]
