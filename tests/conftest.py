"""Shared networks for the trafficsplit test suite."""

from __future__ import annotations

import pytest

from trafficsplit.lib.network import RoadNetwork
from trafficsplit.lib.overlay import OverlayGraph


@pytest.fixture
def triangle_network() -> RoadNetwork:
    """Vertices 1, 2, 3 with 1->2 = 10, 2->3 = 10 and 1->3 = 30."""
    net = RoadNetwork()
    for vid in (1, 2, 3):
        net.add_vertex(vid)
    net.add_edge(1, 2, 10)
    net.add_edge(2, 3, 10)
    net.add_edge(1, 3, 30)
    return net


@pytest.fixture
def triangle_overlay(triangle_network: RoadNetwork) -> OverlayGraph:
    return OverlayGraph(triangle_network)


@pytest.fixture
def grid_network() -> RoadNetwork:
    """
    Six-vertex two-way grid:

        0 -- 1 -- 2
        |    |    |
        3 -- 4 -- 5

    Horizontal roads weigh 100, vertical roads 150.
    """
    edges = []
    for a, b, w in [
        (0, 1, 100),
        (1, 2, 100),
        (3, 4, 100),
        (4, 5, 100),
        (0, 3, 150),
        (1, 4, 150),
        (2, 5, 150),
    ]:
        edges.append((a, b, w))
        edges.append((b, a, w))
    return RoadNetwork.from_edges(6, edges)
