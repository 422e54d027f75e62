"""Tests for OverlayGraph."""

import itertools

import pytest

from trafficsplit.lib.network import DISCONNECTED, RoadNetwork, Vertex
from trafficsplit.lib.overlay import OverlayGraph, OverlayState


def _vids(vertices):
    return {v.id for v in vertices}


class TestOverlayBasics:
    """Construction and unfiltered behaviour."""

    def test_no_removals_mirrors_base(self, triangle_network):
        overlay = OverlayGraph(triangle_network)

        assert overlay.network is triangle_network
        assert overlay.removed_vertex_ids == frozenset()
        assert overlay.removed_edges == frozenset()
        assert [v.id for v in overlay.all_vertices()] == [1, 2, 3]
        assert overlay.edge_weight(1, 3) == 30.0
        assert _vids(overlay.adjacent_vertices(1)) == {2, 3}
        assert _vids(overlay.precedent_vertices(3)) == {1, 2}

    def test_initial_removal_sets(self, triangle_network):
        overlay = OverlayGraph(
            triangle_network, removed_vertex_ids=[2], removed_edges=[[1, 3]]
        )
        assert overlay.removed_vertex_ids == {2}
        assert overlay.removed_edges == {(1, 3)}

    def test_removal_sets_are_read_only_views(self, triangle_overlay):
        triangle_overlay.remove_vertex(2)
        removed = triangle_overlay.removed_vertex_ids
        assert isinstance(removed, frozenset)
        triangle_overlay.restore_vertex(2)
        assert removed == {2}
        assert triangle_overlay.removed_vertex_ids == frozenset()

    def test_repr(self, triangle_overlay):
        triangle_overlay.remove_edge((1, 3))
        assert "removed_edges=1" in repr(triangle_overlay)


class TestEdgeRemoval:
    """Directed edge closures."""

    def test_removed_edge_weight_is_disconnected(self, triangle_overlay):
        triangle_overlay.remove_edge((1, 3))

        assert triangle_overlay.edge_weight(1, 3) == DISCONNECTED
        assert triangle_overlay.edge_weight_ignoring_overlay(1, 3) == 30.0
        assert triangle_overlay.edge_weight(1, 2) == 10.0

    def test_removal_is_directional(self):
        net = RoadNetwork.from_edges(2, [(0, 1, 4.0), (1, 0, 6.0)])
        overlay = OverlayGraph(net)
        overlay.remove_edge((0, 1))

        assert overlay.edge_weight(0, 1) == DISCONNECTED
        assert overlay.edge_weight(1, 0) == 6.0
        assert overlay.adjacent_vertices(0) == set()
        assert overlay.adjacent_vertices(1) == {Vertex(0)}
        assert overlay.precedent_vertices(1) == set()
        assert overlay.precedent_vertices(0) == {Vertex(1)}

    def test_removed_edge_hidden_from_adjacency(self, triangle_overlay):
        triangle_overlay.remove_edges([(1, 3)])

        assert _vids(triangle_overlay.adjacent_vertices(1)) == {2}
        assert _vids(triangle_overlay.precedent_vertices(3)) == {2}
        # Vertices themselves stay visible
        assert _vids(triangle_overlay.all_vertices()) == {1, 2, 3}

    def test_restore_single_edge(self, triangle_overlay):
        triangle_overlay.remove_edges([(1, 3), (1, 2)])
        triangle_overlay.restore_edge((1, 3))

        assert triangle_overlay.edge_weight(1, 3) == 30.0
        assert triangle_overlay.edge_weight(1, 2) == DISCONNECTED

    def test_restore_all_edges(self, triangle_overlay):
        triangle_overlay.remove_edges([(1, 3), (1, 2)])
        triangle_overlay.restore_all_edges()

        assert triangle_overlay.removed_edges == frozenset()
        assert _vids(triangle_overlay.adjacent_vertices(1)) == {2, 3}

    def test_missing_base_edge_stays_disconnected(self, triangle_overlay):
        assert triangle_overlay.edge_weight(3, 1) == DISCONNECTED


class TestVertexRemoval:
    """Vertex closures hide every touching edge."""

    def test_removed_vertex_hides_incident_edges(self, triangle_overlay):
        triangle_overlay.remove_vertex(2)

        assert triangle_overlay.edge_weight(1, 2) == DISCONNECTED
        assert triangle_overlay.edge_weight(2, 3) == DISCONNECTED
        assert triangle_overlay.edge_weight(1, 3) == 30.0
        assert triangle_overlay.is_edge_removed(1, 2)
        assert not triangle_overlay.is_edge_removed(1, 3)

    def test_removed_vertex_adjacency(self, triangle_overlay):
        triangle_overlay.remove_vertex(2)

        assert triangle_overlay.adjacent_vertices(2) == set()
        assert triangle_overlay.precedent_vertices(2) == set()
        assert _vids(triangle_overlay.adjacent_vertices(1)) == {3}
        assert _vids(triangle_overlay.precedent_vertices(3)) == {1}

    def test_removed_vertex_lookup(self, triangle_overlay):
        triangle_overlay.remove_vertices([2])

        assert triangle_overlay.vertex_by_id(2) is None
        assert triangle_overlay.vertex_by_id(1) == Vertex(1)
        assert [v.id for v in triangle_overlay.all_vertices()] == [1, 3]
        assert triangle_overlay.is_vertex_removed(2)

    def test_restore_vertex(self, triangle_overlay):
        triangle_overlay.remove_vertices([1, 2])
        triangle_overlay.restore_vertex(2)

        assert triangle_overlay.removed_vertex_ids == {1}
        assert triangle_overlay.edge_weight(2, 3) == 10.0

    def test_restore_all_vertices_equals_fresh_overlay(self, triangle_network):
        overlay = OverlayGraph(triangle_network)
        fresh = OverlayGraph(triangle_network)
        overlay.remove_vertices([1, 2, 3])
        overlay.restore_all_vertices()

        for v in (1, 2, 3):
            assert overlay.adjacent_vertices(v) == fresh.adjacent_vertices(v)
            assert overlay.precedent_vertices(v) == fresh.precedent_vertices(v)
            assert overlay.vertex_by_id(v) == fresh.vertex_by_id(v)
        assert overlay.all_vertices() == fresh.all_vertices()


class TestStructuralAbsence:
    """Unknown ids never raise."""

    def test_unknown_ids(self, triangle_overlay):
        assert triangle_overlay.vertex_by_id(99) is None
        assert triangle_overlay.adjacent_vertices(99) == set()
        assert triangle_overlay.precedent_vertices(99) == set()
        assert triangle_overlay.edge_weight(99, 1) == DISCONNECTED

    def test_unknown_ids_accepted_for_removal(self, triangle_overlay):
        triangle_overlay.remove_vertex(99)
        triangle_overlay.remove_edge((98, 99))

        assert _vids(triangle_overlay.all_vertices()) == {1, 2, 3}
        assert triangle_overlay.edge_weight(1, 2) == 10.0

    def test_restore_absent_is_noop(self, triangle_overlay):
        triangle_overlay.restore_vertex(1)
        triangle_overlay.restore_edge((1, 2))
        triangle_overlay.restore_all_edges()
        triangle_overlay.restore_all_vertices()

        assert triangle_overlay.snapshot() == OverlayState()


class TestIdempotenceAndInvariants:
    """Set semantics and filtering invariants across removal states."""

    def test_double_removal_same_state(self, triangle_network):
        once = OverlayGraph(triangle_network)
        twice = OverlayGraph(triangle_network)
        once.remove_vertex(2)
        twice.remove_vertex(2)
        twice.remove_vertex(2)
        once.remove_edge((1, 3))
        twice.remove_edges([(1, 3), (1, 3)])

        assert once.snapshot() == twice.snapshot()
        assert once.all_vertices() == twice.all_vertices()

    def test_base_weights_unchanged_by_mutation(self, grid_network):
        overlay = OverlayGraph(grid_network)
        pairs = list(itertools.permutations(range(6), 2))
        before = {p: overlay.edge_weight_ignoring_overlay(*p) for p in pairs}

        overlay.remove_vertices([1, 4])
        overlay.remove_edges([(0, 3), (5, 2)])
        overlay.restore_vertex(4)
        overlay.restore_all_edges()

        after = {p: overlay.edge_weight_ignoring_overlay(*p) for p in pairs}
        assert before == after

    def test_adjacency_never_leaks_removed_elements(self, grid_network):
        overlay = OverlayGraph(grid_network)
        overlay.remove_vertices([4])
        overlay.remove_edges([(0, 1), (2, 5)])

        for v in range(6):
            out = _vids(overlay.adjacent_vertices(v))
            inc = _vids(overlay.precedent_vertices(v))
            assert not out & overlay.removed_vertex_ids
            assert not inc & overlay.removed_vertex_ids
            for w in out:
                assert (v, w) not in overlay.removed_edges
                assert overlay.edge_weight(v, w) != DISCONNECTED
            for u in inc:
                assert (u, v) not in overlay.removed_edges

    def test_retained_edges_keep_base_weight(self, grid_network):
        overlay = OverlayGraph(grid_network)
        overlay.remove_vertices([4])
        overlay.remove_edges([(0, 1)])

        for u, v in itertools.permutations(range(6), 2):
            if overlay.is_edge_removed(u, v):
                assert overlay.edge_weight(u, v) == DISCONNECTED
            else:
                assert overlay.edge_weight(u, v) == grid_network.weight(u, v)


class TestSnapshots:
    def test_snapshot_and_restore(self, grid_network):
        overlay = OverlayGraph(grid_network)
        overlay.remove_vertex(1)
        saved = overlay.snapshot()

        overlay.remove_vertex(4)
        overlay.remove_edge((0, 3))
        overlay.restore_state(saved)

        assert overlay.removed_vertex_ids == {1}
        assert overlay.removed_edges == frozenset()
        assert overlay.edge_weight(0, 3) == 150.0

    def test_snapshot_is_independent(self, grid_network):
        overlay = OverlayGraph(grid_network)
        saved = overlay.snapshot()
        overlay.remove_vertex(0)
        assert saved.removed_vertex_ids == frozenset()

    def test_overlays_on_one_network_are_independent(self, grid_network):
        a = OverlayGraph(grid_network)
        b = OverlayGraph(grid_network)
        a.remove_vertex(1)

        assert a.vertex_by_id(1) is None
        assert b.vertex_by_id(1) == Vertex(1)


def test_snapshot_is_frozen():
    state = OverlayState(frozenset({1}), frozenset())
    with pytest.raises(AttributeError):
        state.removed_vertex_ids = frozenset()  # type: ignore[misc]
