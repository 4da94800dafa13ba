"""Tests for force.py — initial circle and the Fruchterman-Reingold simulation."""

from __future__ import annotations

import dataclasses
import math

import pytest

from mermaid_layout import DEFAULT_CONFIG, AdjacencyIndex, Edge, Graph, Node, initial_circle, simulate
from mermaid_layout.config import FORCE_CENTER, INITIAL_DAMPING, MAX_STEP

# ─── Helpers ──────────────────────────────────────────────────────────────────


def index_for(n: int, edges: list[tuple[int, int]] = ()) -> AdjacencyIndex:
    graph = Graph(
        nodes=[Node(id=f"n{i}", label=f"n{i}") for i in range(n)],
        edges=[Edge(id=f"e{k}", source=f"n{s}", target=f"n{t}") for k, (s, t) in enumerate(edges)],
    )
    return AdjacencyIndex.build(graph)


def all_finite(points) -> bool:
    return all(math.isfinite(p.x) and math.isfinite(p.y) for p in points)


# ─── Initial Circle Tests ─────────────────────────────────────────────────────


class TestInitialCircle:
    def test_empty(self):
        assert initial_circle(0) == []

    def test_two_nodes_opposite(self):
        """Two nodes start on opposite sides of the centre at the minimum radius."""
        a, b = initial_circle(2)
        cx, cy = FORCE_CENTER
        assert (a.x, a.y) == pytest.approx((cx + 300, cy))
        assert (b.x, b.y) == pytest.approx((cx - 300, cy))

    @pytest.mark.parametrize("count,radius", [(3, 300), (20, 400), (40, 600)])
    def test_radius_clamped(self, count, radius):
        """Radius is 20 per node, clamped to [300, 600]."""
        cx, cy = FORCE_CENTER
        for p in initial_circle(count):
            assert math.hypot(p.x - cx, p.y - cy) == pytest.approx(radius)

    def test_positions_distinct(self):
        points = initial_circle(12)
        assert len({(round(p.x, 6), round(p.y, 6)) for p in points}) == 12


# ─── Simulation Tests ─────────────────────────────────────────────────────────


class TestSimulate:
    def test_empty_graph(self):
        assert simulate(index_for(0)) == []

    def test_disconnected_pair_stays_finite_and_apart(self):
        """Two unconnected nodes repel and never collapse onto each other."""
        a, b = simulate(index_for(2))
        assert all_finite([a, b])
        assert (a.x, a.y) != (b.x, b.y)

    def test_single_node_finite(self):
        (p,) = simulate(index_for(1))
        assert all_finite([p])

    def test_dense_graph_finite(self):
        """A complete graph on 8 nodes stays finite after all iterations."""
        edges = [(i, j) for i in range(8) for j in range(8) if i != j]
        assert all_finite(simulate(index_for(8, edges)))

    def test_self_loop_and_duplicates_finite(self):
        assert all_finite(simulate(index_for(3, [(0, 0), (0, 1), (0, 1), (1, 2)])))

    def test_deterministic(self):
        """Same input, same output."""
        idx = index_for(6, [(0, 1), (1, 2), (2, 0), (3, 4)])
        assert simulate(idx) == simulate(idx)

    def test_zero_iterations_returns_circle(self):
        config = dataclasses.replace(DEFAULT_CONFIG, force_iterations=0)
        assert simulate(index_for(4), config) == initial_circle(4, config)

    def test_first_step_is_capped(self):
        """One iteration moves each node at most MAX_STEP × INITIAL_DAMPING."""
        config = dataclasses.replace(DEFAULT_CONFIG, force_iterations=1)
        start = initial_circle(5, config)
        end = simulate(index_for(5, [(0, 1), (1, 2)]), config)
        for s, e in zip(start, end):
            assert math.hypot(e.x - s.x, e.y - s.y) <= MAX_STEP * INITIAL_DAMPING + 1e-9

    def test_connected_nodes_pulled_together(self):
        """An edge brings its endpoints closer than an unconnected pair on the same circle."""
        points = simulate(index_for(4, [(0, 2)]))
        linked = math.hypot(points[0].x - points[2].x, points[0].y - points[2].y)
        free = math.hypot(points[1].x - points[3].x, points[1].y - points[3].y)
        assert linked < free
