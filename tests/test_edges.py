"""Tests for edges.py — polarity classification, basis spline paths and edge styling."""

from __future__ import annotations

import pytest

from mermaid_layout import (
    Edge,
    Explicit,
    NodePlacement,
    Point,
    basis_path,
    build_edge_layout,
    control_points,
    edge_style,
    resolve_polarity,
)
from mermaid_layout.edges import NEGATIVE_COLOR, POSITIVE_COLOR, basis_commands

# ─── Helpers ──────────────────────────────────────────────────────────────────


def make_edge(**kwargs) -> Edge:
    return Edge(id="e", source="A", target="B", **kwargs)


def make_placement(node_id: str, x: float, y: float, width: float = 212.0, height: float = 42.0) -> NodePlacement:
    return NodePlacement(id=node_id, x=x, y=y, width=width, height=height)


# ─── Polarity Tests ───────────────────────────────────────────────────────────


class TestResolvePolarity:
    def test_plain_edge_positive(self):
        assert resolve_polarity(make_edge(label="increases")) is False

    def test_no_label_positive(self):
        assert resolve_polarity(make_edge()) is False

    @pytest.mark.parametrize("edge_type", ["--x", "a--xb", "---"])
    def test_negative_edge_types(self, edge_type):
        assert resolve_polarity(make_edge(edge_type=edge_type)) is True

    def test_positive_edge_type(self):
        assert resolve_polarity(make_edge(edge_type="-->")) is False

    @pytest.mark.parametrize("flag", ["isNegative", "negative"])
    def test_data_flags(self, flag):
        assert resolve_polarity(make_edge(data={flag: True})) is True

    def test_data_flag_must_be_boolean(self):
        """Truthy non-boolean values are not a negative flag."""
        assert resolve_polarity(make_edge(data={"isNegative": "true", "negative": 1})) is False

    def test_incoming_style_ignored(self):
        """A red or dashed caller style does not make an edge negative."""
        assert resolve_polarity(make_edge(label="increases", style={"stroke": NEGATIVE_COLOR})) is False
        assert resolve_polarity(make_edge(style={"strokeDasharray": "5,5"})) is False

    def test_label_heuristic_over_matches(self):
        """Any label containing an x counts, even when the x is incidental."""
        assert resolve_polarity(make_edge(label="x decreases risk")) is True
        assert resolve_polarity(make_edge(label="Extra funding")) is True

    def test_label_heuristic_case_insensitive(self):
        assert resolve_polarity(make_edge(label="X")) is True

    def test_explicit_overrides_heuristics(self):
        """An explicit hint wins over the type, data and label markers."""
        edge = make_edge(label="x", edge_type="--x", data={"isNegative": True}, polarity=Explicit(False))
        assert resolve_polarity(edge) is False
        assert resolve_polarity(make_edge(label="boosts", polarity=Explicit(True))) is True


# ─── Basis Spline Tests ───────────────────────────────────────────────────────


class TestControlPoints:
    def test_midpoint_height(self):
        """Interior points sit at the vertical midpoint, under source and over target."""
        pts = control_points(Point(100, 50), Point(300, 250))
        assert pts == [Point(100, 50), Point(100, 150), Point(300, 150), Point(300, 250)]

    def test_upward_edge(self):
        """An edge going up still uses the vertical midpoint."""
        pts = control_points(Point(0, 200), Point(0, 0))
        assert [p.y for p in pts] == [200, 100, 100, 0]


class TestBasisCommands:
    def test_starts_and_ends_on_endpoints(self):
        """The path starts on the first point and ends exactly on the last."""
        pts = control_points(Point(12.25, 7.5), Point(401.75, 333.125))
        commands = basis_commands(pts)
        assert commands[0] == ("M", [pts[0]])
        assert commands[-1][1][-1] == pts[-1]

    def test_four_points_shape(self):
        """Four points → move, line, three cubics, closing line."""
        ops = [op for op, _ in basis_commands(control_points(Point(0, 0), Point(60, 60)))]
        assert ops == ["M", "L", "C", "C", "C", "L"]

    def test_first_cubic_values(self):
        """First segment follows the uniform B-spline weights."""
        pts = [Point(0, 0), Point(6, 0), Point(12, 0), Point(18, 0)]
        commands = basis_commands(pts)
        assert commands[1] == ("L", [Point(1, 0)])
        assert commands[2] == ("C", [Point(2, 0), Point(4, 0), Point(6, 0)])

    def test_degenerate_inputs(self):
        assert basis_commands([]) == []
        assert basis_commands([Point(1, 2)]) == [("M", [Point(1, 2)])]
        assert basis_path([Point(0, 0), Point(10, 10)]) == "M0,0L10,10"

    def test_path_text(self):
        path = basis_path(control_points(Point(100, 50), Point(300, 250)))
        assert path.startswith("M100,50L100,66.667C")
        assert path.endswith("L300,250")


# ─── Styling Tests ────────────────────────────────────────────────────────────


class TestEdgeStyle:
    def test_negative(self):
        style = edge_style(True)
        assert style.stroke == NEGATIVE_COLOR
        assert style.dasharray == "5,5"
        assert style.marker_end.color == NEGATIVE_COLOR
        assert style.marker_end.type == "arrowclosed"

    def test_positive(self):
        style = edge_style(False)
        assert style.stroke == POSITIVE_COLOR
        assert style.dasharray is None
        assert style.marker_end.color == POSITIVE_COLOR
        assert style.stroke_width == 1.5

    def test_extra_keys_kept(self):
        """Unrelated caller style survives; stroke keys are replaced."""
        style = edge_style(False, {"opacity": 0.5, "stroke": "#000"})
        assert style.extra == {"opacity": 0.5}
        assert style.stroke == POSITIVE_COLOR


# ─── build_edge_layout Tests ──────────────────────────────────────────────────


class TestBuildEdgeLayout:
    def test_endpoints_are_connectors(self):
        """Path runs from the source's bottom-centre to the target's top-centre."""
        src = make_placement("A", 100, 100)
        tgt = make_placement("B", 400, 300)
        layout = build_edge_layout(make_edge(), src, tgt)
        assert layout.start == src.bottom_connector() == Point(206, 142)
        assert layout.end == tgt.top_connector() == Point(506, 300)

    def test_label_anchor_is_midpoint(self):
        src = make_placement("A", 0, 0)
        tgt = make_placement("B", 200, 200)
        layout = build_edge_layout(make_edge(label="x decreases risk"), src, tgt)
        start, end = src.bottom_connector(), tgt.top_connector()
        assert layout.label_anchor == Point((start.x + end.x) / 2, (start.y + end.y) / 2)
        assert layout.is_negative is True
        assert layout.style.dasharray == "5,5"
        assert layout.label == "x decreases risk"
