"""Tests for the SVG preview renderer."""

from __future__ import annotations

from mermaid_layout import Edge, Graph, Node, compute_layout
from mermaid_layout.renderers import Renderer, SvgRenderer


def render(graph: Graph, strategy: str = "tree") -> str:
    return SvgRenderer().render(compute_layout(graph, strategy))


def sample_graph() -> Graph:
    return Graph(
        nodes=[
            Node(id="t", label="Housing <market>", category="title"),
            Node(id="a", label="Interest\nrates", category="factorNode"),
            Node(id="b", label="Demand", category="stanceNode"),
        ],
        edges=[
            Edge(id="e1", source="a", target="b", label="x decreases"),
            Edge(id="e2", source="t", target="a", label="frames"),
        ],
    )


class TestSvgRenderer:
    def test_satisfies_protocol(self):
        renderer: Renderer = SvgRenderer()
        assert renderer.media_type == "image/svg+xml"
        assert renderer.render(compute_layout(Graph())) == ""

    def test_document_structure(self):
        svg = render(sample_graph())
        assert svg.startswith("<svg ")
        assert svg.endswith("</svg>")
        assert svg.count("<rect ") == 4  # background + three nodes

    def test_edge_polarity_styles(self):
        """Negative edges are red and dashed, positive ones green and solid."""
        svg = render(sample_graph())
        assert 'stroke="#cc0000" stroke-width="1.5" stroke-dasharray="5,5" marker-end="url(#arrow-negative)"' in svg
        assert 'stroke="#2E8B57" stroke-width="1.5" marker-end="url(#arrow-positive)"' in svg

    def test_class_fills(self):
        svg = render(sample_graph())
        assert 'fill="#bbf"' in svg
        assert 'fill="#f9f"' in svg

    def test_multiline_label_uses_tspans(self):
        svg = render(sample_graph())
        assert ">Interest</tspan>" in svg
        assert ">rates</tspan>" in svg

    def test_text_escaped(self):
        svg = render(sample_graph())
        assert "Housing &lt;market&gt;" in svg
        assert "<market>" not in svg

    def test_renders_every_strategy(self):
        for strategy in ("default", "tree", "force"):
            assert "<path " in render(sample_graph(), strategy)
