"""Graph input and layout output types shared by the strategies and renderers."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Union


@dataclass
class Point:
    """A 2D point in canvas pixels."""

    x: float
    y: float


# ─── Polarity Hint ────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class Explicit:
    """Polarity stated by the diagram author; never second-guessed."""

    negative: bool


@dataclass(frozen=True)
class Inferred:
    """No stated polarity: classify from the edge's type, data, style and label."""


PolarityHint = Union[Explicit, Inferred]


# ─── Input Graph ──────────────────────────────────────────────────────────────


@dataclass
class Node:
    """A diagram node.

    ``label`` may contain ``\\n``; each line renders on its own row.
    ``category`` selects a style class (``stanceNode``, ``factorNode``,
    ``title`` ...). ``width`` is recomputed by every layout.
    """

    id: str
    label: str = ""
    category: str | None = None
    width: float | None = None
    position: Point = field(default_factory=lambda: Point(0.0, 0.0))


@dataclass
class Edge:
    """A directed edge ``source → target``.

    ``edge_type``, ``data`` and ``style`` carry whatever the diagram parser
    attached; the edge builder reads polarity markers from them when
    ``polarity`` is ``Inferred``.
    """

    id: str
    source: str
    target: str
    label: str | None = None
    polarity: PolarityHint = field(default_factory=Inferred)
    edge_type: str | None = None
    data: Mapping[str, Any] = field(default_factory=dict)
    style: Mapping[str, Any] = field(default_factory=dict)


@dataclass
class Graph:
    """Ordered nodes and edges. Node order decides every tie-break."""

    nodes: list[Node] = field(default_factory=list)
    edges: list[Edge] = field(default_factory=list)

    def node_ids(self) -> set[str]:
        return {n.id for n in self.nodes}

    def dangling_edges(self) -> list[Edge]:
        """Edges whose source or target is not a node of this graph."""
        ids = self.node_ids()
        return [e for e in self.edges if e.source not in ids or e.target not in ids]

    @classmethod
    def from_dicts(cls, nodes: Iterable[Mapping[str, Any]], edges: Iterable[Mapping[str, Any]]) -> Graph:
        """Build a Graph from the node/edge dicts the diagram parser emits.

        Nodes look like ``{"id", "position": {"x", "y"}, "data": {"label",
        "className", "width"}}``; edges like ``{"id", "source", "target",
        "label", "type", "data", "style"}``. A ``polarity`` key on an edge
        (``True``/``False``) becomes an ``Explicit`` hint.
        """
        graph = cls()
        for raw in nodes:
            data = raw.get("data") or {}
            pos = raw.get("position") or {}
            graph.nodes.append(
                Node(
                    id=str(raw["id"]),
                    label=str(data.get("label") or raw.get("label") or ""),
                    category=data.get("className", raw.get("category")),
                    width=data.get("width"),
                    position=Point(float(pos.get("x", 0.0)), float(pos.get("y", 0.0))),
                )
            )
        for i, raw in enumerate(edges):
            polarity = raw.get("polarity")
            label = raw.get("label")
            graph.edges.append(
                Edge(
                    id=str(raw.get("id", f"e{i}")),
                    source=str(raw["source"]),
                    target=str(raw["target"]),
                    label=None if label is None else str(label),
                    polarity=Inferred() if polarity is None else Explicit(bool(polarity)),
                    edge_type=raw.get("type"),
                    data=dict(raw.get("data") or {}),
                    style=dict(raw.get("style") or {}),
                )
            )
        return graph


# ─── Layout Output ────────────────────────────────────────────────────────────


class LayoutStrategy(str, Enum):
    DEFAULT = "default"
    TREE = "tree"
    FORCE = "force"


@dataclass
class NodePlacement:
    """A positioned node. ``x``/``y`` is the top-left corner."""

    id: str
    x: float
    y: float
    width: float
    height: float
    label: str = ""
    category: str | None = None
    level: int | None = None

    @property
    def center_x(self) -> float:
        return self.x + self.width / 2

    def bottom_connector(self) -> Point:
        return Point(self.center_x, self.y + self.height)

    def top_connector(self) -> Point:
        return Point(self.center_x, self.y)


@dataclass
class Marker:
    """Arrowhead marker drawn at the target end of an edge."""

    type: str
    width: float
    height: float
    color: str


@dataclass
class EdgeStyle:
    stroke: str
    stroke_width: float
    dasharray: str | None
    marker_end: Marker
    extra: dict[str, Any] = field(default_factory=dict)


@dataclass
class EdgeLayout:
    """Geometry and styling for one edge."""

    id: str
    source: str
    target: str
    control_points: list[Point]
    path: str
    is_negative: bool
    label_anchor: Point
    style: EdgeStyle
    label: str | None = None

    @property
    def start(self) -> Point:
        return self.control_points[0]

    @property
    def end(self) -> Point:
        return self.control_points[-1]


@dataclass
class LayoutResult:
    """Everything the canvas needs to draw one graph."""

    nodes: list[NodePlacement]
    edges: list[EdgeLayout]
    strategy: LayoutStrategy
    fell_back: bool = False

    def node(self, node_id: str) -> NodePlacement:
        for placement in self.nodes:
            if placement.id == node_id:
                return placement
        raise KeyError(node_id)

    def edge(self, edge_id: str) -> EdgeLayout:
        for layout in self.edges:
            if layout.id == edge_id:
                return layout
        raise KeyError(edge_id)

    def to_dict(self) -> dict[str, Any]:
        """JSON-ready form using the canvas's camelCase keys."""
        return {
            "strategy": self.strategy.value,
            "fellBack": self.fell_back,
            "nodes": [
                {
                    "id": n.id,
                    "position": {"x": n.x, "y": n.y},
                    "width": n.width,
                    "height": n.height,
                    "level": n.level,
                }
                for n in self.nodes
            ],
            "edges": [
                {
                    "id": e.id,
                    "source": e.source,
                    "target": e.target,
                    "path": e.path,
                    "controlPoints": [{"x": p.x, "y": p.y} for p in e.control_points],
                    "isNegative": e.is_negative,
                    "labelAnchor": {"x": e.label_anchor.x, "y": e.label_anchor.y},
                    "label": e.label,
                    "style": {
                        **e.style.extra,
                        "stroke": e.style.stroke,
                        "strokeWidth": e.style.stroke_width,
                        "strokeDasharray": e.style.dasharray,
                    },
                    "markerEnd": {
                        "type": e.style.marker_end.type,
                        "width": e.style.marker_end.width,
                        "height": e.style.marker_end.height,
                        "color": e.style.marker_end.color,
                    },
                }
                for e in self.edges
            ],
        }
