"""Layout engine for diagrams extracted from markdown.

Three strategies place the nodes of a ``Graph`` (``default`` keeps the
parser's positions, ``tree`` levels the graph bottom-up, ``force`` runs a
Fruchterman-Reingold simulation); every edge then gets a basis-spline path
and a polarity-driven style.
"""

from __future__ import annotations

from mermaid_layout.adjacency import AdjacencyIndex
from mermaid_layout.config import DEFAULT_CONFIG, LayoutConfig
from mermaid_layout.edges import basis_path, build_edge_layout, control_points, edge_style, resolve_polarity
from mermaid_layout.engine import compute_layout, force_layout, resolve_strategy, tree_layout
from mermaid_layout.errors import ConfigError, DuplicateNodeError, LayoutError
from mermaid_layout.force import initial_circle, simulate
from mermaid_layout.leveling import LevelAssignment, assign_levels
from mermaid_layout.positioning import axis_offsets, level_spacing, order_level, position_levels
from mermaid_layout.trace import Collector, TraceEvent, TraceSink, logging_sink, null_sink
from mermaid_layout.types import (
    Edge,
    EdgeLayout,
    EdgeStyle,
    Explicit,
    Graph,
    Inferred,
    LayoutResult,
    LayoutStrategy,
    Marker,
    Node,
    NodePlacement,
    Point,
    PolarityHint,
)
from mermaid_layout.width import estimate_height, estimate_width, label_dimensions

__all__ = [
    "DEFAULT_CONFIG",
    "AdjacencyIndex",
    "Collector",
    "ConfigError",
    "DuplicateNodeError",
    "Edge",
    "EdgeLayout",
    "EdgeStyle",
    "Explicit",
    "Graph",
    "Inferred",
    "LayoutConfig",
    "LayoutError",
    "LayoutResult",
    "LayoutStrategy",
    "LevelAssignment",
    "Marker",
    "Node",
    "NodePlacement",
    "Point",
    "PolarityHint",
    "TraceEvent",
    "TraceSink",
    "assign_levels",
    "axis_offsets",
    "basis_path",
    "build_edge_layout",
    "compute_layout",
    "control_points",
    "edge_style",
    "estimate_height",
    "estimate_width",
    "force_layout",
    "initial_circle",
    "label_dimensions",
    "level_spacing",
    "logging_sink",
    "null_sink",
    "order_level",
    "position_levels",
    "resolve_polarity",
    "resolve_strategy",
    "simulate",
    "tree_layout",
]
