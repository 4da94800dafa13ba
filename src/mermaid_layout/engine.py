"""Layout orchestrator — strategy dispatch and result assembly.

``compute_layout`` always returns a usable ``LayoutResult``: if the chosen
strategy raises, the input positions are used instead and the result is
flagged ``fell_back``.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from mermaid_layout.adjacency import AdjacencyIndex
from mermaid_layout.config import DEFAULT_CONFIG, LayoutConfig
from mermaid_layout.edges import build_edge_layout
from mermaid_layout.force import simulate
from mermaid_layout.leveling import LevelAssignment
from mermaid_layout.positioning import position_levels
from mermaid_layout.trace import TraceEvent, TraceSink, null_sink
from mermaid_layout.types import EdgeLayout, Graph, LayoutResult, LayoutStrategy, NodePlacement
from mermaid_layout.width import estimate_height, estimate_width

logger = logging.getLogger(__name__)

StrategyFn = Callable[[Graph, LayoutConfig, TraceSink], list[NodePlacement]]


# ─── Strategies ───────────────────────────────────────────────────────────────


def default_layout(graph: Graph, config: LayoutConfig = DEFAULT_CONFIG, trace: TraceSink = null_sink) -> list[NodePlacement]:
    """Keep the positions the diagram parser supplied."""
    return [
        NodePlacement(
            id=node.id,
            x=node.position.x,
            y=node.position.y,
            width=estimate_width(node.label, node.category, config),
            height=estimate_height(node.label, config),
            label=node.label,
            category=node.category,
        )
        for node in graph.nodes
    ]


def tree_layout(graph: Graph, config: LayoutConfig = DEFAULT_CONFIG, trace: TraceSink = null_sink) -> list[NodePlacement]:
    """Bottom-up leveling followed by symmetric per-level positioning."""
    index = AdjacencyIndex.build(graph, trace)
    assignment = LevelAssignment.assign(index, config, trace)
    return position_levels(graph, index, assignment, config)


def force_layout(graph: Graph, config: LayoutConfig = DEFAULT_CONFIG, trace: TraceSink = null_sink) -> list[NodePlacement]:
    """Fruchterman-Reingold simulation from an initial circle."""
    index = AdjacencyIndex.build(graph, trace)
    positions = simulate(index, config, trace)
    return [
        NodePlacement(
            id=node.id,
            x=pos.x,
            y=pos.y,
            width=estimate_width(node.label, node.category, config),
            height=estimate_height(node.label, config),
            label=node.label,
            category=node.category,
        )
        for node, pos in zip(graph.nodes, positions)
    ]


STRATEGIES: dict[LayoutStrategy, StrategyFn] = {
    LayoutStrategy.DEFAULT: default_layout,
    LayoutStrategy.TREE: tree_layout,
    LayoutStrategy.FORCE: force_layout,
}


def resolve_strategy(strategy: LayoutStrategy | str) -> LayoutStrategy:
    """Map a selector to a strategy; unknown selectors mean ``DEFAULT``."""
    try:
        return LayoutStrategy(strategy)
    except ValueError:
        logger.warning("unknown layout strategy %r, keeping input positions", strategy)
        return LayoutStrategy.DEFAULT


# ─── Orchestrator ─────────────────────────────────────────────────────────────


def route_edges(graph: Graph, placements: list[NodePlacement]) -> list[EdgeLayout]:
    """Build an ``EdgeLayout`` for every edge whose endpoints were placed."""
    by_id = {p.id: p for p in placements}
    routes: list[EdgeLayout] = []
    for edge in graph.edges:
        source = by_id.get(edge.source)
        target = by_id.get(edge.target)
        if source is None or target is None:
            continue
        routes.append(build_edge_layout(edge, source, target))
    return routes


def compute_layout(
    graph: Graph,
    strategy: LayoutStrategy | str = LayoutStrategy.DEFAULT,
    config: LayoutConfig | None = None,
    trace: TraceSink | None = None,
) -> LayoutResult:
    """Lay out ``graph`` with the selected strategy.

    The caller's graph is never modified. Edges that reference unknown nodes
    are left out of the result.
    """
    config = config or DEFAULT_CONFIG
    trace = trace or null_sink
    chosen = resolve_strategy(strategy)

    if not graph.nodes:
        return LayoutResult(nodes=[], edges=[], strategy=chosen)

    fell_back = False
    try:
        placements = STRATEGIES[chosen](graph, config, trace)
    except Exception as exc:
        logger.exception("%s layout failed, falling back to input positions", chosen.value)
        trace(TraceEvent("strategy_failed", {"strategy": chosen.value, "error": repr(exc)}))
        placements = default_layout(graph, config, trace)
        fell_back = True

    edges = route_edges(graph, placements)
    logger.debug(
        "%s layout: %d nodes, %d of %d edges routed",
        chosen.value,
        len(placements),
        len(edges),
        len(graph.edges),
    )
    return LayoutResult(nodes=placements, edges=edges, strategy=chosen, fell_back=fell_back)
