"""Horizontal positioning for the tree layout.

Each level is ordered by connectivity and spread symmetrically around one
central axis shared by all levels. Spacing is a per-level constant, not
solved against the true node widths, so very wide labels can overlap.
"""

from __future__ import annotations

from mermaid_layout.adjacency import AdjacencyIndex
from mermaid_layout.config import DEFAULT_CONFIG, LayoutConfig
from mermaid_layout.leveling import LevelAssignment
from mermaid_layout.types import Graph, NodePlacement
from mermaid_layout.width import estimate_height, estimate_width


def order_level(node_ids: list[str], index: AdjacencyIndex) -> list[str]:
    """Order a level by descending total degree, keeping placement order on ties.

    Better-connected nodes end up nearer the centre of the level.
    """
    return sorted(node_ids, key=lambda nid: -index.degree(index.index_of[nid]))


def level_spacing(count: int, config: LayoutConfig = DEFAULT_CONFIG) -> float:
    """Distance between adjacent node centres in a level of ``count`` nodes."""
    return max(config.base_spacing, config.spread_width / (count or 1))


def axis_offsets(count: int, spacing: float) -> list[float]:
    """Centre offsets from the central axis for ranks ``0..count-1``.

    Odd count: the middle rank sits on the axis. Even count: nothing sits on
    the axis and the two innermost ranks are at ``±spacing / 2``.
    """
    if count % 2 == 1:
        middle = count // 2
        return [(i - middle) * spacing for i in range(count)]
    half = count / 2
    return [(i - half + 0.5) * spacing for i in range(count)]


def position_levels(
    graph: Graph,
    index: AdjacencyIndex,
    assignment: LevelAssignment,
    config: LayoutConfig = DEFAULT_CONFIG,
) -> list[NodePlacement]:
    """Place every node of ``graph`` on its level, top level first.

    Returns placements in input node order. ``x`` is the left edge computed
    from the node's estimated width.
    """
    nodes = {n.id: n for n in graph.nodes}
    placed: dict[str, NodePlacement] = {}

    for level, bucket in enumerate(assignment.buckets):
        ordered = order_level(bucket, index)
        spacing = level_spacing(len(ordered), config)
        y = config.start_y + level * config.vertical_spacing
        for node_id, offset in zip(ordered, axis_offsets(len(ordered), spacing)):
            node = nodes[node_id]
            width = estimate_width(node.label, node.category, config)
            center_x = config.central_axis_x + offset
            placed[node_id] = NodePlacement(
                id=node_id,
                x=center_x - width / 2,
                y=y,
                width=width,
                height=estimate_height(node.label, config),
                label=node.label,
                category=node.category,
                level=level,
            )

    return [placed[n.id] for n in graph.nodes]
