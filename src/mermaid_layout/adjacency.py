"""Adjacency index — forward and reverse neighbour sets for one layout call.

Nodes are addressed by their position in ``Graph.nodes`` (a dense integer
index). The underlying ``networkx.DiGraph`` keeps neighbours in insertion
order, so every walk over successors or predecessors is deterministic.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

import networkx as nx

from mermaid_layout.errors import DuplicateNodeError
from mermaid_layout.trace import TraceEvent, TraceSink, null_sink
from mermaid_layout.types import Edge, Graph

logger = logging.getLogger(__name__)


@dataclass
class AdjacencyIndex:
    """Index-addressed view of a Graph.

    Attributes:
        ids:      Node ids in input order; ``ids[i]`` is node ``i``.
        index_of: Node id → index.
        digraph:  DiGraph over indices ``0..n-1`` (duplicate edges collapse).
        edges:    Well-formed edges as ``(edge, src_index, tgt_index)``, in input
                  order, duplicates kept.
        skipped:  Edges dropped because an endpoint is not a node.
    """

    ids: list[str]
    index_of: dict[str, int]
    digraph: nx.DiGraph
    edges: list[tuple[Edge, int, int]]
    skipped: list[Edge]

    @classmethod
    def build(cls, graph: Graph, trace: TraceSink = null_sink) -> AdjacencyIndex:
        ids: list[str] = []
        index_of: dict[str, int] = {}
        g: nx.DiGraph = nx.DiGraph()

        for node in graph.nodes:
            if node.id in index_of:
                raise DuplicateNodeError(node.id)
            index_of[node.id] = len(ids)
            g.add_node(len(ids))
            ids.append(node.id)

        edges: list[tuple[Edge, int, int]] = []
        skipped: list[Edge] = []
        for edge in graph.edges:
            src = index_of.get(edge.source)
            tgt = index_of.get(edge.target)
            if src is None or tgt is None:
                logger.warning("skipping edge %r: %r → %r references an unknown node", edge.id, edge.source, edge.target)
                trace(TraceEvent("malformed_edge", {"edge": edge.id, "source": edge.source, "target": edge.target}))
                skipped.append(edge)
                continue
            g.add_edge(src, tgt)
            edges.append((edge, src, tgt))

        return cls(ids=ids, index_of=index_of, digraph=g, edges=edges, skipped=skipped)

    def __len__(self) -> int:
        return len(self.ids)

    def successors(self, i: int) -> list[int]:
        return list(self.digraph.successors(i))

    def predecessors(self, i: int) -> list[int]:
        return list(self.digraph.predecessors(i))

    def degree(self, i: int) -> int:
        """Distinct successors plus distinct predecessors."""
        return self.digraph.out_degree(i) + self.digraph.in_degree(i)

    def leaves(self) -> list[int]:
        """Nodes with no outgoing edge, in input order."""
        return [i for i in self.digraph.nodes if self.digraph.out_degree(i) == 0]

    def roots(self) -> list[int]:
        """Nodes with no incoming edge, in input order."""
        return [i for i in self.digraph.nodes if self.digraph.in_degree(i) == 0]

    def forward(self) -> dict[str, set[str]]:
        """Node id → successor ids. Every node present, possibly with an empty set."""
        return {self.ids[i]: {self.ids[j] for j in self.digraph.successors(i)} for i in self.digraph.nodes}

    def reverse(self) -> dict[str, set[str]]:
        """Node id → predecessor ids. Every node present, possibly with an empty set."""
        return {self.ids[i]: {self.ids[j] for j in self.digraph.predecessors(i)} for i in self.digraph.nodes}
