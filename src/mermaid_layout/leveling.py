"""Level assignment for the tree layout — bottom-up leveling.

Leaves (no outgoing edges) are pinned to the bottom tier and every other node
is pulled upward from its children:

  1. Seed every leaf at the sentinel level ``LEAF_LEVEL``.
  2. Walk reverse edges from each leaf; a parent is proposed
     ``child_level - 1`` and accepts it when it has no level yet or the
     proposal is smaller than its current one (smallest proposal wins, which
     keeps hierarchies shallow). Accepting re-walks the parent's own parents.
  3. Nodes the walk never reaches go to level 0 (roots) or ``LEAF_LEVEL // 2``.
  4. Normalize the occupied levels to ``0..L-1``.

The walk uses an explicit stack. A parent that is already on the current walk
path (a cycle) is skipped, so cyclic input terminates and acyclic input is
unaffected.
"""

from __future__ import annotations

from mermaid_layout.adjacency import AdjacencyIndex
from mermaid_layout.config import DEFAULT_CONFIG, LayoutConfig
from mermaid_layout.trace import TraceEvent, TraceSink, null_sink


class LevelAssignment:
    """Result of level assignment.

    Attributes:
        levels: Maps node id → normalized level (0 = top tier).
        buckets: Normalized level → node ids, in the order they were placed.
        level_count: Number of distinct levels in use.
    """

    def __init__(self, levels: dict[str, int], buckets: list[list[str]]) -> None:
        self.levels = levels
        self.buckets = buckets
        self.level_count = len(buckets)

    @classmethod
    def assign(
        cls,
        index: AdjacencyIndex,
        config: LayoutConfig = DEFAULT_CONFIG,
        trace: TraceSink = null_sink,
    ) -> LevelAssignment:
        raw = _BottomUpLeveler(index, config.leaf_level, trace).run()
        return cls.normalize(raw, index.ids, trace)

    @classmethod
    def normalize(
        cls,
        raw: dict[int, list[int]],
        ids: list[str],
        trace: TraceSink = null_sink,
    ) -> LevelAssignment:
        """Remap occupied raw levels to a contiguous ``0..L-1`` range.

        ``raw`` maps a raw level to its bucket of node indices; empty buckets
        are dropped so no normalized level is empty.
        """
        used = sorted(level for level, members in raw.items() if members)
        levels: dict[str, int] = {}
        buckets: list[list[str]] = []
        for normalized, level in enumerate(used):
            bucket = [ids[i] for i in raw[level]]
            for node_id in bucket:
                levels[node_id] = normalized
            buckets.append(bucket)
        trace(TraceEvent("levels_normalized", {"raw": used, "count": len(used)}))
        return cls(levels=levels, buckets=buckets)


class _BottomUpLeveler:
    """Working state of one bottom-up walk, indexed by node position."""

    def __init__(self, index: AdjacencyIndex, leaf_level: int, trace: TraceSink) -> None:
        self.index = index
        self.leaf_level = leaf_level
        self.trace = trace
        self.level: list[int | None] = [None] * len(index)
        self.buckets: dict[int, list[int]] = {}

    def run(self) -> dict[int, list[int]]:
        leaves = self.index.leaves()
        roots = set(self.index.roots())

        for leaf in leaves:
            self._place(leaf, self.leaf_level)
        self.trace(TraceEvent("levels_seeded", {"leaves": [self.index.ids[i] for i in leaves]}))

        for leaf in leaves:
            self._walk_parents(leaf, self.leaf_level)

        for i in range(len(self.index)):
            if self.level[i] is None:
                self._place(i, 0 if i in roots else self.leaf_level // 2)

        return self.buckets

    def _place(self, node: int, level: int) -> None:
        previous = self.level[node]
        if previous is not None:
            self.buckets[previous].remove(node)
        self.level[node] = level
        self.buckets.setdefault(level, []).append(node)

    def _propose(self, node: int, level: int) -> bool:
        current = self.level[node]
        if current is not None and current <= level:
            return False
        self._place(node, level)
        return True

    def _walk_parents(self, start: int, start_level: int) -> None:
        # Each frame is (node, its level, iterator over its parents).
        on_path = {start}
        stack = [(start, start_level, iter(self.index.predecessors(start)))]

        while stack:
            node, level, parents = stack[-1]
            parent = next(parents, -1)
            if parent < 0:
                stack.pop()
                on_path.discard(node)
                continue
            if parent in on_path:
                self.trace(
                    TraceEvent("cycle_skipped", {"child": self.index.ids[node], "parent": self.index.ids[parent]})
                )
                continue
            if self._propose(parent, level - 1):
                on_path.add(parent)
                stack.append((parent, level - 1, iter(self.index.predecessors(parent))))


def assign_levels(
    index: AdjacencyIndex,
    config: LayoutConfig = DEFAULT_CONFIG,
    trace: TraceSink = null_sink,
) -> LevelAssignment:
    """Assign a normalized level to every node of ``index``."""
    return LevelAssignment.assign(index, config, trace)
