"""Exception types raised by the layout engine."""

from __future__ import annotations


class LayoutError(Exception):
    """Base class for layout failures.

    ``compute_layout`` never lets these escape: a strategy that raises falls
    back to the input positions. They are raised directly only by the lower
    level helpers (``AdjacencyIndex.build``, ``LayoutConfig.from_mapping``).
    """


class DuplicateNodeError(LayoutError):
    """Two nodes in one graph share an id."""

    def __init__(self, node_id: str) -> None:
        super().__init__(f"duplicate node id: {node_id!r}")
        self.node_id = node_id


class ConfigError(LayoutError):
    """A layout configuration mapping named an unknown or invalid setting."""
