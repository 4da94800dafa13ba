"""Node size estimation from label text."""

from __future__ import annotations

from mermaid_layout.config import DEFAULT_CONFIG, LayoutConfig


def label_dimensions(label: str) -> tuple[int, int]:
    """Compute (max_line_width, line_count) for a label that may contain newlines."""
    if not label:
        return (0, 1)
    lines = label.split("\n")
    max_w = max(len(line) for line in lines)
    return (max_w, len(lines))


def estimate_width(label: str, category: str | None = None, config: LayoutConfig = DEFAULT_CONFIG) -> float:
    """Rendered width of a node box.

    The longest line sets the text width, floored at the minimum node width.
    A style class with its own minimum raises that floor. Horizontal padding
    is added last.
    """
    max_line_w, _ = label_dimensions(label)
    width = max(config.min_node_width, max_line_w * config.char_width)
    if category is not None and category in config.class_min_widths:
        width = max(width, config.class_min_widths[category])
    return width + config.node_h_padding


def estimate_height(label: str, config: LayoutConfig = DEFAULT_CONFIG) -> float:
    """Rendered height of a node box: one row per label line plus padding."""
    _, line_count = label_dimensions(label)
    return line_count * config.line_height + config.node_v_padding
