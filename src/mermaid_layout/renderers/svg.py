"""SVG renderer — static preview of a LayoutResult."""

from __future__ import annotations

from mermaid_layout.edges import NEGATIVE_COLOR, POSITIVE_COLOR
from mermaid_layout.types import EdgeLayout, LayoutResult, NodePlacement

# ─── Constants ──────────────────────────────────────────────────────────────

FONT_SIZE = 13
LINE_HEIGHT = 18
FONT_FAMILY = "sans-serif"
PADDING = 40  # canvas padding in pixels

_DEFAULT_FILL = 'fill="#fff" stroke="#000" stroke-width="1"'

# Per style-class box attributes.
_CLASS_FILLS: dict[str, str] = {
    "stanceNode": 'fill="#f9f" stroke="#333" stroke-width="2"',
    "factorNode": 'fill="#bbf" stroke="#333" stroke-width="1"',
    "title": 'fill="none" stroke="none"',
}

_MARKER_IDS: dict[str, str] = {
    NEGATIVE_COLOR: "arrow-negative",
    POSITIVE_COLOR: "arrow-positive",
}


def _escape(s: str) -> str:
    return s.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")


def _font(size: int = FONT_SIZE, bold: bool = False) -> str:
    weight = ' font-weight="bold"' if bold else ""
    return f'font-family="{FONT_FAMILY}" font-size="{size}"{weight}'


def _num(v: float) -> str:
    return f"{v:.1f}".rstrip("0").rstrip(".")


# ─── Shape Rendering ────────────────────────────────────────────────────────


def _render_node(n: NodePlacement, dx: float, dy: float) -> str:
    x, y = n.x + dx, n.y + dy
    cx, cy = x + n.width / 2, y + n.height / 2
    lines = _escape(n.label).split("\n")
    is_title = n.category == "title"
    font = _font(16 if is_title else FONT_SIZE, bold=is_title)

    if len(lines) == 1:
        label_svg = (
            f'<text x="{_num(cx)}" y="{_num(cy)}" dominant-baseline="central" text-anchor="middle" {font}>'
            f"{lines[0]}</text>"
        )
    else:
        start_y = cy - (len(lines) - 1) * LINE_HEIGHT / 2
        tspans = "".join(
            f'<tspan x="{_num(cx)}" y="{_num(start_y + i * LINE_HEIGHT)}">{line}</tspan>' for i, line in enumerate(lines)
        )
        label_svg = f'<text dominant-baseline="central" text-anchor="middle" {font}>{tspans}</text>'

    fill = _CLASS_FILLS.get(n.category or "", _DEFAULT_FILL)
    shape_svg = (
        f'<rect x="{_num(x)}" y="{_num(y)}" width="{_num(n.width)}" height="{_num(n.height)}" rx="4" {fill}/>'
    )
    return f"{shape_svg}\n{label_svg}"


# ─── Edge Rendering ─────────────────────────────────────────────────────────


def _render_edge(e: EdgeLayout, dx: float, dy: float) -> str:
    style = e.style
    dash = f' stroke-dasharray="{style.dasharray}"' if style.dasharray else ""
    marker = _MARKER_IDS.get(style.marker_end.color, "arrow-positive")
    parts = [
        f'<g transform="translate({_num(dx)},{_num(dy)})">',
        f'  <path d="{e.path}" fill="none" stroke="{style.stroke}" stroke-width="{style.stroke_width}"{dash}'
        f' marker-end="url(#{marker})"/>',
        "</g>",
    ]
    if e.label:
        lx, ly = e.label_anchor.x + dx, e.label_anchor.y + dy
        font = _font(12)
        parts.append(
            f'<text x="{_num(lx)}" y="{_num(ly)}" dominant-baseline="central" text-anchor="middle" {font} fill="#333">'
            f"{_escape(e.label)}</text>"
        )
    return "\n".join(parts)


def _marker_defs() -> list[str]:
    defs = ["<defs>"]
    for color, marker_id in _MARKER_IDS.items():
        defs.extend(
            [
                f'  <marker id="{marker_id}" markerWidth="13" markerHeight="13" refX="10" refY="5" orient="auto">',
                f'    <polygon points="0 0, 10 5, 0 10" fill="{color}"/>',
                "  </marker>",
            ]
        )
    defs.append("</defs>")
    return defs


# ─── Public Renderer ────────────────────────────────────────────────────────


class SvgRenderer:
    """SVG renderer — consumes a LayoutResult, produces an SVG string."""

    media_type = "image/svg+xml"

    def render(self, result: LayoutResult) -> str:
        if not result.nodes:
            return ""

        # Shift everything so the top-left node lands inside the padding.
        min_x = min(n.x for n in result.nodes)
        min_y = min(n.y for n in result.nodes)
        max_x = max(n.x + n.width for n in result.nodes)
        max_y = max(n.y + n.height for n in result.nodes)
        dx, dy = PADDING - min_x, PADDING - min_y

        svg_w = max_x - min_x + 2 * PADDING
        svg_h = max_y - min_y + 2 * PADDING

        parts = [
            f'<svg xmlns="http://www.w3.org/2000/svg" width="{_num(svg_w)}" height="{_num(svg_h)}"'
            f' viewBox="0 0 {_num(svg_w)} {_num(svg_h)}">',
            *_marker_defs(),
            f'<rect width="{_num(svg_w)}" height="{_num(svg_h)}" fill="white"/>',
        ]

        # Edges (behind nodes), in input order
        for e in result.edges:
            parts.append(_render_edge(e, dx, dy))

        # Nodes (on top)
        for n in result.nodes:
            parts.append(_render_node(n, dx, dy))

        parts.append("</svg>")
        return "\n".join(parts)
