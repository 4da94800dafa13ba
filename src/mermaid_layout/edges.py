"""Edge geometry and polarity styling.

Every edge leaves the bottom-centre of its source and enters the top-centre
of its target. The path is a uniform cubic B-spline ("basis" curve) over four
control points: the two connectors and one point beneath/above each at the
vertical midpoint. A basis curve does not pass through the interior control
points but starts and ends exactly on the connectors.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from mermaid_layout.types import (
    Edge,
    EdgeLayout,
    EdgeStyle,
    Explicit,
    Marker,
    NodePlacement,
    Point,
)

# ─── Styling Constants ────────────────────────────────────────────────────────

NEGATIVE_COLOR = "#cc0000"
POSITIVE_COLOR = "#2E8B57"
NEGATIVE_DASHARRAY = "5,5"
STROKE_WIDTH = 1.5
MARKER_TYPE = "arrowclosed"
MARKER_SIZE = 13

# Substrings of an edge type that mark an inhibiting edge (``--x`` / ``---``).
NEGATIVE_TYPE_MARKERS = ("--x", "---")
NEGATIVE_DATA_FLAGS = ("isNegative", "negative")


# ─── Polarity ─────────────────────────────────────────────────────────────────


def resolve_polarity(edge: Edge) -> bool:
    """Return True when ``edge`` is negative. First match wins:

    1. an ``Explicit`` polarity hint;
    2. an edge type containing a negative marker;
    3. a ``True`` ``isNegative``/``negative`` data flag;
    4. a label containing the letter ``x`` in any case.

    The label rule over-matches (``"x decreases risk"``, ``"extra"``); that is
    the documented behaviour diagram authors rely on.
    """
    if isinstance(edge.polarity, Explicit):
        return edge.polarity.negative
    if edge.edge_type and any(m in edge.edge_type for m in NEGATIVE_TYPE_MARKERS):
        return True
    if any(edge.data.get(flag) is True for flag in NEGATIVE_DATA_FLAGS):
        return True
    return isinstance(edge.label, str) and "x" in edge.label.lower()


def edge_style(is_negative: bool, base: Mapping[str, Any] | None = None) -> EdgeStyle:
    """Stroke and arrowhead for an edge of the given polarity.

    Keys of ``base`` other than the stroke ones are carried in ``extra``.
    """
    color = NEGATIVE_COLOR if is_negative else POSITIVE_COLOR
    extra = {k: v for k, v in (base or {}).items() if k not in ("stroke", "strokeWidth", "strokeDasharray")}
    return EdgeStyle(
        stroke=color,
        stroke_width=STROKE_WIDTH,
        dasharray=NEGATIVE_DASHARRAY if is_negative else None,
        marker_end=Marker(type=MARKER_TYPE, width=MARKER_SIZE, height=MARKER_SIZE, color=color),
        extra=extra,
    )


# ─── Basis Spline ─────────────────────────────────────────────────────────────


def control_points(source: Point, target: Point) -> list[Point]:
    """Source, below-source at mid height, above-target at mid height, target."""
    offset = (target.y - source.y) / 2
    return [
        Point(source.x, source.y),
        Point(source.x, source.y + offset),
        Point(target.x, target.y - offset),
        Point(target.x, target.y),
    ]


def basis_commands(points: Sequence[Point]) -> list[tuple[str, list[Point]]]:
    """Path commands for a uniform cubic B-spline clamped to its end points.

    Returns ``(op, points)`` pairs with ``op`` one of ``M``, ``L``, ``C``.
    The first command moves to ``points[0]`` and the last one ends on
    ``points[-1]``.
    """
    if not points:
        return []
    commands: list[tuple[str, list[Point]]] = [("M", [points[0]])]
    if len(points) == 1:
        return commands
    if len(points) == 2:
        commands.append(("L", [points[1]]))
        return commands

    def segment(p0: Point, p1: Point, p2: Point) -> tuple[str, list[Point]]:
        return (
            "C",
            [
                Point((2 * p0.x + p1.x) / 3, (2 * p0.y + p1.y) / 3),
                Point((p0.x + 2 * p1.x) / 3, (p0.y + 2 * p1.y) / 3),
                Point((p0.x + 4 * p1.x + p2.x) / 6, (p0.y + 4 * p1.y + p2.y) / 6),
            ],
        )

    p0, p1 = points[0], points[1]
    commands.append(("L", [Point((5 * p0.x + p1.x) / 6, (5 * p0.y + p1.y) / 6)]))
    for p2 in points[2:]:
        commands.append(segment(p0, p1, p2))
        p0, p1 = p1, p2
    # Close on the last point twice, then land on it exactly.
    commands.append(segment(p0, p1, p1))
    commands.append(("L", [p1]))
    return commands


def _fmt(v: float) -> str:
    text = f"{v:.3f}".rstrip("0").rstrip(".")
    return "0" if text in ("", "-0") else text


def path_data(commands: Sequence[tuple[str, Sequence[Point]]]) -> str:
    """Serialize path commands as SVG ``d`` attribute text."""
    return "".join(op + ",".join(f"{_fmt(p.x)},{_fmt(p.y)}" for p in pts) for op, pts in commands)


def basis_path(points: Sequence[Point]) -> str:
    return path_data(basis_commands(points))


# ─── Edge Layout ──────────────────────────────────────────────────────────────


def build_edge_layout(edge: Edge, source: NodePlacement, target: NodePlacement) -> EdgeLayout:
    """Curve, label anchor, polarity and style for one edge."""
    start = source.bottom_connector()
    end = target.top_connector()
    points = control_points(start, end)
    is_negative = resolve_polarity(edge)
    return EdgeLayout(
        id=edge.id,
        source=edge.source,
        target=edge.target,
        control_points=points,
        path=basis_path(points),
        is_negative=is_negative,
        label_anchor=Point((start.x + end.x) / 2, (start.y + end.y) / 2),
        style=edge_style(is_negative, edge.style),
        label=edge.label,
    )
