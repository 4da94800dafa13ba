"""Force-directed layout (Fruchterman-Reingold variant).

Nodes start evenly spaced on a circle in input order. Every iteration:

  - each unordered pair repels with ``k² / d``;
  - each edge attracts its endpoints with ``d² / k``;
  - gravity pulls each node toward the centre by ``GRAVITY × offset``;
  - the net displacement is capped at ``MAX_STEP × damping``, where damping
    falls linearly from ``INITIAL_DAMPING`` to 0.

The iteration count is fixed; there is no convergence test. Distances are
floored at ``MIN_DISTANCE`` so coincident nodes never divide by zero.
"""

from __future__ import annotations

import math

from mermaid_layout.adjacency import AdjacencyIndex
from mermaid_layout.config import DEFAULT_CONFIG, LayoutConfig
from mermaid_layout.trace import TraceEvent, TraceSink, null_sink
from mermaid_layout.types import Point

_TRACE_EVERY = 10


def initial_circle(count: int, config: LayoutConfig = DEFAULT_CONFIG) -> list[Point]:
    """Evenly spaced starting positions on a circle around the force centre."""
    if count == 0:
        return []
    cx, cy = config.force_center
    radius = min(config.max_radius, max(config.min_radius, count * config.radius_per_node))
    positions: list[Point] = []
    for i in range(count):
        angle = (i / count) * 2 * math.pi
        positions.append(Point(cx + radius * math.cos(angle), cy + radius * math.sin(angle)))
    return positions


def simulate(
    index: AdjacencyIndex,
    config: LayoutConfig = DEFAULT_CONFIG,
    trace: TraceSink = null_sink,
) -> list[Point]:
    """Run the simulation and return one position per node index."""
    n = len(index)
    if n == 0:
        return []

    start = initial_circle(n, config)
    xs = [p.x for p in start]
    ys = [p.y for p in start]
    cx, cy = config.force_center
    k = math.sqrt(config.force_area / n)
    k_sq = k * k
    floor = config.min_distance
    iterations = config.force_iterations
    pairs = [(src, tgt) for _, src, tgt in index.edges]

    for it in range(iterations):
        damping = config.initial_damping * (1 - it / iterations)
        cap = config.max_step * damping
        disp_x = [0.0] * n
        disp_y = [0.0] * n

        # Repulsion between every unordered pair.
        for i in range(n):
            for j in range(i + 1, n):
                dx = xs[i] - xs[j]
                dy = ys[i] - ys[j]
                dist = max(floor, math.hypot(dx, dy))
                force = k_sq / dist
                fx = force * dx / dist
                fy = force * dy / dist
                disp_x[i] += fx
                disp_y[i] += fy
                disp_x[j] -= fx
                disp_y[j] -= fy

        # Attraction along edges.
        for src, tgt in pairs:
            dx = xs[src] - xs[tgt]
            dy = ys[src] - ys[tgt]
            dist = max(floor, math.hypot(dx, dy))
            force = dist * dist / k
            fx = force * dx / dist
            fy = force * dy / dist
            disp_x[src] -= fx
            disp_y[src] -= fy
            disp_x[tgt] += fx
            disp_y[tgt] += fy

        # Gravity, then the capped step.
        for i in range(n):
            disp_x[i] -= (xs[i] - cx) * config.gravity
            disp_y[i] -= (ys[i] - cy) * config.gravity
            magnitude = math.hypot(disp_x[i], disp_y[i])
            if magnitude > 0:
                step = min(magnitude, cap)
                xs[i] += disp_x[i] / magnitude * step
                ys[i] += disp_y[i] / magnitude * step

        if it % _TRACE_EVERY == 0:
            trace(TraceEvent("force_iteration", {"iteration": it, "damping": damping}))

    return [Point(x, y) for x, y in zip(xs, ys)]
