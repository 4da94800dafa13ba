"""Layout geometry constants and the ``LayoutConfig`` that bundles them."""

from __future__ import annotations

import dataclasses
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from mermaid_layout.errors import ConfigError

# ─── Width Estimation ─────────────────────────────────────────────────────────

CHAR_WIDTH: float = 8.5  # rendered width of one label character
MIN_NODE_WIDTH: float = 180.0
NODE_H_PADDING: float = 32.0  # 16 px padding on each side
LINE_HEIGHT: float = 18.0
NODE_V_PADDING: float = 24.0  # 12 px padding top and bottom

# Style classes with their own minimum width (before padding).
CLASS_MIN_WIDTHS: Mapping[str, float] = MappingProxyType(
    {
        "stanceNode": 180.0,
        "factorNode": 200.0,
    }
)

# ─── Tree Layout ──────────────────────────────────────────────────────────────

LEAF_LEVEL: int = 1000  # sentinel level every leaf starts on
CENTRAL_AXIS_X: float = 600.0
START_Y: float = 120.0
VERTICAL_SPACING: float = 120.0
BASE_SPACING: float = 220.0  # minimum distance between node centres in a level
SPREAD_WIDTH: float = 1200.0  # sparse levels spread over this width

# ─── Force Layout ─────────────────────────────────────────────────────────────

FORCE_CENTER: tuple[float, float] = (800.0, 400.0)
FORCE_ITERATIONS: int = 100
FORCE_AREA: float = 1_000_000.0
GRAVITY: float = 0.05
INITIAL_DAMPING: float = 0.8
MAX_STEP: float = 15.0  # displacement cap per iteration, scaled by damping
MIN_DISTANCE: float = 0.1
RADIUS_PER_NODE: float = 20.0
MIN_RADIUS: float = 300.0
MAX_RADIUS: float = 600.0


@dataclass(frozen=True)
class LayoutConfig:
    """Every tunable the strategies read. Defaults are the module constants."""

    char_width: float = CHAR_WIDTH
    min_node_width: float = MIN_NODE_WIDTH
    node_h_padding: float = NODE_H_PADDING
    line_height: float = LINE_HEIGHT
    node_v_padding: float = NODE_V_PADDING
    class_min_widths: Mapping[str, float] = field(default_factory=lambda: CLASS_MIN_WIDTHS)

    leaf_level: int = LEAF_LEVEL
    central_axis_x: float = CENTRAL_AXIS_X
    start_y: float = START_Y
    vertical_spacing: float = VERTICAL_SPACING
    base_spacing: float = BASE_SPACING
    spread_width: float = SPREAD_WIDTH

    force_center: tuple[float, float] = FORCE_CENTER
    force_iterations: int = FORCE_ITERATIONS
    force_area: float = FORCE_AREA
    gravity: float = GRAVITY
    initial_damping: float = INITIAL_DAMPING
    max_step: float = MAX_STEP
    min_distance: float = MIN_DISTANCE
    radius_per_node: float = RADIUS_PER_NODE
    min_radius: float = MIN_RADIUS
    max_radius: float = MAX_RADIUS

    def __post_init__(self) -> None:
        # Read-only copy; later edits to the caller's dict have no effect.
        object.__setattr__(self, "class_min_widths", MappingProxyType(dict(self.class_min_widths)))
        if self.min_distance <= 0:
            raise ConfigError("min_distance must be positive")
        if self.force_iterations < 0:
            raise ConfigError("force_iterations must not be negative")
        if self.min_radius > self.max_radius:
            raise ConfigError("min_radius must not exceed max_radius")

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any]) -> LayoutConfig:
        """Build a config from a plain mapping, e.g. one loaded from JSON.

        Unknown keys raise ``ConfigError`` rather than being silently ignored.
        """
        known = {f.name for f in dataclasses.fields(cls)}
        unknown = sorted(set(values) - known)
        if unknown:
            raise ConfigError(f"unknown layout settings: {', '.join(unknown)}")
        kwargs = dict(values)
        if "force_center" in kwargs:
            kwargs["force_center"] = tuple(kwargs["force_center"])
        return cls(**kwargs)


DEFAULT_CONFIG = LayoutConfig()
