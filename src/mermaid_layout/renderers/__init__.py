"""Renderers that turn a LayoutResult into an output document."""

from __future__ import annotations

from mermaid_layout.renderers.base import Renderer
from mermaid_layout.renderers.svg import SvgRenderer

__all__ = ["Renderer", "SvgRenderer"]
