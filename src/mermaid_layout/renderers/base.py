"""Renderer protocol for consumers of a LayoutResult."""

from __future__ import annotations

from typing import ClassVar, Protocol

from mermaid_layout.types import LayoutResult


class Renderer(Protocol):
    """Turns a finished layout into a document.

    ``media_type`` names the output format (``image/svg+xml`` ...). An empty
    layout renders as an empty string.
    """

    media_type: ClassVar[str]

    def render(self, result: LayoutResult) -> str: ...
