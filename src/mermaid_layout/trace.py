"""Structured trace events emitted by the layout strategies.

Strategies report what they did through a ``TraceSink`` callable. The default
sink drops everything; ``logging_sink`` forwards events to a logger. Sinks
only observe: nothing a sink does can change a layout.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class TraceEvent:
    """A named event with free-form fields."""

    name: str
    fields: Mapping[str, Any] = field(default_factory=dict)


TraceSink = Callable[[TraceEvent], None]


def null_sink(event: TraceEvent) -> None:
    """Discard the event."""


def logging_sink(logger: logging.Logger, level: int = logging.DEBUG) -> TraceSink:
    """Return a sink that writes each event as one log record on ``logger``."""

    def sink(event: TraceEvent) -> None:
        if logger.isEnabledFor(level):
            details = " ".join(f"{k}={v!r}" for k, v in event.fields.items())
            logger.log(level, "%s %s", event.name, details)

    return sink


class Collector:
    """Sink that keeps every event in memory, in emission order."""

    def __init__(self) -> None:
        self.events: list[TraceEvent] = []

    def __call__(self, event: TraceEvent) -> None:
        self.events.append(event)

    def named(self, name: str) -> list[TraceEvent]:
        return [e for e in self.events if e.name == name]
