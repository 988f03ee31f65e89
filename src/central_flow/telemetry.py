"""Structured telemetry for the launcher core.

The registry and the aggregator report what they do as named events:

  - ``registry.provider_loaded`` (``provider_id``)
  - ``registry.load_failed`` (``source``, ``provider_name``, ``error``)
  - ``provider.search_failed`` (``provider_id``, ``error``)
  - ``search.completed`` (``query``, ``provider_filter``, ``providers``,
    ``results``, ``duration_ms``)
  - ``result.executed`` (``result_id``, ``provider_id``)

Sinks decide where the events go.  Nothing is recorded unless a sink is
passed in.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Any, Protocol, runtime_checkable


@dataclass
class TelemetryEvent:
    """One launcher event, stamped with wall-clock milliseconds."""

    name: str
    attributes: dict[str, Any] = field(default_factory=dict)
    timestamp_ms: float = field(default_factory=lambda: time.time() * 1000)


@runtime_checkable
class TelemetrySink(Protocol):
    """Anything with ``emit(event)``; the registry and aggregator accept one."""

    def emit(self, event: TelemetryEvent) -> None:
        raise NotImplementedError


class NoOpTelemetrySink:
    """Used when a launcher is built without a sink."""

    def emit(self, event: TelemetryEvent) -> None:
        _ = event


class InMemoryTelemetrySink:
    """Keeps every event so tests can assert on load and search activity."""

    def __init__(self) -> None:
        self.events: list[TelemetryEvent] = []

    def emit(self, event: TelemetryEvent) -> None:
        self.events.append(event)

    def named(self, name: str) -> list[TelemetryEvent]:
        """Events called ``name``, e.g. ``named("search.completed")``."""
        return [event for event in self.events if event.name == name]


class LoggerTelemetrySink:
    """Writes events to the ``central_flow.telemetry`` logger.

    Attributes travel in the record's ``extra`` fields so a structured
    log handler can pick them up without parsing the message.
    """

    def __init__(
        self,
        logger_name: str = "central_flow.telemetry",
        level: int = logging.DEBUG,
    ) -> None:
        self.logger = logging.getLogger(logger_name)
        self.level = level

    def emit(self, event: TelemetryEvent) -> None:
        self.logger.log(
            self.level,
            "telemetry_event %s",
            event.name,
            extra={
                "event_name": event.name,
                "event_timestamp_ms": event.timestamp_ms,
                "event_attributes": event.attributes,
            },
        )
