"""
Logging Tracks Adapter - Analytics sink that logs events.

Records admin analytics events ("tracks") to the application log and keeps
them in memory for inspection. Recording never raises into the caller.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import UTC, datetime

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RecordedEvent:
    """Record of a tracked event."""

    name: str
    fields: dict[str, str]
    recorded_at: datetime


@dataclass
class LoggingTracksSink:
    """
    Analytics sink that logs instead of shipping events anywhere.

    Implements AnalyticsSinkPort.
    """

    events: list[RecordedEvent] = field(default_factory=list)

    # Configuration
    log_level: int = logging.INFO
    max_events: int = 1000

    def record(self, event_name: str, fields: Mapping[str, str]) -> None:
        """Record an event. Fire-and-forget."""
        event = RecordedEvent(
            name=event_name,
            fields=dict(fields),
            recorded_at=datetime.now(UTC),
        )
        self.events.append(event)
        if len(self.events) > self.max_events:
            del self.events[: len(self.events) - self.max_events]

        props = ", ".join(f"{k}={v}" for k, v in sorted(event.fields.items()))
        logger.log(self.log_level, "TRACKS %s: %s", event_name, props)

    # --- Test Helper Methods ---

    def get_last_event(self) -> RecordedEvent | None:
        return self.events[-1] if self.events else None

    def get_events(self, event_name: str) -> list[RecordedEvent]:
        return [e for e in self.events if e.name == event_name]

    def clear(self) -> None:
        self.events.clear()


def create_tracks_sink(log_level: int = logging.INFO, max_events: int = 1000) -> LoggingTracksSink:
    return LoggingTracksSink(log_level=log_level, max_events=max_events)
