"""
Telemetry module for the tracker.

Collects fire-and-forget usage events such as a combatant being defeated.
"""

from typing import Any

from pydantic import BaseModel, Field

from .logging import log_debug


class MetricEvent(BaseModel):
    """A single tracked event."""

    name: str = Field(description="Event name")
    payload: dict[str, Any] = Field(
        description="Event data",
        default_factory=dict,
    )


class Metrics:
    """
    In-process telemetry sink.

    Events are logged at debug level and kept in `events` so the owner can
    forward or inspect them. Callers never consume a return value.

    Attributes:
        events (list[MetricEvent]):
            Every event tracked so far, oldest first.

    """

    def __init__(self) -> None:
        self.events: list[MetricEvent] = []

    def track_event(self, name: str, payload: dict[str, Any] | None = None) -> None:
        """
        Records an event.

        Args:
            name (str): The event name.
            payload (dict[str, Any] | None): Optional event data.

        """
        event = MetricEvent(name=name, payload=dict(payload or {}))
        self.events.append(event)
        log_debug(f"Tracked event {name}", event.payload)

    def count(self, name: str) -> int:
        """Returns how many events with the given name were tracked."""
        return sum(1 for event in self.events if event.name == name)
