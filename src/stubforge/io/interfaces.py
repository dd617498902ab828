"""Abstract interfaces for stubforge reporting."""

from __future__ import annotations

from abc import ABC, abstractmethod

from .schema import EventLevel, ScaffoldEvent


class EventSink(ABC):
    """Destination for :class:`ScaffoldEvent` progress reports."""

    @abstractmethod
    def write(self, event: ScaffoldEvent) -> None:
        """Publish a single event."""

    def flush(self) -> None:
        """Ensure all buffered events are visible to consumers."""

    def emit(self, origin: str, message: str, level: EventLevel = EventLevel.INFO, **attributes: str) -> None:
        """Build a :class:`ScaffoldEvent` and :meth:`write` it."""

        self.write(ScaffoldEvent(origin=origin, level=level, message=message, attributes=attributes))


__all__ = ["EventSink"]
