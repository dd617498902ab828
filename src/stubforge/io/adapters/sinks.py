"""Concrete event sinks for terminals, logging and tests."""

from __future__ import annotations

import logging
import sys
from typing import TextIO

from ..interfaces import EventSink
from ..schema import EventLevel, ScaffoldEvent

_LOG_LEVELS = {
    EventLevel.DEBUG: logging.DEBUG,
    EventLevel.INFO: logging.INFO,
    EventLevel.WARNING: logging.WARNING,
    EventLevel.ERROR: logging.ERROR,
}

_CONSOLE_PREFIXES = {
    EventLevel.DEBUG: "  . ",
    EventLevel.INFO: "  + ",
    EventLevel.WARNING: "  ! ",
    EventLevel.ERROR: "  x ",
}


class ConsoleSink(EventSink):
    """Print events one per line, warnings and errors to ``stderr``."""

    def __init__(self, stream: TextIO | None = None, *, errors: TextIO | None = None, verbose: bool = False):
        self._stream = stream
        self._errors = errors
        self._verbose = verbose

    def _target(self, level: EventLevel) -> TextIO:
        if level in (EventLevel.WARNING, EventLevel.ERROR):
            return self._errors or self._stream or sys.stderr
        return self._stream or sys.stdout

    def write(self, event: ScaffoldEvent) -> None:
        if event.level is EventLevel.DEBUG and not self._verbose:
            return
        self._target(event.level).write(f"{_CONSOLE_PREFIXES[event.level]}{event.message}\n")

    def flush(self) -> None:
        self._target(EventLevel.INFO).flush()
        self._target(EventLevel.ERROR).flush()


class LoggingSink(EventSink):
    """Forward events to the standard :mod:`logging` machinery."""

    def __init__(self, logger: logging.Logger | None = None):
        self._logger = logger or logging.getLogger("stubforge")

    def write(self, event: ScaffoldEvent) -> None:
        self._logger.log(_LOG_LEVELS[event.level], "%s: %s", event.origin, event.message)


class MemorySink(EventSink):
    """Collect events in memory for assertions and embedding."""

    def __init__(self) -> None:
        self.events: list[ScaffoldEvent] = []

    def write(self, event: ScaffoldEvent) -> None:
        self.events.append(event)

    def messages(self, level: EventLevel | None = None) -> list[str]:
        """Return event messages, optionally restricted to ``level``."""

        return [event.message for event in self.events if level is None or event.level is level]


__all__ = ["ConsoleSink", "LoggingSink", "MemorySink"]
