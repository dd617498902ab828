"""Concrete event sink implementations."""

from .sinks import ConsoleSink, LoggingSink, MemorySink

__all__ = [
    "ConsoleSink",
    "LoggingSink",
    "MemorySink",
]
