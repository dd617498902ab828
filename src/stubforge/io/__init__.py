"""Reporting schemas and sinks for stubforge."""

from .schema import (
    EventLevel,
    FailureKind,
    GenerationReport,
    GenerationResult,
    Outcome,
    ScaffoldEvent,
)
from .interfaces import EventSink

__all__ = [
    "EventLevel",
    "EventSink",
    "FailureKind",
    "GenerationReport",
    "GenerationResult",
    "Outcome",
    "ScaffoldEvent",
]
