"""Result and event schemas reported by stubforge."""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from typing import Dict, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from ..artifacts import ArtifactKind


class EventLevel(str, Enum):
    """Severity levels for :class:`ScaffoldEvent`."""

    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class Outcome(str, Enum):
    """What happened to a single requested artifact."""

    CREATED = "created"
    SKIPPED_EXISTING = "skipped_existing"
    FAILED = "failed"


class FailureKind(str, Enum):
    """Why an artifact could not be generated."""

    TEMPLATE_NOT_FOUND = "template_not_found"
    FILESYSTEM_ERROR = "filesystem_error"


class GenerationResult(BaseModel):
    """Outcome of generating one artifact."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    kind: ArtifactKind = Field(..., description="Artifact that was requested.")
    outcome: Outcome = Field(..., description="What happened to the artifact.")
    path: Path = Field(..., description="Resolved output path of the artifact.")
    message: Optional[str] = Field(None, description="Follow-up note or error detail for the caller.")
    error: Optional[FailureKind] = Field(None, description="Failure category when the outcome is failed.")


class GenerationReport(BaseModel):
    """Ordered results of a single generation batch."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    entity: str = Field(..., description="Class name of the entity the batch was run for.")
    results: Tuple[GenerationResult, ...] = Field(default=(), description="One result per requested kind, in request order.")

    def _with_outcome(self, outcome: Outcome) -> tuple[GenerationResult, ...]:
        return tuple(result for result in self.results if result.outcome is outcome)

    @property
    def created(self) -> tuple[GenerationResult, ...]:
        return self._with_outcome(Outcome.CREATED)

    @property
    def skipped(self) -> tuple[GenerationResult, ...]:
        return self._with_outcome(Outcome.SKIPPED_EXISTING)

    @property
    def failed(self) -> tuple[GenerationResult, ...]:
        return self._with_outcome(Outcome.FAILED)

    @property
    def ok(self) -> bool:
        """``True`` when no artifact failed."""

        return not self.failed

    def paths(self) -> tuple[Path, ...]:
        """Output paths of every result, in request order."""

        return tuple(result.path for result in self.results)


class ScaffoldEvent(BaseModel):
    """Progress or warning message emitted while scaffolding."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    timestamp: datetime = Field(default_factory=lambda: datetime.now(tz=timezone.utc), description="Timestamp for the event in UTC.")
    origin: str = Field(..., description="Component that emitted the event.")
    level: EventLevel = Field(default=EventLevel.INFO, description="Severity level of the event.")
    message: str = Field(..., description="Human-readable description of the event.")
    attributes: Dict[str, str] = Field(default_factory=dict, description="Structured details such as the affected path.")


__all__ = [
    "EventLevel",
    "FailureKind",
    "GenerationReport",
    "GenerationResult",
    "Outcome",
    "ScaffoldEvent",
]
