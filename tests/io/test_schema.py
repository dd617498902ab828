from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from stubforge.artifacts import ArtifactKind
from stubforge.io.schema import (
    EventLevel,
    FailureKind,
    GenerationReport,
    GenerationResult,
    Outcome,
    ScaffoldEvent,
)


def _report() -> GenerationReport:
    return GenerationReport(
        entity="Product",
        results=(
            GenerationResult(kind=ArtifactKind.MODEL, outcome=Outcome.CREATED, path=Path("a.php")),
            GenerationResult(kind=ArtifactKind.SERVICE, outcome=Outcome.SKIPPED_EXISTING, path=Path("b.php")),
            GenerationResult(
                kind=ArtifactKind.REPOSITORY,
                outcome=Outcome.FAILED,
                path=Path("c.php"),
                message="no stub named 'repository'",
                error=FailureKind.TEMPLATE_NOT_FOUND,
            ),
        ),
    )


def test_report_groups_results_by_outcome():
    report = _report()

    assert [result.kind for result in report.created] == [ArtifactKind.MODEL]
    assert [result.kind for result in report.skipped] == [ArtifactKind.SERVICE]
    assert [result.kind for result in report.failed] == [ArtifactKind.REPOSITORY]
    assert report.ok is False
    assert report.paths() == (Path("a.php"), Path("b.php"), Path("c.php"))


def test_empty_report_is_ok():
    assert GenerationReport(entity="Product").ok


def test_result_accepts_string_values():
    result = GenerationResult(kind="routes", outcome="created", path="routes/product.php")

    assert result.kind is ArtifactKind.ROUTES
    assert result.outcome is Outcome.CREATED
    assert result.path == Path("routes/product.php")


def test_models_are_frozen():
    report = _report()

    with pytest.raises(ValidationError):
        report.entity = "Other"
    with pytest.raises(ValidationError):
        report.results[0].outcome = Outcome.FAILED


def test_models_reject_unknown_fields():
    with pytest.raises(ValidationError):
        GenerationResult(kind="model", outcome="created", path="a.php", extra="nope")


def test_event_defaults():
    event = ScaffoldEvent(origin="generator", message="Created model")

    assert event.level is EventLevel.INFO
    assert event.attributes == {}
    assert event.timestamp.tzinfo is not None
