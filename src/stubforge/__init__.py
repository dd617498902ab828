"""Scaffolding for repository pattern modules.

The package resolves named stubs from a project override directory, its own
stub directory or a built-in table, renders them for an entity such as
``Product`` and writes the resulting model, controller, request, service,
repository and routes files. A small set of one-time setup steps registers the
generated repository service provider in the host project.
"""

from __future__ import annotations

from .artifacts import ARTIFACTS, ArtifactKind, resolve_kinds
from .config import EntityName, ScaffoldConfig
from .errors import ConfigError, PatchError, StubforgeError, TemplateNotFoundError
from .generator import ScaffoldGenerator
from .io.schema import FailureKind, GenerationReport, GenerationResult, Outcome
from .project import ProjectSetup
from .store import TemplateStore
from .template import TemplateRenderer, TemplateRenderingError

__all__ = [
    "ARTIFACTS",
    "ArtifactKind",
    "ConfigError",
    "EntityName",
    "FailureKind",
    "GenerationReport",
    "GenerationResult",
    "Outcome",
    "PatchError",
    "ProjectSetup",
    "ScaffoldConfig",
    "ScaffoldGenerator",
    "StubforgeError",
    "TemplateNotFoundError",
    "TemplateRenderer",
    "TemplateRenderingError",
    "TemplateStore",
    "resolve_kinds",
]

__version__ = "0.1.0"
