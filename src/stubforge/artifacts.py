"""Artifact kinds and the table mapping each kind to its stub and output path."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Mapping

__all__ = [
    "ARTIFACTS",
    "ArtifactKind",
    "ArtifactSpec",
    "REQUEST_KINDS",
    "REQUEST_TYPES",
    "resolve_kinds",
]


class ArtifactKind(str, Enum):
    """Every file the generator knows how to produce."""

    MODEL = "model"
    CONTROLLER = "controller"
    API_CONTROLLER = "api-controller"
    REQUEST_STORE = "request-store"
    REQUEST_UPDATE = "request-update"
    REQUEST_INDEX = "request-index"
    REQUEST_SHOW = "request-show"
    REQUEST_DESTROY = "request-destroy"
    API_REQUEST_STORE = "api-request-store"
    API_REQUEST_UPDATE = "api-request-update"
    API_REQUEST_INDEX = "api-request-index"
    API_REQUEST_SHOW = "api-request-show"
    API_REQUEST_DESTROY = "api-request-destroy"
    SERVICE = "service"
    API_SERVICE = "api-service"
    REPOSITORY_INTERFACE = "repository-interface"
    REPOSITORY = "repository"
    API_REPOSITORY_INTERFACE = "api-repository-interface"
    API_REPOSITORY = "api-repository"
    PROVIDER = "provider"
    ROUTES = "routes"


@dataclass(frozen=True, slots=True)
class ArtifactSpec:
    """How a single :class:`ArtifactKind` is rendered and where it is written.

    Attributes
    ----------
    template:
        Name of the stub passed to the template store.
    area:
        Logical output area, resolved to a directory by the scaffold config.
    path:
        Output path relative to the area directory. May contain placeholders.
    bindings:
        Extra placeholder values for this kind only.
    overwritable:
        When ``False`` an existing file is kept even if overwriting is
        requested.
    """

    template: str
    area: str
    path: str
    bindings: Mapping[str, str] = field(default_factory=dict)
    overwritable: bool = True


REQUEST_TYPES = ("Store", "Update", "Index", "Show", "Destroy")

REQUEST_KINDS = (
    ArtifactKind.REQUEST_STORE,
    ArtifactKind.REQUEST_UPDATE,
    ArtifactKind.REQUEST_INDEX,
    ArtifactKind.REQUEST_SHOW,
    ArtifactKind.REQUEST_DESTROY,
)

_API_REQUEST_KINDS = (
    ArtifactKind.API_REQUEST_STORE,
    ArtifactKind.API_REQUEST_UPDATE,
    ArtifactKind.API_REQUEST_INDEX,
    ArtifactKind.API_REQUEST_SHOW,
    ArtifactKind.API_REQUEST_DESTROY,
)


def _request_specs() -> dict[ArtifactKind, ArtifactSpec]:
    specs: dict[ArtifactKind, ArtifactSpec] = {}
    for request_type, kind, api_kind in zip(REQUEST_TYPES, REQUEST_KINDS, _API_REQUEST_KINDS):
        bindings = MappingProxyType({"requestType": request_type})
        specs[kind] = ArtifactSpec(
            "request", "requests", "{{moduleName}}/{{requestType}}Request.{{extension}}", bindings
        )
        specs[api_kind] = ArtifactSpec(
            "request-api", "requests", "Api/{{moduleName}}/{{requestType}}Request.{{extension}}", bindings
        )
    return specs


ARTIFACTS: Mapping[ArtifactKind, ArtifactSpec] = MappingProxyType(
    {
        ArtifactKind.MODEL: ArtifactSpec("model", "models", "{{moduleName}}.{{extension}}"),
        ArtifactKind.CONTROLLER: ArtifactSpec(
            "controller", "controllers", "{{moduleName}}Controller.{{extension}}"
        ),
        ArtifactKind.API_CONTROLLER: ArtifactSpec(
            "controller-api", "controllers", "Api/{{moduleName}}Controller.{{extension}}"
        ),
        **_request_specs(),
        ArtifactKind.SERVICE: ArtifactSpec(
            "service", "services", "{{moduleName}}/{{moduleName}}Service.{{extension}}"
        ),
        ArtifactKind.API_SERVICE: ArtifactSpec(
            "service-api", "services", "Api/{{moduleName}}/{{moduleName}}Service.{{extension}}"
        ),
        ArtifactKind.REPOSITORY_INTERFACE: ArtifactSpec(
            "repository-interface",
            "repositories",
            "{{moduleName}}/{{moduleName}}RepositoryInterface.{{extension}}",
        ),
        ArtifactKind.REPOSITORY: ArtifactSpec(
            "repository", "repositories", "{{moduleName}}/{{moduleName}}Repository.{{extension}}"
        ),
        ArtifactKind.API_REPOSITORY_INTERFACE: ArtifactSpec(
            "repository-interface-api",
            "repositories",
            "Api/{{moduleName}}/{{moduleName}}RepositoryInterface.{{extension}}",
        ),
        ArtifactKind.API_REPOSITORY: ArtifactSpec(
            "repository-api",
            "repositories",
            "Api/{{moduleName}}/{{moduleName}}Repository.{{extension}}",
        ),
        ArtifactKind.PROVIDER: ArtifactSpec(
            "service-provider",
            "providers",
            "RepositoryServiceProvider.{{extension}}",
            overwritable=False,
        ),
        ArtifactKind.ROUTES: ArtifactSpec("routes", "routes", "{{moduleNameLower}}.{{extension}}"),
    }
)

_UNMAPPED = set(ArtifactKind) - set(ARTIFACTS)
if _UNMAPPED:  # pragma: no cover - guards edits to the table above
    raise RuntimeError(f"artifact kinds without a spec: {sorted(kind.value for kind in _UNMAPPED)}")


def resolve_kinds(
    *,
    all_kinds: bool = False,
    model: bool = False,
    controller: bool = False,
    request: bool = False,
    service: bool = False,
    repository: bool = False,
    api: bool = False,
) -> tuple[ArtifactKind, ...]:
    """Translate command line style flags into an ordered tuple of kinds.

    ``all_kinds`` selects every group and appends the provider and routes
    files. ``api`` adds the API variant after each selected group member and
    selects nothing on its own.
    """

    if all_kinds:
        model = controller = request = service = repository = True

    kinds: list[ArtifactKind] = []
    if model:
        kinds.append(ArtifactKind.MODEL)
    if controller:
        kinds.append(ArtifactKind.CONTROLLER)
        if api:
            kinds.append(ArtifactKind.API_CONTROLLER)
    if request:
        for kind, api_kind in zip(REQUEST_KINDS, _API_REQUEST_KINDS):
            kinds.append(kind)
            if api:
                kinds.append(api_kind)
    if service:
        kinds.append(ArtifactKind.SERVICE)
        if api:
            kinds.append(ArtifactKind.API_SERVICE)
    if repository:
        kinds.extend((ArtifactKind.REPOSITORY_INTERFACE, ArtifactKind.REPOSITORY))
        if api:
            kinds.extend((ArtifactKind.API_REPOSITORY_INTERFACE, ArtifactKind.API_REPOSITORY))
    if all_kinds:
        kinds.extend((ArtifactKind.PROVIDER, ArtifactKind.ROUTES))
    return tuple(kinds)
