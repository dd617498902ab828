"""Module scaffolding: render artifact stubs for an entity and write them."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Iterable, Mapping

from .artifacts import ARTIFACTS, ArtifactKind, ArtifactSpec
from .config import EntityName, ScaffoldConfig
from .errors import TemplateNotFoundError
from .io.interfaces import EventSink
from .io.schema import EventLevel, FailureKind, GenerationReport, GenerationResult, Outcome
from .store import TemplateStore
from .template import TemplateRenderer

__all__ = ["ScaffoldGenerator"]


LOGGER = logging.getLogger(__name__)

BINDING_TEMPLATE = """$this->app->bind(
    \\{{namespace}}\\Repositories\\{{moduleName}}\\{{moduleName}}RepositoryInterface::class,
    \\{{namespace}}\\Repositories\\{{moduleName}}\\{{moduleName}}Repository::class
);"""


class ScaffoldGenerator:
    """Generate the files of a module around a single entity.

    Every artifact is handled independently: it is skipped when its file
    already exists (unless overwriting is allowed), and a failure to find its
    stub or to write its file is recorded in the report without stopping the
    rest of the batch.
    """

    def __init__(
        self,
        config: ScaffoldConfig,
        *,
        store: TemplateStore | None = None,
        renderer: TemplateRenderer | None = None,
        sink: EventSink | None = None,
        artifacts: Mapping[ArtifactKind, ArtifactSpec] = ARTIFACTS,
    ) -> None:
        self.config = config
        self.store = store or TemplateStore(override_dir=config.stubs_path)
        self.renderer = renderer or TemplateRenderer()
        self.sink = sink
        self.artifacts = artifacts

    def context(self, entity: EntityName, kind: ArtifactKind | None = None) -> dict[str, str]:
        """Placeholder values for ``entity``, plus the bindings of ``kind``."""

        context = entity.context(self.config.namespace)
        context["extension"] = self.config.extension
        if kind is not None:
            context.update(self.artifacts[kind].bindings)
        return context

    def output_path(self, entity: EntityName, kind: ArtifactKind) -> Path:
        """Return where ``kind`` is written for ``entity``."""

        spec = self.artifacts[kind]
        relative = self.renderer.render_string(spec.path, self.context(entity, kind))
        return self.config.area_path(spec.area) / relative

    def render(self, entity: EntityName, kind: ArtifactKind) -> str:
        """Render the stub of ``kind`` for ``entity`` without writing it."""

        spec = self.artifacts[kind]
        template = self.store.resolve(spec.template)
        if self.store.is_missing(template):
            raise TemplateNotFoundError(spec.template)
        return self.renderer.render_string(template, self.context(entity, kind))

    def binding_snippet(self, entity: EntityName) -> str:
        """The container binding that wires the repository of ``entity``."""

        return self.renderer.render_string(BINDING_TEMPLATE, self.context(entity))

    def generate(
        self,
        entity: EntityName | str,
        kinds: Iterable[ArtifactKind],
        *,
        overwrite: bool = False,
        max_workers: int | None = None,
    ) -> GenerationReport:
        """Generate ``kinds`` for ``entity`` and report one result per kind.

        Parameters
        ----------
        entity:
            The entity, or a raw name that is normalised with
            :meth:`EntityName.from_name`.
        kinds:
            Artifacts to generate. Duplicates are generated once, and the
            report follows the order in which kinds first appear.
        overwrite:
            Replace existing files instead of skipping them. Kinds that are not
            overwritable are always skipped when present.
        max_workers:
            When greater than one, artifacts are written from a thread pool.
        """

        if isinstance(entity, str):
            entity = EntityName.from_name(entity)

        ordered = list(dict.fromkeys(ArtifactKind(kind) for kind in kinds))
        if not ordered:
            raise ValueError("at least one artifact kind is required")

        def run(kind: ArtifactKind) -> GenerationResult:
            return self._generate_one(entity, kind, overwrite)

        if max_workers and max_workers > 1 and len(ordered) > 1:
            with ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="stubforge") as executor:
                results = list(executor.map(run, ordered))
        else:
            results = [run(kind) for kind in ordered]

        report = GenerationReport(entity=entity.studly, results=tuple(results))
        for result in report.results:
            self._report(result)
        return report

    def _generate_one(self, entity: EntityName, kind: ArtifactKind, overwrite: bool) -> GenerationResult:
        spec = self.artifacts[kind]
        path = self.output_path(entity, kind)
        note = self._follow_up(entity, kind, path)

        try:
            if path.exists() and not (overwrite and spec.overwritable):
                return GenerationResult(kind=kind, outcome=Outcome.SKIPPED_EXISTING, path=path, message=note)
            content = self.render(entity, kind)
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content, encoding="utf-8")
        except TemplateNotFoundError as exc:
            return GenerationResult(
                kind=kind,
                outcome=Outcome.FAILED,
                path=path,
                message=str(exc),
                error=FailureKind.TEMPLATE_NOT_FOUND,
            )
        except (OSError, UnicodeDecodeError) as exc:
            # an unreadable override stub fails like an unwritable target
            LOGGER.warning("failed to generate %s: %s", path, exc)
            return GenerationResult(
                kind=kind,
                outcome=Outcome.FAILED,
                path=path,
                message=str(exc),
                error=FailureKind.FILESYSTEM_ERROR,
            )

        LOGGER.debug("wrote %s (%d bytes)", path, len(content))
        return GenerationResult(kind=kind, outcome=Outcome.CREATED, path=path, message=note)

    def _follow_up(self, entity: EntityName, kind: ArtifactKind, path: Path) -> str | None:
        if kind is ArtifactKind.PROVIDER:
            return (
                "Register the repository binding in RepositoryServiceProvider::register():\n"
                + self.binding_snippet(entity)
            )
        if kind is ArtifactKind.ROUTES:
            return f"Include {path.name} from your web or api routes file."
        return None

    def _report(self, result: GenerationResult) -> None:
        if self.sink is None:
            return

        label = result.kind.value.replace("-", " ")
        attributes = {"kind": result.kind.value, "path": str(result.path)}
        if result.outcome is Outcome.CREATED:
            self.sink.emit("generator", f"Created {label}: {result.path}", **attributes)
        elif result.outcome is Outcome.SKIPPED_EXISTING:
            self.sink.emit(
                "generator", f"Skipped {label}, file exists: {result.path}", EventLevel.WARNING, **attributes
            )
        else:
            self.sink.emit(
                "generator", f"Failed {label}: {result.message}", EventLevel.ERROR, **attributes
            )
            return

        if result.message:
            self.sink.emit("generator", result.message, EventLevel.WARNING, **attributes)
