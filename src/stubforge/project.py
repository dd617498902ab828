"""One-time project setup: directories, provider registration and seeding."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable

from .artifacts import ARTIFACTS, ArtifactKind, resolve_kinds
from .config import EntityName, ScaffoldConfig
from .errors import TemplateNotFoundError
from .generator import ScaffoldGenerator
from .io.adapters import LoggingSink
from .io.interfaces import EventSink
from .io.schema import EventLevel, GenerationReport
from .patching import insert_array_entry, insert_method_statement, patch_file
from .store import TemplateStore
from .template import TemplateRenderer

__all__ = [
    "EXAMPLE_ENTITY",
    "ProjectSetup",
]


LOGGER = logging.getLogger(__name__)

EXAMPLE_ENTITY = "Item"
INSTALL_AREAS = ("repositories", "services", "requests")
SETUP_AREAS = ("repositories", "services", "providers")
SEEDER_CALL = "$this->call(AdminSeeder::class);"


class ProjectSetup:
    """Setup steps run once per host project.

    Each step is idempotent: existing files are kept and registrations that
    are already present are not repeated. Edits of existing files go through
    :func:`~stubforge.patching.patch_file`, which raises
    :class:`~stubforge.errors.PatchError` instead of writing a malformed file.
    """

    def __init__(
        self,
        config: ScaffoldConfig,
        *,
        store: TemplateStore | None = None,
        renderer: TemplateRenderer | None = None,
        sink: EventSink | None = None,
    ) -> None:
        self.config = config
        self.store = store or TemplateStore(override_dir=config.stubs_path)
        self.renderer = renderer or TemplateRenderer()
        self.sink = sink or LoggingSink()

    @property
    def provider_path(self) -> Path:
        relative = self.renderer.render_string(
            ARTIFACTS[ArtifactKind.PROVIDER].path, {"extension": self.config.extension}
        )
        return self.config.area_path("providers") / relative

    def _file(self, area: str, stem: str) -> Path:
        return self.config.area_path(area) / f"{stem}.{self.config.extension}"

    def _render(self, name: str) -> str:
        template = self.store.resolve(name)
        if self.store.is_missing(template):
            raise TemplateNotFoundError(name)
        return self.renderer.render_string(template, {"namespace": self.config.namespace})

    def _write_once(self, path: Path, template: str, label: str) -> bool:
        if path.exists():
            self.sink.emit("setup", f"{label} already exists: {path}", EventLevel.DEBUG)
            return False
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(self._render(template), encoding="utf-8")
        self.sink.emit("setup", f"Created {label}: {path}", path=str(path))
        return True

    def ensure_directories(self, areas: Iterable[str]) -> list[Path]:
        """Create the output directories of ``areas`` that do not exist yet."""

        created: list[Path] = []
        for area in areas:
            directory = self.config.area_path(area)
            if directory.is_dir():
                continue
            directory.mkdir(parents=True, exist_ok=True)
            self.sink.emit("setup", f"Created directory: {directory}", path=str(directory))
            created.append(directory)
        return created

    def ensure_provider(self) -> bool:
        """Write the repository service provider unless it already exists."""

        return self._write_once(self.provider_path, "service-provider", "RepositoryServiceProvider")

    def register_provider(self) -> bool:
        """Add the repository provider to the framework's provider list."""

        providers_file = self._file("bootstrap", "providers")
        if not providers_file.is_file():
            self.sink.emit(
                "setup",
                f"{providers_file} not found; register RepositoryServiceProvider manually",
                EventLevel.WARNING,
            )
            return False

        entry = f"{self.config.namespace}\\Providers\\RepositoryServiceProvider::class"
        changed = patch_file(providers_file, lambda text: insert_array_entry(text, entry))
        if changed:
            self.sink.emit("setup", f"Registered RepositoryServiceProvider in {providers_file}")
        return changed

    def register_binding(self, entity: EntityName | str) -> bool:
        """Bind the repository interface of ``entity`` in the provider."""

        if isinstance(entity, str):
            entity = EntityName.from_name(entity)

        provider = self.provider_path
        if not provider.is_file():
            self.sink.emit(
                "setup", f"{provider} not found; cannot register the {entity.studly} binding", EventLevel.WARNING
            )
            return False

        generator = ScaffoldGenerator(self.config, store=self.store, renderer=self.renderer)
        snippet = generator.binding_snippet(entity)
        changed = patch_file(provider, lambda text: insert_method_statement(text, "register", snippet))
        if changed:
            self.sink.emit("setup", f"Bound {entity.studly}RepositoryInterface in {provider}")
        return changed

    def write_admin_seeder(self) -> bool:
        """Write the admin seeder and call it from the database seeder."""

        created = self._write_once(self._file("seeders", "AdminSeeder"), "admin-seeder", "AdminSeeder")

        database_seeder = self._file("seeders", "DatabaseSeeder")
        if not database_seeder.is_file():
            self.sink.emit(
                "setup", f"{database_seeder} not found; call AdminSeeder manually", EventLevel.WARNING
            )
            return created

        if patch_file(database_seeder, lambda text: insert_method_statement(text, "run", SEEDER_CALL)):
            self.sink.emit("setup", f"Registered AdminSeeder in {database_seeder}")
        return created

    def publish_stubs(self, *, force: bool = False) -> list[Path]:
        """Copy the built-in stubs into the project's stub directory."""

        target = self.config.stubs_path
        written = self.store.publish(target, force=force)
        self.sink.emit("setup", f"Published {len(written)} stubs to {target}", path=str(target))
        return written

    def install(
        self,
        *,
        publish: bool = False,
        with_examples: bool = False,
        force: bool = False,
    ) -> GenerationReport | None:
        """Prepare a project for module generation.

        Returns the report of the example module when ``with_examples`` is set.
        """

        self.ensure_directories(INSTALL_AREAS)
        self.ensure_provider()
        self.register_provider()
        if publish:
            self.publish_stubs(force=force)
        if not with_examples:
            return None

        LOGGER.info("generating example module %s", EXAMPLE_ENTITY)
        generator = ScaffoldGenerator(self.config, store=self.store, renderer=self.renderer, sink=self.sink)
        return generator.generate(EXAMPLE_ENTITY, resolve_kinds(all_kinds=True), overwrite=force)

    def setup_project(self, *, seed: bool = True) -> None:
        """Prepare a fresh project: directories, provider and admin seeder."""

        self.ensure_directories(SETUP_AREAS)
        self.ensure_provider()
        self.register_provider()
        if seed:
            self.write_admin_seeder()
