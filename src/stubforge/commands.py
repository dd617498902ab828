"""Invocation of the host framework's own commands."""

from __future__ import annotations

import logging
import shlex
import subprocess
from typing import Callable

from .config import EntityName, ScaffoldConfig
from .io.adapters import LoggingSink
from .io.interfaces import EventSink
from .io.schema import EventLevel
from .template import TemplateRenderer

__all__ = ["MigrationRunner"]


LOGGER = logging.getLogger(__name__)

Runner = Callable[..., "subprocess.CompletedProcess[str]"]


class MigrationRunner:
    """Run the configured migration command for an entity.

    Failures are reported to the sink as warnings; the command is a
    convenience and never aborts module generation.
    """

    def __init__(
        self,
        config: ScaffoldConfig,
        *,
        renderer: TemplateRenderer | None = None,
        sink: EventSink | None = None,
        runner: Runner = subprocess.run,
    ) -> None:
        self.config = config
        self.renderer = renderer or TemplateRenderer()
        self.sink = sink or LoggingSink()
        self._runner = runner

    def command(self, entity: EntityName) -> list[str]:
        """The argv that :meth:`run` executes for ``entity``."""

        context = entity.context(self.config.namespace)
        return [self.renderer.render_string(part, context) for part in self.config.migration_command]

    def run(self, entity: EntityName | str) -> bool:
        """Run the migration command, returning ``True`` on success."""

        if isinstance(entity, str):
            entity = EntityName.from_name(entity)

        argv = self.command(entity)
        if not argv:
            self.sink.emit("migration", "No migration command configured", EventLevel.WARNING)
            return False

        LOGGER.debug("running %s in %s", argv, self.config.base_path)
        try:
            result = self._runner(
                argv,
                cwd=self.config.base_path,
                capture_output=True,
                check=True,
                text=True,
            )
        except FileNotFoundError:
            self.sink.emit("migration", f"{argv[0]} not found, skipping migration", EventLevel.WARNING)
            return False
        except subprocess.CalledProcessError as exc:
            detail = (exc.stderr or exc.stdout or "").strip()
            message = f"Migration command failed with exit code {exc.returncode}"
            self.sink.emit("migration", f"{message}: {detail}" if detail else message, EventLevel.WARNING)
            return False

        output = (result.stdout or "").strip()
        self.sink.emit("migration", output or f"Ran {shlex.join(argv)}")
        return True
