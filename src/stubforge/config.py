"""Configuration helpers shared by the generator, setup steps and CLI."""

from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping

from .errors import ConfigError
from .naming import pluralize, snake_case, studly_case

__all__ = [
    "DEFAULT_MIGRATION_COMMAND",
    "DEFAULT_PATHS",
    "EntityName",
    "ScaffoldConfig",
]


DEFAULT_PATHS: Mapping[str, str] = {
    "models": "app/Models",
    "repositories": "app/Repositories",
    "services": "app/Services",
    "controllers": "app/Http/Controllers",
    "requests": "app/Http/Requests",
    "providers": "app/Providers",
    "routes": "routes",
    "seeders": "database/seeders",
    "bootstrap": "bootstrap",
}

DEFAULT_MIGRATION_COMMAND = (
    "php",
    "artisan",
    "make:migration",
    "create_{{tableName}}_table",
    "--create={{tableName}}",
)

DEFAULT_STUBS_SUBDIR = Path("stubs") / "stubforge"
STUBS_ENV_VAR = "STUBFORGE_STUBS"


@dataclass(frozen=True, slots=True)
class EntityName:
    """Derived identifiers for the entity a module is generated for.

    Attributes
    ----------
    name:
        The name exactly as supplied, with whitespace collapsed.
    studly:
        Singular class name, for example ``ProductCategory``.
    plural:
        Plural class name, for example ``ProductCategories``.
    lower:
        Lower cased :attr:`studly`, used for variables and route names.
    plural_lower:
        Lower cased :attr:`plural`, used for URL prefixes.
    table:
        Snake cased plural, used for database tables.
    """

    name: str
    studly: str
    plural: str
    lower: str
    plural_lower: str
    table: str

    @classmethod
    def from_name(cls, name: str) -> "EntityName":
        """Build an :class:`EntityName` from user input such as ``"product"``."""

        normalized_name = " ".join(name.split())
        studly = studly_case(normalized_name)
        if not studly:
            raise ValueError("entity name must contain at least one letter or digit")

        plural = pluralize(studly)
        return cls(
            name=normalized_name,
            studly=studly,
            plural=plural,
            lower=studly.lower(),
            plural_lower=plural.lower(),
            table=snake_case(plural),
        )

    def context(self, namespace: str = "App") -> dict[str, str]:
        """Return the placeholder values used by the built-in stubs."""

        return {
            "moduleName": self.studly,
            "moduleNamePlural": self.plural,
            "moduleNameLower": self.lower,
            "moduleNamePluralLower": self.plural_lower,
            "tableName": self.table,
            "namespace": namespace,
        }


def _load_table(base_path: Path) -> dict[str, Any]:
    dedicated = base_path / "stubforge.toml"
    pyproject = base_path / "pyproject.toml"
    try:
        if dedicated.is_file():
            with dedicated.open("rb") as handle:
                return tomllib.load(handle)
        if pyproject.is_file():
            with pyproject.open("rb") as handle:
                return tomllib.load(handle).get("tool", {}).get("stubforge", {})
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"invalid configuration file: {exc}") from exc
    return {}


@dataclass(slots=True)
class ScaffoldConfig:
    """Where generated files go and where custom stubs are looked up.

    Attributes
    ----------
    base_path:
        Root of the host project. Relative entries of :attr:`paths` and
        :attr:`stubs_path` resolve against it.
    namespace:
        Root namespace substituted for ``{{namespace}}``.
    extension:
        File extension of generated files, without the dot.
    paths:
        Mapping from logical area name to output directory.
    stubs_path:
        Directory holding ``<name>.stub`` overrides. It does not need to exist.
    migration_command:
        Command run for ``--migration``. Items may contain placeholders.
    """

    base_path: Path = field(default_factory=Path.cwd)
    namespace: str = "App"
    extension: str = "php"
    paths: dict[str, str] = field(default_factory=lambda: dict(DEFAULT_PATHS))
    stubs_path: Path | None = None
    migration_command: tuple[str, ...] = DEFAULT_MIGRATION_COMMAND

    def __post_init__(self) -> None:
        self.base_path = Path(self.base_path)
        unknown = set(self.paths) - set(DEFAULT_PATHS)
        if unknown:
            raise ValueError(f"unknown path areas: {', '.join(sorted(unknown))}")
        self.paths = {**DEFAULT_PATHS, **self.paths}
        if self.stubs_path is None:
            self.stubs_path = DEFAULT_STUBS_SUBDIR
        self.stubs_path = self._resolve(self.stubs_path)
        self.extension = self.extension.lstrip(".")
        self.migration_command = tuple(self.migration_command)

    def _resolve(self, path: str | Path) -> Path:
        candidate = Path(path).expanduser()
        if candidate.is_absolute():
            return candidate
        return self.base_path / candidate

    def area_path(self, area: str) -> Path:
        """Return the absolute output directory for ``area``."""

        try:
            return self._resolve(self.paths[area])
        except KeyError:
            raise ValueError(f"unknown path area '{area}'") from None

    @classmethod
    def from_project(
        cls,
        base_path: str | Path | None = None,
        *,
        stubs_path: str | Path | None = None,
    ) -> "ScaffoldConfig":
        """Load configuration for the project rooted at ``base_path``.

        Settings come from ``stubforge.toml`` or the ``[tool.stubforge]`` table
        of ``pyproject.toml``. The stub directory is taken from ``stubs_path``,
        then the ``STUBFORGE_STUBS`` environment variable, then the file.
        """

        base = Path(base_path) if base_path is not None else Path.cwd()
        table = _load_table(base)

        paths = table.get("paths", {})
        if not isinstance(paths, dict):
            raise ConfigError("'paths' must be a table")

        command = table.get("migration_command", DEFAULT_MIGRATION_COMMAND)
        if isinstance(command, str) or not all(isinstance(part, str) for part in command):
            raise ConfigError("'migration_command' must be a list of strings")

        stubs = stubs_path or os.environ.get(STUBS_ENV_VAR) or table.get("stubs")
        return cls(
            base_path=base,
            namespace=str(table.get("namespace", "App")),
            extension=str(table.get("extension", "php")),
            paths={str(key): str(value) for key, value in paths.items()},
            stubs_path=Path(stubs) if stubs else None,
            migration_command=tuple(command),
        )
