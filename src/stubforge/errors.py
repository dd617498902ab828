"""Custom exception types used by stubforge."""

from __future__ import annotations

from pathlib import Path


class StubforgeError(RuntimeError):
    """Base class for errors the command line reports without a traceback."""


class ConfigError(StubforgeError):
    """Raised when a project configuration file cannot be loaded."""


class TemplateNotFoundError(StubforgeError, LookupError):
    """Raised when a stub cannot be found in any template source."""

    def __init__(self, name: str) -> None:
        super().__init__(f"no stub named '{name}'")
        self.name = name


class PatchError(StubforgeError):
    """Raised when an existing source file cannot be patched safely."""

    def __init__(self, path: Path | str, reason: str) -> None:
        super().__init__(f"cannot patch {path}: {reason}")
        self.path = Path(path)
        self.reason = reason


__all__ = ["ConfigError", "PatchError", "StubforgeError", "TemplateNotFoundError"]
