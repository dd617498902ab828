"""Resolution of named stubs from override, default and built-in sources."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from .fallback import FALLBACK_STUBS, NOT_FOUND_STUB, PACKAGED_STUBS_DIR

__all__ = ["DEFAULT_STUBS_DIR", "NOT_FOUND_STUB", "STUB_SUFFIX", "TemplateStore"]


LOGGER = logging.getLogger(__name__)

DEFAULT_STUBS_DIR = PACKAGED_STUBS_DIR
STUB_SUFFIX = ".stub"


def _read_stub(directory: Path | None, name: str) -> str | None:
    if directory is None:
        return None
    candidate = directory / f"{name}{STUB_SUFFIX}"
    if not candidate.is_file():
        return None
    LOGGER.debug("resolved stub %r from %s", name, candidate)
    return candidate.read_text(encoding="utf-8")


@dataclass(slots=True)
class TemplateStore:
    """Look up stub text by name.

    Lookup order is the caller's ``override_dir``, then ``default_dir``, then
    the built-in fallback table. The filesystem is read on every call.
    """

    override_dir: Path | None = None
    default_dir: Path | None = DEFAULT_STUBS_DIR

    def __post_init__(self) -> None:
        if self.override_dir is not None:
            self.override_dir = Path(self.override_dir)
        if self.default_dir is not None:
            self.default_dir = Path(self.default_dir)

    @staticmethod
    def known_names() -> tuple[str, ...]:
        """Names for which :meth:`resolve` always returns real stub text."""

        return tuple(FALLBACK_STUBS)

    @staticmethod
    def is_missing(text: str) -> bool:
        """Whether ``text`` is the marker returned for an unknown stub."""

        return text == NOT_FOUND_STUB

    def resolve(self, name: str) -> str:
        """Return the text of the stub called ``name``.

        Unknown names resolve to :data:`NOT_FOUND_STUB` rather than raising so a
        batch can report the failure and carry on.
        """

        if not name:
            raise ValueError("stub name must not be empty")

        for directory in (self.override_dir, self.default_dir):
            text = _read_stub(directory, name)
            if text is not None:
                return text

        try:
            return FALLBACK_STUBS[name]
        except KeyError:
            LOGGER.warning("no stub named %r", name)
            return NOT_FOUND_STUB

    def publish(self, target_dir: str | Path, *, force: bool = False) -> list[Path]:
        """Copy every known stub into ``target_dir`` for local customisation.

        Existing files are left alone unless ``force`` is set. The text
        written is whatever :meth:`resolve` currently returns, so publishing
        over an override directory is a no-op without ``force``.
        """

        target = Path(target_dir)
        target.mkdir(parents=True, exist_ok=True)

        written: list[Path] = []
        for name in self.known_names():
            destination = target / f"{name}{STUB_SUFFIX}"
            if destination.exists() and not force:
                LOGGER.debug("skipping existing stub %s", destination)
                continue
            destination.write_text(self.resolve(name), encoding="utf-8")
            written.append(destination)
        return written
