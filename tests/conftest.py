from __future__ import annotations

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from stubforge.config import ScaffoldConfig  # noqa: E402
from stubforge.io.adapters import MemorySink  # noqa: E402


@pytest.fixture(autouse=True)
def clear_stub_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep a developer's STUBFORGE_STUBS from leaking into the tests."""

    monkeypatch.delenv("STUBFORGE_STUBS", raising=False)


@pytest.fixture()
def config(tmp_path: Path) -> ScaffoldConfig:
    return ScaffoldConfig(base_path=tmp_path)


@pytest.fixture()
def sink() -> MemorySink:
    return MemorySink()
