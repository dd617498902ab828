from __future__ import annotations

from pathlib import Path

import pytest

from stubforge.artifacts import ARTIFACTS
from stubforge.fallback import FALLBACK_STUBS
from stubforge.store import DEFAULT_STUBS_DIR, NOT_FOUND_STUB, TemplateStore


def test_fallback_used_without_any_directory():
    store = TemplateStore(default_dir=None)

    for name in store.known_names():
        assert store.resolve(name) == FALLBACK_STUBS[name]


@pytest.mark.parametrize(
    "name",
    ["controller-api", "request-api", "service-api", "repository-interface-api", "repository-api"],
)
def test_packaged_stubs_have_a_single_source(name: str):
    packaged = (DEFAULT_STUBS_DIR / f"{name}.stub").read_text(encoding="utf-8")

    assert TemplateStore().resolve(name) == packaged
    assert TemplateStore(default_dir=None).resolve(name) == packaged


def test_default_directory_wins_over_fallback(tmp_path: Path):
    (tmp_path / "model.stub").write_text("default {{moduleName}}", encoding="utf-8")
    store = TemplateStore(default_dir=tmp_path)

    assert store.resolve("model") == "default {{moduleName}}"
    assert store.resolve("controller") == FALLBACK_STUBS["controller"]


def test_override_directory_wins(tmp_path: Path):
    (tmp_path / "model.stub").write_text("custom {{moduleName}}", encoding="utf-8")
    (tmp_path / "controller-api.stub").write_text("api {{moduleName}}", encoding="utf-8")
    store = TemplateStore(override_dir=tmp_path)

    assert store.resolve("model") == "custom {{moduleName}}"
    assert store.resolve("controller-api") == "api {{moduleName}}"
    assert store.resolve("service") == FALLBACK_STUBS["service"]


def test_missing_override_directory_is_ignored(tmp_path: Path):
    store = TemplateStore(override_dir=tmp_path / "does-not-exist", default_dir=None)

    assert store.resolve("model") == FALLBACK_STUBS["model"]


def test_unknown_name_resolves_to_marker():
    store = TemplateStore()

    text = store.resolve("does-not-exist")

    assert text == NOT_FOUND_STUB
    assert store.is_missing(text)
    assert not store.is_missing(store.resolve("model"))


def test_empty_name_is_rejected():
    with pytest.raises(ValueError):
        TemplateStore().resolve("")


def test_overrides_are_read_on_every_call(tmp_path: Path):
    store = TemplateStore(override_dir=tmp_path, default_dir=None)
    assert store.resolve("routes") == FALLBACK_STUBS["routes"]

    stub = tmp_path / "routes.stub"
    stub.write_text("first", encoding="utf-8")
    assert store.resolve("routes") == "first"

    stub.write_text("second", encoding="utf-8")
    assert store.resolve("routes") == "second"


def test_publish_writes_every_known_stub(tmp_path: Path):
    store = TemplateStore()
    target = tmp_path / "stubs"

    written = store.publish(target)

    assert sorted(path.name for path in written) == sorted(f"{name}.stub" for name in store.known_names())
    assert (target / "controller-api.stub").read_text(encoding="utf-8") == store.resolve("controller-api")
    assert store.publish(target) == []


def test_publish_force_rewrites_existing(tmp_path: Path):
    store = TemplateStore(default_dir=None)
    store.publish(tmp_path)
    (tmp_path / "model.stub").write_text("edited", encoding="utf-8")

    assert store.publish(tmp_path) == []
    assert (tmp_path / "model.stub").read_text(encoding="utf-8") == "edited"

    written = store.publish(tmp_path, force=True)
    assert len(written) == len(store.known_names())
    assert (tmp_path / "model.stub").read_text(encoding="utf-8") == FALLBACK_STUBS["model"]


def test_every_artifact_template_is_known():
    known = set(TemplateStore.known_names())
    assert {spec.template for spec in ARTIFACTS.values()} <= known
