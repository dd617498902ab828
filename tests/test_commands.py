from __future__ import annotations

import subprocess
from pathlib import Path

from stubforge.commands import MigrationRunner
from stubforge.config import EntityName, ScaffoldConfig
from stubforge.io.adapters import MemorySink
from stubforge.io.schema import EventLevel


class FakeRunner:
    def __init__(self, result=None, error: Exception | None = None):
        self.result = result
        self.error = error
        self.calls: list[tuple[list[str], dict]] = []

    def __call__(self, argv, **kwargs):
        self.calls.append((argv, kwargs))
        if self.error is not None:
            raise self.error
        return self.result


def test_command_is_rendered_for_entity(config: ScaffoldConfig):
    runner = MigrationRunner(config)

    assert runner.command(EntityName.from_name("product category")) == [
        "php",
        "artisan",
        "make:migration",
        "create_product_categories_table",
        "--create=product_categories",
    ]


def test_run_success(config: ScaffoldConfig, sink: MemorySink, tmp_path: Path):
    fake = FakeRunner(subprocess.CompletedProcess([], 0, stdout="Migration created.\n", stderr=""))
    runner = MigrationRunner(config, sink=sink, runner=fake)

    assert runner.run("Product") is True

    argv, kwargs = fake.calls[0]
    assert argv[3] == "create_products_table"
    assert kwargs["cwd"] == tmp_path
    assert kwargs["check"] is True
    assert sink.messages() == ["Migration created."]


def test_run_success_without_output(config: ScaffoldConfig, sink: MemorySink):
    fake = FakeRunner(subprocess.CompletedProcess([], 0, stdout="", stderr=""))

    assert MigrationRunner(config, sink=sink, runner=fake).run("Product") is True
    assert sink.messages()[0].startswith("Ran php artisan make:migration create_products_table")


def test_missing_executable_is_a_warning(config: ScaffoldConfig, sink: MemorySink):
    fake = FakeRunner(error=FileNotFoundError("php"))

    assert MigrationRunner(config, sink=sink, runner=fake).run("Product") is False
    assert sink.messages(EventLevel.WARNING) == ["php not found, skipping migration"]


def test_failed_command_is_a_warning(config: ScaffoldConfig, sink: MemorySink):
    fake = FakeRunner(error=subprocess.CalledProcessError(1, ["php"], output="", stderr="boom\n"))

    assert MigrationRunner(config, sink=sink, runner=fake).run("Product") is False
    assert sink.messages(EventLevel.WARNING) == ["Migration command failed with exit code 1: boom"]


def test_empty_command_is_not_run(tmp_path: Path, sink: MemorySink):
    config = ScaffoldConfig(base_path=tmp_path, migration_command=())
    fake = FakeRunner()

    assert MigrationRunner(config, sink=sink, runner=fake).run("Product") is False
    assert fake.calls == []
    assert sink.messages(EventLevel.WARNING) == ["No migration command configured"]
