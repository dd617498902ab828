from __future__ import annotations

from pathlib import Path

import pytest

from stubforge.config import ScaffoldConfig
from stubforge.errors import PatchError
from stubforge.io.adapters import MemorySink
from stubforge.io.schema import EventLevel, Outcome
from stubforge.project import ProjectSetup

PROVIDERS = """<?php

return [
    App\\Providers\\AppServiceProvider::class,
];
"""

DATABASE_SEEDER = """<?php

namespace Database\\Seeders;

use Illuminate\\Database\\Seeder;

class DatabaseSeeder extends Seeder
{
    public function run(): void
    {
        // User::factory(10)->create();
    }
}
"""


@pytest.fixture()
def setup(config: ScaffoldConfig, sink: MemorySink) -> ProjectSetup:
    return ProjectSetup(config, sink=sink)


def _write(path: Path, text: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


def test_ensure_directories(setup: ProjectSetup, tmp_path: Path):
    created = setup.ensure_directories(["repositories", "services"])

    assert created == [tmp_path / "app" / "Repositories", tmp_path / "app" / "Services"]
    assert setup.ensure_directories(["repositories", "services"]) == []


def test_ensure_provider_writes_once(setup: ProjectSetup, tmp_path: Path):
    provider = tmp_path / "app" / "Providers" / "RepositoryServiceProvider.php"

    assert setup.provider_path == provider
    assert setup.ensure_provider() is True
    assert "class RepositoryServiceProvider extends ServiceProvider" in provider.read_text(encoding="utf-8")

    provider.write_text("customised", encoding="utf-8")
    assert setup.ensure_provider() is False
    assert provider.read_text(encoding="utf-8") == "customised"


def test_register_provider_without_providers_file(setup: ProjectSetup, sink: MemorySink):
    assert setup.register_provider() is False
    assert "register RepositoryServiceProvider manually" in sink.messages(EventLevel.WARNING)[0]


def test_register_provider(setup: ProjectSetup, tmp_path: Path):
    providers = _write(tmp_path / "bootstrap" / "providers.php", PROVIDERS)

    assert setup.register_provider() is True
    assert setup.register_provider() is False

    text = providers.read_text(encoding="utf-8")
    assert text.count("App\\Providers\\RepositoryServiceProvider::class,") == 1
    assert text.index("RepositoryServiceProvider") < text.index("AppServiceProvider")


def test_register_provider_refuses_malformed_file(setup: ProjectSetup, tmp_path: Path):
    broken = "<?php\n\nreturn [\n"
    providers = _write(tmp_path / "bootstrap" / "providers.php", broken)

    with pytest.raises(PatchError):
        setup.register_provider()
    assert providers.read_text(encoding="utf-8") == broken


def test_register_binding(setup: ProjectSetup, sink: MemorySink):
    assert setup.register_binding("Product") is False
    assert sink.messages(EventLevel.WARNING)

    setup.ensure_provider()
    assert setup.register_binding("Product") is True
    assert setup.register_binding("Product") is False

    text = setup.provider_path.read_text(encoding="utf-8")
    assert text.count("$this->app->bind(\n            \\App\\Repositories\\Product\\ProductRepositoryInterface::class,") == 1
    assert text.index("ProductRepositoryInterface") < text.index("// Repository bindings")


def test_write_admin_seeder(setup: ProjectSetup, tmp_path: Path):
    seeders = tmp_path / "database" / "seeders"
    database_seeder = _write(seeders / "DatabaseSeeder.php", DATABASE_SEEDER)

    assert setup.write_admin_seeder() is True
    assert setup.write_admin_seeder() is False

    assert "class AdminSeeder extends Seeder" in (seeders / "AdminSeeder.php").read_text(encoding="utf-8")
    assert database_seeder.read_text(encoding="utf-8").count("$this->call(AdminSeeder::class);") == 1


def test_write_admin_seeder_without_database_seeder(setup: ProjectSetup, sink: MemorySink, tmp_path: Path):
    assert setup.write_admin_seeder() is True
    assert (tmp_path / "database" / "seeders" / "AdminSeeder.php").is_file()
    assert "call AdminSeeder manually" in sink.messages(EventLevel.WARNING)[0]


def test_publish_stubs(setup: ProjectSetup, config: ScaffoldConfig):
    written = setup.publish_stubs()

    assert (config.stubs_path / "model.stub").is_file()
    assert len(written) == len(setup.store.known_names())
    assert setup.publish_stubs() == []


def test_install(setup: ProjectSetup, tmp_path: Path):
    _write(tmp_path / "bootstrap" / "providers.php", PROVIDERS)

    report = setup.install()

    assert report is None
    assert (tmp_path / "app" / "Repositories").is_dir()
    assert (tmp_path / "app" / "Http" / "Requests").is_dir()
    assert setup.provider_path.is_file()
    assert "RepositoryServiceProvider" in (tmp_path / "bootstrap" / "providers.php").read_text(encoding="utf-8")


def test_install_with_examples(setup: ProjectSetup, config: ScaffoldConfig, tmp_path: Path):
    report = setup.install(publish=True, with_examples=True)

    assert report is not None
    assert report.ok
    assert report.entity == "Item"
    assert (tmp_path / "app" / "Models" / "Item.php").is_file()
    assert (config.stubs_path / "routes.stub").is_file()
    provider = [result for result in report.results if result.kind.value == "provider"][0]
    assert provider.outcome is Outcome.SKIPPED_EXISTING


def test_setup_project(setup: ProjectSetup, tmp_path: Path):
    setup.setup_project(seed=False)

    assert (tmp_path / "app" / "Services").is_dir()
    assert setup.provider_path.is_file()
    assert not (tmp_path / "database" / "seeders" / "AdminSeeder.php").exists()

    setup.setup_project()
    assert (tmp_path / "database" / "seeders" / "AdminSeeder.php").is_file()
