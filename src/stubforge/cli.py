"""Command line interface for stubforge."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Sequence

from .artifacts import ArtifactKind, resolve_kinds
from .commands import MigrationRunner
from .config import EntityName, ScaffoldConfig
from .errors import StubforgeError
from .generator import ScaffoldGenerator
from .io.adapters import ConsoleSink
from .project import EXAMPLE_ENTITY, ProjectSetup

_SELECTION_FLAGS = ("all", "model", "controller", "request", "service", "repository", "migration")


def _common_options() -> argparse.ArgumentParser:
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "-d",
        "--directory",
        type=Path,
        default=None,
        help="Root of the host project (defaults to the current directory)",
    )
    common.add_argument("--stubs", type=Path, help="Directory with custom <name>.stub files")
    common.add_argument("-v", "--verbose", action="store_true", help="Show debug output")
    return common


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Generate repository pattern modules from stubs")
    subparsers = parser.add_subparsers(dest="command", required=True)
    common = _common_options()

    make_parser = subparsers.add_parser("make", parents=[common], help="generate a module for an entity")
    make_parser.add_argument("name", help="Entity name, for example Product")
    make_parser.add_argument("--all", action="store_true", help="Generate every artifact")
    make_parser.add_argument("--model", action="store_true", help="Generate the model")
    make_parser.add_argument("--controller", action="store_true", help="Generate the controller")
    make_parser.add_argument("--request", action="store_true", help="Generate the five form requests")
    make_parser.add_argument("--service", action="store_true", help="Generate the service")
    make_parser.add_argument("--repository", action="store_true", help="Generate the repository pair")
    make_parser.add_argument("--migration", action="store_true", help="Run the migration command")
    make_parser.add_argument("--api", action="store_true", help="Also generate API variants")
    make_parser.add_argument("-f", "--force", action="store_true", help="Overwrite existing files")
    make_parser.add_argument(
        "--bind",
        action="store_true",
        help="Register the repository binding in RepositoryServiceProvider",
    )
    make_parser.add_argument(
        "--workers",
        type=int,
        default=None,
        help="Write artifacts from this many threads",
    )

    install_parser = subparsers.add_parser(
        "install", parents=[common], help="prepare a project for module generation"
    )
    install_parser.add_argument(
        "--publish-stubs", action="store_true", help="Copy the built-in stubs into the project"
    )
    install_parser.add_argument(
        "--with-examples", action="store_true", help=f"Generate an example {EXAMPLE_ENTITY} module"
    )
    install_parser.add_argument("-f", "--force", action="store_true", help="Overwrite published stubs")

    setup_parser = subparsers.add_parser(
        "setup-project", parents=[common], help="create directories, provider and admin seeder"
    )
    setup_parser.add_argument("--no-seed", action="store_true", help="Skip the admin seeder")

    publish_parser = subparsers.add_parser(
        "publish", parents=[common], help="copy the built-in stubs for customisation"
    )
    publish_parser.add_argument("-f", "--force", action="store_true", help="Overwrite existing stubs")

    render_parser = subparsers.add_parser(
        "render", parents=[common], help="print a single rendered artifact"
    )
    render_parser.add_argument("name", help="Entity name, for example Product")
    render_parser.add_argument(
        "kind",
        choices=[kind.value for kind in ArtifactKind],
        help="Artifact to render",
    )
    render_parser.add_argument(
        "-o",
        "--output",
        type=Path,
        help="Write the rendered artifact to this path instead of stdout",
    )

    return parser


def _configure(args: argparse.Namespace) -> tuple[ScaffoldConfig, ConsoleSink]:
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    config = ScaffoldConfig.from_project(args.directory, stubs_path=args.stubs)
    return config, ConsoleSink(verbose=args.verbose)


def _handle_make(args: argparse.Namespace) -> int:
    if not any(getattr(args, flag) for flag in _SELECTION_FLAGS):
        sys.stderr.write(
            "select at least one of --all, --model, --controller, --request, "
            "--service, --repository or --migration\n"
        )
        return 2

    config, sink = _configure(args)
    entity = EntityName.from_name(args.name)
    kinds = resolve_kinds(
        all_kinds=args.all,
        model=args.model,
        controller=args.controller,
        request=args.request,
        service=args.service,
        repository=args.repository,
        api=args.api,
    )

    print(f"Creating module {entity.studly}")
    ok = True
    if kinds:
        generator = ScaffoldGenerator(config, sink=sink)
        report = generator.generate(entity, kinds, overwrite=args.force, max_workers=args.workers)
        ok = report.ok
        print(
            f"{len(report.created)} created, {len(report.skipped)} skipped, "
            f"{len(report.failed)} failed"
        )

    if args.migration or args.all:
        MigrationRunner(config, sink=sink).run(entity)

    if args.bind:
        ProjectSetup(config, sink=sink).register_binding(entity)

    sink.flush()
    return 0 if ok else 1


def _handle_install(args: argparse.Namespace) -> int:
    config, sink = _configure(args)
    report = ProjectSetup(config, sink=sink).install(
        publish=args.publish_stubs,
        with_examples=args.with_examples,
        force=args.force,
    )
    sink.flush()
    print("Installation complete. Generate a module with: stubforge make NAME --all")
    return 0 if report is None or report.ok else 1


def _handle_setup(args: argparse.Namespace) -> int:
    config, sink = _configure(args)
    ProjectSetup(config, sink=sink).setup_project(seed=not args.no_seed)
    sink.flush()
    print("Project setup complete.")
    return 0


def _handle_publish(args: argparse.Namespace) -> int:
    config, sink = _configure(args)
    ProjectSetup(config, sink=sink).publish_stubs(force=args.force)
    sink.flush()
    return 0


def _handle_render(args: argparse.Namespace) -> int:
    config, _ = _configure(args)
    generator = ScaffoldGenerator(config)
    rendered = generator.render(EntityName.from_name(args.name), ArtifactKind(args.kind))
    if args.output:
        args.output.parent.mkdir(parents=True, exist_ok=True)
        args.output.write_text(rendered, encoding="utf-8")
    else:
        sys.stdout.write(rendered)
        if not rendered.endswith("\n"):
            sys.stdout.write("\n")
    return 0


_HANDLERS = {
    "make": _handle_make,
    "install": _handle_install,
    "setup-project": _handle_setup,
    "publish": _handle_publish,
    "render": _handle_render,
}


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    handler = _HANDLERS.get(args.command)
    if handler is None:
        parser.error("no command provided")
        return 2
    try:
        return handler(args)
    except (StubforgeError, OSError, ValueError) as exc:
        sys.stderr.write(f"error: {exc}\n")
        return 2


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
