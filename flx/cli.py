"""flx command-line interface.

Usage::

    flx gen feature auth
    flx gen screen login -o ./my_app
    flx gen model user --dry-run
    flx config init
    flx config --state bloc
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path

from rich.prompt import Confirm

from flx import __version__
from flx.config import Config, config_path, init_config, set_state_manager
from flx.errors import FlxError
from flx.scaffolder.generator import FeatureGenerator, Operation, validate_entity_name
from flx.utils import (
    console,
    print_error,
    print_file_list,
    print_hint,
    print_success,
    print_warning,
)

_SHARED_HINTS: dict[Operation, str] = {
    Operation.MODEL: (
        "Note: Model generated in shared folder. "
        'For feature-specific models, use "flx gen feature <name>"'
    ),
    Operation.USECASE: (
        "Note: UseCase generated in shared folder. "
        'For feature-specific usecases, use "flx gen feature <name>"'
    ),
    Operation.REPOSITORY: (
        "Note: Repository generated in shared folder. "
        'For feature-specific repositories, use "flx gen feature <name>"'
    ),
}


# ---------------------------------------------------------------------------
# Argument parsing
# ---------------------------------------------------------------------------


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="flx",
        description="FLX CLI -- Flutter Clean Architecture generator",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  flx gen feature auth\n"
            "  flx gen screen login\n"
            "  flx gen model user\n"
            "  flx config init\n"
            "  flx config --state bloc\n"
            "  flx config --state getx\n"
        ),
    )
    parser.add_argument(
        "--version", "-v",
        action="version",
        version=f"FLX CLI version {__version__}",
    )
    subparsers = parser.add_subparsers(dest="command", metavar="<command>")

    gen = subparsers.add_parser(
        "gen",
        help="Generate a feature, screen, model, usecase or repository",
        description="Generate Clean Architecture files for <name>.",
    )
    gen.add_argument(
        "kind",
        choices=[op.value for op in Operation],
        help="What to generate",
    )
    gen.add_argument("name", nargs="?", default=None, help="Entity name, e.g. user_profile")
    gen.add_argument(
        "--output", "-o",
        default=".",
        help="Project root to generate into (default: current directory)",
    )
    gen.add_argument(
        "--dry-run",
        action="store_true",
        help="List the files that would be written without writing them",
    )

    config = subparsers.add_parser(
        "config",
        help="Create or update the .flxrc.json config file",
        description="Manage the .flxrc.json config file.",
    )
    config.add_argument("action", nargs="?", choices=["init"], help="Write a default config")
    config.add_argument(
        "--state",
        default=None,
        metavar="MANAGER",
        help="Set the default state manager (getx or bloc)",
    )
    config.add_argument(
        "--force", "-f",
        action="store_true",
        help="Overwrite an existing config without asking",
    )
    return parser


# ---------------------------------------------------------------------------
# Command handlers
# ---------------------------------------------------------------------------


def _run_gen(args: argparse.Namespace) -> None:
    operation = Operation(args.kind)
    name = validate_entity_name(args.name)
    config = Config.load()
    generator = FeatureGenerator(config, base_dir=Path(args.output))

    console.print(f"Generating {operation.value}: {name}", highlight=False)

    if args.dry_run:
        plan = generator.plan(operation, name)
        print_warning("Dry run -- no files were written:")
        print_file_list(plan.paths)
        return

    written = asyncio.run(generator.generate(operation, name))
    print_success(f'Generated {operation.value} "{name}" with files:')
    print_file_list(written, base_dir=generator.base_dir)

    hint = _SHARED_HINTS.get(operation)
    if hint:
        print_hint(hint)


def _confirm_overwrite(path: Path) -> bool:
    console.print(f"Config file already exists at {path}", highlight=False)
    return Confirm.ask("Do you want to overwrite it?", default=False, console=console)


def _run_config(args: argparse.Namespace) -> None:
    path = config_path()

    if args.state is not None and args.action == "init":
        print_error('Error: use either "config init" or "config --state", not both')
        sys.exit(1)

    if args.state is not None:
        updated = set_state_manager(args.state, path)
        print_success(f"State manager set to: {updated.default_state_manager.value}")
        return

    if args.action == "init":
        console.print(f"Initializing {path.name} config file...", highlight=False)
        written = init_config(path, force=args.force, confirm=_confirm_overwrite)
        if written is None:
            print_warning("Config initialization cancelled.")
            return
        print_success(f"Successfully created {written}")
        print_hint("You can now edit this file to customize your preferences.")
        return

    print_error("Error: config command requires a subcommand or flag")
    print_hint("Available: config init, config --state <manager>")
    sys.exit(1)


# ---------------------------------------------------------------------------
# CLI entry point
# ---------------------------------------------------------------------------


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for ``flx`` and ``python -m flx``."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return

    handlers = {"gen": _run_gen, "config": _run_config}
    try:
        handlers[args.command](args)
    except FlxError as exc:
        print_error(f"Error: {exc}")
        sys.exit(1)


if __name__ == "__main__":
    main()
