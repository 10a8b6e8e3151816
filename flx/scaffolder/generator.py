"""Main scaffolding orchestrator.

Turns an entity name plus a :class:`~flx.config.Config` into Clean
Architecture Flutter files.  Every operation runs in two stages:

1. **Plan** -- a pure :class:`GenerationPlan` listing the directories to
   create and an ordered ``relative path -> content`` mapping.
2. **Materialize** -- create the directories, then write every file in plan
   order, overwriting whatever is already there.

Paths follow a fixed layout keyed only by the snake_case name; templates
embed the same relative paths in their imports, so changing one side without
the other breaks the generated project.
"""

from __future__ import annotations

import asyncio
from enum import Enum
from pathlib import Path
from typing import Callable

from pydantic import BaseModel, Field

from flx.config import Config
from flx.errors import InvalidNameError, ScaffoldError

from . import templates
from .naming import to_snake


# ---------------------------------------------------------------------------
# Layout roots
# ---------------------------------------------------------------------------

FEATURES_ROOT = "lib/features"
SHARED_ROOT = "lib/shared"


# ---------------------------------------------------------------------------
# Plan model
# ---------------------------------------------------------------------------


class Operation(str, Enum):
    """The five ``flx gen`` subcommands."""

    FEATURE = "feature"
    SCREEN = "screen"
    MODEL = "model"
    USECASE = "usecase"
    REPOSITORY = "repository"


class GenerationPlan(BaseModel):
    """Pydantic model describing what one operation will write."""

    operation: Operation
    entity_name: str
    directories: list[str] = Field(
        default_factory=list,
        description="Directories to create, relative to the output root",
    )
    files: dict[str, str] = Field(
        default_factory=dict,
        description="Relative file path -> rendered content, in write order",
    )

    @property
    def paths(self) -> list[str]:
        return list(self.files)


def validate_entity_name(name: str | None) -> str:
    """Return *name* unchanged, or raise if it is missing or blank.

    Raises:
        InvalidNameError: *name* is ``None``, empty or whitespace-only.
    """
    if name is None or not name.strip():
        raise InvalidNameError(name)
    return name


# ---------------------------------------------------------------------------
# Main generator
# ---------------------------------------------------------------------------


class FeatureGenerator:
    """Scaffolds Clean Architecture features, screens and shared classes.

    Given a ``Config``, produces:
    - full features (data / domain / presentation) under ``lib/features``
    - standalone screens (page + binding + controller or BLoC)
    - shared models, use cases and repositories under ``lib/shared``
    """

    def __init__(self, config: Config, base_dir: str | Path = ".") -> None:
        self.config = config
        self.base_dir = Path(base_dir)

    # -- Public API --------------------------------------------------------

    async def generate(self, operation: Operation | str, name: str) -> list[Path]:
        """Plan and write *operation* for *name*.

        Returns:
            The written file paths, in write order.

        Raises:
            InvalidNameError: *name* is blank; nothing is written.
            ScaffoldError: A directory or file could not be written.  Files
                written earlier in the same run are kept.
        """
        plan = self.plan(operation, name)
        return await self.materialize(plan)

    async def generate_feature(self, name: str) -> list[Path]:
        return await self.generate(Operation.FEATURE, name)

    async def generate_screen(self, name: str) -> list[Path]:
        return await self.generate(Operation.SCREEN, name)

    async def generate_model(self, name: str) -> list[Path]:
        return await self.generate(Operation.MODEL, name)

    async def generate_use_case(self, name: str) -> list[Path]:
        return await self.generate(Operation.USECASE, name)

    async def generate_repository(self, name: str) -> list[Path]:
        return await self.generate(Operation.REPOSITORY, name)

    # -- Planning ----------------------------------------------------------

    def plan(self, operation: Operation | str, name: str) -> GenerationPlan:
        """Build the plan for *operation* without touching the file system."""
        planners: dict[Operation, Callable[[str], GenerationPlan]] = {
            Operation.FEATURE: self.plan_feature,
            Operation.SCREEN: self.plan_screen,
            Operation.MODEL: self.plan_model,
            Operation.USECASE: self.plan_use_case,
            Operation.REPOSITORY: self.plan_repository,
        }
        return planners[Operation(operation)](name)

    def plan_feature(self, name: str) -> GenerationPlan:
        """Full feature: 8 common directories/files plus the presentation family."""
        name = validate_entity_name(name)
        cfg = self.config
        snake = to_snake(name)
        root = f"{FEATURES_ROOT}/{snake}"
        event_driven = cfg.is_event_driven
        state_dir = _state_dir(root, event_driven)

        directories = [
            f"{root}/data/datasources",
            f"{root}/data/models",
            f"{root}/data/repositories",
            f"{root}/domain/entities",
            f"{root}/domain/repositories",
            f"{root}/domain/usecases",
            f"{root}/presentation/pages",
            f"{root}/presentation/bindings",
            state_dir,
        ]

        files = {
            f"{root}/domain/entities/{snake}_entity.dart": templates.render_entity(name, cfg),
            f"{root}/data/models/{snake}_model.dart": templates.render_model(name, cfg),
            f"{root}/domain/repositories/{snake}_repository.dart": (
                templates.render_repository_interface(name, cfg)
            ),
            f"{root}/data/repositories/{snake}_repository_impl.dart": (
                templates.render_repository_implementation(name, cfg)
            ),
            f"{root}/data/datasources/{snake}_remote_data_source.dart": (
                templates.render_data_source(name, cfg)
            ),
            f"{root}/domain/usecases/{snake}_usecase.dart": templates.render_use_case(name, cfg),
            f"{root}/presentation/pages/{snake}_page.dart": templates.render_page(name, cfg),
            f"{root}/presentation/bindings/{snake}_binding.dart": (
                templates.render_binding(name, cfg)
            ),
        }

        if event_driven:
            files[f"{state_dir}/{snake}_bloc.dart"] = templates.render_controller(name, cfg)
            files[f"{state_dir}/{snake}_event.dart"] = templates.render_bloc_event(name, cfg)
            files[f"{state_dir}/{snake}_state.dart"] = templates.render_bloc_state(name, cfg)
        else:
            files[f"{state_dir}/{snake}_controller.dart"] = templates.render_controller(name, cfg)

        return GenerationPlan(
            operation=Operation.FEATURE,
            entity_name=name,
            directories=directories,
            files=files,
        )

    def plan_screen(self, name: str) -> GenerationPlan:
        """Standalone screen using the dependency-free presentation bodies."""
        name = validate_entity_name(name)
        cfg = self.config
        snake = to_snake(name)
        root = f"{FEATURES_ROOT}/{snake}"
        event_driven = cfg.is_event_driven
        state_dir = _state_dir(root, event_driven)

        directories = [
            f"{root}/presentation/pages",
            f"{root}/presentation/bindings",
            state_dir,
        ]

        files = {
            f"{root}/presentation/pages/{snake}_page.dart": templates.render_screen_page(name, cfg),
            f"{root}/presentation/bindings/{snake}_binding.dart": (
                templates.render_screen_binding(name, cfg)
            ),
        }
        if event_driven:
            files[f"{state_dir}/{snake}_bloc.dart"] = templates.render_screen_controller(name, cfg)
            files[f"{state_dir}/{snake}_event.dart"] = templates.render_screen_event(name, cfg)
            files[f"{state_dir}/{snake}_state.dart"] = templates.render_screen_state(name, cfg)
        else:
            files[f"{state_dir}/{snake}_controller.dart"] = (
                templates.render_screen_controller(name, cfg)
            )

        return GenerationPlan(
            operation=Operation.SCREEN,
            entity_name=name,
            directories=directories,
            files=files,
        )

    def plan_model(self, name: str) -> GenerationPlan:
        """Shared model in ``lib/shared/models``."""
        name = validate_entity_name(name)
        snake = to_snake(name)
        directory = f"{SHARED_ROOT}/models"
        return GenerationPlan(
            operation=Operation.MODEL,
            entity_name=name,
            directories=[directory],
            files={
                f"{directory}/{snake}_model.dart": templates.render_model(name, self.config),
            },
        )

    def plan_use_case(self, name: str) -> GenerationPlan:
        """Shared use case in ``lib/shared/usecases``."""
        name = validate_entity_name(name)
        snake = to_snake(name)
        directory = f"{SHARED_ROOT}/usecases"
        return GenerationPlan(
            operation=Operation.USECASE,
            entity_name=name,
            directories=[directory],
            files={
                f"{directory}/{snake}_usecase.dart": templates.render_use_case(name, self.config),
            },
        )

    def plan_repository(self, name: str) -> GenerationPlan:
        """Shared repository interface plus implementation."""
        name = validate_entity_name(name)
        cfg = self.config
        snake = to_snake(name)
        directory = f"{SHARED_ROOT}/repositories"
        impl_directory = f"{directory}/implementations"
        return GenerationPlan(
            operation=Operation.REPOSITORY,
            entity_name=name,
            directories=[directory, impl_directory],
            files={
                f"{directory}/{snake}_repository.dart": (
                    templates.render_repository_interface(name, cfg)
                ),
                f"{impl_directory}/{snake}_repository_impl.dart": (
                    templates.render_repository_implementation(name, cfg)
                ),
            },
        )

    # -- Materialization ---------------------------------------------------

    async def materialize(self, plan: GenerationPlan) -> list[Path]:
        """Create the plan's directories, then write its files in order.

        Each step is awaited before the next one starts; there is no
        rollback if a later step fails.
        """
        for directory in plan.directories:
            await asyncio.to_thread(_make_dir, self.base_dir / directory)

        written: list[Path] = []
        for rel_path, content in plan.files.items():
            target = self.base_dir / rel_path
            await asyncio.to_thread(_write_file, target, content)
            written.append(target)
        return written


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _state_dir(root: str, event_driven: bool) -> str:
    """``presentation/bloc`` for BLoC, ``presentation/controllers`` for GetX."""
    leaf = "bloc" if event_driven else "controllers"
    return f"{root}/presentation/{leaf}"


def _make_dir(path: Path) -> None:
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise ScaffoldError(path, exc.strerror or str(exc)) from exc


def _write_file(path: Path, content: str) -> None:
    """Synchronous helper: create parent dirs and write content."""
    _make_dir(path.parent)
    try:
        path.write_text(content, encoding="utf-8")
    except OSError as exc:
        raise ScaffoldError(path, exc.strerror or str(exc)) from exc
