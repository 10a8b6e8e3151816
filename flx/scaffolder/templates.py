"""Jinja2 template rendering for feature scaffolding.

Provides the :class:`TemplateRenderer`, which loads ``.dart.j2`` templates
from the ``flx/scaffolder/templates/`` directory, and one rendering function
per generated artifact kind.  Every rendering function takes the raw entity
name plus the :class:`~flx.config.Config` and returns the finished Dart
source; none of them touch the file system.

Template families are chosen through two discriminants computed once per
render in :func:`build_context`:

* :class:`ModelStyle` -- Freezed, Equatable or plain entities/models.
* :class:`~flx.config.StateManager` -- GetX or BLoC presentation layer.
"""

from __future__ import annotations

from enum import Enum
from functools import lru_cache
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, StrictUndefined
from pydantic import BaseModel, ConfigDict

from flx.config import Config, StateManager

from .naming import to_camel, to_pascal, to_snake


# ---------------------------------------------------------------------------
# Template directory discovery
# ---------------------------------------------------------------------------

_DEFAULT_TEMPLATE_DIR = Path(__file__).parent / "templates"


# ---------------------------------------------------------------------------
# TemplateRenderer
# ---------------------------------------------------------------------------


class TemplateRenderer:
    """Renders Jinja2 templates for feature scaffolding.

    Templates are plain Dart source with ``{{ ... }}`` substitutions.  The
    renderer uses ``StrictUndefined`` so a template referring to a variable
    that is missing from the context fails loudly instead of leaving a hole
    in the generated code.
    """

    def __init__(self, template_dir: str | Path | None = None) -> None:
        if template_dir is None:
            template_dir = _DEFAULT_TEMPLATE_DIR
        self.template_dir = Path(template_dir)
        self.env = Environment(
            loader=FileSystemLoader(str(self.template_dir)),
            autoescape=False,
            undefined=StrictUndefined,
            keep_trailing_newline=True,
            trim_blocks=True,
            lstrip_blocks=True,
        )

    def render(self, template_path: str, context: dict[str, Any]) -> str:
        """Render a single template with the provided context.

        Args:
            template_path: Path relative to the template directory (e.g.
                ``"entity/freezed.dart.j2"``).
            context: Dictionary of variables available inside the template.

        Returns:
            The rendered template content as a string.
        """
        template = self.env.get_template(template_path)
        return template.render(**context)


@lru_cache(maxsize=1)
def get_renderer() -> TemplateRenderer:
    """Shared renderer over the bundled templates."""
    return TemplateRenderer()


# ---------------------------------------------------------------------------
# Family discriminants and render context
# ---------------------------------------------------------------------------


class ModelStyle(str, Enum):
    """Which entity/model family to emit."""

    FREEZED = "freezed"
    EQUATABLE = "equatable"
    PLAIN = "plain"

    @classmethod
    def from_config(cls, config: Config) -> "ModelStyle":
        """Immutable models win over value equality; plain is the fallback."""
        if config.use_immutable_models:
            return cls.FREEZED
        if config.use_value_equality:
            return cls.EQUATABLE
        return cls.PLAIN


class RenderContext(BaseModel):
    """Everything a template may reference, derived once from name + config."""

    model_config = ConfigDict(frozen=True, protected_namespaces=())

    entity_name: str
    class_name: str
    variable_name: str
    snake_name: str
    model_style: ModelStyle
    state_manager: StateManager
    author: str

    def template_vars(self) -> dict[str, Any]:
        return {
            "entity_name": self.entity_name,
            "class_name": self.class_name,
            "variable_name": self.variable_name,
            "snake_name": self.snake_name,
            "model_style": self.model_style.value,
            "state_manager": self.state_manager.value,
            "author": self.author,
        }


def build_context(entity_name: str, config: Config) -> RenderContext:
    """Derive the casing variants and template families for one render."""
    return RenderContext(
        entity_name=entity_name,
        class_name=to_pascal(entity_name),
        variable_name=to_camel(entity_name),
        snake_name=to_snake(entity_name),
        model_style=ModelStyle.from_config(config),
        state_manager=config.default_state_manager,
        author=config.author,
    )


# Presentation artifact -> template file stem, per state manager.
_PRESENTATION_STEMS: dict[StateManager, dict[str, str]] = {
    StateManager.REACTIVE: {
        "controller": "controller",
        "page": "page",
        "binding": "binding",
    },
    StateManager.EVENT_DRIVEN: {
        "controller": "bloc",
        "event": "event",
        "state": "state",
        "page": "page",
        "binding": "provider",
    },
}


def _render(template_path: str, ctx: RenderContext) -> str:
    return get_renderer().render(template_path, ctx.template_vars())


def _render_model_family(kind: str, entity_name: str, config: Config) -> str:
    ctx = build_context(entity_name, config)
    return _render(f"{kind}/{ctx.model_style.value}.dart.j2", ctx)


def _render_presentation(
    artifact: str,
    entity_name: str,
    config: Config,
    *,
    screen: bool = False,
    manager: StateManager | None = None,
) -> str:
    ctx = build_context(entity_name, config)
    manager = manager or ctx.state_manager
    stem = _PRESENTATION_STEMS[manager][artifact]
    prefix = "screen/" if screen else ""
    return _render(f"{prefix}{manager.value}/{stem}.dart.j2", ctx)


# ---------------------------------------------------------------------------
# Domain and data layer
# ---------------------------------------------------------------------------


def render_entity(entity_name: str, config: Config) -> str:
    """Domain entity in the configured model style."""
    return _render_model_family("entity", entity_name, config)


def render_model(entity_name: str, config: Config) -> str:
    """Data model in the configured model style, with ``toEntity()``."""
    return _render_model_family("model", entity_name, config)


def render_repository_interface(entity_name: str, config: Config) -> str:
    """Abstract CRUD repository over the entity."""
    return _render("repository/interface.dart.j2", build_context(entity_name, config))


def render_repository_implementation(entity_name: str, config: Config) -> str:
    """Repository implementation delegating to the remote data source."""
    return _render(
        "repository/implementation.dart.j2", build_context(entity_name, config)
    )


def render_data_source(entity_name: str, config: Config) -> str:
    """Remote data source interface plus an unimplemented default."""
    return _render(
        "datasource/remote_data_source.dart.j2", build_context(entity_name, config)
    )


def render_use_case(entity_name: str, config: Config) -> str:
    """Use case returning every entity from the repository."""
    return _render("usecase/usecase.dart.j2", build_context(entity_name, config))


# ---------------------------------------------------------------------------
# Presentation layer (feature)
# ---------------------------------------------------------------------------


def render_controller(entity_name: str, config: Config) -> str:
    """GetX controller, or the BLoC class when the event-driven style is set."""
    return _render_presentation("controller", entity_name, config)


def render_bloc_event(entity_name: str, config: Config) -> str:
    """BLoC event set (load / refresh)."""
    return _render_presentation(
        "event", entity_name, config, manager=StateManager.EVENT_DRIVEN
    )


def render_bloc_state(entity_name: str, config: Config) -> str:
    """BLoC state set (initial / loading / loaded / error)."""
    return _render_presentation(
        "state", entity_name, config, manager=StateManager.EVENT_DRIVEN
    )


def render_page(entity_name: str, config: Config) -> str:
    return _render_presentation("page", entity_name, config)


def render_binding(entity_name: str, config: Config) -> str:
    """GetX ``Bindings`` or the GetIt-backed BLoC provider."""
    return _render_presentation("binding", entity_name, config)


# ---------------------------------------------------------------------------
# Presentation layer (standalone screen, no use case/repository wiring)
# ---------------------------------------------------------------------------


def render_screen_controller(entity_name: str, config: Config) -> str:
    return _render_presentation("controller", entity_name, config, screen=True)


def render_screen_event(entity_name: str, config: Config) -> str:
    return _render_presentation(
        "event", entity_name, config, screen=True, manager=StateManager.EVENT_DRIVEN
    )


def render_screen_state(entity_name: str, config: Config) -> str:
    return _render_presentation(
        "state", entity_name, config, screen=True, manager=StateManager.EVENT_DRIVEN
    )


def render_screen_page(entity_name: str, config: Config) -> str:
    return _render_presentation("page", entity_name, config, screen=True)


def render_screen_binding(entity_name: str, config: Config) -> str:
    return _render_presentation("binding", entity_name, config, screen=True)
