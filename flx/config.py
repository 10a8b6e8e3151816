"""flx configuration.

The ``.flxrc.json`` file in the working directory controls which template
families the scaffolder emits.  Settings are held in a frozen Pydantic v2
model so they are validated once at load time and can be passed through the
generator without anyone mutating them.
"""

from __future__ import annotations

import json
import os
from enum import Enum
from pathlib import Path
from typing import Any, Callable

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    ValidationInfo,
    field_validator,
)

from flx.errors import ConfigError

CONFIG_FILENAME = ".flxrc.json"
CONFIG_ENV_VAR = "FLX_CONFIG"


class StateManager(str, Enum):
    """Presentation-layer family: GetX controllers or BLoC event/state machines."""

    REACTIVE = "getx"
    EVENT_DRIVEN = "bloc"

    @classmethod
    def _missing_(cls, value: object) -> "StateManager | None":
        if not isinstance(value, str):
            return None
        key = value.strip().lower()
        aliases = {
            "getx": cls.REACTIVE,
            "reactive": cls.REACTIVE,
            "bloc": cls.EVENT_DRIVEN,
            "event-driven": cls.EVENT_DRIVEN,
            "event_driven": cls.EVENT_DRIVEN,
        }
        return aliases.get(key)


class Config(BaseModel):
    """Settings read from ``.flxrc.json``.

    Every key is optional; a missing key (or a missing file) falls back to
    the defaults below.  Keys are written in the file's camelCase form
    (``useFreezed``, ``useEquatable``, ``defaultStateManager``, ``author``).
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    use_immutable_models: bool = Field(
        default=True,
        alias="useFreezed",
        validation_alias=AliasChoices("useFreezed", "useImmutableModels"),
        description="Emit Freezed-style immutable entities and models",
    )
    use_value_equality: bool = Field(
        default=False,
        alias="useEquatable",
        validation_alias=AliasChoices("useEquatable", "useValueEquality"),
        description="Emit Equatable-style entities when Freezed is off",
    )
    default_state_manager: StateManager = Field(
        default=StateManager.REACTIVE,
        alias="defaultStateManager",
        description="Presentation family for features and screens",
    )
    author: str = Field(default="Developer")

    @field_validator("*", mode="before")
    @classmethod
    def _null_means_default(cls, value: Any, info: ValidationInfo) -> Any:
        """An explicit JSON ``null`` falls back to the field default."""
        if value is None:
            return cls.model_fields[info.field_name].default
        return value

    @property
    def is_event_driven(self) -> bool:
        return self.default_state_manager is StateManager.EVENT_DRIVEN

    def with_state_manager(self, manager: StateManager | str) -> "Config":
        """Return a copy using *manager* as the default state manager."""
        return self.model_copy(
            update={"default_state_manager": parse_state_manager(manager)}
        )

    # ------------------------------------------------------------------
    # Serialisation helpers
    # ------------------------------------------------------------------

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True, indent=2) + "\n"

    def save(self, path: Path | None = None) -> Path:
        """Persist the configuration as JSON.

        Args:
            path: Destination file. Defaults to :func:`config_path`.

        Returns:
            The path the file was written to.

        Raises:
            ConfigError: The file or its parent directory cannot be written.
        """
        target = Path(path) if path is not None else config_path()
        _write_config_text(target, self.to_json())
        return target

    @classmethod
    def load(cls, path: Path | None = None) -> "Config":
        """Load the configuration file, or the defaults if it does not exist.

        Raises:
            ConfigError: The file exists but cannot be read, or is not a
                valid JSON object with acceptable values.
        """
        source = Path(path) if path is not None else config_path()
        if not source.exists():
            return cls()
        raw = _read_config_text(source)
        try:
            return cls.model_validate_json(raw)
        except ValidationError as exc:
            raise ConfigError(source, _summarise_validation_error(exc)) from exc


# ---------------------------------------------------------------------------
# File helpers used by ``flx config``
# ---------------------------------------------------------------------------


def config_path() -> Path:
    """Location of the config file: ``$FLX_CONFIG`` or ``./.flxrc.json``."""
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        return Path(override)
    return Path.cwd() / CONFIG_FILENAME


def parse_state_manager(value: StateManager | str) -> StateManager:
    """Parse a state manager name (``getx``/``bloc``, case-insensitive).

    Raises:
        ValueError: For any other value.
    """
    if isinstance(value, StateManager):
        return value
    try:
        return StateManager(value)
    except ValueError:
        raise ValueError(
            f'Invalid state manager {value!r}. Use "getx" or "bloc".'
        ) from None


def init_config(
    path: Path | None = None,
    *,
    force: bool = False,
    confirm: Callable[[Path], bool] | None = None,
) -> Path | None:
    """Write a default config file.

    When the file already exists and *force* is false, *confirm* is called
    with the path; a falsy answer leaves the file untouched and returns
    ``None``.  Without a *confirm* callback an existing file is never
    overwritten unless *force* is set.
    """
    target = Path(path) if path is not None else config_path()
    if target.exists() and not force:
        if confirm is None or not confirm(target):
            return None
    return Config().save(target)


def set_state_manager(value: str, path: Path | None = None) -> Config:
    """Update ``defaultStateManager`` in the config file, creating it if needed.

    Only that key changes; every other key in an existing file, including
    ones flx does not know about, is written back untouched.

    Raises:
        ConfigError: *value* is not a known state manager, or the existing
            file cannot be read or parsed.  The file is left unchanged.
    """
    target = Path(path) if path is not None else config_path()
    try:
        manager = parse_state_manager(value)
    except ValueError as exc:
        raise ConfigError(target, str(exc)) from exc

    if target.exists():
        data = _load_json_object(target)
    else:
        data = json.loads(Config().to_json())
    data["defaultStateManager"] = manager.value

    try:
        updated = Config.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(target, _summarise_validation_error(exc)) from exc
    _write_config_text(target, json.dumps(data, indent=2) + "\n")
    return updated


def _read_config_text(source: Path) -> str:
    try:
        return source.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigError(source, str(exc)) from exc


def _write_config_text(target: Path, text: str) -> None:
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(text, encoding="utf-8")
    except OSError as exc:
        raise ConfigError(target, exc.strerror or str(exc)) from exc


def _load_json_object(source: Path) -> dict[str, Any]:
    """Raw key/value map of an existing config file."""
    try:
        data = json.loads(_read_config_text(source))
    except json.JSONDecodeError as exc:
        raise ConfigError(source, f"invalid JSON: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(source, "expected a JSON object")
    return data


def _summarise_validation_error(exc: ValidationError) -> str:
    """Flatten a Pydantic error into a single line for console output."""
    parts: list[str] = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()) if part != "")
        message: Any = error.get("msg", "invalid value")
        parts.append(f"{location}: {message}" if location else str(message))
    return "; ".join(parts) or str(exc)
