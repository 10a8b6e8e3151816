"""Unit tests for Config and the config file helpers (flx.config).

Tests cover:
- StateManager parsing and aliases
- Config defaults, JSON keys, aliases, immutability
- save/load round trip, missing file, malformed or unreadable files, nulls
- init_config (new file, confirm prompt, force)
- set_state_manager (unknown keys preserved)
- FLX_CONFIG override
"""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from pydantic import ValidationError

from flx.config import (
    CONFIG_ENV_VAR,
    CONFIG_FILENAME,
    Config,
    StateManager,
    config_path,
    init_config,
    parse_state_manager,
    set_state_manager,
)
from flx.errors import ConfigError, FlxError


# ---------------------------------------------------------------------------
# StateManager
# ---------------------------------------------------------------------------


class TestStateManager:
    @pytest.mark.unit
    def test_values(self):
        assert StateManager.REACTIVE.value == "getx"
        assert StateManager.EVENT_DRIVEN.value == "bloc"

    @pytest.mark.unit
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("getx", StateManager.REACTIVE),
            ("GetX", StateManager.REACTIVE),
            ("reactive", StateManager.REACTIVE),
            ("bloc", StateManager.EVENT_DRIVEN),
            ("BLOC", StateManager.EVENT_DRIVEN),
            (" bloc ", StateManager.EVENT_DRIVEN),
            ("event-driven", StateManager.EVENT_DRIVEN),
        ],
    )
    def test_parse(self, raw, expected):
        assert parse_state_manager(raw) is expected

    @pytest.mark.unit
    def test_parse_passes_enum_through(self):
        assert parse_state_manager(StateManager.EVENT_DRIVEN) is StateManager.EVENT_DRIVEN

    @pytest.mark.unit
    @pytest.mark.parametrize("raw", ["provider", "riverpod", ""])
    def test_parse_rejects_unknown(self, raw):
        with pytest.raises(ValueError, match='Use "getx" or "bloc"'):
            parse_state_manager(raw)


# ---------------------------------------------------------------------------
# Config model
# ---------------------------------------------------------------------------


class TestConfigModel:
    @pytest.mark.unit
    def test_defaults(self):
        cfg = Config()
        assert cfg.use_immutable_models is True
        assert cfg.use_value_equality is False
        assert cfg.default_state_manager is StateManager.REACTIVE
        assert cfg.author == "Developer"
        assert cfg.is_event_driven is False

    @pytest.mark.unit
    def test_file_keys(self):
        cfg = Config.model_validate(
            {
                "useFreezed": False,
                "useEquatable": True,
                "defaultStateManager": "bloc",
                "author": "Ada",
            }
        )
        assert cfg.use_immutable_models is False
        assert cfg.use_value_equality is True
        assert cfg.is_event_driven is True
        assert cfg.author == "Ada"

    @pytest.mark.unit
    def test_descriptive_aliases(self):
        cfg = Config.model_validate({"useImmutableModels": False, "useValueEquality": True})
        assert cfg.use_immutable_models is False
        assert cfg.use_value_equality is True

    @pytest.mark.unit
    def test_python_field_names(self):
        cfg = Config(use_immutable_models=False, default_state_manager="bloc")
        assert cfg.use_immutable_models is False
        assert cfg.default_state_manager is StateManager.EVENT_DRIVEN

    @pytest.mark.unit
    def test_unknown_keys_ignored(self):
        cfg = Config.model_validate({"theme": "dark"})
        assert cfg == Config()

    @pytest.mark.unit
    def test_frozen(self):
        cfg = Config()
        with pytest.raises(ValidationError):
            cfg.author = "Someone else"

    @pytest.mark.unit
    def test_with_state_manager_returns_copy(self):
        cfg = Config()
        updated = cfg.with_state_manager("bloc")
        assert updated.is_event_driven is True
        assert cfg.is_event_driven is False

    @pytest.mark.unit
    def test_to_json_uses_file_keys(self):
        data = json.loads(Config().to_json())
        assert data == {
            "useFreezed": True,
            "useEquatable": False,
            "defaultStateManager": "getx",
            "author": "Developer",
        }

    @pytest.mark.unit
    def test_to_json_trailing_newline(self):
        assert Config().to_json().endswith("}\n")


# ---------------------------------------------------------------------------
# Save / load
# ---------------------------------------------------------------------------


class TestConfigPersistence:
    @pytest.mark.unit
    def test_round_trip(self, tmp_path: Path):
        cfg = Config(use_value_equality=True, default_state_manager="bloc", author="Ada")
        target = cfg.save(tmp_path / CONFIG_FILENAME)
        assert target == tmp_path / CONFIG_FILENAME
        assert Config.load(target) == cfg

    @pytest.mark.unit
    def test_save_creates_parent_dirs(self, tmp_path: Path):
        target = tmp_path / "nested" / "dir" / CONFIG_FILENAME
        Config().save(target)
        assert target.is_file()

    @pytest.mark.unit
    def test_missing_file_gives_defaults(self, tmp_path: Path):
        assert Config.load(tmp_path / "absent.json") == Config()

    @pytest.mark.unit
    def test_partial_file(self, tmp_path: Path):
        target = tmp_path / CONFIG_FILENAME
        target.write_text('{"defaultStateManager": "bloc"}', encoding="utf-8")
        cfg = Config.load(target)
        assert cfg.is_event_driven is True
        assert cfg.use_immutable_models is True

    @pytest.mark.unit
    def test_malformed_json(self, tmp_path: Path):
        target = tmp_path / CONFIG_FILENAME
        target.write_text("{not json", encoding="utf-8")
        with pytest.raises(ConfigError) as exc_info:
            Config.load(target)
        assert exc_info.value.path == target
        assert str(target) in str(exc_info.value)

    @pytest.mark.unit
    def test_non_object_json(self, tmp_path: Path):
        target = tmp_path / CONFIG_FILENAME
        target.write_text("[]", encoding="utf-8")
        with pytest.raises(ConfigError):
            Config.load(target)

    @pytest.mark.unit
    def test_invalid_state_manager_value(self, tmp_path: Path):
        target = tmp_path / CONFIG_FILENAME
        target.write_text('{"defaultStateManager": "riverpod"}', encoding="utf-8")
        with pytest.raises(ConfigError, match="defaultStateManager"):
            Config.load(target)

    @pytest.mark.unit
    def test_undecodable_file(self, tmp_path: Path):
        target = tmp_path / CONFIG_FILENAME
        target.write_bytes(b'{"author": "\xff\xfe"}')
        with pytest.raises(ConfigError) as exc_info:
            Config.load(target)
        assert exc_info.value.path == target
        assert isinstance(exc_info.value.__cause__, UnicodeDecodeError)

    @pytest.mark.unit
    def test_unreadable_path(self, tmp_path: Path):
        target = tmp_path / CONFIG_FILENAME
        target.mkdir()
        with pytest.raises(ConfigError) as exc_info:
            Config.load(target)
        assert isinstance(exc_info.value.__cause__, OSError)

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "raw",
        [
            '{"author": null}',
            '{"useFreezed": null, "useEquatable": null}',
            '{"defaultStateManager": null}',
        ],
    )
    def test_null_values_fall_back_to_defaults(self, tmp_path: Path, raw):
        target = tmp_path / CONFIG_FILENAME
        target.write_text(raw, encoding="utf-8")
        assert Config.load(target) == Config()

    @pytest.mark.unit
    def test_save_failure(self, tmp_path: Path):
        blocker = tmp_path / "not_a_dir"
        blocker.write_text("", encoding="utf-8")
        with pytest.raises(ConfigError):
            Config().save(blocker / CONFIG_FILENAME)

    @pytest.mark.unit
    def test_config_error_is_flx_error(self, tmp_path: Path):
        target = tmp_path / CONFIG_FILENAME
        target.write_text('{"useFreezed": "maybe"}', encoding="utf-8")
        with pytest.raises(FlxError):
            Config.load(target)


# ---------------------------------------------------------------------------
# Config location
# ---------------------------------------------------------------------------


class TestConfigPath:
    @pytest.mark.unit
    def test_defaults_to_cwd(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.chdir(tmp_path)
        monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
        assert config_path() == tmp_path / CONFIG_FILENAME

    @pytest.mark.unit
    def test_env_override(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
        override = tmp_path / "custom.json"
        monkeypatch.setenv(CONFIG_ENV_VAR, str(override))
        assert config_path() == override

    @pytest.mark.unit
    def test_load_uses_env_override(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
        override = tmp_path / "custom.json"
        override.write_text('{"defaultStateManager": "bloc"}', encoding="utf-8")
        monkeypatch.setenv(CONFIG_ENV_VAR, str(override))
        assert Config.load().is_event_driven is True


# ---------------------------------------------------------------------------
# init_config / set_state_manager
# ---------------------------------------------------------------------------


class TestInitConfig:
    @pytest.mark.unit
    def test_creates_default_file(self, tmp_path: Path):
        target = tmp_path / CONFIG_FILENAME
        assert init_config(target) == target
        assert json.loads(target.read_text(encoding="utf-8"))["defaultStateManager"] == "getx"

    @pytest.mark.unit
    def test_existing_file_kept_without_confirm(self, tmp_path: Path):
        target = tmp_path / CONFIG_FILENAME
        target.write_text('{"author": "Ada"}', encoding="utf-8")
        assert init_config(target) is None
        assert Config.load(target).author == "Ada"

    @pytest.mark.unit
    def test_existing_file_declined(self, tmp_path: Path):
        target = tmp_path / CONFIG_FILENAME
        target.write_text('{"author": "Ada"}', encoding="utf-8")
        asked: list[Path] = []

        def decline(path: Path) -> bool:
            asked.append(path)
            return False

        assert init_config(target, confirm=decline) is None
        assert asked == [target]
        assert Config.load(target).author == "Ada"

    @pytest.mark.unit
    def test_existing_file_confirmed(self, tmp_path: Path):
        target = tmp_path / CONFIG_FILENAME
        target.write_text('{"author": "Ada"}', encoding="utf-8")
        assert init_config(target, confirm=lambda _path: True) == target
        assert Config.load(target) == Config()

    @pytest.mark.unit
    def test_force_skips_confirm(self, tmp_path: Path):
        target = tmp_path / CONFIG_FILENAME
        target.write_text('{"author": "Ada"}', encoding="utf-8")

        def fail(_path: Path) -> bool:
            raise AssertionError("confirm should not be called")

        assert init_config(target, force=True, confirm=fail) == target
        assert Config.load(target).author == "Developer"


class TestSetStateManager:
    @pytest.mark.unit
    def test_creates_file_when_missing(self, tmp_path: Path):
        target = tmp_path / CONFIG_FILENAME
        updated = set_state_manager("bloc", target)
        assert updated.is_event_driven is True
        assert Config.load(target).is_event_driven is True

    @pytest.mark.unit
    def test_preserves_other_keys(self, tmp_path: Path):
        target = tmp_path / CONFIG_FILENAME
        Config(use_value_equality=True, author="Ada").save(target)
        set_state_manager("BLoC", target)
        cfg = Config.load(target)
        assert cfg.author == "Ada"
        assert cfg.use_value_equality is True
        assert cfg.default_state_manager is StateManager.EVENT_DRIVEN

    @pytest.mark.unit
    def test_switch_back(self, tmp_path: Path):
        target = tmp_path / CONFIG_FILENAME
        set_state_manager("bloc", target)
        set_state_manager("getx", target)
        assert Config.load(target).default_state_manager is StateManager.REACTIVE

    @pytest.mark.unit
    def test_invalid_value(self, tmp_path: Path):
        target = tmp_path / CONFIG_FILENAME
        with pytest.raises(ConfigError, match='Use "getx" or "bloc"'):
            set_state_manager("riverpod", target)
        assert not target.exists()

    @pytest.mark.unit
    def test_keeps_unknown_keys(self, tmp_path: Path):
        target = tmp_path / CONFIG_FILENAME
        target.write_text('{"useFreezed": false, "packageName": "my_app"}', encoding="utf-8")
        updated = set_state_manager("bloc", target)
        assert updated.use_immutable_models is False
        assert json.loads(target.read_text(encoding="utf-8")) == {
            "useFreezed": False,
            "packageName": "my_app",
            "defaultStateManager": "bloc",
        }

    @pytest.mark.unit
    def test_new_file_has_all_keys(self, tmp_path: Path):
        target = tmp_path / CONFIG_FILENAME
        set_state_manager("bloc", target)
        assert json.loads(target.read_text(encoding="utf-8")) == {
            "useFreezed": True,
            "useEquatable": False,
            "defaultStateManager": "bloc",
            "author": "Developer",
        }

    @pytest.mark.unit
    @pytest.mark.parametrize("raw", ["{oops", "[]", '{"useFreezed": "maybe"}'])
    def test_bad_file_left_unchanged(self, tmp_path: Path, raw):
        target = tmp_path / CONFIG_FILENAME
        target.write_text(raw, encoding="utf-8")
        with pytest.raises(ConfigError):
            set_state_manager("bloc", target)
        assert target.read_text(encoding="utf-8") == raw
