"""Shared pytest fixtures for the flx test suite.

Provides reusable fixtures for:
- Configurations covering every template family
- A generator rooted in a temporary project directory
- An isolated working directory for CLI runs
"""

from __future__ import annotations

from pathlib import Path

import pytest

from flx.config import CONFIG_ENV_VAR, Config, StateManager
from flx.scaffolder.generator import FeatureGenerator


# ---------------------------------------------------------------------------
# Configurations
# ---------------------------------------------------------------------------

@pytest.fixture
def default_config() -> Config:
    """Freezed models + GetX, the out-of-the-box settings."""
    return Config()


@pytest.fixture
def bloc_config() -> Config:
    """Freezed models + BLoC."""
    return Config(default_state_manager=StateManager.EVENT_DRIVEN)


@pytest.fixture
def equatable_config() -> Config:
    """Equatable entities (Freezed switched off)."""
    return Config(use_immutable_models=False, use_value_equality=True)


@pytest.fixture
def plain_config() -> Config:
    """Neither Freezed nor Equatable."""
    return Config(use_immutable_models=False, use_value_equality=False)


# ---------------------------------------------------------------------------
# Paths & Directories
# ---------------------------------------------------------------------------

@pytest.fixture
def tmp_project_dir(tmp_path: Path) -> Path:
    """Temporary Flutter project root (auto-cleanup)."""
    project_dir = tmp_path / "flutter_app"
    project_dir.mkdir()
    yield project_dir


@pytest.fixture
def generator(default_config: Config, tmp_project_dir: Path) -> FeatureGenerator:
    return FeatureGenerator(default_config, base_dir=tmp_project_dir)


@pytest.fixture
def bloc_generator(bloc_config: Config, tmp_project_dir: Path) -> FeatureGenerator:
    return FeatureGenerator(bloc_config, base_dir=tmp_project_dir)


@pytest.fixture
def cli_workdir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run the CLI from an empty directory with no config override."""
    workdir = tmp_path / "cli"
    workdir.mkdir()
    monkeypatch.chdir(workdir)
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
    yield workdir

