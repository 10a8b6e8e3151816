"""Exceptions raised by flx.

Each exception carries the context needed to explain the failure (the
offending name or path) both as attributes and in its message, so the CLI
can print ``str(exc)`` directly.
"""

from __future__ import annotations

from pathlib import Path


class FlxError(Exception):
    """Base class for every error flx reports to the user."""


class InvalidNameError(FlxError, ValueError):
    """Raised when an entity name is missing, empty or whitespace-only."""

    def __init__(self, name: str | None) -> None:
        self.name = name
        super().__init__(f"Invalid name {name!r}: a non-empty name is required")


class ScaffoldError(FlxError):
    """Raised when a directory or file cannot be written.

    Files written before the failure are left on disk.
    """

    def __init__(self, path: Path, cause: str) -> None:
        self.path = path
        self.cause = cause
        super().__init__(f"Failed to write {path}: {cause}")


class ConfigError(FlxError):
    """Raised when the config file cannot be parsed or holds invalid values."""

    def __init__(self, path: Path, message: str) -> None:
        self.path = path
        self.message = message
        super().__init__(f"Invalid config {path}: {message}")
