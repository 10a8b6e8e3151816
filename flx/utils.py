"""Console output helpers for the flx CLI.

All user-facing output goes through the shared Rich ``console`` so colours
and markup are handled in one place.  Library modules never print; only
:mod:`flx.cli` calls these helpers.
"""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

from rich.console import Console
from rich.markup import escape

console = Console()


def print_success(message: str) -> None:
    """Print a green success message."""
    console.print(f"[bold green]{escape(message)}[/bold green]", soft_wrap=True)


def print_error(message: str) -> None:
    """Print a red error message."""
    console.print(f"[bold red]{escape(message)}[/bold red]", soft_wrap=True)


def print_warning(message: str) -> None:
    """Print a yellow warning message."""
    console.print(f"[bold yellow]{escape(message)}[/bold yellow]", soft_wrap=True)


def print_hint(message: str) -> None:
    """Print a dim hint line."""
    console.print(f"[dim]{escape(message)}[/dim]", soft_wrap=True)


def print_file_list(paths: Iterable[str | Path], base_dir: Path | None = None) -> None:
    """Print one ``  - path`` line per file.

    Args:
        paths: Files to list, in the order they were written.
        base_dir: When given, absolute paths under it are shown relative to
            it so the output matches the project layout.
    """
    for path in paths:
        console.print(
            f"  - {escape(display_path(path, base_dir))}",
            highlight=False,
            soft_wrap=True,
        )


def display_path(path: str | Path, base_dir: Path | None = None) -> str:
    """Render *path* with forward slashes, relative to *base_dir* when possible."""
    candidate = Path(path)
    if base_dir is not None:
        try:
            candidate = candidate.relative_to(base_dir)
        except ValueError:
            pass
    return candidate.as_posix()
