"""Implementation of the 'add' command."""

from __future__ import annotations

from typing import TYPE_CHECKING

from changeset_py.cli.utils import fail, load_project
from changeset_py.core.version import BumpType

if TYPE_CHECKING:
    from pathlib import Path

    from rich.console import Console


def run_add(
    project_path: Path,
    bump_type: str,
    message: str | None,
    empty: bool,
    console: Console,
    err_console: Console,
) -> None:
    """Create a changeset file.

    An empty changeset (``--empty``) records that a change needs no release
    entry. It fails ``check`` on purpose so CI notices it.
    """
    _, store = load_project(project_path, err_console)

    summary = "" if empty else (message or "").strip()
    if not summary and not empty:
        fail(err_console, "A summary is required. Pass --message or use --empty.")

    changeset = store.create(BumpType.parse(bump_type), summary)

    console.print(
        f"[green]✓[/] Created [cyan]{changeset.path.name}[/] ({changeset.type})",
        highlight=False,
    )
