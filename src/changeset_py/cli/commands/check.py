"""Implementation of the 'check' command.

Validates every changeset file. Intended for CI: exits with status 1 when
any file is malformed or has an empty summary.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from changeset_py.cli.utils import load_project, print_invalid

if TYPE_CHECKING:
    from pathlib import Path

    from rich.console import Console


def run_check(project_path: Path, console: Console, err_console: Console) -> None:
    _, store = load_project(project_path, err_console)
    result = store.check()

    if result.total == 0:
        console.print("[yellow]No changeset files found.[/]")
        return

    if result.ok:
        console.print(f"[green]All {len(result.changesets)} changeset(s) are valid.[/]")
        return

    err_console.print(f"[red]Found {len(result.errors)} invalid changeset(s):[/]")
    print_invalid(err_console, result.errors)

    if result.changesets:
        console.print(
            f"\n{len(result.changesets)} changeset(s) valid, {len(result.errors)} invalid."
        )
    raise SystemExit(1)
