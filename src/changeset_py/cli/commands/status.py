"""Implementation of the 'status' command."""

from __future__ import annotations

from typing import TYPE_CHECKING

from changeset_py.cli.utils import changeset_table, fail, load_project, print_invalid
from changeset_py.core.version import calculate_next_version, describe_bump
from changeset_py.exceptions import ChangesetPyError
from changeset_py.project import resolve_current_version

if TYPE_CHECKING:
    from pathlib import Path

    from rich.console import Console


def run_status(project_path: Path, console: Console, err_console: Console) -> None:
    """Show pending changesets and the release they would produce."""
    config, store = load_project(project_path, err_console)
    result = store.load()

    if result.errors:
        console.print(f"[yellow]Skipping {len(result.errors)} invalid changeset(s):[/]")
        print_invalid(console, result.errors)

    try:
        interrupted = store.pending_release()
        current = resolve_current_version(project_path, config)
    except ChangesetPyError as e:
        fail(err_console, "Error getting version", e)

    if interrupted is not None:
        console.print(
            f"[yellow]Release of {interrupted.next_version} was interrupted. "
            "Run 'changeset version' to finish it.[/]",
            highlight=False,
        )
        return

    pending = result.pending()
    if not pending:
        console.print("[yellow]No pending changesets.[/]")
        return

    for bump_type, changesets in pending.by_type().items():
        if changesets:
            console.print(changeset_table(changesets, title=config.section_heading(bump_type)))

    next_version = calculate_next_version(current, pending.all())
    console.print(
        f"\n{len(pending)} pending changeset(s): "
        f"[bold]{describe_bump(current, pending.all())}[/], "
        f"[cyan]{current}[/] → [green]{next_version}[/]",
        highlight=False,
    )
