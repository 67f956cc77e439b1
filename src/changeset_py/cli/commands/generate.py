"""Implementation of the 'generate' command.

Creates changesets from conventional commit messages. Messages are read
from a file in which each commit is separated by a line containing only
``---commit---``, e.g. the output of::

    git log --reverse --format='%B%n---commit---' v1.2.0..HEAD
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from rich.table import Table

from changeset_py.cli.utils import changeset_table, fail, load_project
from changeset_py.core.commits import changesets_from_commits

if TYPE_CHECKING:
    from pathlib import Path

    from rich.console import Console

COMMIT_SEPARATOR = "---commit---"

_SEPARATOR_RE = re.compile(rf"^{re.escape(COMMIT_SEPARATOR)}[ \t]*$", re.MULTILINE)


def split_commit_messages(text: str) -> list[str]:
    """Split a messages file into individual, non-empty commit messages."""
    return [message.strip() for message in _SEPARATOR_RE.split(text) if message.strip()]


def run_generate(
    project_path: Path,
    messages_file: Path,
    dry_run: bool,
    verbose: bool,
    console: Console,
    err_console: Console,
) -> None:
    _, store = load_project(project_path, err_console)

    try:
        messages = split_commit_messages(messages_file.read_text(encoding="utf-8"))
    except OSError as e:
        fail(err_console, f"Error reading {messages_file}", e)

    if not messages:
        console.print("[yellow]No commits found in the messages file.[/]")
        return

    scan = changesets_from_commits(messages)

    if not dry_run:
        scan.changesets = [store.create(cs.type, cs.summary) for cs in scan.changesets]

    if scan.changesets:
        title = "Changesets to be created" if dry_run else "Created changesets"
        console.print(changeset_table(scan.changesets, title=title))

    if verbose and scan.skipped:
        table = Table(title="Skipped commits")
        table.add_column("Commit")
        table.add_column("Reason")
        for first_line, reason in scan.skipped:
            table.add_row(first_line, reason)
        console.print(table)

    if dry_run:
        console.print(
            f"\nWould create {len(scan.changesets)} changeset(s), "
            f"skip {len(scan.skipped)} commit(s)."
        )
    elif scan.changesets:
        console.print(f"\n[green]Created {len(scan.changesets)} changeset(s).[/]")
    else:
        console.print("\n[yellow]No changesets created. All commits were skipped.[/]")
