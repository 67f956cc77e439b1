"""Helpers shared by the CLI commands."""

from __future__ import annotations

from typing import TYPE_CHECKING, NoReturn

from rich.table import Table
from rich.text import Text

from changeset_py.config import load_config
from changeset_py.exceptions import ChangesetPyError
from changeset_py.project import ChangesetStore

if TYPE_CHECKING:
    from pathlib import Path

    from rich.console import Console

    from changeset_py.config import ChangesetConfig
    from changeset_py.core.changeset import Changeset
    from changeset_py.exceptions import ChangesetError


def fail(err_console: Console, message: str, error: BaseException | None = None) -> NoReturn:
    """Print an error and exit with status 1."""
    if error is not None:
        err_console.print(Text.assemble((f"{message}: ", "red"), str(error)))
    else:
        err_console.print(Text.assemble(("Error: ", "red"), message))
    raise SystemExit(1) from error


def load_project(
    project_path: Path, err_console: Console
) -> tuple[ChangesetConfig, ChangesetStore]:
    """Load configuration and the changeset store, exiting if not initialized."""
    try:
        config = load_config(project_path)
    except ChangesetPyError as e:
        fail(err_console, "Error loading config", e)
    return config, ChangesetStore(project_path)


def changeset_table(changesets: list[Changeset], title: str | None = None) -> Table:
    table = Table(title=title)
    table.add_column("ID", style="cyan")
    table.add_column("Type")
    table.add_column("Summary")
    for changeset in changesets:
        table.add_row(changeset.id, str(changeset.type), Text(changeset.title))
    return table


def print_invalid(console: Console, errors: list[tuple[str, ChangesetError]]) -> None:
    for file_name, error in errors:
        console.print(Text.assemble(("  ✗ ", "red"), f"{file_name}: {error.message}"))
