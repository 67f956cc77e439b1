"""Implementation of the 'init' command."""

from __future__ import annotations

from typing import TYPE_CHECKING

from changeset_py.cli.utils import fail
from changeset_py.config import ChangesetConfig
from changeset_py.exceptions import ChangesetPyError
from changeset_py.project import ChangesetStore

if TYPE_CHECKING:
    from pathlib import Path

    from rich.console import Console


def run_init(
    project_path: Path,
    force: bool,
    repository: str | None,
    console: Console,
    err_console: Console,
) -> None:
    """Create the .changes directory with a default configuration.

    Args:
        project_path: Project root
        force: Overwrite an existing configuration
        repository: Optional repository URL used for issue links
        console: Console for standard output
        err_console: Console for error output
    """
    store = ChangesetStore(project_path)

    if store.is_initialized() and not force:
        fail(err_console, "Changesets already initialized. Use --force to overwrite the config.")

    try:
        store.initialize(ChangesetConfig(repository=repository))
    except (ChangesetPyError, OSError) as e:
        fail(err_console, "Error initializing", e)

    console.print(f"[green]✓[/] Initialized [cyan]{store.directory}[/]", highlight=False)
    console.print("\n[dim]Run [cyan]changeset add[/] to create your first changeset.[/]")
