"""Implementation of the 'version' and 'preview' commands.

The version command applies all pending changesets: it calculates the next
version, writes the changelog section, updates pyproject.toml and finally
deletes the applied changeset files. The planned versions are recorded
before the first write, so an interrupted run is finished by the next one
rather than bumped a second time.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from rich.panel import Panel
from rich.prompt import Confirm
from rich.text import Text

from changeset_py.cli.utils import fail, load_project, print_invalid
from changeset_py.config.loader import get_project_name
from changeset_py.core.changelog import render_section
from changeset_py.core.version import (
    PreReleaseKind,
    Version,
    calculate_next_version,
    describe_bump,
    parse_version,
)
from changeset_py.exceptions import ChangesetPyError, ProjectError, VersionNotFoundError
from changeset_py.project import (
    PendingRelease,
    resolve_current_version,
    update_changelog,
    update_pyproject_version,
)

if TYPE_CHECKING:
    from pathlib import Path

    from rich.console import Console

    from changeset_py.config import ChangesetConfig
    from changeset_py.core.changeset import Changeset
    from changeset_py.project import ChangesetStore


@dataclass
class ReleasePlan:
    """Everything needed to apply or preview a release."""

    config: ChangesetConfig
    store: ChangesetStore
    changesets: list[Changeset]
    current: Version
    next_version: Version
    description: str


def _plan_release(
    project_path: Path,
    prerelease: str | None,
    console: Console,
    err_console: Console,
) -> ReleasePlan | None:
    """Load changesets and calculate the next version.

    Returns None when there is nothing to release.
    """
    config, store = load_project(project_path, err_console)

    directive = None
    if prerelease is not None:
        try:
            directive = PreReleaseKind.parse(prerelease)
        except ChangesetPyError as e:
            fail(err_console, "Invalid prerelease", e)

    result = store.load()
    if result.errors:
        console.print(f"[yellow]Skipping {len(result.errors)} invalid changeset(s):[/]")
        print_invalid(console, result.errors)

    changesets = result.changesets

    try:
        interrupted = store.pending_release()
        if interrupted is not None:
            console.print(
                f"[yellow]Resuming interrupted release of {interrupted.next_version}.[/]",
                highlight=False,
            )
            return ReleasePlan(
                config=config,
                store=store,
                changesets=changesets,
                current=parse_version(interrupted.current),
                next_version=parse_version(interrupted.next_version),
                description=interrupted.description,
            )
        current = resolve_current_version(project_path, config)
    except ChangesetPyError as e:
        fail(err_console, "Error getting version", e)

    # A pre-release can be bumped or graduated without new changesets
    if not changesets and not current.is_prerelease and directive is None:
        console.print("[yellow]No changesets found. Nothing to do.[/]")
        return None

    return ReleasePlan(
        config=config,
        store=store,
        changesets=changesets,
        current=current,
        next_version=calculate_next_version(current, changesets, directive),
        description=describe_bump(current, changesets, directive),
    )


def _print_plan(plan: ReleasePlan, project_path: Path, console: Console) -> None:
    try:
        package = get_project_name(project_path)
    except ProjectError:
        package = "unknown"

    console.print(f"Package: [cyan]{package}[/]", highlight=False)
    console.print(
        f"Version bump: [cyan]{plan.current}[/] → [green]{plan.next_version}[/] "
        f"({plan.description})",
        highlight=False,
    )
    console.print(f"Changesets to apply: [cyan]{len(plan.changesets)}[/]", highlight=False)


def run_preview(
    project_path: Path,
    prerelease: str | None,
    console: Console,
    err_console: Console,
) -> None:
    """Show the next version and its changelog section without writing anything."""
    plan = _plan_release(project_path, prerelease, console, err_console)
    if plan is None:
        return

    _print_plan(plan, project_path, console)
    section = render_section(plan.next_version, plan.changesets, plan.config)
    console.print(Panel(Text(section.rstrip("\n")), title="Changelog preview", border_style="cyan"))


def run_version(
    project_path: Path,
    prerelease: str | None,
    skip_changelog: bool,
    dry_run: bool,
    assume_yes: bool,
    console: Console,
    err_console: Console,
) -> None:
    """Run the version command.

    Args:
        project_path: Project root
        prerelease: Pre-release directive (alpha, beta, rc)
        skip_changelog: Do not touch the changelog
        dry_run: Only show what would happen
        assume_yes: Do not ask for confirmation
        console: Console for standard output
        err_console: Console for error output
    """
    plan = _plan_release(project_path, prerelease, console, err_console)
    if plan is None:
        return

    skip_changelog = skip_changelog or not plan.config.changelog
    changelog_path = project_path / plan.config.changelog_path

    mode_str = "[yellow]DRY-RUN[/]" if dry_run else "[green]EXECUTING[/]"
    console.print(f"\n{mode_str}\n")
    _print_plan(plan, project_path, console)

    if dry_run:
        changelog_step = (
            "Skip changelog (disabled)"
            if skip_changelog
            else f"Update [cyan]{plan.config.changelog_path}[/] with {plan.next_version} section"
        )
        console.print(
            Panel(
                "[bold]Would make the following changes:[/]\n\n"
                f"  • {changelog_step}\n"
                f"  • Delete {len(plan.changesets)} changeset file(s)",
                title="[yellow]Dry Run Preview[/]",
                border_style="yellow",
            )
        )
        return

    if not assume_yes and not Confirm.ask(
        f"Apply {plan.description} bump to version {plan.next_version}?",
        console=console,
        default=True,
    ):
        console.print("[yellow]Aborted.[/]")
        return

    plan.store.begin_release(
        PendingRelease(
            current=str(plan.current),
            next_version=str(plan.next_version),
            description=plan.description,
        )
    )

    # Changesets are deleted only after the changelog was written
    if not skip_changelog:
        try:
            section = render_section(plan.next_version, plan.changesets, plan.config)
            update_changelog(changelog_path, section)
        except ChangesetPyError as e:
            fail(err_console, "Error updating changelog", e)
        console.print(f"  [green]✓[/] Updated {plan.config.changelog_path}", highlight=False)

    try:
        update_pyproject_version(project_path, str(plan.next_version))
        console.print("  [green]✓[/] Updated version in pyproject.toml")
    except (ProjectError, VersionNotFoundError):
        console.print("  [dim]No static version in pyproject.toml, skipped.[/]")

    removed = plan.store.delete_all(plan.changesets)
    plan.store.finish_release()
    console.print(f"  [green]✓[/] Deleted {removed} changeset file(s)", highlight=False)

    tag = plan.config.tag_name(plan.next_version)
    console.print(
        Panel(
            f"[green]Version {plan.next_version} is ready![/]\n\n"
            "Next steps:\n"
            f"  1. Review the changes to {plan.config.changelog_path}\n"
            "  2. Commit the changes\n"
            f"  3. Tag the release: [cyan]git tag {tag}[/]",
            title="[green]Version Complete[/]",
            border_style="green",
        )
    )
