"""Command line entry point: ``changeset``."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import click
from rich.console import Console

from changeset_py import __version__
from changeset_py.cli.commands.add import run_add
from changeset_py.cli.commands.check import run_check
from changeset_py.cli.commands.generate import run_generate
from changeset_py.cli.commands.init import run_init
from changeset_py.cli.commands.status import run_status
from changeset_py.cli.commands.version import run_preview, run_version
from changeset_py.logging import configure_logging

BUMP_CHOICES = click.Choice(["major", "minor", "patch"], case_sensitive=False)
PRERELEASE_CHOICES = click.Choice(["alpha", "beta", "rc"], case_sensitive=False)


@dataclass
class CliState:
    project_path: Path
    verbose: bool
    console: Console
    err_console: Console


pass_state = click.make_pass_decorator(CliState)


@click.group()
@click.version_option(__version__, prog_name="changeset")
@click.option(
    "--path",
    "-C",
    "path",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    default=None,
    help="Project directory (defaults to the current directory).",
)
@click.option("--verbose", "-v", is_flag=True, help="Show debug logging.")
@click.pass_context
def cli(ctx: click.Context, path: Path | None, verbose: bool) -> None:
    """Manage versions and changelogs with changesets."""
    configure_logging(verbose)
    ctx.obj = CliState(
        project_path=path or Path.cwd(),
        verbose=verbose,
        console=Console(soft_wrap=True),
        err_console=Console(stderr=True, soft_wrap=True),
    )


@cli.command()
@click.option("--force", is_flag=True, help="Overwrite an existing configuration.")
@click.option("--repository", default=None, help="Repository URL used to link issues.")
@pass_state
def init(state: CliState, force: bool, repository: str | None) -> None:
    """Initialize the .changes directory."""
    run_init(state.project_path, force, repository, state.console, state.err_console)


@cli.command()
@click.option("--type", "-t", "bump_type", type=BUMP_CHOICES, default="patch", show_default=True)
@click.option("--message", "-m", default=None, help="Changeset summary.")
@click.option("--empty", is_flag=True, help="Create an empty changeset (no release entry).")
@pass_state
def add(state: CliState, bump_type: str, message: str | None, empty: bool) -> None:
    """Create a new changeset."""
    run_add(state.project_path, bump_type, message, empty, state.console, state.err_console)


@cli.command()
@pass_state
def check(state: CliState) -> None:
    """Validate changeset files."""
    run_check(state.project_path, state.console, state.err_console)


@cli.command()
@pass_state
def status(state: CliState) -> None:
    """Show pending changesets."""
    run_status(state.project_path, state.console, state.err_console)


@cli.command()
@click.option("--prerelease", "-p", type=PRERELEASE_CHOICES, default=None)
@pass_state
def preview(state: CliState, prerelease: str | None) -> None:
    """Preview the next version and changelog section."""
    run_preview(state.project_path, prerelease, state.console, state.err_console)


@cli.command()
@click.option("--prerelease", "-p", type=PRERELEASE_CHOICES, default=None)
@click.option("--no-changelog", is_flag=True, help="Skip changelog generation.")
@click.option("--dry-run", is_flag=True, help="Show what would be done.")
@click.option("--yes", "-y", is_flag=True, help="Do not ask for confirmation.")
@pass_state
def version(
    state: CliState,
    prerelease: str | None,
    no_changelog: bool,
    dry_run: bool,
    yes: bool,
) -> None:
    """Apply changesets, bump the version and update the changelog."""
    run_version(
        state.project_path,
        prerelease,
        no_changelog,
        dry_run,
        yes,
        state.console,
        state.err_console,
    )


@cli.command()
@click.option(
    "--messages-file",
    "-f",
    required=True,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="File with commit messages separated by '---commit---' lines.",
)
@click.option("--dry-run", is_flag=True, help="Show what would be generated.")
@pass_state
def generate(state: CliState, messages_file: Path, dry_run: bool) -> None:
    """Generate changesets from conventional commit messages."""
    run_generate(
        state.project_path,
        messages_file,
        dry_run,
        state.verbose,
        state.console,
        state.err_console,
    )


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
