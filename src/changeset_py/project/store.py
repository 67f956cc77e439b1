"""On-disk storage of changesets in the ``.changes`` directory.

Each changeset is an independent ``<id>.md`` file, so concurrent branches
can add changesets without conflicting. README.md and config.json in the
same directory are not changesets.

While `changeset version` applies a release it keeps a ``release.json``
record of the versions it is writing. A run that stops half way leaves the
record behind and the next run finishes the same release instead of
bumping again.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, ValidationError
from pydantic.alias_generators import to_camel

from changeset_py.config.loader import CONFIG_FILE, get_changes_dir, save_config
from changeset_py.config.models import ChangesetConfig
from changeset_py.core.aggregator import LoadResult
from changeset_py.core.changeset import (
    Changeset,
    generate_changeset_id,
    parse_changeset,
    validate_changeset,
)
from changeset_py.exceptions import ChangesetError, ProjectError
from changeset_py.logging import get_logger

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable
    from pathlib import Path

    from changeset_py.core.version import BumpType

logger = get_logger(__name__)

README_FILE = "README.md"
RELEASE_FILE = "release.json"

README_TEXT = """\
# Changes

This directory contains changeset files that describe upcoming version changes.

## Adding a changeset

Run `changeset add` to create a new changeset file.

## Applying changesets

Run `changeset version` to apply all pending changesets and generate changelog entries.

## Checking changesets

Run `changeset check` in CI to make sure every changeset file is valid.
"""


class PendingRelease(BaseModel):
    """A release that `changeset version` has started writing."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, alias_generator=to_camel)

    current: str
    next_version: str
    description: str


class ChangesetStore:
    """Reads and writes the changeset files of one project."""

    def __init__(self, project_path: Path) -> None:
        self.project_path = project_path
        self.directory = get_changes_dir(project_path)

    def is_initialized(self) -> bool:
        return self.directory.is_dir() and (self.directory / CONFIG_FILE).is_file()

    def initialize(self, config: ChangesetConfig | None = None) -> None:
        """Create the directory with its config.json and README.md."""
        self.directory.mkdir(parents=True, exist_ok=True)
        save_config(config or ChangesetConfig(), self.project_path)
        (self.directory / README_FILE).write_text(README_TEXT, encoding="utf-8")
        logger.info("changes_initialized", path=str(self.directory))

    def _changeset_files(self) -> list[Path]:
        if not self.directory.is_dir():
            return []
        return sorted(p for p in self.directory.glob("*.md") if p.name != README_FILE)

    def create(
        self,
        bump_type: BumpType,
        summary: str,
        id_factory: Callable[[], str] = generate_changeset_id,
    ) -> Changeset:
        """Write a new changeset file and return the record."""
        self.directory.mkdir(parents=True, exist_ok=True)

        changeset_id = id_factory()
        while (self.directory / f"{changeset_id}.md").exists():
            changeset_id = id_factory()

        path = self.directory / f"{changeset_id}.md"
        changeset = Changeset(id=changeset_id, type=bump_type, summary=summary.strip(), path=path)
        path.write_text(changeset.to_text(), encoding="utf-8")

        logger.debug("changeset_created", id=changeset_id, type=str(bump_type))
        return changeset

    def load(self, *, validate: bool = False) -> LoadResult:
        """Read every changeset file.

        Args:
            validate: Also reject changesets with an empty summary

        Returns:
            LoadResult with valid records in file name order and per-file errors
        """
        result = LoadResult()
        for path in self._changeset_files():
            try:
                changeset = parse_changeset(path.read_text(encoding="utf-8"), path.stem, path)
                if validate:
                    validate_changeset(changeset)
            except ChangesetError as e:
                logger.debug("changeset_invalid", file=path.name, error=e.message)
                result.errors.append((path.name, e))
                continue

            logger.debug("changeset_loaded", id=changeset.id, type=str(changeset.type))
            result.changesets.append(changeset)
        return result

    def check(self) -> LoadResult:
        return self.load(validate=True)

    def delete_all(self, changesets: Iterable[Changeset]) -> int:
        """Delete the files of the given changesets. Returns how many were removed."""
        removed = 0
        for changeset in changesets:
            if changeset.path is not None and changeset.path.exists():
                changeset.path.unlink()
                removed += 1
        logger.debug("changesets_deleted", count=removed)
        return removed

    @property
    def release_path(self) -> Path:
        return self.directory / RELEASE_FILE

    def pending_release(self) -> PendingRelease | None:
        """Return the release left unfinished by an interrupted run, if any.

        Raises:
            ProjectError: If the release record cannot be read
        """
        if not self.release_path.is_file():
            return None
        try:
            return PendingRelease.model_validate_json(self.release_path.read_text(encoding="utf-8"))
        except ValidationError as e:
            raise ProjectError(f"Invalid {self.release_path}: {e}") from e

    def begin_release(self, release: PendingRelease) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)
        self.release_path.write_text(
            release.model_dump_json(by_alias=True, indent=4) + "\n", encoding="utf-8"
        )
        logger.debug("release_started", version=release.next_version)

    def finish_release(self) -> None:
        self.release_path.unlink(missing_ok=True)
        logger.debug("release_finished")
