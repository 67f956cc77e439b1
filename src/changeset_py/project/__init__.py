"""Project files: changeset storage, changelog file and pyproject.toml."""

from __future__ import annotations

from changeset_py.project.changelog_file import (
    read_changelog,
    resolve_current_version,
    update_changelog,
)
from changeset_py.project.pyproject import get_pyproject_version, update_pyproject_version
from changeset_py.project.store import ChangesetStore, PendingRelease

__all__ = [
    "ChangesetStore",
    "PendingRelease",
    "get_pyproject_version",
    "read_changelog",
    "resolve_current_version",
    "update_changelog",
    "update_pyproject_version",
]
