"""Reading and writing the changelog file, and current version lookup."""

from __future__ import annotations

from typing import TYPE_CHECKING

from changeset_py.core.changelog import get_latest_version, merge_changelog
from changeset_py.core.version import Version, parse_version
from changeset_py.exceptions import ChangelogError, ProjectError, VersionNotFoundError
from changeset_py.logging import get_logger
from changeset_py.project.pyproject import get_pyproject_version

if TYPE_CHECKING:
    from pathlib import Path

    from changeset_py.config.models import ChangesetConfig

logger = get_logger(__name__)

INITIAL_VERSION = Version(0, 0, 0)


def read_changelog(path: Path) -> str:
    """Return the changelog text, or an empty string if the file does not exist.

    Line endings are returned as stored.
    """
    try:
        with path.open(encoding="utf-8", newline="") as f:
            return f.read()
    except FileNotFoundError:
        return ""
    except OSError as e:
        raise ChangelogError(f"Could not read {path}: {e}") from e


def update_changelog(path: Path, section: str) -> str:
    """Merge a rendered section into the changelog file.

    Returns:
        The new file content
    """
    content = merge_changelog(section, read_changelog(path))
    try:
        with path.open("w", encoding="utf-8", newline="") as f:
            f.write(content)
    except OSError as e:
        raise ChangelogError(f"Could not write {path}: {e}") from e
    return content


def resolve_current_version(project_path: Path, config: ChangesetConfig) -> Version:
    """Find the version the next release starts from.

    The static version in pyproject.toml wins, then the newest version
    header in the changelog, then 0.0.0. pyproject.toml is updated by every
    release, with or without a changelog.
    """
    try:
        version = parse_version(get_pyproject_version(project_path))
    except (ProjectError, VersionNotFoundError):
        pass
    else:
        logger.debug("current_version", source="pyproject", version=str(version))
        return version

    changelog_version = get_latest_version(read_changelog(project_path / config.changelog_path))
    if changelog_version is not None:
        logger.debug("current_version", source="changelog", version=str(changelog_version))
        return changelog_version

    logger.debug("current_version", source="default", version=str(INITIAL_VERSION))
    return INITIAL_VERSION
