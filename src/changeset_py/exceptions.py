"""Exception hierarchy for changeset-py.

All errors raised by the library derive from ChangesetPyError so that
callers (the CLI in particular) can catch a single base class.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathlib import Path


class ChangesetPyError(Exception):
    """Base exception for all changeset-py errors."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


# =============================================================================
# Configuration
# =============================================================================


class ConfigError(ChangesetPyError):
    """Configuration could not be loaded or saved."""


class NotInitializedError(ConfigError):
    """The .changes directory or its config file does not exist."""


class ConfigValidationError(ConfigError):
    """Configuration content is malformed or fails validation."""


# =============================================================================
# Versions
# =============================================================================


class VersionError(ChangesetPyError):
    """Base class for version related errors."""


class InvalidVersionError(VersionError):
    """A version string or pre-release directive cannot be interpreted."""


class VersionNotFoundError(VersionError):
    """No version could be located in a project file."""


# =============================================================================
# Changesets
# =============================================================================


class ChangesetError(ChangesetPyError):
    """Base class for problems with a single changeset record."""

    def __init__(self, message: str, path: Path | None = None) -> None:
        super().__init__(message)
        self.path = path


class ChangesetFormatError(ChangesetError):
    """The frontmatter block is absent or malformed."""


class MissingTypeError(ChangesetError):
    """The frontmatter has no ``type`` key."""


class InvalidTypeError(ChangesetError):
    """The ``type`` key is not one of major, minor or patch."""


class EmptySummaryError(ChangesetError):
    """The changeset parsed but its summary is blank."""


# =============================================================================
# Changelog / project files
# =============================================================================


class ChangelogError(ChangesetPyError):
    """The changelog file could not be read or written."""


class ProjectError(ChangesetPyError):
    """A project file (e.g. pyproject.toml) could not be handled."""
