"""pyproject.toml version manipulation.

The version is read and rewritten with targeted regular expressions so
that formatting and comments of the file are preserved.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from changeset_py.exceptions import ProjectError, VersionNotFoundError

if TYPE_CHECKING:
    from pathlib import Path

# Sections that may carry the version, in lookup order
_VERSION_SECTIONS = (r"project", r"tool\.poetry")

_VERSION_LINE_RE = re.compile(r'^(version\s*=\s*)["\']([^"\']+)["\']', re.MULTILINE)


def _section_pattern(section: str) -> re.Pattern[str]:
    # The section body runs until the next table header or EOF
    return re.compile(rf"^\[{section}\][^\n]*\n.*?(?=^\[|\Z)", re.MULTILINE | re.DOTALL)


def _resolve(path: Path) -> Path:
    return path / "pyproject.toml" if path.is_dir() else path


def get_pyproject_version(path: Path) -> str:
    """Get the version from pyproject.toml.

    Args:
        path: Path to pyproject.toml or the directory containing it

    Returns:
        Version string

    Raises:
        ProjectError: If the file does not exist
        VersionNotFoundError: If no static version is declared
    """
    pyproject_path = _resolve(path)
    if not pyproject_path.is_file():
        raise ProjectError(f"pyproject.toml not found: {pyproject_path}")

    content = pyproject_path.read_text(encoding="utf-8")

    for section in _VERSION_SECTIONS:
        section_match = _section_pattern(section).search(content)
        if not section_match:
            continue
        version_match = _VERSION_LINE_RE.search(section_match.group(0))
        if version_match:
            return version_match.group(2)

    raise VersionNotFoundError(
        f"Could not find version in {pyproject_path}. "
        "Expected [project].version or [tool.poetry].version."
    )


def update_pyproject_version(path: Path, new_version: str) -> Path:
    """Update the version in pyproject.toml.

    Args:
        path: Path to pyproject.toml or the directory containing it
        new_version: New version string to set

    Returns:
        Path to the updated pyproject.toml

    Raises:
        ProjectError: If the file does not exist
        VersionNotFoundError: If no static version is declared
    """
    pyproject_path = _resolve(path)
    if not pyproject_path.is_file():
        raise ProjectError(f"pyproject.toml not found: {pyproject_path}")

    content = pyproject_path.read_text(encoding="utf-8")

    def replace_version(match: re.Match[str]) -> str:
        return _VERSION_LINE_RE.sub(rf'\g<1>"{new_version}"', match.group(0), count=1)

    for section in _VERSION_SECTIONS:
        pattern = _section_pattern(section)
        section_match = pattern.search(content)
        if not section_match or not _VERSION_LINE_RE.search(section_match.group(0)):
            continue

        new_content = pattern.sub(replace_version, content, count=1)
        if new_content != content:
            pyproject_path.write_text(new_content, encoding="utf-8")
        return pyproject_path

    raise VersionNotFoundError(
        f"Could not find version to update in {pyproject_path}. "
        "Expected [project].version or [tool.poetry].version."
    )
