"""Shared fixtures for changeset-py tests."""

from __future__ import annotations

import itertools
from collections.abc import Callable
from pathlib import Path

import pytest

from changeset_py.config import ChangesetConfig
from changeset_py.core.changeset import Changeset
from changeset_py.core.version import BumpType
from changeset_py.project import ChangesetStore

ChangesetFactory = Callable[..., Changeset]


@pytest.fixture
def make_changeset() -> ChangesetFactory:
    """Factory for in-memory changesets with unique ids."""
    counter = itertools.count(1)

    def factory(bump_type: BumpType | str, summary: str = "Some change") -> Changeset:
        return Changeset(id=f"change-{next(counter)}", type=BumpType(bump_type), summary=summary)

    return factory


@pytest.fixture
def major_changeset(make_changeset: ChangesetFactory) -> Changeset:
    return make_changeset(BumpType.MAJOR, "Remove deprecated API")


@pytest.fixture
def minor_changeset(make_changeset: ChangesetFactory) -> Changeset:
    return make_changeset(BumpType.MINOR, "Add custom section headings")


@pytest.fixture
def patch_changeset(make_changeset: ChangesetFactory) -> Changeset:
    return make_changeset(BumpType.PATCH, "Handle empty changelog files")


@pytest.fixture
def initialized_project(tmp_path: Path) -> Path:
    """A project directory with .changes/ and a pyproject.toml."""
    (tmp_path / "pyproject.toml").write_text(
        """\
[project]
name = "widgets"
version = "1.0.0"
description = "Test project"

[tool.ruff]
line-length = 100
"""
    )
    ChangesetStore(tmp_path).initialize(ChangesetConfig())
    return tmp_path


@pytest.fixture
def write_changeset(initialized_project: Path) -> Callable[[str, str], Path]:
    """Write raw content to .changes/<name>.md in the initialized project."""

    def writer(name: str, content: str) -> Path:
        path = initialized_project / ".changes" / f"{name}.md"
        path.write_text(content)
        return path

    return writer
