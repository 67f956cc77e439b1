"""Tests for the changeset store, changelog file and pyproject.toml handling."""

from __future__ import annotations

from pathlib import Path

import pytest

from changeset_py.config import ChangesetConfig, load_config
from changeset_py.core.version import BumpType, Version
from changeset_py.exceptions import (
    ChangesetFormatError,
    EmptySummaryError,
    InvalidTypeError,
    InvalidVersionError,
    ProjectError,
    VersionNotFoundError,
)
from changeset_py.project import (
    ChangesetStore,
    PendingRelease,
    get_pyproject_version,
    read_changelog,
    resolve_current_version,
    update_changelog,
    update_pyproject_version,
)


class TestChangesetStore:
    """Tests for ChangesetStore."""

    def test_initialize(self, tmp_path: Path):
        """initialize() writes config.json and README.md."""
        store = ChangesetStore(tmp_path)
        assert not store.is_initialized()

        store.initialize(ChangesetConfig(repository="https://x.io/r"))

        assert store.is_initialized()
        assert (tmp_path / ".changes" / "README.md").is_file()
        assert load_config(tmp_path).repository == "https://x.io/r"

    def test_create_writes_file(self, initialized_project: Path):
        """create() writes a parseable changeset file."""
        store = ChangesetStore(initialized_project)
        changeset = store.create(
            BumpType.MINOR, "  Add export  ", id_factory=lambda: "neat-kite-warm"
        )

        assert changeset.path == initialized_project / ".changes" / "neat-kite-warm.md"
        assert changeset.path.read_text() == "---\ntype: minor\n---\n\nAdd export\n"
        assert store.load().changesets == [changeset]

    def test_create_avoids_collisions(self, initialized_project: Path):
        """A colliding id is regenerated."""
        ids = iter(["same-id-here", "same-id-here", "other-id-here"])
        store = ChangesetStore(initialized_project)
        store.create(BumpType.PATCH, "First", id_factory=lambda: next(ids))
        second = store.create(BumpType.PATCH, "Second", id_factory=lambda: next(ids))

        assert second.id == "other-id-here"

    def test_load_skips_readme_and_config(self, initialized_project: Path):
        """Only changeset files are loaded."""
        result = ChangesetStore(initialized_project).load()

        assert result.total == 0

    def test_load_without_directory(self, tmp_path: Path):
        """A missing directory yields no changesets."""
        assert ChangesetStore(tmp_path).load().total == 0

    def test_load_sorted_by_file_name(self, initialized_project: Path, write_changeset):
        """Discovery order is file name order."""
        write_changeset("b-change", "---\ntype: patch\n---\n\nB\n")
        write_changeset("a-change", "---\ntype: minor\n---\n\nA\n")

        ids = [cs.id for cs in ChangesetStore(initialized_project).load().changesets]
        assert ids == ["a-change", "b-change"]

    def test_load_collects_errors(self, initialized_project: Path, write_changeset):
        """Invalid files are reported without aborting the batch."""
        write_changeset("good", "---\ntype: minor\n---\n\nGood\n")
        write_changeset("no-frontmatter", "Just text\n")
        write_changeset("bad-type", "---\ntype: huge\n---\n\nBad\n")

        result = ChangesetStore(initialized_project).load()

        assert [cs.id for cs in result.changesets] == ["good"]
        errors = dict(result.errors)
        assert isinstance(errors["no-frontmatter.md"], ChangesetFormatError)
        assert isinstance(errors["bad-type.md"], InvalidTypeError)

    def test_empty_summary_only_fails_check(self, initialized_project: Path, write_changeset):
        """Empty summaries load fine but fail check()."""
        write_changeset("empty", "---\ntype: patch\n---\n\n")
        store = ChangesetStore(initialized_project)

        assert [cs.id for cs in store.load().changesets] == ["empty"]

        result = store.check()
        assert result.changesets == []
        assert isinstance(dict(result.errors)["empty.md"], EmptySummaryError)

    def test_delete_all(self, initialized_project: Path):
        """delete_all() removes exactly the given changesets."""
        store = ChangesetStore(initialized_project)
        keep = store.create(BumpType.PATCH, "Keep", id_factory=lambda: "keep-me-now")
        drop = store.create(BumpType.PATCH, "Drop", id_factory=lambda: "drop-me-now")

        assert store.delete_all([drop]) == 1
        assert keep.path.exists()
        assert not drop.path.exists()
        assert store.delete_all([drop]) == 0

    def test_release_record(self, initialized_project: Path):
        """A started release is recorded until it is finished."""
        store = ChangesetStore(initialized_project)
        release = PendingRelease(current="1.0.0", next_version="1.1.0", description="minor")
        assert store.pending_release() is None

        store.begin_release(release)

        assert store.pending_release() == release
        assert store.load().total == 0

        store.finish_release()
        assert store.pending_release() is None
        store.finish_release()

    def test_release_record_uses_camel_case(self, initialized_project: Path):
        """release.json uses the same key style as config.json."""
        store = ChangesetStore(initialized_project)
        store.begin_release(
            PendingRelease(current="1.0.0", next_version="1.1.0", description="minor")
        )
        assert '"nextVersion": "1.1.0"' in store.release_path.read_text()

    def test_invalid_release_record(self, initialized_project: Path):
        """A broken release record raises ProjectError."""
        store = ChangesetStore(initialized_project)
        store.release_path.write_text("{broken")
        with pytest.raises(ProjectError):
            store.pending_release()


class TestChangelogFile:
    """Tests for changelog file helpers."""

    def test_read_missing(self, tmp_path: Path):
        """A missing changelog reads as empty."""
        assert read_changelog(tmp_path / "CHANGELOG.md") == ""

    def test_update_creates_file(self, tmp_path: Path):
        """update_changelog() creates the file with a preamble."""
        path = tmp_path / "CHANGELOG.md"
        content = update_changelog(path, "## 1.0.0 - 2024-05-01\n\n### Fixes\n\n- x\n")

        assert path.read_text() == content
        assert content.startswith("# Changelog\n")

    def test_update_keeps_crlf(self, tmp_path: Path):
        """A CRLF changelog is written back with CRLF only."""
        path = tmp_path / "CHANGELOG.md"
        path.write_bytes(b"# Changelog\r\n\r\nIntro.\r\n\r\n## 1.0.0 - 2024-01-01\r\n\r\n- x\r\n")

        update_changelog(path, "## 1.1.0 - 2024-05-01\n\n### Fixes\n\n- y\n")

        data = path.read_bytes()
        assert data.index(b"## 1.1.0") < data.index(b"## 1.0.0")
        assert b"\n" not in data.replace(b"\r\n", b"")

    def test_read_keeps_line_endings(self, tmp_path: Path):
        """read_changelog() does not translate newlines."""
        path = tmp_path / "CHANGELOG.md"
        path.write_bytes(b"# Changelog\r\n")
        assert read_changelog(path) == "# Changelog\r\n"


class TestResolveCurrentVersion:
    """Tests for resolve_current_version()."""

    def test_pyproject_wins(self, initialized_project: Path):
        """pyproject.toml is preferred over a stale changelog header."""
        (initialized_project / "CHANGELOG.md").write_text(
            "# Changelog\n\n## 0.9.0-beta.1 - 2024-05-01\n"
        )
        assert resolve_current_version(initialized_project, ChangesetConfig()) == Version(1, 0, 0)

    def test_changelog_fallback(self, tmp_path: Path):
        """Without a static version, the newest changelog header is used."""
        (tmp_path / "pyproject.toml").write_text('[project]\nname = "x"\ndynamic = ["version"]\n')
        (tmp_path / "CHANGELOG.md").write_text("# Changelog\n\n## 1.3.0-beta.1 - 2024-05-01\n")

        version = resolve_current_version(tmp_path, ChangesetConfig())
        assert str(version) == "1.3.0-beta.1"

    def test_invalid_changelog_header(self, tmp_path: Path):
        """A header with pre-release number 0 is reported."""
        (tmp_path / "CHANGELOG.md").write_text("# Changelog\n\n## 1.0.0-rc.0 - 2024-01-01\n")
        with pytest.raises(InvalidVersionError):
            resolve_current_version(tmp_path, ChangesetConfig())

    def test_default(self, tmp_path: Path):
        """Without either source the version is 0.0.0."""
        assert resolve_current_version(tmp_path, ChangesetConfig()) == Version(0, 0, 0)


class TestPyprojectVersion:
    """Tests for reading and updating the pyproject.toml version."""

    def test_get_version(self, initialized_project: Path):
        """Read [project].version."""
        assert get_pyproject_version(initialized_project) == "1.0.0"

    def test_get_poetry_version(self, tmp_path: Path):
        """Read [tool.poetry].version."""
        (tmp_path / "pyproject.toml").write_text('[tool.poetry]\nname = "x"\nversion = "0.4.2"\n')
        assert get_pyproject_version(tmp_path) == "0.4.2"

    def test_get_missing_file(self, tmp_path: Path):
        """Missing pyproject.toml raises ProjectError."""
        with pytest.raises(ProjectError):
            get_pyproject_version(tmp_path)

    def test_get_dynamic_version(self, tmp_path: Path):
        """Dynamic versions cannot be read."""
        (tmp_path / "pyproject.toml").write_text('[project]\nname = "x"\ndynamic = ["version"]\n')
        with pytest.raises(VersionNotFoundError):
            get_pyproject_version(tmp_path)

    def test_update_preserves_formatting(self, initialized_project: Path):
        """Only the version line of [project] changes."""
        path = initialized_project / "pyproject.toml"
        before = path.read_text()

        update_pyproject_version(initialized_project, "1.1.0")

        assert path.read_text() == before.replace('version = "1.0.0"', 'version = "1.1.0"')

    def test_update_ignores_other_tables(self, tmp_path: Path):
        """A version key in another table is left alone."""
        path = tmp_path / "pyproject.toml"
        path.write_text(
            '[tool.bumpversion]\nversion = "9.9.9"\n\n[project]\nname = "x"\nversion = "1.0.0"\n'
        )

        update_pyproject_version(path, "2.0.0")

        content = path.read_text()
        assert 'version = "9.9.9"' in content
        assert 'version = "2.0.0"' in content

    def test_update_without_version(self, tmp_path: Path):
        """Updating a file without a static version raises."""
        (tmp_path / "pyproject.toml").write_text('[project]\nname = "x"\n')
        with pytest.raises(VersionNotFoundError):
            update_pyproject_version(tmp_path, "1.0.0")
