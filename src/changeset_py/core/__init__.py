"""Core business logic for changeset-py.

This package contains the parts that never touch the filesystem:
- Semantic version parsing and next version calculation
- Changeset records and their text format
- Aggregation of pending changesets
- Conventional commit classification
- Changelog section rendering and merging
"""

from __future__ import annotations

from changeset_py.core.version import (
    BumpType,
    PreRelease,
    PreReleaseKind,
    Version,
    bump_version,
    calculate_next_version,
    get_highest_bump_type,
    parse_version,
)
from changeset_py.core.changeset import Changeset, parse_changeset, validate_changeset
from changeset_py.core.aggregator import LoadResult, PendingChangesets
from changeset_py.core.commits import (
    ParsedCommit,
    changesets_from_commits,
    classify_commit,
    format_summary,
    parse_commit,
)
from changeset_py.core.changelog import (
    get_latest_version,
    link_issues,
    merge_changelog,
    render_section,
)

__all__ = [
    # Version
    "BumpType",
    # Changesets
    "Changeset",
    "LoadResult",
    # Commits
    "ParsedCommit",
    "PendingChangesets",
    "PreRelease",
    "PreReleaseKind",
    "Version",
    "bump_version",
    "calculate_next_version",
    "changesets_from_commits",
    "classify_commit",
    "format_summary",
    # Changelog
    "get_highest_bump_type",
    "get_latest_version",
    "link_issues",
    "merge_changelog",
    "parse_changeset",
    "parse_commit",
    "parse_version",
    "render_section",
    "validate_changeset",
]
