"""Conventional commit parsing and classification.

Commits following https://www.conventionalcommits.org can be turned into
changesets automatically:

    feat!: ...  / BREAKING CHANGE: ...   -> major
    feat: ...                            -> minor
    fix: / perf: / refactor: ...         -> patch
    docs: / test: / chore: / ci: / ...   -> ignored
"""

from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from changeset_py.core.changeset import Changeset, generate_changeset_id
from changeset_py.core.version import BumpType
from changeset_py.logging import get_logger

if TYPE_CHECKING:
    from collections.abc import Iterable

logger = get_logger(__name__)

# Pattern: type(scope)!: description
COMMIT_PATTERN = re.compile(
    r"^(?P<type>[a-z]+)"
    r"(?:\((?P<scope>[^)]+)\))?"
    r"(?P<breaking>!)?"
    r"\s*:\s*"
    r"(?P<description>\S.*)$",
    re.IGNORECASE,
)

BREAKING_PATTERN = re.compile(r"^BREAKING[ -]CHANGE\s*:", re.IGNORECASE | re.MULTILINE)

RELEASE_TYPES: dict[str, BumpType] = {
    "feat": BumpType.MINOR,
    "fix": BumpType.PATCH,
    "perf": BumpType.PATCH,
    "refactor": BumpType.PATCH,
}

IGNORED_TYPES = frozenset({"docs", "test", "tests", "chore", "ci", "style", "build"})


@dataclass(frozen=True, slots=True)
class ParsedCommit:
    """A commit message split into its conventional commit parts."""

    commit_type: str
    description: str
    scope: str | None = None
    is_breaking: bool = False
    body: str | None = None


def parse_commit(message: str) -> ParsedCommit | None:
    """Parse a conventional commit message.

    Only the first line is matched against the grammar. The remaining
    lines are searched for a ``BREAKING CHANGE:`` footer.

    Args:
        message: Full commit message

    Returns:
        ParsedCommit, or None if the first line is not a conventional commit
    """
    lines = message.strip().splitlines()
    if not lines:
        return None

    match = COMMIT_PATTERN.match(lines[0].strip())
    if not match:
        return None

    body = "\n".join(lines[1:]).strip() or None
    is_breaking = bool(match["breaking"]) or bool(body and BREAKING_PATTERN.search(body))

    return ParsedCommit(
        commit_type=match["type"].lower(),
        description=match["description"].strip(),
        scope=(match["scope"] or "").strip() or None,
        is_breaking=is_breaking,
        body=body,
    )


def classify_commit(parsed: ParsedCommit) -> BumpType | None:
    """Map a parsed commit to a bump type.

    Breaking commits are always MAJOR. Returns None for commits that should
    not produce a changeset.
    """
    if parsed.is_breaking:
        return BumpType.MAJOR
    if parsed.commit_type in IGNORED_TYPES:
        return None
    return RELEASE_TYPES.get(parsed.commit_type)


def format_summary(parsed: ParsedCommit) -> str:
    """Render a changeset summary, prefixing the scope in bold when present."""
    if parsed.scope:
        return f"**{parsed.scope}**: {parsed.description}"
    return parsed.description


@dataclass
class CommitScan:
    """Changesets derived from a batch of commits, plus the skipped ones."""

    changesets: list[Changeset] = field(default_factory=list)
    skipped: list[tuple[str, str]] = field(default_factory=list)


def changesets_from_commits(
    messages: Iterable[str],
    id_factory: Callable[[], str] = generate_changeset_id,
) -> CommitScan:
    """Build a changeset for every releasable conventional commit.

    Args:
        messages: Commit messages, oldest first
        id_factory: Produces ids for the new changesets

    Returns:
        CommitScan with new changesets and ``(first line, reason)`` pairs
        for skipped commits
    """
    scan = CommitScan()
    for message in messages:
        first_line = message.strip().split("\n", 1)[0]
        parsed = parse_commit(message)
        if parsed is None:
            scan.skipped.append((first_line, "Not a conventional commit"))
            continue

        bump_type = classify_commit(parsed)
        if bump_type is None:
            scan.skipped.append((first_line, f"Type '{parsed.commit_type}' ignored"))
            continue

        scan.changesets.append(
            Changeset(id=id_factory(), type=bump_type, summary=format_summary(parsed))
        )

    logger.debug(
        "commits_scanned",
        created=len(scan.changesets),
        skipped=len(scan.skipped),
    )
    return scan
