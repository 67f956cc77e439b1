"""Changelog rendering and merging.

A new release section is rendered from the pending changesets and spliced
into the existing changelog so that sections stay newest-first. Existing
sections are never re-rendered; unrecognized content is kept as is.

Section format::

    ## 1.2.0 - 2024-05-01

    ### Features

    - Add support for custom section headings

    ### Fixes

    - Handle empty changelog files
"""

from __future__ import annotations

import re
from datetime import UTC, date, datetime
from typing import TYPE_CHECKING

from changeset_py.core.version import VERSION_PATTERN, BumpType, Version, parse_version
from changeset_py.logging import get_logger

if TYPE_CHECKING:
    from collections.abc import Iterable

    from changeset_py.config.models import ChangesetConfig
    from changeset_py.core.changeset import Changeset

logger = get_logger(__name__)

CHANGELOG_PREAMBLE = (
    "# Changelog\n\nAll notable changes to this project will be documented in this file.\n\n"
)

# "## 1.2.3" or "## 1.2.3-rc.1 - 2024-01-01"
VERSION_HEADER_RE = re.compile(rf"^## (?P<version>{VERSION_PATTERN})", re.MULTILINE)

# Title line, then at most one paragraph that is not a heading
_PREAMBLE_RE = re.compile(
    r"\A# [^\n]*(?:\n|\Z)"
    r"(?:[ \t]*\n)*"
    r"(?:(?!#)[^\n]*\S[^\n]*(?:\n|\Z))*"
    r"(?:[ \t]*\n)*"
)

_ISSUE_RE = re.compile(r"(?<![\[\w/])#(?P<number>\d+)(?![\d\]])")


def render_section(
    version: Version | str,
    changesets: Iterable[Changeset],
    config: ChangesetConfig | None = None,
    *,
    release_date: date | None = None,
) -> str:
    """Render the changelog section for a release.

    Args:
        version: Version being released
        changesets: Changesets included in the release
        config: Provides section headings and the repository URL for issue links
        release_date: Date shown in the header, defaults to today (UTC)

    Returns:
        Markdown for the section, ending with a newline
    """
    if config is None:
        from changeset_py.config.models import ChangesetConfig

        config = ChangesetConfig()

    release_date = release_date or datetime.now(UTC).date()
    changesets = list(changesets)

    lines = [f"## {version} - {release_date.isoformat()}", ""]

    for bump_type in sorted(BumpType, reverse=True):
        of_type = [cs for cs in changesets if cs.type is bump_type]
        if not of_type:
            continue

        lines.append(f"### {config.section_heading(bump_type)}")
        lines.append("")
        for changeset in of_type:
            entry = changeset.title
            if config.repository:
                entry = link_issues(entry, config.repository)
            lines.append(f"- {entry}")
        lines.append("")

    return "\n".join(lines)


def link_issues(text: str, repository_url: str) -> str:
    """Turn bare ``#123`` references into markdown links.

    References already inside a link (``[#123](...)``) and fragments that
    follow a word or a slash (``page#12``) are left alone.

    Example:
        >>> link_issues("Fix #5", "https://example.com/r")
        'Fix [#5](https://example.com/r/issues/5)'
    """
    base = repository_url.rstrip("/")
    return _ISSUE_RE.sub(
        lambda m: f"[#{m['number']}]({base}/issues/{m['number']})",
        text,
    )


def _with_blank_line(text: str) -> str:
    if text.endswith("\n\n"):
        return text
    if text.endswith("\n"):
        return text + "\n"
    return text + "\n\n"


def merge_changelog(section: str, existing: str) -> str:
    """Insert a rendered section into an existing changelog.

    - Empty document: standard preamble followed by the section.
    - Preamble and a version header: section goes right before the first
      version header.
    - Preamble without any version header: section goes right after the
      preamble, followed by the remaining content.
    - Anything else: standard preamble and section are put in front of the
      existing content.

    Merging a section whose version is already the newest one in the
    document returns the document unchanged. A document using CRLF line
    endings keeps them.

    Args:
        section: Output of render_section()
        existing: Current changelog text (may be empty)

    Returns:
        The updated changelog text
    """
    entry = section.replace("\r\n", "\n").strip("\n") + "\n"

    if not existing.strip():
        return CHANGELOG_PREAMBLE + entry

    new_version = get_latest_version(entry)
    if new_version is not None and new_version == get_latest_version(existing):
        logger.debug("changelog_section_exists", version=str(new_version))
        return existing

    newline = "\r\n" if "\r\n" in existing else "\n"
    merged = _splice(entry, existing.replace("\r\n", "\n"))
    return merged.replace("\n", newline)


def _splice(entry: str, existing: str) -> str:
    preamble = _PREAMBLE_RE.match(existing)
    header = VERSION_HEADER_RE.search(existing)

    if preamble and header:
        before, after = existing[: header.start()], existing[header.start() :]
        logger.debug("changelog_merged", strategy="before_first_version", offset=header.start())
        return _with_blank_line(before) + entry + "\n" + after

    if preamble:
        before, after = existing[: preamble.end()], existing[preamble.end() :]
        logger.debug("changelog_merged", strategy="after_preamble", offset=preamble.end())
        merged = _with_blank_line(before) + entry
        return merged + "\n" + after if after else merged

    logger.debug("changelog_merged", strategy="prepend")
    return CHANGELOG_PREAMBLE + entry + "\n" + existing


def get_latest_version(document: str) -> Version | None:
    """Return the version of the first version header, or None."""
    match = VERSION_HEADER_RE.search(document)
    if match is None:
        return None
    return parse_version(match["version"])
