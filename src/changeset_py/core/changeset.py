"""Changeset records and their on-disk text format.

A changeset file looks like::

    ---
    type: minor
    ---

    Add support for custom section headings
"""

from __future__ import annotations

import random
import re
from dataclasses import dataclass
from typing import TYPE_CHECKING

from changeset_py.core.version import BumpType
from changeset_py.exceptions import (
    ChangesetFormatError,
    EmptySummaryError,
    InvalidTypeError,
    MissingTypeError,
)

if TYPE_CHECKING:
    from pathlib import Path

_FRONTMATTER_RE = re.compile(
    r"^---[ \t]*\r?\n(?P<meta>.*?)\r?\n---[ \t]*(?:\r?\n(?P<body>.*))?$",
    re.DOTALL,
)
_TYPE_RE = re.compile(r"^\s*type\s*:\s*(?P<type>\S+)", re.MULTILINE)

_ADJECTIVES = (
    "brave", "calm", "eager", "fair", "gentle", "happy", "jolly", "kind",
    "lively", "merry", "nice", "proud", "quick", "smart", "witty", "young",
    "bright", "clean", "fresh", "light", "neat", "sharp", "soft", "warm",
    "cool", "fast", "loud", "quiet", "rich", "safe", "tall", "wise",
)  # fmt: skip

_NOUNS = (
    "apple", "bird", "cloud", "dream", "eagle", "flame", "grape", "house",
    "island", "jewel", "kite", "lake", "moon", "nest", "ocean", "pearl",
    "river", "star", "tree", "wave", "berry", "cedar", "daisy", "frost",
    "grass", "honey", "ivory", "jade", "lemon", "maple", "olive", "peach",
)  # fmt: skip


@dataclass(frozen=True, slots=True)
class Changeset:
    """A single pending change awaiting release."""

    id: str
    type: BumpType
    summary: str
    path: Path | None = None

    @property
    def title(self) -> str:
        """First line of the summary, used for changelog bullets."""
        lines = self.summary.strip().splitlines()
        return lines[0].strip() if lines else ""

    @property
    def is_empty(self) -> bool:
        return not self.summary.strip()

    def to_text(self) -> str:
        """Serialize to the changeset file format (with trailing newline)."""
        return f"---\ntype: {self.type}\n---\n\n{self.summary}\n"


def parse_changeset(text: str, changeset_id: str, path: Path | None = None) -> Changeset:
    """Parse changeset file content.

    An empty summary is accepted here; see validate_changeset().

    Args:
        text: File content
        changeset_id: Identifier (normally the file stem)
        path: Source path, attached to errors and the returned record

    Returns:
        Parsed Changeset

    Raises:
        ChangesetFormatError: If there is no frontmatter block
        MissingTypeError: If the frontmatter has no ``type`` key
        InvalidTypeError: If ``type`` is not major, minor or patch
    """
    source = str(path) if path is not None else changeset_id

    match = _FRONTMATTER_RE.match(text.lstrip("\ufeff"))
    if not match:
        raise ChangesetFormatError(f"Invalid changeset format in {source}", path=path)

    type_match = _TYPE_RE.search(match["meta"])
    if not type_match:
        raise MissingTypeError(f"Missing 'type' in changeset {source}", path=path)

    raw_type = type_match["type"].strip("'\"")
    try:
        bump_type = BumpType(raw_type)
    except ValueError:
        raise InvalidTypeError(
            f"Invalid type '{raw_type}' in changeset {source}", path=path
        ) from None

    return Changeset(
        id=changeset_id,
        type=bump_type,
        summary=(match["body"] or "").strip(),
        path=path,
    )


def validate_changeset(changeset: Changeset) -> Changeset:
    """Apply checks beyond the structural parse.

    Raises:
        EmptySummaryError: If the summary is blank
    """
    if changeset.is_empty:
        raise EmptySummaryError("Changeset summary is empty", path=changeset.path)
    return changeset


def generate_changeset_id(rng: random.Random | None = None) -> str:
    """Generate an adjective-noun-adjective id such as ``brave-moon-calm``."""
    rng = rng or random.Random()
    return f"{rng.choice(_ADJECTIVES)}-{rng.choice(_NOUNS)}-{rng.choice(_ADJECTIVES)}"
