"""Semantic version parsing and calculation.

Versions follow ``MAJOR.MINOR.PATCH`` with an optional pre-release tag
``-(alpha|beta|rc).N``. All values are immutable; every operation returns
a new Version.

The next version is derived from the current version, the pending
changesets and an optional pre-release directive:

    1.0.0       + [minor]          -> 1.1.0
    1.0.0       + [minor] + alpha  -> 1.1.0-alpha.1
    1.1.0-alpha.1         + alpha  -> 1.1.0-alpha.2
    1.1.0-alpha.3         + beta   -> 1.1.0-beta.1
    1.1.0-rc.1  (no directive)     -> 1.1.0
"""

from __future__ import annotations

import re
from dataclasses import dataclass, replace
from enum import StrEnum
from typing import TYPE_CHECKING, Protocol

from changeset_py.exceptions import InvalidVersionError
from changeset_py.logging import get_logger

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

logger = get_logger(__name__)

# Strict grammar used for changelog headers and tags
VERSION_PATTERN = r"\d+\.\d+\.\d+(?:-(?:alpha|beta|rc)\.\d+)?"

_STRICT_RE = re.compile(
    r"^(?P<major>\d+)\.(?P<minor>\d+)\.(?P<patch>\d+)"
    r"(?:-(?P<kind>alpha|beta|rc)\.(?P<number>\d+))?$"
)
_LEADING_DIGITS_RE = re.compile(r"^\d+")


class _RankedEnum(StrEnum):
    """String enum ordered by declaration position (first member is lowest)."""

    @property
    def rank(self) -> int:
        return list(type(self)).index(self)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, type(self)):
            return NotImplemented
        return self.rank < other.rank

    def __le__(self, other: object) -> bool:
        if not isinstance(other, type(self)):
            return NotImplemented
        return self.rank <= other.rank

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, type(self)):
            return NotImplemented
        return self.rank > other.rank

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, type(self)):
            return NotImplemented
        return self.rank >= other.rank


class BumpType(_RankedEnum):
    """Version component a change requires incrementing.

    Members are declared lowest first, so ``MAJOR > MINOR > PATCH``.
    """

    PATCH = "patch"
    MINOR = "minor"
    MAJOR = "major"

    @classmethod
    def parse(cls, value: str) -> BumpType:
        try:
            return cls(value.strip().lower())
        except ValueError as e:
            raise InvalidVersionError(
                f"Invalid bump type '{value}'. Use: major, minor, or patch"
            ) from e


class PreReleaseKind(_RankedEnum):
    """Pre-release stage, ordered ``ALPHA < BETA < RC``."""

    ALPHA = "alpha"
    BETA = "beta"
    RC = "rc"

    @classmethod
    def parse(cls, value: str) -> PreReleaseKind:
        try:
            return cls(value.strip().lower())
        except ValueError as e:
            raise InvalidVersionError(
                f"Invalid prerelease type '{value}'. Use: alpha, beta, or rc"
            ) from e


@dataclass(frozen=True, slots=True)
class PreRelease:
    """Pre-release tag such as ``beta.2``."""

    kind: PreReleaseKind
    number: int = 1

    def __post_init__(self) -> None:
        if self.number < 1:
            raise InvalidVersionError(
                f"Pre-release number must be positive, got {self.kind}.{self.number}"
            )

    def __str__(self) -> str:
        return f"{self.kind}.{self.number}"


@dataclass(frozen=True, slots=True)
class Version:
    """Semantic version with an optional alpha/beta/rc pre-release tag."""

    major: int
    minor: int
    patch: int
    prerelease: PreRelease | None = None

    def __post_init__(self) -> None:
        if min(self.major, self.minor, self.patch) < 0:
            raise InvalidVersionError(
                f"Version components must be non-negative: {self.major}.{self.minor}.{self.patch}"
            )

    def __str__(self) -> str:
        base = f"{self.major}.{self.minor}.{self.patch}"
        if self.prerelease is not None:
            return f"{base}-{self.prerelease}"
        return base

    @classmethod
    def parse(cls, text: str) -> Version:
        """Parse a version string. See parse_version()."""
        return parse_version(text)

    @property
    def is_prerelease(self) -> bool:
        return self.prerelease is not None

    @property
    def core(self) -> Version:
        """The bare ``MAJOR.MINOR.PATCH`` part of this version."""
        return replace(self, prerelease=None)

    def bump(self, bump_type: BumpType) -> Version:
        """Increment one component, zeroing the lower ones.

        Any pre-release tag is dropped.
        """
        if bump_type is BumpType.MAJOR:
            return Version(self.major + 1, 0, 0)
        if bump_type is BumpType.MINOR:
            return Version(self.major, self.minor + 1, 0)
        return Version(self.major, self.minor, self.patch + 1)

    def with_prerelease(self, kind: PreReleaseKind | str, number: int = 1) -> Version:
        if not isinstance(kind, PreReleaseKind):
            kind = PreReleaseKind.parse(kind)
        return replace(self, prerelease=PreRelease(kind, number))


class _HasBumpType(Protocol):
    @property
    def type(self) -> BumpType: ...


def parse_version(text: str) -> Version:
    """Parse a version string.

    A leading ``v`` or ``V`` is ignored. Text matching the strict grammar
    keeps its pre-release tag. Anything else is parsed leniently: the text
    is split on ``.``, up to three components are coerced from their
    leading digits (missing or non-numeric components become 0) and no
    pre-release is reported.

    Args:
        text: Version string, e.g. ``"v1.2.3-rc.1"``

    Returns:
        Parsed Version

    Raises:
        InvalidVersionError: If the text is empty
    """
    cleaned = text.strip()
    if cleaned[:1] in ("v", "V"):
        cleaned = cleaned[1:]
    if not cleaned:
        raise InvalidVersionError(f"Cannot parse an empty version string: {text!r}")

    match = _STRICT_RE.match(cleaned)
    if match:
        prerelease = None
        if match["kind"]:
            prerelease = PreRelease(PreReleaseKind(match["kind"]), int(match["number"]))
        return Version(
            int(match["major"]),
            int(match["minor"]),
            int(match["patch"]),
            prerelease,
        )

    parts = cleaned.split(".")[:3]
    parts += ["0"] * (3 - len(parts))
    numbers = []
    for part in parts:
        digits = _LEADING_DIGITS_RE.match(part.strip())
        numbers.append(int(digits.group(0)) if digits else 0)

    logger.debug("version_parsed_leniently", text=text, version=".".join(map(str, numbers)))
    return Version(*numbers)


def bump_version(version: Version, bump_type: BumpType) -> Version:
    """Bump a version by the given type, dropping any pre-release tag."""
    return version.bump(bump_type)


def get_highest_bump_type(changesets: Iterable[_HasBumpType]) -> BumpType:
    """Return the highest bump type among the changesets.

    Priority is major > minor > patch. An empty input yields PATCH.
    """
    has_minor = False
    for changeset in changesets:
        if changeset.type is BumpType.MAJOR:
            return BumpType.MAJOR
        if changeset.type is BumpType.MINOR:
            has_minor = True
    return BumpType.MINOR if has_minor else BumpType.PATCH


def next_prerelease(current: PreRelease, target: PreReleaseKind) -> PreRelease:
    """Advance a pre-release tag towards ``target``.

    Same kind increments the counter. Any other kind (later, or earlier
    which starts a new cycle) restarts at 1.
    """
    if target is current.kind:
        return PreRelease(target, current.number + 1)
    return PreRelease(target, 1)


def _coerce_prerelease(directive: PreReleaseKind | str | None) -> PreReleaseKind | None:
    if directive is None or isinstance(directive, PreReleaseKind):
        return directive
    return PreReleaseKind.parse(directive)


def calculate_next_version(
    current: Version | str,
    changesets: Sequence[_HasBumpType],
    prerelease: PreReleaseKind | str | None = None,
) -> Version:
    """Calculate the version produced by applying the pending changesets.

    Args:
        current: Current version
        changesets: Pending changesets
        prerelease: Optional pre-release directive (alpha, beta, rc)

    Returns:
        The next version. When there are no changesets, no directive and
        the current version is stable, ``current`` is returned unchanged.

    Raises:
        InvalidVersionError: If the directive is not alpha, beta or rc
    """
    if isinstance(current, str):
        current = parse_version(current)
    directive = _coerce_prerelease(prerelease)

    if directive is None and current.prerelease is not None:
        # Graduation keeps the numeric core of the pre-release line
        result = current.core
    elif not changesets and directive is None:
        result = current
    elif current.prerelease is not None and directive is not None:
        result = replace(current, prerelease=next_prerelease(current.prerelease, directive))
    else:
        base = current.bump(get_highest_bump_type(changesets)) if changesets else current.core
        result = base.with_prerelease(directive) if directive is not None else base

    logger.debug(
        "version_calculated",
        current=str(current),
        next=str(result),
        changesets=len(changesets),
        prerelease=str(directive) if directive else None,
    )
    return result


def describe_bump(
    current: Version,
    changesets: Sequence[_HasBumpType],
    prerelease: PreReleaseKind | str | None = None,
) -> str:
    """Human readable description of the transition calculate_next_version() makes."""
    directive = _coerce_prerelease(prerelease)
    if directive is not None:
        if current.is_prerelease or not changesets:
            return f"pre-release ({directive})"
        return f"{get_highest_bump_type(changesets)} + {directive}"
    if current.is_prerelease:
        return "stable release"
    if not changesets:
        return "no change"
    return str(get_highest_bump_type(changesets))
