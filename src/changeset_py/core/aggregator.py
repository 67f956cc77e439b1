"""Collection of pending changesets for a single release."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from changeset_py.core.version import BumpType, get_highest_bump_type

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

    from changeset_py.core.changeset import Changeset
    from changeset_py.exceptions import ChangesetError


class PendingChangesets:
    """Ordered set of changesets owned by one release cycle.

    Order is discovery order. It only matters for rendering. Removal is
    all-or-nothing and happens once a release has been applied.
    """

    def __init__(self, changesets: Iterable[Changeset] = ()) -> None:
        self._changesets: list[Changeset] = list(changesets)

    def __len__(self) -> int:
        return len(self._changesets)

    def __iter__(self) -> Iterator[Changeset]:
        return iter(self._changesets)

    def __bool__(self) -> bool:
        return bool(self._changesets)

    def add(self, changeset: Changeset) -> None:
        self._changesets.append(changeset)

    def all(self) -> list[Changeset]:
        return list(self._changesets)

    def clear(self) -> list[Changeset]:
        """Remove every changeset and return the removed records."""
        removed, self._changesets = self._changesets, []
        return removed

    def highest_bump(self) -> BumpType:
        return get_highest_bump_type(self._changesets)

    def by_type(self) -> dict[BumpType, list[Changeset]]:
        """Group changesets by bump type, highest priority first."""
        grouped: dict[BumpType, list[Changeset]] = {
            bump_type: [] for bump_type in sorted(BumpType, reverse=True)
        }
        for changeset in self._changesets:
            grouped[changeset.type].append(changeset)
        return grouped


@dataclass
class LoadResult:
    """Outcome of reading a directory of changeset files.

    Invalid files never abort loading; they are reported in ``errors`` as
    ``(file name, error)`` pairs.
    """

    changesets: list[Changeset] = field(default_factory=list)
    errors: list[tuple[str, ChangesetError]] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors

    @property
    def total(self) -> int:
        return len(self.changesets) + len(self.errors)

    def pending(self) -> PendingChangesets:
        return PendingChangesets(self.changesets)
