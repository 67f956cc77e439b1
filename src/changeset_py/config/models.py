"""Configuration models.

The configuration lives in ``.changes/config.json``. Keys use camelCase on
disk and snake_case in Python::

    {
        "baseBranch": "main",
        "changelog": true,
        "repository": "https://github.com/acme/widgets",
        "sections": {"minor": "New Features"},
        "releaseBranchPrefix": "changeset-release/",
        "versionPrefix": "v"
    }
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from changeset_py.core.version import BumpType, Version

DEFAULT_SECTIONS: dict[BumpType, str] = {
    BumpType.MAJOR: "Breaking Changes",
    BumpType.MINOR: "Features",
    BumpType.PATCH: "Fixes",
}


def merge_sections(overrides: dict[str, str] | None) -> dict[str, str]:
    """Merge user section headings over the defaults."""
    merged = {str(bump_type): heading for bump_type, heading in DEFAULT_SECTIONS.items()}
    for key, heading in (overrides or {}).items():
        merged[str(key).strip().lower()] = heading
    return merged


class ChangesetConfig(BaseModel):
    """Settings for one project, read once per command invocation."""

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        alias_generator=to_camel,
    )

    base_branch: str = "main"
    changelog: bool = True
    changelog_path: Path = Path("CHANGELOG.md")
    repository: str | None = None
    sections: dict[BumpType, str] = Field(default_factory=lambda: dict(DEFAULT_SECTIONS))
    release_branch_prefix: str = "changeset-release/"
    version_prefix: str = ""

    @field_validator("sections", mode="before")
    @classmethod
    def _merge_default_sections(cls, value: Any) -> Any:
        if value is None or isinstance(value, dict):
            return merge_sections(value)
        return value

    @field_validator("repository")
    @classmethod
    def _normalize_repository(cls, value: str | None) -> str | None:
        if value is None:
            return None
        return value.strip().rstrip("/") or None

    def section_heading(self, bump_type: BumpType) -> str:
        """Heading for a bump type, falling back to the capitalized type name."""
        return self.sections.get(bump_type) or str(bump_type).capitalize()

    def tag_name(self, version: Version) -> str:
        return f"{self.version_prefix}{version}"

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True, indent=4) + "\n"
