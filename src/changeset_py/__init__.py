"""changeset-py: versions and changelogs from individual changeset files."""

from __future__ import annotations

__version__ = "0.1.0"
