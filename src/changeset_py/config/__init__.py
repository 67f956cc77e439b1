"""Configuration management for changeset-py."""

from __future__ import annotations

from changeset_py.config.loader import load_config, save_config
from changeset_py.config.models import DEFAULT_SECTIONS, ChangesetConfig

__all__ = [
    "DEFAULT_SECTIONS",
    "ChangesetConfig",
    "load_config",
    "save_config",
]
