"""Configuration discovery and loading.

The project is considered initialized when ``.changes/config.json``
exists. pyproject.toml is read for project metadata only.
"""

from __future__ import annotations

import tomllib
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from changeset_py.config.models import ChangesetConfig
from changeset_py.exceptions import (
    ConfigValidationError,
    NotInitializedError,
    ProjectError,
)
from changeset_py.logging import get_logger

logger = get_logger(__name__)

CHANGES_DIR = ".changes"
CONFIG_FILE = "config.json"


def get_changes_dir(project_path: Path) -> Path:
    return project_path / CHANGES_DIR


def get_config_path(project_path: Path) -> Path:
    return get_changes_dir(project_path) / CONFIG_FILE


def load_config(project_path: Path | None = None) -> ChangesetConfig:
    """Load configuration for a project.

    Args:
        project_path: Project root (defaults to the current directory)

    Returns:
        Validated configuration, with defaults for missing keys

    Raises:
        NotInitializedError: If .changes/config.json does not exist
        ConfigValidationError: If the file is not valid JSON or fails validation
    """
    project_path = project_path or Path.cwd()
    config_path = get_config_path(project_path)

    if not config_path.is_file():
        raise NotInitializedError(
            f"Changesets not initialized in {project_path}. Run 'changeset init' first."
        )

    try:
        config = ChangesetConfig.model_validate_json(config_path.read_text(encoding="utf-8"))
    except ValidationError as e:
        raise ConfigValidationError(f"Invalid {config_path}: {e}") from e

    logger.debug("config_loaded", path=str(config_path))
    return config


def save_config(config: ChangesetConfig, project_path: Path) -> Path:
    """Write configuration to .changes/config.json, creating the directory."""
    config_path = get_config_path(project_path)
    config_path.parent.mkdir(parents=True, exist_ok=True)
    config_path.write_text(config.to_json(), encoding="utf-8")
    return config_path


def load_pyproject_toml(path: Path) -> dict[str, Any]:
    """Parse a pyproject.toml file.

    Raises:
        ProjectError: If the file is missing or not valid TOML
    """
    try:
        with path.open("rb") as f:
            return tomllib.load(f)
    except FileNotFoundError as e:
        raise ProjectError(f"pyproject.toml not found: {path}") from e
    except tomllib.TOMLDecodeError as e:
        raise ProjectError(f"Invalid TOML in {path}: {e}") from e


def get_project_name(project_path: Path) -> str:
    """Name from ``[project]`` or ``[tool.poetry]``; ``"unknown"`` if absent."""
    pyproject_path = project_path / "pyproject.toml"
    if not pyproject_path.is_file():
        return "unknown"

    data = load_pyproject_toml(pyproject_path)
    name = data.get("project", {}).get("name") or (
        data.get("tool", {}).get("poetry", {}).get("name")
    )
    return name or "unknown"
