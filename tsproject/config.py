"""
tsproject.config - YAML config loading and validation.

Handles loading tsproject.yaml and validating the mount and media
parameters the virtual project file is built from.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from tsproject.exceptions import ConfigError

CONFIG_FILENAME = "tsproject.yaml"

# More than 30 minutes of leading padding at 25 fps is never needed.
MAX_BLANK_FRAMES = 45000


class TsProjectConfig(BaseModel):
    """Resolved configuration for a mounted capture."""

    mount_root: Path = Path("/mnt")
    project_path: str = "/project.kdenlive"
    movie_path: str = "/uncut.ts"
    max_blank_frames: int = Field(default=MAX_BLANK_FRAMES, ge=0, le=MAX_BLANK_FRAMES)
    verbose: bool = False

    @field_validator("project_path", "movie_path")
    @classmethod
    def validate_virtual_path(cls, v: str) -> str:
        if not v.startswith("/"):
            raise ValueError("virtual paths must start with '/'")
        if v == "/":
            raise ValueError("virtual path must name a file")
        return v

    @field_validator("project_path")
    @classmethod
    def validate_project_suffix(cls, v: str) -> str:
        if not v.endswith(".kdenlive"):
            raise ValueError("project_path must end with .kdenlive")
        return v


def load_config(path: Path) -> TsProjectConfig:
    """Load and validate configuration.

    Args:
        path: Config file, or a directory containing tsproject.yaml

    Returns:
        Validated configuration

    Raises:
        FileNotFoundError: If no config file exists
        ConfigError: If the file holds invalid values
    """
    config_file = path / CONFIG_FILENAME if path.is_dir() else path
    if not config_file.exists():
        raise FileNotFoundError(f"No {CONFIG_FILENAME} found at {path}")

    with open(config_file) as f:
        raw_config = yaml.safe_load(f) or {}

    if not isinstance(raw_config, dict):
        raise ConfigError(f"{config_file}: expected a mapping at top level")

    try:
        return TsProjectConfig(**raw_config)
    except ValidationError as e:
        raise ConfigError(f"{config_file}: {e}") from e


def create_default_config(mount_root: str = "/mnt") -> dict[str, Any]:
    """Create a default config dict."""
    return {
        "mount_root": mount_root,
        "project_path": "/project.kdenlive",
        "movie_path": "/uncut.ts",
        "max_blank_frames": MAX_BLANK_FRAMES,
        "verbose": False,
    }


def write_config(config: dict[str, Any], path: Path) -> None:
    """Write configuration to a YAML file."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w") as f:
        yaml.dump(config, f, default_flow_style=False, sort_keys=False)
