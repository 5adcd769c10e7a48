"""Configuration management for divsel."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, Field, ValidationError, field_validator

from divsel.exceptions import ConfigError

DIVSEL_DIR = ".divsel"
CONFIG_FILE = "config.json"


class SelectionConfig(BaseModel):
    """Selection engine configuration."""

    threshold: float = 1e-2
    strict_dimensions: bool = False  # Raise on mismatched embedding sizes

    @field_validator("threshold")
    @classmethod
    def _non_negative(cls, value: float) -> float:
        if value < 0:
            raise ValueError("threshold must be >= 0")
        return value


class OutputConfig(BaseModel):
    """CLI output configuration."""

    format: Literal["table", "json"] = "table"
    show_trajectory: bool = False


class ProjectConfig(BaseModel):
    """Full project configuration."""

    name: str = ""
    selection: SelectionConfig = Field(default_factory=SelectionConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)


def find_project_root(start: Path | None = None) -> Path | None:
    """Walk up from `start` looking for a .divsel directory."""
    current = (start or Path.cwd()).resolve()
    while current != current.parent:
        if (current / DIVSEL_DIR).is_dir():
            return current
        current = current.parent
    if (current / DIVSEL_DIR).is_dir():
        return current
    return None


def get_divsel_dir(root: Path) -> Path:
    """Get the .divsel directory for a project root."""
    return root / DIVSEL_DIR


def load_config(root: Path) -> ProjectConfig:
    """Load configuration from .divsel/config.json."""
    config_path = get_divsel_dir(root) / CONFIG_FILE
    if not config_path.exists():
        return ProjectConfig(name=root.name)
    try:
        data = json.loads(config_path.read_text())
        return ProjectConfig(**data)
    except (json.JSONDecodeError, ValidationError, TypeError) as e:
        raise ConfigError(f"Invalid config file {config_path}: {e}") from e


def save_config(root: Path, config: ProjectConfig) -> None:
    """Save configuration to .divsel/config.json."""
    ds_dir = get_divsel_dir(root)
    ds_dir.mkdir(parents=True, exist_ok=True)
    config_path = ds_dir / CONFIG_FILE
    config_path.write_text(json.dumps(config.model_dump(), indent=2))


def set_config_value(config: ProjectConfig, key: str, value: Any) -> ProjectConfig:
    """Set a nested config value using dot notation (e.g., 'selection.threshold')."""
    parts = key.split(".")
    data = config.model_dump()
    target = data
    for part in parts[:-1]:
        if part not in target or not isinstance(target[part], dict):
            raise ConfigError(f"Invalid config key: {key}")
        target = target[part]
    if parts[-1] not in target:
        raise ConfigError(f"Invalid config key: {key}")
    target[parts[-1]] = value
    try:
        return ProjectConfig(**data)
    except ValidationError as e:
        raise ConfigError(f"Invalid value for {key}: {value!r}") from e
