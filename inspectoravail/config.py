"""
Configuration management using Pydantic models loaded from YAML.
"""

import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, field_validator

from .domain.models import ViewMode
from .domain.schedule_expander import SLOT_INTERVAL_MINUTES
from .domain.timeutils import MINUTES_PER_DAY


class DefaultsConfig(BaseModel):
    """Default settings for availability resolution."""
    slot_interval_minutes: int = SLOT_INTERVAL_MINUTES
    view_mode: ViewMode = Field(default_factory=ViewMode.default)

    @field_validator("slot_interval_minutes")
    @classmethod
    def validate_interval(cls, value: int) -> int:
        """Ensure the step between generated times fits in a day."""
        if not 0 < value <= MINUTES_PER_DAY:
            raise ValueError(
                f"slot_interval_minutes must be between 1 and {MINUTES_PER_DAY}, got {value}"
            )
        return value

    @field_validator("view_mode", mode="before")
    @classmethod
    def validate_view_mode(cls, value: Any) -> ViewMode:
        """Unknown or empty settings fall back to the default view mode."""
        return ViewMode.coerce(value)


class AppConfig(BaseModel):
    """Application configuration."""
    defaults: DefaultsConfig = Field(default_factory=DefaultsConfig)
    log_level: str = "INFO"
    data_file: Path | None = None

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        """Ensure the level is one the logging module knows."""
        level = value.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {value}")
        return level

    @classmethod
    def load_from_yaml(cls, config_path: Path) -> "AppConfig":
        """
        Load configuration from YAML file.

        Args:
            config_path: Path to the YAML config file

        Returns:
            AppConfig instance

        Raises:
            FileNotFoundError: If config file doesn't exist
            ValueError: If config is invalid
        """
        if not config_path.exists():
            raise FileNotFoundError(
                f"Config file not found: {config_path}\n"
                f"Please create a config.yaml file. See config.example.yaml for reference."
            )

        try:
            with open(config_path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as exc:
            raise ValueError(f"Invalid YAML in {config_path}: {exc}") from exc

        if not isinstance(data, dict):
            raise ValueError("Config file must contain a mapping at the root level.")

        return cls(**data)

    @classmethod
    def load_or_default(cls, config_path: Path | None) -> "AppConfig":
        """
        Load an explicitly given config file, or the default one when present.

        Falls back to built-in defaults only when no path was given and no
        ``config.yaml`` exists; an explicit path that is missing still raises.
        """
        if config_path is not None:
            return cls.load_from_yaml(config_path)

        default_path = get_default_config_path()
        if default_path.exists():
            return cls.load_from_yaml(default_path)
        return cls()


def get_default_config_path() -> Path:
    """Get the default configuration file path."""
    # Look for config.yaml in current directory
    current_dir = Path.cwd()
    config_path = current_dir / "config.yaml"

    if not config_path.exists():
        # Try in the project root (parent of the package)
        project_root = Path(__file__).parent.parent
        config_path = project_root / "config.yaml"

    return config_path
