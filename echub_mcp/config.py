"""Configuration for EC HUB MCP, read from a YAML file.

The file is looked up at ``$ECHUB_CONFIG`` or ``.echub/config.yaml`` in the
current directory. A missing file means defaults; a file that exists but
cannot be parsed or validated is an error.
"""

import os
from pathlib import Path
from typing import Any

import structlog
import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from echub_mcp.enums import DeleteStrategy, SubtaskPlacement
from echub_mcp.errors import ConfigError
from echub_mcp.models.task import DEFAULT_PROJECT, CurrentUser

logger = structlog.get_logger()

CONFIG_ENV_VAR = "ECHUB_CONFIG"
DEFAULT_CONFIG_PATH = Path(".echub") / "config.yaml"


class HubSettings(BaseModel):
    """Runtime settings for the calendar, task board and bridge."""

    working_days: list[int] = Field(default_factory=lambda: list(range(7)))
    bridge_timeout: float = Field(default=0.1, gt=0, le=5.0)
    delete_strategy: DeleteStrategy = DeleteStrategy.CASCADE_ONE
    subtask_placement: SubtaskPlacement = SubtaskPlacement.NESTED
    default_project: str = DEFAULT_PROJECT
    current_user: CurrentUser = Field(default_factory=CurrentUser)
    seed_fixtures: bool = True

    @field_validator("working_days")
    @classmethod
    def validate_working_days(cls, v: list[int]) -> list[int]:
        if not v:
            raise ValueError("working_days cannot be empty")
        bad = [d for d in v if not 0 <= d <= 6]
        if bad:
            raise ValueError(f"working_days must be in 0..6 (0=Sunday), got {bad}")
        return sorted(set(v))


def config_path() -> Path:
    """Resolve the config file location."""
    env = os.environ.get(CONFIG_ENV_VAR)
    return Path(env) if env else Path.cwd() / DEFAULT_CONFIG_PATH


def load_settings(path: Path | None = None) -> HubSettings:
    """
    Load settings from YAML.

    Args:
        path: Explicit file; defaults to ``config_path()``

    Returns:
        HubSettings (defaults when the file does not exist)

    Raises:
        ConfigError: If the file cannot be read, parsed or validated
    """
    path = path or config_path()
    if not path.exists():
        logger.debug("Config file does not exist, using defaults", config_file=str(path))
        return HubSettings()

    try:
        with open(path, "r") as f:
            raw: Any = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        logger.error("Failed to load config", config_file=str(path), error=str(e))
        raise ConfigError(f"Failed to load config from {path}: {e}") from e

    if not isinstance(raw, dict):
        raise ConfigError(f"Config in {path} must be a mapping, got {type(raw).__name__}")

    try:
        settings = HubSettings.model_validate(raw)
    except ValidationError as e:
        logger.error("Invalid config", config_file=str(path), error=str(e))
        raise ConfigError(f"Invalid config in {path}: {e}") from e

    logger.debug("Config loaded successfully", config_file=str(path), keys=list(raw.keys()))
    return settings
