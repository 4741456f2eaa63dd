# src/graphfold/core/config.py
"""
Default settings for graph mapping calls.

Uses Pydantic for validation and Dynaconf for multi-source loading.
Settings are frozen (immutable) after construction. Explicit keyword
arguments to the mapping functions always take precedence over these.
"""

from pathlib import Path
from typing import Literal, Self

from pydantic import BaseModel, Field, model_validator

from graphfold.contracts.enums import EdgeMode


class LocalSettings(BaseModel):
    """Defaults for neighbourhood mapping.

    Example YAML:
        local:
          radius: 2
          mode: all
          min_distance: 1
          workers: 4
    """

    model_config = {"frozen": True, "extra": "forbid"}

    radius: int = Field(default=1, ge=0, description="Maximum number of steps from the centre node")
    mode: EdgeMode = Field(default=EdgeMode.ALL, description="How edges are followed when measuring steps")
    min_distance: int = Field(default=0, ge=0, description="Nodes closer than this are excluded")
    workers: int = Field(default=1, ge=1, description="Threads used to run visitors concurrently")

    @model_validator(mode="after")
    def _validate_distance_window(self) -> Self:
        """min_distance beyond radius would always yield an empty neighbourhood."""
        if self.min_distance > self.radius:
            raise ValueError(f"min_distance ({self.min_distance}) cannot exceed radius ({self.radius})")
        return self


class LoggingSettings(BaseModel):
    """Level and output format applied by graphfold.core.logging.configure_logging()."""

    model_config = {"frozen": True, "extra": "forbid"}

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    json_output: bool = False


class MapSettings(BaseModel):
    """Top-level defaults for mapping calls.

    Example YAML:
        mode: in
        unreachable: true
        local:
          radius: 2
        logging:
          level: DEBUG
    """

    model_config = {"frozen": True, "extra": "forbid"}

    mode: EdgeMode = Field(default=EdgeMode.OUT, description="Edge mode for breadth/depth-first mapping")
    unreachable: bool = Field(default=False, description="Restart the search from unvisited nodes")
    local: LocalSettings = Field(default_factory=LocalSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)


def load_settings(config_path: Path) -> MapSettings:
    """Load settings from YAML file with environment variable overrides.

    Uses Dynaconf for multi-source loading with precedence:
    1. Environment variables (GRAPHFOLD_*) - highest priority
    2. Config file
    3. Defaults from Pydantic schema - lowest priority

    Environment variable format: GRAPHFOLD_LOCAL__RADIUS for nested keys.

    Args:
        config_path: Path to YAML configuration file

    Returns:
        Validated MapSettings instance

    Raises:
        ValidationError: If configuration fails Pydantic validation
        FileNotFoundError: If config file doesn't exist
    """
    from dynaconf import Dynaconf

    # Dynaconf silently accepts missing files
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    dynaconf_settings = Dynaconf(
        envvar_prefix="GRAPHFOLD",
        settings_files=[str(config_path)],
        environments=False,
        load_dotenv=False,
        merge_enabled=True,
    )

    # Dynaconf returns uppercase keys, including nested ones
    internal_keys = {"LOAD_DOTENV", "ENVIRONMENTS", "SETTINGS_FILES"}
    raw_config = {k.lower(): _lower_keys(v) for k, v in dynaconf_settings.as_dict().items() if k not in internal_keys}
    return MapSettings(**raw_config)


def _lower_keys(value: object) -> object:
    if isinstance(value, dict):
        return {str(k).lower(): _lower_keys(v) for k, v in value.items()}
    return value
