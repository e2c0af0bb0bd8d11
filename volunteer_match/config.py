"""Configuration management for Volunteer Match."""

import os
from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, Field, ValidationError

from volunteer_match.errors import ConfigError

# Default paths
DATA_DIR = Path(__file__).parent.parent / "data"
DEFAULT_DB_PATH = DATA_DIR / "volunteers.db"
DEFAULT_CONFIG_PATH = DATA_DIR / "matching.yaml"
LOG_PATH = DATA_DIR / "volunteer_match.log"

# Environment overrides
DB_PATH_ENV = "VOLUNTEER_MATCH_DB"
CONFIG_PATH_ENV = "VOLUNTEER_MATCH_CONFIG"


class WeightsConfig(BaseModel):
    """Points awarded per matching signal."""

    base: float = Field(20.0, ge=0, description="Always awarded to open events")
    skills: float = Field(50.0, ge=0, description="Scaled by fraction of skills matched")
    location: float = Field(30.0, ge=0, description="Awarded on a location match")


class MatchingConfig(BaseModel):
    """Matching engine settings."""

    weights: WeightsConfig = Field(default_factory=WeightsConfig)
    default_limit: Optional[int] = Field(
        None, ge=1, description="Top-N window when the caller gives none"
    )


def resolve_db_path() -> Path:
    """Database path, honouring the VOLUNTEER_MATCH_DB override."""
    override = os.getenv(DB_PATH_ENV)
    return Path(override) if override else DEFAULT_DB_PATH


def resolve_config_path() -> Path:
    """Config path, honouring the VOLUNTEER_MATCH_CONFIG override."""
    override = os.getenv(CONFIG_PATH_ENV)
    return Path(override) if override else DEFAULT_CONFIG_PATH


def load_config(path: Optional[Path] = None) -> MatchingConfig:
    """Load matching configuration from a YAML file.

    Args:
        path: Optional path to config file. Defaults to data/matching.yaml.

    Returns:
        MatchingConfig instance. Returns defaults if the file doesn't exist.

    Raises:
        ConfigError: If the file is not valid YAML or fails validation.
    """
    if path is None:
        path = resolve_config_path()

    if not path.exists():
        return MatchingConfig()

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        return MatchingConfig()

    try:
        return MatchingConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid matching config in {path}: {e}") from e


def save_config(config: MatchingConfig, path: Optional[Path] = None) -> Path:
    """Save matching configuration to a YAML file.

    Args:
        config: MatchingConfig instance to save.
        path: Optional path to save to. Defaults to data/matching.yaml.

    Returns:
        Path where config was saved.
    """
    if path is None:
        path = resolve_config_path()

    path.parent.mkdir(parents=True, exist_ok=True)

    data = config.model_dump(mode="json", exclude_none=True)

    with open(path, "w", encoding="utf-8") as f:
        yaml.dump(data, f, default_flow_style=False, allow_unicode=True, sort_keys=False)

    return path
