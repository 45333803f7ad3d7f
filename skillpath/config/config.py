"""
Configuration for skillpath.

Settings come from a YAML file and can be overridden with SKILLPATH_*
environment variables (".env" files are honoured).
"""

import os
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, field_validator

from skillpath.models import SourceTier

# Load .env
load_dotenv()

ENV_PREFIX = "SKILLPATH_"
BUILTIN_DIR = Path(__file__).resolve().parent.parent / "builtin"


def _split_locations(value: Any) -> Any:
    if isinstance(value, str):
        return [part.strip() for part in value.split(",") if part.strip()]
    return value


class TierLocations(BaseModel):
    """Directories scanned for each tier, in scan order."""

    model_config = ConfigDict(coerce_numbers_to_str=True)

    project: List[str] = Field(
        default_factory=lambda: [".claude/commands", ".claude/skills"],
        description="Project-level locations, relative to project_root",
    )
    organization: List[str] = Field(
        default_factory=lambda: [
            "~/.config/skillpath/commands",
            "~/.config/skillpath/skills",
        ],
        description="Organization-level locations",
    )
    builtin: List[str] = Field(
        default_factory=lambda: [str(BUILTIN_DIR)],
        description="Built-in locations shipped with the package",
    )

    @field_validator("project", "organization", "builtin", mode="before")
    @classmethod
    def split_comma_separated(cls, v: Any) -> Any:
        """Accept "a,b" as well as a list."""
        return _split_locations(v)


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = Field(default="WARNING", description="Log level")
    file: Optional[str] = Field(default=None, description="Log file path; console only if unset")
    max_bytes: int = Field(default=10485760, description="Max log file size (10MB)")
    backup_count: int = Field(default=5, description="Rotated log files to keep")

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"Invalid log level: {v}. Must be one of {valid_levels}")
        return v.upper()


class Config(BaseModel):
    """skillpath configuration."""

    model_config = ConfigDict(coerce_numbers_to_str=True)

    project_root: str = Field(default=".", description="Root of the current project")
    tiers: TierLocations = Field(default_factory=TierLocations)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    def tier_paths(self) -> Dict[SourceTier, List[Path]]:
        """Resolved directories per tier.

        "~" is expanded everywhere; relative project locations are taken
        relative to project_root.
        """
        root = Path(self.project_root).expanduser()

        def _resolve(location: str, relative_to: Optional[Path]) -> Path:
            path = Path(location).expanduser()
            if relative_to is not None and not path.is_absolute():
                path = relative_to / path
            return path

        return {
            SourceTier.PROJECT: [_resolve(p, root) for p in self.tiers.project],
            SourceTier.ORGANIZATION: [_resolve(p, None) for p in self.tiers.organization],
            SourceTier.BUILTIN: [_resolve(p, None) for p in self.tiers.builtin],
        }


class ConfigManager:
    """
    Configuration manager.

    Loads configuration from a YAML file with environment variable overrides.
    """

    def __init__(self, config_path: Optional[str] = None):
        """
        Args:
            config_path: YAML config file path; searched for when omitted
        """
        self.config_path = config_path or self._find_config_file()
        self._config: Optional[Config] = None

    @staticmethod
    def _find_config_file() -> str:
        """
        Find the config file.

        Searched in order:
        1. ./config/settings.yaml
        2. ./skillpath.yaml
        3. ~/.config/skillpath/settings.yaml
        """
        possible_paths = [
            "./config/settings.yaml",
            "./skillpath.yaml",
            os.path.expanduser("~/.config/skillpath/settings.yaml"),
        ]

        for path in possible_paths:
            if os.path.exists(path):
                return path

        return "./config/settings.yaml"

    def load_yaml(self) -> Dict[str, Any]:
        """Load the YAML file, or {} when it does not exist."""
        if not os.path.exists(self.config_path):
            return {}

        with open(self.config_path, "r", encoding="utf-8") as f:
            return yaml.safe_load(f) or {}

    def _override_from_env(self, config_dict: Dict[str, Any]) -> Dict[str, Any]:
        """
        Override configuration from environment variables.

        Nested keys use "__", for example:
        SKILLPATH_PROJECT_ROOT=/work/app
        SKILLPATH_TIERS__ORGANIZATION=/srv/org/commands,/srv/org/skills
        SKILLPATH_LOGGING__LEVEL=DEBUG
        """
        result = config_dict.copy()

        for env_key, env_value in os.environ.items():
            if env_key.startswith(ENV_PREFIX):
                key = env_key[len(ENV_PREFIX):]
                key = key.replace("__", ".").lower()
                parts = key.split(".")

                current = result
                for part in parts[:-1]:
                    if not isinstance(current.get(part), dict):
                        current[part] = {}
                    else:
                        current[part] = dict(current[part])
                    current = current[part]
                # Raw strings; pydantic coerces them per field type
                current[parts[-1]] = env_value

        return result

    def load(self) -> Config:
        """Load configuration (cached after the first call)."""
        if self._config is not None:
            return self._config

        yaml_config = self.load_yaml()
        merged_config = self._override_from_env(yaml_config)

        self._config = Config.model_validate(merged_config)
        return self._config

    def reload(self) -> Config:
        self._config = None
        return self.load()


# Global config manager
_config_manager: Optional[ConfigManager] = None


def get_config(config_path: Optional[str] = None) -> Config:
    """
    Get the global configuration.

    Args:
        config_path: Optional config file path

    Returns:
        Config object
    """
    global _config_manager

    if _config_manager is None:
        _config_manager = ConfigManager(config_path)

    return _config_manager.load()


def get_config_manager() -> ConfigManager:
    """Get the global configuration manager."""
    global _config_manager

    if _config_manager is None:
        _config_manager = ConfigManager()

    return _config_manager


def reload_config() -> Config:
    """Reload the global configuration."""
    global _config_manager

    if _config_manager is not None:
        return _config_manager.reload()

    return get_config()
