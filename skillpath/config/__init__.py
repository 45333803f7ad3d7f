"""
Configuration package.

Exports the config models and accessors.
"""

from .config import (
    Config,
    ConfigManager,
    LoggingConfig,
    TierLocations,
    get_config,
    get_config_manager,
    reload_config,
)

__all__ = [
    "Config",
    "ConfigManager",
    "LoggingConfig",
    "TierLocations",
    "get_config",
    "get_config_manager",
    "reload_config",
]
