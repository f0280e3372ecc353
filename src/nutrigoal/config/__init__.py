"""Configuration management."""

from nutrigoal.config.settings import (
    ConfigError,
    OutputConfig,
    ScoringConfig,
    ScoringWeights,
    Settings,
    TargetsConfig,
    default_config_path,
    get_settings,
    reload_settings,
)

__all__ = [
    "ConfigError",
    "OutputConfig",
    "ScoringConfig",
    "ScoringWeights",
    "Settings",
    "TargetsConfig",
    "default_config_path",
    "get_settings",
    "reload_settings",
]
