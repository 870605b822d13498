"""
Configuration management for the buildtrigger package.

This module loads settings from a TOML file, the environment and the command
line, and validates them into one immutable TriggerConfig.
"""

from .manager import load_config, merge_settings

from .loader import (
    ENV_KEYS,
    PARAMETER_PREFIX,
    collect_parameters,
    load_environment_settings,
    load_file_settings,
    load_toml_file,
)
from .validators import DEFAULT_SETTINGS, validate_trigger_config

__all__ = [
    # Main interface
    "load_config",
    "merge_settings",
    # Advanced interface
    "ENV_KEYS",
    "PARAMETER_PREFIX",
    "DEFAULT_SETTINGS",
    "collect_parameters",
    "load_environment_settings",
    "load_file_settings",
    "load_toml_file",
    "validate_trigger_config",
]
