"""
Configuration assembly.

Builds the single TriggerConfig a run uses by layering the configuration
sources, lowest precedence first: built-in defaults, the TOML file, the
environment, then explicit overrides from the command line.
"""

import logging
import os
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from ..models.config import TriggerConfig
from ..validation import ConfigError, ValidationError
from .loader import load_environment_settings, load_file_settings
from .validators import validate_trigger_config

logger = logging.getLogger(__name__)


def merge_settings(*layers: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Merge settings layers; later layers win.

    Build parameters are merged key by key rather than replaced wholesale, so
    a PARAMETER_ variable can override one value from the file.
    """
    merged: Dict[str, Any] = {}
    parameters: Dict[str, str] = {}
    for layer in layers:
        for key, value in layer.items():
            if key == "parameters":
                parameters.update(value)
            elif value is not None:
                merged[key] = value
    merged["parameters"] = parameters
    return merged


def load_config(
    config_path: Optional[Path] = None,
    environ: Optional[Mapping[str, str]] = None,
    overrides: Optional[Mapping[str, Any]] = None,
) -> TriggerConfig:
    """
    Load and validate the configuration for one trigger run.

    Args:
        config_path: Optional TOML file
        environ: Environment mapping, defaults to os.environ
        overrides: Settings given on the command line

    Returns:
        Validated TriggerConfig

    Raises:
        ConfigError: If a source cannot be read or the result is invalid
    """
    environ = os.environ if environ is None else environ

    layers = []
    if config_path is not None:
        layers.append(load_file_settings(Path(config_path)))
    layers.append(load_environment_settings(environ))
    if overrides:
        layers.append(overrides)

    settings = merge_settings(*layers)
    try:
        config = validate_trigger_config(settings, config_path=str(config_path) if config_path else None)
    except ConfigError:
        raise
    except ValidationError as e:
        raise ConfigError(e.message, field_name=e.field_name, value=e.value) from e

    logger.debug(
        f"Configuration loaded: job={config.job.name} uri={config.base_url} "
        f"parameters={len(config.job.parameters)}"
    )
    return config
