"""
Configuration source loading utilities.

This module reads raw, unvalidated settings from the three places a run can
be configured: an optional TOML file, the process environment, and the
command line. Each loader returns a flat dictionary using the same keys so the
manager can layer them.
"""

import logging
import tomllib
from pathlib import Path
from typing import Any, Dict, Mapping

from ..validation import ConfigError, ErrorSeverity, handle_config_error

logger = logging.getLogger(__name__)

# Environment variable -> settings key
ENV_KEYS = {
    "JENKINS_URI": "uri",
    "JENKINS_USER": "user",
    "JENKINS_TOKEN": "token",
    "JENKINS_JOB": "job",
    "QUEUE_POLL_INTERVAL": "queue_interval",
    "JOB_POLL_INTERVAL": "build_interval",
    "TIMEOUT": "timeout",
    "QUEUE_TIMEOUT": "queue_timeout",
    "JOB_TIMEOUT": "build_timeout",
    "REQUEST_TIMEOUT": "request_timeout",
    "LOG_LEVEL": "log_level",
}

PARAMETER_PREFIX = "PARAMETER_"

# TOML table -> {toml key: settings key}
TOML_KEYS = {
    "jenkins": {
        "uri": "uri",
        "user": "user",
        "token": "token",
        "job": "job",
    },
    "polling": {
        "queue_interval": "queue_interval",
        "build_interval": "build_interval",
        "timeout": "timeout",
        "queue_timeout": "queue_timeout",
        "build_timeout": "build_timeout",
        "request_timeout": "request_timeout",
    },
    "logging": {
        "level": "log_level",
    },
}


def load_toml_file(file_path: Path, description: str = "configuration file") -> Dict[str, Any]:
    """
    Load and parse a TOML file with error handling.

    Args:
        file_path: Path to the TOML file to load
        description: Human-readable description for error messages

    Returns:
        Parsed TOML data as a dictionary

    Raises:
        ConfigError: If the file doesn't exist or is malformed
    """
    logger.info(f"Loading {description} from: {file_path}")

    if not file_path.exists():
        raise ConfigError(f"{description} not found: {file_path}", field_name="config", value=str(file_path))

    try:
        with open(file_path, "rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        handle_config_error(
            error=e,
            context=f"parsing {description}",
            severity=ErrorSeverity.DEBUG,
            reraise=False,
            logger=logger
        )
        raise ConfigError(f"{description} is not valid TOML: {e}", field_name="config", value=str(file_path)) from e
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigError(f"{description} could not be read: {e}", field_name="config", value=str(file_path)) from e


def load_file_settings(file_path: Path) -> Dict[str, Any]:
    """
    Flatten a TOML configuration file into settings keys.

    Unknown tables and keys are ignored with a warning so a typo does not
    silently look like a missing value.
    """
    data = load_toml_file(file_path)
    settings: Dict[str, Any] = {}

    for table, keys in TOML_KEYS.items():
        section = data.get(table, {})
        if not isinstance(section, dict):
            raise ConfigError(f"[{table}] must be a table", field_name=table, value=section)
        for toml_key, value in section.items():
            if toml_key not in keys:
                logger.warning(f"Ignoring unknown key '{toml_key}' in [{table}] of {file_path}")
                continue
            settings[keys[toml_key]] = value

    parameters = data.get("parameters", {})
    if not isinstance(parameters, dict):
        raise ConfigError("[parameters] must be a table", field_name="parameters", value=parameters)
    if parameters:
        settings["parameters"] = {str(k): _stringify(v) for k, v in parameters.items()}

    for table in data:
        if table not in TOML_KEYS and table != "parameters":
            logger.warning(f"Ignoring unknown table [{table}] in {file_path}")

    return settings


def load_environment_settings(environ: Mapping[str, str]) -> Dict[str, Any]:
    """
    Read settings and PARAMETER_* build parameters from an environment mapping.

    Args:
        environ: Usually os.environ; any mapping works

    Returns:
        Settings dictionary containing only the variables that are set
    """
    settings: Dict[str, Any] = {}
    for env_name, key in ENV_KEYS.items():
        if env_name in environ:
            settings[key] = environ[env_name]

    parameters = collect_parameters(environ)
    if parameters:
        settings["parameters"] = parameters
    return settings


def collect_parameters(environ: Mapping[str, str], prefix: str = PARAMETER_PREFIX) -> Dict[str, str]:
    """
    Collect build parameters from variables named PARAMETER_<NAME>.

    The prefix is stripped; a bare 'PARAMETER_' with no name is skipped.
    """
    parameters = {}
    for name, value in environ.items():
        if name.startswith(prefix) and len(name) > len(prefix):
            parameters[name[len(prefix):]] = value
    return parameters


def _stringify(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)
