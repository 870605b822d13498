"""
Configuration validation.

Turns merged raw settings into a TriggerConfig. Missing required fields are
reported together in a single ConfigError.
"""

import logging
from typing import Any, Dict, Optional

from ..models.config import Credentials, PollPolicy, TriggerConfig
from ..models.runtime import JobRequest
from ..validation import (
    LOG_LEVELS,
    ConfigError,
    validate_base_url,
    validate_enum_choice,
    validate_job_name,
    validate_non_empty_string,
    validate_parameter_name,
    validate_positive_float,
)

logger = logging.getLogger(__name__)

REQUIRED_SETTINGS = {
    "uri": "JENKINS_URI",
    "user": "JENKINS_USER",
    "token": "JENKINS_TOKEN",
    "job": "JENKINS_JOB",
}

DEFAULT_SETTINGS: Dict[str, Any] = {
    "queue_interval": 2,
    "build_interval": 5,
    "timeout": 600,
    "request_timeout": 30,
    "log_level": "INFO",
}


def validate_trigger_config(settings: Dict[str, Any], config_path: Optional[str] = None) -> TriggerConfig:
    """
    Validate merged settings and create a TriggerConfig.

    Args:
        settings: Raw settings keyed as in loader.ENV_KEYS values
        config_path: Path of the TOML file the settings came from, if any

    Returns:
        Validated TriggerConfig instance

    Raises:
        ConfigError: If a required setting is missing or a value is invalid
    """
    missing = [env for key, env in REQUIRED_SETTINGS.items() if settings.get(key) in (None, "")]
    if missing:
        raise ConfigError(
            f"Required setting(s) missing: {', '.join(missing)}",
            field_name=missing[0],
        )

    merged = dict(DEFAULT_SETTINGS)
    merged.update({k: v for k, v in settings.items() if v is not None})

    base_url = validate_base_url(merged["uri"], field_name="JENKINS_URI")
    credentials = Credentials(
        user=validate_non_empty_string(merged["user"], field_name="JENKINS_USER"),
        token=validate_non_empty_string(merged["token"], field_name="JENKINS_TOKEN"),
    )

    parameters = {}
    for name, value in merged.get("parameters", {}).items():
        parameters[validate_parameter_name(name, field_name=f"parameter '{name}'")] = str(value)
    job = JobRequest(
        name=validate_job_name(merged["job"], field_name="JENKINS_JOB"),
        parameters=parameters,
    )

    # A shared TIMEOUT applies to both phases unless a phase sets its own.
    timeout = validate_positive_float(merged["timeout"], field_name="TIMEOUT")
    queue_policy = PollPolicy(
        interval=validate_positive_float(merged["queue_interval"], field_name="QUEUE_POLL_INTERVAL"),
        timeout=validate_positive_float(merged.get("queue_timeout", timeout), field_name="QUEUE_TIMEOUT"),
    )
    build_policy = PollPolicy(
        interval=validate_positive_float(merged["build_interval"], field_name="JOB_POLL_INTERVAL"),
        timeout=validate_positive_float(merged.get("build_timeout", timeout), field_name="JOB_TIMEOUT"),
    )
    for name, policy in (("queue", queue_policy), ("build", build_policy)):
        if policy.interval >= policy.timeout:
            logger.warning(
                f"{name} poll interval {policy.interval:g}s is not shorter than its timeout "
                f"{policy.timeout:g}s; the phase will time out before the first poll"
            )

    request_timeout = validate_positive_float(merged["request_timeout"], field_name="REQUEST_TIMEOUT")
    log_level = validate_enum_choice(
        str(merged["log_level"]), LOG_LEVELS, field_name="LOG_LEVEL", case_sensitive=False
    )

    return TriggerConfig(
        base_url=base_url,
        credentials=credentials,
        job=job,
        queue_policy=queue_policy,
        build_policy=build_policy,
        request_timeout=request_timeout,
        log_level=log_level,
        config_path=config_path,
    )
