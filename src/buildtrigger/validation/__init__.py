"""
Validation and error handling for the buildtrigger package.

This module provides input validation and the error taxonomy shared by the
configuration layer, the lifecycle core and the command-line front end.
"""

from .exceptions import (
    ErrorSeverity,
    TriggerError,
    ValidationError,
    ConfigError,
    SubmissionError,
    StartError,
    PhaseTimeoutError,
    JobFailureError,
    TransportError,
    handle_error,
    handle_config_error,
)

from .validators import (
    LOG_LEVELS,
    parse_key_value,
    validate_base_url,
    validate_enum_choice,
    validate_job_name,
    validate_non_empty_string,
    validate_parameter_name,
    validate_positive_float,
)

__all__ = [
    # Errors
    "ErrorSeverity",
    "TriggerError",
    "ValidationError",
    "ConfigError",
    "SubmissionError",
    "StartError",
    "PhaseTimeoutError",
    "JobFailureError",
    "TransportError",
    "handle_error",
    "handle_config_error",
    # Validators
    "LOG_LEVELS",
    "parse_key_value",
    "validate_base_url",
    "validate_enum_choice",
    "validate_job_name",
    "validate_non_empty_string",
    "validate_parameter_name",
    "validate_positive_float",
]
