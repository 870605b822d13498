"""
Validation functions for configuration values.

Each validator returns the normalized value or raises ValidationError naming
the offending field.
"""

import re
from typing import Any, List, Optional, Tuple
from urllib.parse import urlparse

from .exceptions import ValidationError

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def validate_positive_float(
    value: Any,
    min_value: float = 0.0,
    max_value: Optional[float] = None,
    field_name: str = "value",
    exclusive_min: bool = True
) -> float:
    """
    Validate that a value is a positive number of seconds.

    Args:
        value: Value to validate
        min_value: Lower bound
        max_value: Maximum allowed value (inclusive), None for no limit
        field_name: Name of the field being validated
        exclusive_min: Whether min_value itself is rejected

    Returns:
        Validated float value

    Raises:
        ValidationError: If validation fails
    """
    if isinstance(value, bool):
        raise ValidationError(
            f"{field_name} must be a valid number, got {value}",
            field_name=field_name,
            value=value
        )
    try:
        float_value = float(value)
    except (ValueError, TypeError):
        raise ValidationError(
            f"{field_name} must be a valid number, got {value}",
            field_name=field_name,
            value=value
        )
    if float_value != float_value or float_value in (float("inf"), float("-inf")):
        raise ValidationError(
            f"{field_name} must be finite, got {value}",
            field_name=field_name,
            value=value
        )
    too_small = float_value <= min_value if exclusive_min else float_value < min_value
    if too_small:
        op = ">" if exclusive_min else ">="
        raise ValidationError(
            f"{field_name} must be {op} {min_value}, got {float_value}",
            field_name=field_name,
            value=value
        )
    if max_value is not None and float_value > max_value:
        raise ValidationError(
            f"{field_name} must be <= {max_value}, got {float_value}",
            field_name=field_name,
            value=value
        )
    return float_value


def validate_non_empty_string(value: Any, field_name: str = "value") -> str:
    """Validate that a value is a string with visible content, stripped."""
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(
            f"{field_name} must be a non-empty string",
            field_name=field_name,
            value=value
        )
    return value.strip()


def validate_base_url(value: Any, field_name: str = "url") -> str:
    """
    Validate a server base URL.

    Args:
        value: URL to validate
        field_name: Name of the field being validated

    Returns:
        The URL without trailing slashes

    Raises:
        ValidationError: If the URL is not absolute http(s)
    """
    url = validate_non_empty_string(value, field_name=field_name)
    parsed = urlparse(url)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise ValidationError(
            f"{field_name} must be an absolute http(s) URL, got {url}",
            field_name=field_name,
            value=value
        )
    return url.rstrip("/")


def validate_job_name(value: Any, field_name: str = "job") -> str:
    """
    Validate a job name.

    Folder jobs may be given as 'folder/job/name', the same path Jenkins
    uses under /job/. Leading and trailing slashes are dropped.
    """
    name = validate_non_empty_string(value, field_name=field_name).strip("/")
    if not name or re.search(r"\s", name):
        raise ValidationError(
            f"{field_name} must not be empty or contain whitespace: {value!r}",
            field_name=field_name,
            value=value
        )
    return name


def validate_parameter_name(value: Any, field_name: str = "parameter") -> str:
    """Validate a build parameter name."""
    if not isinstance(value, str) or not value or "=" in value:
        raise ValidationError(
            f"{field_name} must be a non-empty name without '=', got {value!r}",
            field_name=field_name,
            value=value
        )
    return value


def validate_enum_choice(
    value: Any,
    valid_choices: List[str],
    field_name: str = "value",
    case_sensitive: bool = True
) -> str:
    """
    Validate that a value is one of the allowed choices.

    Args:
        value: Value to validate
        valid_choices: List of valid choices
        field_name: Name of the field being validated
        case_sensitive: Whether comparison should be case sensitive

    Returns:
        The matching entry from valid_choices

    Raises:
        ValidationError: If value is not in valid choices
    """
    if not isinstance(value, str):
        raise ValidationError(
            f"{field_name} must be a string, got {type(value).__name__}",
            field_name=field_name,
            value=value
        )

    for choice in valid_choices:
        if value == choice or (not case_sensitive and value.lower() == choice.lower()):
            return choice

    raise ValidationError(
        f"{field_name} must be one of {valid_choices}, got '{value}'",
        field_name=field_name,
        value=value
    )


def parse_key_value(item: str, field_name: str = "parameter") -> Tuple[str, str]:
    """
    Split a NAME=VALUE pair.

    Only the first '=' separates, so values may contain '='.
    """
    name, sep, value = item.partition("=")
    if not sep:
        raise ValidationError(
            f"{field_name} must look like NAME=VALUE, got {item!r}",
            field_name=field_name,
            value=item
        )
    return validate_parameter_name(name, field_name=field_name), value
