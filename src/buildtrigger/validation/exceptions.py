"""
Exception taxonomy and error handling helpers.

Every error that can abort a trigger run derives from TriggerError and carries
the process exit code the command-line front end maps it to. The lifecycle
code only raises; logging and exit-code mapping happen once, at the top.
"""

import logging
from enum import Enum
from typing import Any, Optional, Union

from ..models.runtime import TerminalStatus

logger = logging.getLogger(__name__)


class ErrorSeverity(Enum):
    """Severity levels for error handling."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class TriggerError(Exception):
    """Base class for every error that terminates a trigger run."""

    exit_code = 1

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(TriggerError):
    """
    Exception raised when a single value fails validation.

    Raised by the functions in validators.py; the configuration layer lets it
    propagate as-is since it is already a ConfigError in disguise.
    """

    exit_code = 2

    def __init__(self, message: str, field_name: Optional[str] = None,
                 value: Any = None, severity: ErrorSeverity = ErrorSeverity.ERROR):
        super().__init__(message)
        self.field_name = field_name
        self.value = value
        self.severity = severity


class ConfigError(ValidationError):
    """A required configuration input is missing or unusable."""


class SubmissionError(TriggerError):
    """The build request was not accepted with a usable queue location."""

    exit_code = 3

    def __init__(self, message: str, status_code: Optional[int] = None,
                 location: Optional[str] = None):
        super().__init__(message)
        self.status_code = status_code
        self.location = location


class StartError(TriggerError):
    """The queue item was allocated a build but no build number could be read."""

    exit_code = 4

    def __init__(self, message: str, queue_url: Optional[str] = None):
        super().__init__(message)
        self.queue_url = queue_url


class PhaseTimeoutError(TriggerError, TimeoutError):
    """A watch phase ran past its deadline."""

    exit_code = 5

    def __init__(self, phase: str, timeout: float, elapsed: float):
        super().__init__(f"Timeout elapsed while {phase} ({elapsed:.1f}s of {timeout:g}s)")
        self.phase = phase
        self.timeout = timeout
        self.elapsed = elapsed

    @property
    def status(self) -> TerminalStatus:
        return TerminalStatus.TIMED_OUT


class JobFailureError(TriggerError):
    """The remote build concluded with FAILURE or ABORTED."""

    exit_code = 1

    def __init__(self, job_name: str, build_id: int, result: str,
                 console_url: Optional[str] = None):
        super().__init__(f"Job: {job_name} Id: {build_id} {result}")
        self.job_name = job_name
        self.build_id = build_id
        self.result = result
        self.console_url = console_url

    @property
    def aborted(self) -> bool:
        return self.result == "ABORTED"

    @property
    def status(self) -> TerminalStatus:
        return TerminalStatus.ABORTED if self.aborted else TerminalStatus.FAILURE


class TransportError(TriggerError):
    """An HTTP exchange with the server failed outright."""

    exit_code = 6

    def __init__(self, message: str, url: Optional[str] = None,
                 status_code: Optional[int] = None):
        super().__init__(message)
        self.url = url
        self.status_code = status_code


def handle_error(
    error: Exception,
    context: str,
    severity: Union[ErrorSeverity, str] = ErrorSeverity.ERROR,
    reraise: bool = True,
    logger: Optional[logging.Logger] = None
) -> None:
    """
    Handle errors with consistent logging and optional re-raising.

    Args:
        error: The exception that occurred
        context: Context description of where the error occurred
        severity: Severity level for logging
        reraise: Whether to re-raise the exception after logging
        logger: Logger instance to use (defaults to module logger)
    """
    effective_logger = logger or globals()['logger']

    error_msg = f"Error in {context}: {error}"

    if isinstance(severity, str):
        severity_str = severity.lower()
    else:
        severity_str = severity.value

    if severity_str == "debug":
        effective_logger.debug(error_msg, exc_info=True)
    elif severity_str == "info":
        effective_logger.info(error_msg)
    elif severity_str == "warning":
        effective_logger.warning(error_msg)
    elif severity_str == "error":
        effective_logger.error(error_msg)
    elif severity_str == "critical":
        effective_logger.critical(error_msg, exc_info=True)

    if reraise:
        raise error


def handle_config_error(error: Exception, context: str, **kwargs) -> None:
    """Handle configuration-related errors."""
    handle_error(error, f"config {context}", **kwargs)
