"""
Configuration data models.

This module contains the validated, immutable configuration handed to the
lifecycle core: server credentials, per-phase poll policies and the job
request itself.
"""

from dataclasses import dataclass, field
from typing import Optional

from .runtime import JobRequest


@dataclass(frozen=True)
class Credentials:
    """
    Basic-auth credentials attached to every outbound request.
    """

    user: str
    token: str = field(repr=False)

    def as_auth(self) -> tuple:
        """Return the (user, token) pair requests expects for basic auth."""
        return (self.user, self.token)


@dataclass(frozen=True)
class PollPolicy:
    """
    Cadence and overall budget for one watch phase.

    The timeout is measured from the moment the phase starts, so the queue
    wait and the build wait each get their own budget.
    """

    # Seconds between the end of one poll and the start of the next.
    interval: float
    # Seconds from the start of the phase until it is abandoned.
    timeout: float


@dataclass(frozen=True)
class TriggerConfig:
    """
    The root configuration object for a single trigger run.
    """

    # Base URL of the Jenkins server, without trailing slash.
    base_url: str
    credentials: Credentials
    job: JobRequest
    # Policy for waiting on the queue item to become a build.
    queue_policy: PollPolicy
    # Policy for waiting on the build to finish.
    build_policy: PollPolicy
    # Per-request HTTP timeout in seconds.
    request_timeout: float = 30.0
    log_level: str = "INFO"
    # Set when the configuration came from a TOML file.
    config_path: Optional[str] = None
