"""
Lifecycle event observers.

The lifecycle stages report progress by calling methods on an observer rather
than logging directly. LifecycleObserver ignores everything; LoggingObserver
turns events into log lines. Observers must not raise: an observer never
changes whether a run succeeds.
"""

import logging
from typing import Optional

from ..models.runtime import BuildHandle, JobRequest, Phase, QueueLocation, TerminalStatus

logger = logging.getLogger(__name__)


class LifecycleObserver:
    """Receives lifecycle events. Every hook is a no-op by default."""

    def submitting(self, job: JobRequest, url: str) -> None:
        pass

    def submitted(self, location: QueueLocation) -> None:
        pass

    def poll_attempt(self, phase: Phase, attempt: int, elapsed: float) -> None:
        pass

    def queue_pending(self, location: QueueLocation) -> None:
        pass

    def build_started(self, handle: BuildHandle) -> None:
        pass

    def build_in_progress(self, handle: BuildHandle, result: Optional[str], interval: float) -> None:
        pass

    def build_finished(self, handle: BuildHandle, status: TerminalStatus, console_url: str) -> None:
        pass

    def phase_timed_out(self, phase: Phase, elapsed: float) -> None:
        pass


class LoggingObserver(LifecycleObserver):
    """
    Writes lifecycle events to a logger.

    Routine progress goes to DEBUG so the default INFO level shows only the
    milestones of a run.
    """

    def __init__(self, log: Optional[logging.Logger] = None):
        self.log = log or logger

    def submitting(self, job: JobRequest, url: str) -> None:
        self.log.debug(f"Posting job here: {url}")
        if job.has_parameters:
            self.log.info("Query parameters:")
            for key in sorted(job.parameters):
                self.log.info(f'{key}="{job.parameters[key]}"')

    def submitted(self, location: QueueLocation) -> None:
        self.log.info(f"Request added at location: {location.url}")
        self.log.debug(f"Job queue id: {location.queue_id}")

    def poll_attempt(self, phase: Phase, attempt: int, elapsed: float) -> None:
        self.log.debug(f"Poll #{attempt} while {phase.value} ({elapsed:.1f}s elapsed)")

    def queue_pending(self, location: QueueLocation) -> None:
        self.log.debug("Job has not started yet")

    def build_started(self, handle: BuildHandle) -> None:
        self.log.info(f"Job started with id: {handle.build_id}")

    def build_in_progress(self, handle: BuildHandle, result: Optional[str], interval: float) -> None:
        status = "In Progress" if result is None else f"In Progress ({result})"
        self.log.debug(
            f"Job: {handle.job_name} Id: {handle.build_id} Status: {status}. "
            f"Polling again in {interval:g} secs"
        )

    def build_finished(self, handle: BuildHandle, status: TerminalStatus, console_url: str) -> None:
        self.log.info(f"Remote job logs can be viewed here: {console_url}")

    def phase_timed_out(self, phase: Phase, elapsed: float) -> None:
        self.log.debug(f"Deadline reached after {elapsed:.1f}s while {phase.value}")
