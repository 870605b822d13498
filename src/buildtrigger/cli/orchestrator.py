"""
Trigger runner for CLI integration.

This module wires the lifecycle stages together for one run: submit the job,
wait for the queue item to start, wait for the build to finish.
"""

import logging
from typing import Optional

from ..client.jenkins import JenkinsClient
from ..lifecycle import BuildWatcher, Clock, LifecycleObserver, LoggingObserver, QueueWatcher, Submitter
from ..models.config import TriggerConfig
from ..models.runtime import BuildOutcome

logger = logging.getLogger(__name__)


class TriggerRunner:
    """
    Runs one trigger-and-wait operation against a Jenkins server.

    The runner holds no state between runs; every call to run() submits a
    fresh build.
    """

    def __init__(
        self,
        config: TriggerConfig,
        client: Optional[JenkinsClient] = None,
        clock: Optional[Clock] = None,
        observer: Optional[LifecycleObserver] = None,
    ):
        """
        Args:
            config: Validated run configuration
            client: HTTP client; built from config when omitted
            clock: Time source for both watch phases
            observer: Receives lifecycle events; logs them when omitted
        """
        self.config = config
        self.client = client or JenkinsClient(
            config.base_url,
            config.credentials,
            request_timeout=config.request_timeout,
        )
        self.observer = observer or LoggingObserver()
        self.submitter = Submitter(self.client, observer=self.observer)
        self.queue_watcher = QueueWatcher(self.client, clock=clock, observer=self.observer)
        self.build_watcher = BuildWatcher(self.client, clock=clock, observer=self.observer)

    def run(self) -> BuildOutcome:
        """
        Submit the configured job and block until it finishes.

        Returns:
            The successful outcome with its console log URL

        Raises:
            SubmissionError, StartError, PhaseTimeoutError, JobFailureError,
            TransportError: Whichever stage failed first
        """
        location = self.submitter.submit(self.config.job)

        logger.debug("Waiting for queued job to start")
        handle = self.queue_watcher.await_start(location, self.config.queue_policy)

        logger.debug("Waiting for running job to finish")
        status = self.build_watcher.await_completion(handle, self.config.build_policy)

        return BuildOutcome(
            handle=handle,
            status=status,
            console_url=self.build_watcher.console_url(handle),
        )
