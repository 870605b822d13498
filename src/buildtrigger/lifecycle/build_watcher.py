"""
Build watching: wait for a running build to reach a result.
"""

from typing import Any, Dict, Optional

from ..client.jenkins import JenkinsClient
from ..models.config import PollPolicy
from ..models.runtime import BuildHandle, Phase, TerminalStatus
from ..validation import JobFailureError
from .events import LifecycleObserver
from .polling import Clock, PollResult, poll_until

FAILED_RESULTS = {
    "FAILURE": TerminalStatus.FAILURE,
    "ABORTED": TerminalStatus.ABORTED,
}


class BuildWatcher:
    """Polls a build until its result is SUCCESS, FAILURE or ABORTED."""

    def __init__(
        self,
        client: JenkinsClient,
        clock: Optional[Clock] = None,
        observer: Optional[LifecycleObserver] = None,
    ):
        self.client = client
        self.clock = clock
        self.observer = observer or LifecycleObserver()

    def console_url(self, handle: BuildHandle) -> str:
        return handle.console_url(self.client.base_url)

    def await_completion(self, handle: BuildHandle, policy: PollPolicy) -> TerminalStatus:
        """
        Block until the build finishes.

        Any result other than SUCCESS, FAILURE or ABORTED (including none, or
        values such as UNSTABLE) counts as still running.

        Returns:
            TerminalStatus.SUCCESS

        Raises:
            JobFailureError: If the build ended FAILURE or ABORTED
            PhaseTimeoutError: If policy.timeout elapses first
            TransportError: If a poll request fails
        """
        api_url = handle.api_url(self.client.base_url)

        def probe() -> PollResult[TerminalStatus]:
            return self._check(handle, self.client.get_json(api_url), policy.interval)

        return poll_until(probe, policy, Phase.BUILD, clock=self.clock, observer=self.observer)

    def _check(self, handle: BuildHandle, build: Dict[str, Any], interval: float) -> PollResult[TerminalStatus]:
        result = build.get("result")

        if result == "SUCCESS":
            self.observer.build_finished(handle, TerminalStatus.SUCCESS, self.console_url(handle))
            return PollResult.succeed(TerminalStatus.SUCCESS)

        if isinstance(result, str) and result in FAILED_RESULTS:
            console_url = self.console_url(handle)
            self.observer.build_finished(handle, FAILED_RESULTS[result], console_url)
            return PollResult.fail(JobFailureError(
                job_name=handle.job_name,
                build_id=handle.build_id,
                result=result,
                console_url=console_url,
            ))

        self.observer.build_in_progress(handle, result, interval)
        return PollResult.pending()
