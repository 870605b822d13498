"""
Queue watching: wait for a queue item to be assigned a build number.
"""

from typing import Any, Dict, Optional

from ..client.jenkins import JenkinsClient
from ..models.config import PollPolicy
from ..models.runtime import BuildHandle, Phase, QueueLocation
from ..validation import StartError
from .events import LifecycleObserver
from .polling import Clock, PollResult, poll_until


def extract_build_number(executable: Any) -> Optional[int]:
    """Read executable.number, accepting integral JSON numbers only."""
    if not isinstance(executable, dict):
        return None
    number = executable.get("number")
    if isinstance(number, bool):
        return None
    if isinstance(number, int):
        return number
    if isinstance(number, float) and number.is_integer():
        return int(number)
    return None


class QueueWatcher:
    """Polls a queue item until the server allocates a build for it."""

    def __init__(
        self,
        client: JenkinsClient,
        clock: Optional[Clock] = None,
        observer: Optional[LifecycleObserver] = None,
    ):
        self.client = client
        self.clock = clock
        self.observer = observer or LifecycleObserver()

    def await_start(self, location: QueueLocation, policy: PollPolicy) -> BuildHandle:
        """
        Block until the queued request becomes a running build.

        Raises:
            StartError: If the item was allocated a build without a readable
                number, or the item was cancelled
            PhaseTimeoutError: If policy.timeout elapses first
            TransportError: If a poll request fails
        """
        def probe() -> PollResult[BuildHandle]:
            return self._check(location, self.client.get_json(location.api_url))

        handle = poll_until(probe, policy, Phase.QUEUE, clock=self.clock, observer=self.observer)
        self.observer.build_started(handle)
        return handle

    def _check(self, location: QueueLocation, item: Dict[str, Any]) -> PollResult[BuildHandle]:
        executable = item.get("executable")
        if executable is None:
            if item.get("cancelled"):
                return PollResult.fail(StartError(
                    f"Queue item was cancelled before the job started: {location.url}",
                    queue_url=location.url,
                ))
            self.observer.queue_pending(location)
            return PollResult.pending()

        build_id = extract_build_number(executable)
        if build_id is None:
            return PollResult.fail(StartError(
                "Job started but job id could not be found",
                queue_url=location.url,
            ))
        return PollResult.succeed(BuildHandle(job_name=location.job_name, build_id=build_id))
