"""
Job lifecycle: submit, wait for start, wait for completion.

The three stages run strictly in sequence, each consuming what the previous
one returned. Both watchers are configurations of poll_until.
"""

from .build_watcher import BuildWatcher
from .events import LifecycleObserver, LoggingObserver
from .polling import SYSTEM_CLOCK, Clock, PollResult, PollState, poll_until
from .queue_watcher import QueueWatcher, extract_build_number
from .submitter import Submitter

__all__ = [
    "BuildWatcher",
    "Clock",
    "LifecycleObserver",
    "LoggingObserver",
    "PollResult",
    "PollState",
    "QueueWatcher",
    "SYSTEM_CLOCK",
    "Submitter",
    "extract_build_number",
    "poll_until",
]
