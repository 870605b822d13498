"""
Poll-until primitive shared by the queue and build watchers.

A phase races two timers: a periodic tick that drives the next probe and a
one-shot deadline measured from the start of the phase. The deadline wins
ties, so a tick due at or after the deadline never runs a probe. The next
tick is scheduled only once the previous probe has returned, so at most one
request is in flight.
"""

import time
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Generic, Optional, TypeVar

from ..models.config import PollPolicy
from ..models.runtime import Phase
from ..validation import PhaseTimeoutError
from .events import LifecycleObserver

T = TypeVar('T')


class Clock:
    """Monotonic time source; tests substitute a fake one."""

    def now(self) -> float:
        return time.monotonic()

    def sleep(self, seconds: float) -> None:
        if seconds > 0:
            time.sleep(seconds)


SYSTEM_CLOCK = Clock()


class PollState(Enum):
    PENDING = "pending"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


@dataclass(frozen=True)
class PollResult(Generic[T]):
    """What a probe reports after one attempt."""

    state: PollState
    value: Optional[T] = None
    error: Optional[Exception] = None

    @classmethod
    def pending(cls) -> "PollResult[Any]":
        return cls(PollState.PENDING)

    @classmethod
    def succeed(cls, value: T) -> "PollResult[T]":
        return cls(PollState.SUCCEEDED, value=value)

    @classmethod
    def fail(cls, error: Exception) -> "PollResult[Any]":
        return cls(PollState.FAILED, error=error)


def poll_until(
    probe: Callable[[], PollResult[T]],
    policy: PollPolicy,
    phase: Phase,
    clock: Optional[Clock] = None,
    observer: Optional[LifecycleObserver] = None,
) -> T:
    """
    Run probe on every tick until it succeeds, fails, or the deadline passes.

    The first probe runs one interval after the phase starts.

    Args:
        probe: Called once per tick; must not sleep
        policy: Interval and timeout for this phase
        phase: Which phase is being waited on, for errors and events
        clock: Time source, defaults to the monotonic system clock
        observer: Receives poll_attempt and phase_timed_out events

    Returns:
        The value passed to PollResult.succeed

    Raises:
        PhaseTimeoutError: If the deadline arrives before the probe resolves
        Exception: Whatever error the probe passed to PollResult.fail, or
            raised itself
    """
    clock = clock or SYSTEM_CLOCK
    observer = observer or LifecycleObserver()

    start = clock.now()
    deadline = start + policy.timeout
    attempt = 0

    while True:
        now = clock.now()
        if now + policy.interval >= deadline:
            clock.sleep(deadline - now)
            break

        clock.sleep(policy.interval)
        if clock.now() >= deadline:
            break

        attempt += 1
        observer.poll_attempt(phase, attempt, clock.now() - start)
        result = probe()

        if result.state is PollState.SUCCEEDED:
            return result.value
        if result.state is PollState.FAILED:
            raise result.error

    elapsed = clock.now() - start
    observer.phase_timed_out(phase, elapsed)
    raise PhaseTimeoutError(phase.value, policy.timeout, elapsed)
