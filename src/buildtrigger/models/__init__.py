"""
Data models for a trigger run.

Configuration Models:
- Server credentials and per-phase poll policies
- The aggregated, validated run configuration

Runtime Models:
- Job request with its parameters
- Queue location returned on submission
- Build handle the queue item resolves to
- Terminal status and the final outcome

All models are frozen dataclasses or enums.
"""

from .config import Credentials, PollPolicy, TriggerConfig
from .runtime import (
    BuildHandle,
    BuildOutcome,
    JobRequest,
    Phase,
    QueueLocation,
    TerminalStatus,
    job_path,
)

__all__ = [
    # Configuration
    "Credentials",
    "PollPolicy",
    "TriggerConfig",
    # Runtime
    "BuildHandle",
    "BuildOutcome",
    "JobRequest",
    "Phase",
    "QueueLocation",
    "TerminalStatus",
    "job_path",
]
