"""
Runtime data models.

This module contains the values that flow between the lifecycle stages of a
trigger run: the job request, the queue location returned on submission, the
build handle it resolves to, and the terminal outcome.
"""

import re
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Optional
from urllib.parse import quote, urlparse


class Phase(Enum):
    """The two independent wait stages of a run."""

    QUEUE = "waiting for job to start"
    BUILD = "waiting for job to finish"


class TerminalStatus(Enum):
    """Final outcome of a watch phase."""

    SUCCESS = "SUCCESS"
    FAILURE = "FAILURE"
    ABORTED = "ABORTED"
    TIMED_OUT = "TIMED_OUT"


def job_path(job_name: str) -> str:
    """URL path of a job below the server root ('a/job/b' stays nested)."""
    return "job/" + quote(job_name, safe="/")


@dataclass(frozen=True)
class JobRequest:
    """
    A job name and the parameters to build it with.

    The parameter mapping is copied into a read-only view on construction.
    """

    name: str
    parameters: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, "parameters", MappingProxyType(dict(self.parameters)))

    def __hash__(self):
        return hash((self.name, frozenset(self.parameters.items())))

    @property
    def has_parameters(self) -> bool:
        return len(self.parameters) > 0


_QUEUE_ID_RE = re.compile(r"/queue/item/(\d+)")


@dataclass(frozen=True)
class QueueLocation:
    """
    URI of a queue item that has not been scheduled yet, and the job it
    belongs to.
    """

    url: str
    job_name: str

    @property
    def api_url(self) -> str:
        return self.url.rstrip("/") + "/api/json"

    @property
    def queue_id(self) -> Optional[int]:
        """Numeric queue item id, for diagnostics only."""
        match = _QUEUE_ID_RE.search(urlparse(self.url).path)
        return int(match.group(1)) if match else None

    @staticmethod
    def looks_like_queue_item(url: str) -> bool:
        """
        Whether a Location header points at a queue item.

        Requires an absolute http(s) URL with 'queue' as one of its path
        segments.
        """
        parsed = urlparse(url)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            return False
        return "queue" in parsed.path.split("/")


@dataclass(frozen=True)
class BuildHandle:
    """
    A concrete build: job name plus build number.
    """

    job_name: str
    build_id: int

    def url(self, base_url: str) -> str:
        return f"{base_url.rstrip('/')}/{job_path(self.job_name)}/{self.build_id}"

    def api_url(self, base_url: str) -> str:
        return self.url(base_url) + "/api/json"

    def console_url(self, base_url: str) -> str:
        return self.url(base_url) + "/consoleText"


@dataclass(frozen=True)
class BuildOutcome:
    """
    What a successful run reports back to its caller.
    """

    handle: BuildHandle
    status: TerminalStatus
    console_url: str

    def summary(self) -> str:
        return f"Job: {self.handle.job_name} Id: {self.handle.build_id} Completed Successfully"
