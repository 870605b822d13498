"""
Build submission.

Posts the trigger request and turns the server's answer into a QueueLocation.
"""

import logging
from typing import Optional

from ..client.jenkins import JenkinsClient
from ..models.runtime import JobRequest, QueueLocation, job_path
from ..validation import SubmissionError
from .events import LifecycleObserver

logger = logging.getLogger(__name__)

CREATED = 201


class Submitter:
    """Triggers a build and extracts the queue item it was placed in."""

    def __init__(self, client: JenkinsClient, observer: Optional[LifecycleObserver] = None):
        self.client = client
        self.observer = observer or LifecycleObserver()

    def endpoint(self, job: JobRequest) -> str:
        """Trigger URL: buildWithParameters when parameters are given, build otherwise."""
        action = "buildWithParameters" if job.has_parameters else "build"
        return self.client.url(f"{job_path(job.name)}/{action}")

    def submit(self, job: JobRequest) -> QueueLocation:
        """
        Submit a build request.

        Args:
            job: Job name and parameters; parameters go out as a form body

        Returns:
            Location of the queue item created for the request

        Raises:
            SubmissionError: If the response is not 201 or has no queue-item
                Location header
            TransportError: If the request could not be sent
        """
        url = self.endpoint(job)
        self.observer.submitting(job, url)

        response = self.client.post(url, data=job.parameters if job.has_parameters else None)
        logger.debug(f"Response status: {response.status_code}")

        if response.status_code != CREATED:
            raise SubmissionError(
                f"Request returned: {response.status_code} {response.reason or ''}".rstrip(),
                status_code=response.status_code,
            )

        location = response.headers.get("Location")
        if not location:
            raise SubmissionError(
                "Request accepted but no location returned",
                status_code=response.status_code,
            )
        if not QueueLocation.looks_like_queue_item(location):
            raise SubmissionError(
                f"Request did not return a valid queue location: {location}",
                status_code=response.status_code,
                location=location,
            )

        queue_location = QueueLocation(url=location, job_name=job.name)
        self.observer.submitted(queue_location)
        return queue_location
