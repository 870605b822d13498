"""
Thin HTTP client for the Jenkins REST API.

Wraps a requests.Session carrying basic auth and a per-request timeout. The
client makes exactly one attempt per call; retry decisions belong to the
caller.
"""

import logging
from typing import Any, Dict, Mapping, Optional

import requests

from ..models.config import Credentials
from ..validation import TransportError

logger = logging.getLogger(__name__)


class JenkinsClient:
    """
    Blocking Jenkins API client bound to one server and one set of credentials.
    """

    def __init__(
        self,
        base_url: str,
        credentials: Credentials,
        request_timeout: float = 30.0,
        session: Optional[requests.Session] = None,
    ):
        """
        Args:
            base_url: Server root, without trailing slash
            credentials: Basic-auth credentials for every request
            request_timeout: Seconds to wait for each individual response
            session: Pre-built session, mainly for tests
        """
        self.base_url = base_url.rstrip("/")
        self.request_timeout = request_timeout
        self.session = session or requests.Session()
        self.session.auth = credentials.as_auth()

    def url(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"

    def post(self, url: str, data: Optional[Mapping[str, str]] = None) -> requests.Response:
        """
        POST a form-encoded body and return the raw response.

        The status code is left for the caller to judge. Redirects are not
        followed so the Location header of a 201 reaches the caller intact.
        """
        logger.debug(f"POST {url}")
        try:
            return self.session.post(
                url,
                data=dict(data) if data else None,
                timeout=self.request_timeout,
                allow_redirects=False,
            )
        except requests.RequestException as e:
            raise TransportError(f"POST {url} failed: {e}", url=url) from e

    def get_json(self, url: str) -> Dict[str, Any]:
        """
        GET a JSON document.

        Raises:
            TransportError: On connection failure, a non-2xx status, or a body
                that is not a JSON object
        """
        logger.debug(f"GET {url}")
        try:
            response = self.session.get(url, timeout=self.request_timeout)
        except requests.RequestException as e:
            raise TransportError(f"GET {url} failed: {e}", url=url) from e

        if not response.ok:
            raise TransportError(
                f"GET {url} returned {response.status_code} {response.reason}",
                url=url,
                status_code=response.status_code,
            )
        try:
            body = response.json()
        except ValueError as e:
            raise TransportError(f"GET {url} returned invalid JSON: {e}", url=url,
                                 status_code=response.status_code) from e
        if not isinstance(body, dict):
            raise TransportError(f"GET {url} returned {type(body).__name__}, expected an object",
                                 url=url, status_code=response.status_code)
        return body

    def close(self) -> None:
        self.session.close()

    def __enter__(self) -> "JenkinsClient":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
