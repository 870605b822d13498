"""
Pytest configuration and shared fixtures for the buildtrigger test suite.

This module provides a fake clock, canned HTTP responses and a mocked
requests session so lifecycle tests run instantly and never touch the network.
"""

import json
import sys
import tempfile
import shutil
from pathlib import Path
from typing import Any, Dict, Optional
from unittest.mock import MagicMock

import pytest
import requests
from requests.structures import CaseInsensitiveDict

# Add src to Python path for testing
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from buildtrigger.client.jenkins import JenkinsClient  # noqa: E402
from buildtrigger.lifecycle.events import LifecycleObserver  # noqa: E402
from buildtrigger.lifecycle.polling import Clock  # noqa: E402
from buildtrigger.models import Credentials, JobRequest, PollPolicy, TriggerConfig  # noqa: E402

BASE_URL = "http://jenkins.example.com"


# ============================================================================
# Test Configuration
# ============================================================================


def pytest_configure(config):
    """Configure pytest with custom markers and settings."""
    config.addinivalue_line("markers", "unit: mark test as a unit test")
    config.addinivalue_line("markers", "integration: mark test as an integration test")


# ============================================================================
# Test Doubles
# ============================================================================


class FakeClock(Clock):
    """Clock whose time only moves when something sleeps."""

    def __init__(self, start: float = 1000.0):
        self.start = start
        self.current = start
        self.sleeps = []

    def now(self) -> float:
        return self.current

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        if seconds > 0:
            self.current += seconds

    @property
    def elapsed(self) -> float:
        return self.current - self.start


def make_response(
    status_code: int = 200,
    body: Optional[Any] = None,
    headers: Optional[Dict[str, str]] = None,
    reason: str = "",
    text: Optional[str] = None,
) -> requests.Response:
    """Build a real requests.Response without a network round trip."""
    response = requests.Response()
    response.status_code = status_code
    response.reason = reason
    response.headers = CaseInsensitiveDict(headers or {})
    response.encoding = "utf-8"
    if text is not None:
        response._content = text.encode("utf-8")
    elif body is not None:
        response._content = json.dumps(body).encode("utf-8")
    else:
        response._content = b""
    return response


# ============================================================================
# Core Fixtures
# ============================================================================


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    temp_path = tempfile.mkdtemp()
    yield Path(temp_path)
    shutil.rmtree(temp_path, ignore_errors=True)


@pytest.fixture
def fake_clock():
    return FakeClock()


@pytest.fixture
def observer():
    """Observer double; inspect with .method_calls."""
    return MagicMock(spec=LifecycleObserver)


@pytest.fixture
def credentials():
    return Credentials(user="builder", token="s3cret")


@pytest.fixture
def mock_session():
    """A requests.Session stand-in; configure .get/.post per test."""
    return MagicMock(spec=requests.Session)


@pytest.fixture
def client(mock_session, credentials):
    return JenkinsClient(BASE_URL, credentials, request_timeout=10.0, session=mock_session)


@pytest.fixture
def sample_environ():
    """Environment for a complete, parameterized run."""
    return {
        "JENKINS_URI": BASE_URL + "/",
        "JENKINS_USER": "builder",
        "JENKINS_TOKEN": "s3cret",
        "JENKINS_JOB": "sample-deployer",
        "PARAMETER_ENV_FOO": "not-bar",
        "PATH": "/usr/bin",
    }


@pytest.fixture
def trigger_config(credentials):
    return TriggerConfig(
        base_url=BASE_URL,
        credentials=credentials,
        job=JobRequest(name="sample-deployer", parameters={"ENV_FOO": "not-bar"}),
        queue_policy=PollPolicy(interval=2.0, timeout=60.0),
        build_policy=PollPolicy(interval=5.0, timeout=600.0),
    )


def queue_item(number: Optional[Any] = None, allocated: bool = True, **extra) -> Dict[str, Any]:
    """JSON body of a queue item; allocated=False means no executable yet."""
    body: Dict[str, Any] = {"id": 17, "why": "Waiting for next available executor"}
    body.update(extra)
    if allocated:
        executable: Dict[str, Any] = {"url": f"{BASE_URL}/job/sample-deployer/{number}/"}
        if number is not None:
            executable["number"] = number
        body["executable"] = executable
    else:
        body["executable"] = None
    return body


def build_status(result: Optional[str]) -> Dict[str, Any]:
    return {"building": result is None, "result": result, "number": 42}


# ============================================================================
# Factory Fixtures
# ============================================================================


@pytest.fixture(name="make_response")
def make_response_fixture():
    return make_response


@pytest.fixture(name="queue_item")
def queue_item_fixture():
    return queue_item


@pytest.fixture(name="build_status")
def build_status_fixture():
    return build_status
