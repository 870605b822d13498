"""
Unit tests for waiting on a queue item to start.
"""

import pytest

from buildtrigger.lifecycle import QueueWatcher, extract_build_number
from buildtrigger.models import BuildHandle, PollPolicy, QueueLocation
from buildtrigger.validation import PhaseTimeoutError, StartError, TransportError

LOCATION = QueueLocation(url="http://jenkins.example.com/queue/item/123/", job_name="sample-deployer")
QUEUE_API = "http://jenkins.example.com/queue/item/123/api/json"


@pytest.fixture
def watcher(client, fake_clock, observer):
    return QueueWatcher(client, clock=fake_clock, observer=observer)


@pytest.mark.unit
class TestExtractBuildNumber:
    """Test cases for reading executable.number."""

    @pytest.mark.parametrize("executable, expected", [
        ({"number": 42}, 42),
        ({"number": 42.0}, 42),
        ({"number": None}, None),
        ({"number": "42"}, None),
        ({"number": True}, None),
        ({"number": 4.5}, None),
        ({}, None),
        ("not-a-dict", None),
    ])
    def test_extract(self, executable, expected):
        assert extract_build_number(executable) == expected


@pytest.mark.unit
class TestAwaitStart:
    """Test cases for QueueWatcher.await_start."""

    def test_resolves_after_three_polls(self, watcher, mock_session, make_response, queue_item, fake_clock):
        mock_session.get.side_effect = [
            make_response(200, queue_item(allocated=False)),
            make_response(200, queue_item(allocated=False)),
            make_response(200, queue_item(42)),
        ]

        handle = watcher.await_start(LOCATION, PollPolicy(interval=2.0, timeout=60.0))

        assert handle == BuildHandle(job_name="sample-deployer", build_id=42)
        assert mock_session.get.call_count == 3
        assert fake_clock.elapsed == 6.0

    def test_polls_queue_api_url(self, watcher, mock_session, make_response, queue_item):
        mock_session.get.return_value = make_response(200, queue_item(7))

        watcher.await_start(LOCATION, PollPolicy(interval=1.0, timeout=10.0))

        args, kwargs = mock_session.get.call_args
        assert args[0] == QUEUE_API
        assert kwargs["timeout"] == 10.0

    def test_missing_executable_key_keeps_polling(self, watcher, mock_session, make_response):
        mock_session.get.side_effect = [
            make_response(200, {"id": 123, "blocked": False}),
            make_response(200, {"id": 123, "executable": {"number": 9}}),
        ]

        handle = watcher.await_start(LOCATION, PollPolicy(interval=1.0, timeout=10.0))

        assert handle.build_id == 9

    def test_allocated_without_number_fails_immediately(self, watcher, mock_session, make_response, queue_item):
        mock_session.get.side_effect = [
            make_response(200, queue_item(allocated=False)),
            make_response(200, queue_item(None)),
            make_response(200, queue_item(42)),
        ]

        with pytest.raises(StartError) as exc_info:
            watcher.await_start(LOCATION, PollPolicy(interval=1.0, timeout=60.0))

        assert mock_session.get.call_count == 2
        assert exc_info.value.queue_url == LOCATION.url

    def test_cancelled_item_fails(self, watcher, mock_session, make_response, queue_item):
        mock_session.get.return_value = make_response(200, queue_item(allocated=False, cancelled=True))

        with pytest.raises(StartError, match="cancelled"):
            watcher.await_start(LOCATION, PollPolicy(interval=1.0, timeout=60.0))

        assert mock_session.get.call_count == 1

    def test_times_out_when_never_allocated(self, watcher, mock_session, make_response, queue_item, fake_clock):
        mock_session.get.side_effect = lambda *a, **kw: make_response(200, queue_item(allocated=False))

        with pytest.raises(PhaseTimeoutError) as exc_info:
            watcher.await_start(LOCATION, PollPolicy(interval=2.0, timeout=9.0))

        assert exc_info.value.phase == "waiting for job to start"
        assert fake_clock.elapsed == 9.0
        assert mock_session.get.call_count == 4

    def test_http_error_is_terminal(self, watcher, mock_session, make_response):
        mock_session.get.return_value = make_response(404, reason="Not Found")

        with pytest.raises(TransportError) as exc_info:
            watcher.await_start(LOCATION, PollPolicy(interval=1.0, timeout=60.0))

        assert exc_info.value.status_code == 404
        assert mock_session.get.call_count == 1

    def test_observer_events(self, watcher, mock_session, make_response, queue_item, observer):
        mock_session.get.side_effect = [
            make_response(200, queue_item(allocated=False)),
            make_response(200, queue_item(5)),
        ]

        handle = watcher.await_start(LOCATION, PollPolicy(interval=1.0, timeout=10.0))

        observer.queue_pending.assert_called_once_with(LOCATION)
        observer.build_started.assert_called_once_with(handle)
        assert observer.poll_attempt.call_count == 2
