"""
Unit tests for build submission.

Tests endpoint selection, form encoding of parameters, and every way the
server's answer can be rejected.
"""

import pytest
import requests

from buildtrigger.lifecycle import Submitter
from buildtrigger.models import JobRequest, QueueLocation
from buildtrigger.validation import SubmissionError, TransportError

QUEUE_URL = "http://jenkins.example.com/queue/item/123/"


@pytest.fixture
def submitter(client, observer):
    return Submitter(client, observer=observer)


@pytest.mark.unit
class TestEndpointSelection:
    """Test cases for choosing build vs buildWithParameters."""

    def test_no_parameters_uses_build(self, submitter, mock_session, make_response):
        mock_session.post.return_value = make_response(201, headers={"Location": QUEUE_URL})

        submitter.submit(JobRequest(name="sample-deployer"))

        args, kwargs = mock_session.post.call_args
        assert args[0] == "http://jenkins.example.com/job/sample-deployer/build"
        assert kwargs["data"] is None

    def test_parameters_use_build_with_parameters(self, submitter, mock_session, make_response):
        mock_session.post.return_value = make_response(201, headers={"Location": QUEUE_URL})
        parameters = {"ENV_FOO": "not-bar", "BRANCH": "main", "EMPTY": ""}

        submitter.submit(JobRequest(name="sample-deployer", parameters=parameters))

        args, kwargs = mock_session.post.call_args
        assert args[0] == "http://jenkins.example.com/job/sample-deployer/buildWithParameters"
        assert kwargs["data"] == parameters

    def test_parameters_are_form_encoded_once_each(self, submitter, mock_session, make_response):
        mock_session.post.return_value = make_response(201, headers={"Location": QUEUE_URL})
        parameters = {"A": "1", "B": "x y", "C": "k=v&z"}

        submitter.submit(JobRequest(name="job", parameters=parameters))

        _, kwargs = mock_session.post.call_args
        body = requests.Request("POST", "http://h/", data=kwargs["data"]).prepare().body
        pairs = body.split("&")
        assert sorted(pair.split("=", 1)[0] for pair in pairs) == ["A", "B", "C"]
        assert "C=k%3Dv%26z" in pairs

    def test_folder_job_path(self, submitter, mock_session, make_response):
        mock_session.post.return_value = make_response(201, headers={"Location": QUEUE_URL})

        submitter.submit(JobRequest(name="team/job/deploy"))

        args, _ = mock_session.post.call_args
        assert args[0] == "http://jenkins.example.com/job/team/job/deploy/build"

    def test_request_uses_timeout_and_no_redirects(self, submitter, mock_session, make_response):
        mock_session.post.return_value = make_response(201, headers={"Location": QUEUE_URL})

        submitter.submit(JobRequest(name="job"))

        _, kwargs = mock_session.post.call_args
        assert kwargs["timeout"] == 10.0
        assert kwargs["allow_redirects"] is False

    def test_credentials_attached_as_basic_auth(self, client, mock_session):
        assert mock_session.auth == ("builder", "s3cret")


@pytest.mark.unit
class TestSubmissionResponse:
    """Test cases for validating the trigger response."""

    def test_success_returns_queue_location(self, submitter, mock_session, make_response, observer):
        mock_session.post.return_value = make_response(201, headers={"Location": QUEUE_URL})

        location = submitter.submit(JobRequest(name="sample-deployer"))

        assert location == QueueLocation(url=QUEUE_URL, job_name="sample-deployer")
        assert location.queue_id == 123
        observer.submitted.assert_called_once_with(location)

    @pytest.mark.parametrize("status", [200, 302, 400, 403, 404, 500])
    def test_non_201_fails_even_with_queue_location(self, submitter, mock_session, make_response, status):
        mock_session.post.return_value = make_response(status, headers={"Location": QUEUE_URL}, reason="Nope")

        with pytest.raises(SubmissionError) as exc_info:
            submitter.submit(JobRequest(name="job"))

        assert exc_info.value.status_code == status
        assert str(status) in str(exc_info.value)

    def test_missing_location_fails(self, submitter, mock_session, make_response):
        mock_session.post.return_value = make_response(201)

        with pytest.raises(SubmissionError) as exc_info:
            submitter.submit(JobRequest(name="job"))

        assert exc_info.value.status_code == 201
        assert exc_info.value.location is None
        assert "no location" in str(exc_info.value)

    @pytest.mark.parametrize("location", [
        "http://jenkins.example.com/job/job/12/",
        "/queue/item/5/",
        "http://jenkins.example.com/queued/item/5/",
        "ftp://jenkins.example.com/queue/item/5/",
        "queue",
    ])
    def test_non_queue_location_fails(self, submitter, mock_session, make_response, location):
        mock_session.post.return_value = make_response(201, headers={"Location": location})

        with pytest.raises(SubmissionError) as exc_info:
            submitter.submit(JobRequest(name="job"))

        assert exc_info.value.location == location

    def test_transport_error_propagates(self, submitter, mock_session):
        mock_session.post.side_effect = requests.ConnectionError("refused")

        with pytest.raises(TransportError):
            submitter.submit(JobRequest(name="job"))

    def test_submit_posts_exactly_once(self, submitter, mock_session, make_response):
        mock_session.post.return_value = make_response(503)

        with pytest.raises(SubmissionError):
            submitter.submit(JobRequest(name="job"))

        assert mock_session.post.call_count == 1
