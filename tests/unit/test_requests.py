"""
Unit tests for the follow-up request builders.
"""

import httpx
import pytest

from workpoll.client import NonRetryableRequest
from workpoll.client.requests import ensure_replayable, replay_request, see_other_request


@pytest.fixture
def submission() -> httpx.Request:
    return httpx.Request(
        "POST",
        "http://test/start_work",
        headers={"X-Trace": "abc", "Content-Type": "application/json"},
        content=b'{"a": 1}',
        extensions={"timeout": {"connect": 3.0, "read": 3.0, "write": 3.0, "pool": 3.0}},
    )


class TestRequestBuilders:
    """Tests for the request builders shared by the transports."""

    def test_replay_keeps_everything(self, submission: httpx.Request):
        """Test a replay is the same request again."""
        replay = replay_request(submission)

        assert replay.method == "POST"
        assert replay.url == submission.url
        assert replay.content == submission.content
        assert replay.headers["X-Trace"] == "abc"
        assert replay.extensions == submission.extensions

    def test_replay_to_other_host(self, submission: httpx.Request):
        """Test a replay to a new URL gets a Host matching that URL."""
        replay = replay_request(submission, httpx.URL("http://other.example/jobs"))

        assert replay.method == "POST"
        assert replay.content == submission.content
        assert replay.headers["Host"] == "other.example"

    def test_see_other_drops_body(self, submission: httpx.Request):
        """Test a See Other follow-up is a body-less GET to the Location."""
        response = httpx.Response(303, headers={"Location": "/work/XYZ"})

        follow = see_other_request(submission, response)

        assert follow.method == "GET"
        assert follow.url == httpx.URL("http://test/work/XYZ")
        assert follow.content == b""
        assert "Content-Type" not in follow.headers
        assert "Content-Length" not in follow.headers
        assert follow.headers["X-Trace"] == "abc"
        assert follow.extensions == submission.extensions

    def test_see_other_without_location(self, submission: httpx.Request):
        """Test a See Other without Location re-reads the same URL."""
        follow = see_other_request(submission, httpx.Response(303))

        assert follow.url == submission.url

    def test_streaming_body_is_not_replayable(self):
        """Test a streamed body is refused before anything is sent."""

        async def body():
            yield b"chunk"

        request = httpx.Request("POST", "http://test/start_work", content=body())

        with pytest.raises(NonRetryableRequest):
            ensure_replayable(request)
