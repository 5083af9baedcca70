"""Tests for the jobs API client."""

import logging

import pytest
import requests

from job_board.errors import FetchError
from job_board.jobs.api_client import JobFetchClient


class FakeResponse:
    def __init__(self, status_code=200, body=None, text=None):
        self.status_code = status_code
        self._body = body
        self._text = text

    def json(self):
        if self._text is not None:
            raise ValueError("Expecting value: line 1 column 1 (char 0)")
        return self._body

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error", response=self)


class FakeSession:
    """Stands in for requests.Session; records every GET."""

    def __init__(self, *outcomes):
        self.outcomes = list(outcomes)
        self.calls = []
        self.closed = False

    def get(self, url, params=None, timeout=None):
        self.calls.append({"url": url, "params": params, "timeout": timeout})
        outcome = self.outcomes.pop(0)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    def close(self):
        self.closed = True


def _client(*outcomes):
    session = FakeSession(*outcomes)
    return JobFetchClient("https://api.example.com/", timeout=5, session=session), session


class TestFetchPage:
    def test_builds_request(self):
        client, session = _client(FakeResponse(body={"results": []}))
        client.fetch_page(3)
        assert session.calls == [
            {"url": "https://api.example.com/common/jobs", "params": {"page": 3}, "timeout": 5},
        ]

    def test_normalizes_in_upstream_order(self):
        body = {"results": [
            {"id": 9, "title": "Cook"},
            {"id": 2, "title": "Driver", "company_name": "FleetCo"},
            {"id": 5},
        ]}
        client, _ = _client(FakeResponse(body=body))
        jobs = client.fetch_page(1)
        assert [j.id for j in jobs] == [9, 2, 5]
        assert jobs[1].company == "FleetCo"
        assert jobs[2].title == "Untitled Position"

    @pytest.mark.parametrize("response", [
        FakeResponse(body={"count": 0}),
        FakeResponse(body={"results": None}),
        FakeResponse(body=["not", "an", "object"]),
        FakeResponse(text="<html>maintenance</html>"),
    ])
    def test_malformed_response_is_empty_page(self, response, caplog):
        client, _ = _client(response)
        with caplog.at_level(logging.WARNING, logger="job_board.jobs.api"):
            assert client.fetch_page(1) == []
        assert "Malformed response for jobs page 1" in caplog.text

    def test_http_error_raises_fetch_error(self):
        client, _ = _client(FakeResponse(status_code=503))
        with pytest.raises(FetchError) as exc_info:
            client.fetch_page(2)
        assert exc_info.value.page == 2
        assert exc_info.value.status_code == 503
        assert isinstance(exc_info.value.cause, requests.HTTPError)

    def test_network_error_raises_fetch_error(self):
        cause = requests.ConnectionError("connection refused")
        client, session = _client(cause)
        with pytest.raises(FetchError) as exc_info:
            client.fetch_page(4)
        assert exc_info.value.page == 4
        assert exc_info.value.cause is cause
        assert exc_info.value.status_code is None
        assert len(session.calls) == 1

    @pytest.mark.parametrize("page", [0, -1, True, "2"])
    def test_rejects_invalid_page(self, page):
        client, session = _client()
        with pytest.raises(ValueError):
            client.fetch_page(page)
        assert session.calls == []


class TestSessionOwnership:
    def test_injected_session_not_closed(self):
        client, session = _client()
        with client:
            pass
        assert session.closed is False

    def test_default_client(self):
        with JobFetchClient() as client:
            assert client.session.headers["Accept"] == "application/json"
            assert client.jobs_url == "https://testapi.getlokalapp.com/common/jobs"
