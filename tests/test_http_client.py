from typing import Any

import pytest
import requests

from carhunter.clients.http import HttpClient, HttpRequestError


class FakeResponse:
    def __init__(self, status_code: int, payload: Any = None, invalid_json: bool = False) -> None:
        self.status_code = status_code
        self._payload = payload
        self._invalid_json = invalid_json

    def json(self) -> Any:
        if self._invalid_json:
            raise ValueError("Expecting value")
        return self._payload


class FakeSession:
    def __init__(self, outcomes: list[Any]) -> None:
        self._outcomes = list(outcomes)
        self.calls: list[dict[str, Any]] = []

    def get(self, url: str, **kwargs: Any) -> FakeResponse:
        self.calls.append({"url": url, **kwargs})
        outcome = self._outcomes.pop(0)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


@pytest.fixture(autouse=True)
def no_sleep(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr("carhunter.clients.http.time.sleep", lambda seconds: None)


def _client(session: FakeSession, max_retries: int = 3) -> HttpClient:
    return HttpClient(session=session, max_retries=max_retries, backoff_seconds=0.0, backoff_jitter_seconds=0.0)


def test_get_json_retries_server_errors() -> None:
    session = FakeSession([FakeResponse(503), FakeResponse(200, {"Makes": []})])

    payload = _client(session).get_json("https://api.test/makes", params={"cmd": "getMakes"})

    assert payload == {"Makes": []}
    assert len(session.calls) == 2
    assert session.calls[0]["params"] == {"cmd": "getMakes"}


def test_get_json_does_not_retry_client_errors() -> None:
    session = FakeSession([FakeResponse(404)])

    with pytest.raises(HttpRequestError) as exc_info:
        _client(session).get_json("https://api.test/missing")

    assert exc_info.value.status_code == 404
    assert exc_info.value.error_kind == "http_4xx"
    assert len(session.calls) == 1


def test_get_json_gives_up_after_timeouts() -> None:
    session = FakeSession([requests.Timeout("read timed out"), requests.Timeout("read timed out")])

    with pytest.raises(HttpRequestError) as exc_info:
        _client(session, max_retries=2).get_json("https://api.test/slow")

    assert exc_info.value.error_kind == "timeout"
    assert exc_info.value.retryable is True
    assert len(session.calls) == 2


def test_get_json_rejects_invalid_json() -> None:
    session = FakeSession([FakeResponse(200, invalid_json=True)])

    with pytest.raises(HttpRequestError) as exc_info:
        _client(session).get_json("https://api.test/html")

    assert exc_info.value.error_kind == "invalid_json"


def test_get_json_wraps_unreadable_body() -> None:
    session = FakeSession([requests.exceptions.ChunkedEncodingError("broken body")])

    with pytest.raises(HttpRequestError) as exc_info:
        _client(session).get_json("https://api.test/makes")

    assert exc_info.value.error_kind == "request"
    assert exc_info.value.retryable is False
    assert len(session.calls) == 1
