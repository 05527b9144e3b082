from __future__ import annotations

import io
import urllib.error
import urllib.request

import pytest

from adapters.http_transport import UrllibHttpTransport, encode_query
from core.errors import TransportError


class FakeUrlResponse:
    def __init__(self, status: int, body: str) -> None:
        self.status = status
        self._body = body.encode("utf-8")

    def read(self) -> bytes:
        return self._body

    def __enter__(self) -> "FakeUrlResponse":
        return self

    def __exit__(self, *exc) -> bool:
        return False


def test_encode_query() -> None:
    assert encode_query("http://svc/run", {}) == "http://svc/run"
    assert encode_query("http://svc/run", {"a": 1, "b": "two", "c": None}) == "http://svc/run?a=1&b=two"
    assert encode_query("http://svc/run?x=0", {"a": 1}) == "http://svc/run?x=0&a=1"


def test_get_sends_query_and_headers(monkeypatch: pytest.MonkeyPatch) -> None:
    seen: list[urllib.request.Request] = []

    def fake_urlopen(request, timeout):
        seen.append(request)
        return FakeUrlResponse(200, "ok")

    monkeypatch.setattr(urllib.request, "urlopen", fake_urlopen)
    response = UrllibHttpTransport().get("http://svc/run", {"repo": "a/b"}, {"Accept": "application/json"})

    assert response.status == 200
    assert response.body == "ok"
    assert seen[0].get_method() == "GET"
    assert seen[0].full_url == "http://svc/run?repo=a%2Fb"
    assert seen[0].get_header("Accept") == "application/json"


def test_post_sends_body(monkeypatch: pytest.MonkeyPatch) -> None:
    seen: list[urllib.request.Request] = []

    def fake_urlopen(request, timeout):
        seen.append(request)
        return FakeUrlResponse(201, "created")

    monkeypatch.setattr(urllib.request, "urlopen", fake_urlopen)
    response = UrllibHttpTransport().post("http://svc/run", '{"id": 11}', {"Content-Type": "application/json"})

    assert response.status == 201
    assert seen[0].get_method() == "POST"
    assert seen[0].data == b'{"id": 11}'


def test_error_status_is_returned_not_raised(monkeypatch: pytest.MonkeyPatch) -> None:
    def fake_urlopen(request, timeout):
        raise urllib.error.HTTPError(request.full_url, 503, "Service Unavailable", None, io.BytesIO(b"down"))

    monkeypatch.setattr(urllib.request, "urlopen", fake_urlopen)
    response = UrllibHttpTransport().post("http://svc/run", "{}", {})
    assert response.status == 503
    assert response.body == "down"


def test_connection_failure_raises_transport_error(monkeypatch: pytest.MonkeyPatch) -> None:
    def fake_urlopen(request, timeout):
        raise urllib.error.URLError("connection refused")

    monkeypatch.setattr(urllib.request, "urlopen", fake_urlopen)
    with pytest.raises(TransportError):
        UrllibHttpTransport().get("http://svc/run", {}, {})


def test_encode_query_spells_booleans_like_json() -> None:
    url = encode_query("http://svc/run", {"draft": True, "public": False, "flags": [True, 1]})
    assert url == "http://svc/run?draft=true&public=false&flags=true&flags=1"
