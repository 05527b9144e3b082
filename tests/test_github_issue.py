from __future__ import annotations

import json
import urllib.request

import pytest

from adapters.github_issue import GitHubIssueChannel


class FakeUrlResponse:
    def __init__(self, payload: dict) -> None:
        self._body = json.dumps(payload).encode("utf-8")

    def read(self) -> bytes:
        return self._body

    def __enter__(self) -> "FakeUrlResponse":
        return self

    def __exit__(self, *exc) -> bool:
        return False


def _install(monkeypatch: pytest.MonkeyPatch, issue_body: str) -> list[urllib.request.Request]:
    seen: list[urllib.request.Request] = []

    def fake_urlopen(request, timeout):
        seen.append(request)
        if request.get_method() == "GET":
            return FakeUrlResponse({"number": 11, "body": issue_body})
        return FakeUrlResponse({})

    monkeypatch.setattr(urllib.request, "urlopen", fake_urlopen)
    return seen


def test_respond_posts_comment(monkeypatch: pytest.MonkeyPatch) -> None:
    seen = _install(monkeypatch, "")
    channel = GitHubIssueChannel("openjournals/tests", 11, token="secret")
    channel.respond("Reviewer 2 assigned!")

    assert len(seen) == 1
    assert seen[0].get_method() == "POST"
    assert seen[0].full_url == "https://api.github.com/repos/openjournals/tests/issues/11/comments"
    assert json.loads(seen[0].data) == {"body": "Reviewer 2 assigned!"}
    assert seen[0].get_header("Authorization") == "Bearer secret"


def test_update_body_patches_marked_region(monkeypatch: pytest.MonkeyPatch) -> None:
    seen = _install(monkeypatch, "R: <!--reviewer-2-->Pending<!--end-reviewer-2-->")
    channel = GitHubIssueChannel("openjournals/tests", 11, token=None, api_url="https://ghe.local/api/v3/")
    channel.update_body("<!--reviewer-2-->", "<!--end-reviewer-2-->", "@arfon")

    assert [request.get_method() for request in seen] == ["GET", "PATCH"]
    assert seen[1].full_url == "https://ghe.local/api/v3/repos/openjournals/tests/issues/11"
    assert json.loads(seen[1].data) == {"body": "R: <!--reviewer-2-->@arfon<!--end-reviewer-2-->"}
    assert seen[1].get_header("Authorization") is None


def test_update_body_without_markers_skips_patch(monkeypatch: pytest.MonkeyPatch) -> None:
    seen = _install(monkeypatch, "no markers here")
    GitHubIssueChannel("openjournals/tests", 11, token=None).update_body("<!--a-->", "<!--end-a-->", "x")
    assert [request.get_method() for request in seen] == ["GET"]
