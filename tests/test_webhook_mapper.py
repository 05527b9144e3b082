from __future__ import annotations

from adapters.webhook_mapper import build_event


def _payload(**overrides) -> dict:
    payload = {
        "action": "created",
        "comment": {"body": "@botsci run specs", "user": {"login": "editor1"}},
        "issue": {"number": 11, "title": "Submission", "user": {"login": "author1"}},
        "repository": {"full_name": "openjournals/tests"},
        "sender": {"login": "editor1"},
    }
    payload.update(overrides)
    return payload


def test_build_event_from_issue_comment() -> None:
    event = build_event("issue_comment", _payload(), "botsci")
    assert event is not None
    assert event.category == "issue_comment.created"
    assert event.text == "@botsci run specs"
    assert event.context == {
        "bot_name": "botsci",
        "issue_id": 11,
        "issue_title": "Submission",
        "issue_author": "author1",
        "repo": "openjournals/tests",
        "sender": "editor1",
    }


def test_build_event_without_comment_is_none() -> None:
    payload = _payload(action="opened")
    del payload["comment"]
    assert build_event("issues", payload, "botsci") is None


def test_build_event_ignores_bot_comments() -> None:
    payload = _payload(comment={"body": "@botsci help", "user": {"login": "BotSci"}})
    assert build_event("issue_comment", payload, "botsci") is None


def test_build_event_skips_missing_context_values() -> None:
    payload = _payload(sender=None, repository={})
    event = build_event("issue_comment", payload, "botsci")
    assert event is not None
    assert "sender" not in event.context
    assert "repo" not in event.context
