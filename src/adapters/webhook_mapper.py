"""GitHub-webhook-to-core event mapping adapter.

This keeps webhook payload details out of the core pipeline.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional

from core.models import CommandEvent


def _login(entity: Any) -> Optional[str]:
    if isinstance(entity, Mapping):
        login = entity.get("login")
        if isinstance(login, str) and login:
            return login
    return None


def build_context(payload: Mapping[str, Any], bot_name: str) -> dict[str, Any]:
    """Collect the runtime values services can request from an event."""

    issue = payload.get("issue") or payload.get("pull_request") or {}
    repository = payload.get("repository") or {}
    context: dict[str, Any] = {
        "bot_name": bot_name,
        "issue_id": issue.get("number"),
        "issue_title": issue.get("title"),
        "issue_author": _login(issue.get("user")),
        "repo": repository.get("full_name"),
        "sender": _login(payload.get("sender")),
    }
    return {key: value for key, value in context.items() if value is not None}


def build_event(event_name: str, payload: Mapping[str, Any], bot_name: str) -> Optional[CommandEvent]:
    """Build a core CommandEvent from a webhook delivery.

    The category is ``<event>.<action>`` (e.g. ``issue_comment.created``) and
    the text is the comment body. Deliveries without a comment, and comments
    written by the bot itself, yield ``None``.
    """

    action = payload.get("action")
    category = f"{event_name}.{action}" if action else event_name
    comment = payload.get("comment")
    if not isinstance(comment, Mapping):
        return None
    if (_login(comment.get("user")) or "").lower() == bot_name.lower():
        return None
    return CommandEvent(
        category=category,
        text=str(comment.get("body") or ""),
        context=build_context(payload, bot_name),
    )
