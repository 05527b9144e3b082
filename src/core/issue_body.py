"""Helpers for editing marked regions of an issue body."""

from __future__ import annotations

from typing import Optional


def replace_between_markers(body: str, start_marker: str, end_marker: str, new_content: str) -> Optional[str]:
    """Return ``body`` with the text between the two markers replaced.

    The markers themselves are kept. ``None`` is returned when either marker
    is missing so callers can decide whether that is worth reporting.
    """

    start = body.find(start_marker)
    if start == -1:
        return None
    content_start = start + len(start_marker)
    end = body.find(end_marker, content_start)
    if end == -1:
        return None
    return body[:content_start] + new_content + body[end:]
