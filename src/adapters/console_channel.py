"""Console issue channel used for dry runs.

Keeps an in-memory copy of the issue body and prints replies instead of
posting them, so commands can be tried without touching GitHub.
"""

from __future__ import annotations

import logging
from typing import List

from core.issue_body import replace_between_markers

LOGGER = logging.getLogger(__name__)


class ConsoleIssueChannel:
    def __init__(self, body: str = "") -> None:
        self.body = body
        self.replies: List[str] = []

    def respond(self, message: str) -> None:
        self.replies.append(message)
        print(message)

    def update_body(self, start_marker: str, end_marker: str, new_content: str) -> None:
        new_body = replace_between_markers(self.body, start_marker, end_marker, new_content)
        if new_body is None:
            LOGGER.warning("Markers %s/%s not found in issue body", start_marker, end_marker)
            return
        self.body = new_body
