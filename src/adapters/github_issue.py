"""GitHub issue channel adapter.

Posts replies as issue comments and edits the issue body through the REST
API, implementing the core IssueChannelPort for a single issue.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Optional
import urllib.error
import urllib.request

from core.errors import TransportError
from core.issue_body import replace_between_markers

LOGGER = logging.getLogger(__name__)

DEFAULT_API_URL = "https://api.github.com"


class GitHubIssueChannel:
    """Issue channel that talks to the GitHub REST API."""

    def __init__(
        self,
        repo: str,
        issue_id: int,
        token: Optional[str],
        api_url: str = DEFAULT_API_URL,
        timeout: float = 10.0,
    ) -> None:
        self._repo = repo
        self._issue_id = issue_id
        self._token = token
        self._api_url = api_url.rstrip("/")
        self._timeout = timeout

    def _issue_endpoint(self) -> str:
        return f"{self._api_url}/repos/{self._repo}/issues/{self._issue_id}"

    def _request(self, method: str, url: str, payload: Optional[dict] = None) -> Any:
        data = json.dumps(payload).encode("utf-8") if payload is not None else None
        request = urllib.request.Request(url, data=data, method=method)
        request.add_header("Accept", "application/vnd.github+json")
        request.add_header("Content-Type", "application/json")
        if self._token:
            request.add_header("Authorization", f"Bearer {self._token}")
        try:
            with urllib.request.urlopen(request, timeout=self._timeout) as response:
                raw = response.read().decode("utf-8")
        except urllib.error.HTTPError as e:
            body = e.read().decode("utf-8", errors="replace")
            raise TransportError(f"GitHub API error {e.code}: {body}") from e
        except urllib.error.URLError as e:
            raise TransportError(f"GitHub API unreachable: {e}") from e
        return json.loads(raw) if raw else None

    def respond(self, message: str) -> None:
        """Post ``message`` as a new comment on the issue."""

        self._request("POST", f"{self._issue_endpoint()}/comments", {"body": message})
        LOGGER.info("Replied on %s#%s", self._repo, self._issue_id)

    def update_body(self, start_marker: str, end_marker: str, new_content: str) -> None:
        """Replace the marked region of the issue body."""

        issue = self._request("GET", self._issue_endpoint()) or {}
        body = issue.get("body") or ""
        new_body = replace_between_markers(body, start_marker, end_marker, new_content)
        if new_body is None:
            LOGGER.warning(
                "Markers %s/%s not found in %s#%s body", start_marker, end_marker, self._repo, self._issue_id
            )
            return
        self._request("PATCH", self._issue_endpoint(), {"body": new_body})
