"""Ports (interfaces) used by the core pipeline.

Ports define the minimal contracts for HTTP, template and issue adapters so
that the core can be reused with different backends.
"""

from __future__ import annotations

from typing import Any, Mapping, Protocol

from core.models import ServiceResponse


class HttpTransportPort(Protocol):
    """Blocking HTTP calls used by the external service invoker.

    Non-2xx answers are returned as responses; only failures to complete the
    exchange raise ``TransportError``.
    """

    def get(self, url: str, params: Mapping[str, Any], headers: Mapping[str, str]) -> ServiceResponse:
        ...

    def post(self, url: str, body: str, headers: Mapping[str, str]) -> ServiceResponse:
        ...


class TemplateFetcherPort(Protocol):
    """Reads reply templates by location (URL or path)."""

    def fetch(self, location: str) -> str:
        ...


class IssueChannelPort(Protocol):
    """Respond and document-mutation operations for one issue."""

    def respond(self, message: str) -> None:
        ...

    def update_body(self, start_marker: str, end_marker: str, new_content: str) -> None:
        ...
