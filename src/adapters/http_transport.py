"""urllib-based HTTP transport adapter.

Implements the core HttpTransportPort with blocking stdlib requests.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping
import urllib.error
import urllib.parse
import urllib.request

from core.errors import TransportError
from core.models import ServiceResponse

LOGGER = logging.getLogger(__name__)


def _query_value(value: Any) -> Any:
    # Booleans are spelled as in JSON bodies.
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, tuple)):
        return [_query_value(item) for item in value]
    return value


def encode_query(url: str, params: Mapping[str, Any]) -> str:
    """Append ``params`` to ``url`` as a query string, dropping null values."""

    pairs = {key: _query_value(value) for key, value in params.items() if value is not None}
    if not pairs:
        return url
    query = urllib.parse.urlencode(pairs, doseq=True)
    separator = "&" if urllib.parse.urlsplit(url).query else "?"
    return f"{url}{separator}{query}"


class UrllibHttpTransport:
    """Thin urllib wrapper that satisfies the HttpTransportPort contract."""

    def __init__(self, timeout: float = 30.0) -> None:
        self._timeout = timeout

    def get(self, url: str, params: Mapping[str, Any], headers: Mapping[str, str]) -> ServiceResponse:
        request = urllib.request.Request(encode_query(url, params), headers=dict(headers), method="GET")
        return self._send(request)

    def post(self, url: str, body: str, headers: Mapping[str, str]) -> ServiceResponse:
        request = urllib.request.Request(
            url, data=body.encode("utf-8"), headers=dict(headers), method="POST"
        )
        return self._send(request)

    def _send(self, request: urllib.request.Request) -> ServiceResponse:
        LOGGER.debug("%s %s", request.get_method(), request.full_url)
        try:
            with urllib.request.urlopen(request, timeout=self._timeout) as response:
                body = response.read().decode("utf-8", errors="replace")
                return ServiceResponse(status=response.status, body=body)
        except urllib.error.HTTPError as e:
            # Error statuses are part of the contract, not transport failures.
            body = e.read().decode("utf-8", errors="replace")
            return ServiceResponse(status=e.code, body=body)
        except (urllib.error.URLError, TimeoutError) as e:
            raise TransportError(f"Request to {request.full_url} failed: {e}") from e
