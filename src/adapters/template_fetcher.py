"""Template fetcher adapter.

Reads reply templates from http(s) URLs or from the local filesystem.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional
import urllib.error
import urllib.request

from core.errors import TemplateFetchError

_URL_PREFIXES = ("http://", "https://")


class TemplateFetcher:
    """Fetch templates by location; every call reads the source again."""

    def __init__(self, timeout: float = 10.0, root: Optional[str] = None) -> None:
        self._timeout = timeout
        self._root = Path(root) if root else None

    def fetch(self, location: str) -> str:
        if location.startswith(_URL_PREFIXES):
            return self._fetch_url(location)
        return self._read_file(location)

    def _fetch_url(self, url: str) -> str:
        try:
            with urllib.request.urlopen(url, timeout=self._timeout) as response:
                return response.read().decode("utf-8")
        except (urllib.error.URLError, TimeoutError, UnicodeDecodeError) as e:
            raise TemplateFetchError(f"Could not fetch template {url}: {e}") from e

    def _read_file(self, location: str) -> str:
        path = Path(location)
        if self._root is not None and not path.is_absolute():
            path = self._root / path
        try:
            return path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise TemplateFetchError(f"Could not read template {path}: {e}") from e
