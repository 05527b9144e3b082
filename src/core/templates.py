"""Reply template helpers."""

from __future__ import annotations

import json
import re
from typing import Any, Mapping, Optional

_PLACEHOLDER = re.compile(r"\{\{\s*([\w.-]+)\s*\}\}")
_URL_PREFIXES = ("http://", "https://")


def render_template(template: str, values: Mapping[str, Any]) -> str:
    """Replace ``{{key}}`` placeholders with ``values[key]``.

    Placeholders without a value are left as written so a partially filled
    template is still readable.
    """

    def _substitute(found: re.Match) -> str:
        key = found.group(1)
        if key not in values:
            return found.group(0)
        value = values[key]
        if value is None:
            return ""
        if isinstance(value, (dict, list)):
            return json.dumps(value, sort_keys=True, ensure_ascii=False)
        return str(value)

    return _PLACEHOLDER.sub(_substitute, template)


class _KeepMissing(dict):
    def __missing__(self, key: str) -> str:
        return "{" + key + "}"


def resolve_template_location(
    template_file: str,
    context: Mapping[str, Any],
    base_url: Optional[str],
) -> str:
    """Return the location a template fetcher should read.

    Absolute URLs are used as-is. Otherwise the file name is appended to
    ``base_url``, whose ``{name}`` fields are filled from the invocation
    context (e.g. ``https://raw.githubusercontent.com/{repo}/main/templates``).
    Without a base URL the file name is returned unchanged.
    """

    if template_file.startswith(_URL_PREFIXES) or not base_url:
        return template_file
    base = base_url.format_map(_KeepMissing({k: v for k, v in context.items()}))
    return f"{base.rstrip('/')}/{template_file.lstrip('/')}"
