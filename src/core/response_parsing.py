"""Response body parsing strategies.

A service may answer with a JSON object, a JSON array whose first element is
the payload (sometimes itself a JSON-encoded object), or plain text. Each
strategy below is total: it returns a result or ``None`` and never raises.
"""

from __future__ import annotations

from dataclasses import dataclass
import json
from typing import Any, Callable, Dict, Optional, Sequence


@dataclass(frozen=True)
class ParsedBody:
    """Key/value view of a response body plus the strategy that produced it."""

    values: Dict[str, Any]
    strategy: str


def _load_json(text: str) -> Optional[Any]:
    try:
        return json.loads(text)
    except (TypeError, ValueError, RecursionError):
        return None


def parse_json_object(body: str) -> Optional[ParsedBody]:
    loaded = _load_json(body)
    if isinstance(loaded, dict):
        return ParsedBody(values=loaded, strategy="object")
    return None


def parse_json_array(body: str) -> Optional[ParsedBody]:
    loaded = _load_json(body)
    if not isinstance(loaded, list) or not loaded:
        return None

    first = loaded[0]
    if isinstance(first, dict):
        return ParsedBody(values=first, strategy="array_object")
    if isinstance(first, str):
        nested = _load_json(first)
        if isinstance(nested, dict):
            return ParsedBody(values=nested, strategy="array_object")
        return ParsedBody(values={"response": first}, strategy="array_text")
    return ParsedBody(values={"response": json.dumps(first)}, strategy="array_text")


PARSE_STRATEGIES: Sequence[Callable[[str], Optional[ParsedBody]]] = (
    parse_json_object,
    parse_json_array,
)


def parse_response_body(body: Optional[str]) -> Optional[ParsedBody]:
    """Try each strategy in order; ``None`` means the body is unparseable."""

    if not body:
        return None
    for strategy in PARSE_STRATEGIES:
        parsed = strategy(body)
        if parsed is not None:
            return parsed
    return None
