"""Core domain models.

These dataclasses are shared across the core and adapters to avoid tight
coupling to any webhook- or host-specific types.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Optional, Tuple, Union


@dataclass(frozen=True)
class CommandEvent:
    """Minimal event used by the core processing pipeline."""

    category: str
    text: str
    context: Mapping[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class MatchResult:
    """Captured groups of a single successful pattern evaluation."""

    captures: Tuple[str, ...]

    def group(self, index: int) -> str:
        """Return capture ``index`` (1-based, like ``re.Match.group``)."""

        if index < 1 or index > len(self.captures):
            raise IndexError(f"No capture group {index}")
        return self.captures[index - 1]


@dataclass(frozen=True)
class ServiceDescriptor:
    """Declarative description of an external service call."""

    name: str
    command: str = ""
    url: Optional[str] = None
    method: str = "post"
    headers: Mapping[str, str] = field(default_factory=dict)
    query_params: Mapping[str, Any] = field(default_factory=dict)
    mapping: Mapping[str, str] = field(default_factory=dict)
    data_from_issue: Tuple[str, ...] = ()
    silent: bool = False
    template_file: Optional[str] = None
    description: str = ""


@dataclass(frozen=True)
class ServiceResponse:
    status: int
    body: str = ""


@dataclass(frozen=True)
class Reply:
    """A message that should be posted back through the respond channel."""

    text: str


@dataclass(frozen=True)
class Suppressed:
    """No message should be posted; ``reason`` says why."""

    reason: str


Outcome = Union[Reply, Suppressed]
