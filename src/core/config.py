"""Core configuration dataclasses.

We keep config parsing outside the core, but these dataclasses define the
shape the core expects so adapters and app layers can build safely.
"""

from __future__ import annotations

from dataclasses import dataclass
import string
from typing import Optional

from core.errors import ConfigError

SUCCESS_STATUS_MODES = ("2xx", "200")


def _check_base_url(base_url: str) -> None:
    """Only plain ``{name}`` fields are allowed; they are filled from the context."""

    try:
        fields = [field for _, field, _, _ in string.Formatter().parse(base_url) if field is not None]
    except ValueError as e:
        raise ConfigError(f"Invalid templates_base_url {base_url!r}: {e}") from e
    for field in fields:
        if not field.isidentifier():
            raise ConfigError(f"Invalid field {{{field}}} in templates_base_url {base_url!r}")


@dataclass(frozen=True)
class InvokerConfig:
    """Settings for the external service invoker."""

    success_statuses: str = "2xx"
    templates_base_url: Optional[str] = None

    def __post_init__(self) -> None:
        if self.success_statuses not in SUCCESS_STATUS_MODES:
            raise ValueError(f"Unsupported success_statuses: {self.success_statuses}")
        if self.templates_base_url:
            _check_base_url(self.templates_base_url)

    def is_success(self, status: int) -> bool:
        if self.success_statuses == "200":
            return status == 200
        return 200 <= status <= 299


@dataclass(frozen=True)
class BotConfig:
    """Identity settings shared by every command pattern."""

    bot_name: str
    comment_category: str = "issue_comment.created"
