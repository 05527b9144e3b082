"""Exceptions raised across the core/adapter boundary."""

from __future__ import annotations


class ConfigError(ValueError):
    """Raised when a service or command definition is malformed."""


class TransportError(RuntimeError):
    """Raised when an outbound HTTP call cannot be completed."""


class TemplateFetchError(RuntimeError):
    """Raised when a configured reply template cannot be retrieved."""
