"""Logging setup for the bot process.

Log lines can carry request URLs and headers, so every handler masks the
values of the environment variables listed under ``logging.redact.patterns``.
"""

from __future__ import annotations

import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from typing import Iterable, Mapping

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class SecretMaskingFormatter(logging.Formatter):
    def __init__(self, secrets: Iterable[str]) -> None:
        super().__init__(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)
        # Longest first so a secret containing another is masked whole.
        self._secrets = sorted({secret for secret in secrets if secret}, key=len, reverse=True)

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        for secret in self._secrets:
            message = message.replace(secret, "***")
        return message


def secret_values(config: Mapping) -> list[str]:
    redact = config.get("redact", {})
    if not redact.get("enabled", True):
        return []
    return [os.environ[name] for name in redact.get("patterns", ["GITHUB_TOKEN"]) if os.environ.get(name)]


def build_handlers(config: Mapping, project_root: str) -> list[logging.Handler]:
    handlers: list[logging.Handler] = []
    if config.get("console", True):
        # stdout belongs to dry-run replies.
        handlers.append(logging.StreamHandler(sys.stderr))

    file_cfg = config.get("file", {})
    if file_cfg.get("enabled", False):
        path = os.path.join(project_root, file_cfg.get("path", "logs/issuebot.log"))
        os.makedirs(os.path.dirname(path), exist_ok=True)
        handlers.append(
            RotatingFileHandler(
                path,
                maxBytes=int(file_cfg.get("max_bytes", 5 * 1024 * 1024)),
                backupCount=int(file_cfg.get("backup_count", 5)),
                encoding="utf-8",
            )
        )

    formatter = SecretMaskingFormatter(secret_values(config))
    for handler in handlers:
        handler.setFormatter(formatter)
    return handlers


def configure_logging(config: Mapping, project_root: str) -> None:
    if not config.get("enabled", True):
        return
    handlers = build_handlers(config, project_root)
    if handlers:
        level = getattr(logging, str(config.get("level", "INFO")).upper(), logging.INFO)
        logging.basicConfig(level=level, handlers=handlers)
