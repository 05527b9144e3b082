"""Application entry point for the comment-command bot."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Optional

from art import tprint
import settings
from log_config import configure_logging
from adapters.console_channel import ConsoleIssueChannel
from adapters.github_issue import GitHubIssueChannel
from adapters.http_transport import UrllibHttpTransport
from adapters.template_fetcher import TemplateFetcher
from adapters.webhook_mapper import build_event
from core.commands import build_commands, format_help
from core.config import BotConfig, InvokerConfig
from core.processor import EventProcessor
from core.service_invoker import ExternalServiceInvoker, build_service_descriptors

NAME = "ISSUEBOT"
FONT = "tarty-1"


def _print_banner() -> None:
    tprint(NAME, FONT, space=1)


def _build_processor() -> EventProcessor:
    if not settings.BOT_NAME:
        raise RuntimeError("bot_name must be set in config.json or BOT_NAME")

    bot = BotConfig(bot_name=settings.BOT_NAME, comment_category=settings.COMMENT_CATEGORY)
    invoker = ExternalServiceInvoker(
        transport=UrllibHttpTransport(timeout=settings.HTTP_TIMEOUT),
        template_fetcher=TemplateFetcher(root=settings.PROJECT_ROOT),
        config=InvokerConfig(
            success_statuses=settings.SUCCESS_STATUSES,
            templates_base_url=settings.TEMPLATES_BASE_URL,
        ),
    )
    descriptors = build_service_descriptors(settings.SERVICES_CONFIG)
    commands = build_commands(bot, descriptors, invoker)
    logging.getLogger(__name__).info("%s commands are loaded", len(commands))
    return EventProcessor(commands)


def _load_payload(path: str) -> dict:
    if path == "-":
        return json.load(sys.stdin)
    with open(path, "r", encoding="utf-8") as handle:
        return json.load(handle)


def _handle(event_name: str, payload_path: str, dry_run: bool, body_path: Optional[str]) -> int:
    logger = logging.getLogger(__name__)
    processor = _build_processor()
    payload = _load_payload(payload_path)

    event = build_event(event_name, payload, settings.BOT_NAME)
    if event is None:
        logger.info("Delivery %s carries no command text, ignoring", event_name)
        return 0

    if dry_run:
        body = ""
        if body_path:
            with open(body_path, "r", encoding="utf-8") as handle:
                body = handle.read()
        channel = ConsoleIssueChannel(body)
    else:
        repo = event.context.get("repo")
        issue_id = event.context.get("issue_id")
        if not repo or issue_id is None:
            raise RuntimeError("Payload has no repository or issue number")
        channel = GitHubIssueChannel(
            repo=repo,
            issue_id=int(issue_id),
            token=settings.GITHUB_TOKEN,
            api_url=settings.GITHUB_API_URL,
        )

    # Failures are logged, never posted back as comments.
    try:
        outcomes = processor.handle(event, channel)
    except Exception:
        logger.exception("Error while processing %s", event.category)
        return 1

    logger.info("Processed %s: %s command(s) matched", event.category, len(outcomes))
    if dry_run and body_path:
        print(channel.body)
    return 0


def _list_commands() -> None:
    processor = _build_processor()
    print(format_help(processor.commands))


def main(argv: Optional[list[str]] = None) -> int:
    parser = argparse.ArgumentParser(prog="issuebot")
    subparsers = parser.add_subparsers(dest="command")

    handle_parser = subparsers.add_parser("handle", help="Process one webhook delivery")
    handle_parser.add_argument("--event", required=True, help="Webhook event name, e.g. issue_comment")
    handle_parser.add_argument("--payload", default="-", help="Path to the JSON payload ('-' for stdin)")
    handle_parser.add_argument("--dry-run", action="store_true", help="Print replies instead of posting them")
    handle_parser.add_argument("--body", help="Issue body file used by --dry-run for body edits")

    subparsers.add_parser("commands", help="List the available commands")

    args = parser.parse_args(argv)
    configure_logging(settings.LOGGING or {}, settings.PROJECT_ROOT)
    if args.command == "handle":
        return _handle(args.event, args.payload, args.dry_run, args.body)
    if args.command == "commands":
        _print_banner()
        _list_commands()
        return 0
    parser.print_help()
    return 0


if __name__ == "__main__":
    sys.exit(main())
