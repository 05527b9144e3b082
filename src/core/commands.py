"""Command dispatch table (core domain).

Each command pairs a compiled pattern with a handler. Every registered
command is tried against every event; patterns are expected to be mutually
exclusive, so the order of the table carries no priority.
"""

from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Callable, Iterable, List, Sequence

from core.config import BotConfig
from core.matcher import CommandPattern, build_command_pattern, literal_grammar
from core.models import CommandEvent, MatchResult, Outcome, Reply, ServiceDescriptor
from core.ports import IssueChannelPort
from core.service_invoker import ExternalServiceInvoker

LOGGER = logging.getLogger(__name__)

CommandHandler = Callable[[MatchResult, CommandEvent, IssueChannelPort], Outcome]


@dataclass(frozen=True)
class Command:
    """A registered command: its grammar, handler and help text."""

    name: str
    pattern: CommandPattern
    handler: CommandHandler
    description: str
    example_invocation: str


def reviewer_markers(number: str) -> tuple[str, str]:
    return f"<!--reviewer-{number}-->", f"<!--end-reviewer-{number}-->"


def assign_reviewer_command(bot: BotConfig) -> Command:
    """``@bot assign <user> as reviewer <N>`` fills the reviewer-N slot of the body."""

    def handler(match: MatchResult, event: CommandEvent, channel: IssueChannelPort) -> Outcome:
        reviewer = match.group(1).strip()
        number = match.group(2)
        start_marker, end_marker = reviewer_markers(number)
        channel.update_body(start_marker, end_marker, reviewer)
        return Reply(f"Reviewer {number} assigned!")

    return Command(
        name="assign_reviewer",
        pattern=build_command_pattern(
            bot.bot_name, r"assign\s+(.+?)\s+as\s+reviewer\s+(\S+)", bot.comment_category
        ),
        handler=handler,
        description="Assign a user as the reviewer N of this submission (where N=1,2...)",
        example_invocation=f"@{bot.bot_name} assign @username as reviewer 2",
    )


def external_service_command(
    bot: BotConfig,
    descriptor: ServiceDescriptor,
    invoker: ExternalServiceInvoker,
) -> Command:
    """Forward ``@bot <descriptor.command>`` to the described service."""

    def handler(match: MatchResult, event: CommandEvent, channel: IssueChannelPort) -> Outcome:
        return invoker.invoke(descriptor, event.context)

    return Command(
        name=f"service:{descriptor.name}",
        pattern=build_command_pattern(
            bot.bot_name, literal_grammar(descriptor.command), bot.comment_category
        ),
        handler=handler,
        description=descriptor.description or f"Run the {descriptor.name} service",
        example_invocation=f"@{bot.bot_name} {descriptor.command}",
    )


def format_help(commands: Sequence[Command]) -> str:
    lines = ["Here are the commands you can use:", ""]
    for command in commands:
        lines.append(f"- `{command.example_invocation}`: {command.description}")
    return "\n".join(lines)


def help_command(bot: BotConfig, commands: Sequence[Command]) -> Command:
    """``@bot help`` lists every command, itself included."""

    example = f"@{bot.bot_name} help"
    description = "List all available commands"

    def handler(match: MatchResult, event: CommandEvent, channel: IssueChannelPort) -> Outcome:
        return Reply(format_help(listed))

    command = Command(
        name="help",
        pattern=build_command_pattern(bot.bot_name, r"help", bot.comment_category),
        handler=handler,
        description=description,
        example_invocation=example,
    )
    listed = [*commands, command]
    return command


def build_commands(
    bot: BotConfig,
    descriptors: Iterable[ServiceDescriptor],
    invoker: ExternalServiceInvoker,
) -> List[Command]:
    """Build the full dispatch table for one bot identity."""

    commands: List[Command] = [assign_reviewer_command(bot)]
    for descriptor in descriptors:
        if not descriptor.command:
            LOGGER.warning("Service %s has no command phrase, not registering it", descriptor.name)
            continue
        commands.append(external_service_command(bot, descriptor, invoker))
    commands.append(help_command(bot, commands))

    seen: dict[str, str] = {}
    for command in commands:
        source = command.pattern.regex.pattern.lower()
        if source in seen:
            LOGGER.warning("Commands %s and %s share the same grammar", seen[source], command.name)
        seen.setdefault(source, command.name)
    return commands
