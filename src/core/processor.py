"""Core event processing pipeline.

This module is integration-agnostic. It only relies on the issue channel port
for replies and body edits, enabling other event sources without changes here.
"""

from __future__ import annotations

import logging
from typing import Iterable, List

from core.commands import Command
from core.models import CommandEvent, Outcome, Reply
from core.ports import IssueChannelPort

LOGGER = logging.getLogger(__name__)


class EventProcessor:
    """Matches events against the command table and relays replies."""

    def __init__(self, commands: Iterable[Command]) -> None:
        self._commands = list(commands)

    @property
    def commands(self) -> List[Command]:
        return list(self._commands)

    def handle(self, event: CommandEvent, channel: IssueChannelPort) -> List[Outcome]:
        """Run every matching command for one event.

        A ``Reply`` is posted through the channel exactly once; a
        ``Suppressed`` outcome posts nothing. Handler exceptions propagate.
        """

        outcomes: List[Outcome] = []
        if not event.text.strip():
            return outcomes

        for command in self._commands:
            match = command.pattern.match(event.category, event.text)
            if match is None:
                continue
            LOGGER.info("Command %s matched (%s)", command.name, event.category)
            outcome = command.handler(match, event, channel)
            if isinstance(outcome, Reply):
                channel.respond(outcome.text)
            else:
                LOGGER.info("No reply for %s (%s)", command.name, outcome.reason)
            outcomes.append(outcome)

        return outcomes
