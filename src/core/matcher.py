"""Command pattern compilation and matching logic (core domain)."""

from __future__ import annotations

from dataclasses import dataclass
import re
from typing import Optional

from core.models import MatchResult


@dataclass(frozen=True)
class CommandPattern:
    """Compiled command grammar bound to one event category."""

    category: str
    regex: re.Pattern

    def match(self, category: str, text: str) -> Optional[MatchResult]:
        """Return the captures when ``text`` is exactly this command.

        Events of any other category never match, and the pattern must
        consume the whole text apart from surrounding whitespace.
        """

        if category != self.category:
            return None
        found = self.regex.fullmatch(text)
        if found is None:
            return None
        return MatchResult(captures=tuple(group or "" for group in found.groups()))


def build_command_pattern(bot_name: str, grammar: str, category: str) -> CommandPattern:
    """Compile ``@<bot_name> <grammar>`` into an anchored, case-insensitive pattern.

    ``grammar`` is a regular expression fragment; the bot name is inserted as
    a literal so names containing regex metacharacters stay harmless.
    """

    if not bot_name:
        raise ValueError("bot_name is required to build command patterns")
    source = rf"\s*@{re.escape(bot_name)}\s+{grammar}\s*"
    return CommandPattern(category=category, regex=re.compile(source, re.IGNORECASE))


def literal_grammar(command: str) -> str:
    """Turn a plain command phrase (e.g. ``run specs``) into a grammar fragment.

    Words may be separated by any run of whitespace and a trailing period is
    tolerated, so ``@bot run  specs.`` still matches.
    """

    words = [re.escape(word) for word in command.split()]
    if not words:
        raise ValueError("command phrase must not be empty")
    return r"\s+".join(words) + r"\.?"
