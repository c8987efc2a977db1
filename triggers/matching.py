"""
Trigger matching and template rendering.

A message fires at most one trigger: the first registered command whose
name appears anywhere in the message, compared case-insensitively. There is
no word-boundary check, so ``hug`` fires on "HUGGING".
"""
from __future__ import annotations

import random
from typing import Callable, Iterable, Optional, Sequence

from core.constants import Placeholder
from core.types import Command, InboundMessage, RenderRequest

Chooser = Callable[[Sequence[str]], str]


def find_trigger(text: str, commands: Iterable[Command]) -> Optional[Command]:
    """Return the first command whose name is a substring of ``text``."""
    haystack = text.lower()
    for command in commands:
        if command.name.lower() in haystack:
            return command
    return None


def render_template(template: str, mentioned: str, sender: str) -> str:
    """Replace every placeholder occurrence literally."""
    return template.replace(Placeholder.USER, mentioned).replace(Placeholder.SENDER, sender)


class TriggerMatcher:
    """Resolves an inbound message into a render request."""

    def __init__(self, commands: Iterable[Command], chooser: Chooser = random.choice) -> None:
        self.commands = commands
        self.chooser = chooser

    def match(self, message: InboundMessage) -> Optional[RenderRequest]:
        if not message.mentioned_users:
            return None

        command = find_trigger(message.text, self.commands)
        if command is None:
            return None

        image_url = self.chooser(command.images)
        text = render_template(
            command.template,
            mentioned=message.mentioned_users[0].resolved_name,
            sender=message.author_name,
        )
        return RenderRequest(text=text, image_url=image_url)
