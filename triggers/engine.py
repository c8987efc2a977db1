"""
Trigger engine - routes messages to the registry or the matcher.

Messages starting with the command prefix are setup commands; everything
else is scanned for triggers.
"""
from __future__ import annotations

import logging
from typing import Optional

import discord

from core.constants import DEFAULT_COMMAND_PREFIX, MAX_IMAGES, Action
from core.errors import CommandError, Unauthorized
from core.types import InboundMessage

from .delivery import send_render
from .inbound import to_inbound
from .matching import TriggerMatcher
from .parsing import parse
from .registry import CommandRegistry

logger = logging.getLogger("greetbot.triggers")


class TriggerEngine:
    """Entry point for message handling; owns no state beyond its collaborators."""

    def __init__(
        self,
        registry: CommandRegistry,
        matcher: Optional[TriggerMatcher] = None,
        prefix: str = DEFAULT_COMMAND_PREFIX,
    ) -> None:
        self.registry = registry
        self.matcher = matcher or TriggerMatcher(registry)
        self.prefix = prefix

    def is_setup_command(self, text: str) -> bool:
        return text.startswith(self.prefix)

    async def execute(self, message: InboundMessage) -> str:
        """Run a setup command and return the reply text."""
        try:
            self.registry.authorize(message.channel_id)
            request = parse(message.text[len(self.prefix):])

            if request.action == Action.ADD:
                command = await self.registry.add(
                    request.name,
                    request.image_url,
                    request.template,
                    channel_id=message.channel_id,
                )
                return f"✅ Command `{command.name}` has been created!"

            if request.action == Action.EDIT:
                command = await self.registry.edit(
                    request.name,
                    request.image_url,
                    channel_id=message.channel_id,
                )
                return f"✅ Added GIF to `{command.name}` ({len(command.images)}/{MAX_IMAGES} GIFs)"

            removed = await self.registry.delete(request.name, channel_id=message.channel_id)
            return f"✅ Command `{removed.name}` has been deleted."
        except Unauthorized as exc:
            logger.info("Rejected setup command from %s in channel %s", message.author_id, message.channel_id)
            return exc.reply
        except CommandError as exc:
            return exc.reply

    async def handle_message(self, message: discord.Message) -> bool:
        """
        Process one Discord message.

        Returns True if the bot replied.
        """
        if message.author.bot:
            return False

        inbound = to_inbound(message)

        if self.is_setup_command(inbound.text):
            reply = await self.execute(inbound)
            try:
                await message.reply(reply)
            except discord.HTTPException as exc:
                logger.warning("Failed to reply to setup command: %s", exc)
                return False
            return True

        request = self.matcher.match(inbound)
        if request is None:
            return False

        logger.info("Trigger fired in channel %s by %s", inbound.channel_id, inbound.author_id)
        return await send_render(message.channel, request)
