"""
Discord bot client - lean event handling.

Business logic is delegated to the trigger engine and the welcome module;
the client only wires Discord events to them.
"""
from __future__ import annotations

import logging

import discord

from core.config import BotConfig
from modules.welcome import handle_member_join
from triggers import CommandRegistry, TriggerEngine

logger = logging.getLogger("greetbot")


class GreetBot(discord.Client):
    """
    Main Discord bot client.

    Handles:
    - member joins (welcome card)
    - messages (setup commands and triggers)
    """

    def __init__(self, config: BotConfig, registry: CommandRegistry) -> None:
        intents = discord.Intents.default()
        intents.message_content = True
        intents.members = True
        intents.guilds = True
        super().__init__(intents=intents)

        self.config = config
        self.registry = registry
        self.engine = TriggerEngine(registry)
        self.ready_once = False

    # ─── Lifecycle ────────────────────────────────────────────────────────────

    async def on_ready(self) -> None:
        """Called when the bot is ready."""
        if not self.ready_once:
            self.ready_once = True
            logger.info("✅ Bot is online! Logged in as %s", self.user)
            logger.info("🤖 Monitoring for new members...")
            logger.info("📝 Loaded %d custom commands", len(self.registry))

    # ─── Member Events ────────────────────────────────────────────────────────

    async def on_member_join(self, member: discord.Member) -> None:
        await handle_member_join(member, self.config.welcome_channel_id)

    # ─── Message Events ───────────────────────────────────────────────────────

    async def on_message(self, message: discord.Message) -> None:
        """Handle incoming messages."""
        if message.author.bot:
            return
        if message.guild is None:
            return

        try:
            await self.engine.handle_message(message)
        except Exception:
            logger.exception("Trigger engine error for message %s", message.id)
