"""
Main entry point for the Discord bot.

Loads configuration from environment, loads the command store and starts
the bot.
"""
from __future__ import annotations

import asyncio
import logging
import os
import sys
from pathlib import Path

from dotenv import load_dotenv
from discord.errors import LoginFailure, PrivilegedIntentsRequired

# Load environment variables from .env file
env_path = Path(__file__).parent / ".env"
load_dotenv(env_path)

from bot import GreetBot
from core.config import BotConfig, ConfigError
from triggers import CommandRegistry, CommandStore

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

logging.basicConfig(
    level=getattr(logging, LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger("greetbot")

# Suppress verbose third-party library logs unless LOG_LEVEL is DEBUG
if LOG_LEVEL.upper() != "DEBUG":
    logging.getLogger("discord").setLevel(logging.WARNING)
    logging.getLogger("PIL").setLevel(logging.WARNING)

if not env_path.exists():
    logger.warning(".env file not found at %s", env_path)


async def main() -> int:
    try:
        config = BotConfig.from_env()
    except ConfigError as exc:
        logger.error("Invalid configuration: %s", exc)
        return 1

    if not config.token:
        logger.error("Missing bot token. Set DISCORD_BOT_TOKEN in .env or environment.")
        return 1

    store = CommandStore(config.commands_file)
    registry = await CommandRegistry.open(store, config.setup_channel_id)

    bot = GreetBot(config, registry)
    try:
        await bot.start(config.token)
    except PrivilegedIntentsRequired:
        logger.error(
            "Privileged intents required. Enable MESSAGE CONTENT and SERVER MEMBERS intents "
            "in the Discord developer portal."
        )
        return 1
    except LoginFailure as exc:
        logger.error("❌ Failed to login to Discord: %s", exc)
        return 1
    finally:
        if not bot.is_closed():
            await bot.close()
    return 0


if __name__ == "__main__":
    try:
        sys.exit(asyncio.run(main()))
    except KeyboardInterrupt:
        pass
