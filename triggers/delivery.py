"""
Delivery of rendered trigger replies.

The reply goes to the channel the trigger message arrived in, with the
chosen image attached as an embed.
"""
from __future__ import annotations

import logging

import discord

from core.types import RenderRequest

logger = logging.getLogger("greetbot.delivery")


def build_embed(request: RenderRequest) -> discord.Embed:
    embed = discord.Embed()
    embed.set_image(url=request.image_url)
    return embed


async def send_render(channel: discord.abc.Messageable, request: RenderRequest) -> bool:
    """Send a render request. Returns True if Discord accepted the message."""
    try:
        await channel.send(
            content=request.text,
            embed=build_embed(request),
            allowed_mentions=discord.AllowedMentions.none(),
        )
    except discord.HTTPException as exc:
        logger.warning("Failed to send trigger reply: %s", exc)
        return False
    return True
