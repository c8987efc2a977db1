"""
Conversion of discord.py messages into InboundMessage.

Display names come from the guild member cache when the user is a member
there; otherwise only the username is known.
"""
from __future__ import annotations

from typing import Optional

import discord

from core.types import InboundMessage, MentionedUser


def _display_name(guild: Optional[discord.Guild], user: discord.abc.User) -> Optional[str]:
    if guild is None:
        return None
    member = guild.get_member(user.id)
    if member is None:
        return None
    return member.display_name


def to_inbound(message: discord.Message) -> InboundMessage:
    guild = message.guild
    return InboundMessage(
        author_id=message.author.id,
        author_username=message.author.name,
        author_display_name=_display_name(guild, message.author),
        channel_id=message.channel.id,
        text=message.content or "",
        mentioned_users=[
            MentionedUser(
                id=user.id,
                username=user.name,
                display_name=_display_name(guild, user),
            )
            for user in message.mentions
        ],
    )
