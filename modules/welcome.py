"""
Welcome module - greets new members with a generated card.

The card is a 400x200 PNG with the member's avatar in a circle and a short
caption. Pillow rendering runs in a worker thread; the avatar download has
its own timeout and a failed download only drops the avatar.
"""
from __future__ import annotations

import asyncio
import io
import logging
from typing import Optional

import aiohttp
import discord
from PIL import Image, ImageDraw, ImageFont

logger = logging.getLogger("greetbot.welcome")

CARD_SIZE = (400, 200)
AVATAR_CENTER = (200, 70)
AVATAR_RADIUS = 50
AVATAR_FETCH_SIZE = 128
MAX_AVATAR_BYTES = 2 * 1024 * 1024


def _load_font(size: int):
    try:
        return ImageFont.truetype("arial.ttf", size)
    except OSError:
        return ImageFont.load_default()


def _draw_centered(draw: ImageDraw.ImageDraw, y: int, text: str, font, fill: str) -> None:
    left, top, right, bottom = draw.textbbox((0, 0), text, font=font)
    x = (CARD_SIZE[0] - (right - left)) / 2
    draw.text((x, y - (bottom - top)), text, font=font, fill=fill)


def _paste_avatar(card: Image.Image, avatar_bytes: bytes) -> None:
    diameter = AVATAR_RADIUS * 2
    avatar = Image.open(io.BytesIO(avatar_bytes)).convert("RGBA").resize((diameter, diameter))

    mask = Image.new("L", (diameter, diameter), 0)
    ImageDraw.Draw(mask).ellipse((0, 0, diameter - 1, diameter - 1), fill=255)

    cx, cy = AVATAR_CENTER
    card.paste(avatar, (cx - AVATAR_RADIUS, cy - AVATAR_RADIUS), mask)


def render_welcome_card(display_tag: str, member_count: int, avatar_bytes: Optional[bytes] = None) -> bytes:
    """Draw the welcome card and return PNG bytes."""
    card = Image.new("RGB", CARD_SIZE, color="#000000")

    if avatar_bytes:
        try:
            _paste_avatar(card, avatar_bytes)
        except (OSError, ValueError) as exc:
            logger.error("Error loading avatar: %s", exc)

    draw = ImageDraw.Draw(card)
    _draw_centered(draw, 145, f"{display_tag} just joined the server", _load_font(16), "#ffffff")
    _draw_centered(draw, 170, f"Member #{member_count}", _load_font(14), "#aaaaaa")

    buffer = io.BytesIO()
    card.save(buffer, format="PNG")
    return buffer.getvalue()


async def fetch_avatar(url: str) -> Optional[bytes]:
    """Download an avatar image. Returns None on any failure."""
    try:
        timeout = aiohttp.ClientTimeout(total=15, connect=5, sock_read=10)
        async with aiohttp.ClientSession(timeout=timeout) as session:
            async with session.get(url) as resp:
                if resp.status != 200:
                    logger.warning("Avatar download returned HTTP %s", resp.status)
                    return None
                chunks = []
                total_size = 0
                async for chunk in resp.content.iter_chunked(8192):
                    total_size += len(chunk)
                    if total_size > MAX_AVATAR_BYTES:
                        logger.warning("Avatar larger than %d bytes, skipping", MAX_AVATAR_BYTES)
                        return None
                    chunks.append(chunk)
    except (aiohttp.ClientError, asyncio.TimeoutError) as exc:
        logger.warning("Avatar download failed: %s", exc)
        return None

    return b"".join(chunks)


def _member_tag(member: discord.Member) -> str:
    if member.discriminator and member.discriminator != "0":
        return f"{member.name}#{member.discriminator}"
    return member.name


async def handle_member_join(member: discord.Member, channel_id: Optional[int]) -> bool:
    """
    Post the welcome card for a new member.

    Returns True if the card was sent.
    """
    if channel_id is None:
        return False

    channel = member.guild.get_channel(channel_id)
    if channel is None:
        logger.error("❌ Could not find channel with ID: %s", channel_id)
        return False

    tag = _member_tag(member)
    avatar_url = member.display_avatar.with_format("png").with_size(AVATAR_FETCH_SIZE).url
    avatar_bytes = await fetch_avatar(avatar_url)

    try:
        image = await asyncio.to_thread(
            render_welcome_card, tag, member.guild.member_count or 0, avatar_bytes
        )
        await channel.send(file=discord.File(io.BytesIO(image), filename="welcome.png"))
    except (discord.HTTPException, OSError) as exc:
        logger.error("❌ Error sending welcome message: %s", exc)
        return False

    logger.info("✅ Sent welcome message for %s", tag)
    return True
