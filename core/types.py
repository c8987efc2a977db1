"""
Type definitions and dataclasses for the bot.

Commands are persisted through to_dict/from_dict; the inbound and render
shapes keep the trigger engine independent of discord.py objects.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .constants import Action, StoreKey


@dataclass
class Command:
    """A named trigger with its reply template and image pool."""
    name: str
    template: str
    images: list[str] = field(default_factory=list)

    def copy(self) -> Command:
        return Command(name=self.name, template=self.template, images=list(self.images))

    def to_dict(self) -> dict[str, Any]:
        return {
            StoreKey.TEMPLATE: self.template,
            StoreKey.IMAGES: list(self.images),
        }

    @classmethod
    def from_dict(cls, name: str, data: dict[str, Any]) -> Command:
        return cls(
            name=name.lower(),
            template=data.get(StoreKey.TEMPLATE, ""),
            images=list(data.get(StoreKey.IMAGES) or []),
        )


@dataclass
class MentionedUser:
    """A user referenced in a message."""
    id: int
    username: str
    display_name: str | None = None

    @property
    def resolved_name(self) -> str:
        return self.display_name or self.username


@dataclass
class InboundMessage:
    """Platform-neutral view of an incoming message."""
    author_id: int
    author_username: str
    channel_id: int
    text: str
    author_display_name: str | None = None
    mentioned_users: list[MentionedUser] = field(default_factory=list)

    @property
    def author_name(self) -> str:
        return self.author_display_name or self.author_username


@dataclass
class MutationRequest:
    """
    A parsed setup command.

    Missing positional arguments are empty strings; the registry decides
    which of them are required for the action.
    """
    action: str
    name: str = ""
    image_url: str = ""
    template: str = ""

    @property
    def is_known_action(self) -> bool:
        return self.action in Action.ALL


@dataclass
class RenderRequest:
    """A resolved trigger reply: text plus one image reference."""
    text: str
    image_url: str
