"""
Command registry - the in-memory command set and its mutation protocol.

Mutations are only accepted from the setup channel. Each mutation is staged
on a copy of the mapping, persisted, and committed to memory only once the
save succeeded, so memory and disk never diverge.
"""
from __future__ import annotations

import asyncio
import logging
from typing import Dict, Iterator, Optional

from core.constants import MAX_IMAGES
from core.errors import (
    ADD_USAGE,
    DELETE_FAILED,
    DELETE_USAGE,
    EDIT_USAGE,
    CapacityExceeded,
    MissingArgument,
    NotFound,
    PersistenceFailure,
    Unauthorized,
)
from core.types import Command

from .store import CommandStore

logger = logging.getLogger("greetbot.registry")


class CommandRegistry:
    """Owns the command mapping; constructed at startup and passed explicitly."""

    def __init__(
        self,
        store: CommandStore,
        setup_channel_id: int,
        commands: Optional[Dict[str, Command]] = None,
    ) -> None:
        self.store = store
        self.setup_channel_id = setup_channel_id
        self._commands: Dict[str, Command] = dict(commands or {})
        self._lock = asyncio.Lock()

    @classmethod
    async def open(cls, store: CommandStore, setup_channel_id: int) -> CommandRegistry:
        """Build a registry from the store's current contents."""
        return cls(store, setup_channel_id, await store.load())

    # ─── Read access ──────────────────────────────────────────────────────────

    def __len__(self) -> int:
        return len(self._commands)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name.lower() in self._commands

    def __iter__(self) -> Iterator[Command]:
        return iter(list(self._commands.values()))

    def get(self, name: str) -> Optional[Command]:
        return self._commands.get(name.lower())

    # ─── Authorization ────────────────────────────────────────────────────────

    def is_authorized(self, channel_id: int) -> bool:
        return channel_id == self.setup_channel_id

    def authorize(self, channel_id: int) -> None:
        if not self.is_authorized(channel_id):
            raise Unauthorized()

    # ─── Mutations ────────────────────────────────────────────────────────────

    async def _commit(self, staged: Dict[str, Command], failure_reply: Optional[str] = None) -> None:
        if not await self.store.save(staged):
            raise PersistenceFailure(failure_reply)
        self._commands = staged

    async def add(self, name: str, image_url: str, template: str, *, channel_id: int) -> Command:
        """
        Register a command with a single image.

        An existing command of the same name is replaced.
        """
        self.authorize(channel_id)
        if not name or not image_url or not template:
            raise MissingArgument(ADD_USAGE)

        async with self._lock:
            command = Command(name=name.lower(), template=template, images=[image_url])
            staged = dict(self._commands)
            if command.name in staged:
                logger.info("Overwriting existing command %s", command.name)
            staged[command.name] = command
            await self._commit(staged)
            logger.info("Added command %s", command.name)
            return command

    async def edit(self, name: str, image_url: str, *, channel_id: int) -> Command:
        """Append an image to an existing command's pool."""
        self.authorize(channel_id)
        if not name or not image_url:
            raise MissingArgument(EDIT_USAGE)

        async with self._lock:
            key = name.lower()
            current = self._commands.get(key)
            if current is None:
                raise NotFound(key)
            if len(current.images) >= MAX_IMAGES:
                raise CapacityExceeded()

            updated = current.copy()
            updated.images.append(image_url)
            staged = dict(self._commands)
            staged[key] = updated
            await self._commit(staged)
            logger.info("Added image to %s (%d/%d)", key, len(updated.images), MAX_IMAGES)
            return updated

    async def delete(self, name: str, *, channel_id: int) -> Command:
        """Remove a command. Returns the removed command."""
        self.authorize(channel_id)
        if not name:
            raise MissingArgument(DELETE_USAGE)

        async with self._lock:
            key = name.lower()
            if key not in self._commands:
                raise NotFound(key)

            staged = dict(self._commands)
            removed = staged.pop(key)
            await self._commit(staged, failure_reply=DELETE_FAILED)
            logger.info("Deleted command %s", key)
            return removed
