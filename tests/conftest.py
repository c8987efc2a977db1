"""
Shared pytest fixtures for trigger engine tests.
"""

from types import SimpleNamespace
from unittest.mock import AsyncMock

import pytest

from core.types import Command
from triggers.registry import CommandRegistry
from triggers.store import CommandStore

SETUP_CHANNEL_ID = 1427688994967388341
OTHER_CHANNEL_ID = 1426618374359613634


class MemoryStore:
    """In-memory stand-in for CommandStore that records saves."""

    def __init__(self, commands=None, fail=False):
        self.saved = dict(commands or {})
        self.fail = fail
        self.save_calls = 0

    async def load(self):
        return {name: command.copy() for name, command in self.saved.items()}

    async def save(self, commands):
        self.save_calls += 1
        if self.fail:
            return False
        self.saved = {name: command.copy() for name, command in commands.items()}
        return True


@pytest.fixture
def commands_path(tmp_path):
    return tmp_path / "commands.json"


@pytest.fixture
def file_store(commands_path):
    return CommandStore(commands_path)


@pytest.fixture
def memory_store():
    return MemoryStore()


@pytest.fixture
def registry(memory_store):
    return CommandRegistry(memory_store, SETUP_CHANNEL_ID)


@pytest.fixture
def poke_command():
    return Command(name="poke", template="{@me} pokes {@user}", images=["http://x/1.gif"])


def make_user(user_id, name, bot=False):
    return SimpleNamespace(id=user_id, name=name, bot=bot)


def make_guild(display_names=None):
    """Guild whose member cache maps user id -> display name."""
    display_names = display_names or {}

    def get_member(user_id):
        if user_id not in display_names:
            return None
        return SimpleNamespace(id=user_id, display_name=display_names[user_id])

    return SimpleNamespace(get_member=get_member)


def make_message(content, author=None, mentions=(), channel_id=OTHER_CHANNEL_ID, guild=None):
    author = author or make_user(1, "al")
    return SimpleNamespace(
        id=99,
        content=content,
        author=author,
        mentions=list(mentions),
        guild=guild if guild is not None else make_guild(),
        channel=SimpleNamespace(id=channel_id, send=AsyncMock()),
        reply=AsyncMock(),
    )
