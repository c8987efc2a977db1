"""
Tests for the command registry mutation protocol.

Tests add/edit/delete post-conditions, the setup channel boundary and
transactional persistence.
"""

import asyncio

import pytest

from core.errors import (
    CapacityExceeded,
    MissingArgument,
    NotFound,
    PersistenceFailure,
    Unauthorized,
)
from core.types import Command
from triggers.registry import CommandRegistry
from triggers.store import CommandStore

from conftest import OTHER_CHANNEL_ID, SETUP_CHANNEL_ID, MemoryStore


def add(registry, name, url, template, channel_id=SETUP_CHANNEL_ID):
    return asyncio.run(registry.add(name, url, template, channel_id=channel_id))


def edit(registry, name, url, channel_id=SETUP_CHANNEL_ID):
    return asyncio.run(registry.edit(name, url, channel_id=channel_id))


def delete(registry, name, channel_id=SETUP_CHANNEL_ID):
    return asyncio.run(registry.delete(name, channel_id=channel_id))


class TestAdd:
    def test_add_registers_lowercased_command_with_single_image(self, registry, memory_store):
        add(registry, "Hug", "http://x/hug.gif", "{@me} hugs {@user}")

        command = registry.get("hug")
        assert command == Command(name="hug", template="{@me} hugs {@user}", images=["http://x/hug.gif"])
        assert memory_store.saved["hug"] == command

    def test_lookup_is_case_insensitive(self, registry):
        add(registry, "hug", "u", "t")

        assert "HUG" in registry
        assert registry.get("HuG") is not None

    def test_duplicate_add_overwrites_existing_command(self, registry, memory_store):
        add(registry, "poke", "url1", "text")
        edit(registry, "poke", "url1b")
        add(registry, "poke", "url2", "othertext")

        assert len(registry) == 1
        assert registry.get("poke") == Command(name="poke", template="othertext", images=["url2"])
        assert memory_store.saved["poke"].images == ["url2"]

    @pytest.mark.parametrize(
        "name,url,template",
        [("", "u", "t"), ("n", "", "t"), ("n", "u", "")],
    )
    def test_add_requires_all_arguments(self, registry, memory_store, name, url, template):
        with pytest.raises(MissingArgument) as excinfo:
            add(registry, name, url, template)

        assert "/command add" in excinfo.value.reply
        assert len(registry) == 0
        assert memory_store.save_calls == 0


class TestEdit:
    def test_edit_appends_image(self, registry):
        add(registry, "hug", "a.gif", "t")

        command = edit(registry, "HUG", "b.gif")

        assert command.images == ["a.gif", "b.gif"]
        assert registry.get("hug").images[-1] == "b.gif"

    def test_edit_rejects_full_pool_without_mutation(self, registry, memory_store):
        add(registry, "hug", "1.gif", "t")
        for i in range(2, 6):
            edit(registry, "hug", f"{i}.gif")
        saves_before = memory_store.save_calls

        with pytest.raises(CapacityExceeded):
            edit(registry, "hug", "6.gif")

        assert registry.get("hug").images == [f"{i}.gif" for i in range(1, 6)]
        assert memory_store.save_calls == saves_before

    def test_edit_unknown_command(self, registry):
        with pytest.raises(NotFound) as excinfo:
            edit(registry, "ghost", "x.gif")

        assert "`ghost` does not exist" in excinfo.value.reply

    def test_edit_requires_name_and_url(self, registry):
        with pytest.raises(MissingArgument) as excinfo:
            edit(registry, "hug", "")

        assert "/command edit" in excinfo.value.reply


class TestDelete:
    def test_delete_removes_command(self, registry, memory_store):
        add(registry, "hug", "a.gif", "t")

        removed = delete(registry, "Hug")

        assert removed.name == "hug"
        assert "hug" not in registry
        assert memory_store.saved == {}

    def test_delete_unknown_command_mutates_nothing(self, registry, memory_store):
        add(registry, "hug", "a.gif", "t")
        saves_before = memory_store.save_calls

        with pytest.raises(NotFound):
            delete(registry, "poke")

        assert "hug" in registry
        assert memory_store.save_calls == saves_before

    def test_delete_requires_name(self, registry):
        with pytest.raises(MissingArgument):
            delete(registry, "")


class TestAuthorization:
    def test_mutations_outside_setup_channel_are_rejected(self, registry, memory_store):
        add(registry, "hug", "a.gif", "t")
        saves_before = memory_store.save_calls

        with pytest.raises(Unauthorized):
            add(registry, "poke", "p.gif", "t", channel_id=OTHER_CHANNEL_ID)
        with pytest.raises(Unauthorized):
            edit(registry, "hug", "b.gif", channel_id=OTHER_CHANNEL_ID)
        with pytest.raises(Unauthorized):
            delete(registry, "hug", channel_id=OTHER_CHANNEL_ID)

        assert [c.name for c in registry] == ["hug"]
        assert registry.get("hug").images == ["a.gif"]
        assert memory_store.save_calls == saves_before

    def test_unauthorized_is_checked_before_arguments(self, registry):
        with pytest.raises(Unauthorized):
            add(registry, "", "", "", channel_id=OTHER_CHANNEL_ID)


class TestPersistence:
    def test_failed_save_leaves_memory_unchanged(self, poke_command):
        store = MemoryStore({"poke": poke_command}, fail=True)
        registry = CommandRegistry(store, SETUP_CHANNEL_ID, {"poke": poke_command.copy()})

        with pytest.raises(PersistenceFailure):
            add(registry, "hug", "a.gif", "t")
        with pytest.raises(PersistenceFailure):
            edit(registry, "poke", "2.gif")
        with pytest.raises(PersistenceFailure) as excinfo:
            delete(registry, "poke")

        assert excinfo.value.reply == "❌ Failed to delete command."
        assert [c.name for c in registry] == ["poke"]
        assert registry.get("poke").images == ["http://x/1.gif"]

    def test_mutations_survive_reload(self, commands_path):
        store = CommandStore(commands_path)
        registry = asyncio.run(CommandRegistry.open(store, SETUP_CHANNEL_ID))

        add(registry, "hug", "a.gif", "{@me} hugs {@user}")
        edit(registry, "hug", "b.gif")
        add(registry, "wave", "w.gif", "{@me} waves")
        delete(registry, "wave")

        reloaded = asyncio.run(CommandRegistry.open(CommandStore(commands_path), SETUP_CHANNEL_ID))
        assert [c.name for c in reloaded] == ["hug"]
        assert reloaded.get("hug").images == ["a.gif", "b.gif"]

    def test_concurrent_mutations_are_serialized(self):
        class SlowStore(MemoryStore):
            async def save(self, commands):
                await asyncio.sleep(0)
                return await super().save(commands)

        store = SlowStore()
        registry = CommandRegistry(store, SETUP_CHANNEL_ID)

        async def run():
            await asyncio.gather(
                registry.add("hug", "h.gif", "t", channel_id=SETUP_CHANNEL_ID),
                registry.add("poke", "p.gif", "t", channel_id=SETUP_CHANNEL_ID),
            )

        asyncio.run(run())

        assert sorted(store.saved) == ["hug", "poke"]
        assert sorted(c.name for c in registry) == ["hug", "poke"]
