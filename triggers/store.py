"""
Persistent storage for trigger commands.

The whole command set lives in one pretty-printed JSON file mapping the
lowercase command name to its template and image list. This is the only
place that touches that file.
"""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict

from core.constants import MAX_IMAGES, StoreKey
from core.io_utils import read_json, write_json_atomic
from core.types import Command

logger = logging.getLogger("greetbot.store")


def _coerce_command(name: Any, entry: Any) -> Command | None:
    if not isinstance(name, str) or not name.strip():
        return None
    if not isinstance(entry, dict):
        return None
    template = entry.get(StoreKey.TEMPLATE)
    images = entry.get(StoreKey.IMAGES)
    if not isinstance(template, str) or not isinstance(images, list):
        return None
    images = [url for url in images if isinstance(url, str) and url]
    if not images:
        return None
    return Command(name=name.strip().lower(), template=template, images=images[:MAX_IMAGES])


class CommandStore:
    """JSON file backed store for the command mapping."""

    def __init__(self, path: Path) -> None:
        self.path = path

    async def load(self) -> Dict[str, Command]:
        """
        Load all commands.

        A missing, unreadable or malformed file yields an empty mapping so
        the bot always starts with a valid command set.
        """
        try:
            data = await read_json(self.path, default={})
        except (OSError, json.JSONDecodeError, UnicodeDecodeError) as exc:
            logger.error("Error loading commands from %s: %s", self.path, exc)
            return {}

        if not isinstance(data, dict):
            logger.error("Commands file %s does not contain an object; ignoring it", self.path)
            return {}

        commands: Dict[str, Command] = {}
        for name, entry in data.items():
            command = _coerce_command(name, entry)
            if command is None:
                logger.warning("Skipping malformed command entry %r", name)
                continue
            commands[command.name] = command
        return commands

    async def save(self, commands: Dict[str, Command]) -> bool:
        """Write the full mapping. Returns False if the write failed."""
        payload = {name: command.to_dict() for name, command in commands.items()}
        try:
            await write_json_atomic(self.path, payload)
        except (OSError, TypeError, ValueError) as exc:
            logger.error("Error saving commands to %s: %s", self.path, exc)
            return False
        return True
