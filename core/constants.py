"""
Constants for trigger commands.

Using constants instead of string literals provides:
- Typo protection (caught at import time)
- Single source of truth for tokens and on-disk keys
"""
from __future__ import annotations


class Action:
    """Mutation actions accepted in the setup channel."""
    ADD = "add"
    EDIT = "edit"
    DELETE = "delete"

    ALL = (ADD, EDIT, DELETE)


class Placeholder:
    """Template tokens replaced when a trigger fires."""
    USER = "{@user}"
    SENDER = "{@me}"


class StoreKey:
    """Field names in the persisted commands file."""
    TEMPLATE = "message"
    IMAGES = "gifs"


MAX_IMAGES = 5
DEFAULT_COMMAND_PREFIX = "/command "
