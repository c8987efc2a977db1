"""
Error taxonomy for trigger command handling.

Every error carries the reply shown to the user in the originating channel.
None of them are fatal; the engine turns them into replies.
"""
from __future__ import annotations

from .constants import MAX_IMAGES, Placeholder

ADD_USAGE = (
    "❌ Usage: `/command add <name> <gif_url> <message>`\n"
    f"Use `{Placeholder.USER}` for mentioned user and `{Placeholder.SENDER}` for command user"
)
EDIT_USAGE = "❌ Usage: `/command edit <name> <gif_url>`"
DELETE_USAGE = "❌ Usage: `/command delete <name>`"
GENERAL_USAGE = "❌ Usage: `/command add/edit/delete`"
DELETE_FAILED = "❌ Failed to delete command."


class CommandError(Exception):
    """Base class for errors reported back to the requester."""

    reply = "❌ Something went wrong."

    def __init__(self, reply: str | None = None) -> None:
        if reply is not None:
            self.reply = reply
        super().__init__(self.reply)


class Unauthorized(CommandError):
    reply = "❌ Command setup can only be used in the designated setup channel."


class ParseError(CommandError):
    reply = GENERAL_USAGE


class MissingArgument(CommandError):
    reply = GENERAL_USAGE


class NotFound(CommandError):
    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"❌ Command `{name}` does not exist.")


class CapacityExceeded(CommandError):
    reply = f"❌ Maximum {MAX_IMAGES} GIFs per command."


class PersistenceFailure(CommandError):
    reply = "❌ Failed to save command."
