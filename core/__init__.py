"""
Core utilities and infrastructure for the bot.

This package contains:
- config: Environment configuration loading and validation
- constants: Actions, placeholder tokens and on-disk keys
- errors: User-facing command errors
- io_utils: File I/O helpers
- types: Dataclasses and type definitions
"""
from .constants import Action, Placeholder, MAX_IMAGES
from .errors import CommandError
from .types import Command, InboundMessage, MentionedUser, RenderRequest

__all__ = [
    # Constants
    "Action",
    "Placeholder",
    "MAX_IMAGES",
    # Errors
    "CommandError",
    # Types
    "Command",
    "InboundMessage",
    "MentionedUser",
    "RenderRequest",
]
