"""
Trigger-command engine - split into focused modules.

This package handles the setup commands that define triggers and the
replies posted when a trigger fires.
"""
from .engine import TriggerEngine
from .matching import TriggerMatcher, find_trigger, render_template
from .parsing import parse
from .registry import CommandRegistry
from .store import CommandStore

__all__ = [
    "TriggerEngine",
    "TriggerMatcher",
    "find_trigger",
    "render_template",
    "parse",
    "CommandRegistry",
    "CommandStore",
]
