"""Bot package - Discord client wiring."""
from .client import GreetBot

__all__ = ["GreetBot"]
