"""
Bot configuration loading and validation.

Reads settings from the environment (populated from .env by main.py) and
validates channel IDs before the client starts.
"""
from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional, Union

BASE_DIR = Path(__file__).resolve().parent.parent
DEFAULT_COMMANDS_FILE = "commands.json"


class ConfigError(RuntimeError):
    pass


def resolve_repo_path(path: Union[str, Path]) -> Path:
    candidate = Path(path)
    if candidate.is_absolute() or candidate.drive:
        return candidate
    return BASE_DIR / candidate


def _parse_channel_id(env: Mapping[str, str], key: str, required: bool) -> Optional[int]:
    raw = (env.get(key) or "").strip()
    if not raw:
        if required:
            raise ConfigError(f"{key} must be set")
        return None
    if not raw.isdigit() or int(raw) <= 0:
        raise ConfigError(f"{key} must be a positive integer ID, got {raw!r}")
    return int(raw)


@dataclass(frozen=True)
class BotConfig:
    token: Optional[str]
    setup_channel_id: int
    welcome_channel_id: Optional[int]
    commands_file: Path
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> BotConfig:
        env = os.environ if env is None else env
        return cls(
            token=env.get("DISCORD_BOT_TOKEN") or env.get("DISCORD_TOKEN"),
            setup_channel_id=_parse_channel_id(env, "SETUP_CHANNEL_ID", required=True),
            welcome_channel_id=_parse_channel_id(env, "WELCOME_CHANNEL_ID", required=False),
            commands_file=resolve_repo_path(env.get("COMMANDS_FILE") or DEFAULT_COMMANDS_FILE),
            log_level=(env.get("LOG_LEVEL") or "INFO").upper(),
        )
