from __future__ import annotations

import asyncio
import json
import os
from pathlib import Path
from typing import Any


async def read_json(path: Path, default: Any = None) -> Any:
    """Read a JSON document, returning ``default`` when the file is absent."""
    def _read() -> Any:
        try:
            with path.open("r", encoding="utf-8") as handle:
                return json.load(handle)
        except FileNotFoundError:
            return default

    return await asyncio.to_thread(_read)


async def write_json_atomic(path: Path, data: Any) -> None:
    """Write pretty-printed JSON via a temp file so readers never see a partial file."""
    def _write() -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = path.with_suffix(path.suffix + ".tmp")
        try:
            with tmp_path.open("w", encoding="utf-8") as handle:
                json.dump(data, handle, ensure_ascii=False, indent=2)
                handle.flush()
                os.fsync(handle.fileno())
            os.replace(tmp_path, path)
        except BaseException:
            tmp_path.unlink(missing_ok=True)
            raise

    await asyncio.to_thread(_write)
