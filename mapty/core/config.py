"""Application settings resolved from the environment.

Every value can be overridden with a ``MAPTY_*`` environment variable and,
for the CLI, with the matching command-line flag.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping


def _default_data_dir() -> Path:
    return Path.home() / ".mapty"


@dataclass(frozen=True)
class Settings:
    data_dir: Path = field(default_factory=_default_data_dir)
    storage_key: str = "workouts"
    log_level: str = "INFO"
    map_zoom: int = 13
    host: str = "127.0.0.1"
    port: int = 8088


def _int_env(env: Mapping[str, str], name: str, default: int) -> int:
    raw = env.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from exc


def load_settings(env: Mapping[str, str] | None = None) -> Settings:
    source = os.environ if env is None else env
    data_dir = source.get("MAPTY_DATA_DIR")
    return Settings(
        data_dir=Path(data_dir).expanduser() if data_dir else _default_data_dir(),
        storage_key=source.get("MAPTY_STORAGE_KEY") or "workouts",
        log_level=(source.get("MAPTY_LOG_LEVEL") or "INFO").upper(),
        map_zoom=_int_env(source, "MAPTY_MAP_ZOOM", 13),
        host=source.get("MAPTY_HOST") or "127.0.0.1",
        port=_int_env(source, "MAPTY_PORT", 8088),
    )
