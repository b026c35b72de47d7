from __future__ import annotations

from pathlib import Path

import pytest

from mapty.core.config import Settings, load_settings


def test_load_settings_defaults() -> None:
    settings = load_settings({})

    assert settings == Settings()
    assert settings.data_dir == Path.home() / ".mapty"
    assert settings.storage_key == "workouts"
    assert settings.map_zoom == 13


def test_load_settings_from_env(tmp_path: Path) -> None:
    settings = load_settings(
        {
            "MAPTY_DATA_DIR": str(tmp_path),
            "MAPTY_STORAGE_KEY": "trips",
            "MAPTY_LOG_LEVEL": "debug",
            "MAPTY_MAP_ZOOM": "10",
            "MAPTY_PORT": "9000",
        }
    )

    assert settings.data_dir == tmp_path
    assert settings.storage_key == "trips"
    assert settings.log_level == "DEBUG"
    assert settings.map_zoom == 10
    assert settings.port == 9000


def test_load_settings_rejects_bad_int() -> None:
    with pytest.raises(ValueError):
        load_settings({"MAPTY_PORT": "eighty"})
