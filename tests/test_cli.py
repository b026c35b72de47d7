from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path

import pytest

from mapty.cli.main import main
from mapty.workout.model import Cycling, Running
from mapty.workout.persistence import JsonDirStorage, WorkoutRepository


def _seed(data_dir: Path) -> None:
    created = datetime(2024, 1, 15, tzinfo=timezone.utc)
    WorkoutRepository(JsonDirStorage(data_dir)).save(
        [
            Running((10, 20), 5, 25, 150, id="run0000001", created_at=created),
            Cycling((1, 1), 10, 30, 100, id="bike000001", created_at=created),
        ]
    )


def test_cli_list(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    _seed(tmp_path)

    assert main(["--list", "--data-dir", str(tmp_path)]) == 0

    out = capsys.readouterr().out
    assert "run0000001  Running on January 15" in out
    assert "bike000001  Cycling on January 15" in out
    assert "20.0 km/h" in out


def test_cli_list_empty(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["--list", "--data-dir", str(tmp_path)]) == 0
    assert "No workouts stored" in capsys.readouterr().out


def test_cli_reset(tmp_path: Path) -> None:
    _seed(tmp_path)

    assert main(["--reset", "--data-dir", str(tmp_path)]) == 0

    assert WorkoutRepository(JsonDirStorage(tmp_path)).load() == []


def test_cli_without_action_prints_help(capsys: pytest.CaptureFixture[str]) -> None:
    assert main([]) == 1
    assert "usage" in capsys.readouterr().out
