from __future__ import annotations

from datetime import datetime, timezone

from mapty.ui.presenters import DetailRow, detail_rows, popup_class, popup_text, summary_line
from mapty.workout.model import Cycling, Running

CREATED = datetime(2024, 1, 15, tzinfo=timezone.utc)


def test_running_detail_rows() -> None:
    workout = Running((10, 20), 5, 27, 150, created_at=CREATED)

    assert detail_rows(workout) == [
        DetailRow("🏃‍♂️", "5", "km"),
        DetailRow("⏱", "27", "min"),
        DetailRow("⚡️", "5.4", "min/km"),
        DetailRow("🦶🏼", "150", "spm"),
    ]


def test_cycling_detail_rows() -> None:
    workout = Cycling((10, 20), 12.5, 40, 230, created_at=CREATED)

    rows = detail_rows(workout)

    assert rows[0] == DetailRow("🚴‍♀️", "12.5", "km")
    assert rows[2] == DetailRow("⚡️", "18.8", "km/h")
    assert rows[3] == DetailRow("⛰", "230", "m")


def test_popup_text_and_class() -> None:
    workout = Cycling((10, 20), 10, 30, 100, created_at=CREATED)

    assert popup_text(workout) == "🚴‍♀️ Cycling on January 15"
    assert popup_class(workout) == "cycling-popup"


def test_summary_line() -> None:
    workout = Running((10, 20), 5, 25, 150, id="abc1234567", created_at=CREATED)

    line = summary_line(workout)

    assert line.startswith("abc1234567  Running on January 15")
    assert "5.0 min/km" in line
    assert line.endswith("@ 10.0000,20.0000")
