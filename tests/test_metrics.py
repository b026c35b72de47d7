from __future__ import annotations

import pytest

from mapty.workout.metrics import UnknownWorkoutKindError, compute_metric


def test_compute_metric_running_pace() -> None:
    assert compute_metric("running", 5, 25) == 5.0
    assert compute_metric("running", 4, 18) == 4.5


def test_compute_metric_cycling_speed() -> None:
    assert compute_metric("cycling", 10, 30) == 20.0
    assert compute_metric("cycling", 45, 90) == 30.0


def test_compute_metric_unknown_kind() -> None:
    with pytest.raises(UnknownWorkoutKindError) as info:
        compute_metric("rowing", 5, 25)
    assert info.value.kind == "rowing"
