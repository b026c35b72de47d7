from __future__ import annotations

import math
from datetime import datetime, timezone

import pytest

from mapty.workout.metrics import UnknownWorkoutKindError
from mapty.workout.model import (
    Cycling,
    Running,
    WorkoutValidationError,
    build_workout,
    describe,
    rebuild_workout,
)


def test_running_pace_and_description() -> None:
    created = datetime(2024, 3, 7, 9, 30, tzinfo=timezone.utc)
    workout = Running((10, 20), 5, 25, 150, created_at=created)

    assert workout.kind == "running"
    assert workout.pace == 5.0
    assert workout.metric == workout.pace
    assert workout.description == "Running on March 7"
    assert workout.coords == (10.0, 20.0)
    assert workout.clicks == 0
    assert len(workout.id) == 10


def test_cycling_speed_and_description() -> None:
    created = datetime(2024, 12, 31, tzinfo=timezone.utc)
    workout = Cycling((1, 1), 10, 30, 100, created_at=created)

    assert workout.speed == 20.0
    assert workout.description == "Cycling on December 31"
    assert workout.variant_value == 100


def test_cycling_accepts_zero_and_negative_elevation() -> None:
    assert Cycling((0, 0), 12, 40, 0).elevation_gain == 0
    assert Cycling((0, 0), 12, 40, -35).elevation_gain == -35


@pytest.mark.parametrize(
    "distance,duration,cadence",
    [
        (0, 25, 150),
        (-5, 25, 150),
        (5, 0, 150),
        (math.nan, 25, 150),
        (5, math.inf, 150),
        (5, 25, 0),
        (5, 25, -1),
        (5, 25, math.nan),
    ],
)
def test_running_rejects_invalid_values(distance: float, duration: float, cadence: float) -> None:
    with pytest.raises(WorkoutValidationError):
        Running((0, 0), distance, duration, cadence)


def test_cycling_rejects_non_finite_elevation() -> None:
    with pytest.raises(WorkoutValidationError):
        Cycling((0, 0), 10, 30, math.inf)


def test_invalid_coords_are_rejected() -> None:
    with pytest.raises(WorkoutValidationError):
        Running((1, 2, 3), 5, 25, 150)  # type: ignore[arg-type]


def test_clicks_do_not_affect_equality() -> None:
    created = datetime(2024, 1, 1, tzinfo=timezone.utc)
    a = Running((1, 2), 5, 25, 150, id="abc", created_at=created)
    b = Running((1, 2), 5, 25, 150, id="abc", created_at=created, clicks=4)
    a.click()

    assert a.clicks == 1
    assert a == b


def test_description_follows_created_at() -> None:
    workout = Running((0, 0), 5, 25, 150, created_at=datetime(2024, 1, 1, tzinfo=timezone.utc))
    workout.created_at = datetime(2024, 6, 15, tzinfo=timezone.utc)

    assert workout.description == "Running on June 15"
    assert describe("cycling", workout.created_at) == "Cycling on June 15"


def test_build_workout_dispatches_on_kind() -> None:
    assert isinstance(build_workout("running", (0, 0), 5, 25, 150), Running)
    assert isinstance(build_workout("cycling", (0, 0), 5, 25, 150), Cycling)

    with pytest.raises(UnknownWorkoutKindError):
        build_workout("swimming", (0, 0), 5, 25, 150)


def test_rebuild_workout_keeps_identity() -> None:
    original = Running((10, 20), 5, 25, 150, clicks=3)

    edited = rebuild_workout(original, "cycling", 20, 60, 250)

    assert isinstance(edited, Cycling)
    assert edited.id == original.id
    assert edited.created_at == original.created_at
    assert edited.clicks == 3
    assert edited.coords == original.coords
    assert edited.speed == 20.0


def test_new_workout_is_stamped_with_local_time() -> None:
    workout = Running((0, 0), 5, 25, 150)
    local_now = datetime.now().astimezone()

    assert workout.created_at.utcoffset() == local_now.utcoffset()
    assert workout.description == describe("running", workout.created_at)


def test_integer_beyond_float_range_is_rejected() -> None:
    with pytest.raises(WorkoutValidationError):
        Running((0, 0), int("9" * 400), 25, 150)
    with pytest.raises(WorkoutValidationError):
        Cycling((0, 0), 10, 30, int("9" * 400))
