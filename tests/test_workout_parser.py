from __future__ import annotations

import pytest

from mapty.workout.metrics import UnknownWorkoutKindError
from mapty.workout.model import INVALID_INPUT_MESSAGE, Cycling, Running, WorkoutValidationError
from mapty.workout.parser import (
    WorkoutInput,
    edited_workout_from_input,
    parse_workout_input,
    workout_from_input,
)


def test_parse_workout_input_coerces_text() -> None:
    parsed = parse_workout_input(WorkoutInput("Running", " 5.5 ", "30", "160"))

    assert parsed.kind == "running"
    assert parsed.distance_km == 5.5
    assert parsed.duration_min == 30.0
    assert parsed.variant_value == 160.0


def test_workout_from_input_builds_running() -> None:
    workout = workout_from_input(WorkoutInput("running", "5", "25", "150"), (10.0, 20.0))

    assert isinstance(workout, Running)
    assert workout.pace == 5.0
    assert workout.coords == (10.0, 20.0)


def test_workout_from_input_rejects_blank_and_text() -> None:
    for raw in (
        WorkoutInput("running", "", "25", "150"),
        WorkoutInput("running", "five", "25", "150"),
        WorkoutInput("cycling", "10", "30", None),
        WorkoutInput("cycling", "10", "nan", "5"),
    ):
        with pytest.raises(WorkoutValidationError) as info:
            workout_from_input(raw, (0.0, 0.0))
        assert str(info.value) == INVALID_INPUT_MESSAGE


def test_workout_from_input_rejects_non_positive() -> None:
    with pytest.raises(WorkoutValidationError) as info:
        workout_from_input(WorkoutInput("running", "5", "25", "0"), (0.0, 0.0))
    assert str(info.value) == INVALID_INPUT_MESSAGE


def test_cycling_input_allows_zero_elevation() -> None:
    workout = workout_from_input(WorkoutInput("cycling", "10", "30", "0"), (0.0, 0.0))

    assert isinstance(workout, Cycling)
    assert workout.elevation_gain == 0


def test_unknown_kind_input() -> None:
    with pytest.raises(UnknownWorkoutKindError):
        parse_workout_input(WorkoutInput("hiking", "1", "1", "1"))


def test_edited_workout_from_input_keeps_identity() -> None:
    previous = Running((1.0, 2.0), 5, 25, 150, clicks=2)

    edited = edited_workout_from_input(WorkoutInput("running", "10", "40", "170"), previous)

    assert edited.id == previous.id
    assert edited.created_at == previous.created_at
    assert edited.clicks == 2
    assert edited.distance_km == 10
