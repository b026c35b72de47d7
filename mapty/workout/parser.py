"""Raw form input parsing."""

from __future__ import annotations

import math
from dataclasses import dataclass

from mapty.workout.metrics import KINDS, UnknownWorkoutKindError
from mapty.workout.model import (
    INVALID_INPUT_MESSAGE,
    Coords,
    Workout,
    WorkoutValidationError,
    build_workout,
    rebuild_workout,
)


@dataclass(frozen=True)
class WorkoutInput:
    """Values as typed into the form, before any coercion."""

    kind: str
    distance: object
    duration: object
    variant: object


@dataclass(frozen=True)
class ParsedInput:
    kind: str
    distance_km: float
    duration_min: float
    variant_value: float


def parse_workout_input(raw: WorkoutInput) -> ParsedInput:
    kind = str(raw.kind).strip().lower()
    if kind not in KINDS:
        raise UnknownWorkoutKindError(raw.kind)
    return ParsedInput(
        kind=kind,
        distance_km=_parse_float_field(raw.distance),
        duration_min=_parse_float_field(raw.duration),
        variant_value=_parse_float_field(raw.variant),
    )


def workout_from_input(raw: WorkoutInput, coords: Coords) -> Workout:
    parsed = parse_workout_input(raw)
    try:
        return build_workout(
            parsed.kind,
            coords,
            parsed.distance_km,
            parsed.duration_min,
            parsed.variant_value,
        )
    except WorkoutValidationError as exc:
        raise WorkoutValidationError(INVALID_INPUT_MESSAGE) from exc


def edited_workout_from_input(raw: WorkoutInput, previous: Workout) -> Workout:
    parsed = parse_workout_input(raw)
    try:
        return rebuild_workout(
            previous,
            parsed.kind,
            parsed.distance_km,
            parsed.duration_min,
            parsed.variant_value,
        )
    except WorkoutValidationError as exc:
        raise WorkoutValidationError(INVALID_INPUT_MESSAGE) from exc


def _parse_float_field(raw: object) -> float:
    if raw is None or isinstance(raw, bool):
        raise WorkoutValidationError(INVALID_INPUT_MESSAGE)
    if isinstance(raw, str) and raw.strip() == "":
        raise WorkoutValidationError(INVALID_INPUT_MESSAGE)
    try:
        value = float(str(raw).strip())
    except ValueError as exc:
        raise WorkoutValidationError(INVALID_INPUT_MESSAGE) from exc
    if not math.isfinite(value):
        raise WorkoutValidationError(INVALID_INPUT_MESSAGE)
    return value
