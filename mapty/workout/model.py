"""Workout domain models."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import datetime
from typing import ClassVar, Union
from uuid import uuid4

from mapty.workout.metrics import (
    UnknownWorkoutKindError,
    WorkoutKind,
    cycling_speed,
    running_pace,
)

Coords = tuple[float, float]

MONTHS: tuple[str, ...] = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)

INVALID_INPUT_MESSAGE = "Inputs have to be positive numbers!"


class WorkoutValidationError(ValueError):
    """Raised when workout values are not usable."""


def new_workout_id() -> str:
    return uuid4().hex[:10]


def now_local() -> datetime:
    # Local wall clock with its offset, so the description shows the local day.
    return datetime.now().astimezone()


def describe(kind: str, created_at: datetime) -> str:
    return f"{kind[0].upper()}{kind[1:]} on {MONTHS[created_at.month - 1]} {created_at.day}"


def _is_number(value: object) -> bool:
    if not isinstance(value, (int, float)) or isinstance(value, bool):
        return False
    try:
        return math.isfinite(value)
    except OverflowError:
        # ints beyond the float range
        return False


def _require_positive(value: object, field_name: str) -> None:
    if not _is_number(value) or value <= 0:  # type: ignore[operator]
        raise WorkoutValidationError(f"{field_name} must be a positive number, got {value!r}")


def _require_finite(value: object, field_name: str) -> None:
    if not _is_number(value):
        raise WorkoutValidationError(f"{field_name} must be a finite number, got {value!r}")


@dataclass
class WorkoutBase:
    kind: ClassVar[WorkoutKind]

    coords: Coords
    distance_km: float
    duration_min: float
    id: str = field(default_factory=new_workout_id, kw_only=True)
    created_at: datetime = field(default_factory=now_local, kw_only=True)
    clicks: int = field(default=0, compare=False, kw_only=True)

    def __post_init__(self) -> None:
        try:
            lat, lng = self.coords
        except (TypeError, ValueError) as exc:
            raise WorkoutValidationError(f"coords must be a (lat, lng) pair, got {self.coords!r}") from exc
        _require_finite(lat, "lat")
        _require_finite(lng, "lng")
        self.coords = (float(lat), float(lng))
        _require_positive(self.distance_km, "distance_km")
        _require_positive(self.duration_min, "duration_min")

    @property
    def description(self) -> str:
        return describe(self.kind, self.created_at)

    @property
    def metric(self) -> float:
        raise NotImplementedError

    @property
    def variant_value(self) -> float:
        raise NotImplementedError

    def click(self) -> None:
        self.clicks += 1


@dataclass
class Running(WorkoutBase):
    kind: ClassVar[WorkoutKind] = "running"

    cadence: float

    def __post_init__(self) -> None:
        super().__post_init__()
        _require_positive(self.cadence, "cadence")

    @property
    def pace(self) -> float:
        return running_pace(self.distance_km, self.duration_min)

    @property
    def metric(self) -> float:
        return self.pace

    @property
    def variant_value(self) -> float:
        return self.cadence


@dataclass
class Cycling(WorkoutBase):
    kind: ClassVar[WorkoutKind] = "cycling"

    # Zero and downhill totals are accepted, unlike running cadence.
    elevation_gain: float

    def __post_init__(self) -> None:
        super().__post_init__()
        _require_finite(self.elevation_gain, "elevation_gain")

    @property
    def speed(self) -> float:
        return cycling_speed(self.distance_km, self.duration_min)

    @property
    def metric(self) -> float:
        return self.speed

    @property
    def variant_value(self) -> float:
        return self.elevation_gain


Workout = Union[Running, Cycling]


def build_workout(
    kind: str,
    coords: Coords,
    distance_km: float,
    duration_min: float,
    variant_value: float,
    *,
    workout_id: str | None = None,
    created_at: datetime | None = None,
    clicks: int = 0,
) -> Workout:
    envelope = {
        "id": workout_id or new_workout_id(),
        "created_at": created_at or now_local(),
        "clicks": clicks,
    }
    if kind == "running":
        return Running(coords, distance_km, duration_min, variant_value, **envelope)
    if kind == "cycling":
        return Cycling(coords, distance_km, duration_min, variant_value, **envelope)
    raise UnknownWorkoutKindError(kind)


def rebuild_workout(
    previous: Workout,
    kind: str,
    distance_km: float,
    duration_min: float,
    variant_value: float,
) -> Workout:
    """Build a replacement record that keeps the identity of ``previous``."""
    return build_workout(
        kind,
        previous.coords,
        distance_km,
        duration_min,
        variant_value,
        workout_id=previous.id,
        created_at=previous.created_at,
        clicks=previous.clicks,
    )
