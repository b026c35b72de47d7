"""Derived workout metrics."""

from __future__ import annotations

from typing import Literal

WorkoutKind = Literal["running", "cycling"]

KINDS: tuple[WorkoutKind, ...] = ("running", "cycling")


class UnknownWorkoutKindError(ValueError):
    """Raised when a workout type is neither running nor cycling."""

    def __init__(self, kind: object) -> None:
        super().__init__(f"Unknown workout type {kind!r}. Use one of: {', '.join(KINDS)}")
        self.kind = kind


def running_pace(distance_km: float, duration_min: float) -> float:
    # min/km
    return duration_min / distance_km


def cycling_speed(distance_km: float, duration_min: float) -> float:
    # km/h
    return distance_km / (duration_min / 60)


def compute_metric(kind: str, distance_km: float, duration_min: float) -> float:
    """Return pace for running or speed for cycling."""
    if kind == "running":
        return running_pace(distance_km, duration_min)
    if kind == "cycling":
        return cycling_speed(distance_km, duration_min)
    raise UnknownWorkoutKindError(kind)
