"""Display strings for workouts, shared by the web UI and the CLI."""

from __future__ import annotations

from dataclasses import dataclass

from mapty.workout.model import Cycling, Running, Workout

KIND_ICONS = {"running": "🏃‍♂️", "cycling": "🚴‍♀️"}


@dataclass(frozen=True)
class DetailRow:
    icon: str
    value: str
    unit: str


@dataclass(frozen=True)
class VariantField:
    label: str
    placeholder: str


VARIANT_FIELDS = {
    "running": VariantField(label="Cadence", placeholder="step/min"),
    "cycling": VariantField(label="Elev Gain", placeholder="meters"),
}


def _fmt_number(value: float, digits: int = 1) -> str:
    return f"{value:.{digits}f}"


def _fmt_raw(value: float) -> str:
    # As typed: 5 stays "5", 5.5 stays "5.5".
    return f"{value:g}"


def popup_text(workout: Workout) -> str:
    return f"{KIND_ICONS[workout.kind]} {workout.description}"


def popup_class(workout: Workout) -> str:
    return f"{workout.kind}-popup"


def detail_rows(workout: Workout) -> list[DetailRow]:
    rows = [
        DetailRow(KIND_ICONS[workout.kind], _fmt_raw(workout.distance_km), "km"),
        DetailRow("⏱", _fmt_raw(workout.duration_min), "min"),
    ]
    if isinstance(workout, Running):
        rows.append(DetailRow("⚡️", _fmt_number(workout.pace), "min/km"))
        rows.append(DetailRow("🦶🏼", _fmt_raw(workout.cadence), "spm"))
    elif isinstance(workout, Cycling):
        rows.append(DetailRow("⚡️", _fmt_number(workout.speed), "km/h"))
        rows.append(DetailRow("⛰", _fmt_raw(workout.elevation_gain), "m"))
    return rows


def summary_line(workout: Workout) -> str:
    details = " | ".join(f"{row.value} {row.unit}" for row in detail_rows(workout))
    lat, lng = workout.coords
    return f"{workout.id}  {workout.description:<22} {details}  @ {lat:.4f},{lng:.4f}"
