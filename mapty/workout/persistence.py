"""Local persistence for the workout collection."""

from __future__ import annotations

import json
import os
from collections.abc import Iterable
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any, Protocol

from mapty.core.logging_config import get_logger
from mapty.workout.metrics import UnknownWorkoutKindError
from mapty.workout.model import Cycling, Running, Workout, WorkoutValidationError, build_workout

logger = get_logger(__name__)

DEFAULT_STORAGE_KEY = "workouts"


def _default_data_dir() -> Path:
    return Path.home() / ".mapty"


class StorageError(OSError):
    """Raised when the key-value backend cannot be read or written."""


class KeyValueStorage(Protocol):
    def get_item(self, key: str) -> str | None: ...

    def set_item(self, key: str, value: str) -> None: ...

    def remove_item(self, key: str) -> None: ...


class MemoryStorage:
    def __init__(self, items: dict[str, str] | None = None) -> None:
        self.items: dict[str, str] = dict(items or {})

    def get_item(self, key: str) -> str | None:
        return self.items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self.items[key] = value

    def remove_item(self, key: str) -> None:
        self.items.pop(key, None)


class JsonDirStorage:
    """One ``<key>.json`` file per key inside ``base_dir``."""

    def __init__(self, base_dir: Path | None = None) -> None:
        self.base_dir = base_dir or _default_data_dir()

    def _path(self, key: str) -> Path:
        return self.base_dir / f"{key}.json"

    def get_item(self, key: str) -> str | None:
        target = self._path(key)
        if not target.exists():
            return None
        try:
            return target.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise StorageError(f"Cannot read {target}: {exc}") from exc

    def set_item(self, key: str, value: str) -> None:
        target = self._path(key)
        tmp = target.with_suffix(".json.tmp")
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            tmp.write_text(value, encoding="utf-8")
            os.replace(tmp, target)
        except OSError as exc:
            raise StorageError(f"Cannot write {target}: {exc}") from exc

    def remove_item(self, key: str) -> None:
        try:
            self._path(key).unlink(missing_ok=True)
        except OSError as exc:
            raise StorageError(f"Cannot remove {self._path(key)}: {exc}") from exc


def format_date(value: datetime) -> str:
    """ISO-8601 keeping the original offset; UTC is written with a trailing Z."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    text = value.isoformat()
    if value.utcoffset() == timedelta(0):
        text = text.replace("+00:00", "Z")
    return text


def parse_date(raw: object) -> datetime:
    if not isinstance(raw, str) or not raw.strip():
        raise ValueError(f"invalid date {raw!r}")
    text = raw.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def workout_to_dict(workout: Workout) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "type": workout.kind,
        "coords": [workout.coords[0], workout.coords[1]],
        "distance": workout.distance_km,
        "duration": workout.duration_min,
    }
    if isinstance(workout, Running):
        payload["cadence"] = workout.cadence
    elif isinstance(workout, Cycling):
        payload["elevationGain"] = workout.elevation_gain
    payload["date"] = format_date(workout.created_at)
    payload["id"] = workout.id
    payload["clicks"] = workout.clicks
    return payload


def workout_from_dict(item: dict[str, Any]) -> Workout:
    """Rebuild a workout, trusting only id, date and clicks verbatim."""
    kind = item.get("type")
    if kind == "running":
        variant = item.get("cadence")
    elif kind == "cycling":
        variant = item.get("elevationGain")
    else:
        raise UnknownWorkoutKindError(kind)

    workout_id = item.get("id")
    if not isinstance(workout_id, str) or not workout_id:
        raise WorkoutValidationError(f"invalid id {workout_id!r}")
    try:
        created_at = parse_date(item.get("date"))
    except ValueError as exc:
        raise WorkoutValidationError(str(exc)) from exc
    clicks = item.get("clicks", 0)
    if not isinstance(clicks, int) or isinstance(clicks, bool) or clicks < 0:
        raise WorkoutValidationError(f"invalid clicks {clicks!r}")

    coords = item.get("coords")
    if not isinstance(coords, (list, tuple)):
        raise WorkoutValidationError(f"invalid coords {coords!r}")

    return build_workout(
        kind,
        tuple(coords),  # type: ignore[arg-type]
        item.get("distance"),  # type: ignore[arg-type]
        item.get("duration"),  # type: ignore[arg-type]
        variant,  # type: ignore[arg-type]
        workout_id=workout_id,
        created_at=created_at,
        clicks=clicks,
    )


class WorkoutRepository:
    """Snapshot the whole collection under a single storage key."""

    def __init__(self, storage: KeyValueStorage, key: str = DEFAULT_STORAGE_KEY) -> None:
        self._storage = storage
        self.key = key

    def save(self, workouts: Iterable[Workout]) -> bool:
        payload = json.dumps([workout_to_dict(w) for w in workouts], ensure_ascii=True)
        try:
            self._storage.set_item(self.key, payload)
        except OSError as exc:
            logger.warning("Could not save workouts under %r: %s", self.key, exc)
            return False
        return True

    def load(self) -> list[Workout]:
        try:
            raw = self._storage.get_item(self.key)
        except OSError as exc:
            logger.warning("Could not read workouts under %r: %s", self.key, exc)
            return []
        if raw is None:
            return []
        try:
            data = json.loads(raw)
        except (ValueError, RecursionError) as exc:
            logger.warning("Ignoring malformed workouts blob under %r: %s", self.key, exc)
            return []
        if not isinstance(data, list):
            logger.warning("Ignoring workouts blob under %r: expected a JSON array", self.key)
            return []

        out: list[Workout] = []
        seen: set[str] = set()
        for index, item in enumerate(data):
            if not isinstance(item, dict):
                logger.warning("Dropping stored workout #%d: not an object", index)
                continue
            try:
                workout = workout_from_dict(item)
            except UnknownWorkoutKindError as exc:
                logger.warning("Dropping stored workout #%d: %s", index, exc)
                continue
            except WorkoutValidationError as exc:
                logger.warning("Dropping stored workout #%d: %s", index, exc)
                continue
            if workout.id in seen:
                logger.warning("Dropping stored workout #%d: duplicate id %r", index, workout.id)
                continue
            seen.add(workout.id)
            out.append(workout)
        return out

    def reset(self) -> bool:
        try:
            self._storage.remove_item(self.key)
        except OSError as exc:
            logger.warning("Could not remove workouts under %r: %s", self.key, exc)
            return False
        return True
