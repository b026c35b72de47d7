"""Workout id to map marker lookup."""

from __future__ import annotations

from typing import Any


class MarkerNotFoundError(LookupError):
    def __init__(self, workout_id: str) -> None:
        super().__init__(f"No marker for workout {workout_id!r}")
        self.workout_id = workout_id


class MarkerIndex:
    """Holds marker handles owned by the renderer; disposal stays with the caller."""

    def __init__(self) -> None:
        self._handles: dict[str, Any] = {}

    def __len__(self) -> int:
        return len(self._handles)

    def __contains__(self, workout_id: object) -> bool:
        return workout_id in self._handles

    def get(self, workout_id: str) -> Any | None:
        return self._handles.get(workout_id)

    def upsert(self, workout_id: str, handle: Any) -> None:
        self._handles[workout_id] = handle

    def remove_and_return(self, workout_id: str) -> Any:
        try:
            return self._handles.pop(workout_id)
        except KeyError:
            raise MarkerNotFoundError(workout_id) from None

    def remove_all(self) -> list[Any]:
        handles = list(self._handles.values())
        self._handles.clear()
        return handles
