"""In-memory ordered workout collection."""

from __future__ import annotations

from collections.abc import Iterator

from mapty.workout.model import Workout


class WorkoutNotFoundError(LookupError):
    """Raised when no workout has the requested id."""

    def __init__(self, workout_id: str) -> None:
        super().__init__(f"No workout with id {workout_id!r}")
        self.workout_id = workout_id


class DuplicateWorkoutError(ValueError):
    """Raised when adding a workout whose id is already stored."""


class WorkoutStore:
    """Workouts in insertion order, which is also display order."""

    def __init__(self, workouts: list[Workout] | None = None) -> None:
        self._workouts: list[Workout] = []
        for workout in workouts or []:
            self.add(workout)

    def __len__(self) -> int:
        return len(self._workouts)

    def __iter__(self) -> Iterator[Workout]:
        return iter(list(self._workouts))

    @property
    def ids(self) -> list[str]:
        return [workout.id for workout in self._workouts]

    def add(self, workout: Workout) -> None:
        if self._index_of(workout.id) is not None:
            raise DuplicateWorkoutError(f"Workout id {workout.id!r} is already stored")
        self._workouts.append(workout)

    def replace(self, workout_id: str, workout: Workout) -> Workout:
        """Swap in ``workout`` for the record with ``workout_id`` and return the old one."""
        index = self._index_of(workout_id)
        if index is None:
            raise WorkoutNotFoundError(workout_id)
        if workout.id != workout_id:
            raise ValueError(
                f"Replacement workout id {workout.id!r} does not match {workout_id!r}"
            )
        previous = self._workouts[index]
        self._workouts[index] = workout
        return previous

    def remove(self, workout_id: str) -> Workout:
        index = self._index_of(workout_id)
        if index is None:
            raise WorkoutNotFoundError(workout_id)
        return self._workouts.pop(index)

    def find_by_id(self, workout_id: str) -> Workout | None:
        index = self._index_of(workout_id)
        return None if index is None else self._workouts[index]

    def get(self, workout_id: str) -> Workout:
        workout = self.find_by_id(workout_id)
        if workout is None:
            raise WorkoutNotFoundError(workout_id)
        return workout

    def clear(self) -> list[Workout]:
        removed = self._workouts
        self._workouts = []
        return removed

    def snapshot(self) -> list[Workout]:
        return list(self._workouts)

    def _index_of(self, workout_id: str) -> int | None:
        for index, workout in enumerate(self._workouts):
            if workout.id == workout_id:
                return index
        return None
