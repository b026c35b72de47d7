"""Transient editor state."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from mapty.workout.model import Coords


@dataclass(frozen=True)
class Idle:
    pass


@dataclass(frozen=True)
class Editing:
    target_id: str


EditState = Union[Idle, Editing]


class EditSession:
    """Tracks the single workout being edited, if any."""

    def __init__(self) -> None:
        self.state: EditState = Idle()

    @property
    def is_editing(self) -> bool:
        return isinstance(self.state, Editing)

    @property
    def target_id(self) -> str | None:
        return self.state.target_id if isinstance(self.state, Editing) else None

    def begin(self, workout_id: str) -> None:
        self.state = Editing(workout_id)

    def close(self) -> None:
        self.state = Idle()


@dataclass
class AppState:
    map_ready: bool = False
    pending_coords: Coords | None = None
    remove_all_visible: bool = False
