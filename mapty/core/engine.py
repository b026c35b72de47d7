"""Workout controller: turns UI commands into store, marker and storage updates."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Protocol, Union

from mapty.core.config import Settings, load_settings
from mapty.core.logging_config import get_logger
from mapty.core.markers import MarkerIndex
from mapty.core.state import AppState, EditSession
from mapty.workout.model import Coords, Workout
from mapty.workout.parser import WorkoutInput, edited_workout_from_input, workout_from_input
from mapty.workout.persistence import JsonDirStorage, KeyValueStorage, WorkoutRepository
from mapty.workout.store import WorkoutNotFoundError, WorkoutStore

logger = get_logger(__name__)

POSITION_ERROR_MESSAGE = "Could not get your position"
MISSING_COORDS_MESSAGE = "Click on the map to choose where the workout took place"


class Renderer(Protocol):
    def render_list_entry(self, workout: Workout, replace_existing_id: str | None = None) -> None: ...

    def render_marker(self, workout: Workout, is_replace: bool) -> Any: ...

    def remove_marker(self, handle: Any) -> None: ...

    def remove_list_entry(self, workout_id: str) -> None: ...

    def remove_all_list_entries(self) -> None: ...

    def set_remove_all_visible(self, visible: bool) -> None: ...

    def focus_workout(self, workout: Workout) -> None: ...

    def center_map(self, coords: Coords) -> None: ...

    def notify(self, message: str) -> None: ...


class WorkoutForm(Protocol):
    def read_input(self) -> WorkoutInput: ...

    def populate(self, workout: Workout) -> None: ...

    def clear(self) -> None: ...

    def hide(self) -> None: ...

    def show(self) -> None: ...


@dataclass(frozen=True)
class MapClicked:
    coords: Coords


@dataclass(frozen=True)
class SubmitForm:
    pass


@dataclass(frozen=True)
class RequestEdit:
    workout_id: str


@dataclass(frozen=True)
class CloseForm:
    pass


@dataclass(frozen=True)
class DeleteWorkout:
    workout_id: str


@dataclass(frozen=True)
class SelectWorkout:
    workout_id: str


@dataclass(frozen=True)
class ClearAll:
    pass


@dataclass(frozen=True)
class PositionAcquired:
    coords: Coords


@dataclass(frozen=True)
class PositionFailed:
    reason: str = ""


Command = Union[
    MapClicked,
    SubmitForm,
    RequestEdit,
    CloseForm,
    DeleteWorkout,
    SelectWorkout,
    ClearAll,
    PositionAcquired,
    PositionFailed,
]


@dataclass(frozen=True)
class CommandResult:
    ok: bool
    message: str | None = None
    workout: Workout | None = None


class WorkoutController:
    def __init__(
        self,
        *,
        store: WorkoutStore,
        repository: WorkoutRepository,
        renderer: Renderer,
        form: WorkoutForm,
        markers: MarkerIndex | None = None,
        session: EditSession | None = None,
    ) -> None:
        self._store = store
        self._repository = repository
        self._renderer = renderer
        self._form = form
        self._markers = markers or MarkerIndex()
        self._session = session or EditSession()
        self.state = AppState()

    @property
    def store(self) -> WorkoutStore:
        return self._store

    @property
    def markers(self) -> MarkerIndex:
        return self._markers

    @property
    def session(self) -> EditSession:
        return self._session

    def start(self) -> list[Workout]:
        """Rehydrate stored workouts and render them as list entries."""
        for workout in self._repository.load():
            self._store.add(workout)
        for workout in self._store:
            self._renderer.render_list_entry(workout)
        self._sync_remove_all()
        logger.debug("Started with %d stored workouts", len(self._store))
        return self._store.snapshot()

    def dispatch(self, command: Command) -> CommandResult:
        if isinstance(command, MapClicked):
            return self.map_clicked(command.coords)
        if isinstance(command, SubmitForm):
            return self.submit()
        if isinstance(command, RequestEdit):
            return self.request_edit(command.workout_id)
        if isinstance(command, CloseForm):
            return self.close_form()
        if isinstance(command, DeleteWorkout):
            return self.delete(command.workout_id)
        if isinstance(command, SelectWorkout):
            return self.select(command.workout_id)
        if isinstance(command, ClearAll):
            return self.clear_all()
        if isinstance(command, PositionAcquired):
            return self.position_acquired(command.coords)
        if isinstance(command, PositionFailed):
            return self.position_failed(command.reason)
        raise TypeError(f"Unsupported command {command!r}")

    def position_acquired(self, coords: Coords) -> CommandResult:
        self.state.map_ready = True
        self._renderer.center_map(coords)
        for workout in self._store:
            self._place_marker(workout, is_replace=False)
        return CommandResult(ok=True)

    def position_failed(self, reason: str = "") -> CommandResult:
        logger.warning("Geolocation unavailable: %s", reason or "no reason given")
        self._renderer.notify(POSITION_ERROR_MESSAGE)
        return CommandResult(ok=False, message=POSITION_ERROR_MESSAGE)

    def map_clicked(self, coords: Coords) -> CommandResult:
        self.state.pending_coords = coords
        self._form.show()
        return CommandResult(ok=True)

    def close_form(self) -> CommandResult:
        self._session.close()
        self.state.pending_coords = None
        self._form.clear()
        self._form.hide()
        return CommandResult(ok=True)

    def submit(self) -> CommandResult:
        if self._session.is_editing:
            return self._submit_edit()
        return self._submit_new()

    def request_edit(self, workout_id: str) -> CommandResult:
        workout = self._store.find_by_id(workout_id)
        if workout is None:
            logger.warning("Edit requested for unknown workout %r", workout_id)
            return CommandResult(ok=False, message=f"No workout with id {workout_id!r}")
        self._session.begin(workout_id)
        self._form.populate(workout)
        self._form.show()
        logger.debug("Editing workout %s", workout_id)
        return CommandResult(ok=True, workout=workout)

    def delete(self, workout_id: str) -> CommandResult:
        try:
            removed = self._store.remove(workout_id)
        except WorkoutNotFoundError as exc:
            logger.warning("Delete ignored: %s", exc)
            return CommandResult(ok=False, message=str(exc))

        self._renderer.remove_list_entry(workout_id)
        if self.state.map_ready:
            self._renderer.remove_marker(self._markers.remove_and_return(workout_id))
        self._persist()
        self._sync_remove_all()
        return CommandResult(ok=True, workout=removed)

    def select(self, workout_id: str) -> CommandResult:
        workout = self._store.find_by_id(workout_id)
        if workout is None:
            logger.warning("Select ignored: no workout with id %r", workout_id)
            return CommandResult(ok=False, message=f"No workout with id {workout_id!r}")
        # Saved with the next mutation, not here.
        workout.click()
        if self.state.map_ready:
            self._renderer.focus_workout(workout)
        return CommandResult(ok=True, workout=workout)

    def clear_all(self) -> CommandResult:
        removed = self._store.clear()
        for handle in self._markers.remove_all():
            self._renderer.remove_marker(handle)
        self._renderer.remove_all_list_entries()
        self._persist()
        self._sync_remove_all()
        logger.debug("Removed all %d workouts", len(removed))
        return CommandResult(ok=True)

    def _submit_new(self) -> CommandResult:
        coords = self.state.pending_coords
        if coords is None:
            return self._reject(MISSING_COORDS_MESSAGE)
        try:
            workout = workout_from_input(self._form.read_input(), coords)
        except ValueError as exc:
            return self._reject(str(exc))

        self._store.add(workout)
        self._place_marker(workout, is_replace=False)
        self._renderer.render_list_entry(workout)
        self._form.hide()
        self._form.clear()
        self.state.pending_coords = None
        self._persist()
        self._sync_remove_all()
        return CommandResult(ok=True, workout=workout)

    def _submit_edit(self) -> CommandResult:
        target_id = self._session.target_id
        assert target_id is not None
        previous = self._store.find_by_id(target_id)
        if previous is None:
            logger.warning("Workout %r vanished while being edited, edit discarded", target_id)
            self.close_form()
            return CommandResult(ok=False, message=f"No workout with id {target_id!r}")
        try:
            workout = edited_workout_from_input(self._form.read_input(), previous)
        except ValueError as exc:
            return self._reject(str(exc))

        self._store.replace(target_id, workout)
        self._place_marker(workout, is_replace=True)
        self._renderer.render_list_entry(workout, replace_existing_id=target_id)
        self._form.hide()
        self._form.clear()
        self.state.pending_coords = None
        self._persist()
        self._session.close()
        return CommandResult(ok=True, workout=workout)

    def _place_marker(self, workout: Workout, *, is_replace: bool) -> None:
        if not self.state.map_ready:
            return
        previous = self._markers.get(workout.id)
        if previous is not None:
            self._renderer.remove_marker(previous)
        self._markers.upsert(workout.id, self._renderer.render_marker(workout, is_replace))

    def _reject(self, message: str) -> CommandResult:
        logger.info("Rejected workout input: %s", message)
        self._renderer.notify(message)
        return CommandResult(ok=False, message=message)

    def _persist(self) -> None:
        self._repository.save(self._store)

    def _sync_remove_all(self) -> None:
        visible = len(self._store) > 0
        self.state.remove_all_visible = visible
        self._renderer.set_remove_all_visible(visible)


def build_controller(
    renderer: Renderer,
    form: WorkoutForm,
    *,
    settings: Settings | None = None,
    storage: KeyValueStorage | None = None,
) -> WorkoutController:
    resolved = settings or load_settings()
    repository = WorkoutRepository(
        storage if storage is not None else JsonDirStorage(resolved.data_dir),
        key=resolved.storage_key,
    )
    return WorkoutController(
        store=WorkoutStore(),
        repository=repository,
        renderer=renderer,
        form=form,
    )
