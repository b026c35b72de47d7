"""NiceGUI web UI for Mapty."""

from __future__ import annotations

from typing import Any

from nicegui import ui

from mapty.core.config import Settings, load_settings
from mapty.core.engine import (
    ClearAll,
    CloseForm,
    DeleteWorkout,
    MapClicked,
    PositionAcquired,
    PositionFailed,
    RequestEdit,
    SelectWorkout,
    SubmitForm,
    WorkoutController,
    build_controller,
)
from mapty.core.logging_config import get_logger, setup_logging
from mapty.ui.presenters import VARIANT_FIELDS, detail_rows, popup_class, popup_text
from mapty.workout.model import Coords, Cycling, Running, Workout
from mapty.workout.parser import WorkoutInput

logger = get_logger(__name__)

DEFAULT_CENTER: Coords = (51.505, -0.09)
GEOLOCATION_TIMEOUT_SEC = 15.0

_GEOLOCATION_JS = """
new Promise((resolve) => {
  if (!navigator.geolocation) { resolve(null); return; }
  navigator.geolocation.getCurrentPosition(
    (p) => resolve([p.coords.latitude, p.coords.longitude]),
    () => resolve(null),
  );
});
"""

_STYLE = """
<style>
  body { background: #2d3439; color: #ececec; font-family: "Manrope", Arial, sans-serif; }
  .mp-sidebar { background: #2d3439; min-width: 360px; max-width: 440px; }
  .mp-workout { background: #42484d; border-radius: 6px; border-left: 5px solid; }
  .mp-workout--running { border-left-color: #00c46a; }
  .mp-workout--cycling { border-left-color: #ffb545; }
  .mp-unit { color: #aaa; font-size: 0.8rem; text-transform: uppercase; }
  .running-popup .leaflet-popup-content-wrapper { border-left: 5px solid #00c46a; }
  .cycling-popup .leaflet-popup-content-wrapper { border-left: 5px solid #ffb545; }
</style>
"""


class WebRenderer:
    """Draws workouts on the Leaflet map and in the sidebar list."""

    def __init__(
        self,
        *,
        leaflet: Any,
        entries_column: Any,
        remove_all_btn: Any,
        zoom: int,
    ) -> None:
        self._map = leaflet
        self._entries_column = entries_column
        self._remove_all_btn = remove_all_btn
        self._zoom = zoom
        self._entries: dict[str, Any] = {}
        self.on_edit: Any = None
        self.on_delete: Any = None
        self.on_select: Any = None

    def render_list_entry(self, workout: Workout, replace_existing_id: str | None = None) -> None:
        card = self._build_card(workout)
        old = self._entries.pop(replace_existing_id, None) if replace_existing_id else None
        if old is not None:
            index = list(self._entries_column.default_slot.children).index(old)
            card.move(target_container=self._entries_column, target_index=index)
            self._entries_column.remove(old)
        else:
            # Newest entries go right under the form.
            card.move(target_container=self._entries_column, target_index=0)
        self._entries[workout.id] = card

    def render_marker(self, workout: Workout, is_replace: bool) -> Any:
        marker = self._map.marker(latlng=workout.coords)
        marker.run_method(
            "bindPopup",
            popup_text(workout),
            {
                "maxWidth": 250,
                "minWidth": 100,
                "autoClose": False,
                "closeOnClick": False,
                "className": popup_class(workout),
            },
        )
        marker.run_method("openPopup")
        return marker

    def remove_marker(self, handle: Any) -> None:
        self._map.remove_layer(handle)

    def remove_list_entry(self, workout_id: str) -> None:
        card = self._entries.pop(workout_id, None)
        if card is not None:
            self._entries_column.remove(card)

    def remove_all_list_entries(self) -> None:
        for card in self._entries.values():
            self._entries_column.remove(card)
        self._entries.clear()

    def set_remove_all_visible(self, visible: bool) -> None:
        self._remove_all_btn.set_visibility(visible)

    def focus_workout(self, workout: Workout) -> None:
        self._map.set_center(workout.coords)
        self._map.set_zoom(self._zoom)

    def center_map(self, coords: Coords) -> None:
        self._map.set_center(coords)
        self._map.set_zoom(self._zoom)

    def notify(self, message: str) -> None:
        ui.notify(message, color="negative")

    def _build_card(self, workout: Workout) -> Any:
        with self._entries_column:
            with ui.card().classes(f"w-full mp-workout mp-workout--{workout.kind}") as card:
                with ui.row().classes("w-full items-center justify-between"):
                    ui.label(workout.description).classes("text-base font-semibold")
                    with ui.row().classes("gap-1"):
                        ui.button(
                            icon="edit", on_click=lambda _, wid=workout.id: self._emit_edit(wid)
                        ).props("flat dense round size=sm")
                        # Stop the click from also selecting the card being removed.
                        ui.button(icon="close").props("flat dense round size=sm").on(
                            "click.stop", lambda _, wid=workout.id: self._emit_delete(wid)
                        )
                with ui.row().classes("w-full gap-4"):
                    for row in detail_rows(workout):
                        with ui.row().classes("items-baseline gap-1"):
                            ui.label(row.icon)
                            ui.label(row.value).classes("font-semibold")
                            ui.label(row.unit).classes("mp-unit")
            card.on("click", lambda _, wid=workout.id: self._emit_select(wid))
        return card

    def _emit_edit(self, workout_id: str) -> None:
        if self.on_edit is not None:
            self.on_edit(workout_id)

    def _emit_delete(self, workout_id: str) -> None:
        if self.on_delete is not None:
            self.on_delete(workout_id)

    def _emit_select(self, workout_id: str) -> None:
        if self.on_select is not None:
            self.on_select(workout_id)


class WebWorkoutForm:
    def __init__(self) -> None:
        with ui.card().classes("w-full mp-workout") as self.card:
            with ui.grid(columns=2).classes("w-full gap-2"):
                self.kind_select = ui.select(
                    {"running": "Running", "cycling": "Cycling"}, value="running", label="Type"
                )
                self.distance_input = ui.input("Distance", placeholder="km")
                self.duration_input = ui.input("Duration", placeholder="min")
                self.variant_input = ui.input(
                    VARIANT_FIELDS["running"].label,
                    placeholder=VARIANT_FIELDS["running"].placeholder,
                )
            with ui.row().classes("w-full justify-end gap-2"):
                self.submit_btn = ui.button("OK")
                self.close_btn = ui.button("Close").props("flat")
        self.kind_select.on_value_change(lambda e: self._toggle_variant_field(str(e.value)))
        self.card.set_visibility(False)

    def read_input(self) -> WorkoutInput:
        return WorkoutInput(
            kind=str(self.kind_select.value),
            distance=self.distance_input.value,
            duration=self.duration_input.value,
            variant=self.variant_input.value,
        )

    def populate(self, workout: Workout) -> None:
        self.kind_select.set_value(workout.kind)
        self.distance_input.set_value(f"{workout.distance_km:g}")
        self.duration_input.set_value(f"{workout.duration_min:g}")
        if isinstance(workout, Running):
            self.variant_input.set_value(f"{workout.cadence:g}")
        elif isinstance(workout, Cycling):
            self.variant_input.set_value(f"{workout.elevation_gain:g}")

    def clear(self) -> None:
        self.distance_input.set_value("")
        self.duration_input.set_value("")
        self.variant_input.set_value("")

    def hide(self) -> None:
        self.card.set_visibility(False)

    def show(self) -> None:
        self.card.set_visibility(True)
        self.distance_input.run_method("focus")

    def _toggle_variant_field(self, kind: str) -> None:
        field = VARIANT_FIELDS.get(kind, VARIANT_FIELDS["running"])
        self.variant_input.props(f'label="{field.label}" placeholder="{field.placeholder}"')


def _as_coords(raw: Any) -> Coords | None:
    if not isinstance(raw, (list, tuple)) or len(raw) != 2:
        return None
    try:
        return float(raw[0]), float(raw[1])
    except (TypeError, ValueError):
        return None


def build_page(settings: Settings) -> WorkoutController:
    ui.add_head_html(_STYLE)
    with ui.row().classes("w-full h-screen no-wrap gap-0"):
        with ui.column().classes("mp-sidebar h-full p-4 gap-3 overflow-auto"):
            ui.label("Mapty").classes("text-2xl font-bold")
            form = WebWorkoutForm()
            entries_column = ui.column().classes("w-full gap-2")
            remove_all_btn = ui.button("Remove all workouts").props("outline color=white")
        leaflet = ui.leaflet(center=DEFAULT_CENTER, zoom=settings.map_zoom).classes("grow h-full")

    renderer = WebRenderer(
        leaflet=leaflet,
        entries_column=entries_column,
        remove_all_btn=remove_all_btn,
        zoom=settings.map_zoom,
    )
    controller = build_controller(renderer, form, settings=settings)

    renderer.on_edit = lambda wid: controller.dispatch(RequestEdit(wid))
    renderer.on_delete = lambda wid: controller.dispatch(DeleteWorkout(wid))
    renderer.on_select = lambda wid: controller.dispatch(SelectWorkout(wid))
    form.submit_btn.on_click(lambda: controller.dispatch(SubmitForm()))
    form.close_btn.on_click(lambda: controller.dispatch(CloseForm()))
    remove_all_btn.on_click(lambda: controller.dispatch(ClearAll()))

    def on_map_click(e: Any) -> None:
        if not controller.state.map_ready:
            return
        latlng = e.args.get("latlng", {})
        controller.dispatch(MapClicked((float(latlng["lat"]), float(latlng["lng"]))))

    leaflet.on("map-click", on_map_click)
    controller.start()
    return controller


async def _acquire_position(controller: WorkoutController) -> None:
    try:
        raw = await ui.run_javascript(_GEOLOCATION_JS, timeout=GEOLOCATION_TIMEOUT_SEC)
    except TimeoutError:
        controller.dispatch(PositionFailed("timed out"))
        return
    coords = _as_coords(raw)
    if coords is None:
        controller.dispatch(PositionFailed("permission denied or unsupported"))
        return
    controller.dispatch(PositionAcquired(coords))


def run_web_ui(*, settings: Settings | None = None) -> int:
    resolved = settings or load_settings()
    setup_logging(resolved.log_level)

    @ui.page("/")
    async def index() -> None:
        controller = build_page(resolved)
        await ui.context.client.connected()
        await _acquire_position(controller)

    logger.info("Serving Mapty on http://%s:%d", resolved.host, resolved.port)
    ui.run(host=resolved.host, port=resolved.port, reload=False, title="Mapty")
    return 0
