"""Drag gestures and view zoom for the design canvas.

Pointer movement only accumulates a transient offset on the interaction state;
the room store sees a single position update when the gesture is committed.
The scale factor is a rendering transform and never touches stored geometry.
"""

from __future__ import annotations

import logging

from config import Settings, load_settings
from designer.grid import snap
from designer.room_store import RoomStore
from designer.room_types import NotFound, Room
from designer.selection import SelectionController
from designer.state import DragGesture, InteractionState

logger = logging.getLogger(__name__)


class InteractionSurface:
    def __init__(
        self,
        store: RoomStore,
        selection: SelectionController,
        state: InteractionState,
        settings: Settings | None = None,
    ) -> None:
        self._store = store
        self._selection = selection
        self._state = state
        self._settings = settings or load_settings()

    @property
    def scale(self) -> float:
        return self._state.scale

    @property
    def drag(self) -> DragGesture | None:
        return self._state.drag

    def begin_drag(self, room_id: str) -> Room | NotFound:
        room = self._selection.select(room_id)
        if isinstance(room, NotFound):
            return room
        self._state.drag = DragGesture(room_id=room.id)
        return room

    def move_drag(self, dx: float, dy: float) -> DragGesture | None:
        gesture = self._state.drag
        if gesture is None:
            return None
        # Pointer deltas arrive in screen pixels; divide out the zoom to get
        # model pixels.
        gesture.offset_x += dx / self._state.scale
        gesture.offset_y += dy / self._state.scale
        return gesture

    def commit_drag(self) -> Room | NotFound | None:
        gesture = self._state.drag
        if gesture is None:
            return None
        self._state.drag = None

        room = self._store.get(gesture.room_id)
        if room is None:
            logger.info("Dropped drag for %s; room no longer exists.", gesture.room_id)
            return NotFound(gesture.room_id)

        x = max(0.0, room.x + gesture.offset_x)
        y = max(0.0, room.y + gesture.offset_y)
        if self._settings.snap_to_grid:
            x = snap(x, self._settings.grid_unit)
            y = snap(y, self._settings.grid_unit)
        return self._store.update(room.id, {"x": x, "y": y})

    def cancel_drag(self) -> bool:
        cancelled = self._state.drag is not None
        self._state.drag = None
        return cancelled

    def zoom_in(self) -> float:
        return self._set_scale(self._state.scale + self._settings.scale_step)

    def zoom_out(self) -> float:
        return self._set_scale(self._state.scale - self._settings.scale_step)

    def reset_zoom(self) -> float:
        return self._set_scale(1.0)

    def _set_scale(self, value: float) -> float:
        clamped = min(self._settings.max_scale, max(self._settings.min_scale, value))
        self._state.scale = round(clamped, 2)
        return self._state.scale


__all__ = ["InteractionSurface"]
