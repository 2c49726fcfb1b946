"""Design-surface session: one room store plus its interaction state.

Every public action runs synchronously to completion and is appended to the
session journal with its input and output.
"""

from __future__ import annotations

from collections.abc import Mapping
import logging
import random
import threading
from typing import Any
from uuid import uuid4

from config import Settings, load_settings
from designer.interaction import InteractionSurface
from designer.logging.journal import log_action
from designer.metrics import PlanMetrics, compute_metrics
from designer.room_store import RoomStore
from designer.room_types import NotFound, Room
from designer.selection import SelectionController
from designer.state import DragGesture, InteractionState, SelectionState

logger = logging.getLogger(__name__)


class DesignSession:
    def __init__(
        self,
        settings: Settings | None = None,
        *,
        session_id: str | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self.settings = settings or load_settings()
        self.session_id = session_id or str(uuid4())
        self.store = RoomStore(self.settings, rng=rng)
        self.state = InteractionState()
        self.selection = SelectionController(self.store, self.state)
        self.surface = InteractionSurface(
            self.store, self.selection, self.state, self.settings
        )
        self.lock = threading.RLock()

    # ---------- rooms ----------

    def add_room(self, category: str) -> Room:
        room = self.store.add(category)
        self.state.selected_id = room.id
        self._journal("add_room", {"category": category}, room)
        return room

    def update_room(self, room_id: str, patch: Mapping[str, Any]) -> Room | NotFound:
        result = self.store.update(room_id, patch)
        self._journal("update_room", {"room_id": room_id, "patch": dict(patch)}, result)
        return result

    def duplicate_room(self, room_id: str) -> Room | NotFound:
        result = self.store.duplicate(room_id)
        if isinstance(result, Room):
            self.state.selected_id = result.id
        self._journal("duplicate_room", {"room_id": room_id}, result)
        return result

    def remove_room(self, room_id: str) -> bool:
        removed = self.store.remove(room_id)
        if removed:
            self.selection.forget(room_id)
            if self.state.drag is not None and self.state.drag.room_id == room_id:
                self.surface.cancel_drag()
        self._journal("remove_room", {"room_id": room_id}, removed)
        return removed

    def rooms(self) -> tuple[Room, ...]:
        return self.store.list()

    # ---------- selection ----------

    @property
    def selection_state(self) -> SelectionState:
        return self.selection.state

    def select_room(self, room_id: str) -> Room | NotFound:
        result = self.selection.select(room_id)
        self._journal("select_room", {"room_id": room_id}, result)
        return result

    def deselect(self) -> None:
        self.selection.deselect()
        self._journal("deselect", {}, None)

    # ---------- drag / zoom ----------

    def begin_drag(self, room_id: str) -> Room | NotFound:
        result = self.surface.begin_drag(room_id)
        self._journal("begin_drag", {"room_id": room_id}, result)
        return result

    def move_drag(self, dx: float, dy: float) -> DragGesture | None:
        # Pointer moves are transient view state and stay out of the journal.
        return self.surface.move_drag(dx, dy)

    def commit_drag(self) -> Room | NotFound | None:
        gesture = self.state.drag
        result = self.surface.commit_drag()
        self._journal("commit_drag", gesture, result)
        return result

    def cancel_drag(self) -> bool:
        cancelled = self.surface.cancel_drag()
        self._journal("cancel_drag", {}, cancelled)
        return cancelled

    def zoom_in(self) -> float:
        return self._zoom("zoom_in", self.surface.zoom_in)

    def zoom_out(self) -> float:
        return self._zoom("zoom_out", self.surface.zoom_out)

    def reset_zoom(self) -> float:
        return self._zoom("reset_zoom", self.surface.reset_zoom)

    # ---------- derived ----------

    def metrics(self) -> PlanMetrics:
        return compute_metrics(self.store.list(), self.settings)

    def snapshot(self) -> dict[str, Any]:
        grid_unit = self.settings.grid_unit
        drag = self.state.drag
        return {
            "sessionId": self.session_id,
            "rooms": [room.as_dict(grid_unit) for room in self.store.list()],
            "selectedId": self.state.selected_id,
            "scale": self.state.scale,
            "drag": (
                {"roomId": drag.room_id, "dx": drag.offset_x, "dy": drag.offset_y}
                if drag
                else None
            ),
            "gridUnit": grid_unit,
            "metrics": self.metrics().as_dict(),
        }

    def _zoom(self, action: str, step) -> float:
        before = self.state.scale
        after = step()
        self._journal(action, {"scale": before}, {"scale": after})
        return after

    def _journal(self, action: str, input_value: Any, output_value: Any) -> None:
        log_action(self.settings, self.session_id, action, input_value, output_value)


class SessionRegistry:
    """Thread-safe map of live design sessions for the HTTP surface."""

    def __init__(self, settings: Settings | None = None) -> None:
        self._settings = settings
        self._sessions: dict[str, DesignSession] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)

    def create(self) -> DesignSession:
        session = DesignSession(self._settings)
        with self._lock:
            self._sessions[session.session_id] = session
        logger.info("Opened design session %s", session.session_id)
        return session

    def get(self, session_id: str) -> DesignSession | None:
        with self._lock:
            return self._sessions.get(session_id)

    def close(self, session_id: str) -> bool:
        with self._lock:
            removed = self._sessions.pop(session_id, None)
        if removed is not None:
            logger.info("Closed design session %s", session_id)
        return removed is not None


def build_design_session(settings: Settings | None = None) -> DesignSession:
    return DesignSession(settings)


__all__ = ["DesignSession", "SessionRegistry", "build_design_session"]
