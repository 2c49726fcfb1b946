from __future__ import annotations

from designer.room_store import RoomStore
from designer.room_types import NotFound, Room
from designer.state import InteractionState, Selected, SelectionState, Unselected


class SelectionController:
    """Tracks the single room targeted by the property editor."""

    def __init__(self, store: RoomStore, state: InteractionState) -> None:
        self._store = store
        self._state = state

    @property
    def selected_id(self) -> str | None:
        return self._state.selected_id

    @property
    def state(self) -> SelectionState:
        if self._state.selected_id is None:
            return Unselected()
        return Selected(self._state.selected_id)

    @property
    def selected_room(self) -> Room | None:
        if self._state.selected_id is None:
            return None
        return self._store.get(self._state.selected_id)

    def select(self, room_id: str) -> Room | NotFound:
        room = self._store.get(room_id)
        if room is None:
            return NotFound(room_id)
        self._state.selected_id = room.id
        return room

    def deselect(self) -> None:
        self._state.selected_id = None

    def forget(self, room_id: str) -> bool:
        """Drop the selection if it points at ``room_id``; report whether it did."""
        if self._state.selected_id != room_id:
            return False
        self._state.selected_id = None
        return True


__all__ = ["SelectionController"]
