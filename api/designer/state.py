"""Session-scoped interaction state shared by selection and the drag/zoom surface."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class DragGesture:
    room_id: str
    offset_x: float = 0.0
    offset_y: float = 0.0


@dataclass
class InteractionState:
    selected_id: str | None = None
    drag: DragGesture | None = None
    scale: float = 1.0


@dataclass(frozen=True)
class Unselected:
    pass


@dataclass(frozen=True)
class Selected:
    room_id: str


SelectionState = Unselected | Selected


__all__ = [
    "DragGesture",
    "InteractionState",
    "Selected",
    "SelectionState",
    "Unselected",
]
