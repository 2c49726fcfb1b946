"""In-memory floor plan design engine."""

from designer.catalog import (
    CategoryDefinition,
    RoomCategory,
    categories,
    color_for,
    describe,
)
from designer.grid import area_units
from designer.interaction import InteractionSurface
from designer.metrics import PlanMetrics, compute_metrics
from designer.progress import CancellationToken, DesignProgress
from designer.room_store import RoomStore
from designer.room_types import NotFound, Room, RoomPatch
from designer.selection import SelectionController
from designer.session import DesignSession, SessionRegistry, build_design_session
from designer.state import InteractionState, Selected, Unselected
from config import load_settings

__all__ = [
    "CancellationToken",
    "CategoryDefinition",
    "DesignProgress",
    "DesignSession",
    "InteractionState",
    "InteractionSurface",
    "NotFound",
    "PlanMetrics",
    "Room",
    "RoomCategory",
    "RoomPatch",
    "RoomStore",
    "Selected",
    "SelectionController",
    "SessionRegistry",
    "Unselected",
    "area_units",
    "build_design_session",
    "categories",
    "color_for",
    "compute_metrics",
    "describe",
    "load_settings",
]
