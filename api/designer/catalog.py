from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
import logging
import re
from typing import Any

logger = logging.getLogger(__name__)


class RoomCategory(str, Enum):
    LIVING_ROOM = "living-room"
    BEDROOM = "bedroom"
    KITCHEN = "kitchen"
    BATHROOM = "bathroom"
    GARAGE = "garage"
    ENTRANCE = "entrance"


@dataclass(frozen=True)
class CategoryDefinition:
    key: str
    display_name: str
    default_width: float
    default_height: float
    color: str
    known: bool = True

    def as_dict(self) -> dict[str, Any]:
        return {
            "category": self.key,
            "displayName": self.display_name,
            "defaultWidth": self.default_width,
            "defaultHeight": self.default_height,
            "color": self.color,
        }


UNKNOWN_CATEGORY = CategoryDefinition(
    key="unknown",
    display_name="Room",
    default_width=150.0,
    default_height=120.0,
    color="#9CA3AF",
    known=False,
)

# Palette order matches the room picker in the host UI.
_CATALOG: dict[str, CategoryDefinition] = {
    definition.key: definition
    for definition in (
        CategoryDefinition(RoomCategory.LIVING_ROOM.value, "Living Room", 150.0, 120.0, "#3B82F6"),
        CategoryDefinition(RoomCategory.BEDROOM.value, "Bedroom", 150.0, 120.0, "#10B981"),
        CategoryDefinition(RoomCategory.KITCHEN.value, "Kitchen", 120.0, 120.0, "#F59E0B"),
        CategoryDefinition(RoomCategory.BATHROOM.value, "Bathroom", 80.0, 80.0, "#8B5CF6"),
        CategoryDefinition(RoomCategory.GARAGE.value, "Garage", 150.0, 180.0, "#6B7280"),
        CategoryDefinition(RoomCategory.ENTRANCE.value, "Entrance", 150.0, 120.0, "#EF4444"),
    )
}


def normalize_category(category: str | RoomCategory) -> str:
    if isinstance(category, RoomCategory):
        return category.value
    text = str(category or "").strip().casefold()
    return re.sub(r"[\s_]+", "-", text)


def describe(category: str | RoomCategory) -> CategoryDefinition:
    """Return catalog defaults for ``category``.

    Categories outside the closed set resolve to ``UNKNOWN_CATEGORY`` rather
    than failing, since the host UI only offers catalog keys.
    """
    definition = _CATALOG.get(normalize_category(category))
    if definition is None:
        logger.warning("Unknown room category %r; using fallback defaults.", category)
        return UNKNOWN_CATEGORY
    return definition


def color_for(category: str | RoomCategory) -> str:
    return describe(category).color


def is_known_category(category: str | RoomCategory) -> bool:
    return normalize_category(category) in _CATALOG


def categories() -> list[CategoryDefinition]:
    return list(_CATALOG.values())


__all__ = [
    "CategoryDefinition",
    "RoomCategory",
    "UNKNOWN_CATEGORY",
    "categories",
    "color_for",
    "describe",
    "is_known_category",
    "normalize_category",
]
