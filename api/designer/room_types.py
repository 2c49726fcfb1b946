from __future__ import annotations

from dataclasses import dataclass
from typing import Any, TypedDict

from designer.grid import area_units


class Point(TypedDict):
    x: float
    y: float


class Size(TypedDict):
    width: float
    height: float


class RoomPatch(TypedDict, total=False):
    name: str
    category: str
    x: float
    y: float
    width: float
    height: float
    position: Point
    size: Size


@dataclass
class Room:
    id: str
    category: str
    name: str
    x: float
    y: float
    width: float
    height: float
    color: str

    @property
    def position(self) -> tuple[float, float]:
        return self.x, self.y

    @property
    def size(self) -> tuple[float, float]:
        return self.width, self.height

    def area(self, grid_unit: float) -> float:
        return area_units(self.width, self.height, grid_unit)

    def as_dict(self, grid_unit: float | None = None) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "id": self.id,
            "category": self.category,
            "name": self.name,
            "x": self.x,
            "y": self.y,
            "width": self.width,
            "height": self.height,
            "color": self.color,
        }
        if grid_unit is not None:
            payload["area"] = self.area(grid_unit)
        return payload


@dataclass(frozen=True)
class NotFound:
    """Result returned when an operation names a room the store does not hold."""

    room_id: str

    def __bool__(self) -> bool:
        return False

    @property
    def message(self) -> str:
        return f"Room '{self.room_id}' not found"


__all__ = ["NotFound", "Point", "Room", "RoomPatch", "Size"]
