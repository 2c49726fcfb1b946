from __future__ import annotations

from collections.abc import Iterable
import math
from dataclasses import dataclass, field
from typing import Any

from config import Settings, load_settings
from designer.room_types import Room


def round_half_up(value: float) -> int:
    """Round to the nearest integer with exact halves going up (2.5 -> 3)."""
    return math.floor(value + 0.5)


@dataclass(frozen=True)
class RoomArea:
    room_id: str
    name: str
    area: float

    @property
    def display_area(self) -> int:
        return round_half_up(self.area)


@dataclass(frozen=True)
class PlanMetrics:
    """Derived totals for the rooms currently on the surface.

    ``total_area`` and ``estimated_cost`` keep full precision; the display
    helpers round for presentation only.
    """

    total_rooms: int
    total_area: float
    estimated_cost: float
    currency_major_unit: float = 100_000.0
    currency_symbol: str = "₹"
    currency_major_suffix: str = "L"
    rooms: tuple[RoomArea, ...] = field(default_factory=tuple)

    @property
    def display_area(self) -> int:
        return round_half_up(self.total_area)

    @property
    def cost_in_major_units(self) -> float:
        return round_half_up(self.estimated_cost * 100 / self.currency_major_unit) / 100

    def format_cost(self) -> str:
        return f"{self.currency_symbol}{self.cost_in_major_units:g}{self.currency_major_suffix}"

    def as_dict(self) -> dict[str, Any]:
        return {
            "totalRooms": self.total_rooms,
            "totalArea": self.total_area,
            "displayArea": self.display_area,
            "estimatedCost": self.estimated_cost,
            "costInMajorUnits": self.cost_in_major_units,
            "formattedCost": self.format_cost(),
            "rooms": [
                {"id": r.room_id, "name": r.name, "area": r.area, "displayArea": r.display_area}
                for r in self.rooms
            ],
        }


def compute_metrics(rooms: Iterable[Room], settings: Settings | None = None) -> PlanMetrics:
    settings = settings or load_settings()
    per_room = tuple(
        RoomArea(room_id=room.id, name=room.name, area=room.area(settings.grid_unit))
        for room in rooms
    )
    total_area = sum(entry.area for entry in per_room)
    return PlanMetrics(
        total_rooms=len(per_room),
        total_area=total_area,
        estimated_cost=total_area * settings.cost_per_area_unit,
        currency_major_unit=settings.currency_major_unit,
        currency_symbol=settings.currency_symbol,
        currency_major_suffix=settings.currency_major_suffix,
        rooms=per_room,
    )


__all__ = ["PlanMetrics", "RoomArea", "compute_metrics", "round_half_up"]
