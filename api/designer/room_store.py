"""Ordered, in-memory collection of the rooms placed on the design surface."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
import logging
import math
import random
from typing import Any
from uuid import uuid4

from config import Settings, load_settings
from designer.catalog import describe, color_for, normalize_category
from designer.room_types import NotFound, Room

logger = logging.getLogger(__name__)

_SCALAR_FIELDS = ("x", "y", "width", "height")


def parse_number(value: Any, field: str) -> float:
    if isinstance(value, bool):
        raise ValueError(f"'{field}' must be a number, got {value!r}")
    try:
        num = float(value)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"'{field}' must be a number, got {value!r}") from exc
    if not math.isfinite(num):
        raise ValueError(f"'{field}' must be a finite number, got {num!r}")
    return num


def _flatten_patch(patch: Mapping[str, Any]) -> dict[str, Any]:
    flat: dict[str, Any] = {}
    position = patch.get("position")
    if isinstance(position, Mapping):
        flat.update({k: position[k] for k in ("x", "y") if k in position})
    size = patch.get("size")
    if isinstance(size, Mapping):
        flat.update({k: size[k] for k in ("width", "height") if k in size})
    for key in ("name", "category", *_SCALAR_FIELDS):
        if key in patch:
            flat[key] = patch[key]
    return flat


def _category_key(category: Any) -> str:
    definition = describe(category)
    if definition.known:
        return definition.key
    return normalize_category(category) or definition.key


class RoomStore:
    def __init__(
        self,
        settings: Settings | None = None,
        *,
        rng: random.Random | None = None,
    ) -> None:
        self._settings = settings or load_settings()
        self._rng = rng or random.Random()
        self._rooms: list[Room] = []
        self._issued_ids: set[str] = set()

    def __len__(self) -> int:
        return len(self._rooms)

    def __iter__(self) -> Iterator[Room]:
        return iter(self.list())

    def __contains__(self, room_id: object) -> bool:
        return self.get(room_id) is not None if isinstance(room_id, str) else False

    def list(self) -> tuple[Room, ...]:
        return tuple(self._rooms)

    def get(self, room_id: str) -> Room | None:
        for room in self._rooms:
            if room.id == room_id:
                return room
        return None

    def add(self, category: str) -> Room:
        definition = describe(category)
        key = _category_key(category)
        ordinal = 1 + sum(1 for room in self._rooms if room.category == key)
        x, y = self._spawn_position()
        room = Room(
            id=self._next_id(),
            category=key,
            name=f"{definition.display_name} {ordinal}",
            x=x,
            y=y,
            width=definition.default_width,
            height=definition.default_height,
            color=definition.color,
        )
        self._rooms.append(room)
        logger.debug("Added %s (%s) at (%.1f, %.1f)", room.id, key, x, y)
        return room

    def update(self, room_id: str, patch: Mapping[str, Any]) -> Room | NotFound:
        room = self.get(room_id)
        if room is None:
            return NotFound(room_id)

        # Validate everything before touching the room so a bad value never
        # leaves a half-applied patch behind.
        changes = self._coerce_patch(_flatten_patch(patch))
        for key, value in changes.items():
            setattr(room, key, value)
        if "category" in changes:
            room.color = color_for(changes["category"])
        return room

    def duplicate(self, room_id: str) -> Room | NotFound:
        source = self.get(room_id)
        if source is None:
            return NotFound(room_id)

        offset = self._settings.duplicate_offset
        clone = Room(
            id=self._next_id(),
            category=source.category,
            name=f"{source.name} Copy",
            x=source.x + offset,
            y=source.y + offset,
            width=source.width,
            height=source.height,
            color=source.color,
        )
        self._rooms.append(clone)
        return clone

    def remove(self, room_id: str) -> bool:
        for index, room in enumerate(self._rooms):
            if room.id == room_id:
                del self._rooms[index]
                return True
        return False

    def _coerce_patch(self, patch: Mapping[str, Any]) -> dict[str, Any]:
        changes: dict[str, Any] = {}
        if "name" in patch:
            if patch["name"] is None:
                raise ValueError("'name' must be a string, got None")
            changes["name"] = str(patch["name"])
        if "category" in patch:
            changes["category"] = _category_key(patch["category"])
        for key in _SCALAR_FIELDS:
            if key not in patch:
                continue
            value = parse_number(patch[key], key)
            if key in ("width", "height") and value <= 0:
                logger.warning(
                    "Degenerate %s %.1f accepted as 0; room will report zero area.",
                    key,
                    value,
                )
                value = 0.0
            changes[key] = value
        return changes

    def _spawn_position(self) -> tuple[float, float]:
        (origin_x, origin_y) = self._settings.spawn_origin
        (extent_x, extent_y) = self._settings.spawn_extent
        return (
            self._rng.random() * extent_x + origin_x,
            self._rng.random() * extent_y + origin_y,
        )

    def _next_id(self) -> str:
        while True:
            candidate = f"room-{uuid4().hex[:12]}"
            if candidate not in self._issued_ids:
                self._issued_ids.add(candidate)
                return candidate


__all__ = ["RoomStore", "parse_number"]
