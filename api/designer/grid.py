"""Pixel to area-unit conversion for the design grid."""

from __future__ import annotations

from config import DEFAULT_GRID_UNIT


def area_units(width: float, height: float, grid_unit: float = DEFAULT_GRID_UNIT) -> float:
    """Return the area of a ``width`` x ``height`` pixel rectangle in grid units.

    Degenerate sides count as zero so the result is never negative.
    """
    if grid_unit <= 0:
        raise ValueError("grid_unit must be positive")
    return max(width, 0.0) * max(height, 0.0) / (grid_unit * grid_unit)


def snap(value: float, grid_unit: float = DEFAULT_GRID_UNIT) -> float:
    if grid_unit <= 0:
        raise ValueError("grid_unit must be positive")
    return round(value / grid_unit) * grid_unit


__all__ = ["area_units", "snap"]
