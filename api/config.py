"""Environment and settings helpers for the floor plan design service."""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from uuid import uuid4

from dotenv import load_dotenv


PROJECT_ROOT = Path(__file__).resolve().parents[0]
DEFAULT_GRID_UNIT = 20.0
DEFAULT_COST_PER_AREA_UNIT = 1200.0
DEFAULT_CURRENCY_MAJOR_UNIT = 100_000.0
DEFAULT_JOURNAL_FILE = PROJECT_ROOT / f"designer/logging/{uuid4()}.log"
DEFAULT_JOURNAL_REPORT_FILE = "journal_dump.txt"


def _resolve_project_path(value: str | os.PathLike[str]) -> Path:
    path = Path(value).expanduser()
    if path.is_absolute():
        return path
    return PROJECT_ROOT / path


@dataclass(slots=True)
class Settings:
    grid_unit: float = DEFAULT_GRID_UNIT
    cost_per_area_unit: float = DEFAULT_COST_PER_AREA_UNIT
    currency_major_unit: float = DEFAULT_CURRENCY_MAJOR_UNIT
    currency_symbol: str = "₹"
    currency_major_suffix: str = "L"
    min_scale: float = 0.5
    max_scale: float = 2.0
    scale_step: float = 0.1
    duplicate_offset: float = 20.0
    spawn_origin: tuple[float, float] = (50.0, 50.0)
    spawn_extent: tuple[float, float] = (300.0, 200.0)
    snap_to_grid: bool = False
    progress_step_delay: float = 1.5
    journal_file: str = str(DEFAULT_JOURNAL_FILE)
    journal_report_file: str = DEFAULT_JOURNAL_REPORT_FILE
    host: str = "0.0.0.0"
    port: int = 8000

    def __post_init__(self) -> None:
        if self.grid_unit <= 0:
            raise RuntimeError("GRID_UNIT must be a positive number.")
        if not 0 < self.min_scale <= self.max_scale:
            raise RuntimeError("MIN_SCALE must be positive and not exceed MAX_SCALE.")
        if self.scale_step <= 0:
            raise RuntimeError("SCALE_STEP must be a positive number.")

    @property
    def journal_enabled(self) -> bool:
        return bool(self.journal_file)

    @property
    def journal_path(self) -> Path:
        return _resolve_project_path(self.journal_file)

    @property
    def journal_report_path(self) -> Path:
        return _resolve_project_path(self.journal_report_file)


def _env_float(name: str, default: float) -> float:
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError as exc:
        raise RuntimeError(f"{name} must be a number, got {raw!r}.") from exc


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise RuntimeError(f"{name} must be an integer, got {raw!r}.") from exc


def _env_bool(name: str, default: bool) -> bool:
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


@lru_cache(maxsize=1)
def load_settings() -> Settings:
    load_dotenv()

    return Settings(
        grid_unit=_env_float("GRID_UNIT", DEFAULT_GRID_UNIT),
        cost_per_area_unit=_env_float("COST_PER_AREA_UNIT", DEFAULT_COST_PER_AREA_UNIT),
        currency_major_unit=_env_float(
            "CURRENCY_MAJOR_UNIT", DEFAULT_CURRENCY_MAJOR_UNIT
        ),
        currency_symbol=os.environ.get("CURRENCY_SYMBOL", "₹"),
        currency_major_suffix=os.environ.get("CURRENCY_MAJOR_SUFFIX", "L"),
        min_scale=_env_float("MIN_SCALE", 0.5),
        max_scale=_env_float("MAX_SCALE", 2.0),
        scale_step=_env_float("SCALE_STEP", 0.1),
        duplicate_offset=_env_float("DUPLICATE_OFFSET", 20.0),
        snap_to_grid=_env_bool("SNAP_TO_GRID", False),
        progress_step_delay=_env_float("PROGRESS_STEP_DELAY", 1.5),
        journal_file=os.environ.get("JOURNAL_FILE", str(DEFAULT_JOURNAL_FILE)),
        journal_report_file=os.environ.get(
            "JOURNAL_REPORT_FILE", DEFAULT_JOURNAL_REPORT_FILE
        ),
        host=os.environ.get("HOST", "0.0.0.0"),
        port=_env_int("PORT", 8000),
    )
