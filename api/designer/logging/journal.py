"""Append-only JSONL journal of design-session actions."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import fields, is_dataclass
from datetime import datetime, timezone
from enum import Enum
import json
import logging
import threading
from pathlib import Path
from typing import Any
from uuid import UUID

from config import Settings

logger = logging.getLogger(__name__)
_JOURNAL_LOCK = threading.Lock()


def serialize_value(value: Any) -> Any:
    if value is None or isinstance(value, (bool, int, float, str)):
        return value
    if isinstance(value, Enum):
        enum_value = value.value
        if isinstance(enum_value, (bool, int, float, str)):
            return enum_value
        return value.name
    if isinstance(value, (UUID, Path)):
        return str(value)
    if is_dataclass(value) and not isinstance(value, type):
        payload = {
            field.name: serialize_value(getattr(value, field.name))
            for field in fields(value)
        }
        payload["type"] = type(value).__name__
        return payload
    if isinstance(value, Mapping):
        return {str(key): serialize_value(val) for key, val in value.items()}
    if isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray)):
        return [serialize_value(item) for item in value]
    return repr(value)


def log_action(
    settings: Settings,
    session_id: str,
    action: str,
    input_value: Any,
    output_value: Any,
) -> None:
    if not settings.journal_enabled:
        return

    record = {
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "session_id": session_id,
        "action": action,
        "input": serialize_value(input_value),
        "output": serialize_value(output_value),
    }
    logger.debug("Journal %s %s", session_id, action)
    path = settings.journal_path
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with _JOURNAL_LOCK, path.open("a", encoding="utf-8") as handle:
            handle.write(json.dumps(record, ensure_ascii=False))
            handle.write("\n")
    except OSError:
        logger.exception("Unable to write journal record %s to %s", action, path)


__all__ = ["log_action", "serialize_value"]
