"""Progress checkpoint helpers used to surface step updates to the host."""

from __future__ import annotations

import logging
from contextvars import ContextVar, Token
from typing import Callable, Optional

CheckpointCallback = Callable[[str, int], None]

_CHECKPOINT_CALLBACK: ContextVar[Optional[CheckpointCallback]] = ContextVar(
    "progress_checkpoint_callback", default=None
)


def set_checkpoint_callback(callback: Optional[CheckpointCallback]) -> Token:
    """Register a callback for the current context and return its token."""
    return _CHECKPOINT_CALLBACK.set(callback)


def reset_checkpoint_callback(token: Token) -> None:
    _CHECKPOINT_CALLBACK.reset(token)


def log_checkpoint(message: str, percent: int) -> None:
    """Log a progress message and forward it to the registered callback.

    A failing callback is logged and never interrupts the caller.
    """
    text = (message or "").strip()
    if not text:
        return

    percent = max(0, min(100, int(percent)))
    logging.info("Checkpoint %d%%: %s", percent, text)
    callback = _CHECKPOINT_CALLBACK.get()
    if not callback:
        return

    try:
        callback(text, percent)
    except Exception:
        logging.exception("Checkpoint callback failed.")


__all__ = ["log_checkpoint", "reset_checkpoint_callback", "set_checkpoint_callback"]
