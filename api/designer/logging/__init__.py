from designer.logging.checkpoints import (
    log_checkpoint,
    reset_checkpoint_callback,
    set_checkpoint_callback,
)
from designer.logging.journal import log_action, serialize_value

__all__ = [
    "log_action",
    "log_checkpoint",
    "reset_checkpoint_callback",
    "serialize_value",
    "set_checkpoint_callback",
]
