from __future__ import annotations

from remote_support.utils.observability.logger import (
    clear_request_context,
    generate_request_id,
    log_duration,
    set_request_context,
    setup_logging,
)
from remote_support.utils.observability.metrics import (
    observe_render_duration,
    record_card_render,
)

__all__ = [
    "setup_logging",
    "set_request_context",
    "clear_request_context",
    "generate_request_id",
    "log_duration",
    "record_card_render",
    "observe_render_duration",
]
