"""
Description: Structured logging utilities
Main features:
    - JSON structured output
    - Request context propagation (request id, user id, ticket id)
    - Render duration logging
"""

from __future__ import annotations

import json
import logging
import time
import uuid
from contextvars import ContextVar
from functools import wraps
from typing import Any, Callable

from remote_support.config import LoggingSettings


# region Context vars
request_id_var: ContextVar[str] = ContextVar("request_id", default="")
user_id_var: ContextVar[str] = ContextVar("user_id", default="")
ticket_id_var: ContextVar[str] = ContextVar("ticket_id", default="")
# endregion


_RESERVED_RECORD_KEYS = (
    "name", "msg", "args", "created", "filename", "funcName",
    "levelname", "levelno", "lineno", "module", "msecs",
    "pathname", "process", "processName", "relativeCreated",
    "stack_info", "exc_info", "exc_text", "thread", "threadName",
    "message", "asctime", "taskName",
)


# region Formatters
class StructuredJsonFormatter(logging.Formatter):
    """
    JSON structured log formatter

    Features:
        - Renders each record as one JSON object
        - Injects the current context variables
        - Copies `extra={...}` fields such as event_code
    """

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        if request_id := request_id_var.get():
            payload["request_id"] = request_id
        if user_id := user_id_var.get():
            payload["user_id"] = user_id
        if ticket_id := ticket_id_var.get():
            payload["ticket_id"] = ticket_id

        for key, value in record.__dict__.items():
            if key in _RESERVED_RECORD_KEYS or key.startswith("_"):
                continue
            payload[key] = value

        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)

        return json.dumps(payload, ensure_ascii=False, default=str)


class SimpleFormatter(logging.Formatter):
    """Plain text formatter for development"""

    def format(self, record: logging.LogRecord) -> str:
        base = f"[{self.formatTime(record)}] {record.levelname:5} {record.name}: {record.getMessage()}"

        context_parts = []
        if request_id := request_id_var.get():
            context_parts.append(f"req={request_id[:8]}")
        if user_id := user_id_var.get():
            context_parts.append(f"user={user_id[:8]}")
        if ticket_id := ticket_id_var.get():
            context_parts.append(f"ticket={ticket_id}")
        if context_parts:
            base += f" ({', '.join(context_parts)})"

        extras = []
        for key in ("event_code", "card", "duration_ms"):
            if hasattr(record, key):
                extras.append(f"{key}={getattr(record, key)}")
        if extras:
            base += f" [{', '.join(extras)}]"

        return base
# endregion


# region Context management
def set_request_context(
    request_id: str | None = None,
    user_id: str | None = None,
    ticket_id: str | None = None,
) -> None:
    """
    Set context for the current request

    Args:
        request_id: unique request id
        user_id: chat user id
        ticket_id: ticket being rendered
    """
    if request_id:
        request_id_var.set(request_id)
    if user_id:
        user_id_var.set(user_id)
    if ticket_id:
        ticket_id_var.set(ticket_id)


def clear_request_context() -> None:
    request_id_var.set("")
    user_id_var.set("")
    ticket_id_var.set("")


def generate_request_id() -> str:
    return str(uuid.uuid4())[:12]
# endregion


# region Timing
def log_duration(logger_name: str = __name__):
    """
    Decorator logging how long a call took

    Emits a debug record with duration_ms on success and an error record on
    failure; the exception is re-raised unchanged.
    """
    def decorator(func: Callable):
        @wraps(func)
        def wrapper(*args, **kwargs):
            logger = logging.getLogger(logger_name)
            start = time.perf_counter()
            try:
                result = func(*args, **kwargs)
            except Exception as e:
                duration_ms = (time.perf_counter() - start) * 1000
                logger.error(
                    f"{func.__name__} failed",
                    extra={"duration_ms": round(duration_ms, 2), "error": str(e)},
                )
                raise
            duration_ms = (time.perf_counter() - start) * 1000
            logger.debug(
                f"{func.__name__} completed",
                extra={"duration_ms": round(duration_ms, 2)},
            )
            return result

        return wrapper

    return decorator
# endregion


# region Setup
def setup_logging(settings: LoggingSettings) -> None:
    """
    Configure the root logger

    Args:
        settings: logging settings (level and json/text format)
    """
    level = getattr(logging, settings.level.upper(), logging.INFO)

    handler = logging.StreamHandler()
    if settings.format == "json":
        handler.setFormatter(StructuredJsonFormatter())
    else:
        handler.setFormatter(SimpleFormatter())

    logging.basicConfig(level=level, handlers=[handler], force=True)
# endregion
