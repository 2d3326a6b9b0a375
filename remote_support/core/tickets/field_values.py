"""
Description: Ticket additional properties store
Main features:
    - Decode the serialized additional properties map into an ordered dict
    - Encode the dict back (the only place string serialization happens)
    - Build the per-render TicketValues view of a ticket
"""

from __future__ import annotations

import json
import logging
from datetime import date, datetime
from typing import Any, Mapping

from remote_support.core.tickets.models import (
    CATEGORY_ID,
    DESCRIPTION_ID,
    ISSUE_OCCURRED_ON_ID,
    REQUEST_TYPE_ID,
    TicketDetail,
)
from remote_support.utils.errors import MalformedDataError


logger = logging.getLogger(__name__)

_PREVIEW_CHARS = 80


def _scalar_text(key: str, value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (str, int, float)):
        return str(value)
    raise MalformedDataError(
        f"value of '{key}' is {type(value).__name__}, expected a scalar",
    )


def load(serialized: str | None) -> dict[str, str]:
    """
    Decode an additional properties payload

    Empty or missing payloads decode to an empty dict. Anything that is not a
    JSON object of scalar values raises MalformedDataError.
    """
    text = (serialized or "").strip()
    if not text:
        return {}

    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise MalformedDataError(exc.msg, payload_preview=text[:_PREVIEW_CHARS]) from exc

    if not isinstance(data, dict):
        raise MalformedDataError(
            f"expected a JSON object, got {type(data).__name__}",
            payload_preview=text[:_PREVIEW_CHARS],
        )
    return {str(key): _scalar_text(str(key), value) for key, value in data.items()}


def save(values: Mapping[str, str]) -> str:
    """Encode a values map; key order is kept so equal maps encode identically."""
    return json.dumps({str(key): str(value) for key, value in values.items()}, ensure_ascii=False)


def format_occurrence_date(value: datetime | date | str | None) -> str:
    if value is None:
        return ""
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return str(value)


def load_additional_properties(ticket: TicketDetail) -> dict[str, str]:
    """Decode a ticket's additional properties; a corrupt payload is logged and treated as empty."""
    try:
        return load(ticket.additional_properties)
    except MalformedDataError as exc:
        logger.warning(
            "ticket additional properties malformed, treating as empty: %s",
            exc,
            extra={
                "event_code": "tickets.additional_properties.malformed",
                "ticket_id": ticket.ticket_id,
            },
        )
        return {}


def build_ticket_values(
    ticket: TicketDetail,
    additional_properties: Mapping[str, str] | None = None,
) -> dict[str, str]:
    """
    Build the field id -> value view used by validation and rendering

    Well-known ticket fields override additional properties with the same id.
    Already decoded additional properties may be passed in.
    """
    if additional_properties is None:
        values = load_additional_properties(ticket)
    else:
        values = dict(additional_properties)
    well_known = {
        CATEGORY_ID: ticket.category,
        REQUEST_TYPE_ID: ticket.request_type,
        DESCRIPTION_ID: ticket.description,
        ISSUE_OCCURRED_ON_ID: format_occurrence_date(ticket.issue_occurred_on),
    }
    stored_keys = {key.lower(): key for key in values}
    for field_id, text in well_known.items():
        stored_key = stored_keys.get(field_id.lower())
        # an empty ticket column never hides a value stored in additional properties
        if text or stored_key is None:
            values[field_id] = text
        else:
            values[field_id] = values[stored_key]
    return values


def get_value(values: Mapping[str, str], field_id: str) -> str:
    """Value of a field id; stored keys match case-insensitively when there is no exact key."""
    if field_id in values:
        return values[field_id]
    wanted = field_id.lower()
    for key, value in values.items():
        if key.lower() == wanted:
            return value
    return ""
