"""
Description: Field validation annotations
Main features:
    - Pair each compiled field with its current value
    - Flag required-but-empty fields and invalid occurrence dates
    - Never mutate the ticket values

Date policy: all comparisons are date-only in UTC. A datetime carrying an
offset is converted to UTC before its date is taken; naive datetimes are read
as UTC.
"""

from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Mapping, Sequence

from remote_support.core.tickets.field_values import get_value
from remote_support.core.tickets.models import AnnotatedField, FieldDescriptor, FieldType


UNIX_EPOCH = date(1970, 1, 1)
ZERO_DATE_SENTINELS: frozenset[date] = frozenset({date.min, UNIX_EPOCH})

_TEXTUAL_TYPES = frozenset({FieldType.text, FieldType.multiline_text, FieldType.choice})


def utc_today() -> date:
    return datetime.now(timezone.utc).date()


def parse_date_value(value: str | None) -> date | None:
    """
    Parse a stored date value into a UTC calendar date

    Accepts ISO dates, ISO datetimes (optionally with offset or trailing Z)
    and YYYY/MM/DD or YYYY.MM.DD. Returns None for empty or unparseable text.
    """
    text = str(value or "").strip()
    if not text:
        return None

    # separators are only rewritten inside YYYY?MM?DD; the time part keeps its fraction dot
    normalized = text[:10].replace("/", "-").replace(".", "-") + text[10:]
    if normalized.endswith(("Z", "z")):
        normalized = normalized[:-1] + "+00:00"

    try:
        parsed = datetime.fromisoformat(normalized)
    except ValueError:
        try:
            return date.fromisoformat(normalized.split(" ", 1)[0])
        except ValueError:
            return None

    if parsed.tzinfo is not None:
        try:
            parsed = parsed.astimezone(timezone.utc)
        except OverflowError:
            # 0001-01-01 with a positive offset falls before year 1 in UTC
            return date.min
    return parsed.date()


def is_invalid_occurrence_date(value: str | None, today: date) -> bool:
    """An occurrence date must exist, not be a zero sentinel, and not lie in the future."""
    if str(value or "").strip() == "0":
        return True
    parsed = parse_date_value(value)
    if parsed is None:
        return True
    if parsed in ZERO_DATE_SENTINELS:
        return True
    return parsed > today


def _field_failed(descriptor: FieldDescriptor, value: str, today: date) -> bool:
    if descriptor.type == FieldType.date:
        return is_invalid_occurrence_date(value, today)
    if descriptor.type in _TEXTUAL_TYPES:
        return descriptor.required and not value.strip()
    # unknown types are reported by the renderer
    return False


def annotate(
    fields: Sequence[FieldDescriptor],
    values: Mapping[str, str],
    show_validation: bool,
    *,
    today: date | None = None,
) -> tuple[AnnotatedField, ...]:
    """
    Attach the current value and a validation flag to every field

    With show_validation False (first display of a form) nothing is flagged.
    Text, multiline and choice fields fail when required and blank. Date
    fields fail when absent, unparseable, a zero sentinel or later than
    today, whatever their required flag: they record when something already
    happened.
    """
    reference_day = today or utc_today()
    annotated: list[AnnotatedField] = []
    for descriptor in fields:
        value = str(get_value(values, descriptor.id) or "")
        failed = show_validation and _field_failed(descriptor, value, reference_day)
        annotated.append(AnnotatedField(field=descriptor, value=value, validation_failed=failed))
    return tuple(annotated)
