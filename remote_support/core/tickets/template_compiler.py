from __future__ import annotations

from typing import Any, Mapping

from pydantic import ValidationError

from remote_support.core.tickets.models import FieldDescriptor, FieldTemplate, FieldType
from remote_support.utils.errors import InvalidTemplateError


def _require_text(value: str, cause: str, field_id: str | None) -> None:
    if not str(value or "").strip():
        raise InvalidTemplateError(cause, field_id=field_id)


def _validate_descriptor(descriptor: FieldDescriptor) -> None:
    _require_text(descriptor.id, "field id must not be empty", None)
    _require_text(descriptor.label_key, "label_key must not be empty", descriptor.id)

    if descriptor.type == FieldType.choice:
        if not descriptor.choices:
            raise InvalidTemplateError("choice field needs at least one choice", field_id=descriptor.id)
        for option in descriptor.choices:
            _require_text(option.value, "choice value must not be empty", descriptor.id)
            _require_text(option.label_key, "choice label_key must not be empty", descriptor.id)
    elif descriptor.choices:
        raise InvalidTemplateError(
            f"{getattr(descriptor.type, 'value', descriptor.type)} field must not declare choices",
            field_id=descriptor.id,
        )


def compile_template(template: FieldTemplate) -> tuple[FieldDescriptor, ...]:
    """
    Check template invariants and return its fields in display order

    The returned descriptors are the template's own (immutable) instances.
    Raises InvalidTemplateError on the first violation.
    """
    seen: set[str] = set()
    for descriptor in template.fields:
        _validate_descriptor(descriptor)
        if descriptor.id in seen:
            raise InvalidTemplateError("duplicate field id", field_id=descriptor.id)
        seen.add(descriptor.id)
    return template.fields


def parse_template(raw: Mapping[str, Any]) -> FieldTemplate:
    """Build a FieldTemplate from stored YAML/JSON data."""
    if not isinstance(raw, Mapping):
        raise InvalidTemplateError(f"template must be a mapping, got {type(raw).__name__}")
    try:
        return FieldTemplate.model_validate(dict(raw))
    except ValidationError as exc:
        first = exc.errors()[0] if exc.errors() else {}
        location = ".".join(str(part) for part in first.get("loc", ()))
        raise InvalidTemplateError(f"{location}: {first.get('msg', str(exc))}") from exc
