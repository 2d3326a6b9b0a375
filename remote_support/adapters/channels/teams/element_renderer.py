"""
Description: Dynamic field element renderer
Main features:
    - Map each annotated template field onto a card input element
    - Append an inline error marker after fields that failed validation
    - Render labeled column pairs for read-only detail cards
"""

from __future__ import annotations

from typing import Callable, Iterable

from remote_support.adapters.channels.teams.elements import (
    ColumnPair,
    Input,
    InputChoice,
    InputType,
    RenderedElement,
    TextBlock,
)
from remote_support.adapters.channels.teams.localization import Localizer
from remote_support.core.tickets.models import AnnotatedField, FieldType
from remote_support.utils.errors import UnsupportedFieldTypeError


REQUIRED_FIELD_VALIDATION_KEY = "RequiredFieldValidationText"
DATE_VALIDATION_KEY = "DateValidationText"


def _text_input(field: AnnotatedField, localize: Localizer, input_type: InputType) -> Input:
    descriptor = field.field
    return Input(
        id=descriptor.id,
        input_type=input_type,
        label=localize(descriptor.label_key),
        value=field.value,
        is_required=descriptor.required,
    )


def _render_text(field: AnnotatedField, localize: Localizer) -> Input:
    return _text_input(field, localize, "text")


def _render_multiline(field: AnnotatedField, localize: Localizer) -> Input:
    return _text_input(field, localize, "multiline")


def _render_date(field: AnnotatedField, localize: Localizer) -> Input:
    return _text_input(field, localize, "date")


def _render_choice(field: AnnotatedField, localize: Localizer) -> Input:
    descriptor = field.field
    # the option value is the data binding; only the title is localized
    choices = tuple(
        InputChoice(title=localize(option.label_key), value=option.value)
        for option in descriptor.choices
    )
    return Input(
        id=descriptor.id,
        input_type="choice",
        label=localize(descriptor.label_key),
        value=field.value,
        is_required=descriptor.required,
        choices=choices,
    )


_FIELD_RENDERERS: dict[FieldType, Callable[[AnnotatedField, Localizer], Input]] = {
    FieldType.text: _render_text,
    FieldType.multiline_text: _render_multiline,
    FieldType.choice: _render_choice,
    FieldType.date: _render_date,
}

_VALIDATION_KEYS: dict[FieldType, str] = {
    FieldType.text: REQUIRED_FIELD_VALIDATION_KEY,
    FieldType.multiline_text: REQUIRED_FIELD_VALIDATION_KEY,
    FieldType.choice: REQUIRED_FIELD_VALIDATION_KEY,
    FieldType.date: DATE_VALIDATION_KEY,
}


def validation_marker(field: AnnotatedField, localize: Localizer) -> TextBlock:
    return TextBlock(
        id=f"{field.field.id}Validation",
        text=localize(_VALIDATION_KEYS[field.field.type]),
        color="attention",
        wrap=True,
        spacing="none",
    )


def render(field: AnnotatedField, localize: Localizer) -> tuple[RenderedElement, ...]:
    """
    Render one annotated field

    Returns the primary input, followed by its validation marker when the
    field failed validation. Raises UnsupportedFieldTypeError for a type
    with no element mapping.
    """
    descriptor = field.field
    renderer = _FIELD_RENDERERS.get(descriptor.type)
    if renderer is None:
        raise UnsupportedFieldTypeError(descriptor.id, descriptor.type)

    primary = renderer(field, localize)
    if field.validation_failed:
        return (primary, validation_marker(field, localize))
    return (primary,)


def render_fields(fields: Iterable[AnnotatedField], localize: Localizer) -> tuple[RenderedElement, ...]:
    elements: list[RenderedElement] = []
    for field in fields:
        elements.extend(render(field, localize))
    return tuple(elements)


def render_column_pair(label: str, value: str | None) -> ColumnPair:
    """Two column label/value row; an empty value keeps its (empty) cell."""
    return ColumnPair(label=label, value=value or "")
