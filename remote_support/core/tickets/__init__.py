from __future__ import annotations

from remote_support.core.tickets import field_values
from remote_support.core.tickets.models import (
    AnnotatedField,
    ChoiceOption,
    FieldDescriptor,
    FieldTemplate,
    FieldType,
    TicketDetail,
)
from remote_support.core.tickets.template_compiler import compile_template, parse_template
from remote_support.core.tickets.validation import annotate

__all__ = [
    "AnnotatedField",
    "ChoiceOption",
    "FieldDescriptor",
    "FieldTemplate",
    "FieldType",
    "TicketDetail",
    "annotate",
    "compile_template",
    "field_values",
    "parse_template",
]
