from __future__ import annotations

from remote_support.utils.errors.exceptions import (
    InvalidTemplateError,
    MalformedDataError,
    MissingTicketStateError,
    RemoteSupportError,
    TemplateError,
    TemplateLookupError,
    UnsupportedFieldTypeError,
)

__all__ = [
    "RemoteSupportError",
    "MalformedDataError",
    "MissingTicketStateError",
    "TemplateError",
    "InvalidTemplateError",
    "TemplateLookupError",
    "UnsupportedFieldTypeError",
]
