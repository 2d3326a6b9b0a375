"""
Exception module

Custom exception classes for the ticket card pipeline, so callers can catch
and report each failure precisely.
"""

from __future__ import annotations

from typing import Any


# ============================================
# region Base exception
# ============================================
class RemoteSupportError(Exception):
    """Base exception for remote support cards"""

    def __init__(
        self,
        message: str,
        code: str = "UNKNOWN_ERROR",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"
# endregion
# ============================================


# ============================================
# region Ticket data exceptions
# ============================================
class MalformedDataError(RemoteSupportError):
    """Additional properties payload is not a flat JSON object"""

    def __init__(self, cause: str, payload_preview: str = "") -> None:
        super().__init__(
            message=f"malformed additional properties: {cause}",
            code="MALFORMED_DATA",
            details={"cause": cause, "payload_preview": payload_preview},
        )


class MissingTicketStateError(RemoteSupportError):
    """Validation was requested without a ticket to validate"""

    def __init__(self, card: str) -> None:
        super().__init__(
            message=f"card '{card}' requested validation messages without ticket state",
            code="MISSING_TICKET_STATE",
            details={"card": card},
        )
# endregion
# ============================================


# ============================================
# region Template exceptions
# ============================================
class TemplateError(RemoteSupportError):
    """Field template exception"""

    def __init__(
        self,
        message: str,
        code: str = "TEMPLATE_ERROR",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, code, details)


class InvalidTemplateError(TemplateError):
    """Field template violates its invariants"""

    def __init__(self, cause: str, field_id: str | None = None) -> None:
        details: dict[str, Any] = {"cause": cause}
        if field_id is not None:
            details["field_id"] = field_id
        super().__init__(
            message=f"invalid field template: {cause}",
            code="INVALID_TEMPLATE",
            details=details,
        )


class TemplateLookupError(TemplateError):
    """Field template key is not configured"""

    def __init__(self, template_key: str, source: str = "") -> None:
        super().__init__(
            message=f"field template not found: {template_key}",
            code="TEMPLATE_NOT_FOUND",
            details={"template_key": template_key, "source": source},
        )


class UnsupportedFieldTypeError(TemplateError):
    """Renderer has no element mapping for a field type"""

    def __init__(self, field_id: str, field_type: Any) -> None:
        super().__init__(
            message=f"field '{field_id}' has unsupported type {field_type!r}",
            code="UNSUPPORTED_FIELD_TYPE",
            details={"field_id": field_id, "field_type": str(field_type)},
        )
# endregion
# ============================================
