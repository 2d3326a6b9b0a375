from remote_support.utils.errors import (
    InvalidTemplateError,
    MalformedDataError,
    MissingTicketStateError,
    RemoteSupportError,
    TemplateError,
    TemplateLookupError,
    UnsupportedFieldTypeError,
)


def test_errors_share_base_and_serialize() -> None:
    error = TemplateLookupError("access", source="templates.yaml")

    assert isinstance(error, TemplateError)
    assert isinstance(error, RemoteSupportError)
    assert str(error) == "[TEMPLATE_NOT_FOUND] field template not found: access"
    assert error.to_dict() == {
        "error": "TEMPLATE_NOT_FOUND",
        "message": "field template not found: access",
        "details": {"template_key": "access", "source": "templates.yaml"},
    }


def test_invalid_template_only_reports_field_when_known() -> None:
    assert "field_id" not in InvalidTemplateError("bad").details
    assert InvalidTemplateError("bad", field_id="category").details["field_id"] == "category"


def test_data_errors_carry_codes() -> None:
    assert MalformedDataError("not an object", payload_preview="[1]").details == {
        "cause": "not an object",
        "payload_preview": "[1]",
    }
    assert MissingTicketStateError("new_ticket").code == "MISSING_TICKET_STATE"
    assert UnsupportedFieldTypeError("sig", "Signature").details == {"field_id": "sig", "field_type": "Signature"}
