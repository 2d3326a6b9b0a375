from __future__ import annotations

from datetime import date, datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


# Ids of the well-known ticket fields inside TicketValues
CATEGORY_ID = "category"
REQUEST_TYPE_ID = "requestType"
DESCRIPTION_ID = "description"
ISSUE_OCCURRED_ON_ID = "issueOccurredOn"


class FieldType(str, Enum):
    text = "Text"
    multiline_text = "MultilineText"
    choice = "Choice"
    date = "Date"


class ChoiceOption(BaseModel):
    model_config = ConfigDict(frozen=True)

    value: str
    label_key: str


class FieldDescriptor(BaseModel):
    """One administrator-configured field of a ticket template."""

    model_config = ConfigDict(frozen=True)

    id: str
    label_key: str
    type: FieldType
    required: bool = False
    choices: tuple[ChoiceOption, ...] = ()


class FieldTemplate(BaseModel):
    """Ordered field descriptors; sequence order is the display order."""

    model_config = ConfigDict(frozen=True)

    fields: tuple[FieldDescriptor, ...] = ()


class TicketDetail(BaseModel):
    """
    Ticket state handed in by the caller

    Attributes:
        - ticket_id: opaque identifier carried by edit/withdraw actions
        - request_number: human facing number shown as "#<number>"
        - additional_properties: serialized JSON map of template field values
    """

    model_config = ConfigDict(frozen=True)

    ticket_id: str
    request_number: str = ""
    category: str = ""
    request_type: str = ""
    description: str = ""
    issue_occurred_on: datetime | date | str | None = None
    additional_properties: str = ""


class AnnotatedField(BaseModel):
    model_config = ConfigDict(frozen=True)

    field: FieldDescriptor
    value: str = ""
    validation_failed: bool = Field(default=False)
