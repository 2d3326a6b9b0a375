from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field


TextWeight = Literal["default", "bolder"]
TextSize = Literal["default", "medium", "large"]
Spacing = Literal["default", "none", "small"]
TextColor = Literal["default", "attention"]
InputType = Literal["text", "multiline", "choice", "date"]
ActionType = Literal["submit", "fetch", "message_back", "show_card"]


class _Element(BaseModel):
    model_config = ConfigDict(frozen=True)


class TextBlock(_Element):
    kind: Literal["text_block"] = "text_block"
    text: str
    weight: TextWeight = "default"
    size: TextSize = "default"
    wrap: bool = False
    spacing: Spacing = "default"
    color: TextColor = "default"
    id: str | None = None


class InputChoice(_Element):
    title: str
    value: str


class Input(_Element):
    kind: Literal["input"] = "input"
    id: str
    input_type: InputType
    label: str
    value: str = ""
    is_required: bool = False
    choices: tuple[InputChoice, ...] = ()


class ColumnPair(_Element):
    """Localized label on the left, verbatim value on the right."""

    kind: Literal["column_pair"] = "column_pair"
    label: str
    value: str = ""


class Action(_Element):
    """
    Card action

    Attributes:
        - command: tag read by the conversation flow (edit, withdraw, ...)
        - data: opaque payload, usually the ticket id
        - message_text: text posted back for message_back actions
        - card: embedded sub-card for show_card actions
    """

    kind: Literal["action"] = "action"
    title: str
    action_type: ActionType = "submit"
    command: str | None = None
    data: str | None = None
    message_text: str | None = None
    card: CardPayload | None = None


BodyElement = Annotated[Union[TextBlock, Input, ColumnPair], Field(discriminator="kind")]
RenderedElement = Union[TextBlock, Input, ColumnPair, Action]


class CardPayload(_Element):
    version: str = "1.3"
    body: tuple[BodyElement, ...] = ()
    actions: tuple[Action, ...] = ()

    def to_dict(self) -> dict:
        return self.model_dump()


Action.model_rebuild()
CardPayload.model_rebuild()
