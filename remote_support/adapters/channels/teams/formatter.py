from __future__ import annotations

from typing import Any, Callable

from remote_support.adapters.channels.teams.elements import (
    Action,
    CardPayload,
    ColumnPair,
    Input,
    TextBlock,
)


ADAPTIVE_CARD_CONTENT_TYPE = "application/vnd.microsoft.card.adaptive"
ADAPTIVE_CARD_SCHEMA = "http://adaptivecards.io/schemas/adaptive-card.json"

FETCH_ACTION_TYPE = "task/fetch"
MESSAGE_BACK_ACTION_TYPE = "messageBack"


class CardBuildError(Exception):
    pass


def _pascal(value: str) -> str:
    return value[:1].upper() + value[1:]


def _text_block(element: TextBlock) -> dict[str, Any]:
    block: dict[str, Any] = {"type": "TextBlock", "text": element.text}
    if element.id:
        block["id"] = element.id
    if element.weight != "default":
        block["weight"] = _pascal(element.weight)
    if element.size != "default":
        block["size"] = _pascal(element.size)
    if element.wrap:
        block["wrap"] = True
    if element.spacing != "default":
        block["spacing"] = _pascal(element.spacing)
    if element.color != "default":
        block["color"] = _pascal(element.color)
    return block


def _input(element: Input) -> dict[str, Any]:
    base: dict[str, Any] = {"id": element.id, "label": element.label}
    if element.is_required:
        base["isRequired"] = True
    if element.value:
        base["value"] = element.value

    if element.input_type == "choice":
        base["type"] = "Input.ChoiceSet"
        base["style"] = "compact"
        base["choices"] = [{"title": choice.title, "value": choice.value} for choice in element.choices]
        return base
    if element.input_type == "date":
        base["type"] = "Input.Date"
        return base

    base["type"] = "Input.Text"
    if element.input_type == "multiline":
        base["isMultiline"] = True
    return base


def _column_set(element: ColumnPair) -> dict[str, Any]:
    return {
        "type": "ColumnSet",
        "columns": [
            {
                "type": "Column",
                "width": 2,
                "items": [{"type": "TextBlock", "text": f"{element.label}:", "weight": "Bolder", "wrap": True}],
            },
            {
                "type": "Column",
                "width": 3,
                "items": [{"type": "TextBlock", "text": element.value, "wrap": True}],
            },
        ],
    }


_BODY_BUILDERS: dict[str, Callable[[Any], dict[str, Any]]] = {
    "text_block": _text_block,
    "input": _input,
    "column_pair": _column_set,
}


def _submit_data(action: Action) -> dict[str, Any]:
    data: dict[str, Any] = {}
    if action.action_type == "fetch":
        data["msteams"] = {"type": FETCH_ACTION_TYPE}
    elif action.action_type == "message_back":
        text = action.message_text or action.title
        data["msteams"] = {"type": MESSAGE_BACK_ACTION_TYPE, "text": text, "displayText": text}
    if action.command:
        data["command"] = action.command
    if action.data is not None:
        data["postedValues"] = action.data
    return data


def _action(action: Action) -> dict[str, Any]:
    if action.action_type == "show_card":
        if action.card is None:
            raise CardBuildError(f"show_card action '{action.title}' has no card")
        return {"type": "Action.ShowCard", "title": action.title, "card": to_adaptive_card(action.card)}
    return {"type": "Action.Submit", "title": action.title, "data": _submit_data(action)}


def to_adaptive_card(payload: CardPayload) -> dict[str, Any]:
    """Serialize a card tree into Adaptive Card JSON."""
    body = []
    for element in payload.body:
        builder = _BODY_BUILDERS.get(element.kind)
        if builder is None:
            raise CardBuildError(f"unsupported body element: {element.kind}")
        body.append(builder(element))

    card: dict[str, Any] = {
        "type": "AdaptiveCard",
        "$schema": ADAPTIVE_CARD_SCHEMA,
        "version": payload.version,
        "body": body,
    }
    if payload.actions:
        card["actions"] = [_action(action) for action in payload.actions]
    return card


def to_attachment(payload: CardPayload) -> dict[str, Any]:
    """Wrap a card as a Bot Framework attachment."""
    return {
        "contentType": ADAPTIVE_CARD_CONTENT_TYPE,
        "content": to_adaptive_card(payload),
    }
