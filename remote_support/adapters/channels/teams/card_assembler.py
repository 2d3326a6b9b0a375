"""
Description: Ticket card assembler
Main features:
    - New ticket card: title, dynamic template fields, static notice
    - Ticket detail card: confirmation chrome, fixed and dynamic labeled fields, actions
    - Withdraw confirmation sub-card embedded in the detail card
"""

from __future__ import annotations

import logging
import time
from datetime import date
from functools import wraps
from typing import Callable, Sequence

from remote_support.adapters.channels.teams.element_renderer import render_column_pair, render_fields
from remote_support.adapters.channels.teams.elements import (
    Action,
    BodyElement,
    CardPayload,
    ColumnPair,
    TextBlock,
)
from remote_support.adapters.channels.teams.localization import Localizer
from remote_support.config import get_settings
from remote_support.core.tickets.field_values import (
    build_ticket_values,
    get_value,
    load_additional_properties,
)
from remote_support.core.tickets.models import (
    CATEGORY_ID,
    DESCRIPTION_ID,
    ISSUE_OCCURRED_ON_ID,
    REQUEST_TYPE_ID,
    FieldDescriptor,
    FieldTemplate,
    TicketDetail,
)
from remote_support.core.tickets.template_compiler import compile_template
from remote_support.core.tickets.validation import annotate
from remote_support.utils.errors import MissingTicketStateError
from remote_support.utils.observability import log_duration, observe_render_duration, record_card_render


logger = logging.getLogger(__name__)


EDIT_REQUEST_COMMAND = "edit"
WITHDRAW_REQUEST_COMMAND = "withdraw"
NEW_REQUEST_COMMAND = "new-request"
SUBMIT_REQUEST_COMMAND = "submit-request"

# shown at fixed positions of the detail card, never in its dynamic block
_DETAIL_FIXED_FIELD_IDS = frozenset({CATEGORY_ID, REQUEST_TYPE_ID, DESCRIPTION_ID})


def _instrumented(card: str) -> Callable:
    def decorator(func: Callable) -> Callable:
        @wraps(func)
        def wrapper(*args, **kwargs):
            start = time.perf_counter()
            try:
                result = func(*args, **kwargs)
            except Exception:
                record_card_render(card, "failed")
                raise
            record_card_render(card, "success")
            observe_render_duration(card, time.perf_counter() - start)
            return result

        return wrapper

    return decorator


class CardAssembler:
    """
    Compose ticket cards

    The assembler only holds output settings; every call builds its own
    elements, so one instance can serve concurrent requests.
    """

    def __init__(
        self,
        card_version: str | None = None,
        include_dynamic_fields: bool | None = None,
    ) -> None:
        settings = get_settings().cards
        self._card_version = card_version or settings.adaptive_card_version
        self._include_dynamic_fields = (
            settings.include_dynamic_fields if include_dynamic_fields is None else include_dynamic_fields
        )

    @_instrumented("new_ticket")
    @log_duration(__name__)
    def new_ticket_card(
        self,
        localize: Localizer,
        template: FieldTemplate | None = None,
        *,
        show_validation_message: bool = False,
        ticket: TicketDetail | None = None,
        today: date | None = None,
    ) -> CardPayload:
        """
        Build the create-ticket card

        With show_validation_message the ticket being created is required:
        its values are validated and failing fields get inline markers.
        Without it, a supplied ticket only pre-fills the inputs.
        """
        if show_validation_message and ticket is None:
            raise MissingTicketStateError("new_ticket")

        body: list[BodyElement] = [
            TextBlock(text=localize("NewRequestTitle"), weight="bolder", size="large"),
        ]
        actions: list[Action] = []

        if template is not None and self._include_dynamic_fields:
            fields = compile_template(template)
            values = build_ticket_values(ticket) if ticket is not None else {}
            annotated = annotate(fields, values, show_validation_message, today=today)
            body.extend(render_fields(annotated, localize))
            actions.append(
                Action(
                    title=localize("SubmitRequestActionText"),
                    action_type="submit",
                    command=SUBMIT_REQUEST_COMMAND,
                )
            )
            failed = [item.field.id for item in annotated if item.validation_failed]
            if failed:
                logger.info(
                    "new ticket card shows %s validation markers",
                    len(failed),
                    extra={"event_code": "cards.new_ticket.validation", "fields": failed},
                )

        body.append(TextBlock(text=localize("NewRequestNotice"), wrap=True, spacing="small"))
        return CardPayload(version=self._card_version, body=tuple(body), actions=tuple(actions))

    @_instrumented("ticket_detail")
    @log_duration(__name__)
    def ticket_detail_card(
        self,
        localize: Localizer,
        ticket: TicketDetail,
        *,
        is_edited: bool = False,
        template: FieldTemplate | None = None,
    ) -> CardPayload:
        """Build the card confirming a submitted or edited ticket."""
        title_key = "RequestUpdatedText" if is_edited else "RequestSubmittedText"
        body: list[BodyElement] = [
            TextBlock(text=localize(title_key), weight="bolder", size="large"),
            TextBlock(text=localize("RequestSubmittedContent"), wrap=True, spacing="none"),
            render_column_pair(localize("RequestNumberText"), f"#{ticket.request_number}"),
            render_column_pair(localize("CategoryTypeText"), ticket.category),
            render_column_pair(localize("RequestTypeText"), ticket.request_type),
        ]
        fields = compile_template(template) if template is not None else ()
        body.extend(self._additional_field_rows(localize, ticket, fields))
        body.append(render_column_pair(localize("DescriptionText"), ticket.description))

        actions = (
            Action(
                title=localize("EditTicketActionText"),
                action_type="fetch",
                command=EDIT_REQUEST_COMMAND,
                data=ticket.ticket_id,
            ),
            Action(
                title=localize("WithdrawRequestActionText"),
                action_type="show_card",
                card=self.withdraw_confirmation_card(localize, ticket.ticket_id),
            ),
            Action(
                title=localize("NewRequestButtonText"),
                action_type="message_back",
                command=NEW_REQUEST_COMMAND,
                message_text=localize("NewRequestButtonText"),
            ),
        )
        return CardPayload(version=self._card_version, body=tuple(body), actions=actions)

    @_instrumented("withdraw_confirmation")
    def withdraw_confirmation_card(self, localize: Localizer, ticket_id: str) -> CardPayload:
        return CardPayload(
            version=self._card_version,
            body=(TextBlock(text=localize("WithdrawConfirmationText"), wrap=True),),
            actions=(
                Action(
                    title=localize("WithdrawConfirmActionText"),
                    action_type="submit",
                    command=WITHDRAW_REQUEST_COMMAND,
                    data=ticket_id,
                ),
            ),
        )

    def _additional_field_rows(
        self,
        localize: Localizer,
        ticket: TicketDetail,
        fields: Sequence[FieldDescriptor],
    ) -> list[ColumnPair]:
        """
        Labeled rows for the dynamic part of the detail card

        Template fields come first in template order, each with a row even
        when empty; additional properties the template does not cover follow
        in stored order, labelled by their key.
        """
        rows: list[ColumnPair] = []
        # ids compare case-insensitively; stored keys may differ in case from template ids
        covered: set[str] = {field_id.lower() for field_id in _DETAIL_FIXED_FIELD_IDS}
        additional = load_additional_properties(ticket)

        if fields:
            values = build_ticket_values(ticket, additional)
            for descriptor in fields:
                if descriptor.id.lower() in covered:
                    continue
                covered.add(descriptor.id.lower())
                rows.append(
                    render_column_pair(
                        self._row_label(localize, descriptor.id, localize(descriptor.label_key)),
                        get_value(values, descriptor.id),
                    )
                )

        for key, value in additional.items():
            if key.lower() in covered:
                continue
            rows.append(render_column_pair(self._row_label(localize, key, key), value))
        return rows

    @staticmethod
    def _row_label(localize: Localizer, field_id: str, default: str) -> str:
        if field_id.lower() == ISSUE_OCCURRED_ON_ID.lower():
            return localize("FirstObservedText")
        return default
