from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any


REPO_ROOT = Path(__file__).resolve().parents[2]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from dotenv import load_dotenv  # noqa: E402

load_dotenv(REPO_ROOT / ".env")

from remote_support.adapters.channels.teams.card_assembler import CardAssembler  # noqa: E402
from remote_support.adapters.channels.teams.elements import CardPayload  # noqa: E402
from remote_support.adapters.channels.teams.formatter import to_adaptive_card, to_attachment  # noqa: E402
from remote_support.adapters.channels.teams.localization import load_string_table  # noqa: E402
from remote_support.adapters.channels.teams.template_source import YamlTemplateSource  # noqa: E402
from remote_support.config import get_settings  # noqa: E402
from remote_support.core.tickets.models import TicketDetail  # noqa: E402
from remote_support.utils.errors import RemoteSupportError  # noqa: E402
from remote_support.utils.observability import setup_logging  # noqa: E402


CARD_KINDS = ("new", "detail", "withdraw")


def _sample_ticket() -> TicketDetail:
    return TicketDetail(
        ticket_id="4f1c2d7e",
        request_number="1024",
        category="Hardware",
        request_type="Incident",
        description="Laptop does not wake up from sleep.",
        issue_occurred_on="2026-01-12",
        additional_properties=json.dumps({"deviceName": "LT-0042", "issueOccurredOn": "2026-01-12"}),
    )


def _load_ticket(path: str) -> TicketDetail:
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError(f"ticket file must hold a JSON object: {path}")
    props = data.get("additional_properties")
    if isinstance(props, dict):
        data["additional_properties"] = json.dumps(props, ensure_ascii=False)
    return TicketDetail.model_validate(data)


def build_card(args: argparse.Namespace) -> CardPayload:
    localize = load_string_table(args.culture or None, strings_dir=args.strings_dir or None)
    source = YamlTemplateSource(args.templates_path or None)
    template = source.get(args.template_key or None)
    ticket = _load_ticket(args.ticket_file) if args.ticket_file else _sample_ticket()
    assembler = CardAssembler()

    if args.card == "new":
        return assembler.new_ticket_card(
            localize,
            template,
            show_validation_message=args.show_validation,
            ticket=ticket if (args.show_validation or args.ticket_file) else None,
        )
    if args.card == "detail":
        return assembler.ticket_detail_card(localize, ticket, is_edited=args.edited, template=template)
    return assembler.withdraw_confirmation_card(localize, ticket.ticket_id)


def render_json(payload: CardPayload, output: str) -> dict[str, Any]:
    if output == "attachment":
        return to_attachment(payload)
    if output == "adaptive":
        return to_adaptive_card(payload)
    return payload.to_dict()


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Preview ticket card payloads")
    parser.add_argument("--card", choices=CARD_KINDS, default="new", help="card to render")
    parser.add_argument("--template-key", default="", help="field template key, e.g. default")
    parser.add_argument("--templates-path", default="", help="ticket templates YAML file")
    parser.add_argument("--strings-dir", default="", help="directory of <culture>.yaml string tables")
    parser.add_argument("--culture", default="", help="culture, e.g. en-US")
    parser.add_argument("--ticket-file", default="", help="json file with ticket fields")
    parser.add_argument("--show-validation", action="store_true", help="render validation markers")
    parser.add_argument("--edited", action="store_true", help="detail card after an edit")
    parser.add_argument(
        "--output",
        choices=("tree", "adaptive", "attachment"),
        default="attachment",
        help="element tree, adaptive card json or bot attachment",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    setup_logging(get_settings().logging)

    try:
        payload = build_card(args)
    except (RemoteSupportError, ValueError) as exc:
        print(f"[error] {exc}")
        return 2

    print(json.dumps(render_json(payload, args.output), ensure_ascii=False, indent=2))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
