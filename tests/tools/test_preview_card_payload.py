from __future__ import annotations

import importlib.util
import json
from pathlib import Path
from types import ModuleType


REPO_ROOT = Path(__file__).resolve().parents[2]


def _load_preview_module(module_name: str) -> ModuleType:
    module_path = REPO_ROOT / "tools" / "dev" / "preview_card_payload.py"
    spec = importlib.util.spec_from_file_location(module_name, module_path)
    assert spec is not None
    assert spec.loader is not None
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def _args(module: ModuleType, *argv: str):
    return module._parse_args(
        [
            "--templates-path",
            str(REPO_ROOT / "config" / "ticket_templates.yaml"),
            "--strings-dir",
            str(REPO_ROOT / "config" / "strings"),
            "--culture",
            "en-US",
            *argv,
        ]
    )


def test_new_card_preview_renders_default_template() -> None:
    module = _load_preview_module("preview_card_payload_new")

    payload = module.build_card(_args(module, "--card", "new"))
    card = module.render_json(payload, "adaptive")

    input_ids = [item["id"] for item in card["body"] if item["type"].startswith("Input.")]
    assert input_ids == ["category", "issueOccurredOn", "deviceName", "description"]
    assert card["actions"][0]["data"]["command"] == "submit-request"


def test_detail_card_preview_reads_ticket_file(tmp_path: Path) -> None:
    module = _load_preview_module("preview_card_payload_detail")
    ticket_file = tmp_path / "ticket.json"
    ticket_file.write_text(
        json.dumps(
            {
                "ticket_id": "t-9",
                "request_number": "9",
                "category": "Software",
                "request_type": "Incident",
                "description": "Mail client crashes",
                "additional_properties": {"deviceName": "PC-9"},
            }
        ),
        encoding="utf-8",
    )

    payload = module.build_card(_args(module, "--card", "detail", "--ticket-file", str(ticket_file)))
    attachment = module.render_json(payload, "attachment")

    assert attachment["contentType"] == "application/vnd.microsoft.card.adaptive"
    edit_action = attachment["content"]["actions"][0]
    assert edit_action["data"]["postedValues"] == "t-9"


def test_main_reports_unknown_template_key(monkeypatch, capsys) -> None:
    module = _load_preview_module("preview_card_payload_main")
    monkeypatch.setattr(module, "setup_logging", lambda settings: None)

    code = module.main(
        [
            "--templates-path",
            str(REPO_ROOT / "config" / "ticket_templates.yaml"),
            "--template-key",
            "missing",
        ]
    )

    assert code == 2
    assert "TEMPLATE_NOT_FOUND" in capsys.readouterr().out


def test_main_prints_withdraw_card_json(monkeypatch, capsys) -> None:
    module = _load_preview_module("preview_card_payload_withdraw")
    monkeypatch.setattr(module, "setup_logging", lambda settings: None)

    code = module.main(["--card", "withdraw", "--output", "tree"])

    assert code == 0
    tree = json.loads(capsys.readouterr().out)
    assert tree["actions"][0]["command"] == "withdraw"
    assert tree["actions"][0]["data"] == "4f1c2d7e"
