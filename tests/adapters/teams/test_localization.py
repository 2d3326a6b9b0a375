import logging

import pytest

from remote_support.adapters.channels.teams.localization import (
    StringTable,
    load_string_table,
    reset_string_table_cache,
)
from remote_support.config import REPO_ROOT, get_settings


REQUIRED_KEYS = (
    "NewRequestTitle",
    "NewRequestNotice",
    "SubmitRequestActionText",
    "RequestSubmittedText",
    "RequestUpdatedText",
    "RequestSubmittedContent",
    "RequestNumberText",
    "CategoryTypeText",
    "RequestTypeText",
    "DescriptionText",
    "FirstObservedText",
    "EditTicketActionText",
    "WithdrawRequestActionText",
    "WithdrawConfirmationText",
    "WithdrawConfirmActionText",
    "NewRequestButtonText",
    "RequiredFieldValidationText",
    "DateValidationText",
)


@pytest.fixture(autouse=True)
def _fresh_caches():
    get_settings.cache_clear()
    reset_string_table_cache()
    yield
    get_settings.cache_clear()
    reset_string_table_cache()


def test_bundled_table_has_every_card_string() -> None:
    table = load_string_table("en-US", strings_dir=REPO_ROOT / "config" / "strings")

    missing = [key for key in REQUIRED_KEYS if key not in table]
    assert missing == []


def test_missing_key_logs_and_returns_key(caplog) -> None:
    table = StringTable({"A": "a"}, culture="en-US")

    with caplog.at_level(logging.WARNING, logger="remote_support.adapters.channels.teams.localization"):
        assert table("A") == "a"
        assert table("B") == "B"

    assert [getattr(record, "event_code", "") for record in caplog.records] == ["localization.key.missing"]


def test_falls_back_to_neutral_then_default_culture(tmp_path) -> None:
    (tmp_path / "de.yaml").write_text("NewRequestTitle: Neue Anfrage\n", encoding="utf-8")
    (tmp_path / "en-US.yaml").write_text("NewRequestTitle: New request\n", encoding="utf-8")

    german = load_string_table("de-AT", strings_dir=tmp_path, default_culture="en-US")
    french = load_string_table("fr-FR", strings_dir=tmp_path, default_culture="en-US")

    assert (german.culture, german("NewRequestTitle")) == ("de", "Neue Anfrage")
    assert (french.culture, french("NewRequestTitle")) == ("en-US", "New request")


def test_default_culture_comes_from_settings(monkeypatch, tmp_path) -> None:
    (tmp_path / "nl-NL.yaml").write_text("NewRequestTitle: Nieuwe aanvraag\n", encoding="utf-8")
    monkeypatch.setenv("STRINGS_DIR", str(tmp_path))
    monkeypatch.setenv("DEFAULT_CULTURE", "nl-NL")
    get_settings.cache_clear()

    table = load_string_table()

    assert table("NewRequestTitle") == "Nieuwe aanvraag"


def test_invalid_yaml_is_skipped(tmp_path) -> None:
    (tmp_path / "en-US.yaml").write_text("NewRequestTitle: [", encoding="utf-8")
    (tmp_path / "en.yaml").write_text("NewRequestTitle: Fallback\n", encoding="utf-8")

    table = load_string_table("en-US", strings_dir=tmp_path, default_culture="en-US")

    assert table("NewRequestTitle") == "Fallback"


def test_no_tables_yields_empty_table(tmp_path) -> None:
    table = load_string_table("en-US", strings_dir=tmp_path, default_culture="en-US")

    assert table("NewRequestTitle") == "NewRequestTitle"
