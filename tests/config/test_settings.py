from remote_support.config import Settings, get_settings, load_settings


def test_defaults_without_config_file(monkeypatch, tmp_path) -> None:
    for key in ("CARD_VERSION", "LOG_LEVEL", "DEFAULT_CULTURE"):
        monkeypatch.delenv(key, raising=False)

    settings = load_settings(str(tmp_path / "missing.yaml"))

    assert isinstance(settings, Settings)
    assert settings.cards.adaptive_card_version == "1.3"
    assert settings.cards.include_dynamic_fields is True
    assert settings.templates.default_key == "default"
    assert settings.localization.default_culture == "en-US"
    assert settings.logging.format == "json"


def test_yaml_values_with_env_placeholders(monkeypatch, tmp_path) -> None:
    monkeypatch.setenv("SUPPORT_CULTURE", "fr-FR")
    monkeypatch.delenv("DEFAULT_CULTURE", raising=False)
    monkeypatch.delenv("CARD_VERSION", raising=False)
    config_path = tmp_path / "config.yaml"
    config_path.write_text(
        """
cards:
  adaptive_card_version: "1.5"
  include_dynamic_fields: false
localization:
  default_culture: ${SUPPORT_CULTURE}
templates:
  default_key: ${TEMPLATE_KEY_UNSET:-access}
""".strip(),
        encoding="utf-8",
    )

    settings = load_settings(str(config_path))

    assert settings.cards.adaptive_card_version == "1.5"
    assert settings.cards.include_dynamic_fields is False
    assert settings.localization.default_culture == "fr-FR"
    assert settings.templates.default_key == "access"


def test_env_overrides_take_priority(monkeypatch, tmp_path) -> None:
    config_path = tmp_path / "config.yaml"
    config_path.write_text("logging:\n  level: INFO\n", encoding="utf-8")
    monkeypatch.setenv("LOG_LEVEL", "DEBUG")
    monkeypatch.setenv("CARD_INCLUDE_DYNAMIC_FIELDS", "false")

    settings = load_settings(str(config_path))

    assert settings.logging.level == "DEBUG"
    assert settings.cards.include_dynamic_fields is False


def test_get_settings_reads_config_path(monkeypatch, tmp_path) -> None:
    config_path = tmp_path / "config.yaml"
    config_path.write_text("cards:\n  adaptive_card_version: '1.4'\n", encoding="utf-8")
    monkeypatch.setenv("CONFIG_PATH", str(config_path))
    monkeypatch.delenv("CARD_VERSION", raising=False)
    get_settings.cache_clear()

    try:
        assert get_settings().cards.adaptive_card_version == "1.4"
        assert get_settings() is get_settings()
    finally:
        get_settings.cache_clear()
