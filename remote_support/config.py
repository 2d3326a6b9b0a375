"""
Description: Global settings loader for remote support cards
Main features:
    - Central application settings (Settings)
    - YAML file loading with environment variable overrides
    - Pydantic type validation
"""

from __future__ import annotations

import os
import re
from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field


_ENV_PATTERN = re.compile(r"\$\{([^}]+)\}")

REPO_ROOT = Path(__file__).resolve().parents[1]


# region Settings models
class CardSettings(BaseModel):
    """Adaptive card output"""
    adaptive_card_version: str = "1.3"
    include_dynamic_fields: bool = True


class TemplateSettings(BaseModel):
    """Field template source"""
    path: str = str(REPO_ROOT / "config" / "ticket_templates.yaml")
    default_key: str = "default"


class LocalizationSettings(BaseModel):
    """String tables"""
    strings_dir: str = str(REPO_ROOT / "config" / "strings")
    default_culture: str = "en-US"


class LoggingSettings(BaseModel):
    level: str = "INFO"
    format: str = "json"


class Settings(BaseModel):
    """Settings aggregate root"""
    cards: CardSettings = Field(default_factory=CardSettings)
    templates: TemplateSettings = Field(default_factory=TemplateSettings)
    localization: LocalizationSettings = Field(default_factory=LocalizationSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
# endregion


# region Loading


def _expand_env(value: Any) -> Any:
    """Recursively expand ${VAR} and ${VAR:-default} placeholders"""
    if isinstance(value, str):
        def replace(match: re.Match[str]) -> str:
            expr = match.group(1)
            if ":-" in expr:
                key, default = expr.split(":-", 1)
                return os.getenv(key, default)
            return os.getenv(expr, "")

        return _ENV_PATTERN.sub(replace, value)
    if isinstance(value, list):
        return [_expand_env(item) for item in value]
    if isinstance(value, dict):
        return {key: _expand_env(val) for key, val in value.items()}
    return value


def _load_yaml(path: Path) -> dict[str, Any]:
    if not path.exists():
        return {}
    data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    return _expand_env(data)


def _set_nested(data: dict[str, Any], keys: list[str], value: Any) -> None:
    current = data
    for key in keys[:-1]:
        current = current.setdefault(key, {})
    current[keys[-1]] = value


def _apply_env_overrides(data: dict[str, Any]) -> dict[str, Any]:
    """
    Apply environment variable overrides

    Priority: explicit environment variable > config.yaml > default
    """
    mapping = {
        "CARD_VERSION": ["cards", "adaptive_card_version"],
        "CARD_INCLUDE_DYNAMIC_FIELDS": ["cards", "include_dynamic_fields"],
        "TICKET_TEMPLATES_PATH": ["templates", "path"],
        "TICKET_TEMPLATE_DEFAULT_KEY": ["templates", "default_key"],
        "STRINGS_DIR": ["localization", "strings_dir"],
        "DEFAULT_CULTURE": ["localization", "default_culture"],
        "LOG_LEVEL": ["logging", "level"],
        "LOG_FORMAT": ["logging", "format"],
    }
    for env_key, path in mapping.items():
        env_value = os.getenv(env_key)
        if env_value is not None and env_value != "":
            _set_nested(data, path, env_value)
    return data


def load_settings(config_path: str | None = None) -> Settings:
    """Load and validate the full configuration"""
    path = Path(config_path or os.getenv("CONFIG_PATH", "config.yaml"))
    data = _load_yaml(path)
    data = _apply_env_overrides(data)
    return Settings.model_validate(data)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Cached settings singleton"""
    return load_settings()
# endregion
