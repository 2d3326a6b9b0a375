from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path
from typing import Any, Callable, Mapping

import yaml

from remote_support.config import get_settings


logger = logging.getLogger(__name__)


Localizer = Callable[[str], str]


class StringTable:
    """
    Localized strings of one culture

    Calling the table resolves a key. Unknown keys are a configuration error
    on the caller side: they are logged and resolve to the key itself, the
    way resource based localizers behave.
    """

    def __init__(self, strings: Mapping[str, str], culture: str = "") -> None:
        self._strings = dict(strings)
        self.culture = culture

    def __call__(self, key: str) -> str:
        value = self._strings.get(key)
        if value is None:
            logger.warning(
                "localization key missing: %s",
                key,
                extra={"event_code": "localization.key.missing", "culture": self.culture},
            )
            return key
        return value

    def __contains__(self, key: object) -> bool:
        return key in self._strings


def _normalize_strings(raw: Any) -> dict[str, str]:
    if not isinstance(raw, dict):
        return {}
    output: dict[str, str] = {}
    for key, value in raw.items():
        name = str(key or "").strip()
        if name and value is not None:
            output[name] = str(value)
    return output


def _candidate_cultures(culture: str, default_culture: str) -> list[str]:
    candidates = [culture]
    if "-" in culture:
        candidates.append(culture.split("-", 1)[0])
    candidates.append(default_culture)
    ordered: list[str] = []
    for item in candidates:
        if item and item not in ordered:
            ordered.append(item)
    return ordered


@lru_cache(maxsize=32)
def _load_strings_file(path_text: str) -> dict[str, str] | None:
    path = Path(path_text)
    if not path.exists():
        return None
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        logger.warning(
            "string table YAML load failed: %s",
            exc,
            extra={"event_code": "localization.strings.load_failed", "path": path_text},
        )
        return None
    return _normalize_strings(data)


def reset_string_table_cache() -> None:
    _load_strings_file.cache_clear()


def load_string_table(
    culture: str | None = None,
    strings_dir: str | Path | None = None,
    default_culture: str | None = None,
) -> StringTable:
    """
    Load the string table for a culture

    Looks for <strings_dir>/<culture>.yaml, then the neutral culture
    (en-US -> en), then the default culture. Returns an empty table when none
    of them exists.
    """
    settings = get_settings().localization
    directory = Path(strings_dir or settings.strings_dir)
    fallback = default_culture or settings.default_culture
    requested = (culture or fallback).strip()

    for candidate in _candidate_cultures(requested, fallback):
        strings = _load_strings_file(str(directory / f"{candidate}.yaml"))
        if strings is not None:
            return StringTable(strings, culture=candidate)

    logger.warning(
        "no string table found for culture %s",
        requested,
        extra={"event_code": "localization.strings.not_found", "path": str(directory)},
    )
    return StringTable({}, culture=requested)
