"""
Description: YAML backed field template source
Main features:
    - Load administrator field templates from a YAML file
    - Look up a template by key
    - Surface bad configuration as InvalidTemplateError
"""

from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path
from types import MappingProxyType
from typing import Mapping

import yaml

from remote_support.config import get_settings
from remote_support.core.tickets.models import FieldTemplate
from remote_support.core.tickets.template_compiler import parse_template
from remote_support.utils.errors import InvalidTemplateError, TemplateLookupError


logger = logging.getLogger(__name__)


@lru_cache(maxsize=8)
def _load_templates(path_text: str) -> Mapping[str, FieldTemplate]:
    path = Path(path_text)
    if not path.exists():
        raise InvalidTemplateError(f"template file not found: {path_text}")

    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        logger.error(
            "ticket template YAML load failed: %s",
            exc,
            extra={"event_code": "templates.config_load_failed", "path": path_text},
        )
        raise InvalidTemplateError(f"template file is not valid YAML: {path_text}") from exc

    raw_templates = data.get("templates") if isinstance(data, dict) else None
    if not isinstance(raw_templates, dict):
        raise InvalidTemplateError(f"template file has no 'templates' mapping: {path_text}")

    templates: dict[str, FieldTemplate] = {}
    for key, raw in raw_templates.items():
        template_key = str(key or "").strip()
        if not template_key:
            continue
        templates[template_key] = parse_template(raw if isinstance(raw, dict) else {"fields": raw})

    logger.info(
        "loaded %s ticket templates",
        len(templates),
        extra={"event_code": "templates.loaded", "path": path_text},
    )
    return MappingProxyType(templates)


def reset_template_cache() -> None:
    _load_templates.cache_clear()


class YamlTemplateSource:
    """Supplies FieldTemplates by key; templates are immutable and shared."""

    def __init__(self, path: str | Path | None = None) -> None:
        self._path = str(path or get_settings().templates.path)

    @property
    def path(self) -> str:
        return self._path

    def keys(self) -> list[str]:
        return list(_load_templates(self._path).keys())

    def get(self, template_key: str | None = None) -> FieldTemplate:
        key = (template_key or get_settings().templates.default_key).strip()
        template = _load_templates(self._path).get(key)
        if template is None:
            raise TemplateLookupError(key, source=self._path)
        return template
