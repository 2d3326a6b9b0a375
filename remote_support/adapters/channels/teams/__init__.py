"""
Description: Microsoft Teams channel adapter for ticket cards.
Main features:
    - Typed card element tree and its Adaptive Card serialization
    - Field element renderer and card assembler
    - YAML template source and string tables
"""

from __future__ import annotations

from remote_support.adapters.channels.teams.card_assembler import CardAssembler
from remote_support.adapters.channels.teams.elements import (
    Action,
    CardPayload,
    ColumnPair,
    Input,
    InputChoice,
    TextBlock,
)
from remote_support.adapters.channels.teams.formatter import to_adaptive_card, to_attachment
from remote_support.adapters.channels.teams.localization import StringTable, load_string_table
from remote_support.adapters.channels.teams.template_source import YamlTemplateSource

__all__ = [
    "Action",
    "CardAssembler",
    "CardPayload",
    "ColumnPair",
    "Input",
    "InputChoice",
    "StringTable",
    "TextBlock",
    "YamlTemplateSource",
    "load_string_table",
    "to_adaptive_card",
    "to_attachment",
]
