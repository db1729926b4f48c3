"""Extractor for design tokens declared as flat constant tables."""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Dict, Iterator, List, Optional, Sequence

from tree_sitter import Node

from ..library import SourceReader
from ..logging import get_logger
from ..models import ColorToken, DesignTokens, UtilityToken, ValueToken
from ..stores import ParseCache
from .base import load_module
from .typescript import (
    ObjectEntry,
    SourceModule,
    object_entries,
    object_literal,
    string_value,
    table_entries,
)

SCRIPTS_DIR = "scripts"

_SHADE_KEY = re.compile(r"^\d+$")
_HEX_COLOR = re.compile(r"^#[A-Fa-f0-9]+$")

logger = get_logger("extractors.tokens")


def _string_entry(entry: ObjectEntry, source: bytes) -> Optional[str]:
    if entry.kind != "property":
        return None
    return string_value(entry.value, source)


def parse_colors(module: SourceModule) -> List[ColorToken]:
    colors: List[ColorToken] = []
    for family in table_entries(module, "colorScheme"):
        shades_table = object_literal(family.value) if family.kind == "property" else None
        if shades_table is None:
            continue
        shades: Dict[int, str] = {}
        for shade in object_entries(shades_table, module.source):
            value = _string_entry(shade, module.source)
            if value and _SHADE_KEY.match(shade.key) and _HEX_COLOR.match(value):
                shades[int(shade.key)] = value
        colors.append(ColorToken(name=family.key, shades=shades))
    return colors


def _value_tokens(module: SourceModule, variable: str, *, identifiers_only: bool) -> List[ValueToken]:
    tokens: List[ValueToken] = []
    for entry in table_entries(module, variable):
        value = _string_entry(entry, module.source)
        if value is None:
            continue
        if identifiers_only and not entry.identifier_key:
            continue
        tokens.append(ValueToken(name=entry.key, value=value))
    return tokens


def parse_spacing(module: SourceModule) -> List[ValueToken]:
    return _value_tokens(module, "spacing", identifiers_only=False)


def parse_border_radius(module: SourceModule) -> List[ValueToken]:
    return _value_tokens(module, "borderRadius", identifiers_only=False)


def parse_max_width(module: SourceModule) -> List[ValueToken]:
    return _value_tokens(module, "maxWidth", identifiers_only=True)


def _utility_pairs(node: Node) -> Iterator[Node]:
    if node.type == "pair":
        key = node.child_by_field_name("key")
        value = node.child_by_field_name("value")
        if key is not None and key.type == "string" and object_literal(value) is not None:
            yield node
            return
    for child in node.named_children:
        yield from _utility_pairs(child)


def parse_utilities(module: SourceModule) -> List[UtilityToken]:
    """Every quoted ``'name': { ... }`` entry in the file, wherever it sits."""
    utilities: List[UtilityToken] = []
    for pair in _utility_pairs(module.root):
        properties: Dict[str, str] = {}
        for entry in object_entries(object_literal(pair.child_by_field_name("value")), module.source):
            value = _string_entry(entry, module.source)
            if value is not None:
                properties[entry.key] = value
        name = string_value(pair.child_by_field_name("key"), module.source)
        utilities.append(UtilityToken(name=name, properties=properties))
    return utilities


@dataclass(frozen=True)
class TokenSource:
    """One token category and the file under ``<assets>/scripts`` it is read from."""

    category: str
    file_name: str
    parse: Callable[[SourceModule], list]


TOKEN_SOURCES = (
    TokenSource("colors", "colors.ts", parse_colors),
    TokenSource("spacing", "spacing.ts", parse_spacing),
    TokenSource("border_radius", "border-radius.ts", parse_border_radius),
    TokenSource("max_width", "max-width.ts", parse_max_width),
    TokenSource("utilities", "utilities.ts", parse_utilities),
)


class TokenExtractor:
    """Builds :class:`DesignTokens` from the token scripts of a library's assets."""

    def __init__(self, sources: Sequence[TokenSource] = TOKEN_SOURCES) -> None:
        self.sources = tuple(sources)

    def extract(
        self, assets_path: Path, source: SourceReader, cache: Optional[ParseCache] = None
    ) -> DesignTokens:
        tokens = DesignTokens()
        for token_source in self.sources:
            path = Path(assets_path) / SCRIPTS_DIR / token_source.file_name
            if not source.exists(path):
                logger.debug("Token file %s not found", path)
                continue
            try:
                module = load_module(path, source, cache)
                values = token_source.parse(module)
            except Exception as exc:
                logger.warning(
                    "Failed to extract %s tokens from %s: %s", token_source.category, path, exc
                )
                continue
            setattr(tokens, token_source.category, values)
        return tokens


__all__ = [
    "TOKEN_SOURCES",
    "TokenExtractor",
    "TokenSource",
    "parse_border_radius",
    "parse_colors",
    "parse_max_width",
    "parse_spacing",
    "parse_utilities",
]
