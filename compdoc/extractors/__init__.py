"""Extractor implementations and the default extractor bundle."""

from __future__ import annotations

from dataclasses import dataclass, field

from ..config import CompdocConfig
from .base import ExtractionError, ModuleExtractor, SlotStrategy
from .composables import ComposableExtractor
from .props import PropsExtractor
from .slots import SlotExtractor
from .tokens import TokenExtractor
from .type_aliases import TypeAliasExtractor


@dataclass
class ExtractorSet:
    """The extractors the assembler runs; any of them can be replaced independently."""

    props: PropsExtractor = field(default_factory=PropsExtractor)
    slots: SlotExtractor = field(default_factory=SlotExtractor)
    composables: ComposableExtractor = field(default_factory=ComposableExtractor)
    types: TypeAliasExtractor = field(default_factory=TypeAliasExtractor)
    tokens: TokenExtractor = field(default_factory=TokenExtractor)


def default_extractors(config: CompdocConfig | None = None) -> ExtractorSet:
    """Build the extractor bundle configured by ``config`` (defaults when ``None``)."""
    if config is None:
        return ExtractorSet()
    extraction = config.extraction
    return ExtractorSet(
        slots=SlotExtractor(extraction.slot_strategy),
        composables=ComposableExtractor(extraction.composable_prefix),
    )


__all__ = [
    "ComposableExtractor",
    "ExtractionError",
    "ExtractorSet",
    "ModuleExtractor",
    "PropsExtractor",
    "SlotExtractor",
    "SlotStrategy",
    "TokenExtractor",
    "TypeAliasExtractor",
    "default_extractors",
]
