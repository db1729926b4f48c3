"""Base classes for extractor implementations."""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Generic, Iterable, Optional, TypeVar

from ..library import SourceReader
from ..models import SlotDefinition
from ..stores import ParseCache
from .typescript import SourceModule, parse_module

T = TypeVar("T")

MODULE_CACHE_KIND = "ts-module"


class ExtractionError(RuntimeError):
    """Raised when a source file cannot be read for extraction."""


def read_source(path: Path, source: SourceReader) -> str:
    try:
        return source.read_text(path)
    except (OSError, UnicodeDecodeError) as exc:
        raise ExtractionError(f"Cannot read {path}: {exc}") from exc


def load_module(path: Path, source: SourceReader, cache: Optional[ParseCache] = None) -> SourceModule:
    """Return the parsed module for ``path``, reusing ``cache`` when provided."""

    def _parse() -> SourceModule:
        return parse_module(read_source(path, source))

    if cache is None:
        return _parse()
    return cache.get_or_parse(MODULE_CACHE_KIND, str(path), _parse)


class ModuleExtractor(ABC, Generic[T]):
    """Contract for extractors that work on a parsed definition file."""

    @abstractmethod
    def extract_module(self, module: SourceModule) -> T:
        """Produce the extractor's records from a parsed module."""

    def extract(self, text: str) -> T:
        return self.extract_module(parse_module(text))

    def extract_file(
        self, path: Path, source: SourceReader, cache: Optional[ParseCache] = None
    ) -> T:
        return self.extract_module(load_module(path, source, cache))


class SlotStrategy(ABC):
    """Contract for strategies that find extension points in template markup."""

    name: str = ""

    @abstractmethod
    def find_slots(self, region: str) -> Iterable[SlotDefinition]:
        """Yield one definition per ``<slot>`` element in document order.

        Duplicates are allowed here; deduplication happens in the caller.
        """


__all__ = [
    "ExtractionError",
    "MODULE_CACHE_KIND",
    "ModuleExtractor",
    "SlotStrategy",
    "load_module",
    "read_source",
]
