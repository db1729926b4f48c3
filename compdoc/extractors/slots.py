"""Slot (extension point) extraction from single-file component templates."""

from __future__ import annotations

import re
from pathlib import Path
from typing import Iterable, Iterator, List, Optional, Sequence, Tuple

from ..library import SourceReader
from ..logging import get_logger
from ..models import SlotDefinition
from ..stores import ParseCache
from .base import SlotStrategy, read_source
from .markup import extract_template_region, iter_tags

try:  # pragma: no cover - optional dependency
    import tree_sitter_html
    from tree_sitter import Language, Parser

    TREE_SITTER_AVAILABLE = True
except ModuleNotFoundError:  # pragma: no cover - optional dependency
    tree_sitter_html = None  # type: ignore[assignment]
    Language = None  # type: ignore[assignment]
    Parser = None  # type: ignore[assignment]
    TREE_SITTER_AVAILABLE = False

TEMPLATE_CACHE_KIND = "sfc-template"
SLOT_TAG = "slot"
_EXCLUDED_BINDINGS = {"name", "class"}

logger = get_logger("extractors.slots")

Attributes = Sequence[Tuple[str, Optional[str]]]


def binding_argument(attribute: str) -> Optional[str]:
    """Return the bound property of ``:arg``/``v-bind:arg`` attributes, else ``None``."""
    if attribute.startswith("v-bind:"):
        argument = attribute[len("v-bind:") :]
    elif attribute.startswith((":", ".")):
        argument = attribute[1:]
    else:
        return None
    if argument.startswith("["):
        close = argument.find("]")
        argument = argument[1:close] if close > 0 else argument[1:]
    else:
        argument = argument.split(".", 1)[0]
    return argument or None


def slot_from_attributes(attributes: Attributes) -> SlotDefinition:
    """Build a slot definition from a ``<slot>`` element's attributes."""
    static_name: Optional[str] = None
    dynamic_name: Optional[str] = None
    scope_props: List[str] = []
    for attribute, value in attributes:
        if attribute == "name":
            if static_name is None and value is not None:
                static_name = value
            continue
        argument = binding_argument(attribute)
        if argument is None:
            continue
        if argument == "name":
            if dynamic_name is None and value:
                dynamic_name = value.strip()
            continue
        if argument in _EXCLUDED_BINDINGS:
            continue
        scope_props.append(argument)

    if static_name is not None:
        name = static_name
    elif dynamic_name:
        name = f"[{dynamic_name}]"
    else:
        name = "default"
    return SlotDefinition(name=name, scoped=bool(scope_props), scope_props=scope_props or None)


class ScanSlotStrategy(SlotStrategy):
    """Finds slots with the linear tag scanner; works without any parser library."""

    name = "scan"

    def find_slots(self, region: str) -> Iterator[SlotDefinition]:
        for tag in iter_tags(region):
            if not tag.closing and tag.is_named(SLOT_TAG):
                yield slot_from_attributes(tag.attributes)


_INTERPOLATION = re.compile(r"\{\{.*?\}\}", re.S)


def _blank_interpolations(region: str) -> str:
    """Replace ``{{ ... }}`` with spaces so the HTML grammar never sees their contents."""
    return _INTERPOLATION.sub(lambda match: " " * len(match.group(0)), region)


class TreeSitterSlotStrategy(SlotStrategy):
    """Finds slots by walking a tree-sitter HTML parse of the template region."""

    name = "tree-sitter"

    def __init__(self) -> None:
        if not TREE_SITTER_AVAILABLE:
            raise RuntimeError(
                "tree-sitter-html is required for the tree-sitter slot strategy. "
                "Install it with `pip install tree-sitter tree-sitter-html`."
            )
        self._parser = Parser(Language(tree_sitter_html.language()))

    def find_slots(self, region: str) -> Iterator[SlotDefinition]:
        source_bytes = _blank_interpolations(region).encode("utf-8")
        tree = self._parser.parse(source_bytes)
        yield from self._walk(tree.root_node, source_bytes)

    def _walk(self, node, source_bytes) -> Iterator[SlotDefinition]:  # type: ignore[no-untyped-def]
        if node.type == "element":
            tag = next(
                (child for child in node.children if child.type in {"start_tag", "self_closing_tag"}),
                None,
            )
            if tag is not None and self._tag_name(tag, source_bytes).lower() == SLOT_TAG:
                yield slot_from_attributes(list(self._attributes(tag, source_bytes)))
        for child in node.children:
            yield from self._walk(child, source_bytes)

    @staticmethod
    def _node_text(node, source_bytes) -> str:  # type: ignore[no-untyped-def]
        return source_bytes[node.start_byte : node.end_byte].decode("utf-8", errors="ignore")

    def _tag_name(self, tag, source_bytes) -> str:  # type: ignore[no-untyped-def]
        for child in tag.children:
            if child.type == "tag_name":
                return self._node_text(child, source_bytes)
        return ""

    def _attributes(self, tag, source_bytes) -> Iterator[Tuple[str, Optional[str]]]:  # type: ignore[no-untyped-def]
        for attribute in tag.children:
            if attribute.type != "attribute":
                continue
            name = ""
            value: Optional[str] = None
            for child in attribute.children:
                if child.type == "attribute_name":
                    name = self._node_text(child, source_bytes)
                elif child.type == "attribute_value":
                    value = self._node_text(child, source_bytes)
                elif child.type == "quoted_attribute_value":
                    value = ""
                    for inner in child.children:
                        if inner.type == "attribute_value":
                            value = self._node_text(inner, source_bytes)
            if name:
                yield name, value


def create_strategy(name: str = "auto") -> SlotStrategy:
    """Instantiate the slot strategy configured by ``name``.

    ``auto`` prefers tree-sitter and falls back to the linear scan when the
    grammar is not installed; an explicit ``tree-sitter`` request degrades the
    same way with a warning.
    """
    key = name.lower()
    if key == "scan":
        return ScanSlotStrategy()
    if key not in {"auto", "tree-sitter"}:
        raise ValueError(f"Unknown slot strategy: {name}")
    if TREE_SITTER_AVAILABLE:
        return TreeSitterSlotStrategy()
    if key == "tree-sitter":
        logger.warning("tree-sitter-html is not installed; using the linear slot scanner")
    return ScanSlotStrategy()


def dedupe_slots(slots: Iterable[SlotDefinition]) -> List[SlotDefinition]:
    """Keep the first slot for each name, preserving document order."""
    seen: set[str] = set()
    results: List[SlotDefinition] = []
    for slot in slots:
        if slot.name in seen:
            continue
        seen.add(slot.name)
        results.append(slot)
    return results


class SlotExtractor:
    """Extracts the ordered, de-duplicated slots declared by a component template."""

    def __init__(self, strategy: str | SlotStrategy = "auto") -> None:
        self.strategy = strategy if isinstance(strategy, SlotStrategy) else create_strategy(strategy)

    def extract(self, text: str) -> List[SlotDefinition]:
        return self.extract_region(extract_template_region(text))

    def extract_region(self, region: Optional[str]) -> List[SlotDefinition]:
        if not region:
            return []
        return dedupe_slots(self.strategy.find_slots(region))

    def extract_file(
        self, path: Path, source: SourceReader, cache: Optional[ParseCache] = None
    ) -> List[SlotDefinition]:
        def _parse() -> Optional[str]:
            return extract_template_region(read_source(path, source))

        if cache is None:
            region = _parse()
        else:
            region = cache.get_or_parse(TEMPLATE_CACHE_KIND, str(path), _parse)
        return self.extract_region(region)


__all__ = [
    "ScanSlotStrategy",
    "SlotExtractor",
    "TREE_SITTER_AVAILABLE",
    "TreeSitterSlotStrategy",
    "binding_argument",
    "create_strategy",
    "dedupe_slots",
    "slot_from_attributes",
]
