"""Tests for slot extraction."""

from __future__ import annotations

from pathlib import Path

import pytest

from compdoc.extractors.slots import (
    TREE_SITTER_AVAILABLE,
    ScanSlotStrategy,
    SlotExtractor,
    create_strategy,
    slot_from_attributes,
)
from compdoc.library import FileSystemSource
from compdoc.stores import ParseCache

CARD_COMPONENT = """
<template>
  <div class="card">
    <header v-if="$slots.header">
      <slot name="header" />
    </header>
    <!-- <slot name="commented" /> -->
    <template v-for="(item, index) in items" :key="item.id">
      <slot name="item" :item="item" :index="index" class="row" />
    </template>
    <p>{{ a < b ? '<slot name="fake">' : '' }}</p>
    <slot />
    <slot></slot>
    <slot :name="dynamicName" :data.sync="payload" />
    <slot name="footer" v-bind:actions="actions"></slot>
  </div>
</template>

<script setup lang="ts">
const markup = '<slot name="script" />';
</script>
"""


def _summary(slots):  # type: ignore[no-untyped-def]
    return [(slot.name, slot.scoped, slot.scope_props) for slot in slots]


def test_scan_strategy_extracts_slots_in_document_order() -> None:
    slots = SlotExtractor(ScanSlotStrategy()).extract(CARD_COMPONENT)
    assert _summary(slots) == [
        ("header", False, None),
        ("item", True, ["item", "index"]),
        ("default", False, None),
        ("[dynamicName]", True, ["data"]),
        ("footer", True, ["actions"]),
    ]


def test_duplicate_default_slot_is_reported_once() -> None:
    slots = SlotExtractor("scan").extract("<template><slot /><div><slot></slot></div></template>")
    assert _summary(slots) == [("default", False, None)]


def test_first_slot_with_a_name_wins() -> None:
    slots = SlotExtractor("scan").extract(
        '<template><slot name="a" /><slot name="a" :row="row" /></template>'
    )
    assert _summary(slots) == [("a", False, None)]


def test_no_template_region_yields_no_slots() -> None:
    assert SlotExtractor("scan").extract("<script>export default {}</script>") == []


def test_slot_from_attributes_name_precedence() -> None:
    assert slot_from_attributes([(":name", "dyn"), ("name", "static")]).name == "static"
    assert slot_from_attributes([("v-bind:name", "dyn")]).name == "[dyn]"
    assert slot_from_attributes([(":name", "")]).name == "default"
    slot = slot_from_attributes([(":[key]", "value"), (":class", "cls"), (":row.prop", "r")])
    assert slot.scope_props == ["key", "row"]


def test_unknown_strategy_is_rejected() -> None:
    with pytest.raises(ValueError):
        create_strategy("regex")


def test_extract_file_caches_template_region(tmp_path: Path) -> None:
    path = tmp_path / "card.vue"
    path.write_text(CARD_COMPONENT, encoding="utf-8")
    cache = ParseCache()
    extractor = SlotExtractor("scan")

    extractor.extract_file(path, FileSystemSource(), cache)
    slots = extractor.extract_file(path, FileSystemSource(), cache)

    assert len(slots) == 5
    assert cache.hits == 1


def test_auto_strategy_falls_back_to_scan_without_grammar() -> None:
    strategy = create_strategy("auto")
    expected = "tree-sitter" if TREE_SITTER_AVAILABLE else "scan"
    assert strategy.name == expected


@pytest.mark.skipif(not TREE_SITTER_AVAILABLE, reason="tree-sitter-html not installed")
def test_tree_sitter_strategy_matches_scan_strategy() -> None:
    tree_sitter = SlotExtractor("tree-sitter").extract(CARD_COMPONENT)
    scan = SlotExtractor("scan").extract(CARD_COMPONENT)
    assert _summary(tree_sitter) == _summary(scan)
