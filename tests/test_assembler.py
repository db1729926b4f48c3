from __future__ import annotations

import logging
from pathlib import Path

import pytest

from compdoc.assembler import ManifestAssembler, utc_timestamp
from compdoc.extractors import ExtractorSet
from compdoc.extractors.props import PropsExtractor
from compdoc.models import AssetEntry, ValueToken
from compdoc.stores import ParseCache
from tests._fixtures.library_builder import LibraryBuilder

FIXED_CLOCK = "2026-01-01T00:00:00.000Z"

BUTTON_TS = """
export const buttonPropTypes = {
  size: {
    type: String,
    default: 'medium',
  },
  disabled: {
    type: Boolean,
    default: false,
  },
};

export const buttonEmitTypes = {
  click: (evt: MouseEvent) => evt instanceof MouseEvent,
};
"""

BUTTON_VUE = """
<template>
  <button>
    <slot name="icon" />
    <slot />
  </button>
</template>

<script lang="ts" setup>
const props = defineProps(buttonPropTypes);
</script>
"""


def _build_library(library_builder: LibraryBuilder) -> None:
    library_builder.package_json("2.4.0")
    library_builder.component("button", {"button.ts": BUTTON_TS, "button.vue": BUTTON_VUE})
    library_builder.component(
        "table",
        {
            "table.vue": "<template><table><slot :rows=\"rows\" /></table></template>\n",
            "use-table-sort.ts": """
                export const useTableSort = (rows: Row[]) => {
                  return { sorted, toggle };
                };
            """,
            "table-row.vue": "<template><tr><slot /></tr></template>\n",
            "table-row.ts": "export const tableRowPropTypes = {\n  striped: { type: Boolean },\n};\n",
        },
    )
    library_builder.component("mystery", {"notes.md": "nothing to see\n"})
    library_builder.write(
        {
            "src/components/README.md": "not a component\n",
            "src/stores/user-store.ts": "export const useUserStore = defineStore('user', {});\n",
            "src/stores/notes.md": "ignored\n",
            "src/assets/images/logo.svg": "<svg />",
            "src/assets/images/empty-states/no-data.png": "png",
            "src/assets/images/icons/close.svg": "<svg />",
            "src/assets/scripts/spacing.ts": "export const spacing = {\n  sm: '8px',\n};\n",
        }
    )


def test_build_produces_complete_manifest(library_builder: LibraryBuilder) -> None:
    _build_library(library_builder)
    assembler = ManifestAssembler(library_builder.layout(), clock=lambda: FIXED_CLOCK)

    manifest = assembler.build()

    assert manifest.version == "1.0.0"
    assert manifest.generated_at == FIXED_CLOCK
    assert manifest.source_library_version == "2.4.0"
    assert [component.name for component in manifest.components] == ["button", "mystery", "table"]

    button, mystery, table = manifest.components
    assert button.pascal_name == "Button"
    assert button.category == "form"
    assert [prop.name for prop in button.props] == ["size", "disabled"]
    assert [emit.name for emit in button.emits] == ["click"]
    assert [slot.name for slot in button.slots] == ["icon", "default"]

    assert mystery.category == "other"
    assert mystery.props == [] and mystery.slots == [] and mystery.sub_components == []

    assert table.category == "data"
    assert table.props == []
    assert table.slots[0].scope_props == ["rows"]
    assert [(item.name, item.returned_members) for item in table.composables] == [
        ("useTableSort", ["sorted", "toggle"])
    ]
    (row,) = table.sub_components
    assert (row.name, row.pascal_name, row.has_props) == ("table-row", "TableRow", True)
    assert [prop.name for prop in row.props] == ["striped"]
    assert [slot.name for slot in row.slots] == ["default"]

    assert manifest.tokens.spacing == [ValueToken("sm", "8px")]
    assert [(store.name, store.file_name) for store in manifest.stores] == [
        ("user-store", "user-store.ts")
    ]
    assert manifest.assets.images == [AssetEntry("logo", "images/logo.svg", "svg")]
    assert manifest.assets.empty_states == [
        AssetEntry("no-data", "images/empty-states/no-data.png", "png")
    ]


def test_missing_package_json_reports_unknown_version(library_builder: LibraryBuilder) -> None:
    library_builder.component("button", {"button.ts": BUTTON_TS})
    manifest = ManifestAssembler(library_builder.layout(), clock=lambda: FIXED_CLOCK).build()
    assert manifest.source_library_version == "unknown"
    assert manifest.stores == []
    assert manifest.assets.images == []


def test_category_overrides_take_precedence(library_builder: LibraryBuilder) -> None:
    library_builder.component("button", {"button.ts": BUTTON_TS})
    assembler = ManifestAssembler(
        library_builder.layout(), category_overrides={"actions": ["button"]}
    )
    assert assembler.assemble_component("button").category == "actions"


class _ExplodingProps(PropsExtractor):
    def extract_file(self, path, source, cache=None):  # type: ignore[override]
        raise ValueError("boom")


def test_failed_field_falls_back_and_is_logged(
    library_builder: LibraryBuilder, caplog: pytest.LogCaptureFixture, monkeypatch: pytest.MonkeyPatch
) -> None:
    library_builder.component("button", {"button.ts": BUTTON_TS, "button.vue": BUTTON_VUE})
    monkeypatch.setattr(logging.getLogger("compdoc"), "propagate", True)
    assembler = ManifestAssembler(
        library_builder.layout(), extractors=ExtractorSet(props=_ExplodingProps())
    )

    with caplog.at_level(logging.WARNING, logger="compdoc"):
        component = assembler.assemble_component("button")

    assert component.props == [] and component.emits == []
    assert [slot.name for slot in component.slots] == ["icon", "default"]
    assert "Failed to extract props for button: boom" in caplog.text


def test_build_keeps_components_with_broken_or_undecodable_definitions(
    library_builder: LibraryBuilder, caplog: pytest.LogCaptureFixture, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setattr(logging.getLogger("compdoc"), "propagate", True)
    library_builder.component("button", {"button.ts": BUTTON_TS, "button.vue": BUTTON_VUE})
    library_builder.component(
        "chip",
        {
            "chip.ts": "export const chipPropTypes = {\n  tone: { type: String,,, default: \n",
            "chip.vue": "<template><span><slot /></span></template>\n",
        },
    )
    garbled_dir = library_builder.component("garbled", {"garbled.vue": "<template><div /></template>\n"})
    (garbled_dir / "garbled.ts").write_bytes(b"export const garbledPropTypes = { a: '\xff\xfe' };\n")

    with caplog.at_level(logging.WARNING, logger="compdoc"):
        manifest = ManifestAssembler(library_builder.layout(), clock=lambda: FIXED_CLOCK).build()

    assert [component.name for component in manifest.components] == ["button", "chip", "garbled"]
    button, chip, garbled = manifest.components
    assert [prop.name for prop in button.props] == ["size", "disabled"]
    assert chip.props == []
    assert [slot.name for slot in chip.slots] == ["default"]
    assert garbled.props == [] and garbled.types == []
    assert "Failed to extract props for garbled" in caplog.text
    assert "Failed to extract types for garbled" in caplog.text


def test_shared_cache_parses_each_file_once(library_builder: LibraryBuilder) -> None:
    library_builder.component("button", {"button.ts": BUTTON_TS, "button.vue": BUTTON_VUE})
    cache = ParseCache()
    assembler = ManifestAssembler(library_builder.layout(), cache=cache)

    assembler.assemble_component("button")
    misses = cache.misses
    assembler.assemble_component("button")

    assert cache.misses == misses
    assert cache.hits >= 2


def test_utc_timestamp_format() -> None:
    stamp = utc_timestamp()
    assert stamp.endswith("Z")
    assert len(stamp) == len("2026-01-01T00:00:00.000Z")


def test_empty_library_builds_empty_manifest(tmp_path: Path) -> None:
    builder = LibraryBuilder(tmp_path)
    manifest = ManifestAssembler(builder.layout()).build()
    assert manifest.components == []
    assert manifest.tokens.colors == []
