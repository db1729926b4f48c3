"""Manifest assembly: runs every extractor over a component library."""

from __future__ import annotations

import os
from datetime import UTC, datetime
from pathlib import Path
from typing import Callable, List, Mapping, Optional, Sequence, TypeVar

from .categories import get_component_category
from .extractors import ExtractorSet, default_extractors
from .extractors.subcomponents import SubComponentMeta, discover_subcomponents, to_pascal_case
from .library import FileSystemSource, LibraryLayout, SourceReader, read_library_version
from .logging import get_logger
from .models import (
    AssetCatalog,
    AssetEntry,
    ComponentManifest,
    ComponentProps,
    ComposableInfo,
    DesignTokens,
    Manifest,
    StoreManifest,
    SubComponentManifest,
)
from .stores import ParseCache

T = TypeVar("T")

IMAGES_DIR = "images"
EMPTY_STATES_DIR = "empty-states"
COMPOSABLE_PREFIX = "use-"


def utc_timestamp() -> str:
    return datetime.now(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class ManifestAssembler:
    """Builds a :class:`Manifest` for the library described by ``layout``.

    Every extraction step for a component is guarded on its own: a failure is
    logged with the component name and only that field falls back to its
    empty default. Components are always emitted.
    """

    def __init__(
        self,
        layout: LibraryLayout,
        *,
        source: SourceReader | None = None,
        extractors: ExtractorSet | None = None,
        cache: ParseCache | None = None,
        category_overrides: Optional[Mapping[str, Sequence[str]]] = None,
        clock: Callable[[], str] = utc_timestamp,
    ) -> None:
        self.layout = layout
        self.source = source or FileSystemSource()
        self.extractors = extractors or default_extractors()
        self.cache = cache if cache is not None else ParseCache()
        self.category_overrides = dict(category_overrides or {})
        self.clock = clock
        self.logger = get_logger("assembler")

    def build(self) -> Manifest:
        self.logger.info("Extracting components from %s", self.layout.components)
        components = [self.assemble_component(name) for name in self.component_names()]
        tokens = self._guard(
            "tokens",
            "design tokens",
            lambda: self.extractors.tokens.extract(self.layout.assets, self.source, self.cache),
            DesignTokens(),
        )
        return Manifest(
            generated_at=self.clock(),
            source_library_version=read_library_version(self.layout, self.source),
            components=components,
            tokens=tokens,
            stores=self.collect_stores(),
            assets=self.collect_assets(),
        )

    def component_names(self) -> List[str]:
        components_dir = self.layout.components
        return [
            entry
            for entry in self.source.list_entries(components_dir)
            if self.source.is_directory(components_dir / entry)
        ]

    def assemble_component(self, name: str) -> ComponentManifest:
        component_dir = self.layout.components / name
        definition = component_dir / f"{name}.ts"
        descriptor = component_dir / f"{name}.vue"
        component = ComponentManifest(
            name=name,
            pascal_name=to_pascal_case(name),
            category=get_component_category(name, self.category_overrides),
        )

        if self.source.exists(definition):
            parsed = self._guard(
                "props",
                name,
                lambda: self.extractors.props.extract_file(definition, self.source, self.cache),
                ComponentProps(),
            )
            component.props, component.emits = parsed.props, parsed.emits
            component.types = self._guard(
                "types",
                name,
                lambda: self.extractors.types.extract_file(definition, self.source, self.cache),
                [],
            )

        if self.source.exists(descriptor):
            component.slots = self._guard(
                "slots",
                name,
                lambda: self.extractors.slots.extract_file(descriptor, self.source, self.cache),
                [],
            )

        component.composables = self._guard(
            "composables", name, lambda: self._composables(component_dir, name), []
        )
        subs = self._guard(
            "sub-components",
            name,
            lambda: discover_subcomponents(component_dir, name, self.source),
            [],
        )
        component.sub_components = [self._assemble_sub(name, meta) for meta in subs]
        return component

    def _composables(self, component_dir: Path, name: str) -> List[ComposableInfo]:
        composables: List[ComposableInfo] = []
        for entry in self.source.list_entries(component_dir):
            if not (entry.startswith(COMPOSABLE_PREFIX) and entry.endswith(".ts")):
                continue
            info = self._guard(
                f"composable {entry}",
                name,
                lambda: self.extractors.composables.extract_file(component_dir / entry, self.source),
                None,
            )
            if info is not None:
                composables.append(info)
        return composables

    def _assemble_sub(self, parent: str, meta: SubComponentMeta) -> SubComponentManifest:
        sub = SubComponentManifest(
            name=meta.name, pascal_name=meta.pascal_name, has_props=meta.has_props
        )
        owner = f"{parent}/{meta.name}"
        if meta.has_props and meta.definition_path is not None:
            definition = meta.definition_path
            parsed = self._guard(
                "props",
                owner,
                lambda: self.extractors.props.extract_file(definition, self.source, self.cache),
                ComponentProps(),
            )
            sub.props, sub.emits = parsed.props, parsed.emits
        if meta.descriptor_path is not None:
            descriptor = meta.descriptor_path
            sub.slots = self._guard(
                "slots",
                owner,
                lambda: self.extractors.slots.extract_file(descriptor, self.source, self.cache),
                [],
            )
        return sub

    def collect_stores(self) -> List[StoreManifest]:
        stores: List[StoreManifest] = []
        for entry in self.source.list_entries(self.layout.stores):
            if not entry.endswith(".ts"):
                continue
            path = self.layout.stores / entry
            text = self._guard("store source", entry, lambda: self.source.read_text(path), None)
            if text is None:
                continue
            stores.append(StoreManifest(name=entry[: -len(".ts")], file_name=entry, source=text))
        return stores

    def collect_assets(self) -> AssetCatalog:
        catalog = AssetCatalog()
        images_dir = self.layout.assets / IMAGES_DIR
        for entry in self.source.list_entries(images_dir):
            path = images_dir / entry
            if self.source.is_directory(path):
                if entry != EMPTY_STATES_DIR:
                    continue
                for inner in self.source.list_entries(path):
                    catalog.empty_states.append(
                        _asset(inner, f"{IMAGES_DIR}/{EMPTY_STATES_DIR}/{inner}")
                    )
            else:
                catalog.images.append(_asset(entry, f"{IMAGES_DIR}/{entry}"))
        return catalog

    def log_summary(self, manifest: Manifest, size_bytes: Optional[int] = None) -> None:
        components = manifest.components
        self.logger.info(
            "Manifest generated: %d components, %d props, %d slots, %d sub-components",
            len(components),
            sum(len(component.props) for component in components),
            sum(len(component.slots) for component in components),
            sum(len(component.sub_components) for component in components),
        )
        if size_bytes is not None:
            self.logger.info("File size: %.1f KB", size_bytes / 1024)

    def _guard(self, field_name: str, owner: str, extract: Callable[[], T], default: T) -> T:
        try:
            return extract()
        except Exception as exc:
            self.logger.warning("Failed to extract %s for %s: %s", field_name, owner, exc)
            return default


def _asset(file_name: str, path: str) -> AssetEntry:
    stem, extension = os.path.splitext(file_name)
    return AssetEntry(name=stem, path=path, type=extension[1:])


__all__ = ["ManifestAssembler", "utc_timestamp"]
