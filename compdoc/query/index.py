"""Lookup indexes over a loaded manifest."""

from __future__ import annotations

from collections import defaultdict
from typing import Any, Dict, List, Optional

from ..models import ComponentManifest, Manifest, StoreManifest

TOKEN_TYPES = ("colors", "spacing", "radius", "maxWidth", "utilities", "all")


class ComponentIndex:
    """Name, category, store and token indexes built once when a manifest is loaded."""

    def __init__(self, manifest: Manifest) -> None:
        self.manifest = manifest
        self._by_name: Dict[str, ComponentManifest] = {}
        self._by_category: Dict[str, List[ComponentManifest]] = defaultdict(list)
        for component in manifest.components:
            self._by_name.setdefault(component.name.lower(), component)
            self._by_category[component.category.lower()].append(component)
        self._stores: Dict[str, StoreManifest] = {}
        for store in manifest.stores:
            self._stores.setdefault(store.name.lower(), store)

        tokens = manifest.tokens
        self._tokens: Dict[str, Any] = {
            "colors": [token.to_dict() for token in tokens.colors],
            "spacing": [token.to_dict() for token in tokens.spacing],
            "radius": [token.to_dict() for token in tokens.border_radius],
            "maxWidth": [token.to_dict() for token in tokens.max_width],
            "utilities": [token.to_dict() for token in tokens.utilities],
            "all": tokens.to_dict(),
        }

    @property
    def components(self) -> List[ComponentManifest]:
        return self.manifest.components

    def get(self, name: str) -> Optional[ComponentManifest]:
        return self._by_name.get(name.strip().lower())

    def by_category(self, category: str) -> List[ComponentManifest]:
        return list(self._by_category.get(category.lower(), []))

    def tokens(self, token_type: str) -> Optional[Any]:
        return self._tokens.get(token_type)

    @property
    def stores(self) -> List[StoreManifest]:
        return self.manifest.stores

    def store(self, name: str) -> Optional[StoreManifest]:
        return self._stores.get(name.strip().lower())


__all__ = ["ComponentIndex", "TOKEN_TYPES"]
