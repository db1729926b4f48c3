"""Extractor for exported type declarations."""

from __future__ import annotations

from typing import List

from ..models import TypeDefinition
from .base import ModuleExtractor
from .typescript import SourceModule, const_array


class TypeAliasExtractor(ModuleExtractor[List[TypeDefinition]]):
    """Collects exported type aliases, interfaces and ``as const`` arrays in source order."""

    def extract_module(self, module: SourceModule) -> List[TypeDefinition]:
        types: List[TypeDefinition] = []
        for declaration in module.declarations:
            if not declaration.exported:
                continue
            if declaration.kind in {"type-alias", "interface"}:
                types.append(
                    TypeDefinition(
                        name=declaration.name,
                        kind=declaration.kind,
                        definition=declaration.text,
                    )
                )
            elif declaration.kind == "variable":
                if declaration.value is None or const_array(declaration.value, module.source) is None:
                    continue
                types.append(
                    TypeDefinition(
                        name=declaration.name,
                        kind="const-array",
                        definition=f"const {declaration.name} = {module.text_of(declaration.value)}",
                    )
                )
        return types


__all__ = ["TypeAliasExtractor"]
