"""Query tools served over MCP and HTTP.

Each tool returns a :class:`ToolResult`. Lookups that fail and invalid
arguments produce error results rather than exceptions so transports can
relay them to the client unchanged.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Dict, List, Mapping, Optional

from ..library import FileSystemSource, LibraryLayout, SourceReader
from ..logging import get_logger
from ..models import ComponentManifest, PropDefinition
from .index import TOKEN_TYPES, ComponentIndex
from .usage import UsageExampleRenderer

SOURCE_EXTENSIONS = (".vue", ".ts")

_ARGUMENT_NAMES = {
    "subComponent": "sub_component",
    "propName": "prop_name",
    "propType": "prop_type",
    "type": "token_type",
}

logger = get_logger("query")


class UnknownToolError(KeyError):
    """Raised when a tool name is not registered."""


@dataclass
class ToolResult:
    content: str
    is_error: bool = False

    @classmethod
    def json(cls, payload: Any) -> "ToolResult":
        return cls(json.dumps(payload, indent=2, ensure_ascii=False))

    @classmethod
    def error(cls, message: str) -> "ToolResult":
        return cls(message, is_error=True)

    def to_dict(self) -> Dict[str, Any]:
        return {"content": [{"type": "text", "text": self.content}], "isError": self.is_error}


def _string(schema_description: str) -> Dict[str, str]:
    return {"type": "string", "description": schema_description}


TOOL_DESCRIPTIONS: Dict[str, Dict[str, Any]] = {
    "list_components": {
        "description": "List all available components, optionally filtered by category",
        "parameters": {
            "category": _string('Optional category to filter by (e.g. "form", "layout", "feedback")'),
        },
        "required": [],
    },
    "get_component": {
        "description": "Get props, emits, slots, types, composables and a usage example for a component",
        "parameters": {
            "name": _string('The component name (e.g. "button", "input", "modal")'),
            "subComponent": _string("Optional sub-component name to look up instead"),
        },
        "required": ["name"],
    },
    "search_components": {
        "description": "Search components by name or prop name",
        "parameters": {"query": _string("Case-insensitive search text")},
        "required": ["query"],
    },
    "search_by_prop": {
        "description": "Find components that declare a prop with the given name and/or type",
        "parameters": {
            "propName": _string("Exact prop name (case-insensitive)"),
            "propType": _string("Substring of the prop type (case-insensitive)"),
        },
        "required": [],
    },
    "get_component_source": {
        "description": "Return the raw .vue and .ts sources of a component",
        "parameters": {"name": _string("The component name")},
        "required": ["name"],
    },
    "get_tokens": {
        "description": "Get design tokens (colors, spacing, border radius, max width, utilities)",
        "parameters": {
            "type": {
                "type": "string",
                "enum": list(TOKEN_TYPES),
                "description": "Type of tokens to retrieve",
            }
        },
        "required": ["type"],
    },
    "list_assets": {
        "description": "List image and empty-state assets shipped with the library",
        "parameters": {},
        "required": [],
    },
    "get_store": {
        "description": "List stores, or get the source of one store by name",
        "parameters": {"name": _string("Optional store name")},
        "required": [],
    },
}


def _summary(component: ComponentManifest) -> Dict[str, Any]:
    return {
        "name": component.name,
        "pascalName": component.pascal_name,
        "category": component.category,
    }


class QueryTools:
    """The eight read-only tools over a :class:`ComponentIndex`."""

    def __init__(
        self,
        index: ComponentIndex,
        *,
        layout: LibraryLayout | None = None,
        source: SourceReader | None = None,
        usage: UsageExampleRenderer | None = None,
    ) -> None:
        self.index = index
        self.layout = layout
        self.source = source or FileSystemSource()
        self.usage = usage or UsageExampleRenderer()
        self._handlers: Dict[str, Callable[..., ToolResult]] = {
            "list_components": self.list_components,
            "get_component": self.get_component,
            "search_components": self.search_components,
            "search_by_prop": self.search_by_prop,
            "get_component_source": self.get_component_source,
            "get_tokens": self.get_tokens,
            "list_assets": self.list_assets,
            "get_store": self.get_store,
        }

    @property
    def names(self) -> List[str]:
        return list(self._handlers)

    def call(self, name: str, arguments: Optional[Mapping[str, Any]] = None) -> ToolResult:
        """Dispatch a tool call using wire (camelCase) argument names."""
        handler = self._handlers.get(name)
        if handler is None:
            raise UnknownToolError(name)
        arguments = dict(arguments or {})
        logger.debug("Tool call %s %s", name, arguments)
        kwargs = {
            _ARGUMENT_NAMES.get(key, key): arguments[key]
            for key in TOOL_DESCRIPTIONS[name]["parameters"]
            if arguments.get(key) is not None
        }
        return handler(**kwargs)

    # ------------------------------------------------------------------
    # Tools

    def list_components(self, category: Optional[str] = None) -> ToolResult:
        components = self.index.by_category(category) if category else self.index.components
        return ToolResult.json(
            [
                {
                    **_summary(component),
                    "propCount": len(component.props),
                    "slotCount": len(component.slots),
                    "subComponentCount": len(component.sub_components),
                }
                for component in components
            ]
        )

    def get_component(
        self, name: Optional[str] = None, sub_component: Optional[str] = None
    ) -> ToolResult:
        if not name:
            return ToolResult.error("A component name is required.")
        component = self.index.get(name)
        if component is None:
            return ToolResult.error(
                f'Component "{name}" not found. Use list_components to see available components.'
            )
        if sub_component:
            wanted = sub_component.lower()
            for sub in component.sub_components:
                if wanted in {sub.name.lower(), sub.pascal_name.lower()}:
                    payload = sub.to_dict()
                    payload["parent"] = component.name
                    payload["usageExample"] = self.usage.render(sub.pascal_name, sub.props, sub.slots)
                    return ToolResult.json(payload)
            available = ", ".join(sub.name for sub in component.sub_components) or "none"
            return ToolResult.error(
                f'Sub-component "{sub_component}" not found in "{component.name}". '
                f"Available: {available}"
            )
        payload = component.to_dict()
        payload["usageExample"] = self.usage.render(
            component.pascal_name, component.props, component.slots
        )
        return ToolResult.json(payload)

    def search_components(self, query: Optional[str] = None) -> ToolResult:
        if not query:
            return ToolResult.error("A search query is required.")
        needle = query.lower()
        results = []
        for component in self.index.components:
            matched_on: List[str] = []
            if needle in component.name.lower():
                matched_on.append("name")
            if needle in component.pascal_name.lower():
                matched_on.append("pascalName")
            matched_on.extend(
                f"prop:{prop.name}" for prop in component.props if needle in prop.name.lower()
            )
            if matched_on:
                results.append({**_summary(component), "matchedOn": matched_on})
        return ToolResult.json(results)

    def search_by_prop(
        self, prop_name: Optional[str] = None, prop_type: Optional[str] = None
    ) -> ToolResult:
        if not prop_name and not prop_type:
            return ToolResult.error("At least one of propName or propType is required.")

        def _matches(prop: PropDefinition) -> bool:
            if prop_name and prop.name.lower() != prop_name.lower():
                return False
            if prop_type and prop_type.lower() not in prop.type.lower():
                return False
            return True

        results = []
        for component in self.index.components:
            matched = [prop.to_dict() for prop in component.props if _matches(prop)]
            if matched:
                results.append({**_summary(component), "matchedProps": matched})
        return ToolResult.json(results)

    def get_component_source(self, name: Optional[str] = None) -> ToolResult:
        if not name:
            return ToolResult.error("A component name is required.")
        component = self.index.get(name)
        if component is None:
            return ToolResult.error(f'Component "{name}" not found.')
        if self.layout is None:
            return ToolResult.error(
                "Component sources are unavailable: the library root could not be located."
            )
        component_dir = self.layout.components / component.name
        if not self.source.is_directory(component_dir):
            return ToolResult.error(f'Source directory for component "{component.name}" not found.')
        files: Dict[str, str] = {}
        try:
            self._collect_sources(component_dir, Path(), files)
        except (OSError, UnicodeDecodeError) as exc:
            logger.warning("Cannot read sources of %s: %s", component.name, exc)
            return ToolResult.error(f'Cannot read sources for component "{component.name}": {exc}')
        return ToolResult.json(files)

    def _collect_sources(self, directory: Path, relative: Path, files: Dict[str, str]) -> None:
        for entry in self.source.list_entries(directory):
            path = directory / entry
            if self.source.is_directory(path):
                self._collect_sources(path, relative / entry, files)
            elif entry.endswith(SOURCE_EXTENSIONS):
                files[(relative / entry).as_posix()] = self.source.read_text(path)

    def get_tokens(self, token_type: Optional[str] = None) -> ToolResult:
        tokens = self.index.tokens(token_type) if token_type else None
        if tokens is None:
            return ToolResult.error(
                f'Invalid token type "{token_type}". Use one of: {", ".join(TOKEN_TYPES)}'
            )
        return ToolResult.json(tokens)

    def list_assets(self) -> ToolResult:
        return ToolResult.json(self.index.manifest.assets.to_dict())

    def get_store(self, name: Optional[str] = None) -> ToolResult:
        if not name:
            return ToolResult.json(
                [{"name": store.name, "fileName": store.file_name} for store in self.index.stores]
            )
        store = self.index.store(name)
        if store is None:
            available = ", ".join(store.name for store in self.index.stores) or "none"
            return ToolResult.error(f'Store "{name}" not found. Available: {available}')
        return ToolResult.json(store.to_dict())


__all__ = ["QueryTools", "TOOL_DESCRIPTIONS", "ToolResult", "UnknownToolError"]
