"""Extractor for composable hook files (``use-*.ts``)."""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional, Tuple

from tree_sitter import Node

from ..library import SourceReader
from ..models import ComposableInfo
from .base import read_source
from .subcomponents import to_camel_case
from .typescript import (
    SourceModule,
    descendants,
    is_function,
    node_text,
    object_entries,
    object_literal,
    parse_module,
    unwrap,
)

RETURN_DENYLIST = frozenset({"return", "const", "let", "var", "if", "else", "value"})

_PARAMETER_TYPES = {"required_parameter", "optional_parameter"}


def fallback_name(file_name: str) -> str:
    """``use-foo-bar.ts`` -> ``useFooBar``."""
    stem = file_name[:-3] if file_name.endswith(".ts") else file_name
    return to_camel_case(stem)


def _format_parameter(parameter: Node, source: bytes) -> str:
    if parameter.type not in _PARAMETER_TYPES:
        return node_text(parameter, source)
    pattern = parameter.child_by_field_name("pattern")
    text = node_text(pattern, source) if pattern is not None else ""
    if parameter.type == "optional_parameter":
        text += "?"
    annotation = parameter.child_by_field_name("type")
    if annotation is not None and annotation.named_children:
        text += f": {node_text(annotation.named_children[0], source)}"
    value = parameter.child_by_field_name("value")
    if value is not None:
        text += f" = {node_text(value, source)}"
    return text


def format_signature(function: Optional[Node], source: bytes) -> str:
    """Render the parameter list of ``function`` as ``(name: Type = default, ...)``."""
    if function is None:
        return "()"
    single = function.child_by_field_name("parameter")
    if single is not None:
        return f"({node_text(single, source)})"
    parameters = function.child_by_field_name("parameters")
    if parameters is None:
        return "()"
    parts = [
        _format_parameter(parameter, source)
        for parameter in parameters.named_children
        if parameter.type != "comment"
    ]
    return f"({', '.join(parts)})"


def returned_members(module: SourceModule) -> List[str]:
    """Keys of the last ``return { ... }`` object literal in the file."""
    returned: Optional[Node] = None
    for statement in descendants(module.root, "return_statement"):
        value = statement.named_children[0] if statement.named_children else None
        obj = object_literal(value)
        if obj is not None:
            returned = obj
    if returned is None:
        return []
    return [
        entry.key
        for entry in object_entries(returned, module.source)
        if entry.kind != "spread" and entry.key not in RETURN_DENYLIST
    ]


class ComposableExtractor:
    """Reads the exported hook name, its parameters and returned members."""

    def __init__(self, prefix: str = "use") -> None:
        self.prefix = prefix

    def _declaration(self, module: SourceModule) -> Optional[Tuple[str, Node]]:
        for declaration in module.variables():
            if not declaration.exported or not declaration.name.startswith(self.prefix):
                continue
            value = unwrap(declaration.value)
            if is_function(value):
                return declaration.name, value
        for declaration in module.declarations:
            if (
                declaration.kind == "function"
                and declaration.exported
                and declaration.name.startswith(self.prefix)
            ):
                return declaration.name, declaration.node
        return None

    def extract(self, text: str, file_name: str) -> ComposableInfo:
        module = parse_module(text)
        declaration = self._declaration(module)
        if declaration is None:
            name, function = fallback_name(file_name), None
        else:
            name, function = declaration
        return ComposableInfo(
            name=name,
            file_name=file_name,
            signature=format_signature(function, module.source),
            returned_members=returned_members(module),
        )

    def extract_file(self, path: Path, source: SourceReader) -> ComposableInfo:
        return self.extract(read_source(path, source), Path(path).name)


__all__ = [
    "ComposableExtractor",
    "RETURN_DENYLIST",
    "fallback_name",
    "format_signature",
    "returned_members",
]
