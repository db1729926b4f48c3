"""Extractor for component property and emit declarations."""

from __future__ import annotations

import re
from typing import Dict, List, Optional, Sequence

from tree_sitter import Node

from ..models import ComponentProps, EmitDefinition, PropDefinition
from .base import ModuleExtractor
from .typescript import (
    ObjectEntry,
    SourceModule,
    const_array,
    descendants,
    entry_map,
    node_text,
    object_entries,
    object_literal,
    string_elements,
)

_DESCRIPTION_TAG = re.compile(r"@description\s+([^\n*]+)")

_CONSTRUCTOR_TYPES = {
    "String": "string",
    "Boolean": "boolean",
    "Number": "number",
    "Array": "array",
    "Object": "object",
    "Function": "function",
}

PROPS_SUFFIX = "PropTypes"
EMITS_SUFFIX = "emittypes"


def collect_const_arrays(module: SourceModule) -> Dict[str, List[str]]:
    """Map every ``const X = ['a', 'b'] as const`` in the module to its values."""
    arrays: Dict[str, List[str]] = {}
    for declaration in module.variables():
        array = const_array(declaration.value, module.source)
        if array is None:
            continue
        values = string_elements(array, module.source)
        if values:
            arrays[declaration.name] = values
    return arrays


def _prop_type_argument(node: Node, source: bytes) -> Optional[Node]:
    """Return the type argument of a ``X as PropType<...>`` assertion, if present."""
    if node.type != "as_expression" or len(node.named_children) < 2:
        return None
    asserted = node.named_children[-1]
    if asserted.type != "generic_type":
        return None
    name = asserted.child_by_field_name("name")
    arguments = asserted.child_by_field_name("type_arguments")
    if name is None or arguments is None or node_text(name, source) != "PropType":
        return None
    return arguments.named_children[0] if arguments.named_children else None


def resolve_type(node: Optional[Node], source: bytes) -> str:
    """Normalise the value of a ``type:`` field into a type tag."""
    if node is None:
        return "unknown"
    wrapped = _prop_type_argument(node, source)
    if wrapped is not None:
        return node_text(wrapped, source)
    text = node_text(node, source)
    return _CONSTRUCTOR_TYPES.get(text, text)


def description_from_comments(comments: Sequence[str]) -> Optional[str]:
    for comment in comments:
        match = _DESCRIPTION_TAG.search(comment)
        if match:
            return re.sub(r",\s*$", "", match.group(1).strip())
    return None


def _typeof_references(node: Node, source: bytes) -> List[str]:
    references: List[str] = []
    for query in descendants(node, "type_query"):
        if query.named_children:
            references.append(node_text(query.named_children[0], source))
    return references


def _includes_receivers(node: Node, source: bytes) -> List[str]:
    """Names ``X`` of every ``X.includes(...)`` call under ``node``."""
    receivers: List[str] = []
    for call in descendants(node, "call_expression"):
        function = call.child_by_field_name("function")
        if function is None or function.type != "member_expression":
            continue
        target = function.child_by_field_name("object")
        prop = function.child_by_field_name("property")
        if target is not None and prop is not None and node_text(prop, source) == "includes":
            receivers.append(node_text(target, source))
    return receivers


def _first_parameter_type(function: Node, source: bytes) -> Optional[str]:
    parameters = function.child_by_field_name("parameters")
    if parameters is None:
        return None
    for parameter in parameters.named_children:
        annotation = parameter.child_by_field_name("type")
        if annotation is not None and annotation.named_children:
            return node_text(annotation.named_children[0], source)
    return None


class PropsExtractor(ModuleExtractor[ComponentProps]):
    """Reads ``*PropTypes`` and ``*EmitTypes`` tables from a definition file.

    Missing or malformed tables produce empty lists; fields that cannot be
    resolved are left unset.
    """

    def extract_module(self, module: SourceModule) -> ComponentProps:
        const_arrays = collect_const_arrays(module)
        props: List[PropDefinition] = []
        emits: List[EmitDefinition] = []
        for declaration in module.variables():
            name = declaration.name
            if name.endswith(PROPS_SUFFIX):
                table = object_literal(declaration.value)
                if table is not None:
                    props.extend(self._parse_props(table, module.source, const_arrays))
            elif name.lower().endswith(EMITS_SUFFIX):
                table = object_literal(declaration.value)
                if table is not None:
                    emits.extend(self._parse_emits(table, module.source))
        return ComponentProps(props=props, emits=emits)

    def _parse_props(
        self, table: Node, source: bytes, const_arrays: Dict[str, List[str]]
    ) -> List[PropDefinition]:
        props: List[PropDefinition] = []
        for entry in object_entries(table, source):
            if entry.kind != "property":
                continue
            options = object_literal(entry.value)
            if options is None:
                continue
            props.append(self._parse_prop(entry, options, source, const_arrays))
        return props

    def _parse_prop(
        self,
        entry: ObjectEntry,
        options: Node,
        source: bytes,
        const_arrays: Dict[str, List[str]],
    ) -> PropDefinition:
        fields = entry_map(object_entries(options, source))

        def field_node(name: str) -> Optional[Node]:
            found = fields.get(name)
            return found.value if found is not None and found.kind == "property" else None

        type_node = field_node("type")
        prop = PropDefinition(name=entry.key, type=resolve_type(type_node, source))
        prop.description = description_from_comments(entry.comments)

        default = field_node("default")
        if default is not None:
            prop.default = node_text(default, source)

        required = field_node("required")
        if required is not None:
            prop.required = node_text(required, source) == "true"

        validator = field_node("validator")
        if validator is not None:
            prop.validator = node_text(validator, source)

        if type_node is not None:
            for reference in _typeof_references(type_node, source):
                if reference in const_arrays:
                    prop.valid_values = list(const_arrays[reference])
                    if "typeof" in prop.type:
                        prop.type = "string"
                    break

        if validator is not None:
            for receiver in _includes_receivers(validator, source):
                if receiver in const_arrays:
                    prop.valid_values = list(const_arrays[receiver])
                    break

        return prop

    def _parse_emits(self, table: Node, source: bytes) -> List[EmitDefinition]:
        emits: List[EmitDefinition] = []
        for entry in object_entries(table, source):
            if entry.kind == "property":
                handler = entry.value
            elif entry.kind == "method":
                handler = entry.node
            else:
                continue
            payload_type = _first_parameter_type(handler, source) if handler is not None else None
            emits.append(EmitDefinition(name=entry.key, payload_type=payload_type))
        return emits


__all__ = [
    "PropsExtractor",
    "collect_const_arrays",
    "description_from_comments",
    "resolve_type",
]
