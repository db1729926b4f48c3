"""TypeScript syntax access for the definition-file extractors.

Files are parsed with the tree-sitter TypeScript grammar. Extractors work on
the resulting nodes and read raw source text back from node byte ranges, so
default values, validators and type expressions are copied verbatim.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Tuple

import tree_sitter_typescript
from tree_sitter import Language, Node, Parser

TS_LANGUAGE = Language(tree_sitter_typescript.language_typescript())

_WRAPPER_TYPES = {
    "as_expression",
    "satisfies_expression",
    "parenthesized_expression",
    "non_null_expression",
}
_VARIABLE_TYPES = {"lexical_declaration", "variable_declaration"}
_FUNCTION_TYPES = {"function_declaration", "generator_function_declaration"}
_FUNCTION_VALUE_TYPES = {"arrow_function", "function_expression", "function"}

_parser: Optional[Parser] = None


def _get_parser() -> Parser:
    global _parser
    if _parser is None:
        _parser = Parser(TS_LANGUAGE)
    return _parser


def node_text(node: Node, source: bytes) -> str:
    return source[node.start_byte : node.end_byte].decode("utf-8", errors="ignore")


def descendants(node: Node, node_type: str) -> Iterator[Node]:
    """Yield every node of ``node_type`` under ``node`` (inclusive) in document order."""
    if node.type == node_type:
        yield node
    for child in node.children:
        yield from descendants(child, node_type)


def unwrap(node: Optional[Node]) -> Optional[Node]:
    """Strip ``as``/``satisfies`` assertions, parentheses and ``!`` from an expression."""
    while node is not None and node.type in _WRAPPER_TYPES:
        node = node.named_children[0] if node.named_children else None
    return node


def is_function(node: Optional[Node]) -> bool:
    return node is not None and node.type in _FUNCTION_VALUE_TYPES


@dataclass
class Declaration:
    """A top-level named binding.

    ``kind`` is ``variable``, ``type-alias``, ``interface`` or ``function``;
    ``text`` is the whole statement, including the ``export`` keyword.
    """

    kind: str
    name: str
    exported: bool
    text: str
    node: Node
    value: Optional[Node] = None


@dataclass
class SourceModule:
    """A parsed TypeScript file and its top-level declarations in source order."""

    text: str
    source: bytes
    root: Node
    declarations: List[Declaration] = field(default_factory=list)

    def text_of(self, node: Node) -> str:
        return node_text(node, self.source)

    def variables(self) -> Iterator[Declaration]:
        for declaration in self.declarations:
            if declaration.kind == "variable":
                yield declaration

    def variable(self, name: str) -> Optional[Declaration]:
        for declaration in self.variables():
            if declaration.name == name:
                return declaration
        return None


def _declarations(node: Node, statement: Node, exported: bool, source: bytes) -> Iterator[Declaration]:
    text = node_text(statement, source)
    if node.type in _VARIABLE_TYPES:
        for declarator in node.named_children:
            if declarator.type != "variable_declarator":
                continue
            name = declarator.child_by_field_name("name")
            if name is None or name.type != "identifier":
                continue
            yield Declaration(
                kind="variable",
                name=node_text(name, source),
                exported=exported,
                text=text,
                node=declarator,
                value=declarator.child_by_field_name("value"),
            )
        return
    if node.type == "type_alias_declaration":
        kind = "type-alias"
    elif node.type == "interface_declaration":
        kind = "interface"
    elif node.type in _FUNCTION_TYPES:
        kind = "function"
    else:
        return
    name = node.child_by_field_name("name")
    if name is not None:
        yield Declaration(kind=kind, name=node_text(name, source), exported=exported, text=text, node=node)


def parse_module(text: str) -> SourceModule:
    """Parse ``text`` and collect its top-level declarations."""
    source = text.encode("utf-8")
    tree = _get_parser().parse(source)
    module = SourceModule(text=text, source=source, root=tree.root_node)
    for statement in tree.root_node.named_children:
        if statement.type == "export_statement":
            declaration = statement.child_by_field_name("declaration")
            if declaration is not None:
                module.declarations.extend(_declarations(declaration, statement, True, source))
        else:
            module.declarations.extend(_declarations(statement, statement, False, source))
    return module


# ----------------------------------------------------------------------
# Literals


def string_value(node: Optional[Node], source: bytes) -> Optional[str]:
    """The contents of a quoted string literal, or ``None`` for anything else."""
    if node is None or node.type != "string":
        return None
    return node_text(node, source)[1:-1]


def object_literal(node: Optional[Node]) -> Optional[Node]:
    """The object literal behind ``node``, looking through assertions.

    Literals containing syntax errors are treated as absent.
    """
    node = unwrap(node)
    if node is None or node.type != "object" or node.has_error:
        return None
    return node


def const_array(node: Optional[Node], source: bytes) -> Optional[Node]:
    """The array of a ``[...] as const`` expression, or ``None`` for any other shape."""
    if node is None or node.type != "as_expression" or not node.named_children:
        return None
    if node_text(node.children[-1], source) != "const":
        return None
    array = node.named_children[0]
    return array if array.type == "array" else None


def string_elements(array: Node, source: bytes) -> List[str]:
    """The string-literal elements of an array literal, unquoted."""
    values: List[str] = []
    for element in array.named_children:
        value = string_value(element, source)
        if value is not None:
            values.append(value)
    return values


@dataclass
class ObjectEntry:
    """One member of an object literal.

    ``kind`` is ``property`` for ``key: value``, ``shorthand`` for ``key``,
    ``method`` for method shorthands and ``spread`` for ``...expr``. Only
    properties carry a ``value``. ``comments`` are the comments directly
    preceding the entry.
    """

    key: str
    kind: str
    node: Node
    key_node: Optional[Node] = None
    value: Optional[Node] = None
    comments: Tuple[str, ...] = ()

    @property
    def identifier_key(self) -> bool:
        return self.key_node is not None and self.key_node.type == "property_identifier"


def property_key(node: Node, source: bytes) -> str:
    quoted = string_value(node, source)
    return quoted if quoted is not None else node_text(node, source)


def object_entries(obj: Node, source: bytes) -> List[ObjectEntry]:
    """Split an object literal into its entries in source order."""
    entries: List[ObjectEntry] = []
    comments: List[str] = []
    for child in obj.named_children:
        if child.type == "comment":
            comments.append(node_text(child, source))
            continue
        if child.type == "pair":
            key_node = child.child_by_field_name("key")
            entry = ObjectEntry(
                key=property_key(key_node, source) if key_node is not None else "",
                kind="property",
                node=child,
                key_node=key_node,
                value=child.child_by_field_name("value"),
            )
        elif child.type == "shorthand_property_identifier":
            entry = ObjectEntry(key=node_text(child, source), kind="shorthand", node=child, key_node=child)
        elif child.type == "method_definition":
            key_node = child.child_by_field_name("name")
            entry = ObjectEntry(
                key=property_key(key_node, source) if key_node is not None else "",
                kind="method",
                node=child,
                key_node=key_node,
            )
        elif child.type == "spread_element":
            entry = ObjectEntry(key="", kind="spread", node=child)
        else:
            comments = []
            continue
        entry.comments = tuple(comments)
        entries.append(entry)
        comments = []
    return entries


def entry_map(entries: List[ObjectEntry]) -> Dict[str, ObjectEntry]:
    """Index entries by key; the first entry for a key wins."""
    mapping: Dict[str, ObjectEntry] = {}
    for entry in entries:
        if entry.key and entry.key not in mapping:
            mapping[entry.key] = entry
    return mapping


def table_entries(module: SourceModule, variable: str) -> List[ObjectEntry]:
    """Entries of the object literal assigned to ``variable``, or ``[]``."""
    declaration = module.variable(variable)
    obj = object_literal(declaration.value) if declaration is not None else None
    return object_entries(obj, module.source) if obj is not None else []


__all__ = [
    "Declaration",
    "ObjectEntry",
    "SourceModule",
    "TS_LANGUAGE",
    "const_array",
    "descendants",
    "entry_map",
    "is_function",
    "node_text",
    "object_entries",
    "object_literal",
    "parse_module",
    "property_key",
    "string_elements",
    "string_value",
    "table_entries",
    "unwrap",
]
