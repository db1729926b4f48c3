"""Tests for the tree-sitter TypeScript helpers."""

from __future__ import annotations

from compdoc.extractors.typescript import (
    const_array,
    entry_map,
    object_entries,
    object_literal,
    parse_module,
    string_elements,
    table_entries,
)


def test_parse_module_classifies_declarations_without_semicolons() -> None:
    module = parse_module(
        """
export const sizes = ['sm', 'md'] as const
type Local = string
export interface Props {
  size: string
}
export function helper() {
  return 1
}
"""
    )
    summary = [(d.kind, d.name, d.exported) for d in module.declarations]
    assert summary == [
        ("variable", "sizes", True),
        ("type-alias", "Local", False),
        ("interface", "Props", True),
        ("function", "helper", True),
    ]
    assert module.declarations[2].text.startswith("export interface Props {")


def test_every_declarator_of_a_statement_is_listed() -> None:
    module = parse_module("const a = 1, b = { x: 1 };\nlet { c } = obj;\n")
    assert [d.name for d in module.variables()] == ["a", "b"]
    assert module.variable("b") is not None
    assert module.variable("c") is None


def test_const_array_requires_as_const() -> None:
    module = parse_module(
        "const A = ['x', \"y\", 3] as const;\nconst B = ['x'];\nconst C = ['x'] as string[];\n"
    )
    a, b, c = (module.variable(name) for name in "ABC")
    array = const_array(a.value, module.source)
    assert array is not None
    assert string_elements(array, module.source) == ["x", "y"]
    assert const_array(b.value, module.source) is None
    assert const_array(c.value, module.source) is None


def test_object_entries_keep_leading_comments_and_kinds() -> None:
    module = parse_module(
        """
const table = {
  /** first */
  'quoted-key': 1,
  // second
  bare: { nested: true },
  shorthand,
  method() { return 1 },
  ...rest,
  // trailing comment with no entry
};
"""
    )
    entries = table_entries(module, "table")
    assert [(entry.key, entry.kind) for entry in entries] == [
        ("quoted-key", "property"),
        ("bare", "property"),
        ("shorthand", "shorthand"),
        ("method", "method"),
        ("", "spread"),
    ]
    assert entries[0].comments == ("/** first */",)
    assert entries[1].comments == ("// second",)
    assert entries[2].comments == ()
    assert not entries[0].identifier_key
    assert entries[1].identifier_key
    assert module.text_of(entries[1].value) == "{ nested: true }"


def test_object_literal_looks_through_assertions() -> None:
    module = parse_module("export const t = { a: 1 } satisfies Record<string, number>;\n")
    obj = object_literal(module.variable("t").value)
    assert obj is not None
    assert list(entry_map(object_entries(obj, module.source))) == ["a"]


def test_object_with_syntax_error_is_treated_as_absent() -> None:
    module = parse_module("const broken = {\n  a: { b: 1,\n  c: 'x'\n")
    assert table_entries(module, "broken") == []


def test_first_duplicate_key_wins_in_entry_map() -> None:
    module = parse_module("const t = { a: 1, a: 2 };\n")
    mapping = entry_map(table_entries(module, "t"))
    assert module.text_of(mapping["a"].value) == "1"


def test_non_ascii_text_keeps_byte_ranges_aligned() -> None:
    module = parse_module("const t = { label: 'héllo ✓', next: 'ok' };\n")
    entries = table_entries(module, "t")
    assert [module.text_of(entry.value) for entry in entries] == ["'héllo ✓'", "'ok'"]
