"""Tests for the exported type extractor."""

from __future__ import annotations

from compdoc.extractors.type_aliases import TypeAliasExtractor


def test_collects_exported_types_in_source_order() -> None:
    types = TypeAliasExtractor().extract(
        """
export const INPUT_TYPES = ['text', 'email'] as const;
const PRIVATE_VALUES = ['a'] as const;
export const notAnArray = { a: 1 } as const;
type Hidden = string;
export type InputType = (typeof INPUT_TYPES)[number];
export interface InputOption {
  label: string;
  value: string | number;
}
"""
    )
    assert [(item.name, item.kind) for item in types] == [
        ("INPUT_TYPES", "const-array"),
        ("InputType", "type-alias"),
        ("InputOption", "interface"),
    ]
    const_array, alias, interface = types
    assert const_array.definition == "const INPUT_TYPES = ['text', 'email'] as const"
    assert alias.definition == "export type InputType = (typeof INPUT_TYPES)[number];"
    assert interface.definition.startswith("export interface InputOption {")
    assert interface.definition.endswith("}")
    assert "value: string | number;" in interface.definition


def test_no_exports_yields_empty_list() -> None:
    assert TypeAliasExtractor().extract("type A = string;\nconst b = 1;\n") == []
