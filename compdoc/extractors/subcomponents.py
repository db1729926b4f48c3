"""Discovery of sub-components living inside a component directory.

Three directory layouts are recognised, checked in order for each entry:

* ``NESTED_OWN_FILE``: a subdirectory ``x/`` holding ``x.ts`` or ``x.vue``.
* ``NESTED_FOREIGN_FILES``: a subdirectory without a same-named file but with
  other ``.vue`` files; each of them is a sub-component.
* ``FLAT_FILE``: a ``y.vue`` next to the component's own files.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import List, Optional

from ..library import SourceReader


class SubComponentLayout(Enum):
    NESTED_OWN_FILE = "nested-own-file"
    NESTED_FOREIGN_FILES = "nested-foreign-files"
    FLAT_FILE = "flat-file"


@dataclass(frozen=True)
class SubComponentMeta:
    """A discovered sub-component and the files it was matched from."""

    name: str
    pascal_name: str
    has_props: bool
    layout: SubComponentLayout
    definition_path: Optional[Path] = None
    descriptor_path: Optional[Path] = None


def to_pascal_case(kebab: str) -> str:
    return "".join(part[:1].upper() + part[1:] for part in kebab.split("-"))


def to_camel_case(kebab: str) -> str:
    pascal = to_pascal_case(kebab)
    return pascal[:1].lower() + pascal[1:]


def _existing(path: Path, source: SourceReader) -> Optional[Path]:
    return path if source.exists(path) else None


def resolve_subcomponent_path(
    component_dir: Path, name: str, extension: str, source: SourceReader
) -> Optional[Path]:
    """Return ``<dir>/<name>/<name>.<ext>`` or ``<dir>/<name>.<ext>``, nested first."""
    nested = component_dir / name / f"{name}.{extension}"
    if source.exists(nested):
        return nested
    return _existing(component_dir / f"{name}.{extension}", source)


def is_nested_own_file(entry_path: Path, source: SourceReader) -> bool:
    name = entry_path.name
    return source.exists(entry_path / f"{name}.ts") or source.exists(entry_path / f"{name}.vue")


def nested_foreign_files(entry_path: Path, source: SourceReader) -> List[str]:
    """Names of the ``.vue`` files inside a subdirectory, in listing order."""
    return [entry for entry in source.list_entries(entry_path) if entry.endswith(".vue")]


def is_flat_file(entry: str, component_name: str) -> bool:
    return entry.endswith(".vue") and entry[: -len(".vue")] != component_name


def discover_subcomponents(
    component_dir: Path, component_name: str, source: SourceReader
) -> List[SubComponentMeta]:
    """Return the sub-components of ``component_dir`` in directory-listing order."""
    component_dir = Path(component_dir)
    subs: List[SubComponentMeta] = []
    if not source.is_directory(component_dir):
        return subs

    for entry in source.list_entries(component_dir):
        entry_path = component_dir / entry
        if source.is_directory(entry_path):
            if is_nested_own_file(entry_path, source):
                subs.append(
                    SubComponentMeta(
                        name=entry,
                        pascal_name=to_pascal_case(entry),
                        has_props=source.exists(entry_path / f"{entry}.ts"),
                        layout=SubComponentLayout.NESTED_OWN_FILE,
                        definition_path=resolve_subcomponent_path(component_dir, entry, "ts", source),
                        descriptor_path=resolve_subcomponent_path(component_dir, entry, "vue", source),
                    )
                )
                continue
            for vue_file in nested_foreign_files(entry_path, source):
                stem = vue_file[: -len(".vue")]
                definition = _existing(entry_path / f"{stem}.ts", source)
                subs.append(
                    SubComponentMeta(
                        name=stem,
                        pascal_name=stem,
                        has_props=definition is not None,
                        layout=SubComponentLayout.NESTED_FOREIGN_FILES,
                        definition_path=definition,
                        descriptor_path=entry_path / vue_file,
                    )
                )
        elif is_flat_file(entry, component_name):
            stem = entry[: -len(".vue")]
            subs.append(
                SubComponentMeta(
                    name=stem,
                    pascal_name=to_pascal_case(stem),
                    has_props=source.exists(component_dir / f"{stem}.ts"),
                    layout=SubComponentLayout.FLAT_FILE,
                    definition_path=resolve_subcomponent_path(component_dir, stem, "ts", source),
                    descriptor_path=resolve_subcomponent_path(component_dir, stem, "vue", source),
                )
            )
    return subs


__all__ = [
    "SubComponentLayout",
    "SubComponentMeta",
    "discover_subcomponents",
    "is_flat_file",
    "is_nested_own_file",
    "nested_foreign_files",
    "resolve_subcomponent_path",
    "to_camel_case",
    "to_pascal_case",
]
