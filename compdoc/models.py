"""Core data models shared across compdoc components.

Every record serializes to the camelCase wire names consumed by the query
layer. Optional fields that were never resolved are omitted from the
serialized form rather than written as ``null``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional


def _optional(payload: Dict[str, Any], key: str, value: Any) -> None:
    if value is not None:
        payload[key] = value


@dataclass
class PropDefinition:
    """A single declared component property."""

    name: str
    type: str = "unknown"
    default: Optional[str] = None
    description: Optional[str] = None
    valid_values: Optional[List[str]] = None
    required: Optional[bool] = None
    validator: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"name": self.name, "type": self.type}
        _optional(payload, "defaultValueText", self.default)
        _optional(payload, "description", self.description)
        if self.valid_values:
            payload["validValues"] = list(self.valid_values)
        _optional(payload, "required", self.required)
        _optional(payload, "validatorText", self.validator)
        return payload

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "PropDefinition":
        valid_values = payload.get("validValues")
        return cls(
            name=str(payload["name"]),
            type=str(payload.get("type") or "unknown"),
            default=payload.get("defaultValueText"),
            description=payload.get("description"),
            valid_values=list(valid_values) if valid_values else None,
            required=payload.get("required"),
            validator=payload.get("validatorText"),
        )


@dataclass
class EmitDefinition:
    """An event emitted by a component."""

    name: str
    payload_type: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"name": self.name}
        _optional(payload, "payloadType", self.payload_type)
        return payload

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "EmitDefinition":
        return cls(name=str(payload["name"]), payload_type=payload.get("payloadType"))


@dataclass
class SlotDefinition:
    """A named or scoped extension point declared in a component template."""

    name: str
    scoped: bool = False
    scope_props: Optional[List[str]] = None

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"name": self.name, "scoped": self.scoped}
        if self.scoped and self.scope_props:
            payload["scopeProps"] = list(self.scope_props)
        return payload

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "SlotDefinition":
        scope_props = payload.get("scopeProps")
        return cls(
            name=str(payload["name"]),
            scoped=bool(payload.get("scoped", False)),
            scope_props=list(scope_props) if scope_props else None,
        )


@dataclass
class TypeDefinition:
    """An exported type alias, interface or literal-array constant."""

    name: str
    kind: str
    definition: str

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "kind": self.kind, "definition": self.definition}

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "TypeDefinition":
        return cls(
            name=str(payload["name"]),
            kind=str(payload["kind"]),
            definition=str(payload["definition"]),
        )


@dataclass
class ComposableInfo:
    """Signature and exposed members of a composable hook."""

    name: str
    file_name: str
    signature: str = "()"
    returned_members: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "fileName": self.file_name,
            "signature": self.signature,
            "returnedMembers": list(self.returned_members),
        }

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "ComposableInfo":
        return cls(
            name=str(payload["name"]),
            file_name=str(payload["fileName"]),
            signature=str(payload.get("signature", "()")),
            returned_members=list(payload.get("returnedMembers") or []),
        )


@dataclass
class ComponentProps:
    """Property and emit declarations parsed from one definition file."""

    props: List[PropDefinition] = field(default_factory=list)
    emits: List[EmitDefinition] = field(default_factory=list)


@dataclass
class SubComponentManifest:
    """Extracted metadata for a sub-component nested under a component."""

    name: str
    pascal_name: str
    has_props: bool = False
    props: List[PropDefinition] = field(default_factory=list)
    emits: List[EmitDefinition] = field(default_factory=list)
    slots: List[SlotDefinition] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "pascalName": self.pascal_name,
            "hasProps": self.has_props,
            "props": [prop.to_dict() for prop in self.props],
            "emits": [emit.to_dict() for emit in self.emits],
            "slots": [slot.to_dict() for slot in self.slots],
        }

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "SubComponentManifest":
        return cls(
            name=str(payload["name"]),
            pascal_name=str(payload.get("pascalName", payload["name"])),
            has_props=bool(payload.get("hasProps", False)),
            props=[PropDefinition.from_dict(item) for item in payload.get("props") or []],
            emits=[EmitDefinition.from_dict(item) for item in payload.get("emits") or []],
            slots=[SlotDefinition.from_dict(item) for item in payload.get("slots") or []],
        )


@dataclass
class ComponentManifest:
    """Everything extracted for one top-level component directory."""

    name: str
    pascal_name: str
    category: str = "other"
    props: List[PropDefinition] = field(default_factory=list)
    emits: List[EmitDefinition] = field(default_factory=list)
    slots: List[SlotDefinition] = field(default_factory=list)
    types: List[TypeDefinition] = field(default_factory=list)
    composables: List[ComposableInfo] = field(default_factory=list)
    sub_components: List[SubComponentManifest] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "pascalName": self.pascal_name,
            "category": self.category,
            "props": [prop.to_dict() for prop in self.props],
            "emits": [emit.to_dict() for emit in self.emits],
            "slots": [slot.to_dict() for slot in self.slots],
            "types": [item.to_dict() for item in self.types],
            "composables": [item.to_dict() for item in self.composables],
            "subComponents": [sub.to_dict() for sub in self.sub_components],
        }

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "ComponentManifest":
        return cls(
            name=str(payload["name"]),
            pascal_name=str(payload.get("pascalName", payload["name"])),
            category=str(payload.get("category", "other")),
            props=[PropDefinition.from_dict(item) for item in payload.get("props") or []],
            emits=[EmitDefinition.from_dict(item) for item in payload.get("emits") or []],
            slots=[SlotDefinition.from_dict(item) for item in payload.get("slots") or []],
            types=[TypeDefinition.from_dict(item) for item in payload.get("types") or []],
            composables=[
                ComposableInfo.from_dict(item) for item in payload.get("composables") or []
            ],
            sub_components=[
                SubComponentManifest.from_dict(item)
                for item in payload.get("subComponents") or []
            ],
        )


@dataclass
class ColorToken:
    name: str
    shades: Dict[int, str] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "shades": {str(k): v for k, v in self.shades.items()}}

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "ColorToken":
        shades = payload.get("shades") or {}
        return cls(
            name=str(payload["name"]),
            shades={int(key): str(value) for key, value in shades.items()},
        )


@dataclass
class ValueToken:
    """A named scalar token (spacing, border radius, max width)."""

    name: str
    value: str

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "value": self.value}

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "ValueToken":
        return cls(name=str(payload["name"]), value=str(payload["value"]))


@dataclass
class UtilityToken:
    name: str
    properties: Dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "properties": dict(self.properties)}

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "UtilityToken":
        return cls(
            name=str(payload["name"]),
            properties={str(k): str(v) for k, v in (payload.get("properties") or {}).items()},
        )


@dataclass
class DesignTokens:
    colors: List[ColorToken] = field(default_factory=list)
    spacing: List[ValueToken] = field(default_factory=list)
    border_radius: List[ValueToken] = field(default_factory=list)
    max_width: List[ValueToken] = field(default_factory=list)
    utilities: List[UtilityToken] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "colors": [token.to_dict() for token in self.colors],
            "spacing": [token.to_dict() for token in self.spacing],
            "borderRadius": [token.to_dict() for token in self.border_radius],
            "maxWidth": [token.to_dict() for token in self.max_width],
            "utilities": [token.to_dict() for token in self.utilities],
        }

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "DesignTokens":
        return cls(
            colors=[ColorToken.from_dict(item) for item in payload.get("colors") or []],
            spacing=[ValueToken.from_dict(item) for item in payload.get("spacing") or []],
            border_radius=[
                ValueToken.from_dict(item) for item in payload.get("borderRadius") or []
            ],
            max_width=[ValueToken.from_dict(item) for item in payload.get("maxWidth") or []],
            utilities=[UtilityToken.from_dict(item) for item in payload.get("utilities") or []],
        )


@dataclass
class StoreManifest:
    name: str
    file_name: str
    source: str

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "fileName": self.file_name, "source": self.source}

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "StoreManifest":
        return cls(
            name=str(payload["name"]),
            file_name=str(payload["fileName"]),
            source=str(payload.get("source", "")),
        )


@dataclass
class AssetEntry:
    name: str
    path: str
    type: str

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "path": self.path, "type": self.type}

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "AssetEntry":
        return cls(name=str(payload["name"]), path=str(payload["path"]), type=str(payload["type"]))


@dataclass
class AssetCatalog:
    images: List[AssetEntry] = field(default_factory=list)
    empty_states: List[AssetEntry] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "images": [entry.to_dict() for entry in self.images],
            "emptyStates": [entry.to_dict() for entry in self.empty_states],
        }

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "AssetCatalog":
        return cls(
            images=[AssetEntry.from_dict(item) for item in payload.get("images") or []],
            empty_states=[
                AssetEntry.from_dict(item) for item in payload.get("emptyStates") or []
            ],
        )


MANIFEST_VERSION = "1.0.0"


@dataclass
class Manifest:
    """Root document produced by the assembler and served by the query layer."""

    generated_at: str
    source_library_version: str = "unknown"
    components: List[ComponentManifest] = field(default_factory=list)
    tokens: DesignTokens = field(default_factory=DesignTokens)
    stores: List[StoreManifest] = field(default_factory=list)
    assets: AssetCatalog = field(default_factory=AssetCatalog)
    version: str = MANIFEST_VERSION

    def to_dict(self) -> Dict[str, Any]:
        return {
            "version": self.version,
            "generatedAt": self.generated_at,
            "sourceLibraryVersion": self.source_library_version,
            "components": [component.to_dict() for component in self.components],
            "tokens": self.tokens.to_dict(),
            "stores": [store.to_dict() for store in self.stores],
            "assets": self.assets.to_dict(),
        }

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "Manifest":
        return cls(
            version=str(payload.get("version", MANIFEST_VERSION)),
            generated_at=str(payload.get("generatedAt", "")),
            source_library_version=str(payload.get("sourceLibraryVersion", "unknown")),
            components=[
                ComponentManifest.from_dict(item) for item in payload.get("components") or []
            ],
            tokens=DesignTokens.from_dict(payload.get("tokens") or {}),
            stores=[StoreManifest.from_dict(item) for item in payload.get("stores") or []],
            assets=AssetCatalog.from_dict(payload.get("assets") or {}),
        )


__all__ = [
    "AssetCatalog",
    "AssetEntry",
    "ColorToken",
    "ComponentManifest",
    "ComponentProps",
    "ComposableInfo",
    "DesignTokens",
    "EmitDefinition",
    "MANIFEST_VERSION",
    "Manifest",
    "PropDefinition",
    "SlotDefinition",
    "StoreManifest",
    "SubComponentManifest",
    "TypeDefinition",
    "UtilityToken",
    "ValueToken",
]
