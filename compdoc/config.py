"""Configuration loading for compdoc (.compdoc.yml)."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

CONFIG_FILENAME = ".compdoc.yml"
ENV_MANIFEST_PATH = "COMPDOC_MANIFEST"

SLOT_STRATEGIES = ("auto", "tree-sitter", "scan")


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class LibraryConfig:
    """Where the component library lives and how it is laid out."""

    root: Optional[Path] = None
    package: str = "design-system-next"
    components_dir: str = "src/components"
    assets_dir: str = "src/assets"
    stores_dir: str = "src/stores"


@dataclass
class ManifestConfig:
    path: Path = Path("component-manifest.json")


@dataclass
class ExtractionConfig:
    """Extractor tuning knobs."""

    slot_strategy: str = "auto"
    composable_prefix: str = "use"
    categories: Dict[str, List[str]] = field(default_factory=dict)


@dataclass
class UsageConfig:
    """Settings for generated usage examples."""

    tag_prefix: str = "Spr"
    import_package: str = "design-system-next"


@dataclass
class ServerConfig:
    name: str = "compdoc"
    host: str = "127.0.0.1"
    port: int = 8000


@dataclass
class CompdocConfig:
    """Represents the settings defined in .compdoc.yml."""

    root: Path
    library: LibraryConfig = field(default_factory=LibraryConfig)
    manifest: ManifestConfig = field(default_factory=ManifestConfig)
    extraction: ExtractionConfig = field(default_factory=ExtractionConfig)
    usage: UsageConfig = field(default_factory=UsageConfig)
    server: ServerConfig = field(default_factory=ServerConfig)


def load_config(config_path: Path | None = None) -> CompdocConfig:
    """Load configuration from disk, falling back to defaults when absent."""
    config_file = _resolve_config_path(config_path or Path.cwd())
    root = config_file.parent.resolve()
    defaults = CompdocConfig(root=root)
    defaults.manifest.path = root / defaults.manifest.path

    if not config_file.exists():
        return defaults

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    library_data = _as_dict(data.get("library"))
    library = LibraryConfig()
    if library_data:
        root_str = _as_str(library_data.get("root"))
        library.root = (root / root_str).resolve() if root_str else None
        library.package = _as_str(library_data.get("package")) or library.package
        library.components_dir = (
            _as_str(library_data.get("components_dir")) or library.components_dir
        )
        library.assets_dir = _as_str(library_data.get("assets_dir")) or library.assets_dir
        library.stores_dir = _as_str(library_data.get("stores_dir")) or library.stores_dir

    manifest_data = _as_dict(data.get("manifest"))
    manifest = ManifestConfig(path=defaults.manifest.path)
    manifest_path = _as_str(manifest_data.get("path")) if manifest_data else None
    if manifest_path:
        manifest.path = root / manifest_path

    extraction_data = _as_dict(data.get("extraction"))
    extraction = ExtractionConfig()
    if extraction_data:
        strategy = _as_str(extraction_data.get("slot_strategy"))
        if strategy:
            strategy = strategy.lower()
            if strategy not in SLOT_STRATEGIES:
                allowed = ", ".join(SLOT_STRATEGIES)
                raise ConfigError(f"extraction.slot_strategy must be one of: {allowed}")
            extraction.slot_strategy = strategy
        extraction.composable_prefix = (
            _as_str(extraction_data.get("composable_prefix")) or extraction.composable_prefix
        )
        categories = _as_dict(extraction_data.get("categories"))
        extraction.categories = {
            str(category).lower(): _as_str_list(names) for category, names in categories.items()
        }

    usage_data = _as_dict(data.get("usage"))
    usage = UsageConfig()
    if usage_data:
        prefix = usage_data.get("tag_prefix")
        if isinstance(prefix, str):
            usage.tag_prefix = prefix
        usage.import_package = _as_str(usage_data.get("import_package")) or usage.import_package

    server_data = _as_dict(data.get("server"))
    server = ServerConfig()
    if server_data:
        server.name = _as_str(server_data.get("name")) or server.name
        server.host = _as_str(server_data.get("host")) or server.host
        port = _as_int(server_data.get("port"))
        if port is not None:
            server.port = port

    return CompdocConfig(
        root=root,
        library=library,
        manifest=manifest,
        extraction=extraction,
        usage=usage,
        server=server,
    )


def resolve_manifest_path(config: CompdocConfig, explicit: str | Path | None = None) -> Path:
    """Return the manifest location: argument, then ``COMPDOC_MANIFEST``, then config."""
    if explicit:
        return Path(explicit).expanduser().resolve()
    env_path = os.environ.get(ENV_MANIFEST_PATH)
    if env_path:
        return Path(env_path).expanduser().resolve()
    return config.manifest.path


def _resolve_config_path(config_path: Path) -> Path:
    config_path = Path(config_path).expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded if loaded is not None else {}


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    if isinstance(value, bool):
        return None
    return str(value) if isinstance(value, (str, int, float)) else None


def _as_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError:
            return None
    return None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float))]
    return []


__all__ = [
    "CONFIG_FILENAME",
    "CompdocConfig",
    "ConfigError",
    "ENV_MANIFEST_PATH",
    "ExtractionConfig",
    "LibraryConfig",
    "ManifestConfig",
    "SLOT_STRATEGIES",
    "ServerConfig",
    "UsageConfig",
    "load_config",
    "resolve_manifest_path",
]
