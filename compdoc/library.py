"""Access to the target component library on disk."""

from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Protocol

from .config import CompdocConfig
from .logging import get_logger

ENV_LIBRARY_ROOT = "COMPDOC_LIBRARY_ROOT"

logger = get_logger("library")


class LibraryNotFoundError(RuntimeError):
    """Raised when the target component library cannot be located."""


class SourceReader(Protocol):
    """File-system capabilities the extraction pipeline depends on."""

    def read_text(self, path: Path) -> str:
        """Return UTF-8 file contents, raising ``FileNotFoundError`` when absent."""

    def list_entries(self, path: Path) -> List[str]:
        """Return the entry names of a directory."""

    def is_directory(self, path: Path) -> bool:
        ...

    def exists(self, path: Path) -> bool:
        ...


class FileSystemSource:
    """``SourceReader`` backed by the local file system.

    Directory listings are sorted so manifests are reproducible across
    platforms.
    """

    def read_text(self, path: Path) -> str:
        return Path(path).read_text(encoding="utf-8")

    def list_entries(self, path: Path) -> List[str]:
        try:
            return sorted(os.listdir(path))
        except FileNotFoundError:
            return []

    def is_directory(self, path: Path) -> bool:
        return Path(path).is_dir()

    def exists(self, path: Path) -> bool:
        return Path(path).exists()


@dataclass(frozen=True)
class LibraryLayout:
    """Directory layout of a component library rooted at ``root``."""

    root: Path
    components_dir: str = "src/components"
    assets_dir: str = "src/assets"
    stores_dir: str = "src/stores"

    @classmethod
    def from_config(cls, root: Path, config: CompdocConfig) -> "LibraryLayout":
        library = config.library
        return cls(
            root=root,
            components_dir=library.components_dir,
            assets_dir=library.assets_dir,
            stores_dir=library.stores_dir,
        )

    @property
    def components(self) -> Path:
        return self.root / self.components_dir

    @property
    def assets(self) -> Path:
        return self.root / self.assets_dir

    @property
    def stores(self) -> Path:
        return self.root / self.stores_dir

    @property
    def package_json(self) -> Path:
        return self.root / "package.json"


def resolve_library_root(
    config: CompdocConfig,
    explicit: str | Path | None = None,
    *,
    start: Path | None = None,
) -> Path:
    """Locate the component library root.

    Resolution order: ``explicit`` argument, ``COMPDOC_LIBRARY_ROOT``, the
    ``library.root`` config entry, then ``node_modules/<package>`` in the
    working directory or any of its parents.
    """
    candidates: List[Path] = []
    if explicit:
        candidates.append(Path(explicit).expanduser())
    env_root = os.environ.get(ENV_LIBRARY_ROOT)
    if env_root:
        candidates.append(Path(env_root).expanduser())
    if config.library.root is not None:
        candidates.append(config.library.root)

    for candidate in candidates:
        if candidate.is_dir():
            return candidate.resolve()
        logger.debug("Library root candidate %s does not exist", candidate)
    if candidates:
        tried = ", ".join(str(candidate) for candidate in candidates)
        raise LibraryNotFoundError(f"Component library not found at: {tried}")

    package = config.library.package
    current = (start or Path.cwd()).resolve()
    for directory in (current, *current.parents):
        candidate = directory / "node_modules" / package
        if candidate.is_dir():
            return candidate.resolve()
    raise LibraryNotFoundError(
        f"Could not find the {package} package. Make sure it is installed "
        f"or set {ENV_LIBRARY_ROOT}."
    )


def read_library_version(layout: LibraryLayout, source: SourceReader) -> str:
    """Return the ``version`` field of the library's package.json, or ``unknown``."""
    try:
        data = json.loads(source.read_text(layout.package_json))
    except FileNotFoundError:
        return "unknown"
    except (OSError, json.JSONDecodeError) as exc:
        logger.warning("Could not read %s: %s", layout.package_json, exc)
        return "unknown"
    if not isinstance(data, dict):
        return "unknown"
    version = data.get("version")
    return str(version) if isinstance(version, str) and version else "unknown"


def optional_library_root(
    config: CompdocConfig, explicit: str | Path | None = None
) -> Optional[Path]:
    """Like :func:`resolve_library_root` but returns ``None`` instead of raising."""
    try:
        return resolve_library_root(config, explicit)
    except LibraryNotFoundError as exc:
        logger.debug("Library root unavailable: %s", exc)
        return None


__all__ = [
    "ENV_LIBRARY_ROOT",
    "FileSystemSource",
    "LibraryLayout",
    "LibraryNotFoundError",
    "SourceReader",
    "optional_library_root",
    "read_library_version",
    "resolve_library_root",
]
