"""Storage helpers: the in-process parse cache and the manifest file."""

from .manifest_store import ManifestLoadError, ManifestStore
from .parse_cache import ParseCache

__all__ = ["ManifestLoadError", "ManifestStore", "ParseCache"]
