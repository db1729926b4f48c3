"""Persistence of the generated component manifest."""

from __future__ import annotations

import json
from pathlib import Path

from ..models import Manifest


class ManifestLoadError(RuntimeError):
    """Raised when the manifest file is missing or cannot be decoded."""


class ManifestStore:
    """Reads and writes the manifest JSON document at ``path``."""

    def __init__(self, path: Path) -> None:
        self.path = Path(path)

    def exists(self) -> bool:
        return self.path.is_file()

    def save(self, manifest: Manifest) -> int:
        """Write ``manifest`` compactly and return the number of bytes written."""
        payload = json.dumps(manifest.to_dict(), ensure_ascii=False, separators=(",", ":"))
        data = payload.encode("utf-8")
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_bytes(data)
        return len(data)

    def load(self) -> Manifest:
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError as exc:
            raise ManifestLoadError(
                f"Manifest not found at {self.path}. Run `compdoc generate` first."
            ) from exc
        except OSError as exc:
            raise ManifestLoadError(f"Cannot read manifest {self.path}: {exc}") from exc
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise ManifestLoadError(f"Manifest {self.path} is not valid JSON: {exc}") from exc
        if not isinstance(data, dict):
            raise ManifestLoadError(f"Manifest {self.path} must contain a JSON object")
        try:
            return Manifest.from_dict(data)
        except (KeyError, TypeError, ValueError) as exc:
            raise ManifestLoadError(f"Manifest {self.path} is malformed: {exc}") from exc


__all__ = ["ManifestLoadError", "ManifestStore"]
