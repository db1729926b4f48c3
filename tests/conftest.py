from __future__ import annotations

from pathlib import Path

import pytest

from compdoc.models import Manifest
from compdoc.stores import ParseCache
from tests._fixtures.library_builder import LibraryBuilder
from tests._fixtures.manifest_builder import sample_manifest


@pytest.fixture
def library_builder(tmp_path: Path) -> LibraryBuilder:
    """Provide a reusable component-library builder rooted at the pytest tmp_path."""
    return LibraryBuilder(tmp_path)


@pytest.fixture
def parse_cache() -> ParseCache:
    return ParseCache()


@pytest.fixture
def manifest() -> Manifest:
    return sample_manifest()
