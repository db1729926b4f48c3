"""Tests for compdoc.config."""

from __future__ import annotations

from pathlib import Path

import pytest

from compdoc.config import (
    ENV_MANIFEST_PATH,
    CompdocConfig,
    ConfigError,
    load_config,
    resolve_manifest_path,
)


def test_load_config_returns_defaults_when_missing(tmp_path: Path) -> None:
    config = load_config(tmp_path)

    assert isinstance(config, CompdocConfig)
    assert config.root == tmp_path.resolve()
    assert config.library.root is None
    assert config.library.package == "design-system-next"
    assert config.library.components_dir == "src/components"
    assert config.manifest.path == tmp_path.resolve() / "component-manifest.json"
    assert config.extraction.slot_strategy == "auto"
    assert config.extraction.composable_prefix == "use"
    assert config.extraction.categories == {}
    assert config.usage.tag_prefix == "Spr"
    assert config.server.port == 8000


def test_load_config_parses_expected_fields(tmp_path: Path) -> None:
    config_file = tmp_path / ".compdoc.yml"
    config_file.write_text(
        """
library:
  root: "vendor/ds"
  package: "@acme/ui"
  components_dir: "lib/components"
manifest:
  path: "build/manifest.json"
extraction:
  slot_strategy: "Scan"
  composable_prefix: "with"
  categories:
    Actions: [button, fab]
    media: carousel
usage:
  tag_prefix: ""
  import_package: "@acme/ui"
server:
  name: "acme-components"
  host: "0.0.0.0"
  port: "9001"
""",
        encoding="utf-8",
    )

    config = load_config(config_file)
    root = tmp_path.resolve()

    assert config.library.root == root / "vendor" / "ds"
    assert config.library.package == "@acme/ui"
    assert config.library.components_dir == "lib/components"
    assert config.library.assets_dir == "src/assets"
    assert config.manifest.path == root / "build" / "manifest.json"
    assert config.extraction.slot_strategy == "scan"
    assert config.extraction.composable_prefix == "with"
    assert config.extraction.categories == {"actions": ["button", "fab"], "media": ["carousel"]}
    assert config.usage.tag_prefix == ""
    assert config.usage.import_package == "@acme/ui"
    assert config.server.name == "acme-components"
    assert config.server.host == "0.0.0.0"
    assert config.server.port == 9001


def test_empty_config_file_uses_defaults(tmp_path: Path) -> None:
    (tmp_path / ".compdoc.yml").write_text("\n", encoding="utf-8")
    config = load_config(tmp_path)
    assert config.extraction.slot_strategy == "auto"


def test_invalid_yaml_raises_config_error(tmp_path: Path) -> None:
    (tmp_path / ".compdoc.yml").write_text("library: [unclosed\n", encoding="utf-8")
    with pytest.raises(ConfigError, match="Failed to parse"):
        load_config(tmp_path)


def test_non_mapping_root_raises_config_error(tmp_path: Path) -> None:
    (tmp_path / ".compdoc.yml").write_text("- just\n- a list\n", encoding="utf-8")
    with pytest.raises(ConfigError, match="mapping"):
        load_config(tmp_path)


def test_unknown_slot_strategy_rejected(tmp_path: Path) -> None:
    (tmp_path / ".compdoc.yml").write_text(
        "extraction:\n  slot_strategy: regex\n", encoding="utf-8"
    )
    with pytest.raises(ConfigError, match="slot_strategy"):
        load_config(tmp_path)


def test_resolve_manifest_path_precedence(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.delenv(ENV_MANIFEST_PATH, raising=False)
    config = load_config(tmp_path)
    assert resolve_manifest_path(config) == config.manifest.path

    monkeypatch.setenv(ENV_MANIFEST_PATH, str(tmp_path / "env.json"))
    assert resolve_manifest_path(config) == (tmp_path / "env.json").resolve()

    explicit = tmp_path / "explicit.json"
    assert resolve_manifest_path(config, explicit) == explicit.resolve()
