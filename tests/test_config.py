"""Tests for monorepo_builder.config."""

from __future__ import annotations

from pathlib import Path

import pytest

from monorepo_builder.config import CONFIG_FILENAME, ConfigError, load_config


class TestLoadConfig:
    def test_defaults_without_file(self, tmp_path: Path) -> None:
        config = load_config(tmp_path)
        assert config.root_path == tmp_path.resolve()
        assert config.scope == ""
        assert config.registry is None
        assert config.link is False
        assert config.manifest_name == "package.json"

    def test_reads_file(self, tmp_path: Path) -> None:
        (tmp_path / CONFIG_FILENAME).write_text(
            'scope = "org"\n'
            'registry = "https://npm.example.com"\n'
            "link = true\n"
            'manifest = "manifest.json"\n'
        )
        config = load_config(tmp_path)
        assert config.scope == "org"
        assert config.registry == "https://npm.example.com"
        assert config.link is True
        assert config.manifest_name == "manifest.json"

    def test_overrides_win_over_file(self, tmp_path: Path) -> None:
        (tmp_path / CONFIG_FILENAME).write_text('scope = "org"\nlink = true\n')
        config = load_config(tmp_path, scope="other", link=False)
        assert config.scope == "other"
        assert config.link is False

    def test_none_overrides_are_ignored(self, tmp_path: Path) -> None:
        (tmp_path / CONFIG_FILENAME).write_text('scope = "org"\n')
        config = load_config(tmp_path, scope=None, registry=None)
        assert config.scope == "org"

    def test_unknown_key_rejected(self, tmp_path: Path) -> None:
        (tmp_path / CONFIG_FILENAME).write_text('scpoe = "org"\n')
        with pytest.raises(ConfigError, match="scpoe"):
            load_config(tmp_path)

    def test_malformed_toml(self, tmp_path: Path) -> None:
        (tmp_path / CONFIG_FILENAME).write_text("scope = \n")
        with pytest.raises(ConfigError, match="Cannot read"):
            load_config(tmp_path)

    def test_invalid_value(self, tmp_path: Path) -> None:
        (tmp_path / CONFIG_FILENAME).write_text("link = [1, 2]\n")
        with pytest.raises(ConfigError, match="Invalid configuration"):
            load_config(tmp_path)
