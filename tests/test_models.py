"""Tests for monorepo_builder.models."""

from __future__ import annotations

from pathlib import Path

from monorepo_builder.models import BuildConfig, PackageManifest, ProjectGraph


class TestPackageManifest:
    def test_create_with_required_fields(self) -> None:
        manifest = PackageManifest(name="org/x")
        assert manifest.dependencies == {}

    def test_ignores_unrelated_keys(self) -> None:
        manifest = PackageManifest.model_validate(
            {"name": "a", "version": "1.0.0", "scripts": {"test": "jest"}}
        )
        assert manifest.name == "a"


class TestBuildConfig:
    def test_root_path_made_absolute(self, tmp_path: Path, monkeypatch) -> None:
        monkeypatch.chdir(tmp_path)
        config = BuildConfig(root_path=Path("."))
        assert config.root_path == tmp_path.resolve()
        assert config.root_path.is_absolute()


class TestProjectGraph:
    def test_instances_do_not_share_state(self) -> None:
        first, second = ProjectGraph(), ProjectGraph()
        first.graph.add_vertex("a")
        first.mapping["a"] = "/a/package.json"
        assert "a" not in second.graph
        assert second.mapping == {}
