"""Shared test fixtures."""

from __future__ import annotations

import errno
import json
from collections.abc import Callable, Iterator
from pathlib import Path
from unittest.mock import patch

import pytest

from monorepo_builder.models import BuildConfig

WriteProject = Callable[..., Path]


@pytest.fixture
def tmp_path(tmp_path_factory: pytest.TempPathFactory) -> Path:
    """Per-test temp dir whose name does not embed the test's name."""
    return tmp_path_factory.mktemp("repo")


@pytest.fixture
def write_project(tmp_path: Path) -> WriteProject:
    """Return a helper that creates <tmp_path>/<folder>/package.json."""

    def _write(
        folder: str, name: str, dependencies: dict[str, str] | None = None
    ) -> Path:
        project_dir = tmp_path / folder
        project_dir.mkdir(parents=True, exist_ok=True)
        manifest: dict[str, object] = {"name": name, "version": "1.0.0"}
        if dependencies is not None:
            manifest["dependencies"] = dependencies
        (project_dir / "package.json").write_text(json.dumps(manifest))
        return project_dir

    return _write


@pytest.fixture
def chain_repo(tmp_path: Path, write_project: WriteProject) -> Path:
    """Monorepo where c depends on b and b depends on a (plus external deps)."""
    write_project("c", "c", {"b": "^1.0.0", "lodash": "^4.0.0"})
    write_project("a", "a")
    write_project("b", "b", {"a": "^1.0.0"})
    return tmp_path


@pytest.fixture
def scoped_repo(tmp_path: Path, write_project: WriteProject) -> Path:
    """Monorepo using the "org" scope, with one out-of-scope package."""
    write_project("x", "org/x", {"org/y": "*", "left-pad": "*"})
    write_project("y", "org/y")
    write_project("tool", "tool", {"org/x": "*"})
    return tmp_path


@pytest.fixture
def config(tmp_path: Path) -> BuildConfig:
    """Unscoped configuration rooted at tmp_path."""
    return BuildConfig(root_path=tmp_path)


@pytest.fixture
def locked_dir(write_project: WriteProject) -> Iterator[Path]:
    """A package directory whose contents cannot be accessed (EACCES).

    Permissions are simulated so the fixture also works when tests run as root.
    """
    folder = write_project("locked", "locked")
    real_is_file = Path.is_file
    real_read_text = Path.read_text

    def _check(path: Path) -> None:
        if path.parent.name == folder.name:
            raise PermissionError(errno.EACCES, "Permission denied", str(path))

    def is_file(self: Path) -> bool:
        _check(self)
        return real_is_file(self)

    def read_text(self: Path, *args, **kwargs) -> str:
        _check(self)
        return real_read_text(self, *args, **kwargs)

    with (
        patch.object(Path, "is_file", autospec=True, side_effect=is_file),
        patch.object(Path, "read_text", autospec=True, side_effect=read_text),
    ):
        yield folder
