"""package.json discovery and reading utilities.

Finds package directories under the monorepo root and parses their
manifests into PackageManifest models. Only the name and the keys of the
dependencies table are used downstream.
"""

from __future__ import annotations

import json
from pathlib import Path

from pydantic import ValidationError

from .models import PackageManifest

MANIFEST_NAME = "package.json"


class ManifestError(Exception):
    """A package manifest could not be read or does not describe a package.

    Attributes:
        path: Path of the offending manifest.
        reason: Human-readable cause.
    """

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"{path}: {reason}")


def list_projects(root: Path, manifest_name: str = MANIFEST_NAME) -> dict[str, Path]:
    """Find package directories directly under ``root``.

    A directory counts as a package when it contains a regular manifest
    file; anything else is skipped. Results are sorted by directory name so
    discovery order is stable between runs.

    Returns:
        Map of directory name → absolute directory path.
    """
    projects: dict[str, Path] = {}
    for entry in sorted(root.iterdir(), key=lambda p: p.name):
        try:
            is_project = entry.is_dir() and (entry / manifest_name).is_file()
        except OSError:
            # Unreadable directories (e.g. no traverse permission) are not packages
            continue
        if is_project:
            projects[entry.name] = entry.resolve()
    return projects


def load_manifest(path: Path) -> PackageManifest:
    """Load and validate a package.json file.

    Raises:
        ManifestError: If the file is missing or unreadable, is not UTF-8
            JSON, or lacks a string ``name``.
    """
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except OSError as exc:
        reason = f"cannot read manifest ({exc.strerror or exc})"
        raise ManifestError(path, reason) from exc
    except UnicodeDecodeError as exc:
        raise ManifestError(path, f"not valid UTF-8: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise ManifestError(path, f"invalid JSON: {exc}") from exc

    try:
        return PackageManifest.model_validate(data)
    except ValidationError as exc:
        errors = ", ".join(
            f"{'.'.join(str(p) for p in err['loc']) or '<root>'}: {err['msg']}"
            for err in exc.errors()
        )
        raise ManifestError(path, f"invalid manifest ({errors})") from exc


def in_scope(name: str, scope: str) -> bool:
    """Check whether a package name belongs to ``scope`` ("{scope}/...")."""
    return bool(scope) and name.startswith(f"{scope}/")


def scoped_dependencies(manifest: PackageManifest, scope: str) -> list[str]:
    """Dependency names of ``manifest`` that belong to ``scope``.

    Without a scope there is nothing to match against, so the result is empty.
    """
    return [dep for dep in manifest.dependencies if in_scope(dep, scope)]
