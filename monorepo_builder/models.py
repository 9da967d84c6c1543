"""Data models for monorepo-builder.

These Pydantic models represent the core data structures passed between
discovery, graph building, scheduling and execution.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .graph import Digraph


class PackageManifest(BaseModel):
    """The parts of a package.json the scheduler cares about.

    Attributes:
        name: Package name, possibly scoped (e.g. "org/ui").
        dependencies: Map of dependency name → version specifier. Only the
                      keys are used; version ranges are passed through to npm.
    """

    name: str
    dependencies: dict[str, str] = Field(default_factory=dict)


class BuildConfig(BaseModel):
    """Settings for one orchestration run.

    Attributes:
        root_path: Directory whose immediate subdirectories are packages.
        scope: Optional namespace; when set only "{scope}/..." packages and
               dependencies take part in the graph.
        registry: Registry URL passed to npm publish, if any.
        link: Wire local dependencies together with npm link while building.
        prefix: Indentation prepended to every line of the tree view.
        manifest_name: Manifest filename looked up in each package directory.
    """

    root_path: Path
    scope: str = ""
    registry: str | None = None
    link: bool = False
    prefix: str = ""
    manifest_name: str = "package.json"

    @field_validator("root_path")
    @classmethod
    def _absolute_root(cls, value: Path) -> Path:
        return value.expanduser().resolve()


class PackageCommand(BaseModel):
    """A scheduled, not yet executed, pipeline for one package.

    Attributes:
        name: Package name from the manifest.
        path: Absolute path of the package directory.
        command: Shell pipeline to run for this package.
    """

    name: str
    path: str
    command: str


class ProjectGraph(BaseModel):
    """Result of scanning a monorepo.

    Attributes:
        graph: Dependency graph over package names.
        mapping: Package name → absolute manifest path. Only names present
                 here can be scheduled.
        errors: Manifest path → reason, for manifests that failed to load.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    graph: Digraph = Field(default_factory=Digraph)
    mapping: dict[str, str] = Field(default_factory=dict)
    errors: dict[str, str] = Field(default_factory=dict)


class TreeNode(BaseModel):
    """One labelled node of the rendered dependency tree."""

    label: str = ""
    nodes: list[TreeNode] = Field(default_factory=list)
