"""Graph building and build-order scheduling.

Turns discovered package directories into a dependency graph, then walks
that graph in topological order to produce one result per package. The
per-package result is supplied by the caller, so build and publish share the
same ordering logic and differ only in the command they generate.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from pathlib import Path
from typing import TypeVar

from .graph import CycleError
from .manifest import MANIFEST_NAME, ManifestError, in_scope, load_manifest
from .models import PackageManifest, ProjectGraph

T = TypeVar("T")

ManifestLoader = Callable[[Path], PackageManifest]


class OrderError(RuntimeError):
    """No valid build order exists for the dependency graph."""


def build_project_graph(
    projects: Mapping[str, Path],
    scope: str = "",
    load: ManifestLoader = load_manifest,
    manifest_name: str = MANIFEST_NAME,
) -> ProjectGraph:
    """Build the dependency graph for the discovered packages.

    With a scope, only "{scope}/..." packages become vertices and only
    "{scope}/..." dependencies become edges (even when no local package
    provides them). Without a scope, every package is a vertex and a
    dependency becomes an edge only when another discovered package has
    exactly that name. Other dependencies are external and ignored.

    Args:
        projects: Map of directory name → package directory.
        scope: Optional namespace restricting the graph.
        load: Reads a manifest file into a PackageManifest.
        manifest_name: Manifest filename inside each package directory.

    Returns:
        ProjectGraph whose errors field lists manifests that failed to load.
    """
    result = ProjectGraph()

    # First pass: load every manifest so unscoped edges can be resolved
    # against the full set of package names
    manifests: dict[str, PackageManifest] = {}
    for folder in projects.values():
        file = Path(folder) / manifest_name
        try:
            manifests[str(file)] = load(file)
        except ManifestError as exc:
            result.errors[str(file)] = exc.reason

    local_names = {m.name for m in manifests.values()}

    # Second pass: vertices, mapping and edges
    for file, manifest in manifests.items():
        if scope and not in_scope(manifest.name, scope):
            continue
        result.mapping[manifest.name] = file
        result.graph.add_vertex(manifest.name)
        for dep in manifest.dependencies:
            internal = in_scope(dep, scope) if scope else dep in local_names
            if internal:
                result.graph.add_edge(manifest.name, dep)

    return result


def ordered_project_commands(
    project_graph: ProjectGraph,
    produce: Callable[[str, str, list[str]], T],
) -> list[T]:
    """Run ``produce`` for every schedulable package in build order.

    Vertices without a manifest (dependencies that only appear as edge
    targets) take part in ordering but are not passed to ``produce``.

    Args:
        project_graph: Graph and name → manifest mapping.
        produce: Called as produce(name, package_dir, dependency_names).

    Returns:
        The produced values, dependencies before dependents.

    Raises:
        OrderError: If the graph contains a cycle.
    """
    results: list[T] = []
    for name in build_order(project_graph):
        project_path = str(Path(project_graph.mapping[name]).parent)
        dependencies = project_graph.graph.adjacent_list(name)
        results.append(produce(name, project_path, dependencies))
    return results


def build_order(project_graph: ProjectGraph) -> list[str]:
    """Schedulable package names in topological order.

    Raises:
        OrderError: If the graph contains a cycle.
    """
    try:
        order = project_graph.graph.topological_sort()
    except CycleError as exc:
        raise OrderError(
            f"Cannot create a topological sort from dependency graph ({exc})"
        ) from exc
    return [name for name in order if name in project_graph.mapping]
