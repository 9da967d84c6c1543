"""Build and publish pipelines: discover → order → generate → execute.

This module wires the graph engine to the filesystem and the shell:
1. Discover package directories under the monorepo root
2. Build the dependency graph from their manifests
3. Schedule packages in dependency order
4. Generate one npm pipeline per package
5. Run the pipelines one after another

Batch operations (all packages) are strict: they stop at the first failing
pipeline and raise. Single-package operations are best-effort: they report
the problem and return False instead of raising.
"""

from __future__ import annotations

from pathlib import Path

from .commands import build_command, publish_command
from .explorer import build_project_graph, ordered_project_commands
from .manifest import ManifestError, list_projects, load_manifest, scoped_dependencies
from .models import BuildConfig, PackageCommand, ProjectGraph
from .shell import PipelineExecutionError, info, run_pipeline, step, warn
from .tree import tree_view


def discover_packages(config: BuildConfig) -> ProjectGraph:
    """Scan the monorepo root and build its dependency graph.

    Manifests that fail to load are reported as warnings and left out of
    the graph; they do not stop the run.
    """
    step(f"Discovering packages in {config.root_path}")

    projects = list_projects(config.root_path, config.manifest_name)
    project_graph = build_project_graph(
        projects,
        scope=config.scope,
        load=load_manifest,
        manifest_name=config.manifest_name,
    )
    for file, reason in project_graph.errors.items():
        warn(f"Skipping {file}: {reason}")

    for name in project_graph.mapping:
        deps = project_graph.graph.adjacent_list(name)
        suffix = f" → [{', '.join(deps)}]" if deps else ""
        info(f"{name}{suffix}")
    return project_graph


def calculate_build_order(
    config: BuildConfig, project_graph: ProjectGraph | None = None
) -> list[PackageCommand]:
    """Build pipelines for every package, dependencies first.

    Raises:
        OrderError: If the dependency graph contains a cycle.
    """
    if project_graph is None:
        project_graph = discover_packages(config)

    def produce(name: str, project_path: str, deps: list[str]) -> PackageCommand:
        command = build_command(project_path, deps, link=config.link)
        return PackageCommand(name=name, path=project_path, command=command)

    return ordered_project_commands(project_graph, produce)


def calculate_publish_order(
    config: BuildConfig, project_graph: ProjectGraph | None = None
) -> list[PackageCommand]:
    """Publish pipelines for every package, dependencies first.

    Raises:
        OrderError: If the dependency graph contains a cycle.
    """
    if project_graph is None:
        project_graph = discover_packages(config)

    def produce(name: str, project_path: str, deps: list[str]) -> PackageCommand:
        command = publish_command(project_path, registry=config.registry)
        return PackageCommand(name=name, path=project_path, command=command)

    return ordered_project_commands(project_graph, produce)


def execute_commands(commands: list[PackageCommand], action: str) -> None:
    """Run pipelines sequentially in the given order.

    Each pipeline starts only after the previous one succeeded, because a
    package installs against the already built copies of its dependencies.

    Raises:
        PipelineExecutionError: On the first failing pipeline; later
            pipelines are not run.
    """
    step(f"Running {action} for {len(commands)} packages")
    for pkg in commands:
        print(f"\nRunning {action} command for {pkg.name} -> {pkg.command}")
        run_pipeline(pkg.name, pkg.command)


def build_all_projects(config: BuildConfig) -> list[PackageCommand]:
    """Build every package in dependency order (strict mode).

    Raises:
        OrderError: If the dependency graph contains a cycle.
        PipelineExecutionError: If any package fails to build.
    """
    commands = calculate_build_order(config)
    execute_commands(commands, "build")
    return commands


def publish_all_projects(config: BuildConfig) -> list[PackageCommand]:
    """Publish every package in dependency order (strict mode).

    Raises:
        OrderError: If the dependency graph contains a cycle.
        PipelineExecutionError: If any package fails to publish.
    """
    commands = calculate_publish_order(config)
    execute_commands(commands, "publish")
    return commands


def _resolve_project(project: str | Path, config: BuildConfig) -> Path:
    """Resolve a package directory, relative paths against the root."""
    return (config.root_path / Path(project)).resolve()


def build_single_project(project: str | Path, config: BuildConfig) -> bool:
    """Build one package without consulting the graph (best-effort mode).

    Only dependencies inside the configured scope are linked.

    Returns:
        True if the pipeline succeeded, False on any manifest or pipeline
        failure.
    """
    project_path = _resolve_project(project, config)
    try:
        manifest = load_manifest(project_path / config.manifest_name)
        deps = scoped_dependencies(manifest, config.scope)
        command = build_command(str(project_path), deps, link=config.link)
        print(f"Running build command for {manifest.name} -> {command}")
        run_pipeline(manifest.name, command)
    except (ManifestError, PipelineExecutionError) as exc:
        warn(str(exc))
        return False
    return True


def publish_single_project(project: str | Path, config: BuildConfig) -> bool:
    """Publish one package without consulting the graph (best-effort mode).

    Returns:
        True if the pipeline succeeded, False on any manifest or pipeline
        failure.
    """
    project_path = _resolve_project(project, config)
    try:
        manifest = load_manifest(project_path / config.manifest_name)
        command = publish_command(str(project_path), registry=config.registry)
        print(f"Running publish command for {manifest.name} -> {command}")
        run_pipeline(manifest.name, command)
    except (ManifestError, PipelineExecutionError) as exc:
        warn(str(exc))
        return False
    return True


def render_tree(config: BuildConfig) -> str:
    """Discover the monorepo and render its dependency tree.

    Raises:
        CycleError: If the dependency graph contains a cycle.
    """
    project_graph = discover_packages(config)
    return tree_view(project_graph.graph, prefix=config.prefix)
