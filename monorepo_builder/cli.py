"""CLI entry point for monorepo-builder."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import click

from monorepo_builder.config import ConfigError, load_config
from monorepo_builder.explorer import OrderError
from monorepo_builder.graph import CycleError
from monorepo_builder.models import BuildConfig
from monorepo_builder.pipeline import (
    build_all_projects,
    build_single_project,
    calculate_build_order,
    calculate_publish_order,
    publish_all_projects,
    publish_single_project,
    render_tree,
)
from monorepo_builder.shell import PipelineExecutionError


def _config(ctx: click.Context, **overrides: Any) -> BuildConfig:
    """Merge group options, command options and the config file."""
    try:
        return load_config(ctx.obj["root"], scope=ctx.obj["scope"], **overrides)
    except ConfigError as exc:
        raise click.ClickException(str(exc)) from exc


@click.group()
@click.version_option(package_name="monorepo-builder")
@click.option(
    "--root",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    default=".",
    show_default=True,
    help="Monorepo root containing one directory per package.",
)
@click.option("--scope", default=None, help="Only handle packages named SCOPE/...")
@click.pass_context
def cli(ctx: click.Context, root: Path, scope: str | None) -> None:
    """Build and publish the packages of a monorepo in dependency order."""
    ctx.ensure_object(dict)
    ctx.obj["root"] = root
    ctx.obj["scope"] = scope


@cli.command()
@click.argument("project", required=False, type=click.Path(path_type=Path))
@click.option(
    "--link/--no-link",
    default=None,
    help="npm link local dependencies instead of installing published ones.",
)
@click.pass_context
def build(ctx: click.Context, project: Path | None, link: bool | None) -> None:
    """Build PROJECT, or every package when PROJECT is omitted."""
    config = _config(ctx, link=link)
    if project is not None:
        if not build_single_project(project.resolve(), config):
            raise click.ClickException(f"Build failed for {project}")
        return
    try:
        commands = build_all_projects(config)
    except (OrderError, PipelineExecutionError) as exc:
        raise click.ClickException(str(exc)) from exc
    click.echo(f"\n✓ Built {len(commands)} packages")


@cli.command()
@click.argument("project", required=False, type=click.Path(path_type=Path))
@click.option("--registry", default=None, help="Registry URL to publish to.")
@click.pass_context
def publish(ctx: click.Context, project: Path | None, registry: str | None) -> None:
    """Publish PROJECT, or every package when PROJECT is omitted."""
    config = _config(ctx, registry=registry)
    if project is not None:
        if not publish_single_project(project.resolve(), config):
            raise click.ClickException(f"Publish failed for {project}")
        return
    try:
        commands = publish_all_projects(config)
    except (OrderError, PipelineExecutionError) as exc:
        raise click.ClickException(str(exc)) from exc
    click.echo(f"\n✓ Published {len(commands)} packages")


@cli.command()
@click.option("--publish", "for_publish", is_flag=True, help="Show publish pipelines.")
@click.option("--registry", default=None, help="Registry URL to publish to.")
@click.option("--link/--no-link", default=None, help="Include npm link steps.")
@click.pass_context
def order(
    ctx: click.Context, for_publish: bool, registry: str | None, link: bool | None
) -> None:
    """Print the pipelines in execution order without running them."""
    config = _config(ctx, registry=registry, link=link)
    try:
        if for_publish:
            commands = calculate_publish_order(config)
        else:
            commands = calculate_build_order(config)
    except OrderError as exc:
        raise click.ClickException(str(exc)) from exc

    click.echo()
    for index, pkg in enumerate(commands, start=1):
        click.echo(f"{index}. {pkg.name}")
        click.echo(f"   {pkg.command}")


@cli.command()
@click.option("--prefix", default=None, help="Text prepended to every line.")
@click.pass_context
def tree(ctx: click.Context, prefix: str | None) -> None:
    """Print the dependency graph as a tree."""
    config = _config(ctx, prefix=prefix)
    try:
        rendered = render_tree(config)
    except CycleError as exc:
        raise click.ClickException(str(exc)) from exc
    click.echo()
    click.echo(rendered, nl=False)
