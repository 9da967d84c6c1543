"""Shell pipeline generation for npm packages.

Each function returns a single command string whose steps are joined with
``&&``, so a failing step stops the rest of the pipeline. Nothing is executed
here.
"""

from __future__ import annotations

import shlex

NPM = "npm --loglevel warn"


def _clean_steps(project_path: str) -> list[str]:
    """Enter the package and drop any previous install state."""
    return [
        f"cd {shlex.quote(project_path)}",
        "rm -rf node_modules",
        "rm -f package-lock.json",
    ]


def build_command(
    project_path: str, dependencies: list[str], link: bool = False
) -> str:
    """Build pipeline: clean → [link deps] → install → [link self].

    Args:
        project_path: Package directory.
        dependencies: Internal dependency names of the package.
        link: When True, link local copies of ``dependencies`` before
              installing and register the package itself as linkable after.
    """
    commands = _clean_steps(project_path)
    if link and dependencies:
        names = " ".join(shlex.quote(dep) for dep in dependencies)
        commands.append(f"{NPM} link {names}")
    commands.append(f"{NPM} install")
    if link:
        commands.append(f"{NPM} link")
    return " && ".join(commands)


def publish_command(project_path: str, registry: str | None = None) -> str:
    """Publish pipeline: clean → install → publish (to ``registry`` if set)."""
    commands = _clean_steps(project_path)
    commands.append(f"{NPM} install")
    target = f" --registry={shlex.quote(registry)}" if registry else ""
    commands.append(f"{NPM} publish{target} .")
    return " && ".join(commands)
