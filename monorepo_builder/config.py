"""Run configuration.

Settings come from an optional ``monorepo-builder.toml`` at the monorepo
root, read with tomlkit, and are overridden by command-line values.

Example file::

    scope = "org"
    registry = "https://npm.example.com"
    link = true
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import tomlkit
from pydantic import ValidationError
from tomlkit.exceptions import TOMLKitError

from .models import BuildConfig

CONFIG_FILENAME = "monorepo-builder.toml"

# Keys accepted in the config file → BuildConfig field
_FILE_KEYS = {
    "scope": "scope",
    "registry": "registry",
    "link": "link",
    "prefix": "prefix",
    "manifest": "manifest_name",
}


class ConfigError(Exception):
    """The configuration file is unreadable or has invalid values."""


def read_config_file(path: Path) -> dict[str, Any]:
    """Parse a config file into BuildConfig keyword arguments.

    Unknown keys are rejected so typos do not go unnoticed.
    """
    try:
        doc = tomlkit.parse(path.read_text(encoding="utf-8"))
    except (OSError, TOMLKitError) as exc:
        raise ConfigError(f"Cannot read {path}: {exc}") from exc

    values = doc.unwrap()
    unknown = sorted(set(values) - set(_FILE_KEYS))
    if unknown:
        raise ConfigError(f"Unknown keys in {path}: {', '.join(unknown)}")
    return {_FILE_KEYS[key]: value for key, value in values.items()}


def load_config(root_path: Path, **overrides: Any) -> BuildConfig:
    """Build the configuration for a run rooted at ``root_path``.

    Args:
        root_path: Monorepo root; its config file is read if present.
        **overrides: BuildConfig fields from the command line. None values
                     mean "not given" and leave the file value in place.

    Raises:
        ConfigError: If the file cannot be parsed or a value is invalid.
    """
    settings: dict[str, Any] = {}
    config_file = root_path / CONFIG_FILENAME
    if config_file.is_file():
        settings.update(read_config_file(config_file))
    settings.update({k: v for k, v in overrides.items() if v is not None})

    try:
        return BuildConfig(root_path=root_path, **settings)
    except ValidationError as exc:
        raise ConfigError(f"Invalid configuration: {exc}") from exc
