"""Utilities for resolving configuration and output paths."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Mapping

DEFAULT_CONFIG_DIR = "~/.ddlsize"
DEFAULT_CONFIG_FILE = "config.yaml"

CONFIG_DIR_ENV = "DDLSIZE_CONFIG_DIR"
CONFIG_FILE_ENV = "DDLSIZE_CONFIG_PATH"


def _expand(path_str: str) -> Path:
    """Return a Path with user and environment variables expanded."""
    return Path(os.path.expandvars(path_str)).expanduser()


def get_config_dir(create: bool = False, env: Mapping[str, str] | None = None) -> Path:
    """Return the configuration directory, optionally creating it."""
    env = env or os.environ
    raw = env.get(CONFIG_DIR_ENV, DEFAULT_CONFIG_DIR)
    path = _expand(raw)
    if create:
        path.mkdir(parents=True, exist_ok=True)
    return path


def default_config_path(env: Mapping[str, str] | None = None) -> Path:
    """Return the default config file path."""
    env = env or os.environ
    override = env.get(CONFIG_FILE_ENV)
    if override:
        return _expand(override)
    config_dir = get_config_dir(env=env)
    return config_dir / DEFAULT_CONFIG_FILE


def resolve_path(path_str: str | Path) -> Path:
    """Expand user and environment variables for arbitrary paths."""
    if isinstance(path_str, Path):
        return _expand(str(path_str))
    return _expand(path_str)
