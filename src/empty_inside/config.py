# Copyright 2025 Ben Mensi
# SPDX-License-Identifier: Apache-2.0

"""
Build configuration.

The CLI loads the optional YAML config file once, merges its own flags over
it and hands the resulting BuildConfig to the builders as plain arguments.
Nothing below the CLI reads configuration or environment.

Lookup order for the config file:
- --config PATH (must exist)
- $EMPTY_INSIDE_CONFIG (must exist)
- ./empty-inside.yml (optional)
"""

import logging
import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from empty_inside.errors import ConfigError
from empty_inside.release import DEFAULT_COMMIT_HASH, DEFAULT_VERSION


logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "EMPTY_INSIDE_CONFIG"
DEFAULT_CONFIG_FILE = "empty-inside.yml"

# Reproducible-builds convention for pinning embedded timestamps.
SOURCE_DATE_EPOCH_VAR = "SOURCE_DATE_EPOCH"


@dataclass(frozen=True)
class BuildConfig:
    """Options for one invocation, fixed before any archive is built."""
    output_dir: Optional[Path] = None
    release_version: str = DEFAULT_VERSION
    commit_hash: str = DEFAULT_COMMIT_HASH
    uncommitted_changes: bool = False
    mtime: Optional[int] = None
    verbose: bool = False


CONFIG_KEYS = frozenset(f.name for f in fields(BuildConfig))


def load_config(config_path: Optional[str] = None) -> Dict[str, Any]:
    """
    Load the YAML config file.

    Args:
        config_path: Explicit path; falls back to $EMPTY_INSIDE_CONFIG,
            then ./empty-inside.yml

    Returns:
        Config mapping (empty if no file was found on the default path)

    Raises:
        FileNotFoundError: If an explicitly requested file does not exist
        ConfigError: If the file is not a YAML mapping
    """
    if config_path is None:
        config_path = os.environ.get(CONFIG_ENV_VAR)
    if config_path is None:
        default_path = Path.cwd() / DEFAULT_CONFIG_FILE
        if not default_path.exists():
            logger.debug("No config file found, using defaults")
            return {}
        config_path = str(default_path)

    path = Path(config_path).expanduser()
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    try:
        data = yaml.safe_load(path.read_text())
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid YAML in {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"config file {path} must contain a YAML mapping")

    unknown = sorted(set(data) - CONFIG_KEYS)
    if unknown:
        logger.warning(f"Ignoring unknown config keys in {path}: {unknown}")

    logger.debug(f"Loaded config from {path}")
    return data


def build_config(config: Optional[Dict[str, Any]] = None, **overrides: Any) -> BuildConfig:
    """
    Merge config file values and CLI overrides into a BuildConfig.

    Overrides that are None are ignored so unset flags never mask the file.
    When no mtime is configured, $SOURCE_DATE_EPOCH is used if set.

    Raises:
        ConfigError: On unknown override keys or a non-integer mtime
    """
    values = {key: value for key, value in (config or {}).items() if key in CONFIG_KEYS}
    for key, value in overrides.items():
        if key not in CONFIG_KEYS:
            raise ConfigError(f"unknown config option: {key}")
        if value is not None:
            values[key] = value

    mtime = values.get("mtime")
    if mtime is None:
        mtime = os.environ.get(SOURCE_DATE_EPOCH_VAR) or None
    if mtime is not None:
        try:
            mtime = int(mtime)
        except (TypeError, ValueError):
            raise ConfigError(f"mtime must be integer epoch seconds, got: {mtime!r}")

    output_dir = values.get("output_dir")

    return BuildConfig(
        output_dir=Path(output_dir).expanduser() if output_dir else None,
        release_version=str(values.get("release_version", DEFAULT_VERSION)),
        commit_hash=str(values.get("commit_hash", DEFAULT_COMMIT_HASH)),
        uncommitted_changes=bool(values.get("uncommitted_changes", False)),
        mtime=mtime,
        verbose=bool(values.get("verbose", False)),
    )
