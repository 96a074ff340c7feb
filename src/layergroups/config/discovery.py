"""Locate ``layergroups.toml`` and record where it came from.

Sources, checked in order:

1. ``--config PATH`` on the command line
2. the ``LAYERGROUPS_CONFIG`` environment variable
3. walking up from the start directory (like git looking for ``.git/``)

An explicit path (flag or env var) that does not exist is an error rather
than a silent fallback to the walk-up search.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from enum import StrEnum
from pathlib import Path

CONFIG_FILENAME = "layergroups.toml"
CONFIG_ENV_VAR = "LAYERGROUPS_CONFIG"


class ConfigSource(StrEnum):
    FLAG = "flag"
    ENV = "env"
    WALK_UP = "walk-up"
    DEFAULT = "default"


class ConfigNotFoundError(FileNotFoundError):
    """An explicitly named config file does not exist."""


@dataclass(frozen=True)
class ConfigLocation:
    """Where settings are read from.

    ``root`` is the directory relative style paths resolve against: the
    config file's directory, or the start directory when no file is used.
    """

    path: Path | None
    source: ConfigSource
    root: Path


def locate_config(explicit: str | Path | None = None, start: Path | None = None) -> ConfigLocation:
    """Resolve the config file for this invocation."""
    start = start or Path.cwd()

    if explicit:
        source, raw = ConfigSource.FLAG, str(explicit)
    else:
        source, raw = ConfigSource.ENV, os.environ.get(CONFIG_ENV_VAR)
    if raw:
        path = Path(raw)
        if not path.is_file():
            msg = f"Config file not found ({source}): {path}"
            raise ConfigNotFoundError(msg)
        return ConfigLocation(path=path, source=source, root=path.parent)

    found = _walk_up(start.resolve())
    if found is not None:
        return ConfigLocation(path=found, source=ConfigSource.WALK_UP, root=found.parent)
    return ConfigLocation(path=None, source=ConfigSource.DEFAULT, root=start)


def _walk_up(directory: Path) -> Path | None:
    for candidate_dir in (directory, *directory.parents):
        candidate = candidate_dir / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None
