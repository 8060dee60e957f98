"""Locate ``custreg.toml``.

``CUSTREG_CONFIG`` wins when set: it may name the file itself or a
directory holding one.  Otherwise the search walks from the start
directory up to the filesystem root and takes the nearest file.
"""

from __future__ import annotations

import os
from collections.abc import Iterator
from pathlib import Path

CONFIG_FILENAME = "custreg.toml"
CONFIG_ENV_VAR = "CUSTREG_CONFIG"


def iter_candidates(start: Path | None = None) -> Iterator[Path]:
    """Yield ``<dir>/custreg.toml`` for *start* and each of its parents."""
    directory = (start or Path.cwd()).resolve()
    yield directory / CONFIG_FILENAME
    yield from (parent / CONFIG_FILENAME for parent in directory.parents)


def config_from_env() -> Path | None:
    """The file named by ``CUSTREG_CONFIG``, or None if unset or missing."""
    value = os.environ.get(CONFIG_ENV_VAR, "").strip()
    if not value:
        return None
    path = Path(value).expanduser()
    if path.is_dir():
        path = path / CONFIG_FILENAME
    return path if path.is_file() else None


def find_config(start: Path | None = None) -> Path | None:
    """Return the config file in effect for *start*, or None.

    A set ``CUSTREG_CONFIG`` disables the walk even when it points
    nowhere.
    """
    if os.environ.get(CONFIG_ENV_VAR, "").strip():
        return config_from_env()
    return next((c for c in iter_candidates(start) if c.is_file()), None)
