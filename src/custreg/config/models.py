"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, custreg.toml only contains
overrides.  An empty or missing file is a valid configuration.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field


class RepositoryConfig(BaseModel):
    """[repository] section."""

    model_config = {"frozen": True}

    lock_timeout: float = Field(default=5.0, gt=0)


class IdsConfig(BaseModel):
    """[ids] section.

    ``seed`` pins the ID generator (reproducible runs); None seeds from
    the clock.
    """

    model_config = {"frozen": True}

    seed: int | None = None


class LoggingConfig(BaseModel):
    """[logging] section.

    ``--verbose`` forces ``debug`` and ``--log-json`` forces ``json``
    regardless of what is configured here.
    """

    model_config = {"frozen": True}

    level: Literal["debug", "info", "warning", "error"] = "warning"
    format: Literal["console", "json"] = "console"
