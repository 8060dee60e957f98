"""RegistrySettings — one frozen object for CLI flags, env vars and TOML.

Precedence, highest first:

1. keyword arguments (CLI flags and per-section overrides)
2. ``CUSTREG_*`` environment variables, ``__`` between section and key
   (``CUSTREG_REPOSITORY__LOCK_TIMEOUT=0.5``)
3. ``custreg.toml``
4. defaults on the section models

Sections merge key by key, so overriding one key keeps the rest of its
section from lower layers.
"""

from __future__ import annotations

import tomllib
from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from contextvars import ContextVar
from pathlib import Path
from typing import Any

import click
from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from custreg.config.discovery import find_config
from custreg.config.models import IdsConfig, LoggingConfig, RepositoryConfig

_toml_data: ContextVar[Mapping[str, Any]] = ContextVar("custreg_toml_data", default={})


def read_toml(path: Path) -> dict[str, Any]:
    """Parse *path*; syntax errors become a ClickException naming the file."""
    try:
        return tomllib.loads(path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as exc:
        msg = f"Invalid TOML in {path}: {exc}"
        raise click.ClickException(msg) from exc


@contextmanager
def _toml_layer(data: Mapping[str, Any]) -> Iterator[None]:
    token = _toml_data.set(data)
    try:
        yield
    finally:
        _toml_data.reset(token)


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Expose parsed ``custreg.toml`` data as a settings layer."""

    def __init__(self, settings_cls: type[BaseSettings], data: Mapping[str, Any]) -> None:
        super().__init__(settings_cls)
        self._data = dict(data)

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        value = self._data.get(field_name)
        return value, field_name, isinstance(value, dict)

    def __call__(self) -> dict[str, Any]:
        return dict(self._data)


class RegistrySettings(BaseSettings):
    """Frozen settings for the custreg CLI and service wiring.

    Attributes:
        config_path: The TOML file that was loaded, if any.
        repository: ``[repository]`` store tuning.
        ids: ``[ids]`` ID generator seeding.
        logging: ``[logging]`` level and renderer.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "CUSTREG_",
        "env_nested_delimiter": "__",
    }

    config_path: Path | None = None

    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False

    repository: RepositoryConfig = Field(default_factory=RepositoryConfig)
    ids: IdsConfig = Field(default_factory=IdsConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (init_settings, env_settings, TomlSettingsSource(settings_cls, _toml_data.get()))

    @property
    def log_level(self) -> str:
        return "debug" if self.verbose else self.logging.level

    @property
    def log_format_json(self) -> bool:
        return self.log_json or self.logging.format == "json"

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        start: Path | None = None,
        lock_timeout: float | None = None,
        id_seed: int | None = None,
        **flags: Any,
    ) -> RegistrySettings:
        """Build settings for one CLI invocation.

        Args:
            config_path: Explicit ``--config`` file; must exist.
            start: Where the ``custreg.toml`` search begins (default: cwd).
            lock_timeout: ``--lock-timeout`` override for ``[repository]``.
            id_seed: ``--id-seed`` override for ``[ids]``.
            **flags: Global boolean flags (``json_output``, ``quiet``, ...).

        Raises:
            click.ClickException: the config file is missing, unreadable,
                or holds keys no section knows.
        """
        if config_path:
            toml_path: Path | None = Path(config_path)
            if not toml_path.is_file():
                msg = f"Config file not found: {config_path}"
                raise click.ClickException(msg)
        else:
            toml_path = find_config(start)

        data = read_toml(toml_path) if toml_path else {}
        unknown = sorted(set(data) - (set(cls.model_fields) - {"config_path"}))
        if unknown:
            msg = f"Unknown keys in {toml_path}: {', '.join(unknown)}"
            raise click.ClickException(msg)

        overrides: dict[str, Any] = dict(flags)
        if lock_timeout is not None:
            overrides["repository"] = {"lock_timeout": lock_timeout}
        if id_seed is not None:
            overrides["ids"] = {"seed": id_seed}

        with _toml_layer(data):
            return cls(config_path=toml_path, **overrides)
