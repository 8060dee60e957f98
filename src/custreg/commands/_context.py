"""AppContext — shared Click context for all commands.

Created once by the root CLI group and flows to all subcommands via
``@click.pass_obj``.  Wires the repository and service from settings and
centralizes result emission (stdout/stderr routing + exit codes).
"""

from __future__ import annotations

import random
from collections.abc import Iterable
from typing import TYPE_CHECKING

import click

from custreg.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from custreg.config.settings import RegistrySettings
    from custreg.domain.customer import Customer
    from custreg.services.registry import RegistryService
    from custreg.services.result import ServiceResult


class AppContext:
    """Shared context flowing through Click's command hierarchy.

    The service is built lazily so ``--help`` and ``--version`` never
    construct a repository.
    """

    def __init__(self, settings: RegistrySettings) -> None:
        self.settings = settings
        self._service: RegistryService | None = None

        from custreg.config.logging import configure_logging

        configure_logging(
            verbose=settings.verbose,
            log_json=settings.log_format_json,
            level=settings.log_level,
        )

        if settings.verbose:
            from custreg.services.telemetry import enable_telemetry

            enable_telemetry()

    @property
    def service(self) -> RegistryService:
        """A service over an empty in-memory repository (created on first use)."""
        if self._service is None:
            self._service = self.build_service()
        return self._service

    def build_service(self, seed: Iterable[Customer] | None = None) -> RegistryService:
        """Build a fresh in-memory repository (optionally seeded) and its service."""
        from custreg.domain.validation import Validator
        from custreg.infrastructure.memory import InMemoryCustomerRepository
        from custreg.services.registry import RegistryService

        repo = InMemoryCustomerRepository(
            seed,
            lock_timeout=self.settings.repository.lock_timeout,
        )
        id_seed = self.settings.ids.seed
        rng = random.Random(id_seed) if id_seed is not None else None
        return RegistryService(repo, Validator(), rng=rng)

    @property
    def output_settings(self) -> OutputSettings:
        return OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )

    def render(self, result: ServiceResult) -> str:
        return format_result(result, settings=self.output_settings)

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success (``result.ok``): writes to stdout, returns normally.
          Warnings are emitted to stderr so they don't pollute piped output.
        * Failure: writes to stderr, exits with code 1.
        """
        output = self.render(result)
        if result.ok:
            click.echo(output)
            if not self.settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
