"""Subcommand modules for custreg.

Provides register_commands() which uses deferred imports to keep
``custreg --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all standalone commands on the root CLI group."""
    from custreg.commands.country import country
    from custreg.commands.run import run
    from custreg.commands.validate import validate

    cli.add_command(validate)
    cli.add_command(country)
    cli.add_command(run)
