"""``custreg`` root command group.

Global options are resolved into a :class:`RegistrySettings` once per
invocation and handed to subcommands as an :class:`AppContext`.
"""

from __future__ import annotations

import click

from custreg import __version__
from custreg.commands import register_commands
from custreg.commands._context import AppContext
from custreg.config.settings import RegistrySettings

CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}


@click.group(context_settings=CONTEXT_SETTINGS, invoke_without_command=True)
@click.version_option(__version__, "-V", "--version", prog_name="custreg")
@click.option("--json", "json_output", is_flag=True, help="Print results as JSON.")
@click.option("-q", "--quiet", is_flag=True, help="Print only IDs or OK/ERROR lines.")
@click.option("-v", "--verbose", is_flag=True, help="Debug logging and stage timings.")
@click.option("--log-json", is_flag=True, help="Write logs to stderr as JSON lines.")
@click.option(
    "-c",
    "--config",
    "config_path",
    type=click.Path(dir_okay=False),
    default=None,
    help="Use this custreg.toml instead of searching for one.",
)
@click.option(
    "--lock-timeout",
    type=click.FloatRange(min=0, min_open=True),
    default=None,
    help="Seconds any repository lock wait may take.",
)
@click.option("--id-seed", type=int, default=None, help="Seed the customer ID generator.")
@click.pass_context
def cli(
    ctx: click.Context,
    config_path: str | None,
    lock_timeout: float | None,
    id_seed: int | None,
    **flags: bool,
) -> None:
    """custreg — customer master-data registry."""
    settings = RegistrySettings.from_cli(
        config_path=config_path,
        lock_timeout=lock_timeout,
        id_seed=id_seed,
        **flags,
    )
    ctx.obj = AppContext(settings)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
