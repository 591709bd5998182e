"""The ``blogctl`` entry point: global flags, then the subcommands."""

from __future__ import annotations

import click

from blogctl import __version__
from blogctl.commands import register_commands
from blogctl.commands._context import AppContext
from blogctl.config.settings import BlogSettings


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="blogctl")
@click.option("--json", "json_output", is_flag=True, help="Print results as JSON.")
@click.option("-q", "--quiet", is_flag=True, help="One line per item, no decoration.")
@click.option("-v", "--verbose", is_flag=True, help="Debug logging and build timings.")
@click.option("--log-json", is_flag=True, help="Write logs to stderr as JSON lines.")
@click.option("--no-interact", is_flag=True, help="Never prompt; use defaults.")
@click.option("-c", "--config", "config_path", default=None, help="Use this blogctl.toml.")
@click.pass_context
def cli(ctx: click.Context, config_path: str | None, **flags: bool) -> None:
    """blogctl: build a personal blog from a folder of markdown."""
    ctx.obj = AppContext(BlogSettings.from_cli(config_path=config_path, **flags))
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
