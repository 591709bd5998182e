"""Subcommand modules for blogctl.

Provides register_commands() which uses deferred imports to keep
``blogctl --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register the query group and the standalone commands on the root CLI group."""
    # --- Groups ---
    from blogctl.commands.query import query

    cli.add_command(query)

    # --- Standalone commands ---
    from blogctl.commands.build import build
    from blogctl.commands.init_cmd import init_cmd
    from blogctl.commands.serve import serve

    cli.add_command(build)
    cli.add_command(init_cmd)
    cli.add_command(serve)
