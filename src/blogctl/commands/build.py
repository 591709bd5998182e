"""Command: render the site into the output directory."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from blogctl.commands._base import BlogCommand
from blogctl.services.build import BuildService

if TYPE_CHECKING:
    from blogctl.commands._context import AppContext

_BUILD_EXAMPLES = """\
  blogctl build
  blogctl -v build
  blogctl --json build
  blogctl -c ~/blog/blogctl.toml build"""


@click.command("build", cls=BlogCommand, examples=_BUILD_EXAMPLES)
@click.pass_obj
def build(app: AppContext) -> None:
    """Build the index, files and post pages into the output directory."""
    app.emit(BuildService(app.site).build())
