"""Command: site initialization (named init_cmd to avoid shadowing builtins)."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from blogctl.commands._base import BlogCommand

if TYPE_CHECKING:
    from blogctl.commands._context import AppContext

_INIT_EXAMPLES = """\
  blogctl init
  blogctl init ~/blog --title "My Blog" --author me
  blogctl --no-interact init /tmp/blog"""


@click.command("init", cls=BlogCommand, examples=_INIT_EXAMPLES)
@click.argument("path", required=False, default=".")
@click.option("--title", default=None, help="Site title.")
@click.option("--author", default=None, help="Author name shown in the header.")
@click.pass_obj
def init_cmd(app: AppContext, path: str, title: str | None, author: str | None) -> None:
    """Initialize a new blogctl site."""
    site_path = Path(path).resolve()
    interactive = not app.settings.no_interact

    if title is None:
        title = (
            click.prompt("Site title", default=site_path.name) if interactive else site_path.name
        )

    if author is None:
        default_author = app.settings.site.author
        author = click.prompt("Author", default=default_author) if interactive else default_author

    from blogctl.services.init import InitService

    app.emit(InitService.init_site(site_path, title=title, author=author))
