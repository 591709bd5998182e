"""Command group: the queries the page templates are written against."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from blogctl.commands._base import BlogGroup
from blogctl.services.query import QueryService

if TYPE_CHECKING:
    from blogctl.commands._context import AppContext

_QUERY_EXAMPLES = """\
  blogctl query site
  blogctl query files
  blogctl query posts --limit 5
  blogctl --json query posts
  blogctl -q query files"""


@click.group(cls=BlogGroup, examples=_QUERY_EXAMPLES)
@click.pass_obj
def query(app: AppContext) -> None:
    """Inspect site metadata, source files and posts."""


@query.command(
    examples="""\
  blogctl query site
  blogctl --json query site"""
)
@click.pass_obj
def site(app: AppContext) -> None:
    """Show the site metadata."""
    app.emit(QueryService(app.site).site_metadata())


@query.command(
    examples="""\
  blogctl query files
  blogctl -q query files"""
)
@click.pass_obj
def files(app: AppContext) -> None:
    """List every file in the content source."""
    app.emit(QueryService(app.site).all_files())


@query.command(
    examples="""\
  blogctl query posts
  blogctl query posts --limit 3
  blogctl -q query posts"""
)
@click.option("--limit", default=None, type=click.IntRange(min=0), help="Max results.")
@click.pass_obj
def posts(app: AppContext, limit: int | None) -> None:
    """List markdown posts, newest first."""
    app.emit(QueryService(app.site).all_markdown(limit=limit))
