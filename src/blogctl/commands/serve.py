"""serve — preview the built site over HTTP."""

from __future__ import annotations

import functools
from http.server import SimpleHTTPRequestHandler, ThreadingHTTPServer
from typing import TYPE_CHECKING

import click

from blogctl.commands._base import BlogCommand

if TYPE_CHECKING:
    from blogctl.commands._context import AppContext


@click.command(
    cls=BlogCommand,
    examples="""\
  # Serve the existing output directory
  blogctl serve

  # Rebuild first, then serve on all interfaces
  blogctl serve --build --host 0.0.0.0 --port 9000""",
)
@click.option("--host", default="127.0.0.1", help="Bind address.")
@click.option("--port", default=8000, type=int, help="Listen port.")
@click.option("--build", "build_first", is_flag=True, help="Build the site before serving.")
@click.pass_obj
def serve(app: AppContext, host: str, port: int, build_first: bool) -> None:
    """Serve the output directory (no file watching)."""
    if build_first:
        from blogctl.services.build import BuildService

        result = BuildService(app.site).build()
        if not result.ok:
            app.emit(result)

    output_dir = app.settings.output_dir
    if not output_dir.is_dir():
        click.echo(
            f"Output directory not found: {output_dir}. Run `blogctl build` first.", err=True
        )
        raise SystemExit(1)

    handler = functools.partial(SimpleHTTPRequestHandler, directory=str(output_dir))
    with ThreadingHTTPServer((host, port), handler) as server:
        click.echo(f"Serving {output_dir} at http://{host}:{port}/ (Ctrl+C to stop)")
        try:
            server.serve_forever()
        except KeyboardInterrupt:
            click.echo("Stopped.")
