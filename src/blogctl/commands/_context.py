"""AppContext: the ``click`` ``obj`` every subcommand receives."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from blogctl.config.logging import configure_logging
from blogctl.output.formatters import OutputSettings, format_result
from blogctl.services.telemetry import enable_telemetry

if TYPE_CHECKING:
    from blogctl.config.settings import BlogSettings
    from blogctl.infrastructure.site import SiteGraph
    from blogctl.services.result import ServiceResult


class AppContext:
    """Settings, the lazily built site graph, and result output.

    Nothing here reads the content source or loads plugins until a command
    touches :attr:`site`, so ``--help`` and ``--examples`` stay cheap.
    """

    def __init__(self, settings: BlogSettings) -> None:
        self.settings = settings
        self.output = OutputSettings(
            json_output=settings.json_output,
            quiet=settings.quiet,
            verbose=settings.verbose,
        )
        self._site: SiteGraph | None = None

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)
        if settings.verbose:
            enable_telemetry()

    @property
    def site(self) -> SiteGraph:
        if self._site is None:
            from blogctl.infrastructure.site import SiteGraph

            self._site = SiteGraph(self.settings)
        return self._site

    def emit(self, result: ServiceResult) -> None:
        """Print *result*; a failed result goes to stderr and exits 1.

        Warnings on a successful result are echoed to stderr in text modes.
        The ``--json`` payload already carries them.
        """
        text = format_result(result, settings=self.output)
        if not result.ok:
            click.echo(text, err=True)
            raise SystemExit(1)

        click.echo(text)
        if not self.output.json_output:
            for warning in result.warnings:
                click.echo(f"WARNING: {warning}", err=True)
