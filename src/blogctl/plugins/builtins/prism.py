"""Built-in Prism plugin: fenced and inline code highlighting.

Contributes :class:`~blogctl.infrastructure.highlight.PrismExtension` to the
markdown transformer and a Pygments theme stylesheet to the layout.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import pluggy

from blogctl.config.models import PrismConfig
from blogctl.infrastructure.highlight import PrismExtension, prism_stylesheet

if TYPE_CHECKING:
    from markdown.extensions import Extension

    from blogctl.config.settings import BlogSettings

hookimpl = pluggy.HookimplMarker("blogctl")

STYLESHEET_NAME = "prism.css"


class PrismPlugin:
    """Syntax highlighting configured by ``[markdown.prism]``."""

    def __init__(self, config: PrismConfig | None = None) -> None:
        self._config = config or PrismConfig()

    @hookimpl
    def markdown_extensions(self, settings: BlogSettings) -> list[Extension] | None:
        return [
            PrismExtension(
                class_prefix=self._config.class_prefix,
                inline_code_marker=self._config.inline_code_marker or "",
                aliases=dict(self._config.aliases),
            )
        ]

    @hookimpl
    def site_stylesheets(self, settings: BlogSettings) -> dict[str, str] | None:
        return {STYLESHEET_NAME: prism_stylesheet(self._config.style)}
