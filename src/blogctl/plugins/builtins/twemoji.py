"""Built-in Twemoji plugin: emoji rendered as Twemoji images."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pluggy

from blogctl.config.models import TwemojiConfig
from blogctl.infrastructure.twemoji import TwemojiExtension

if TYPE_CHECKING:
    from markdown.extensions import Extension

    from blogctl.config.settings import BlogSettings

hookimpl = pluggy.HookimplMarker("blogctl")

STYLESHEET_NAME = "twemoji.css"


class TwemojiPlugin:
    """Emoji images configured by ``[markdown.twemoji]``."""

    def __init__(self, config: TwemojiConfig | None = None) -> None:
        self._config = config or TwemojiConfig()

    @hookimpl
    def markdown_extensions(self, settings: BlogSettings) -> list[Extension] | None:
        return [
            TwemojiExtension(
                base_url=self._config.base_url,
                extension=self._config.extension,
                class_name=self._config.class_name,
            )
        ]

    @hookimpl
    def site_stylesheets(self, settings: BlogSettings) -> dict[str, str] | None:
        cls = self._config.class_name
        css = (
            f"img.{cls} {{\n"
            "  height: 1em;\n"
            "  width: 1em;\n"
            "  margin: 0 .05em 0 .1em;\n"
            "  vertical-align: -0.1em;\n"
            "}\n"
        )
        return {STYLESHEET_NAME: css}
