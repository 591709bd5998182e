"""Markdown transformer — a Python-Markdown pipeline assembled from plugins.

The base pipeline covers GitHub-flavoured prose (tables, strikethrough,
autolinks, task lists, footnotes). Plugins contribute the rest through the
``markdown_extensions`` hook; highlighting and emoji arrive that way.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from markdown import Markdown
from markdown.extensions import Extension

from blogctl.infrastructure.highlight import PrismExtension

logger = logging.getLogger(__name__)

BASE_EXTENSIONS: list[str] = [
    "abbr",
    "attr_list",
    "def_list",
    "footnotes",
    "md_in_html",
    "sane_lists",
    "tables",
    "pymdownx.magiclink",
    "pymdownx.tasklist",
    "pymdownx.tilde",
]


class MarkdownCompiler:
    """Reusable markdown-to-HTML converter.

    One ``Markdown`` instance is built per compiler and reset between
    documents, so footnote and abbreviation state never leaks across posts.
    """

    def __init__(self, extensions: Sequence[Extension] = ()) -> None:
        names = list(BASE_EXTENSIONS)
        if not any(isinstance(ext, PrismExtension) for ext in extensions):
            # Without the highlighter, fences still need to become <pre><code>.
            names.append("fenced_code")
        self._md = Markdown(extensions=[*names, *extensions], output_format="html")
        logger.debug(
            "Markdown pipeline ready: %s",
            ", ".join([*names, *(type(ext).__name__ for ext in extensions)]),
        )

    def compile(self, text: str) -> str:
        """Convert markdown *text* to an HTML fragment."""
        self._md.reset()
        return self._md.convert(text)
