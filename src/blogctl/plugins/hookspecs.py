"""Pluggy hook specifications for the blogctl build pipeline.

Four setup-time hooks let plugins shape the site as it is assembled
(markdown extensions, node routing fields, stylesheets, head tags).
One lifecycle hook fires after the output directory is written.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import pluggy

if TYPE_CHECKING:
    from markdown.extensions import Extension

    from blogctl.config.settings import BlogSettings
    from blogctl.domain.records import FileNode, Frontmatter, SiteMetadata

hookspec = pluggy.HookspecMarker("blogctl")


class BlogctlHookSpec:
    """Hook specifications for the blogctl plugin system."""

    @hookspec
    def markdown_extensions(self, settings: BlogSettings) -> list[Extension] | None:
        """Return Python-Markdown extensions to add to the transformer."""

    @hookspec(firstresult=True)
    def node_fields(
        self,
        file: FileNode,
        frontmatter: Frontmatter,
        settings: BlogSettings,
    ) -> dict[str, str] | None:
        """Return ``{"slug": ..., "permalink": ...}`` for a markdown document."""

    @hookspec
    def site_stylesheets(self, settings: BlogSettings) -> dict[str, str] | None:
        """Return ``{filename: css}`` stylesheets the layout should load."""

    @hookspec
    def head_tags(self, site: SiteMetadata, page_title: str) -> list[str] | None:
        """Return HTML fragments to place inside ``<head>``."""

    @hookspec
    def post_build(self, output_dir: str, pages: list[str], stats: dict[str, Any]) -> None:
        """Called after the site has been written to *output_dir*."""
