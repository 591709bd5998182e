"""Built-in permalink plugin: slug and permalink fields for markdown nodes.

Frontmatter ``slug`` / ``permalink`` keys win; otherwise the slug comes
from the source path and the permalink from ``[build] permalink_pattern``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import pluggy

from blogctl.domain.content import derive_slug, expand_permalink

if TYPE_CHECKING:
    from blogctl.config.settings import BlogSettings
    from blogctl.domain.records import FileNode, Frontmatter

hookimpl = pluggy.HookimplMarker("blogctl")


class PermalinkPlugin:
    """Routes each document to a stable URL."""

    @hookimpl(trylast=True)
    def node_fields(
        self,
        file: FileNode,
        frontmatter: Frontmatter,
        settings: BlogSettings,
    ) -> dict[str, str] | None:
        slug = str(frontmatter.extra.get("slug") or derive_slug(file.relative_path))
        if not slug.startswith("/"):
            slug = f"/{slug}"
        override = frontmatter.extra.get("permalink")
        if override:
            permalink = expand_permalink(str(override), slug, frontmatter.date)
        else:
            permalink = expand_permalink(settings.build.permalink_pattern, slug, frontmatter.date)
        return {"slug": slug, "permalink": permalink}
