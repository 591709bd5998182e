"""Built-in Helmet plugin: document metadata for every page's <head>."""

from __future__ import annotations

from html import escape
from typing import TYPE_CHECKING

import pluggy

from blogctl.config.models import HelmetConfig

if TYPE_CHECKING:
    from blogctl.domain.records import SiteMetadata

hookimpl = pluggy.HookimplMarker("blogctl")


def _meta(attr: str, key: str, content: str) -> str:
    return f'<meta {attr}="{escape(key, quote=True)}" content="{escape(content, quote=True)}">'


class HelmetPlugin:
    """Emits description and Open Graph tags plus any ``[helmet.meta]`` extras."""

    def __init__(self, config: HelmetConfig | None = None) -> None:
        self._config = config or HelmetConfig()

    @hookimpl
    def head_tags(self, site: SiteMetadata, page_title: str) -> list[str] | None:
        tags = [_meta("property", "og:title", page_title or site.title)]
        tags.append(_meta("property", "og:type", "website"))
        if site.description:
            tags.append(_meta("name", "description", site.description))
            tags.append(_meta("property", "og:description", site.description))
        if site.site_url:
            tags.append(_meta("property", "og:url", site.site_url))
        for name, content in sorted(self._config.meta.items()):
            tags.append(_meta("name", name, content))
        return tags
