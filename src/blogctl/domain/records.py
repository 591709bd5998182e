"""Read-only records produced by the content pipeline.

Templates and the query service only ever see these frozen models:

- :class:`SiteMetadata` — the ``[site]`` config projected for templates.
- :class:`FileNode` — one file under the content source directory.
- :class:`MarkdownNode` — a compiled markdown document with its parent file.
"""

from __future__ import annotations

import datetime as dt
from typing import Any

from pydantic import BaseModel, Field

from blogctl.domain.formatting import format_date, from_now


class SiteMetadata(BaseModel):
    """Site-wide metadata exposed to every layout and page."""

    model_config = {"frozen": True}

    title: str
    heading: str = ""
    author: str = ""
    bio: str = ""
    description: str = ""
    site_url: str = ""


class FileNode(BaseModel):
    """A file discovered by the filesystem content source."""

    model_config = {"frozen": True}

    id: str
    source_instance_name: str
    relative_path: str
    absolute_path: str
    name: str
    extension: str
    size: int
    pretty_size: str
    birth_time: dt.datetime
    modified_time: dt.datetime

    @property
    def is_markdown(self) -> bool:
        return self.extension.lower() in ("md", "markdown")

    def birth_time_from_now(self, now: dt.datetime | None = None) -> str:
        """Relative creation age, e.g. ``"2 months ago"``."""
        return from_now(self.birth_time, now)


class Frontmatter(BaseModel):
    """Frontmatter fields the templates rely on; everything else lands in ``extra``."""

    model_config = {"frozen": True}

    title: str = ""
    excerpt: str = ""
    date: dt.datetime | dt.date | None = None
    extra: dict[str, Any] = Field(default_factory=dict)

    def formatted_date(self, fmt: str = "DD MMMM, YYYY") -> str:
        """The date in *fmt*; aware datetimes are shown in UTC, as they sort."""
        value = self.date
        if value is None:
            return ""
        if isinstance(value, dt.datetime) and value.tzinfo is not None:
            value = value.astimezone(dt.UTC)
        return format_date(value, fmt)


class NodeFields(BaseModel):
    """Routing fields attached to a markdown node by plugins."""

    model_config = {"frozen": True}

    slug: str
    permalink: str


class MarkdownNode(BaseModel):
    """A markdown document compiled to HTML."""

    model_config = {"frozen": True}

    id: str
    file: FileNode
    frontmatter: Frontmatter
    excerpt: str
    html: str
    fields: NodeFields
    word_count: int = 0
    time_to_read: int = 1

    @property
    def display_excerpt(self) -> str:
        """Frontmatter excerpt when provided, otherwise the derived excerpt."""
        return self.frontmatter.excerpt or self.excerpt

    def sort_key(self) -> tuple[int, float, str]:
        """Key for date-descending order; undated documents sort last."""
        fm_date = self.frontmatter.date
        if fm_date is None:
            return (1, 0.0, self.file.relative_path)
        if not isinstance(fm_date, dt.datetime):
            fm_date = dt.datetime(fm_date.year, fm_date.month, fm_date.day)
        if fm_date.tzinfo is not None:
            fm_date = fm_date.astimezone(dt.UTC).replace(tzinfo=None)
        return (0, -(fm_date - dt.datetime.min).total_seconds(), self.file.relative_path)
