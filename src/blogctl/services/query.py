"""QueryService — the three query shapes templates are written against.

- ``site_metadata``: the site title and the rest of ``[site]``.
- ``all_files``: every source file with path, pretty size, extension and
  relative creation time.
- ``all_markdown``: markdown documents sorted by date descending with
  frontmatter, derived excerpt and routing fields.
"""

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import Any

from blogctl.domain.records import FileNode, MarkdownNode
from blogctl.infrastructure.site import DocumentError
from blogctl.services.base import BaseService
from blogctl.services.result import ServiceResult
from blogctl.services.telemetry import traced


def file_row(node: FileNode, *, now: datetime | None = None) -> dict[str, Any]:
    """The files-page projection of a file record."""
    return {
        "id": node.id,
        "relative_path": node.relative_path,
        "pretty_size": node.pretty_size,
        "extension": node.extension,
        "birth_time": node.birth_time_from_now(now),
    }


def markdown_summary(node: MarkdownNode, *, date_format: str) -> dict[str, Any]:
    """The index-page projection of a markdown record."""
    return {
        "id": node.id,
        "frontmatter": {
            "title": node.frontmatter.title,
            "excerpt": node.frontmatter.excerpt,
            "date": node.frontmatter.formatted_date(date_format),
        },
        "excerpt": node.excerpt,
        "fields": {
            "slug": node.fields.slug,
            "permalink": node.fields.permalink,
        },
        "time_to_read": node.time_to_read,
    }


class QueryService(BaseService):
    """Read-only queries over the site graph."""

    @traced
    def site_metadata(self) -> ServiceResult:
        site = self._site.site_metadata()
        return ServiceResult(ok=True, op="site_metadata", data={"site": site.model_dump()})

    @traced
    def all_files(self, *, now: datetime | None = None) -> ServiceResult:
        """List every file under the content source, ordered by relative path."""
        op = "all_files"
        if not self._site.source_dir.is_dir():
            return _missing_source(op, self._site.source_dir)

        files = self._site.files()
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "source": self._site.settings.source.name,
                "total_count": len(files),
                "items": [file_row(f, now=now) for f in files],
            },
        )

    @traced
    def all_markdown(self, *, limit: int | None = None) -> ServiceResult:
        """List markdown documents, newest first."""
        op = "all_markdown"
        if not self._site.source_dir.is_dir():
            return _missing_source(op, self._site.source_dir)

        try:
            documents = self._site.documents()
        except DocumentError as exc:
            return ServiceResult.failure(
                op, "INVALID_CONTENT", str(exc), path=exc.relative_path
            )

        date_format = self._site.settings.build.date_format
        selected = documents if limit is None else documents[:limit]
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "total_count": len(documents),
                "items": [markdown_summary(d, date_format=date_format) for d in selected],
            },
        )


def _missing_source(op: str, source_dir: Path) -> ServiceResult:
    return ServiceResult.failure(
        op,
        "NO_CONTENT_SOURCE",
        f"Content source directory not found: {source_dir}",
        path=str(source_dir),
    )
