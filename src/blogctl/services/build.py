"""BuildService — render the site into the output directory.

Page set:

- ``/index.html``: one summary section per document, newest first.
- ``/files/index.html``: one table row per source file.
- ``<permalink>/index.html``: one page per document.

Plus ``styles/`` (global and plugin stylesheets) and ``static/`` (the
profile image under a content-hashed name).
"""

from __future__ import annotations

import hashlib
import logging
import shutil
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime
from pathlib import Path, PurePosixPath
from typing import TYPE_CHECKING, Any

from jinja2 import TemplateError

from blogctl.infrastructure.filesystem import write_text_file
from blogctl.infrastructure.site import DocumentError
from blogctl.infrastructure.templates import build_template_environment
from blogctl.services.base import BaseService
from blogctl.services.result import ServiceResult
from blogctl.services.telemetry import trace_span, traced

if TYPE_CHECKING:
    from jinja2 import Environment

    from blogctl.domain.records import FileNode, MarkdownNode, SiteMetadata

logger = logging.getLogger(__name__)

FILES_PERMALINK = "/files/"
RESERVED_PERMALINKS = frozenset({"/", FILES_PERMALINK})
GLOBAL_STYLESHEET = "global.css"


@dataclass(frozen=True)
class PageChrome:
    """Everything the layout needs besides the page's own content."""

    site: SiteMetadata
    lang: str = "en"
    stylesheets: list[str] = field(default_factory=list)
    profile_image_url: str | None = None
    date_format: str = "DD MMMM, YYYY"
    source_name: str = "src"


class SiteRenderer:
    """Pure projections of records into HTML, one method per page template."""

    def __init__(
        self,
        env: Environment,
        chrome: PageChrome,
        *,
        head_tags: Callable[[str], list[str]] | None = None,
    ) -> None:
        self._env = env
        self._chrome = chrome
        self._head_tags = head_tags or (lambda _title: [])

    def _render(self, template: str, page_title: str, **context: Any) -> str:
        chrome = self._chrome
        return self._env.get_template(template).render(
            site=chrome.site,
            lang=chrome.lang,
            stylesheets=chrome.stylesheets,
            profile_image_url=chrome.profile_image_url,
            date_format=chrome.date_format,
            head_tags=self._head_tags(page_title),
            page_title=page_title,
            **context,
        )

    def index(self, documents: list[MarkdownNode]) -> str:
        return self._render(
            "index.html.j2",
            self._chrome.site.title,
            posts=documents,
            total_count=len(documents),
            files_url=FILES_PERMALINK,
        )

    def files(self, files: list[FileNode], *, now: datetime | None = None) -> str:
        current = now or datetime.now(UTC)
        return self._render(
            "files.html.j2",
            f"/{self._chrome.source_name}",
            files=files,
            now=current,
            source_name=self._chrome.source_name,
        )

    def post(self, document: MarkdownNode) -> str:
        return self._render(
            "post.html.j2",
            document.frontmatter.title or self._chrome.site.title,
            post=document,
        )


def page_path(permalink: str) -> PurePosixPath:
    """Output path, relative to the output dir, for a permalink."""
    parts = [p for p in permalink.split("/") if p]
    return PurePosixPath(*parts, "index.html") if parts else PurePosixPath("index.html")


def hashed_asset_name(path: Path) -> str:
    digest = hashlib.sha1(path.read_bytes(), usedforsecurity=False).hexdigest()[:8]
    return f"{path.stem}-{digest}{path.suffix}"


def _is_within(child: Path, parent: Path) -> bool:
    return child == parent or child.is_relative_to(parent)


class BuildService(BaseService):
    """Render every page and asset of the site."""

    @traced
    def build(self, *, now: datetime | None = None) -> ServiceResult:
        """Write the whole site to the configured output directory."""
        op = "build_site"
        site = self._site
        settings = site.settings
        warnings: list[str] = []
        output_dir = site.output_dir

        if not site.source_dir.is_dir():
            return ServiceResult.failure(
                op,
                "NO_CONTENT_SOURCE",
                f"Content source directory not found: {site.source_dir}",
                path=str(site.source_dir),
            )

        if (
            _is_within(site.source_dir, output_dir)
            or _is_within(site.root.resolve(), output_dir)
            or _is_within(output_dir, site.source_dir)
        ):
            return ServiceResult.failure(
                op,
                "OUTPUT_ERROR",
                f"Output directory {output_dir} overlaps the site or its sources",
                path=str(output_dir),
            )

        with trace_span("source") as span:
            try:
                documents = site.documents()
            except DocumentError as exc:
                return ServiceResult.failure(
                    op, "INVALID_CONTENT", str(exc), path=exc.relative_path
                )
            files = site.files()
            if span:
                span.annotate("documents", len(documents))
                span.annotate("files", len(files))

        for doc in documents:
            if doc.fields.permalink in RESERVED_PERMALINKS:
                return ServiceResult.failure(
                    op,
                    "INVALID_CONTENT",
                    f"{doc.file.relative_path}: permalink {doc.fields.permalink!r} is reserved",
                    path=doc.file.relative_path,
                )

        try:
            if settings.build.clean and output_dir.exists():
                shutil.rmtree(output_dir)
            output_dir.mkdir(parents=True, exist_ok=True)

            with trace_span("assets"):
                env = build_template_environment("assets", site_root=site.root)
                stylesheets = self._write_stylesheets(env, output_dir)
                profile_url = self._copy_profile_image(output_dir, warnings)

            renderer = SiteRenderer(
                build_template_environment("site", site_root=site.root),
                PageChrome(
                    site=site.site_metadata(),
                    lang=settings.helmet.lang,
                    stylesheets=stylesheets,
                    profile_image_url=profile_url,
                    date_format=settings.build.date_format,
                    source_name=settings.source.name,
                ),
                head_tags=site.head_tags,
            )

            pages: list[str] = []
            with trace_span("render") as span:
                pages.append(self._write_page(output_dir, "/", renderer.index(documents)))
                pages.append(
                    self._write_page(output_dir, FILES_PERMALINK, renderer.files(files, now=now))
                )
                for doc in documents:
                    pages.append(
                        self._write_page(output_dir, doc.fields.permalink, renderer.post(doc))
                    )
                if span:
                    span.annotate("pages", len(pages))
        except TemplateError as exc:
            logger.debug("Template rendering failed", exc_info=True)
            return ServiceResult.failure(
                op, "TEMPLATE_ERROR", f"Template rendering failed: {exc}"
            )
        except OSError as exc:
            return ServiceResult.failure(
                op, "OUTPUT_ERROR", f"Could not write output: {exc}", path=str(output_dir)
            )

        stats = {"pages": len(pages), "documents": len(documents), "files": len(files)}
        self._dispatch_event(
            "post_build",
            {"output_dir": str(output_dir), "pages": list(pages), "stats": stats},
            warnings,
        )
        logger.info("Built %d pages into %s", len(pages), output_dir)

        return ServiceResult(
            ok=True,
            op=op,
            data={
                "output_dir": str(output_dir),
                "page_count": len(pages),
                "post_count": len(documents),
                "file_count": len(files),
                "pages": pages,
                "stylesheets": stylesheets,
            },
            warnings=warnings,
        )

    # ------------------------------------------------------------------

    def _write_page(self, output_dir: Path, permalink: str, html: str) -> str:
        rel = page_path(permalink)
        write_text_file(output_dir / rel, html)
        return rel.as_posix()

    def _write_stylesheets(self, env: Environment, output_dir: Path) -> list[str]:
        """Write global + plugin CSS under ``styles/``; return their URLs in load order."""
        sheets = {GLOBAL_STYLESHEET: env.get_template(GLOBAL_STYLESHEET).render()}
        for name, css in self._site.stylesheets().items():
            if name != GLOBAL_STYLESHEET:
                sheets[name] = css

        urls: list[str] = []
        for name, css in sheets.items():
            write_text_file(output_dir / "styles" / name, css)
            urls.append(f"/styles/{name}")
        return urls

    def _copy_profile_image(self, output_dir: Path, warnings: list[str]) -> str | None:
        image = self._site.settings.site.profile_image
        if not image:
            return None

        source = self._site.source_dir / image
        if not source.is_file():
            warnings.append(f"Profile image not found: {image}")
            return None

        name = hashed_asset_name(source)
        dest = output_dir / "static" / name
        dest.parent.mkdir(parents=True, exist_ok=True)
        shutil.copy2(source, dest)
        return f"/static/{name}"
