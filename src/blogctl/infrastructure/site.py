"""SiteGraph — the in-memory data layer every service and template reads.

The SiteGraph is the single dependency injected into every service. It owns
the plugin manager and the markdown transformer, and lazily builds the
three record collections the templates query:

- site metadata (from ``[site]``),
- every file under the content source,
- every markdown document, compiled and sorted newest first.

Records are rebuilt from the filesystem on first access after
construction or :meth:`invalidate`; nothing persists between runs.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from pydantic import ValidationError

from blogctl.domain.content import (
    FrontmatterError,
    build_frontmatter,
    derive_excerpt,
    html_to_text,
    node_id,
    parse_frontmatter,
)
from blogctl.domain.formatting import count_words, time_to_read
from blogctl.domain.records import FileNode, MarkdownNode, NodeFields, SiteMetadata
from blogctl.infrastructure.filesystem import read_text_file, source_file_nodes
from blogctl.infrastructure.transformer import MarkdownCompiler

if TYPE_CHECKING:
    from blogctl.config.settings import BlogSettings
    from blogctl.plugins.manager import PluginManager

logger = logging.getLogger(__name__)


class DocumentError(Exception):
    """A markdown document could not be turned into a node."""

    def __init__(self, relative_path: str, message: str) -> None:
        super().__init__(f"{relative_path}: {message}")
        self.relative_path = relative_path
        self.message = message


class SiteGraph:
    """Lazily-built record collections for one site root."""

    def __init__(self, settings: BlogSettings) -> None:
        self._settings = settings
        self._plugins: PluginManager | None = None
        self._compiler: MarkdownCompiler | None = None
        self._files: list[FileNode] | None = None
        self._documents: list[MarkdownNode] | None = None

    # -- Properties -----------------------------------------------------

    @property
    def settings(self) -> BlogSettings:
        return self._settings

    @property
    def root(self) -> Path:
        return self._settings.site_root

    @property
    def source_dir(self) -> Path:
        return self._settings.source_dir

    @property
    def output_dir(self) -> Path:
        return self._settings.output_dir

    @property
    def plugins(self) -> PluginManager:
        """The plugin manager (created on first access)."""
        if self._plugins is None:
            self.init_plugins()
        assert self._plugins is not None
        return self._plugins

    @property
    def compiler(self) -> MarkdownCompiler:
        """The markdown transformer, built from plugin-contributed extensions."""
        if self._compiler is None:
            self._compiler = MarkdownCompiler(self.plugins.markdown_extensions(self._settings))
        return self._compiler

    # -- Plugins --------------------------------------------------------

    def init_plugins(self) -> None:
        """Create the PluginManager and register built-ins per config.

        Entry-point and ``.blogctl/plugins/`` plugins load first.
        """
        from blogctl.plugins.manager import PluginManager

        pm = PluginManager()
        pm.discover_and_load(local_dir=self.root / ".blogctl" / "plugins")
        pm.register_builtins(self._settings)
        self._plugins = pm
        self._compiler = None

    # -- Queries --------------------------------------------------------

    def site_metadata(self) -> SiteMetadata:
        site = self._settings.site
        return SiteMetadata(
            title=site.title,
            heading=site.heading,
            author=site.author,
            bio=site.bio,
            description=site.description,
            site_url=site.site_url,
        )

    def files(self) -> list[FileNode]:
        """Every file under the content source, ordered by relative path."""
        if self._files is None:
            self._files = source_file_nodes(
                self.source_dir,
                self._settings.source.name,
                ignore=list(self._settings.source.ignore),
            )
            logger.debug("Sourced %d files from %s", len(self._files), self.source_dir)
        return self._files

    def documents(self) -> list[MarkdownNode]:
        """Every markdown document, newest first; undated documents last.

        Raises:
            DocumentError: If any document has malformed frontmatter, cannot
                be routed, or collides with another document's permalink.
        """
        if self._documents is None:
            nodes = [self._markdown_node(f) for f in self.files() if f.is_markdown]
            seen: dict[str, str] = {}
            for node in nodes:
                other = seen.setdefault(node.fields.permalink, node.file.relative_path)
                if other != node.file.relative_path:
                    msg = f"permalink {node.fields.permalink!r} is already used by {other}"
                    raise DocumentError(node.file.relative_path, msg)
            self._documents = sorted(nodes, key=MarkdownNode.sort_key)
        return self._documents

    def stylesheets(self) -> dict[str, str]:
        """Plugin stylesheets keyed by output filename."""
        return self.plugins.stylesheets(self._settings)

    def head_tags(self, page_title: str) -> list[str]:
        return self.plugins.head_tags(self.site_metadata(), page_title)

    def invalidate(self) -> None:
        """Drop cached records so the next query re-reads the source."""
        self._files = None
        self._documents = None

    # -- Internals ------------------------------------------------------

    def _markdown_node(self, file: FileNode) -> MarkdownNode:
        rel = file.relative_path
        try:
            raw, body = parse_frontmatter(read_text_file(Path(file.absolute_path)))
            frontmatter = build_frontmatter(raw)
        except FrontmatterError as exc:
            raise DocumentError(rel, f"invalid frontmatter: {exc}") from exc
        except UnicodeDecodeError as exc:
            raise DocumentError(rel, f"not valid UTF-8: {exc}") from exc
        except ValidationError as exc:
            raise DocumentError(rel, f"invalid frontmatter field: {exc}") from exc

        try:
            routed = self.plugins.hook.node_fields(
                file=file, frontmatter=frontmatter, settings=self._settings
            )
            fields = NodeFields.model_validate(routed)
        except (ValueError, ValidationError) as exc:
            raise DocumentError(rel, f"cannot route document: {exc}") from exc

        html = self.compiler.compile(body)
        markdown_config = self._settings.markdown
        words = count_words(html_to_text(html))
        return MarkdownNode(
            id=node_id(file.source_instance_name, f"{rel}#markdown"),
            file=file,
            frontmatter=frontmatter,
            excerpt=derive_excerpt(
                html,
                length=markdown_config.excerpt_length,
                separator=markdown_config.excerpt_separator,
            ),
            html=html,
            fields=fields,
            word_count=words,
            time_to_read=time_to_read(words),
        )
