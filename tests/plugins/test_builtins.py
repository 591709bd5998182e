"""Tests for the built-in plugins."""

from __future__ import annotations

from datetime import UTC, date, datetime
from pathlib import Path

import pytest

from blogctl.config.models import HelmetConfig, PrismConfig, TwemojiConfig
from blogctl.config.settings import BlogSettings
from blogctl.domain.records import FileNode, Frontmatter, SiteMetadata
from blogctl.infrastructure.highlight import PrismExtension
from blogctl.infrastructure.twemoji import TwemojiExtension
from blogctl.plugins.builtins.helmet import HelmetPlugin
from blogctl.plugins.builtins.permalinks import PermalinkPlugin
from blogctl.plugins.builtins.prism import PrismPlugin
from blogctl.plugins.builtins.twemoji import TwemojiPlugin


def _file(relative_path: str) -> FileNode:
    stamp = datetime(2020, 1, 1, tzinfo=UTC)
    return FileNode(
        id="f",
        source_instance_name="src",
        relative_path=relative_path,
        absolute_path=f"/site/src/{relative_path}",
        name=Path(relative_path).stem,
        extension="md",
        size=10,
        pretty_size="10 B",
        birth_time=stamp,
        modified_time=stamp,
    )


@pytest.fixture
def plain_settings(tmp_path: Path) -> BlogSettings:
    return BlogSettings.from_cli(site_root=tmp_path)


class TestPermalinkPlugin:
    def test_derives_from_path(self, plain_settings: BlogSettings) -> None:
        fields = PermalinkPlugin().node_fields(
            file=_file("posts/hello.md"), frontmatter=Frontmatter(), settings=plain_settings
        )
        assert fields == {"slug": "/posts/hello/", "permalink": "/posts/hello/"}

    def test_frontmatter_slug(self, plain_settings: BlogSettings) -> None:
        fields = PermalinkPlugin().node_fields(
            file=_file("posts/hello.md"),
            frontmatter=Frontmatter(extra={"slug": "greeting"}),
            settings=plain_settings,
        )
        assert fields == {"slug": "/greeting", "permalink": "/greeting/"}

    def test_pattern_from_settings(self, tmp_path: Path) -> None:
        (tmp_path / "blogctl.toml").write_text(
            '[build]\npermalink_pattern = "/blog/{year}/{slug}"\n'
        )
        settings = BlogSettings.from_cli(site_root=tmp_path)
        fields = PermalinkPlugin().node_fields(
            file=_file("posts/hello.md"),
            frontmatter=Frontmatter(date=date(2017, 8, 10)),
            settings=settings,
        )
        assert fields is not None
        assert fields["permalink"] == "/blog/2017/posts/hello/"


class TestHelmetPlugin:
    def test_basic_tags(self) -> None:
        tags = HelmetPlugin().head_tags(site=SiteMetadata(title="Site"), page_title="Page")
        assert tags == [
            '<meta property="og:title" content="Page">',
            '<meta property="og:type" content="website">',
        ]

    def test_description_url_and_extra_meta(self) -> None:
        site = SiteMetadata(title="Site", description="About", site_url="https://x.dev")
        plugin = HelmetPlugin(HelmetConfig(meta={"twitter:card": "summary", "author": "me"}))
        tags = plugin.head_tags(site=site, page_title="")
        assert tags == [
            '<meta property="og:title" content="Site">',
            '<meta property="og:type" content="website">',
            '<meta name="description" content="About">',
            '<meta property="og:description" content="About">',
            '<meta property="og:url" content="https://x.dev">',
            '<meta name="author" content="me">',
            '<meta name="twitter:card" content="summary">',
        ]

    def test_values_are_escaped(self) -> None:
        tags = HelmetPlugin().head_tags(site=SiteMetadata(title="S"), page_title='"<x>"')
        assert tags is not None
        assert tags[0] == '<meta property="og:title" content="&quot;&lt;x&gt;&quot;">'


class TestMarkdownPlugins:
    def test_prism_contributes_extension_and_css(self, plain_settings: BlogSettings) -> None:
        plugin = PrismPlugin(PrismConfig(style="monokai"))
        extensions = plugin.markdown_extensions(settings=plain_settings)
        assert extensions is not None
        assert isinstance(extensions[0], PrismExtension)
        assert extensions[0].getConfig("inline_code_marker") == "±"
        sheets = plugin.site_stylesheets(settings=plain_settings)
        assert sheets is not None
        assert ".highlight" in sheets["prism.css"]

    def test_prism_without_marker(self, plain_settings: BlogSettings) -> None:
        plugin = PrismPlugin(PrismConfig(inline_code_marker=None))
        extensions = plugin.markdown_extensions(settings=plain_settings)
        assert extensions is not None
        assert extensions[0].getConfig("inline_code_marker") == ""

    def test_twemoji_contributes_extension_and_css(self, plain_settings: BlogSettings) -> None:
        plugin = TwemojiPlugin(TwemojiConfig(class_name="tw"))
        extensions = plugin.markdown_extensions(settings=plain_settings)
        assert extensions is not None
        assert isinstance(extensions[0], TwemojiExtension)
        sheets = plugin.site_stylesheets(settings=plain_settings)
        assert sheets is not None
        assert sheets["twemoji.css"].startswith("img.tw {")
