"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, blogctl.toml only contains overrides.
A fresh site needs only [site] title.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

# --- blogctl.toml sections ---


class SiteConfig(BaseModel):
    """[site] section — metadata exposed to every template."""

    model_config = {"frozen": True}

    title: str = "Gatsby Default Starter"
    heading: str = "BRandons Kewl Website"
    author: str = "btnwtn"
    bio: str = (
        "Brandon Newton is a <i>Software Engineer</i> specializing in performant "
        "and responsive Frontend development. Currently located in Brooklyn, NY."
    )
    description: str = ""
    site_url: str = ""
    profile_image: str | None = "profile.jpg"


class SourceConfig(BaseModel):
    """[source] section — the filesystem content source."""

    model_config = {"frozen": True}

    name: str = "src"
    path: str = "src"
    ignore: list[str] = Field(default_factory=list)


class PrismConfig(BaseModel):
    """[markdown.prism] section."""

    model_config = {"frozen": True}

    enabled: bool = True
    class_prefix: str = "language-"
    inline_code_marker: str | None = "±"
    aliases: dict[str, str] = Field(default_factory=dict)
    style: str = "default"


class TwemojiConfig(BaseModel):
    """[markdown.twemoji] section."""

    model_config = {"frozen": True}

    enabled: bool = True
    base_url: str = "https://cdn.jsdelivr.net/gh/jdecked/twemoji@latest/assets/"
    extension: Literal["svg", "png"] = "svg"
    class_name: str = "emoji"


class MarkdownConfig(BaseModel):
    """[markdown] section — the markdown transformer and its sub-plugins."""

    model_config = {"frozen": True}

    excerpt_length: int = 140
    excerpt_separator: str | None = None
    prism: PrismConfig = Field(default_factory=PrismConfig)
    twemoji: TwemojiConfig = Field(default_factory=TwemojiConfig)


class HelmetConfig(BaseModel):
    """[helmet] section — page metadata emitted into <head>."""

    model_config = {"frozen": True}

    enabled: bool = True
    lang: str = "en"
    meta: dict[str, str] = Field(default_factory=dict)


class BuildConfig(BaseModel):
    """[build] section."""

    model_config = {"frozen": True}

    output_dir: str = "public"
    clean: bool = True
    date_format: str = "DD MMMM, YYYY"
    permalink_pattern: str = "{slug}"
