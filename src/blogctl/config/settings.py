"""BlogSettings: one frozen object for CLI flags, env vars and ``blogctl.toml``.

Later sources lose to earlier ones:

1. keyword arguments (the global CLI flags),
2. ``BLOGCTL_*`` env vars, ``__`` for nesting (``BLOGCTL_BUILD__OUTPUT_DIR``),
3. the ``blogctl.toml`` found by :func:`~blogctl.config.discovery.find_config`,
4. the defaults on the section models in :mod:`blogctl.config.models`.
"""

from __future__ import annotations

import tomllib
from contextvars import ContextVar
from pathlib import Path
from typing import Any

import click
from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from blogctl.config.discovery import find_config
from blogctl.config.models import (
    BuildConfig,
    HelmetConfig,
    MarkdownConfig,
    SiteConfig,
    SourceConfig,
)

# pydantic-settings builds its sources inside __init__, so the config file
# chosen by from_cli() reaches settings_customise_sources through here.
_pending_toml: ContextVar[Path | None] = ContextVar("blogctl_pending_toml", default=None)


def load_toml(path: Path | None) -> dict[str, Any]:
    """Parse *path*; a missing file reads as empty, a malformed one aborts the CLI."""
    if path is None or not path.is_file():
        return {}
    try:
        return tomllib.loads(path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as exc:
        raise click.ClickException(f"Invalid TOML in {path}: {exc}") from exc


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Feeds the top-level tables of ``blogctl.toml`` to pydantic."""

    def __init__(self, settings_cls: type[BaseSettings], toml_path: Path | None) -> None:
        super().__init__(settings_cls)
        self._tables = load_toml(toml_path)

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        return self._tables.get(field_name), field_name, field_name in self._tables

    def __call__(self) -> dict[str, Any]:
        return dict(self._tables)


class BlogSettings(BaseSettings):
    """Settings for one blogctl invocation, kept on ``AppContext.settings``.

    Attributes:
        site_root: Directory holding ``blogctl.toml`` (cwd when none was
            found). ``[source].path`` and ``[build].output_dir`` are
            relative to it.
        config_path: The config file that was read, if any.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "BLOGCTL_",
        "env_nested_delimiter": "__",
    }

    site_root: Path = Field(default_factory=Path.cwd)
    config_path: Path | None = None

    # Global flags
    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False
    no_interact: bool = False

    # blogctl.toml tables
    site: SiteConfig = Field(default_factory=SiteConfig)
    source: SourceConfig = Field(default_factory=SourceConfig)
    markdown: MarkdownConfig = Field(default_factory=MarkdownConfig)
    helmet: HelmetConfig = Field(default_factory=HelmetConfig)
    build: BuildConfig = Field(default_factory=BuildConfig)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        toml_source = TomlSettingsSource(settings_cls, _pending_toml.get())
        return init_settings, env_settings, toml_source

    @property
    def source_dir(self) -> Path:
        """Absolute directory scanned by the filesystem content source."""
        return (self.site_root / self.source.path).resolve()

    @property
    def output_dir(self) -> Path:
        return (self.site_root / self.build.output_dir).resolve()

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        site_root: Path | None = None,
        **flags: Any,
    ) -> BlogSettings:
        """Build settings for a CLI run.

        An explicit *config_path* that does not exist is ignored rather than
        triggering discovery. Without *site_root*, the site root is the
        config file's directory.
        """
        if config_path:
            explicit = Path(config_path)
            toml_path = explicit if explicit.is_file() else None
        else:
            toml_path = find_config(site_root)

        if site_root is None:
            site_root = toml_path.parent if toml_path else Path.cwd()

        token = _pending_toml.set(toml_path)
        try:
            return cls(site_root=site_root, config_path=toml_path, **flags)
        finally:
            _pending_toml.reset(token)
