"""Shared Jinja2 template loading with per-site override support."""

from __future__ import annotations

from pathlib import Path

from jinja2 import (
    BaseLoader,
    ChoiceLoader,
    Environment,
    FileSystemLoader,
    PackageLoader,
    StrictUndefined,
    select_autoescape,
)

from blogctl.domain.formatting import format_date, from_now, pretty_bytes


def build_template_environment(group: str, *, site_root: Path | None = None) -> Environment:
    """Build a Jinja2 environment with user overrides before packaged defaults.

    User overrides are loaded from ``.blogctl/templates/`` inside the site.
    Both a namespaced directory (for example ``.blogctl/templates/site/``)
    and the shared root are supported so a site can replace a single page
    template without copying the rest.

    Undefined variables raise, so a template that reads a field the query
    did not provide fails the build instead of rendering blanks.
    """

    loaders: list[BaseLoader] = []
    if site_root is not None:
        template_root = site_root / ".blogctl" / "templates"
        loaders.append(FileSystemLoader([str(template_root / group), str(template_root)]))

    loaders.append(PackageLoader("blogctl", f"templates/{group}"))
    env = Environment(
        loader=ChoiceLoader(loaders),
        autoescape=select_autoescape(enabled_extensions=("html", "html.j2")),
        keep_trailing_newline=True,
        undefined=StrictUndefined,
    )
    env.filters["format_date"] = format_date
    env.filters["from_now"] = from_now
    env.filters["pretty_bytes"] = pretty_bytes
    return env
