"""Shared pytest fixtures and test helpers for blogctl tests."""

from __future__ import annotations

import logging
from collections.abc import Callable, Generator
from pathlib import Path

import pytest
from click.testing import CliRunner

from blogctl.config.settings import BlogSettings
from blogctl.infrastructure.site import SiteGraph
from blogctl.services.telemetry import disable_telemetry

FIRST_POST = """\
---
title: First post
date: 2017-08-10
excerpt: ""
---

Hello there. This is the very first post on the blog, and it goes on for a
while so that the derived excerpt has to be pruned somewhere near the one
hundred and forty character mark instead of showing everything.
"""

SECOND_POST = """\
---
title: Second post
date: 2017-09-01
excerpt: A hand-written summary.
---

Second post body with `inline` code.
"""


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep host BLOGCTL_* variables out of settings resolution."""
    monkeypatch.delenv("BLOGCTL_CONFIG", raising=False)
    monkeypatch.delenv("BLOGCTL_SITE_ROOT", raising=False)


@pytest.fixture(autouse=True)
def _reset_cli_state() -> Generator[None]:
    """Undo the logging and telemetry setup done by AppContext in CLI tests."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    blog_level = logging.getLogger("blogctl").level
    yield
    disable_telemetry()
    root.handlers = handlers
    root.setLevel(level)
    logging.getLogger("blogctl").setLevel(blog_level)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def site_root(tmp_path: Path) -> Path:
    """Temporary site with two dated posts and one non-markdown file.

    This is the single source of truth for the sample site layout.
    All site-related fixtures (settings, site, _isolated_site) build on it.
    """
    posts = tmp_path / "src" / "posts"
    posts.mkdir(parents=True)
    (posts / "first-post.md").write_text(FIRST_POST, encoding="utf-8")
    (posts / "second-post.md").write_text(SECOND_POST, encoding="utf-8")
    (tmp_path / "src" / "profile.jpg").write_bytes(b"\xff\xd8\xff" + b"\x00" * 1337)
    return tmp_path


@pytest.fixture
def write_post(site_root: Path) -> Callable[..., Path]:
    """Write a markdown file under ``src/`` and return its path."""

    def _write(relative: str, *, body: str = "Body.", **frontmatter: str) -> Path:
        lines = ["---", *(f"{k}: {v}" for k, v in frontmatter.items()), "---", "", body, ""]
        path = site_root / "src" / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text("\n".join(lines), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def settings(site_root: Path) -> BlogSettings:
    return BlogSettings.from_cli(site_root=site_root)


@pytest.fixture
def site(settings: BlogSettings) -> SiteGraph:
    """SiteGraph over the sample site with the default built-in plugins."""
    return SiteGraph(settings)


@pytest.fixture
def _isolated_site(site_root: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Change CWD to the sample site so the CLI resolves it as the site root.

    Use via ``@pytest.mark.usefixtures("_isolated_site")`` on command test
    classes.
    """
    monkeypatch.chdir(site_root)
