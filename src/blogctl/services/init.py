"""InitService — scaffold a new site directory.

Creates ``blogctl.toml`` and a first post under ``src/``. Has no site graph
dependency: the site does not exist yet, so every method is a staticmethod.
"""

from __future__ import annotations

import logging
from datetime import date
from pathlib import Path

from jinja2 import TemplateError

from blogctl.config.discovery import CONFIG_FILENAME
from blogctl.infrastructure.filesystem import write_text_file
from blogctl.infrastructure.templates import build_template_environment
from blogctl.services.result import ServiceResult
from blogctl.services.telemetry import traced

logger = logging.getLogger(__name__)

SAMPLE_POST = Path("src") / "posts" / "hello-world.md"


class InitService:
    """Site scaffolding."""

    @staticmethod
    @traced
    def init_site(
        path: Path,
        *,
        title: str,
        author: str,
        today: date | None = None,
    ) -> ServiceResult:
        """Write the config file and a sample post into *path*."""
        op = "init_site"
        config_file = path / CONFIG_FILENAME
        if config_file.exists():
            return ServiceResult.failure(
                op, "ALREADY_INITIALIZED", f"{config_file} already exists", path=str(config_file)
            )

        env = build_template_environment("init")
        context = {
            "title": title,
            "author": author,
            "today": (today or date.today()).isoformat(),
        }
        created: list[str] = []
        try:
            write_text_file(config_file, env.get_template("blogctl.toml.j2").render(**context))
            created.append(CONFIG_FILENAME)

            post = path / SAMPLE_POST
            if not post.exists():
                write_text_file(post, env.get_template("hello-world.md.j2").render(**context))
                created.append(SAMPLE_POST.as_posix())
        except TemplateError as exc:
            return ServiceResult.failure(op, "TEMPLATE_ERROR", str(exc))
        except OSError as exc:
            return ServiceResult.failure(
                op, "OUTPUT_ERROR", f"Could not write to {path}: {exc}", path=str(path)
            )

        logger.info("Initialized site at %s", path)
        return ServiceResult(
            ok=True,
            op=op,
            data={"path": str(path), "title": title, "files": created},
        )
