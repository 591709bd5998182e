"""Content rules — frontmatter parsing, excerpts, slugs, and node ids.

Pure functions only; file I/O lives in :mod:`blogctl.infrastructure.filesystem`
and markdown compilation in :mod:`blogctl.infrastructure.transformer`.
"""

from __future__ import annotations

import datetime as dt
import re
import uuid
from pathlib import PurePosixPath
from typing import Any

from markupsafe import Markup
from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from blogctl.domain.records import Frontmatter

PRUNE_SUFFIX = "…"

# Namespace for deterministic node ids.
NODE_NAMESPACE = uuid.UUID("6c1d0a9e-5b57-4e1e-9f0f-8d1f0f3e2a4b")


class FrontmatterError(ValueError):
    """Raised when a document's YAML frontmatter block cannot be parsed."""


# ---------------------------------------------------------------------------
# Frontmatter
# ---------------------------------------------------------------------------

# Opening ``---`` on the first line, closing ``---`` on a line of its own.
_FRONTMATTER_RE = re.compile(
    r"\A---[ \t]*\n(?P<yaml>.*?\n)??---[ \t]*(?:\n|\Z)",
    re.DOTALL,
)


def parse_frontmatter(content: str) -> tuple[dict[str, Any], str]:
    """Split a markdown file into its YAML frontmatter and its body.

    Without a complete ``---`` block the whole of *content* is the body.
    A leading byte-order mark is ignored.
    One blank line between the block and the body is dropped.

    Raises:
        FrontmatterError: The block is not valid YAML or not a mapping.
    """
    normalized = content.removeprefix("\ufeff").replace("\r\n", "\n")
    match = _FRONTMATTER_RE.match(normalized)
    if match is None:
        return {}, content

    body = normalized[match.end() :]
    body = body[1:] if body.startswith("\n") else body

    # ruamel's loader keeps state between loads; one parser per document.
    yaml = YAML()
    yaml.preserve_quotes = True
    try:
        loaded = yaml.load(match.group("yaml") or "")
    except YAMLError as exc:
        raise FrontmatterError(str(exc)) from exc

    if loaded is None:
        return {}, body
    if not isinstance(loaded, dict):
        raise FrontmatterError(f"frontmatter must be a mapping, got {type(loaded).__name__}")
    return dict(loaded), body


def build_frontmatter(raw: dict[str, Any]) -> Frontmatter:
    """Project a raw frontmatter mapping onto :class:`Frontmatter`.

    ``title`` and ``excerpt`` are coerced to strings (``None`` becomes empty);
    unknown keys are preserved in ``extra``.
    """
    extra = {k: v for k, v in raw.items() if k not in ("title", "excerpt", "date")}
    date_value = raw.get("date")
    if isinstance(date_value, str) and not date_value.strip():
        date_value = None
    return Frontmatter(
        title=str(raw.get("title") or ""),
        excerpt=str(raw.get("excerpt") or "").strip(),
        date=date_value,
        extra=extra,
    )


# ---------------------------------------------------------------------------
# Excerpts
# ---------------------------------------------------------------------------


def html_to_text(html: str) -> str:
    """Strip tags, unescape entities, and collapse whitespace."""
    return Markup(html).striptags()


def prune(text: str, length: int, suffix: str = PRUNE_SUFFIX) -> str:
    """Truncate *text* to at most *length* characters on a word boundary.

    Appends *suffix* when anything was cut. Never returns something longer
    than the original text.
    """
    if len(text) <= length:
        return text

    window = text[: length + 1]
    if re.search(r"\w\w$", window):
        kept = re.sub(r"\s*\S+$", "", window)
    else:
        kept = window[:-1].rstrip()

    pruned = kept + suffix
    if len(pruned) > len(text):
        return text
    return pruned


def derive_excerpt(
    html: str,
    *,
    length: int = 140,
    separator: str | None = None,
) -> str:
    """Derive a plain-text excerpt from compiled document HTML.

    When *separator* appears in the HTML, everything before it becomes the
    excerpt untruncated. Otherwise the plain text is pruned to *length*.
    """
    if separator and separator in html:
        return html_to_text(html.split(separator, 1)[0])
    return prune(html_to_text(html), length)


# ---------------------------------------------------------------------------
# Identity and routing
# ---------------------------------------------------------------------------


def node_id(source_instance_name: str, relative_path: str) -> str:
    """Stable id for a node derived from its source and relative path."""
    return str(uuid.uuid5(NODE_NAMESPACE, f"{source_instance_name}:{relative_path}"))


def derive_slug(relative_path: str) -> str:
    """Turn a source-relative file path into a URL path.

    ``posts/hello.md`` becomes ``/posts/hello/``; an ``index.md`` maps to
    its directory, so ``posts/hello/index.md`` is also ``/posts/hello/``.
    """
    path = PurePosixPath(relative_path)
    parts = list(path.parent.parts)
    if path.stem != "index":
        parts.append(path.stem)
    if not parts:
        return "/"
    return "/" + "/".join(parts) + "/"


def expand_permalink(pattern: str, slug: str, date: dt.date | None) -> str:
    """Fill a permalink pattern like ``/blog/{year}/{slug}``.

    ``{slug}`` keeps its own slashes; the result always starts and ends
    with a single ``/``.
    """
    values: dict[str, str] = {"slug": slug.strip("/")}
    if date is not None:
        values |= {
            "year": f"{date.year:04d}",
            "month": f"{date.month:02d}",
            "day": f"{date.day:02d}",
        }
    try:
        expanded = pattern.format(**values)
    except KeyError as exc:
        msg = f"Permalink pattern {pattern!r} needs {exc.args[0]!r}, which this document lacks"
        raise ValueError(msg) from exc

    cleaned = "/".join(part for part in expanded.split("/") if part)
    return f"/{cleaned}/" if cleaned else "/"
