"""Human-readable rendering of ServiceResult, one renderer per ``op``.

Renderers print onto a StringIO-backed Rich console (see
:mod:`blogctl.output.console`); ops without a renderer get every data key
as a ``key: value`` line.
"""

from __future__ import annotations

import json
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from rich.padding import Padding
from rich.table import Table
from rich.text import Text
from rich.tree import Tree

from blogctl.output.console import create_console, get_output

if TYPE_CHECKING:
    from rich.console import Console

    from blogctl.services.result import ServiceResult

Renderer = Callable[["ServiceResult", "Console", bool], None]

_RENDERERS: dict[str, Renderer] = {}

# Value styles for _field(); anything else prints unstyled.
_KEY_STYLES = {
    "id": "blog.id",
    "path": "blog.path",
    "output_dir": "blog.path",
    "title": "blog.title",
}


def _renders(op: str) -> Callable[[Renderer], Renderer]:
    def register(func: Renderer) -> Renderer:
        _RENDERERS[op] = func
        return func

    return register


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render *result* as text; plain when stdout is not a terminal."""
    console = create_console()
    if not result.ok:
        _render_error(result, console, verbose)
    else:
        _RENDERERS.get(result.op, _render_generic)(result, console, verbose)
        if verbose and result.meta:
            _render_meta(console, result.meta)
    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """``--quiet`` output: one line per listed item, else a status line.

    Files list as their relative path, posts as their permalink.
    """
    if not result.ok:
        message = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} — {message}"

    items = result.data.get("items")
    if isinstance(items, list) and items:
        return "\n".join(filter(None, map(_quiet_line, items)))
    return f"OK: {result.op}"


def _quiet_line(item: Any) -> str:
    if not isinstance(item, dict):
        return ""
    if "relative_path" in item:
        return str(item["relative_path"])
    permalink = (item.get("fields") or {}).get("permalink")
    return str(permalink or item.get("id", ""))


def _ok_line(console: Console, result: ServiceResult) -> None:
    console.print(Text.assemble(("OK", "blog.ok"), (f"  {result.op}", "blog.op")))


def _field(console: Console, key: str, value: Any) -> None:
    console.print(
        Text.assemble((f"  {key}: ", "blog.key"), (str(value), _KEY_STYLES.get(key, "")))
    )


def _render_meta(console: Console, meta: dict[str, Any]) -> None:
    console.print()
    console.print(Text("  meta:", style="dim"))
    for key, value in meta.items():
        if key == "telemetry":
            console.print(Padding(_span_tree(value), (0, 0, 0, 4)))
        else:
            console.print(f"    {key}: {value}")


def _span_label(span: dict[str, Any]) -> Text:
    duration = span.get("duration_ms", 0.0)
    if duration > 1000:
        style = "bold red"
    elif duration > 100:
        style = "yellow"
    else:
        style = "dim"
    label = Text.assemble((f"{duration:>8.2f}ms", style), f"  {span.get('name', '?')}")
    annotations = span.get("annotations")
    if annotations:
        label.append("  (" + ", ".join(f"{k}={v}" for k, v in annotations.items()) + ")")
    return label


def _add_spans(node: Tree, spans: list[dict[str, Any]]) -> None:
    for span in spans:
        _add_spans(node.add(_span_label(span)), span.get("children", []))


def _span_tree(root: dict[str, Any]) -> Tree:
    """Nest the telemetry span dict into a Rich tree, timings first."""
    tree = Tree(_span_label(root), guide_style="dim")
    _add_spans(tree, root.get("children", []))
    return tree


def _render_error(result: ServiceResult, console: Console, verbose: bool) -> None:
    error = result.error
    console.print(
        Text.assemble(
            ("ERROR", "blog.error"),
            (f"  {result.op}", "blog.op"),
            f" — {error.message if error else 'Unknown error'}",
        )
    )
    if verbose and error and error.detail:
        console.print(Text("  detail:", style="dim"))
        for key, value in error.detail.items():
            console.print(f"    {key}: {value}")


def _table(*columns: tuple[str, dict[str, Any]]) -> Table:
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    for header, options in columns:
        table.add_column(header, **options)
    return table


@_renders("site_metadata")
def _render_site(result: ServiceResult, console: Console, verbose: bool) -> None:
    _ok_line(console, result)
    for key, value in result.data.get("site", {}).items():
        if value:
            _field(console, key, value)


@_renders("all_files")
def _render_files(result: ServiceResult, console: Console, verbose: bool) -> None:
    """The files page as a table: relativePath, prettySize, extension, birthTime."""
    items = result.data.get("items", [])
    columns: list[tuple[str, dict[str, Any]]] = [
        ("relativePath", {"style": "blog.path"}),
        ("prettySize", {"style": "blog.size", "justify": "right"}),
        ("extension", {}),
        ("birthTime", {"style": "blog.date"}),
    ]
    keys = ["relative_path", "pretty_size", "extension", "birth_time"]
    if verbose:
        columns.append(("ID", {"style": "blog.id", "no_wrap": True}))
        keys.append("id")

    table = _table(*columns)
    for item in items:
        table.add_row(*(str(item.get(key, "")) for key in keys))

    console.print(Text(f"/{result.data.get('source', '')}", style="blog.title"))
    console.print(table)
    console.print(f"\n{result.data.get('total_count', len(items))} files")


@_renders("all_markdown")
def _render_posts(result: ServiceResult, console: Console, verbose: bool) -> None:
    items = result.data.get("items", [])
    table = _table(
        ("Date", {"style": "blog.date", "no_wrap": True}),
        ("Title", {"style": "blog.title"}),
        ("Permalink", {"style": "blog.path"}),
        ("Read", {"justify": "right"}),
        *([("Excerpt", {})] if verbose else []),
    )
    for item in items:
        frontmatter = item.get("frontmatter", {})
        row = [
            str(frontmatter.get("date") or ""),
            str(frontmatter.get("title") or ""),
            str(item.get("fields", {}).get("permalink", "")),
            f"{item.get('time_to_read', 0)} min",
        ]
        if verbose:
            row.append(str(frontmatter.get("excerpt") or item.get("excerpt", "")))
        table.add_row(*row)

    console.print(table)
    console.print(f"\nBlog Posts: {result.data.get('total_count', len(items))}")


@_renders("build_site")
def _render_build(result: ServiceResult, console: Console, verbose: bool) -> None:
    """Counts always; the written pages and stylesheets only with ``-v``."""
    _ok_line(console, result)
    data = result.data
    for key in ("output_dir", "page_count", "post_count", "file_count"):
        if key in data:
            _field(console, key, data[key])
    if verbose:
        for written in (*data.get("pages", []), *data.get("stylesheets", [])):
            console.print(f"    {written}")


@_renders("init_site")
def _render_init(result: ServiceResult, console: Console, verbose: bool) -> None:
    _ok_line(console, result)
    data = result.data
    for key in ("path", "title"):
        if key in data:
            _field(console, key, data[key])
    created = data.get("files", [])
    _field(console, "files_created", len(created))
    for name in created:
        console.print(f"    {name}")


def _render_generic(result: ServiceResult, console: Console, verbose: bool) -> None:
    _ok_line(console, result)
    for key, value in result.data.items():
        if isinstance(value, (dict, list)):
            value = json.dumps(value, separators=(",", ":"))
        _field(console, key, value)
