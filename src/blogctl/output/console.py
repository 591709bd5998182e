"""The Rich console renderers print onto, plus the ``blog.*`` styles.

Output is buffered in a StringIO so :func:`blogctl.output.formatters.format_result`
can hand a plain string back to click. Rich emits no color codes when it
is not attached to a terminal, which covers pipes and CliRunner.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

DEFAULT_WIDTH = 120

BLOG_THEME = Theme(
    {
        "blog.ok": "bold green",
        "blog.error": "bold red",
        "blog.warning": "bold yellow",
        "blog.op": "bold cyan",
        "blog.key": "dim",
        "blog.id": "bold blue",
        "blog.path": "dim",
        "blog.title": "bold",
        "blog.size": "magenta",
        "blog.date": "green",
    }
)


def create_console(*, width: int = DEFAULT_WIDTH, no_color: bool = False) -> Console:
    """A themed console writing into a fresh buffer, *width* columns wide."""
    return Console(
        file=StringIO(),
        theme=BLOG_THEME,
        width=width,
        no_color=no_color,
        highlight=False,
    )


def get_output(console: Console) -> str:
    buffer = console.file
    if not isinstance(buffer, StringIO):
        raise TypeError("console was not created by create_console()")
    return buffer.getvalue()
