"""Prism-compatible code highlighting for Python-Markdown, backed by Pygments.

Fenced blocks render as::

    <div class="highlight" data-language="js">
      <pre class="language-js"><code class="language-js">…</code></pre>
    </div>

so stylesheets written against Prism's ``language-*`` classes keep working,
while token spans carry Pygments' short classes (``.highlight .k``).

Inline code is highlighted when it carries the configured marker, e.g.
with marker ``±`` the span ```` `css±.btn { color: red }` ```` is lexed as CSS.
"""

from __future__ import annotations

import re
from html import escape
from typing import Any
from xml.etree.ElementTree import Element

from markdown import Markdown
from markdown.extensions import Extension
from markdown.inlinepatterns import InlineProcessor
from markdown.preprocessors import Preprocessor
from pygments import highlight
from pygments.formatters import HtmlFormatter
from pygments.lexer import Lexer
from pygments.lexers import TextLexer, get_lexer_by_name
from pygments.util import ClassNotFound

WRAPPER_CLASS = "highlight"

# ```lang{1,3-4}
FENCED_BLOCK_RE = re.compile(
    r"""
    (?P<fence>^(?:`{3,}|~{3,}))[ ]*
    (?P<lang>[\w#.+-]*)?[ ]*
    (?:\{(?P<hl>[\d,\s-]*)\})?[ ]*\n
    (?P<code>.*?)(?<=\n)
    (?P=fence)[ ]*$
    """,
    re.MULTILINE | re.DOTALL | re.VERBOSE,
)


def parse_line_ranges(ranges: str | None) -> list[int]:
    """Expand ``"1,3-5"`` into ``[1, 3, 4, 5]``; malformed parts are skipped."""
    if not ranges:
        return []
    lines: set[int] = set()
    for part in ranges.split(","):
        part = part.strip()
        if not part:
            continue
        if "-" in part:
            start, _, end = part.partition("-")
            if start.strip().isdigit() and end.strip().isdigit():
                lines.update(range(int(start), int(end) + 1))
        elif part.isdigit():
            lines.add(int(part))
    return sorted(lines)


class PrismHighlighter:
    """Resolve languages through the alias table and render highlighted HTML."""

    def __init__(
        self, *, class_prefix: str = "language-", aliases: dict[str, str] | None = None
    ) -> None:
        self.class_prefix = class_prefix
        self.aliases = {k.lower(): v for k, v in (aliases or {}).items()}

    def resolve_language(self, lang: str | None) -> str:
        if not lang:
            return "text"
        lang = lang.lower()
        return self.aliases.get(lang, lang)

    def _lexer(self, language: str) -> Lexer:
        try:
            return get_lexer_by_name(language)
        except ClassNotFound:
            return TextLexer()

    def highlight_code(self, code: str, language: str, *, hl_lines: list[int] | None = None) -> str:
        """Return token-highlighted HTML for *code* without any wrapper."""
        formatter = HtmlFormatter(nowrap=True, hl_lines=hl_lines or [])
        return highlight(code, self._lexer(language), formatter).rstrip("\n")

    def render_block(
        self, code: str, lang: str | None, *, hl_lines: list[int] | None = None
    ) -> str:
        language = self.resolve_language(lang)
        css = escape(f"{self.class_prefix}{language}", quote=True)
        body = self.highlight_code(code, language, hl_lines=hl_lines)
        return (
            f'<div class="{WRAPPER_CLASS}" data-language="{escape(language, quote=True)}">'
            f'<pre class="{css}"><code class="{css}">{body}</code></pre></div>'
        )

    def render_inline(self, code: str, lang: str) -> str:
        language = self.resolve_language(lang)
        css = escape(f"{self.class_prefix}{language}", quote=True)
        return f'<code class="{css}">{self.highlight_code(code, language)}</code>'


class FencedCodePreprocessor(Preprocessor):
    """Replace fenced code blocks with stashed, highlighted HTML."""

    def __init__(self, md: Markdown, highlighter: PrismHighlighter) -> None:
        super().__init__(md)
        self.highlighter = highlighter

    def run(self, lines: list[str]) -> list[str]:
        text = "\n".join(lines)
        while True:
            m = FENCED_BLOCK_RE.search(text)
            if m is None:
                break
            html = self.highlighter.render_block(
                m.group("code"),
                m.group("lang"),
                hl_lines=parse_line_ranges(m.group("hl")),
            )
            placeholder = self.md.htmlStash.store(html)
            text = f"{text[: m.start()]}\n{placeholder}\n{text[m.end() :]}"
        return text.split("\n")


class MarkedInlineCodeProcessor(InlineProcessor):
    """Highlight ```` `lang<marker>code` ```` spans; plain backticks are left alone."""

    def __init__(self, pattern: str, md: Markdown, highlighter: PrismHighlighter) -> None:
        super().__init__(pattern, md)
        self.highlighter = highlighter

    def handleMatch(  # noqa: N802
        self, m: re.Match[str], data: str
    ) -> tuple[str | Element, int, int]:
        html = self.highlighter.render_inline(m.group("code").strip(), m.group("lang"))
        return self.md.htmlStash.store(html), m.start(0), m.end(0)


class PrismExtension(Extension):
    """Python-Markdown extension wiring fenced and marked-inline highlighting."""

    def __init__(self, **kwargs: Any) -> None:
        self.config = {
            "class_prefix": ["language-", "Prefix for the language class on <pre>/<code>"],
            "inline_code_marker": ["", "Separator between language and inline code"],
            "aliases": [{}, "Map of alias -> Pygments lexer name"],
        }
        super().__init__(**kwargs)

    def extendMarkdown(self, md: Markdown) -> None:  # noqa: N802
        highlighter = PrismHighlighter(
            class_prefix=self.getConfig("class_prefix"),
            aliases=self.getConfig("aliases"),
        )
        md.preprocessors.register(FencedCodePreprocessor(md, highlighter), "prism_fenced", 25)

        marker = self.getConfig("inline_code_marker")
        if marker:
            pattern = (
                r"(?<!\\)(?P<ticks>`+)(?P<lang>[\w#.+-]+)"
                + re.escape(marker)
                + r"(?P<code>.+?)(?<!`)(?P=ticks)(?!`)"
            )
            # Ahead of the plain backtick processor (190).
            md.inlinePatterns.register(
                MarkedInlineCodeProcessor(pattern, md, highlighter), "prism_inline", 195
            )


def prism_stylesheet(style: str = "default") -> str:
    """Pygments token CSS scoped to the highlight wrapper."""
    return HtmlFormatter(style=style).get_style_defs(f".{WRAPPER_CLASS}")
