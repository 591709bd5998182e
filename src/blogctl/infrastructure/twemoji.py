"""Twemoji rendering for Python-Markdown.

Two sources of emoji become ``<img class="emoji">`` tags pointing at the
Twemoji asset CDN:

- ``:shortcode:`` spans, handled by ``pymdownx.emoji`` with the Twemoji index.
- Literal unicode emoji in prose, handled by :class:`UnicodeEmojiTreeprocessor`
  using the same index so both paths agree on asset names.
"""

from __future__ import annotations

import functools
import re
from typing import Any
from xml.etree.ElementTree import Element

import pymdownx.emoji
from markdown import Markdown
from markdown.extensions import Extension
from markdown.treeprocessors import Treeprocessor

_SKIP_TAGS = frozenset({"code", "pre", "script", "style", "kbd"})

# Rendered as text unless followed by VS16 (U+FE0F). Plain ASCII (digits, "#")
# is skipped for the same reason.
_TEXT_PRESENTATION = frozenset({"\u00a9", "\u00ae", "\u2122"})


@functools.lru_cache(maxsize=1)
def unicode_emoji_table() -> dict[str, str]:
    """Map each emoji character sequence to its Twemoji asset code (``1f604``)."""
    index = pymdownx.emoji.twemoji({}, None)
    table: dict[str, str] = {}
    for entry in index["emoji"].values():
        code = entry.get("unicode")
        if not code:
            continue
        for key in ("unicode", "unicode_alt"):
            value = entry.get(key)
            if value:
                sequence = "".join(chr(int(cp, 16)) for cp in value.split("-"))
                if sequence in _TEXT_PRESENTATION or sequence.isascii():
                    continue
                table.setdefault(sequence, code)
    return table


@functools.lru_cache(maxsize=1)
def unicode_emoji_pattern() -> re.Pattern[str]:
    """Alternation of every known sequence, longest first so ZWJ families win."""
    sequences = sorted(unicode_emoji_table(), key=len, reverse=True)
    return re.compile("|".join(re.escape(seq) for seq in sequences))


def twemoji_url(code: str, *, base_url: str, extension: str) -> str:
    base = base_url if base_url.endswith("/") else f"{base_url}/"
    folder = "svg" if extension == "svg" else "72x72"
    return f"{base}{folder}/{code}.{extension}"


class UnicodeEmojiTreeprocessor(Treeprocessor):
    """Swap literal emoji in text nodes for Twemoji ``<img>`` elements."""

    def __init__(self, md: Markdown, *, base_url: str, extension: str, class_name: str) -> None:
        super().__init__(md)
        self.base_url = base_url
        self.extension = extension
        self.class_name = class_name

    def run(self, root: Element) -> None:
        self._process(root)

    def _image(self, sequence: str, tail: str) -> Element:
        code = unicode_emoji_table()[sequence]
        img = Element(
            "img",
            {
                "class": self.class_name,
                "alt": sequence,
                "draggable": "false",
                "src": twemoji_url(code, base_url=self.base_url, extension=self.extension),
            },
        )
        img.tail = tail
        return img

    def _split(self, text: str) -> tuple[str, list[Element]]:
        """Split *text* into leading text plus one image element per emoji."""
        pattern = unicode_emoji_pattern()
        matches = list(pattern.finditer(text))
        if not matches:
            return text, []
        lead = text[: matches[0].start()]
        images: list[Element] = []
        for i, m in enumerate(matches):
            end = matches[i + 1].start() if i + 1 < len(matches) else len(text)
            images.append(self._image(m.group(0), text[m.end() : end]))
        return lead, images

    def _process(self, parent: Element) -> None:
        if parent.tag in _SKIP_TAGS:
            return

        children = list(parent)
        if parent.text:
            lead, images = self._split(parent.text)
            if images:
                parent.text = lead
                for offset, img in enumerate(images):
                    parent.insert(offset, img)

        for child in children:
            self._process(child)
            if child.tail:
                lead, images = self._split(child.tail)
                if images:
                    child.tail = lead
                    position = list(parent).index(child) + 1
                    for offset, img in enumerate(images):
                        parent.insert(position + offset, img)


class TwemojiExtension(Extension):
    """Register ``pymdownx.emoji`` with the Twemoji index plus unicode replacement."""

    def __init__(self, **kwargs: Any) -> None:
        self.config = {
            "base_url": [
                "https://cdn.jsdelivr.net/gh/jdecked/twemoji@latest/assets/",
                "Twemoji asset root",
            ],
            "extension": ["svg", "Asset type: svg or png"],
            "class_name": ["emoji", "CSS class on generated <img> tags"],
        }
        super().__init__(**kwargs)

    def extendMarkdown(self, md: Markdown) -> None:  # noqa: N802
        base_url = self.getConfig("base_url")
        extension = self.getConfig("extension")
        class_name = self.getConfig("class_name")
        folder = "svg/" if extension == "svg" else "72x72/"
        base = base_url if base_url.endswith("/") else f"{base_url}/"

        shortcodes = pymdownx.emoji.EmojiExtension(
            emoji_index=pymdownx.emoji.twemoji,
            emoji_generator=pymdownx.emoji.to_svg if extension == "svg" else pymdownx.emoji.to_png,
            options={"image_path": base + folder, "classes": class_name},
        )
        md.registerExtensions([shortcodes], {})

        md.treeprocessors.register(
            UnicodeEmojiTreeprocessor(
                md, base_url=base_url, extension=extension, class_name=class_name
            ),
            "twemoji_unicode",
            5,
        )
