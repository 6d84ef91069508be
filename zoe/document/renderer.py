"""Render Markdown bodies into HTML with GitHub-flavoured extensions.

Besides Python-Markdown's tables and fenced code, the renderer enables
``pymdownx.tilde`` (``~~strikethrough~~``), ``pymdownx.tasklist``
(``- [x] done``) and ``pymdownx.magiclink`` (bare URLs become links). Fenced
code is highlighted by Pygments through ``codehilite``, and every highlighted
block is tagged with a ``data-language`` attribute. Raw HTML passes through.
"""

from __future__ import annotations

import functools
import re
import typing as typ
from html import escape

from markdown import Markdown
from pygments.formatters.html import HtmlFormatter

from zoe.config.models import DEFAULT_PYGMENTS_STYLE
from zoe.errors import ContentParseError

CSS_CLASS = "codehilite"

# Opening fence, optionally indented by up to three spaces, with its label.
FENCE_OPEN_PATTERN = re.compile(
    r"^[ ]{0,3}(?P<fence>`{3,}|~{3,})[ ]*(?P<lang>[A-Za-z0-9_+#.-]+)?(?P<extra>[^\r\n]*)$"
)
HIGHLIGHT_OPEN_TAG = re.compile(rf'<div class="{CSS_CLASS}">')

GFM_EXTENSIONS: tuple[str, ...] = (
    "fenced_code",
    "codehilite",
    "tables",
    "sane_lists",
    "pymdownx.tilde",
    "pymdownx.tasklist",
    "pymdownx.magiclink",
)


@functools.cache
def extension_configs(pygments_style: str) -> dict[str, dict[str, typ.Any]]:
    """Return per-extension settings for :data:`GFM_EXTENSIONS`, built once per style."""
    return {
        "codehilite": {
            "linenums": False,
            "guess_lang": False,
            "css_class": CSS_CLASS,
            "pygments_style": pygments_style,
        },
        "pymdownx.tasklist": {"custom_checkbox": False},
    }


def normalize_fences(text: str) -> tuple[str, list[str]]:
    """Flush indented fences left and strip extra fence labels.

    ``  ```rust,no_run`` becomes ```` ```rust ```` so ``fenced_code`` accepts
    it. Returns the rewritten text and the language of each opening fence in
    document order (``"text"`` when unlabelled).

    Examples
    --------
    >>> normalize_fences("  ```rust,no_run\\nfn main() {}\\n  ```\\n")
    ('```rust\\nfn main() {}\\n```\\n', ['rust'])
    """
    lines = text.split("\n")
    languages: list[str] = []
    open_fence: str | None = None
    for idx, line in enumerate(lines):
        match = FENCE_OPEN_PATTERN.match(line)
        if match is None:
            continue
        fence = match["fence"]
        if open_fence is None:
            open_fence = fence
            languages.append(match["lang"] or "text")
            lines[idx] = f"{fence}{match['lang'] or ''}"
        elif fence.startswith(open_fence) and not (match["lang"] or match["extra"].strip()):
            open_fence = None
            lines[idx] = fence
    return "\n".join(lines), languages


def tag_languages(html: str, languages: list[str]) -> str:
    """Add ``data-language`` to the first ``len(languages)`` highlighted blocks."""
    if not languages:
        return html
    remaining = iter(languages)

    def _repl(_match: re.Match[str]) -> str:
        lang = escape(next(remaining, "text"), quote=True)
        return f'<div class="{CSS_CLASS}" data-language="{lang}">'

    return HIGHLIGHT_OPEN_TAG.sub(_repl, html, len(languages))


class HtmlContentRenderer:
    """Render Markdown with tables, strikethrough, autolinks and task lists.

    Parameters
    ----------
    pygments_style : str, optional
        Name of the Pygments style used for highlighted code.
    """

    def __init__(self, pygments_style: str = DEFAULT_PYGMENTS_STYLE) -> None:
        self.pygments_style = pygments_style
        self._formatter = HtmlFormatter(style=pygments_style, cssclass=CSS_CLASS)

    @property
    def stylesheet(self) -> str:
        """Return the CSS used for highlighted code blocks."""
        return self._formatter.get_style_defs(f".{CSS_CLASS}")

    def markdown(self, text: str) -> str:
        """Render ``text`` to HTML; blank input renders as ``""``.

        Raises
        ------
        ContentParseError
            If Python-Markdown fails on the input.
        """
        if not text.strip():
            return ""
        normalized, languages = normalize_fences(text)
        md = Markdown(
            extensions=list(GFM_EXTENSIONS),
            extension_configs=extension_configs(self.pygments_style),
        )
        try:
            html = md.convert(normalized)
        except Exception as exc:  # noqa: BLE001 - third-party parser failures
            msg = f"Markdown rendering failed: {exc}"
            raise ContentParseError(msg) from exc
        return tag_languages(html, languages)


__all__ = [
    "GFM_EXTENSIONS",
    "HtmlContentRenderer",
    "extension_configs",
    "normalize_fences",
    "tag_languages",
]
