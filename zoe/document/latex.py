r"""Rewrite ``$``-delimited LaTeX in rendered HTML into MathJax markup.

``$$…$$`` becomes a display block and ``$…$`` an inline span. A ``$`` with no
closing partner is left untouched, so prices such as ``$5`` survive.

Example
-------
>>> from zoe.document.latex import rewrite_latex
>>> rewrite_latex("a $x^2$ b")
'a <span class="math inline">\\(x^2\\)</span> b'
"""

from __future__ import annotations

DISPLAY_OPEN = '<div class="math display">\\['
DISPLAY_CLOSE = '\\]</div>'
INLINE_OPEN = '<span class="math inline">\\('
INLINE_CLOSE = '\\)</span>'


def _find_display_close(text: str, start: int) -> int:
    """Return the index of the closing ``$$`` at or after ``start``, or -1."""
    return text.find("$$", start)


def _find_inline_close(text: str, start: int) -> int:
    """Return the index of a ``$`` not followed by another ``$``, or -1."""
    idx = text.find("$", start)
    while idx != -1:
        if idx + 1 >= len(text) or text[idx + 1] != "$":
            return idx
        idx = text.find("$", idx + 1)
    return -1


def rewrite_latex(html: str) -> str:
    """Return ``html`` with math delimiters replaced by MathJax wrappers.

    Parameters
    ----------
    html : str
        Rendered HTML that may contain ``$`` / ``$$`` delimiters.

    Returns
    -------
    str
        HTML with display math wrapped in ``div.math.display`` and inline math
        in ``span.math.inline``; unterminated delimiters are kept verbatim.
    """
    parts: list[str] = []
    i = 0
    length = len(html)
    while i < length:
        dollar = html.find("$", i)
        if dollar == -1:
            parts.append(html[i:])
            break
        parts.append(html[i:dollar])
        is_display = dollar + 1 < length and html[dollar + 1] == "$"
        if is_display:
            close = _find_display_close(html, dollar + 2)
            if close != -1:
                parts.extend((DISPLAY_OPEN, html[dollar + 2 : close], DISPLAY_CLOSE))
                i = close + 2
                continue
        else:
            close = _find_inline_close(html, dollar + 1)
            if close != -1:
                parts.extend((INLINE_OPEN, html[dollar + 1 : close], INLINE_CLOSE))
                i = close + 1
                continue
        parts.append("$")
        i = dollar + 1
    return "".join(parts)


__all__ = ["rewrite_latex"]
