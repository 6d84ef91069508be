r"""Split a source file into its front-matter fields and Markdown body.

Source files open with a block delimited by lines containing exactly ``---``.
Inside the block each ``key: value`` line sets one field; ``title`` and
``date`` are required and keep their text verbatim apart from one pair of
surrounding quotes. Dates stay opaque strings: they are compared, never
parsed.

Example
-------
>>> from zoe.document.frontmatter import parse_frontmatter
>>> meta, body = parse_frontmatter('---\ntitle: "Hi"\ndate: 2024-01-01\n---\nBody\n')
>>> meta.title, meta.date, body
('Hi', '2024-01-01', 'Body\n')
"""

from __future__ import annotations

import dataclasses as dc
import re

from zoe.errors import InvalidFrontmatter, MissingRequiredFields

DELIMITER = "---"
FIELD_PATTERN = re.compile(r"^\s*([A-Za-z_][\w-]*)\s*:(.*)$")
TRUTHY = frozenset({"1", "true", "yes", "y", "on"})


@dc.dataclass(slots=True, frozen=True)
class Frontmatter:
    """Metadata extracted from a source file's leading block.

    Attributes
    ----------
    title : str
        Page title with surrounding quotes removed.
    date : str
        Opaque, ISO-8601-like date string.
    draft : bool
        Whether the page is excluded from the sitemap.
    """

    title: str
    date: str
    draft: bool = False


def _strip_quotes(value: str) -> str:
    """Remove one pair of matching surrounding quotes, if present."""
    if len(value) >= 2 and value[0] == value[-1] and value[0] in {'"', "'"}:
        return value[1:-1]
    return value


def _split_block(text: str) -> tuple[list[str], str]:
    """Return the front-matter lines and the remaining body."""
    lines = text.split("\n")
    if not lines or lines[0] != DELIMITER:
        msg = "No front-matter delimiter found"
        raise InvalidFrontmatter(msg)
    for idx in range(1, len(lines)):
        if lines[idx] == DELIMITER:
            return lines[1:idx], "\n".join(lines[idx + 1 :])
    msg = "No closing front-matter delimiter found"
    raise InvalidFrontmatter(msg)


def parse_frontmatter(text: str) -> tuple[Frontmatter, str]:
    """Parse the front-matter block and return it with the Markdown body.

    Parameters
    ----------
    text : str
        Whole source file. ``\\r\\n`` line endings are normalized first.

    Returns
    -------
    tuple[Frontmatter, str]
        Parsed metadata and the body that follows the closing delimiter.

    Raises
    ------
    InvalidFrontmatter
        If the file does not start with ``---`` or the block is unterminated.
    MissingRequiredFields
        If ``title`` or ``date`` is absent or empty.
    """
    normalized = text.replace("\r\n", "\n").removeprefix("\ufeff")
    block, body = _split_block(normalized)

    fields: dict[str, str] = {}
    for line in block:
        match = FIELD_PATTERN.match(line)
        if match is None:
            continue
        key = match.group(1).lower()
        fields[key] = _strip_quotes(match.group(2).strip())

    title = fields.get("title", "")
    date = fields.get("date", "")
    if not title or not date:
        missing = [name for name, value in (("title", title), ("date", date)) if not value]
        msg = f"Missing required front-matter fields: {', '.join(missing)}"
        raise MissingRequiredFields(msg)

    draft = fields.get("draft", "").lower() in TRUTHY
    return Frontmatter(title=title, date=date, draft=draft), body


__all__ = ["Frontmatter", "parse_frontmatter"]
