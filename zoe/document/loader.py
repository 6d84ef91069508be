"""Turn one Markdown source file into a title, a date and an HTML body."""

from __future__ import annotations

import dataclasses as dc
import logging
import typing as typ

from zoe.errors import (
    ContentError,
    DirectoryNotFound,
    FileSystemError,
    InvalidUtf8,
    PermissionDenied,
)

from .frontmatter import parse_frontmatter
from .latex import rewrite_latex

if typ.TYPE_CHECKING:
    from pathlib import Path

    from .renderer import HtmlContentRenderer

logger = logging.getLogger(__name__)


@dc.dataclass(slots=True, frozen=True)
class ParsedDocument:
    """Rendered source file, before any URL or template is assigned.

    Attributes
    ----------
    title : str
        Front-matter title.
    date : str
        Front-matter date, kept as an opaque string.
    html : str
        Markdown body rendered to HTML with LaTeX delimiters rewritten.
    draft : bool
        Front-matter draft flag.
    filename : str
        Base name of the source file.
    """

    title: str
    date: str
    html: str
    draft: bool
    filename: str


def _read_source(path: Path) -> str:
    """Read ``path`` as strict UTF-8, mapping OS errors onto content errors."""
    try:
        raw = path.read_bytes()
    except FileNotFoundError as exc:
        msg = f"Markdown file not found: {path}"
        raise DirectoryNotFound(msg, path=path) from exc
    except PermissionError as exc:
        msg = f"Access denied reading markdown file: {path}"
        raise PermissionDenied(msg, path=path) from exc
    except OSError as exc:
        msg = f"Error reading markdown file {path}: {exc}"
        raise FileSystemError(msg, path=path) from exc
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError as exc:
        msg = f"Markdown file is not valid UTF-8: {path}"
        raise InvalidUtf8(msg, path=path) from exc


def load_document(path: Path, renderer: HtmlContentRenderer) -> ParsedDocument:
    """Parse front matter and render the Markdown body of ``path``.

    Parameters
    ----------
    path : Path
        Markdown source file.
    renderer : HtmlContentRenderer
        Renderer used for the body.

    Returns
    -------
    ParsedDocument
        Title, date, draft flag and rendered HTML for the file.

    Raises
    ------
    ContentError
        Any subclass: unreadable file, invalid UTF-8, bad front matter or a
        renderer failure. The error's ``path`` names the offending file.
    """
    logger.debug("Creating content from markdown file: %s", path)
    text = _read_source(path)
    try:
        meta, body = parse_frontmatter(text)
        html = rewrite_latex(renderer.markdown(body))
    except ContentError as exc:
        exc.path = path
        logger.error("Failed to process %s: %s", path, exc)
        raise
    return ParsedDocument(
        title=meta.title,
        date=meta.date,
        html=html,
        draft=meta.draft,
        filename=path.name,
    )


__all__ = ["ParsedDocument", "load_document"]
