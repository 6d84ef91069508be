"""Project the content tree onto ``sitemap.xml`` entries and write them.

Entries follow the tree's date-descending order. Draft nodes are skipped and
``lastmod`` is emitted only for nodes that carry a date. When the content root
has both ``index.md`` and ``_index.md``, only the section index is listed,
since it is the page written to ``index.html``.

Example
-------
>>> from pathlib import Path
>>> from zoe.sitemap import project_sitemap, write_sitemap
>>> entries = project_sitemap(tree, "https://example.com")  # doctest: +SKIP
>>> write_sitemap(entries, Path("public"))  # doctest: +SKIP
PosixPath('public/sitemap.xml')
"""

from __future__ import annotations

import dataclasses as dc
import enum
import functools
import logging
import typing as typ
from pathlib import Path

from jinja2 import Environment, FileSystemLoader

from zoe._constants import SITEMAP_FILENAME
from zoe.errors import FileSystemError

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from zoe.content import ContentNode, ContentTree

logger = logging.getLogger(__name__)

SITEMAP_TEMPLATE = "sitemap.xml.jinja"
TEMPLATES_DIR = Path(__file__).parent / "templates"


class ChangeFrequency(enum.StrEnum):
    """Values allowed in a sitemap ``<changefreq>`` element."""

    ALWAYS = "always"
    HOURLY = "hourly"
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"
    NEVER = "never"


@dc.dataclass(frozen=True, slots=True)
class SitemapEntry:
    """One ``<url>`` element of the sitemap."""

    loc: str
    lastmod: str | None
    changefreq: ChangeFrequency
    priority: float


def entry_for(node: ContentNode, hostname: str) -> SitemapEntry:
    """Apply the priority and change-frequency rules to a single node.

    Examples
    --------
    >>> from zoe.content import ContentKind, ContentNode
    >>> page = ContentNode("A", "2024-01-01", "", "a/index.html", "/a/", ContentKind.PAGE, "a.md")
    >>> entry_for(page, "https://example.com")
    SitemapEntry(loc='https://example.com/a/', lastmod='2024-01-01', changefreq=<ChangeFrequency.MONTHLY: 'monthly'>, priority=0.6)
    """
    if node.is_section:
        priority, changefreq = 0.8, ChangeFrequency.WEEKLY
    elif node.is_homepage:
        priority, changefreq = 1.0, ChangeFrequency.WEEKLY
    else:
        priority, changefreq = 0.6, ChangeFrequency.MONTHLY
    return SitemapEntry(
        loc=f"{hostname}{node.url}",
        lastmod=node.date or None,
        changefreq=changefreq,
        priority=priority,
    )


def project_sitemap(tree: ContentTree, hostname: str) -> list[SitemapEntry]:
    """Return sitemap entries for every non-draft node of ``tree``.

    Parameters
    ----------
    tree : ContentTree
        Built content tree.
    hostname : str
        Scheme and host, without a trailing slash, prefixed to each node URL.

    Returns
    -------
    list[SitemapEntry]
        Entries in date-descending order.
    """
    # A root _index.md is written over the homepage at index.html.
    shadowed = tree.homepage if tree.root.index_page is not None else None
    entries = [
        entry_for(node, hostname)
        for node in tree.flatten()
        if not node.draft and node is not shadowed
    ]
    logger.debug("Projected %d sitemap entries for %s", len(entries), hostname)
    return entries


@functools.cache
def _environment() -> Environment:
    return Environment(
        loader=FileSystemLoader(TEMPLATES_DIR),
        autoescape=True,
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
    )


def render_sitemap(entries: cabc.Iterable[SitemapEntry]) -> str:
    """Render ``entries`` as a sitemap XML document.

    Examples
    --------
    >>> print(render_sitemap([]), end="")
    <?xml version="1.0" encoding="UTF-8"?>
    <urlset xmlns="http://www.sitemaps.org/schemas/sitemap/0.9">
    </urlset>
    """
    template = _environment().get_template(SITEMAP_TEMPLATE)
    return template.render(entries=list(entries))


def write_sitemap(entries: cabc.Iterable[SitemapEntry], output_dir: Path) -> Path:
    """Write ``sitemap.xml`` into ``output_dir`` and return its path.

    Raises
    ------
    FileSystemError
        If the directory cannot be created or the file cannot be written.
    """
    output_path = output_dir / SITEMAP_FILENAME
    xml = render_sitemap(entries)
    try:
        output_dir.mkdir(parents=True, exist_ok=True)
        output_path.write_text(xml, encoding="utf-8")
    except OSError as exc:
        msg = f"Failed to write sitemap {output_path}: {exc}"
        logger.error(msg)
        raise FileSystemError(msg, path=output_path) from exc
    logger.info("Sitemap generated at %s", output_path)
    return output_path


__all__ = [
    "ChangeFrequency",
    "SitemapEntry",
    "entry_for",
    "project_sitemap",
    "render_sitemap",
    "write_sitemap",
]
