"""Content nodes, sections and the tree that the builder produces."""

from __future__ import annotations

import dataclasses as dc
import enum
import typing as typ

from zoe.errors import SectionIndexAlreadyExists

from .paths import HOMEPAGE_URL

if typ.TYPE_CHECKING:
    import collections.abc as cabc


class ContentKind(enum.StrEnum):
    """Whether a node is an ordinary page or a section index."""

    PAGE = "page"
    SECTION = "section"


@dc.dataclass(slots=True, eq=False)
class ContentNode:
    """One page or section index.

    Attributes
    ----------
    title : str
        Front-matter title.
    date : str
        Opaque date string; ordering is lexicographic.
    rendered_body : str
        HTML body; replaced by the full page once templates are applied.
    output_path : str
        Path of the rendered file relative to the output directory.
    url : str
        Site-relative URL, always with leading and trailing ``/``.
    kind : ContentKind
        ``PAGE`` or ``SECTION``.
    source_filename : str
        Base name of the Markdown source.
    section_path : str or None
        Owning section path; ``None`` for the root section and the homepage.
    draft : bool
        Draft nodes are left out of the sitemap.
    attached_listing : list[ContentNode] or None
        Date-sorted pages attached only while a section index renders.
    """

    title: str
    date: str
    rendered_body: str
    output_path: str
    url: str
    kind: ContentKind
    source_filename: str
    section_path: str | None = None
    draft: bool = False
    attached_listing: list[ContentNode] | None = None

    @property
    def is_section(self) -> bool:
        return self.kind is ContentKind.SECTION

    @property
    def is_homepage(self) -> bool:
        return self.kind is ContentKind.PAGE and self.url == HOMEPAGE_URL


@dc.dataclass(slots=True, eq=False)
class Section:
    """A directory of the content tree.

    ``pages`` keeps discovery order; use :meth:`sorted_pages` for listings.
    """

    name: str
    path: str
    index_page: ContentNode | None = None
    pages: list[ContentNode] = dc.field(default_factory=list)
    subsections: list[Section] = dc.field(default_factory=list)

    def add_page(self, page: ContentNode) -> None:
        """Append ``page`` in discovery order."""
        self.pages.append(page)

    def set_index_page(self, page: ContentNode) -> None:
        """Attach the section's index page.

        Raises
        ------
        SectionIndexAlreadyExists
            If the section already has an index page; the existing one is kept.
        """
        if self.index_page is not None:
            msg = f"Section already has an index page: {self.path or 'root'}"
            raise SectionIndexAlreadyExists(msg)
        self.index_page = page

    def sorted_pages(self) -> list[ContentNode]:
        """Return the section's pages newest first."""
        return sort_by_date_desc(self.pages)


@dc.dataclass(slots=True, eq=False)
class ContentTree:
    """Sections keyed by normalized path, plus the detached homepage."""

    root: Section
    sections: dict[str, Section]
    homepage: ContentNode | None = None

    @classmethod
    def empty(cls) -> ContentTree:
        """Return a tree holding only the root section (path ``""``)."""
        root = Section(name="", path="")
        return cls(root=root, sections={"": root})

    def get_or_create_section(self, path: str) -> Section:
        """Return the section at ``path``, creating it under its parent."""
        existing = self.sections.get(path)
        if existing is not None:
            return existing
        parent_path, _, name = path.rpartition("/")
        parent = self.get_or_create_section(parent_path)
        section = Section(name=name, path=path)
        parent.subsections.append(section)
        self.sections[path] = section
        return section

    def iter_nodes(self) -> cabc.Iterator[ContentNode]:
        """Yield the homepage, then each section's index page and pages."""
        if self.homepage is not None:
            yield self.homepage
        for section in self.sections.values():
            if section.index_page is not None:
                yield section.index_page
            yield from section.pages

    def flatten(self) -> list[ContentNode]:
        """Return every node, newest first."""
        return sort_by_date_desc(self.iter_nodes())


def sort_by_date_desc(nodes: cabc.Iterable[ContentNode]) -> list[ContentNode]:
    """Sort by ``date`` string, descending; ties keep their input order.

    Examples
    --------
    >>> def node(date):
    ...     return ContentNode("t", date, "", "", "/", ContentKind.PAGE, "x.md")
    >>> [n.date for n in sort_by_date_desc(map(node, ["2024-01-01", "2023-05-01", "2024-06-01"]))]
    ['2024-06-01', '2024-01-01', '2023-05-01']
    """
    return sorted(nodes, key=lambda node: node.date, reverse=True)


__all__ = ["ContentKind", "ContentNode", "ContentTree", "Section", "sort_by_date_desc"]
