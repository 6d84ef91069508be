"""Map a content directory onto a tree of sections and content nodes.

The builder walks ``content/`` recursively. Each directory becomes a
:class:`~zoe.content.models.Section`; ``_index.md`` becomes the section's
index page, every other ``.md`` file an ordinary page, and the root
``index.md`` the detached homepage.

Example
-------
>>> from pathlib import Path
>>> from zoe.content import ContentTreeBuilder
>>> from zoe.document import HtmlContentRenderer
>>> tree = ContentTreeBuilder(HtmlContentRenderer()).build(Path("content"))  # doctest: +SKIP
>>> tree.homepage.url  # doctest: +SKIP
'/'
"""

from __future__ import annotations

import logging
import os
import stat
import typing as typ
from pathlib import Path

from zoe._constants import HOMEPAGE_FILENAME, MARKDOWN_SUFFIX, SECTION_INDEX_FILENAME
from zoe.document import load_document
from zoe.errors import (
    DirectoryNotFound,
    FileSystemError,
    NotADirectory,
    PermissionDenied,
    SectionIndexAlreadyExists,
)

from .models import ContentKind, ContentNode, ContentTree, Section
from .paths import (
    HOMEPAGE_OUTPUT_PATH,
    HOMEPAGE_URL,
    join_section_path,
    page_output_path,
    page_url,
    section_output_path,
    section_url,
)

if typ.TYPE_CHECKING:
    from zoe.document import HtmlContentRenderer

logger = logging.getLogger(__name__)


class ContentTreeBuilder:
    """Build a :class:`ContentTree` from a content root directory."""

    def __init__(self, renderer: HtmlContentRenderer) -> None:
        self.renderer = renderer

    def build(self, content_root: Path) -> ContentTree:
        """Walk ``content_root`` and return the populated content tree.

        Parameters
        ----------
        content_root : Path
            Directory holding the site's Markdown sources.

        Returns
        -------
        ContentTree
            Sections keyed by path, plus the homepage when ``index.md`` exists.

        Raises
        ------
        DirectoryNotFound
            If ``content_root`` does not exist.
        NotADirectory
            If ``content_root`` is not a directory.
        PermissionDenied
            If a directory or the homepage cannot be accessed.
        FileSystemError
            For any other filesystem failure while walking the tree.
        ContentError
            Any content error raised while parsing a single file.
        """
        self._check_root(content_root)
        tree = ContentTree.empty()
        self._process_directory(tree, content_root, "")
        homepage_path = content_root / HOMEPAGE_FILENAME
        if self._homepage_exists(homepage_path):
            tree.homepage = self._homepage(homepage_path)
        else:
            logger.warning(
                "No %s file found in content directory. Home page will not be available.",
                HOMEPAGE_FILENAME,
            )
        return tree

    @staticmethod
    def _check_root(content_root: Path) -> None:
        """Verify the content root exists and is a readable directory."""
        try:
            info = content_root.stat()
        except FileNotFoundError as exc:
            msg = f"Content directory not found: {content_root}"
            logger.error(msg)
            raise DirectoryNotFound(msg, path=content_root) from exc
        except PermissionError as exc:
            msg = f"Permission denied accessing content directory: {content_root}"
            logger.error(msg)
            raise PermissionDenied(msg, path=content_root) from exc
        except OSError as exc:
            msg = f"Error opening content directory {content_root}: {exc}"
            logger.error(msg)
            raise FileSystemError(msg, path=content_root) from exc
        if not stat.S_ISDIR(info.st_mode):
            msg = f"Path is not a directory: {content_root}"
            logger.error(msg)
            raise NotADirectory(msg, path=content_root)

    @staticmethod
    def _homepage_exists(path: Path) -> bool:
        try:
            path.stat()
        except FileNotFoundError:
            return False
        except PermissionError as exc:
            msg = f"Permission denied accessing index file: {path}"
            logger.error(msg)
            raise PermissionDenied(msg, path=path) from exc
        except OSError as exc:
            msg = f"Error accessing index file {path}: {exc}"
            logger.error(msg)
            raise FileSystemError(msg, path=path) from exc
        return True

    @staticmethod
    def _scan(dir_path: Path, *, is_root: bool) -> list[os.DirEntry[str]]:
        """Return visible entries of ``dir_path`` in name order."""
        try:
            with os.scandir(dir_path) as handle:
                entries = list(handle)
        except PermissionError as exc:
            msg = f"Permission denied opening directory {dir_path}"
            logger.error(msg)
            raise PermissionDenied(msg, path=dir_path) from exc
        except OSError as exc:
            msg = f"Failed to open directory {dir_path}: {exc}"
            logger.error(msg)
            raise FileSystemError(msg, path=dir_path) from exc
        visible = [
            entry
            for entry in entries
            if not entry.name.startswith(".")
            and not (is_root and entry.name == HOMEPAGE_FILENAME)
        ]
        return sorted(visible, key=lambda entry: entry.name)

    def _process_directory(
        self, tree: ContentTree, dir_path: Path, section_path: str
    ) -> None:
        """Populate the section for ``dir_path`` and recurse into subdirectories."""
        section = tree.get_or_create_section(section_path)
        entries = self._scan(dir_path, is_root=not section_path)

        for entry in entries:
            if entry.name == SECTION_INDEX_FILENAME and _is_file(entry):
                self._process_section_index(dir_path / entry.name, section)
                break

        for entry in entries:
            if entry.name == SECTION_INDEX_FILENAME:
                continue
            if _is_dir(entry):
                child_path = join_section_path(section_path, entry.name)
                self._process_directory(tree, dir_path / entry.name, child_path)
            elif entry.name.endswith(MARKDOWN_SUFFIX) and _is_file(entry):
                self._process_page(dir_path / entry.name, section)

    def _process_section_index(self, path: Path, section: Section) -> None:
        """Parse ``_index.md`` and attach it as ``section``'s index page."""
        logger.debug("Processing section index: %s for section: %s", path, section.path)
        doc = load_document(path, self.renderer)
        node = ContentNode(
            title=doc.title,
            date=doc.date,
            rendered_body=doc.html,
            output_path=section_output_path(section.path),
            url=section_url(section.path),
            kind=ContentKind.SECTION,
            source_filename=doc.filename,
            section_path=section.path or None,
            draft=doc.draft,
        )
        try:
            section.set_index_page(node)
        except SectionIndexAlreadyExists as exc:
            exc.path = path
            logger.error("%s", exc)
            raise

    def _process_page(self, path: Path, section: Section) -> None:
        """Parse an ordinary page and append it to ``section``."""
        logger.debug("Processing content file: %s in section: %s", path.name, section.path)
        doc = load_document(path, self.renderer)
        section.add_page(
            ContentNode(
                title=doc.title,
                date=doc.date,
                rendered_body=doc.html,
                output_path=page_output_path(section.path, doc.filename),
                url=page_url(section.path, doc.filename),
                kind=ContentKind.PAGE,
                source_filename=doc.filename,
                section_path=section.path or None,
                draft=doc.draft,
            )
        )

    def _homepage(self, path: Path) -> ContentNode:
        """Parse the root ``index.md``; its URL and output path are fixed."""
        logger.debug("Processing homepage: %s", path)
        doc = load_document(path, self.renderer)
        return ContentNode(
            title=doc.title,
            date=doc.date,
            rendered_body=doc.html,
            output_path=HOMEPAGE_OUTPUT_PATH,
            url=HOMEPAGE_URL,
            kind=ContentKind.PAGE,
            source_filename=doc.filename,
            draft=doc.draft,
        )


def _is_dir(entry: os.DirEntry[str]) -> bool:
    try:
        return entry.is_dir()
    except OSError as exc:
        raise _stat_error(entry, exc) from exc


def _is_file(entry: os.DirEntry[str]) -> bool:
    try:
        return entry.is_file()
    except OSError as exc:
        raise _stat_error(entry, exc) from exc


def _stat_error(entry: os.DirEntry[str], exc: OSError) -> FileSystemError:
    msg = f"Failed to stat {entry.path}: {exc}"
    logger.error(msg)
    return FileSystemError(msg, path=Path(entry.path))


__all__ = ["ContentTreeBuilder"]
