"""Exception taxonomy shared by the zoe build pipeline.

Every failure that can abort a build derives from :class:`ZoeError`. Content
errors remember the offending path so log lines and CLI messages can point at
the file that broke the build.

Examples
--------
>>> from pathlib import Path
>>> from zoe.errors import DirectoryNotFound
>>> err = DirectoryNotFound("content directory not found", path=Path("content"))
>>> err.path
PosixPath('content')
"""

from __future__ import annotations

import typing as typ

if typ.TYPE_CHECKING:
    from pathlib import Path


class ZoeError(Exception):
    """Base class for all zoe build failures."""


class ContentError(ZoeError):
    """Raised while turning the content directory into a content tree."""

    def __init__(self, message: str, *, path: Path | None = None) -> None:
        super().__init__(message)
        self.path = path


class DirectoryNotFound(ContentError):
    """The content root (or a source file) does not exist."""


class NotADirectory(ContentError):
    """The content root exists but is not a directory."""


class PermissionDenied(ContentError):
    """A content path could not be accessed because of its permissions."""


class FileSystemError(ContentError):
    """Any other filesystem failure while reading content."""


class InvalidContent(ContentError):
    """A source file is structurally unusable."""


class InvalidFrontmatter(InvalidContent):
    """The front-matter block is missing its opening or closing delimiter."""


class MissingRequiredFields(InvalidContent):
    """The front matter lacks a non-empty ``title`` or ``date``."""


class InvalidUtf8(InvalidContent):
    """The source file is not valid UTF-8."""


class ContentParseError(ContentError):
    """The Markdown renderer or the LaTeX rewriter failed."""


class SectionIndexAlreadyExists(ContentError):
    """A section was given a second ``_index.md`` page."""


class TemplateError(ZoeError):
    """Raised while loading or parsing page templates."""


class RequiredTemplateNotFound(TemplateError):
    """The mandatory ``base.html`` template is missing."""


class SiteConfigError(ZoeError, ValueError):
    """Raised when the site configuration is invalid or incomplete."""


class BuildContextError(ZoeError, RuntimeError):
    """A build context was reused after its build finished."""


__all__ = [
    "BuildContextError",
    "ContentError",
    "ContentParseError",
    "DirectoryNotFound",
    "FileSystemError",
    "InvalidContent",
    "InvalidFrontmatter",
    "InvalidUtf8",
    "MissingRequiredFields",
    "NotADirectory",
    "PermissionDenied",
    "RequiredTemplateNotFound",
    "SectionIndexAlreadyExists",
    "SiteConfigError",
    "TemplateError",
    "ZoeError",
]
