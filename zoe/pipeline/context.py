"""State shared by the stages of a single build."""

from __future__ import annotations

import dataclasses as dc
import enum
import logging
import typing as typ

from zoe.document import HtmlContentRenderer
from zoe.errors import BuildContextError

if typ.TYPE_CHECKING:
    import types
    from pathlib import Path

    from zoe.config import SiteConfig
    from zoe.content import ContentTree
    from zoe.templating import TemplateEngine

logger = logging.getLogger(__name__)


class _Lifecycle(enum.Enum):
    FRESH = enum.auto()
    OPEN = enum.auto()
    USED = enum.auto()
    CLOSED = enum.auto()


@dc.dataclass(frozen=True, slots=True)
class BuildResult:
    """Summary of a successful build.

    Attributes
    ----------
    output_dir : Path
        Directory the site was written to.
    written : tuple[Path, ...]
        Every rendered page, in write order.
    sitemap_path : Path or None
        Location of ``sitemap.xml``.
    """

    output_dir: Path
    written: tuple[Path, ...]
    sitemap_path: Path | None

    @property
    def page_count(self) -> int:
        return len(self.written)


class BuildContext:
    """Single-use container for one pipeline run.

    The context owns the content tree and the template cache of its build.
    Everything is dropped at once by :meth:`close` (or on leaving a ``with``
    block); a context cannot be entered or run a second time.

    Parameters
    ----------
    config : SiteConfig
        Resolved site configuration.
    renderer : HtmlContentRenderer, optional
        Markdown renderer; one using ``config.build.pygments_style`` is created
        when omitted.
    """

    def __init__(
        self, config: SiteConfig, *, renderer: HtmlContentRenderer | None = None
    ) -> None:
        self.config = config
        self.renderer = renderer or HtmlContentRenderer(config.build.pygments_style)
        self.tree: ContentTree | None = None
        self.templates: TemplateEngine | None = None
        self.written: list[Path] = []
        self.sitemap_path: Path | None = None
        self.failed_stage: str | None = None
        self._lifecycle = _Lifecycle.FRESH

    def __enter__(self) -> BuildContext:
        if self._lifecycle is not _Lifecycle.FRESH:
            msg = "BuildContext cannot be entered more than once."
            raise BuildContextError(msg)
        self._lifecycle = _Lifecycle.OPEN
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: types.TracebackType | None,
    ) -> None:
        self.close()

    @property
    def closed(self) -> bool:
        return self._lifecycle is _Lifecycle.CLOSED

    def begin(self) -> None:
        """Mark the context as consumed by a pipeline run.

        Raises
        ------
        BuildContextError
            If the context already ran a build or was closed.
        """
        if self._lifecycle not in {_Lifecycle.FRESH, _Lifecycle.OPEN}:
            msg = "BuildContext has already been used; create a new one per build."
            raise BuildContextError(msg)
        self._lifecycle = _Lifecycle.USED

    def require_tree(self) -> ContentTree:
        """Return the content tree, failing if no stage has built it yet."""
        if self.tree is None:
            msg = "The content tree has not been built yet."
            raise BuildContextError(msg)
        return self.tree

    def require_templates(self) -> TemplateEngine:
        """Return the template engine, failing if templates were never loaded."""
        if self.templates is None:
            msg = "Templates have not been loaded yet."
            raise BuildContextError(msg)
        return self.templates

    def result(self) -> BuildResult:
        """Summarize the build for callers that outlive the context."""
        return BuildResult(
            output_dir=self.config.output_dir,
            written=tuple(self.written),
            sitemap_path=self.sitemap_path,
        )

    def close(self) -> None:
        """Release the tree and the template cache in one step."""
        if self._lifecycle is _Lifecycle.CLOSED:
            return
        logger.debug("Releasing build context for %s", self.config.root)
        self.tree = None
        self.templates = None
        self.written = []
        self._lifecycle = _Lifecycle.CLOSED


__all__ = ["BuildContext", "BuildResult"]
