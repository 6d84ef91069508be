"""Select, load and apply the page template for each content node."""

from __future__ import annotations

import enum
import logging
import typing as typ

from zoe.errors import RequiredTemplateNotFound, TemplateError

from .parser import Template

if typ.TYPE_CHECKING:
    from pathlib import Path

    from zoe.content import ContentNode

logger = logging.getLogger(__name__)


class TemplateRole(enum.StrEnum):
    """Which template file renders a node."""

    BASE = "base"
    LIST = "list"
    POST = "post"

    @property
    def filename(self) -> str:
        """Return the template file name, e.g. ``list.html``."""
        return f"{self.value}.html"

    @classmethod
    def for_node(cls, node: ContentNode) -> TemplateRole:
        """Pick ``list`` for section indexes, ``base`` for the homepage, else ``post``.

        Examples
        --------
        >>> from zoe.content import ContentKind, ContentNode
        >>> home = ContentNode("Home", "", "", "index.html", "/", ContentKind.PAGE, "index.md")
        >>> TemplateRole.for_node(home)
        <TemplateRole.BASE: 'base'>
        """
        if node.is_section:
            return cls.LIST
        if node.is_homepage:
            return cls.BASE
        return cls.POST


class TemplateCache:
    """Load each role's template at most once per build.

    A role whose file is missing falls back to ``base.html`` and the fallback
    is cached under the requested role as well.
    """

    def __init__(self, templates_dir: Path) -> None:
        self.templates_dir = templates_dir
        self._templates: dict[TemplateRole, Template] = {}

    def __contains__(self, role: TemplateRole) -> bool:
        return role in self._templates

    def get(self, role: TemplateRole) -> Template:
        """Return the template for ``role``, loading it on first use.

        Raises
        ------
        RequiredTemplateNotFound
            If ``base.html`` is needed but missing.
        TemplateError
            If a template file exists but cannot be read as UTF-8.
        """
        cached = self._templates.get(role)
        if cached is not None:
            return cached

        path = self.templates_dir / role.filename
        if path.is_file():
            template = Template(name=role.filename, source=_read_template(path))
        elif role is TemplateRole.BASE:
            msg = f"Required {role.filename} template not found in {self.templates_dir}"
            logger.error(msg)
            raise RequiredTemplateNotFound(msg)
        else:
            logger.info(
                "Template %s not found, falling back to %s",
                role.filename,
                TemplateRole.BASE.filename,
            )
            template = self.get(TemplateRole.BASE)
        self._templates[role] = template
        return template


def _read_template(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        msg = f"Failed to read template {path}: {exc}"
        logger.error(msg)
        raise TemplateError(msg) from exc


def node_fields(node: ContentNode) -> dict[str, str]:
    """Return the scalar placeholder values for ``node``."""
    return {
        "title": node.title,
        "content": node.rendered_body,
        "date": node.date,
        "url": node.url,
    }


class TemplateEngine:
    """Render content nodes through the templates in ``templates_dir``.

    Parameters
    ----------
    templates_dir : Path
        Directory holding ``base.html`` and optionally ``list.html`` and
        ``post.html``.
    cache : TemplateCache, optional
        Cache to reuse; a fresh one is created when omitted.
    """

    def __init__(
        self, templates_dir: Path, *, cache: TemplateCache | None = None
    ) -> None:
        self.templates_dir = templates_dir
        self.cache = cache or TemplateCache(templates_dir)

    def ensure_base_template(self) -> None:
        """Load ``base.html`` eagerly so a missing file fails before rendering."""
        self.cache.get(TemplateRole.BASE)

    def render(self, node: ContentNode) -> str:
        """Return the full page for ``node`` without modifying it.

        The node's ``attached_listing`` feeds any ``{{#each pages}}`` block.
        """
        role = TemplateRole.for_node(node)
        template = self.cache.get(role)
        logger.debug("Applying %s to %s", template.name, node.url)
        return template.render(node_fields(node), node.attached_listing)

    def apply(self, node: ContentNode) -> None:
        """Replace ``node.rendered_body`` with the templated page."""
        node.rendered_body = self.render(node)


__all__ = ["TemplateCache", "TemplateEngine", "TemplateRole", "node_fields"]
