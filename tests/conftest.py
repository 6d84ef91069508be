"""Shared fixtures for building throwaway zoe projects under ``tmp_path``.

Usage
-----
Request ``write_source`` to add Markdown files below ``content/``,
``write_templates`` to drop the default ``base``/``list``/``post`` templates
into ``templates/`` and ``site_config`` for a :class:`SiteConfig` rooted at the
same temporary project.
"""

from __future__ import annotations

import typing as typ

import pytest

from zoe.config import BuildSettings, SiteConfig

if typ.TYPE_CHECKING:
    import collections.abc as cabc
    from pathlib import Path

BASE_TEMPLATE = (
    "<!DOCTYPE html>\n<html><head><title>{{title}}</title></head>"
    '<body><main data-url="{url}">{{content}}</main></body></html>\n'
)
LIST_TEMPLATE = (
    "<!DOCTYPE html>\n<html><head><title>{{title}}</title></head><body>"
    "<h1>{{title}}</h1>{{content}}<ul class=\"page-list\">"
    '{{#each pages}}<li><a href="{{this.url}}">{{this.title}}</a>'
    "<time>{{this.date}}</time></li>{{/each}}</ul></body></html>\n"
)
POST_TEMPLATE = (
    "<!DOCTYPE html>\n<html><head><title>{{title}}</title></head><body>"
    '<article><h1>{{title}}</h1><time>{{date}}</time>{{content}}</article>'
    "</body></html>\n"
)
DEFAULT_TEMPLATES = {
    "base.html": BASE_TEMPLATE,
    "list.html": LIST_TEMPLATE,
    "post.html": POST_TEMPLATE,
}


def page_source(title: str, date: str, body: str = "", *, draft: bool = False) -> str:
    """Return a Markdown source file with front matter."""
    lines = ["---", f'title: "{title}"', f"date: {date}"]
    if draft:
        lines.append("draft: true")
    lines.append("---")
    return "\n".join(lines) + "\n" + body


@pytest.fixture
def site_root(tmp_path: Path) -> Path:
    """Return an empty project directory."""
    root = tmp_path / "site"
    (root / "content").mkdir(parents=True)
    return root


@pytest.fixture
def write_source(site_root: Path) -> cabc.Callable[..., Path]:
    """Return a helper that writes ``content/<relative>`` with front matter."""

    def _write(
        relative: str, title: str, date: str, body: str = "", *, draft: bool = False
    ) -> Path:
        path = site_root / "content" / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(page_source(title, date, body, draft=draft), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def write_templates(site_root: Path) -> cabc.Callable[..., Path]:
    """Return a helper that writes the default templates, minus ``omit``."""

    def _write(
        *, omit: cabc.Iterable[str] = (), overrides: cabc.Mapping[str, str] | None = None
    ) -> Path:
        templates_dir = site_root / "templates"
        templates_dir.mkdir(parents=True, exist_ok=True)
        files = {**DEFAULT_TEMPLATES, **(overrides or {})}
        for name, text in files.items():
            if name in omit:
                continue
            (templates_dir / name).write_text(text, encoding="utf-8")
        return templates_dir

    return _write


@pytest.fixture
def site_config(site_root: Path) -> SiteConfig:
    """Return a configuration rooted at ``site_root`` with no assets directory."""
    return SiteConfig(
        title="Test Site",
        base_url="https://example.com",
        build=BuildSettings(assets_dir=None),
        root=site_root,
    )
