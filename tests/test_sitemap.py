"""Tests for sitemap projection and XML output."""

from __future__ import annotations

import typing as typ

import pytest
from bs4 import BeautifulSoup

from zoe.content import ContentKind, ContentNode, ContentTree
from zoe.errors import FileSystemError
from zoe.pipeline import build_site
from zoe.sitemap import (
    ChangeFrequency,
    SitemapEntry,
    project_sitemap,
    render_sitemap,
    write_sitemap,
)

if typ.TYPE_CHECKING:
    import collections.abc as cabc
    from pathlib import Path

    from zoe.config import SiteConfig

HOST = "https://example.com"


def _tree() -> ContentTree:
    tree = ContentTree.empty()
    tree.homepage = ContentNode(
        "Home", "2024-01-01", "", "index.html", "/", ContentKind.PAGE, "index.md"
    )
    posts = tree.get_or_create_section("posts")
    posts.set_index_page(
        ContentNode(
            "Posts", "", "", "posts/index.html", "/posts/", ContentKind.SECTION, "_index.md",
            section_path="posts",
        )
    )
    posts.add_page(
        ContentNode(
            "A", "2024-03-01", "", "posts/a/index.html", "/posts/a/", ContentKind.PAGE,
            "a.md", section_path="posts",
        )
    )
    posts.add_page(
        ContentNode(
            "Draft", "2024-04-01", "", "posts/d/index.html", "/posts/d/", ContentKind.PAGE,
            "d.md", section_path="posts", draft=True,
        )
    )
    return tree


def test_projection_rules_and_order() -> None:
    entries = project_sitemap(_tree(), HOST)
    assert entries == [
        SitemapEntry(f"{HOST}/posts/a/", "2024-03-01", ChangeFrequency.MONTHLY, 0.6),
        SitemapEntry(f"{HOST}/", "2024-01-01", ChangeFrequency.WEEKLY, 1.0),
        SitemapEntry(f"{HOST}/posts/", None, ChangeFrequency.WEEKLY, 0.8),
    ]


def test_drafts_are_skipped() -> None:
    locs = [entry.loc for entry in project_sitemap(_tree(), HOST)]
    assert f"{HOST}/posts/d/" not in locs


def test_render_format() -> None:
    xml = render_sitemap(
        [
            SitemapEntry(f"{HOST}/a/", "2024-03-01", ChangeFrequency.MONTHLY, 0.6),
            SitemapEntry(f"{HOST}/posts/", None, ChangeFrequency.WEEKLY, 0.8),
        ]
    )
    assert xml == (
        '<?xml version="1.0" encoding="UTF-8"?>\n'
        '<urlset xmlns="http://www.sitemaps.org/schemas/sitemap/0.9">\n'
        "<url>\n"
        "  <loc>https://example.com/a/</loc>\n"
        "  <lastmod>2024-03-01</lastmod>\n"
        "  <changefreq>monthly</changefreq>\n"
        "  <priority>0.6</priority>\n"
        "</url>\n"
        "<url>\n"
        "  <loc>https://example.com/posts/</loc>\n"
        "  <changefreq>weekly</changefreq>\n"
        "  <priority>0.8</priority>\n"
        "</url>\n"
        "</urlset>\n"
    )


def test_locations_are_xml_escaped() -> None:
    xml = render_sitemap([SitemapEntry(f"{HOST}/a&b/", None, ChangeFrequency.MONTHLY, 0.6)])
    assert "<loc>https://example.com/a&amp;b/</loc>" in xml


def test_write_sitemap(tmp_path: Path) -> None:
    path = write_sitemap(project_sitemap(_tree(), HOST), tmp_path / "public")
    assert path == tmp_path / "public" / "sitemap.xml"
    soup = BeautifulSoup(path.read_text(encoding="utf-8"), "html.parser")
    assert len(soup.find_all("url")) == 3


def test_built_site_sitemap_uses_base_url(
    write_source: cabc.Callable[..., Path],
    write_templates: cabc.Callable[..., Path],
    site_config: SiteConfig,
) -> None:
    write_source("index.md", "Home", "2024-01-01")
    write_source("posts/a.md", "A", "2024-02-01")
    write_source("posts/wip.md", "WIP", "2024-03-01", draft=True)
    write_templates()

    result = build_site(site_config)

    assert result.sitemap_path is not None
    soup = BeautifulSoup(result.sitemap_path.read_text(encoding="utf-8"), "html.parser")
    assert [loc.get_text() for loc in soup.find_all("loc")] == [
        "https://example.com/posts/a/",
        "https://example.com/",
    ]
    assert (site_config.output_dir / "posts" / "wip" / "index.html").exists()


def test_write_failure_is_a_filesystem_error(tmp_path: Path) -> None:
    output_dir = tmp_path / "public"
    (output_dir / "sitemap.xml").mkdir(parents=True)
    with pytest.raises(FileSystemError) as excinfo:
        write_sitemap(project_sitemap(_tree(), HOST), output_dir)
    assert excinfo.value.path == output_dir / "sitemap.xml"


def test_root_section_index_replaces_homepage_entry() -> None:
    tree = _tree()
    tree.root.set_index_page(
        ContentNode(
            "Root", "2023-01-01", "", "index.html", "/", ContentKind.SECTION, "_index.md"
        )
    )
    entries = project_sitemap(tree, HOST)
    root_entries = [entry for entry in entries if entry.loc == f"{HOST}/"]
    assert root_entries == [
        SitemapEntry(f"{HOST}/", "2023-01-01", ChangeFrequency.WEEKLY, 0.8)
    ]
