"""Tests for URL derivation, the content model and the tree builder."""

from __future__ import annotations

import errno
import os
import typing as typ
from pathlib import Path

import pytest

from zoe.content import (
    ContentKind,
    ContentNode,
    ContentTree,
    ContentTreeBuilder,
    Section,
    page_output_path,
    page_url,
    section_output_path,
    section_url,
    slug_for,
    sort_by_date_desc,
)
from zoe.content import builder as builder_module
from zoe.document import HtmlContentRenderer
from zoe.errors import (
    DirectoryNotFound,
    FileSystemError,
    MissingRequiredFields,
    NotADirectory,
    PermissionDenied,
    SectionIndexAlreadyExists,
)

if typ.TYPE_CHECKING:
    import collections.abc as cabc


def _node(title: str = "t", date: str = "", **kwargs: typ.Any) -> ContentNode:
    defaults: dict[str, typ.Any] = {
        "rendered_body": "",
        "output_path": "x/index.html",
        "url": "/x/",
        "kind": ContentKind.PAGE,
        "source_filename": "x.md",
    }
    defaults.update(kwargs)
    return ContentNode(title=title, date=date, **defaults)


@pytest.fixture
def builder() -> ContentTreeBuilder:
    return ContentTreeBuilder(HtmlContentRenderer())


@pytest.mark.parametrize("filename", ["post.md", "post"])
def test_slug_is_idempotent(filename: str) -> None:
    assert slug_for(filename) == "post"
    assert slug_for(slug_for(filename)) == "post"


def test_page_locations_in_nested_section() -> None:
    assert page_url("a/b", "c.md") == "/a/b/c/"
    assert page_output_path("a/b", "c.md") == "a/b/c/index.html"


def test_page_locations_at_root() -> None:
    assert page_url("", "about.md") == "/about/"
    assert page_output_path(None, "about.md") == "about/index.html"


def test_section_locations() -> None:
    assert section_url("posts") == "/posts/"
    assert section_output_path("posts") == "posts/index.html"
    assert section_url("") == "/"
    assert section_output_path("") == "index.html"


def test_sort_by_date_desc_example() -> None:
    nodes = [_node(date=d) for d in ["2024-01-01", "2023-05-01", "2024-06-01"]]
    assert [n.date for n in sort_by_date_desc(nodes)] == [
        "2024-06-01",
        "2024-01-01",
        "2023-05-01",
    ]


def test_sort_by_date_desc_is_stable() -> None:
    first, second, third = _node("a", "2024"), _node("b", "2024"), _node("c", "2025")
    assert sort_by_date_desc([first, second, third]) == [third, first, second]


def test_second_index_page_is_rejected_and_first_kept() -> None:
    section = Section(name="posts", path="posts")
    first = _node("first", kind=ContentKind.SECTION)
    section.set_index_page(first)
    with pytest.raises(SectionIndexAlreadyExists):
        section.set_index_page(_node("second", kind=ContentKind.SECTION))
    assert section.index_page is first


def test_get_or_create_section_links_parents() -> None:
    tree = ContentTree.empty()
    leaf = tree.get_or_create_section("a/b")
    assert list(tree.sections) == ["", "a", "a/b"]
    assert tree.sections["a"].subsections == [leaf]
    assert tree.root.subsections == [tree.sections["a"]]
    assert tree.get_or_create_section("a/b") is leaf


def test_is_homepage_only_for_root_page() -> None:
    assert _node(url="/").is_homepage
    assert not _node(url="/", kind=ContentKind.SECTION).is_homepage
    assert not _node(url="/x/").is_homepage


def test_build_end_to_end_tree(
    builder: ContentTreeBuilder,
    site_root: Path,
    write_source: cabc.Callable[..., Path],
) -> None:
    write_source("index.md", "Home", "2024-01-01", "Welcome")
    write_source("posts/_index.md", "Posts", "2024-01-02")
    write_source("posts/a.md", "A", "2024-01-01")
    write_source("posts/b.md", "B", "2024-06-01")

    tree = builder.build(site_root / "content")

    assert tree.homepage is not None
    assert tree.homepage.url == "/"
    assert tree.homepage.output_path == "index.html"
    assert tree.homepage.kind is ContentKind.PAGE

    posts = tree.sections["posts"]
    assert posts.index_page is not None
    assert posts.index_page.kind is ContentKind.SECTION
    assert posts.index_page.url == "/posts/"
    assert [page.title for page in posts.pages] == ["A", "B"]
    assert [page.title for page in posts.sorted_pages()] == ["B", "A"]
    assert posts.pages[0].url == "/posts/a/"
    assert posts.pages[0].section_path == "posts"


def test_homepage_is_not_a_root_page(
    builder: ContentTreeBuilder,
    site_root: Path,
    write_source: cabc.Callable[..., Path],
) -> None:
    write_source("index.md", "Home", "2024-01-01")
    write_source("about.md", "About", "2024-01-01")

    tree = builder.build(site_root / "content")

    assert [page.url for page in tree.root.pages] == ["/about/"]
    assert tree.homepage is not None


def test_missing_homepage_is_a_warning(
    builder: ContentTreeBuilder,
    site_root: Path,
    write_source: cabc.Callable[..., Path],
    caplog: pytest.LogCaptureFixture,
) -> None:
    write_source("posts/a.md", "A", "2024-01-01")
    tree = builder.build(site_root / "content")
    assert tree.homepage is None
    assert "Home page will not be available" in caplog.text


def test_hidden_and_non_markdown_entries_are_skipped(
    builder: ContentTreeBuilder,
    site_root: Path,
    write_source: cabc.Callable[..., Path],
) -> None:
    write_source("posts/a.md", "A", "2024-01-01")
    write_source(".drafts/hidden.md", "Hidden", "2024-01-01")
    (site_root / "content" / "posts" / ".secret.md").write_text("x", encoding="utf-8")
    (site_root / "content" / "posts" / "notes.txt").write_text("x", encoding="utf-8")

    tree = builder.build(site_root / "content")

    assert ".drafts" not in tree.sections
    assert [page.source_filename for page in tree.sections["posts"].pages] == ["a.md"]


def test_nested_sections_are_recorded(
    builder: ContentTreeBuilder,
    site_root: Path,
    write_source: cabc.Callable[..., Path],
) -> None:
    write_source("docs/guides/_index.md", "Guides", "2024-01-01")
    write_source("docs/guides/setup.md", "Setup", "2024-01-01")

    tree = builder.build(site_root / "content")

    guides = tree.sections["docs/guides"]
    assert guides.index_page is not None
    assert guides.index_page.url == "/docs/guides/"
    assert guides.pages[0].output_path == "docs/guides/setup/index.html"
    assert tree.sections["docs"].subsections == [guides]


def test_draft_flag_is_carried(
    builder: ContentTreeBuilder,
    site_root: Path,
    write_source: cabc.Callable[..., Path],
) -> None:
    write_source("posts/wip.md", "WIP", "2024-01-01", draft=True)
    tree = builder.build(site_root / "content")
    assert tree.sections["posts"].pages[0].draft is True


def test_missing_content_root(builder: ContentTreeBuilder, tmp_path: Path) -> None:
    with pytest.raises(DirectoryNotFound):
        builder.build(tmp_path / "nope")


def test_content_root_is_a_file(builder: ContentTreeBuilder, tmp_path: Path) -> None:
    target = tmp_path / "content"
    target.write_text("not a dir", encoding="utf-8")
    with pytest.raises(NotADirectory):
        builder.build(target)


def test_invalid_page_aborts_build(
    builder: ContentTreeBuilder, site_root: Path
) -> None:
    bad = site_root / "content" / "bad.md"
    bad.write_text("---\ntitle: Only title\n---\n", encoding="utf-8")
    with pytest.raises(MissingRequiredFields) as excinfo:
        builder.build(site_root / "content")
    assert excinfo.value.path == bad


needs_unix_permissions = pytest.mark.skipif(
    os.name != "posix" or os.geteuid() == 0,
    reason="file modes are not enforced for this user",
)


@needs_unix_permissions
def test_unreadable_subdirectory_is_permission_denied(
    builder: ContentTreeBuilder,
    site_root: Path,
    write_source: cabc.Callable[..., Path],
) -> None:
    write_source("posts/a.md", "A", "2024-01-01")
    locked = site_root / "content" / "posts"
    locked.chmod(0o000)
    try:
        with pytest.raises(PermissionDenied) as excinfo:
            builder.build(site_root / "content")
    finally:
        locked.chmod(0o755)
    assert excinfo.value.path == locked


@needs_unix_permissions
def test_unreachable_content_root_is_permission_denied(
    builder: ContentTreeBuilder, tmp_path: Path
) -> None:
    parent = tmp_path / "locked"
    content = parent / "content"
    content.mkdir(parents=True)
    parent.chmod(0o000)
    try:
        with pytest.raises(PermissionDenied) as excinfo:
            builder.build(content)
    finally:
        parent.chmod(0o755)
    assert excinfo.value.path == content


def test_homepage_permission_error_aborts_build(
    builder: ContentTreeBuilder,
    site_root: Path,
    write_source: cabc.Callable[..., Path],
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    homepage = write_source("index.md", "Home", "2024-01-01")
    real_stat = Path.stat

    def guarded_stat(self: Path, **kwargs: typ.Any) -> os.stat_result:
        if self == homepage:
            raise PermissionError(errno.EACCES, "Permission denied", str(self))
        return real_stat(self, **kwargs)

    monkeypatch.setattr(Path, "stat", guarded_stat)
    with pytest.raises(PermissionDenied) as excinfo:
        builder.build(site_root / "content")
    assert excinfo.value.path == homepage


def test_directory_read_failure_is_filesystem_error(
    builder: ContentTreeBuilder,
    site_root: Path,
    write_source: cabc.Callable[..., Path],
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    write_source("docs/guide.md", "Guide", "2024-01-01")
    broken = site_root / "content" / "docs"
    real_scandir = os.scandir

    def failing_scandir(path: typ.Any) -> typ.Any:  # noqa: ANN401
        if Path(path) == broken:
            raise OSError(errno.EIO, "Input/output error", str(path))
        return real_scandir(path)

    monkeypatch.setattr(builder_module.os, "scandir", failing_scandir)
    with pytest.raises(FileSystemError) as excinfo:
        builder.build(site_root / "content")
    assert excinfo.value.path == broken


class _BrokenEntry:
    path = "/content/ghost"
    name = "ghost"

    def is_dir(self) -> bool:
        raise OSError(errno.EIO, "Input/output error")

    is_file = is_dir


def test_entry_stat_failure_carries_path() -> None:
    with pytest.raises(FileSystemError) as excinfo:
        builder_module._is_dir(_BrokenEntry())  # type: ignore[arg-type]
    assert excinfo.value.path == Path("/content/ghost")
    with pytest.raises(FileSystemError):
        builder_module._is_file(_BrokenEntry())  # type: ignore[arg-type]
