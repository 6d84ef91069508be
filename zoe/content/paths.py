"""Derive slugs, URLs and output paths from section paths and filenames.

Every URL and output path in a build comes from these functions, so a node's
location depends only on its section path and its slug.

Examples
--------
>>> page_url("a/b", "c.md")
'/a/b/c/'
>>> page_output_path("a/b", "c.md")
'a/b/c/index.html'
>>> section_url("")
'/'
"""

from __future__ import annotations

from zoe._constants import INDEX_HTML, MARKDOWN_SUFFIX

HOMEPAGE_URL = "/"
HOMEPAGE_OUTPUT_PATH = INDEX_HTML


def slug_for(filename: str) -> str:
    """Return ``filename`` without a trailing ``.md``; idempotent."""
    return filename.removesuffix(MARKDOWN_SUFFIX)


def join_section_path(parent: str, name: str) -> str:
    """Join a parent section path and a directory name with ``/``."""
    return f"{parent}/{name}" if parent else name


def _prefix(section_path: str | None) -> str:
    return f"{section_path}/" if section_path else ""


def page_url(section_path: str | None, filename: str) -> str:
    """Return ``/<section>/<slug>/`` (or ``/<slug>/`` at the root)."""
    return f"/{_prefix(section_path)}{slug_for(filename)}/"


def page_output_path(section_path: str | None, filename: str) -> str:
    """Return ``<section>/<slug>/index.html`` relative to the output dir."""
    return f"{_prefix(section_path)}{slug_for(filename)}/{INDEX_HTML}"


def section_url(section_path: str | None) -> str:
    """Return ``/<section>/``; the root section lives at ``/``."""
    return f"/{section_path}/" if section_path else "/"


def section_output_path(section_path: str | None) -> str:
    """Return ``<section>/index.html``; the root section writes ``index.html``."""
    return f"{section_path}/{INDEX_HTML}" if section_path else INDEX_HTML


__all__ = [
    "HOMEPAGE_OUTPUT_PATH",
    "HOMEPAGE_URL",
    "join_section_path",
    "page_output_path",
    "page_url",
    "section_output_path",
    "section_url",
    "slug_for",
]
