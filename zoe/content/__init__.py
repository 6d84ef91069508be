"""Content tree construction for zoe sites."""

from __future__ import annotations

from .builder import ContentTreeBuilder
from .models import ContentKind, ContentNode, ContentTree, Section, sort_by_date_desc
from .paths import (
    HOMEPAGE_OUTPUT_PATH,
    HOMEPAGE_URL,
    join_section_path,
    page_output_path,
    page_url,
    section_output_path,
    section_url,
    slug_for,
)

__all__ = [
    "HOMEPAGE_OUTPUT_PATH",
    "HOMEPAGE_URL",
    "ContentKind",
    "ContentNode",
    "ContentTree",
    "ContentTreeBuilder",
    "Section",
    "join_section_path",
    "page_output_path",
    "page_url",
    "section_output_path",
    "section_url",
    "slug_for",
    "sort_by_date_desc",
]
