"""Read Markdown source files: front matter, HTML rendering and LaTeX markup."""

from .frontmatter import Frontmatter, parse_frontmatter
from .latex import rewrite_latex
from .loader import ParsedDocument, load_document
from .renderer import HtmlContentRenderer

__all__ = [
    "Frontmatter",
    "HtmlContentRenderer",
    "ParsedDocument",
    "load_document",
    "parse_frontmatter",
    "rewrite_latex",
]
