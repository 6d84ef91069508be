"""Page templates: the placeholder and each-block language and its engine."""

from __future__ import annotations

from .engine import TemplateCache, TemplateEngine, TemplateRole, node_fields
from .parser import EachBlock, Placeholder, Template, Text, parse_template

__all__ = [
    "EachBlock",
    "Placeholder",
    "Template",
    "TemplateCache",
    "TemplateEngine",
    "TemplateRole",
    "Text",
    "node_fields",
    "parse_template",
]
