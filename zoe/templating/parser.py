"""Parse zoe page templates into a small node tree.

The template language has exactly three constructs:

``{{name}}`` / ``{name}``
    Scalar placeholders. ``title``, ``content``, ``date`` and ``url`` are
    filled from the node being rendered; any other identifier renders as the
    empty string.
``{{#each pages}} ... {{/each}}``
    Repeats its body once per page of the section listing. Inside the body
    only ``{{this.url}}``, ``{{this.title}}`` and ``{{this.date}}`` are
    substituted; everything else is copied verbatim.
Text
    Everything else is copied through unchanged.

A template is parsed once, on first render, and the resulting nodes are reused
for every node that shares the template.

Examples
--------
>>> Template("greeting", "Hello {{title}}!").render({"title": "World"})
'Hello World!'
>>> Template("bogus", "{{bogus}}").render({"title": "World"})
''
"""

from __future__ import annotations

import dataclasses as dc
import functools
import re
import typing as typ

if typ.TYPE_CHECKING:
    import collections.abc as cabc

EACH_OPEN = "{{#each pages"
NESTED_EACH_OPEN = "{{#each "
EACH_CLOSE = "{{/each}}"

SCALAR_FIELDS = frozenset({"title", "content", "date", "url"})

DOUBLE_BRACE_PATTERN = re.compile(r"\{\{([A-Za-z_][A-Za-z0-9_.|-]*)\}\}")
SINGLE_BRACE_PATTERN = re.compile(r"\{([A-Za-z_][A-Za-z0-9_.|-]*)\}")
ITEM_PLACEHOLDER_PATTERN = re.compile(r"\{\{this\.(url|title|date)\}\}")


class ListingItem(typ.Protocol):
    """Anything exposing the fields available inside an each block."""

    url: str
    title: str
    date: str


@dc.dataclass(frozen=True, slots=True)
class Text:
    """Literal template text."""

    value: str


@dc.dataclass(frozen=True, slots=True)
class Placeholder:
    """A scalar placeholder; ``this.<field>`` inside an each block."""

    name: str


@dc.dataclass(frozen=True, slots=True)
class EachBlock:
    """The body of ``{{#each pages}}``, repeated per listing entry."""

    body: tuple[Text | Placeholder, ...]


TemplateNode = Text | Placeholder | EachBlock


def parse_template(source: str) -> tuple[TemplateNode, ...]:
    """Parse ``source`` into template nodes.

    Parameters
    ----------
    source : str
        Raw template text.

    Returns
    -------
    tuple[TemplateNode, ...]
        Adjacent literal text is merged into single :class:`Text` nodes.

    Notes
    -----
    Parsing never fails. An ``{{#each pages}}`` with no matching ``{{/each}}``
    keeps the opening tag and the rest of the template as literal text, and
    blocks over anything other than ``pages`` (along with their ``{{/each}}``)
    are copied through unchanged.

    Examples
    --------
    >>> parse_template("<h1>{{title}}</h1>")
    (Text(value='<h1>'), Placeholder(name='title'), Text(value='</h1>'))
    """
    nodes: list[TemplateNode] = []
    literal: list[str] = []
    pos = 0
    end = len(source)
    while pos < end:
        if source[pos] != "{":
            brace = source.find("{", pos)
            stop = end if brace == -1 else brace
            literal.append(source[pos:stop])
            pos = stop
            continue
        if source.startswith(EACH_OPEN, pos):
            block = _match_each_block(source, pos)
            if block is None:
                literal.append(source[pos:])
                break
            body, pos = block
            _flush_literal(literal, nodes)
            nodes.append(EachBlock(_parse_each_body(body)))
            continue
        match = DOUBLE_BRACE_PATTERN.match(source, pos) or SINGLE_BRACE_PATTERN.match(
            source, pos
        )
        if match is None:
            literal.append("{")
            pos += 1
            continue
        _flush_literal(literal, nodes)
        nodes.append(Placeholder(match.group(1)))
        pos = match.end()
    _flush_literal(literal, nodes)
    return tuple(nodes)


def _flush_literal(literal: list[str], nodes: list[TemplateNode]) -> None:
    if literal:
        nodes.append(Text("".join(literal)))
        literal.clear()


def _match_each_block(source: str, start: int) -> tuple[str, int] | None:
    """Return the block body and the offset after its closing tag.

    Nesting is tracked by counting literal ``{{#each `` and ``{{/each}}``
    occurrences after the opening tag.
    """
    tag_end = source.find("}}", start + len(EACH_OPEN))
    if tag_end == -1:
        return None
    body_start = tag_end + 2
    depth = 1
    pos = body_start
    while True:
        next_close = source.find(EACH_CLOSE, pos)
        if next_close == -1:
            return None
        next_open = source.find(NESTED_EACH_OPEN, pos, next_close)
        if next_open != -1:
            depth += 1
            pos = next_open + len(NESTED_EACH_OPEN)
            continue
        depth -= 1
        if depth == 0:
            return source[body_start:next_close], next_close + len(EACH_CLOSE)
        pos = next_close + len(EACH_CLOSE)


def _parse_each_body(body: str) -> tuple[Text | Placeholder, ...]:
    parts: list[Text | Placeholder] = []
    pos = 0
    for match in ITEM_PLACEHOLDER_PATTERN.finditer(body):
        if match.start() > pos:
            parts.append(Text(body[pos : match.start()]))
        parts.append(Placeholder(f"this.{match.group(1)}"))
        pos = match.end()
    if pos < len(body):
        parts.append(Text(body[pos:]))
    return tuple(parts)


@dc.dataclass(frozen=True)
class Template:
    """Immutable template source, parsed on first use.

    Attributes
    ----------
    name : str
        Template file name, used in log and error messages.
    source : str
        Raw template text.
    """

    name: str
    source: str

    @functools.cached_property
    def nodes(self) -> tuple[TemplateNode, ...]:
        """Return the parsed node tree."""
        return parse_template(self.source)

    def render(
        self,
        fields: cabc.Mapping[str, str],
        listing: cabc.Sequence[ListingItem] | None = None,
    ) -> str:
        """Render the template with ``fields`` and an optional page listing.

        Values are inserted raw; nothing is HTML-escaped.

        Examples
        --------
        >>> from types import SimpleNamespace as NS
        >>> tpl = Template("list", "{{#each pages}}{{this.title}}{{/each}}")
        >>> tpl.render({}, [NS(title="A", url="/a/", date=""), NS(title="B", url="/b/", date="")])
        'AB'
        >>> tpl.render({})
        ''
        """
        parts: list[str] = []
        for node in self.nodes:
            if isinstance(node, Text):
                parts.append(node.value)
            elif isinstance(node, Placeholder):
                if node.name in SCALAR_FIELDS:
                    parts.append(fields.get(node.name, ""))
            else:
                for item in listing or ():
                    parts.extend(_render_item(node.body, item))
        return "".join(parts)


def _render_item(
    body: tuple[Text | Placeholder, ...], item: ListingItem
) -> cabc.Iterator[str]:
    for part in body:
        if isinstance(part, Text):
            yield part.value
        else:
            yield getattr(item, part.name.removeprefix("this."))


__all__ = [
    "EACH_CLOSE",
    "EACH_OPEN",
    "SCALAR_FIELDS",
    "EachBlock",
    "ListingItem",
    "Placeholder",
    "Template",
    "TemplateNode",
    "Text",
    "parse_template",
]
