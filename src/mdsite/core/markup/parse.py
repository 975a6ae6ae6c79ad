"""Markup Renderer entry point: Markdown text to a Markup Node tree"""

from functools import lru_cache

from markdown_it import MarkdownIt

from mdsite.core.markup.blocks import to_nodes
from mdsite.core.markup.source import Source
from mdsite.core.models import ListBlock, Node, child_nodes


PARSER_PRESET = "gfm-like"


@lru_cache(maxsize=None)
def make_parser() -> MarkdownIt:
    """Build the shared MarkdownIt instance (tables + strikethrough, no raw HTML).

    text_join is disabled so backslash escapes stay separate `text_special`
    tokens and are never mistaken for dangling markers.
    """
    return MarkdownIt(PARSER_PRESET, options_update={"linkify": False, "html": False}).disable("text_join")


def parse_markup(text: str, document: str | None = None, line_offset: int = 0) -> list[Node]:
    """Parse markup into block nodes; raises ParseError on malformed input.

    line_offset is the number of file lines before `text` (the header block),
    so reported line numbers point into the original file.
    """
    text = text.replace('\r\n', '\n')
    src = Source(lines=text.split('\n'), document=document, line_offset=line_offset)
    nodes, _ = to_nodes(make_parser().parse(text), src)
    return nodes


def count_list_items(nodes: list[Node]) -> int:
    """Total list items in the tree, nested lists included."""
    total = 0
    for node in nodes:
        if isinstance(node, ListBlock):
            total += len(node.items)
        total += count_list_items(child_nodes(node))
    return total
