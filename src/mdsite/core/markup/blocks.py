"""Block token conversion: markdown-it token stream to a Markup Node tree"""

import re

from mdsite.core.markup.inline import convert_inline
from mdsite.core.markup.source import Source
from mdsite.core.models import (
    Blockquote, Cell, CodeBlock, Heading, ListBlock, ListItem, Node, Paragraph, Rule, Table,
)


QUOTE_PREFIX_RE = re.compile(r'^[ \t>]*')
QUOTE_MARKS_RE = re.compile(r'^(?:[ ]{0,3}>[ ]?)+')
LIST_MARKER_RE = re.compile(r'^([ ]*(?:[-+*]|\d{1,9}[.)]))([ ]*)')
TABLE_DIVIDER_RE = re.compile(r'^\|?\s*:?-+:?\s*(\|\s*:?-+:?\s*)*\|?$')
CELL_SPLIT_RE = re.compile(r'(?<!\\)\|')


def _count_cells(row: str) -> int:
    """Count pipe-delimited cells, ignoring outer pipes and escaped '\\|'."""
    row = row.strip()
    if row.startswith('|'):
        row = row[1:]
    if row.endswith('|') and not row.endswith('\\|'):
        row = row[:-1]
    return len(CELL_SPLIT_RE.split(row))


def _leading_spaces(line: str) -> tuple[int, str]:
    line = QUOTE_MARKS_RE.sub('', line).expandtabs(4)
    rest = line.lstrip(' ')
    return len(line) - len(rest), rest


def item_indent(line: str) -> int:
    """Content column of a list item, taken from its first line."""
    m = LIST_MARKER_RE.match(QUOTE_MARKS_RE.sub('', line).expandtabs(4))
    if not m:
        return 0
    gap = len(m.group(2))
    return len(m.group(1)) + (gap if 1 <= gap <= 4 else 1)


def check_fence(token, src: Source, indent: int = 0) -> None:
    """Raise ParseError if a fence token never reached its closing fence line.

    A closing fence may be indented at most three spaces past the enclosing
    list item's content column; deeper lines are code.
    """
    start, end = token.map
    fence = token.markup
    closing = re.compile(rf'{re.escape(fence[0])}{{{len(fence)},}}[ \t]*$')
    if end - start < 2 or end > len(src.lines):
        raise src.error(f"unterminated code fence '{fence}'", token)
    spaces, rest = _leading_spaces(src.lines[end - 1])
    if spaces - indent > 3 or not closing.match(rest):
        raise src.error(f"unterminated code fence '{fence}'", token)


def check_table_shape(token, src: Source) -> None:
    """Raise ParseError if a paragraph is really a table markdown-it refused to build."""
    rows = [QUOTE_PREFIX_RE.sub('', ln).strip() for ln in src.slice(token)]
    if len(rows) < 2 or not rows[0].startswith('|'):
        return
    if TABLE_DIVIDER_RE.match(rows[1]):
        header, divider = _count_cells(rows[0]), _count_cells(rows[1])
        if header != divider:
            raise src.error(
                f"malformed table: header has {header} columns but the delimiter row has {divider}",
                token,
            )
        raise src.error("malformed table", token)
    if all(r.startswith('|') and r.endswith('|') for r in rows):
        raise src.error("malformed table: pipe rows without a '| --- |' delimiter row", token)


def _align(token) -> str | None:
    style = token.attrGet('style') or ''
    if style.startswith('text-align:'):
        return style.split(':', 1)[1].strip()
    return None


def _table(tokens: list, i: int, src: Source) -> tuple[Table, int]:
    """Consume table_open .. table_close starting at i."""
    table = Table(line=src.lineno(tokens[i]))
    row: list[Cell] = []
    in_head = False
    i += 1
    while tokens[i].type != 'table_close':
        t = tokens[i].type
        if t == 'thead_open':
            in_head = True
        elif t == 'thead_close':
            in_head = False
        elif t == 'tr_open':
            row = []
        elif t in ('th_open', 'td_open'):
            row.append(Cell(spans=convert_inline(tokens[i + 1], src), align=_align(tokens[i])))
            i += 1
        elif t == 'tr_close':
            if in_head:
                table.header = row
            else:
                table.rows.append(row)
        i += 1
    return table, i + 1


def _list(tokens: list, i: int, src: Source, indent: int = 0) -> tuple[ListBlock, int]:
    """Consume a bullet/ordered list starting at i, one ListItem per list_item_open."""
    opener = tokens[i]
    ordered = opener.type == 'ordered_list_open'
    block = ListBlock(
        ordered=ordered,
        start=int(opener.attrGet('start') or 1) if ordered else 1,
        line=src.lineno(opener),
    )
    i += 1
    while tokens[i].type == 'list_item_open':
        item = tokens[i]
        item_line = src.lineno(item)
        inner = item_indent(src.lines[item.map[0]]) if item.map else indent
        children, i = to_nodes(tokens, src, i + 1, stop='list_item_close', indent=inner)
        block.items.append(ListItem(children=children, line=item_line))
        i += 1
    return block, i + 1


def to_nodes(
    tokens: list, src: Source, i: int = 0, stop: str | None = None, indent: int = 0,
    ) -> tuple[list[Node], int]:
    """Convert block tokens from i up to the `stop` closer (or the end).

    Returns (nodes, index of the stop token). Node lines are 1-based file lines.
    """
    nodes: list[Node] = []
    while i < len(tokens) and tokens[i].type != stop:
        tok = tokens[i]
        t = tok.type
        if t == 'heading_open':
            nodes.append(Heading(level=int(tok.tag[1:]), spans=convert_inline(tokens[i + 1], src), line=src.lineno(tok)))
            i += 3
        elif t == 'paragraph_open':
            check_table_shape(tok, src)
            nodes.append(Paragraph(spans=convert_inline(tokens[i + 1], src), tight=tok.hidden, line=src.lineno(tok)))
            i += 3
        elif t in ('bullet_list_open', 'ordered_list_open'):
            block, i = _list(tokens, i, src, indent)
            nodes.append(block)
        elif t == 'blockquote_open':
            children, i = to_nodes(tokens, src, i + 1, stop='blockquote_close', indent=indent)
            nodes.append(Blockquote(children=children, line=src.lineno(tok)))
            i += 1
        elif t == 'fence':
            check_fence(tok, src, indent)
            language = tok.info.strip().split()[0] if tok.info.strip() else ''
            nodes.append(CodeBlock(language=language, text=tok.content, line=src.lineno(tok)))
            i += 1
        elif t == 'code_block':
            nodes.append(CodeBlock(text=tok.content, line=src.lineno(tok)))
            i += 1
        elif t == 'hr':
            nodes.append(Rule(line=src.lineno(tok)))
            i += 1
        elif t == 'table_open':
            table, i = _table(tokens, i, src)
            nodes.append(table)
        else:
            i += 1
    return nodes, i
