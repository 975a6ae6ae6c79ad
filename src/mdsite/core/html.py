"""HTML serialization of styled Markup Node trees"""

from html import escape

from mdsite.core.models import (
    Blockquote, Break, Cell, Code, CodeBlock, Emphasis, Heading, Image, Link, ListBlock, ListItem,
    Paragraph, Rule, Span, Strikethrough, Strong, StyledNode, Table, Text,
)
from mdsite.core.utils.slug import class_name


def _attr(value: str) -> str:
    return escape(value, quote=True)


def _attrs(styled: StyledNode, inline_styles: bool, **extra: str) -> str:
    """class (kind + node classes), optional extra attributes, and an optional style attribute."""
    node = styled.node
    parts = [f' class="{_attr(" ".join((node.kind.value, *node.classes)))}"']
    parts.extend(f' {name}="{_attr(value)}"' for name, value in extra.items())
    if inline_styles and styled.properties:
        style = "; ".join(f"{k}: {v}" for k, v in styled.properties.items())
        parts.append(f' style="{_attr(style)}"')
    return "".join(parts)


def render_spans(spans: list[Span]) -> str:
    """Serialize inline spans to HTML."""
    out = []
    for span in spans:
        if isinstance(span, Text):
            out.append(escape(span.text, quote=False))
        elif isinstance(span, Code):
            out.append(f"<code>{escape(span.text, quote=False)}</code>")
        elif isinstance(span, Break):
            out.append("<br />\n" if span.hard else "\n")
        elif isinstance(span, Emphasis):
            out.append(f"<em>{render_spans(span.children)}</em>")
        elif isinstance(span, Strong):
            out.append(f"<strong>{render_spans(span.children)}</strong>")
        elif isinstance(span, Strikethrough):
            out.append(f"<del>{render_spans(span.children)}</del>")
        elif isinstance(span, Link):
            title = f' title="{_attr(span.title)}"' if span.title else ""
            out.append(f'<a href="{_attr(span.href)}"{title}>{render_spans(span.children)}</a>')
        elif isinstance(span, Image):
            title = f' title="{_attr(span.title)}"' if span.title else ""
            out.append(f'<img src="{_attr(span.src)}" alt="{_attr(span.alt)}"{title} />')
    return "".join(out)


def plain_text(spans: list[Span]) -> str:
    """Text content of spans with markup dropped (titles, summaries)."""
    out = []
    for span in spans:
        if isinstance(span, (Text, Code)):
            out.append(span.text)
        elif isinstance(span, Break):
            out.append(" ")
        elif isinstance(span, Image):
            out.append(span.alt)
        else:
            out.append(plain_text(span.children))
    return "".join(out)


def _cell(tag: str, cell: Cell) -> str:
    style = f' style="text-align: {cell.align}"' if cell.align else ""
    return f"<{tag}{style}>{render_spans(cell.spans)}</{tag}>"


def _table(styled: StyledNode, table: Table, inline_styles: bool) -> str:
    lines = [f"<table{_attrs(styled, inline_styles)}>"]
    if table.header:
        lines += ["<thead>", "<tr>" + "".join(_cell("th", c) for c in table.header) + "</tr>", "</thead>"]
    if table.rows:
        lines.append("<tbody>")
        lines += ["<tr>" + "".join(_cell("td", c) for c in row) + "</tr>" for row in table.rows]
        lines.append("</tbody>")
    lines.append("</table>")
    return "\n".join(lines)


def _render(styled: StyledNode, inline_styles: bool) -> str:
    node = styled.node
    attrs = _attrs(styled, inline_styles)
    if isinstance(node, Heading):
        return f"<h{node.level}{attrs}>{render_spans(node.spans)}</h{node.level}>"
    if isinstance(node, Paragraph):
        if node.tight:
            return render_spans(node.spans)
        return f"<p{attrs}>{render_spans(node.spans)}</p>"
    if isinstance(node, ListBlock):
        tag = "ol" if node.ordered else "ul"
        if node.ordered and node.start != 1:
            attrs = _attrs(styled, inline_styles, start=str(node.start))
        items = "\n".join(_render(child, inline_styles) for child in styled.children)
        return f"<{tag}{attrs}>\n{items}\n</{tag}>"
    if isinstance(node, (ListItem, Blockquote)):
        tag = "li" if isinstance(node, ListItem) else "blockquote"
        inner = "\n".join(_render(child, inline_styles) for child in styled.children)
        return f"<{tag}{attrs}>{inner}</{tag}>"
    if isinstance(node, CodeBlock):
        lang = class_name(node.language)
        code_cls = f' class="language-{lang}"' if lang else ""
        return f"<pre{attrs}><code{code_cls}>{escape(node.text, quote=False)}</code></pre>"
    if isinstance(node, Table):
        return _table(styled, node, inline_styles)
    if isinstance(node, Rule):
        return f"<hr{attrs} />"
    return ""


def render_html(styled_nodes: list[StyledNode], inline_styles: bool = False) -> str:
    """Serialize a decorated tree into an HTML fragment."""
    return "\n".join(_render(s, inline_styles) for s in styled_nodes) + "\n"
