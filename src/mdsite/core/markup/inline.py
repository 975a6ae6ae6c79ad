"""Inline token conversion: markdown-it inline children to Span trees"""

import re

from mdsite.core.markup.source import Source
from mdsite.core.models import (
    Break, Code, Emphasis, Image, Link, Span, Strikethrough, Strong, Text,
)


MARKER_RE = re.compile(r'\*\*+|__+')

OPENERS = {
    'em_open':     Emphasis,
    'strong_open': Strong,
    's_open':      Strikethrough,
    'link_open':   Link,
}
CLOSERS = {'em_close', 'strong_close', 's_close', 'link_close'}


def dangling_marker(text: str) -> str | None:
    """Return a strong-emphasis marker left unmatched in text, else None.

    A run surrounded by whitespace (a ** b) is an operator, and a run between
    word characters (2**10, snake__case) is intraword; neither counts.
    """
    for m in MARKER_RE.finditer(text):
        before = text[m.start() - 1] if m.start() else ''
        after = text[m.end()] if m.end() < len(text) else ''
        if before.isspace() and after.isspace():
            continue
        if before.isalnum() and after.isalnum():
            continue
        return m.group()
    return None


def _check_text(text: str, src: Source, token) -> None:
    marker = dangling_marker(text)
    if marker:
        raise src.error(f"unterminated emphasis marker '{marker}'", token)
    if '](' in text:
        raise src.error("unterminated link: '](' without a closing ')'", token)


def convert_inline(token, src: Source) -> list[Span]:
    """Convert an `inline` token's children into nested spans."""
    root: list[Span] = []
    stack: list[list[Span]] = [root]

    for child in token.children or []:
        t = child.type
        if t == 'text':
            _check_text(child.content, src, token)
            stack[-1].append(Text(child.content))
        elif t == 'text_special':
            # escapes and entities, already decoded
            stack[-1].append(Text(child.content))
        elif t == 'code_inline':
            stack[-1].append(Code(child.content))
        elif t in ('softbreak', 'hardbreak'):
            stack[-1].append(Break(hard=t == 'hardbreak'))
        elif t == 'image':
            stack[-1].append(Image(
                src=child.attrGet('src') or '',
                alt=child.content,
                title=child.attrGet('title') or '',
            ))
        elif t in OPENERS:
            if t == 'link_open':
                span = Link(href=child.attrGet('href') or '', title=child.attrGet('title') or '')
            else:
                span = OPENERS[t]()
            stack[-1].append(span)
            stack.append(span.children)
        elif t in CLOSERS and len(stack) > 1:
            stack.pop()

    return root
