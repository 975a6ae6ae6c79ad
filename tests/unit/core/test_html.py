"""Unit tests for core/html.py"""

from mdsite.core.html import plain_text, render_html
from mdsite.core.markup.parse import parse_markup
from mdsite.core.models import Code, Emphasis, Text
from mdsite.core.styles import StyleSheet, apply_styles


def _html(text: str, sheet: StyleSheet = StyleSheet(), inline_styles: bool = False) -> str:
    return render_html(apply_styles(parse_markup(text), sheet), inline_styles=inline_styles)


def test_heading_and_paragraph_classes():
    assert _html("## Traits\n\nA *value*.\n") == (
        '<h2 class="heading h2">Traits</h2>\n'
        '<p class="paragraph">A <em>value</em>.</p>\n'
    )


def test_tight_list_items_have_no_paragraph_wrapper():
    assert _html("- one\n- two\n") == (
        '<ul class="list unordered">\n'
        '<li class="list-item">one</li>\n'
        '<li class="list-item">two</li>\n'
        '</ul>\n'
    )


def test_ordered_list_start_attribute():
    html = _html("5. five\n6. six\n")
    assert html.startswith('<ol class="list ordered" start="5">')


def test_code_block_verbatim_and_escaped():
    """Fence content is escaped for HTML but never inline-formatted."""
    html = _html("```python\nif a < b and **c**: [x](y)\n```\n")
    assert '<pre class="code-block python"><code class="language-python">' in html
    assert "if a &lt; b and **c**: [x](y)\n</code></pre>" in html
    assert "<strong>" not in html
    assert "<a " not in html


def test_text_is_escaped():
    html = _html("Use <T> & friends.\n")
    assert "Use &lt;T&gt; &amp; friends." in html


def test_link_and_image_attributes_escaped():
    html = _html('[a "q"](https://example.com/?a=1&b=2) ![x](i.png "T")\n')
    assert 'href="https://example.com/?a=1&amp;b=2"' in html
    assert '<img src="i.png" alt="x" title="T" />' in html


def test_table_alignment():
    html = _html("| a | b |\n| :-- | --: |\n| 1 | 2 |\n")
    assert '<table class="table">' in html
    assert '<th style="text-align: left">a</th>' in html
    assert '<td style="text-align: right">2</td>' in html


def test_blockquote_and_rule():
    html = _html("> quoted\n\n---\n")
    assert '<blockquote class="blockquote"><p class="paragraph">quoted</p></blockquote>' in html
    assert '<hr class="rule" />' in html


def test_inline_styles_written_when_enabled(sheet):
    html = _html("Text.\n", sheet, inline_styles=True)
    assert '<p class="paragraph" style="margin: 0 0 1em">' in html
    assert "style=" not in _html("Text.\n", sheet)


def test_list_item_count_matches_source():
    source = "".join(f"- item {i}\n" for i in range(7))
    html = _html(source)
    assert html.count('<li class="list-item">') == 7
    positions = [html.index(f"item {i}<") for i in range(7)]
    assert positions == sorted(positions)


def test_plain_text():
    assert plain_text([Text("a "), Emphasis([Text("b")]), Code(" c")]) == "a b c"


def test_empty_document():
    assert _html("") == "\n"
