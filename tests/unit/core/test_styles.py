"""Unit tests for core/styles.py"""

import pytest

from mdsite.core.markup.parse import parse_markup
from mdsite.core.models import CodeBlock, Heading, Paragraph, Rule, StyleRule
from mdsite.core.styles import DEFAULT_RULES, StyleSheet, apply_styles, load_stylesheet


def _sheet(rules: dict) -> StyleSheet:
    return StyleSheet(rules=tuple(StyleRule(selector=s, properties=p) for s, p in rules.items()))


def test_kind_rule_then_class_rule():
    """kind.class rules override kind-only rules regardless of file order."""
    sheet = _sheet({
        "heading.h2": {"color": "red"},
        "heading": {"color": "black", "margin": "0"},
    })
    assert sheet.resolve(Heading(level=2)) == {"color": "red", "margin": "0"}
    assert sheet.resolve(Heading(level=1)) == {"color": "black", "margin": "0"}


def test_later_rule_wins_within_specificity():
    sheet = _sheet({"paragraph": {"color": "black"}})
    sheet = StyleSheet(rules=sheet.rules + (StyleRule(selector="paragraph", properties={"color": "blue"}),))
    assert sheet.resolve(Paragraph()) == {"color": "blue"}


def test_code_block_language_class():
    sheet = _sheet({"code-block.rust": {"background": "#fee"}})
    assert sheet.resolve(CodeBlock(language="rust")) == {"background": "#fee"}
    assert sheet.resolve(CodeBlock(language="python")) == {}


def test_unmatched_selectors_fail_open():
    """Nodes without matching rules get no properties and no error."""
    sheet = _sheet({"unknown-kind": {"color": "red"}})
    assert sheet.resolve(Rule()) == {}


def test_apply_styles_decorates_nested_nodes():
    sheet = _sheet({"list-item": {"margin": "0"}, "blockquote": {"color": "#555"}})
    styled = apply_styles(parse_markup("> - a\n> - b\n"), sheet)
    quote = styled[0]
    assert quote.properties == {"color": "#555"}
    items = quote.children[0].children
    assert [s.properties for s in items] == [{"margin": "0"}, {"margin": "0"}]
    assert quote.children[0].properties == {}


def test_to_css_is_class_selectors_in_rule_order():
    sheet = _sheet({"heading": {"color": "black"}, "code-block.rust": {"padding": "1em"}})
    assert sheet.to_css() == (
        ".heading {\n  color: black;\n}\n"
        "\n"
        ".code-block.rust {\n  padding: 1em;\n}\n"
    )


def test_load_stylesheet_defaults():
    sheet = load_stylesheet()
    assert [r.selector for r in sheet.rules] == list(DEFAULT_RULES)
    assert sheet.to_css() == load_stylesheet().to_css()


def test_load_stylesheet_user_rules_override(tmp_path):
    path = tmp_path / "styles.yaml"
    path.write_text("heading.h1:\n  color: '#a00'\n  font-size: 3rem\nparagraph:\n  line-height: 2\n")
    sheet = load_stylesheet(path)
    assert sheet.resolve(Heading(level=1))["font-size"] == "3rem"
    assert sheet.resolve(Heading(level=1))["color"] == "#a00"
    assert sheet.resolve(Paragraph())["line-height"] == "2"


@pytest.mark.parametrize("content,message", [
    ("heading: [unclosed\n", "Invalid stylesheet"),
    ("- heading\n", "expected a mapping"),
    ("Heading!:\n  color: red\n", "rule 'Heading!'"),
    ("heading: red\n", "rule 'heading'"),
])
def test_load_stylesheet_errors(tmp_path, content, message):
    path = tmp_path / "styles.yaml"
    path.write_text(content)
    with pytest.raises(ValueError, match=message):
        load_stylesheet(path)
