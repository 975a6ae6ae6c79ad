"""Stylesheet Applier: style rule loading, selector resolution, and CSS output"""

import logging
from dataclasses import dataclass
from pathlib import Path

import yaml

from mdsite.core.models import Node, StyledNode, StyleRule, child_nodes


logger = logging.getLogger(__name__)


# Node kinds plus the page-shell classes used by the templates (page, site-header, ...).
DEFAULT_RULES: dict[str, dict[str, str]] = {
    "page": {
        "max-width": "42rem",
        "margin": "0 auto",
        "padding": "2rem 1rem",
        "font-family": "Georgia, 'Times New Roman', serif",
        "line-height": "1.6",
        "color": "#222",
        "background": "#fdfdfb",
    },
    "site-header": {"border-bottom": "1px solid #ddd", "margin-bottom": "2rem"},
    "site-footer": {"border-top": "1px solid #ddd", "margin-top": "3rem", "font-size": "0.85rem", "color": "#777"},
    "post-meta": {"color": "#777", "font-size": "0.9rem"},
    "index": {"list-style": "none", "padding": "0"},
    "index-entry": {"margin": "0.75rem 0"},
    "heading": {"font-family": "Helvetica, Arial, sans-serif", "line-height": "1.25", "margin": "1.5em 0 0.5em"},
    "heading.h1": {"font-size": "2rem"},
    "heading.h2": {"font-size": "1.5rem"},
    "heading.h3": {"font-size": "1.2rem"},
    "paragraph": {"margin": "0 0 1em"},
    "list": {"margin": "0 0 1em", "padding-left": "1.5em"},
    "list-item": {"margin": "0.25em 0"},
    "table": {"border-collapse": "collapse", "margin": "0 0 1em"},
    "code-block": {
        "background": "#f4f4f0",
        "padding": "0.75em 1em",
        "overflow-x": "auto",
        "font-family": "Menlo, Consolas, monospace",
        "font-size": "0.9rem",
    },
    "blockquote": {"border-left": "3px solid #ccc", "margin": "0 0 1em", "padding-left": "1em", "color": "#555"},
    "rule": {"border": "0", "border-top": "1px solid #ddd", "margin": "2em 0"},
}


@dataclass(frozen=True)
class StyleSheet:
    """An ordered, immutable set of style rules; later rules win within a specificity level."""
    rules: tuple[StyleRule, ...] = ()

    def resolve(self, node: Node) -> dict[str, str]:
        """Merge kind-only rules, then kind.class rules, for a node. Unmatched nodes get {}."""
        kind = node.kind.value
        props: dict[str, str] = {}
        for rule in self.rules:
            if rule.kind == kind and rule.class_ is None:
                props.update(rule.properties)
        for rule in self.rules:
            if rule.kind == kind and rule.class_ in node.classes:
                props.update(rule.properties)
        return props

    def to_css(self) -> str:
        """Render the rules as a CSS resource; selector a.b becomes .a.b"""
        blocks = []
        for rule in self.rules:
            body = "".join(f"  {name}: {value};\n" for name, value in rule.properties.items())
            blocks.append(f".{rule.selector} {{\n{body}}}\n")
        return "\n".join(blocks)


def _rules_from_mapping(data: dict, origin: str) -> list[StyleRule]:
    rules = []
    for selector, properties in data.items():
        try:
            rules.append(StyleRule(selector=str(selector), properties=properties or {}))
        except ValueError as e:
            raise ValueError(f"Invalid stylesheet {origin}: rule '{selector}': {e}") from e
    return rules


def load_stylesheet(path: Path | None = None) -> StyleSheet:
    """Return the default rules plus, when given, rules from a YAML file (which override them)."""
    rules = _rules_from_mapping(DEFAULT_RULES, "<defaults>")
    if path is not None:
        try:
            data = yaml.safe_load(Path(path).read_text(encoding="utf-8")) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid stylesheet {path}: {e}") from e
        if not isinstance(data, dict):
            raise ValueError(f"Invalid stylesheet {path}: expected a mapping of selector -> properties")
        extra = _rules_from_mapping(data, str(path))
        logger.debug("loaded %d style rules from %s", len(extra), path)
        rules.extend(extra)
    return StyleSheet(rules=tuple(rules))


def apply_styles(nodes: list[Node], sheet: StyleSheet) -> list[StyledNode]:
    """Decorate each node (recursively) with its resolved presentation properties."""
    return [
        StyledNode(node=node, properties=sheet.resolve(node), children=apply_styles(child_nodes(node), sheet))
        for node in nodes
    ]
