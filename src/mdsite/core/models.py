"""Data models for the render pipeline: documents, markup nodes, and style rules"""

import datetime
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, ClassVar, Optional, Union

from pydantic import BaseModel, ConfigDict, field_validator

from mdsite.core.utils.slug import class_name


class Document(BaseModel):
    """A post loaded from the content directory; immutable once loaded."""
    model_config = ConfigDict(frozen=True)

    slug: str
    title: str
    date: datetime.date
    path: str
    body: str                           # markup without the header block
    body_line: int = 1                  # 1-based file line where the body starts
    frontmatter: dict[str, Any] = {}
    draft: bool = False
    summary: Optional[str] = None


class NodeKind(str, Enum):
    """Structural element kinds; the values double as CSS selector names"""
    heading = "heading"
    paragraph = "paragraph"
    list = "list"
    list_item = "list-item"
    table = "table"
    code_block = "code-block"
    blockquote = "blockquote"
    rule = "rule"


# --- inline spans ---

@dataclass
class Text:
    text: str


@dataclass
class Code:
    text: str


@dataclass
class Break:
    hard: bool = False


@dataclass
class Emphasis:
    children: list["Span"] = field(default_factory=list)


@dataclass
class Strong:
    children: list["Span"] = field(default_factory=list)


@dataclass
class Strikethrough:
    children: list["Span"] = field(default_factory=list)


@dataclass
class Link:
    href: str
    title: str = ""
    children: list["Span"] = field(default_factory=list)


@dataclass
class Image:
    src: str
    alt: str = ""
    title: str = ""


Span = Union[Text, Code, Break, Emphasis, Strong, Strikethrough, Link, Image]


# --- block nodes ---

@dataclass
class Heading:
    kind: ClassVar[NodeKind] = NodeKind.heading
    level: int
    spans: list[Span] = field(default_factory=list)
    line: Optional[int] = None

    @property
    def classes(self) -> tuple[str, ...]:
        return (f"h{self.level}",)


@dataclass
class Paragraph:
    kind: ClassVar[NodeKind] = NodeKind.paragraph
    spans: list[Span] = field(default_factory=list)
    tight: bool = False                 # inside a tight list item: no <p> wrapper
    line: Optional[int] = None
    classes: ClassVar[tuple[str, ...]] = ()


@dataclass
class ListItem:
    kind: ClassVar[NodeKind] = NodeKind.list_item
    children: list["Node"] = field(default_factory=list)
    line: Optional[int] = None
    classes: ClassVar[tuple[str, ...]] = ()


@dataclass
class ListBlock:
    kind: ClassVar[NodeKind] = NodeKind.list
    ordered: bool = False
    start: int = 1
    items: list[ListItem] = field(default_factory=list)
    line: Optional[int] = None

    @property
    def classes(self) -> tuple[str, ...]:
        return ("ordered",) if self.ordered else ("unordered",)


@dataclass
class Cell:
    spans: list[Span] = field(default_factory=list)
    align: Optional[str] = None         # left | center | right


@dataclass
class Table:
    kind: ClassVar[NodeKind] = NodeKind.table
    header: list[Cell] = field(default_factory=list)
    rows: list[list[Cell]] = field(default_factory=list)
    line: Optional[int] = None
    classes: ClassVar[tuple[str, ...]] = ()


@dataclass
class CodeBlock:
    kind: ClassVar[NodeKind] = NodeKind.code_block
    language: str = ""
    text: str = ""                      # raw contents, never inline-parsed
    line: Optional[int] = None

    @property
    def classes(self) -> tuple[str, ...]:
        lang = class_name(self.language)
        return (lang,) if lang else ()


@dataclass
class Blockquote:
    kind: ClassVar[NodeKind] = NodeKind.blockquote
    children: list["Node"] = field(default_factory=list)
    line: Optional[int] = None
    classes: ClassVar[tuple[str, ...]] = ()


@dataclass
class Rule:
    kind: ClassVar[NodeKind] = NodeKind.rule
    line: Optional[int] = None
    classes: ClassVar[tuple[str, ...]] = ()


Node = Union[Heading, Paragraph, ListBlock, ListItem, Table, CodeBlock, Blockquote, Rule]


def child_nodes(node: Node) -> list[Node]:
    """Return the structural children of a node (list items, nested blocks)."""
    if isinstance(node, ListBlock):
        return list(node.items)
    if isinstance(node, (ListItem, Blockquote)):
        return list(node.children)
    return []


# --- styling ---

SELECTOR_RE = re.compile(r'^(?P<kind>[a-z][a-z-]*)(?:\.(?P<cls>[a-z0-9_-]+))?$')


class StyleRule(BaseModel):
    """Maps a structural selector (kind, optionally kind.class) to presentation properties."""
    model_config = ConfigDict(frozen=True)

    selector: str
    properties: dict[str, str]

    @field_validator("selector")
    @classmethod
    def _check_selector(cls, v: str) -> str:
        if not SELECTOR_RE.match(v):
            raise ValueError(f"selector must look like 'kind' or 'kind.class', got {v!r}")
        return v

    @field_validator("properties", mode="before")
    @classmethod
    def _stringify(cls, v: Any) -> Any:
        if isinstance(v, dict):
            return {str(k): str(val) for k, val in v.items()}
        return v

    @property
    def kind(self) -> str:
        return SELECTOR_RE.match(self.selector).group("kind")

    @property
    def class_(self) -> Optional[str]:
        return SELECTOR_RE.match(self.selector).group("cls")


@dataclass
class StyledNode:
    """A markup node decorated with its resolved properties and styled children."""
    node: Node
    properties: dict[str, str] = field(default_factory=dict)
    children: list["StyledNode"] = field(default_factory=list)
