"""Site Assembler: duplicate detection, page shell, index ordering, and output files"""

import datetime
import hashlib
import json
import logging
from collections import defaultdict
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape
from markupsafe import Markup

from mdsite.config import Settings
from mdsite.core.html import plain_text, render_html
from mdsite.core.markup.parse import count_list_items, parse_markup
from mdsite.core.models import Document, Node, Paragraph
from mdsite.core.styles import StyleSheet, apply_styles
from mdsite.errors import AssemblyError


logger = logging.getLogger(__name__)

TEMPLATE_DIR = Path(__file__).parent.parent / "templates"
RESERVED_SLUGS = {"index"}          # index.html is the site index
SUMMARY_LIMIT = 200


@dataclass
class RenderedPage:
    """One document rendered into its page shell, ready to write."""
    document: Document
    body_html: str
    html: str
    list_items: int
    summary: str | None = None

    @property
    def filename(self) -> str:
        return f"{self.document.slug}.html"


def _longdate(value: datetime.date) -> str:
    return f"{value:%B} {value.day}, {value.year}"


def summarize(doc: Document, nodes: list[Node], limit: int = SUMMARY_LIMIT) -> str | None:
    """Header summary, else the first top-level paragraph as plain text (cut at a word)."""
    if doc.summary:
        return doc.summary
    for node in nodes:
        if isinstance(node, Paragraph):
            text = " ".join(plain_text(node.spans).split())
            if len(text) > limit:
                text = text[:limit].rsplit(" ", 1)[0] + "..."
            return text or None
    return None


@lru_cache(maxsize=None)
def template_env() -> Environment:
    """Jinja2 environment over the packaged page templates."""
    env = Environment(
        loader=FileSystemLoader(str(TEMPLATE_DIR)),
        autoescape=select_autoescape(['html', 'xml']),
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
    )
    env.filters['longdate'] = _longdate
    return env


def check_unique(documents: list[Document]) -> None:
    """Raise AssemblyError if two or more documents share an identifier."""
    paths_by_slug: dict[str, list[str]] = defaultdict(list)
    for doc in documents:
        paths_by_slug[doc.slug].append(doc.path)
        if doc.slug in RESERVED_SLUGS:
            paths_by_slug[doc.slug].append(f"<site {doc.slug}>")
    duplicates = {slug: paths for slug, paths in paths_by_slug.items() if len(paths) > 1}
    if duplicates:
        raise AssemblyError(duplicates)


def render_document(doc: Document, sheet: StyleSheet, settings: Settings) -> RenderedPage:
    """Parse -> decorate -> serialize -> wrap a single document. Raises ParseError."""
    nodes = parse_markup(doc.body, document=doc.slug, line_offset=doc.body_line - 1)
    body_html = render_html(apply_styles(nodes, sheet), inline_styles=settings.inline_styles)
    html = template_env().get_template("page.html").render(
        site_title=settings.site_title,
        stylesheet=settings.stylesheet_name,
        doc=doc,
        content=Markup(body_html),
    )
    return RenderedPage(
        document=doc,
        body_html=body_html,
        html=html,
        list_items=count_list_items(nodes),
        summary=summarize(doc, nodes),
    )


def order_index(pages: list[RenderedPage]) -> list[RenderedPage]:
    """Newest first by publication date; identifier breaks ties."""
    return sorted(pages, key=lambda p: (-p.document.date.toordinal(), p.document.slug))


def render_index(pages: list[RenderedPage], settings: Settings) -> str:
    return template_env().get_template("index.html").render(
        site_title=settings.site_title,
        stylesheet=settings.stylesheet_name,
        pages=order_index(pages),
    )


def build_sidecar(pages: list[RenderedPage]) -> list[dict]:
    """Index metadata: one entry per page, in index order."""
    return [
        {
            "slug": p.document.slug,
            "title": p.document.title,
            "date": p.document.date.isoformat(),
            "file": p.filename,
            "source": p.document.path,
            "summary": p.summary,
            "hash": hashlib.sha256(p.document.body.encode("utf-8")).hexdigest(),
            "list_items": p.list_items,
        }
        for p in order_index(pages)
    ]


def write_site(
    pages: list[RenderedPage],
    sheet: StyleSheet,
    output_dir: Path,
    settings: Settings,
    ) -> list[Path]:
    """Write every page, index.html, the stylesheet, and index.json. Returns written paths.

    Identifiers are re-checked first so a duplicate never overwrites a page.
    """
    check_unique([p.document for p in pages])
    output_dir.mkdir(parents=True, exist_ok=True)
    written = []

    for page in pages:
        path = output_dir / page.filename
        path.write_text(page.html, encoding='utf-8')
        logger.debug("wrote %s", path)
        written.append(path)

    index_path = output_dir / "index.html"
    index_path.write_text(render_index(pages, settings), encoding='utf-8')
    css_path = output_dir / settings.stylesheet_name
    css_path.write_text(sheet.to_css(), encoding='utf-8')
    json_path = output_dir / "index.json"
    json_path.write_text(json.dumps(build_sidecar(pages), indent=2, ensure_ascii=False) + "\n", encoding='utf-8')
    written += [index_path, css_path, json_path]
    return written
