"""Pipeline step functions: one full render pass (load -> check -> render -> write)"""

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path

from mdsite.config import Settings
from mdsite.core.assemble import RenderedPage, check_unique, order_index, render_document, write_site
from mdsite.core.content import load_documents
from mdsite.core.models import Document
from mdsite.core.styles import StyleSheet, load_stylesheet
from mdsite.errors import ParseError


logger = logging.getLogger(__name__)


@dataclass
class BuildReport:
    """Outcome of a render pass. Pages are in input order; use `index` for newest-first."""
    pages:          list[RenderedPage] = field(default_factory=list)
    written:        list[Path] = field(default_factory=list)
    errors:         list[ParseError] = field(default_factory=list)
    skipped_drafts: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors

    @property
    def index(self) -> list[RenderedPage]:
        return order_index(self.pages)


def _render_one(doc: Document, sheet: StyleSheet, settings: Settings) -> RenderedPage | ParseError:
    try:
        return render_document(doc, sheet, settings)
    except ParseError as e:
        logger.warning("skipping %s: %s", doc.path, e)
        return e


def render_all(
    documents: list[Document],
    sheet: StyleSheet,
    settings: Settings,
    ) -> tuple[list[RenderedPage], list[ParseError]]:
    """Render documents independently, in a thread pool when settings.jobs > 1.

    Results keep input order regardless of completion order.
    """
    if settings.jobs > 1 and len(documents) > 1:
        with ThreadPoolExecutor(max_workers=settings.jobs) as pool:
            results = list(pool.map(lambda d: _render_one(d, sheet, settings), documents))
    else:
        results = [_render_one(d, sheet, settings) for d in documents]

    pages = [r for r in results if isinstance(r, RenderedPage)]
    errors = [r for r in results if isinstance(r, ParseError)]
    return pages, errors


def _render_pass(input_path: Path, settings: Settings) -> tuple[BuildReport, StyleSheet]:
    """Load, drop drafts, check identifiers, render. Raises AssemblyError on duplicates."""
    sheet = load_stylesheet(Path(settings.stylesheet) if settings.stylesheet else None)
    documents, load_errors = load_documents(input_path)
    report = BuildReport(errors=list(load_errors))

    if not settings.include_drafts:
        report.skipped_drafts = [d.slug for d in documents if d.draft]
        documents = [d for d in documents if not d.draft]

    check_unique(documents)
    pages, render_errors = render_all(documents, sheet, settings)
    report.pages = pages
    report.errors += render_errors
    logger.info(
        "rendered %d of %d document(s), %d error(s)",
        len(pages), len(documents) + len(load_errors), len(report.errors),
    )
    return report, sheet


def run_check(input_path: Path, settings: Settings) -> BuildReport:
    """Parse and assemble every document without writing anything."""
    report, _ = _render_pass(Path(input_path), settings)
    return report


def run_build(input_path: Path, output_dir: Path, settings: Settings) -> BuildReport:
    """Full render pass: one page per document, index.html, stylesheet, index.json.

    A ParseError skips only its document. AssemblyError propagates before any
    file is written.
    """
    report, sheet = _render_pass(Path(input_path), settings)
    report.written = write_site(report.pages, sheet, Path(output_dir), settings)
    return report


def list_documents(input_path: Path, settings: Settings) -> tuple[list[Document], list[ParseError]]:
    """Loaded documents newest-first (drafts only when enabled), plus header errors."""
    documents, errors = load_documents(Path(input_path))
    if not settings.include_drafts:
        documents = [d for d in documents if not d.draft]
    return sorted(documents, key=lambda d: (-d.date.toordinal(), d.slug)), errors
