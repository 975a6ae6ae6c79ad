"""Content store: file discovery, header block extraction, and Document loading"""

import datetime
import logging
import re
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from mdsite.core.models import Document
from mdsite.core.utils.slug import slugify
from mdsite.errors import ParseError


logger = logging.getLogger(__name__)

HEADER_RE = re.compile(r'\A---[ \t]*\n(.*?)^---[ \t]*(?:\n|\Z)', re.DOTALL | re.MULTILINE)
MD_EXTENSIONS = {'.md', '.markdown'}


def split_header(text: str, document: str | None = None) -> tuple[dict[str, Any], str, int]:
    """Return (header, body, body_line) with the YAML header block removed.

    body_line is the 1-based line of the original text where the body starts.
    """
    m = HEADER_RE.match(text)
    if not m:
        raise ParseError("missing '---' header block with title and date", document, 1)
    try:
        header = yaml.safe_load(m.group(1)) or {}
    except yaml.YAMLError as e:
        raise ParseError(f"invalid YAML header: {e}", document, 1) from e
    if not isinstance(header, dict):
        raise ParseError(f"invalid YAML header: expected a mapping, got {type(header).__name__}", document, 1)
    return header, text[m.end():], text[:m.end()].count('\n') + 1


def discover_files(path: Path) -> list[Path]:
    """Return sorted Markdown files under path, or [path] if a single file."""
    if path.is_file():
        return [path] if path.suffix in MD_EXTENSIONS else []
    return sorted(p for p in path.rglob('*') if p.is_file() and p.suffix in MD_EXTENSIONS)


def load_document(path: Path) -> Document:
    """Read a post and return its Document; raises ParseError on a malformed header."""
    fallback = slugify(path.stem)
    try:
        # utf-8-sig drops a leading byte-order mark
        raw = path.read_text(encoding='utf-8-sig').replace('\r\n', '\n')
    except UnicodeDecodeError as e:
        raise ParseError(f"not valid UTF-8: {e.reason} at byte {e.start}", fallback or str(path), 1) from e
    header, body, body_line = split_header(raw, fallback)

    slug = slugify(header.get('slug') or '') or fallback
    if not slug:
        raise ParseError("cannot derive an identifier from the file name; set 'slug'", str(path), 1)
    for key in ('title', 'date'):
        if header.get(key) in (None, ''):
            raise ParseError(f"header is missing '{key}'", slug, 1)

    published = header['date']
    if isinstance(published, datetime.datetime):
        published = published.date()
    summary = header.get('summary') or header.get('description')

    try:
        return Document(
            slug=slug,
            title=str(header['title']).strip(),
            date=published,
            path=str(path),
            body=body,
            body_line=body_line,
            frontmatter=header,
            draft=bool(header.get('draft', False)),
            summary=str(summary) if summary else None,
        )
    except ValidationError as e:
        problems = "; ".join(f"{'.'.join(map(str, err['loc']))}: {err['msg']}" for err in e.errors())
        raise ParseError(f"invalid header: {problems}", slug, 1) from e


def load_documents(path: Path) -> tuple[list[Document], list[ParseError]]:
    """Load every post under path. Malformed posts are collected as errors, not raised."""
    documents: list[Document] = []
    errors: list[ParseError] = []
    for p in discover_files(path):
        try:
            documents.append(load_document(p))
            logger.debug("loaded %s", p)
        except ParseError as e:
            logger.warning("skipping %s: %s", p, e)
            errors.append(e)
    return documents, errors
