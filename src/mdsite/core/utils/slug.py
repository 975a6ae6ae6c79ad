"""Slug generation for document identifiers and CSS class names"""

import re
import unicodedata


def slugify(text: str) -> str:
    """Convert text to a lowercase, hyphen-separated URL-safe slug (ASCII only)."""
    text = unicodedata.normalize('NFKD', str(text)).encode('ascii', 'ignore').decode('ascii')
    text = text.lower()
    text = re.sub(r'[^\w\s-]', '', text)
    text = re.sub(r'[\s_]+', '-', text)
    return re.sub(r'-+', '-', text).strip('-')


def class_name(text: str) -> str:
    """Reduce a language tag or label to a token usable as a CSS class ('c++' -> 'cpp')."""
    text = text.strip().lower().replace('+', 'p').replace('#', 'sharp')
    return re.sub(r'[^a-z0-9_-]', '', text)
