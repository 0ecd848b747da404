"""Slug generation for file names and heading anchors"""

import re


def slugify(text: str) -> str:
    """Convert text to a lowercase, hyphen-separated URL-safe slug."""
    text = text.lower()
    text = re.sub(r'[^\w\s-]', '', text)
    text = re.sub(r'[\s_]+', '-', text)
    return re.sub(r'-+', '-', text).strip('-')


def heading_slug(text: str) -> str:
    """Anchor id for a heading: lowercase, spaces to '-', keep letters, digits, '-' and '_'."""
    lowered = text.lower().replace(" ", "-")
    return "".join(c for c in lowered if c.isalnum() or c in "-_")
