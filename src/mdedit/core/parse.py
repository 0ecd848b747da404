"""File discovery, frontmatter extraction, and document loading"""

import re
from pathlib import Path
from typing import Any

import yaml

from mdedit.core.extract.blocks import parse_blocks
from mdedit.core.inline import plain_text
from mdedit.core.models import Heading, ParsedDoc
from mdedit.core.utils.slug import slugify


FRONTMATTER_RE = re.compile(r'^---\s*\n(.*?)\n---\s*\n', re.DOTALL)
MD_EXTENSIONS = {'.md', '.markdown'}


def _strip_frontmatter(text: str) -> tuple[dict[str, Any], str]:
    """Return (frontmatter_dict, body) with YAML header removed."""
    m = FRONTMATTER_RE.match(text)
    if m:
        try:
            fm = yaml.safe_load(m.group(1)) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML frontmatter: {e}") from e
        if not isinstance(fm, dict):
            raise ValueError(f"Invalid YAML frontmatter: expected a mapping, got {type(fm).__name__}")
        return fm, text[m.end():]
    return {}, text


def _title(frontmatter: dict[str, Any], body: str, fallback: str) -> str:
    """Frontmatter title, else the first heading's visible text, else fallback."""
    if frontmatter.get('title'):
        return str(frontmatter['title'])
    heading = next((b for b in parse_blocks(body) if isinstance(b, Heading)), None)
    return plain_text(heading.text) if heading else fallback


def discover_files(path: Path) -> list[Path]:
    """Return sorted .md/.markdown files under path, or [path] if a single file."""
    if path.is_file():
        return [path] if path.suffix in MD_EXTENSIONS else []
    return sorted(p for p in path.rglob('*') if p.suffix in MD_EXTENSIONS)


def parse_file(path: Path) -> ParsedDoc:
    """Load a markdown file, splitting off YAML frontmatter.

    A frontmatter `slug` is slugified like the file stem, so it is always a single
    path component.
    """
    raw = path.read_text(encoding='utf-8')
    frontmatter, body = _strip_frontmatter(raw)
    return ParsedDoc(
        path=path,
        slug=slugify(str(frontmatter.get('slug') or '')) or slugify(path.stem) or 'index',
        markdown=body,
        frontmatter=frontmatter,
        title=_title(frontmatter, body, path.stem),
    )
