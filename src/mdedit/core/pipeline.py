"""Pipeline step functions: file-level parse and HTML export orchestration"""

import logging
from pathlib import Path
from typing import Any, Optional

from pydantic import TypeAdapter

from mdedit.core.export import export
from mdedit.core.extract.blocks import MAX_CODE_LINES, parse_blocks
from mdedit.core.extract.footnotes import collect_footnote_definitions
from mdedit.core.models import BlockList
from mdedit.core.parse import discover_files, parse_file


logger = logging.getLogger(__name__)

Frontmatter = TypeAdapter(dict[str, Any])


def run_parse(path: Path, max_code_lines: int = MAX_CODE_LINES) -> dict[str, Any]:
    """Parse one file into a JSON-ready dict of frontmatter, blocks, and footnotes."""
    doc = parse_file(path)
    blocks = parse_blocks(doc.markdown, max_code_lines)
    return {
        "slug": doc.slug,
        "path": str(doc.path),
        "title": doc.title,
        "frontmatter": Frontmatter.dump_python(doc.frontmatter, mode="json"),
        "blocks": BlockList.dump_python(blocks, mode="json"),
        "footnotes": [f.model_dump() for f in collect_footnote_definitions(doc.markdown)],
    }


def run_export(
    path: str,
    output_dir: Path,
    title: Optional[str] = None,
    include_footnotes: bool = True,
    max_code_lines: int = MAX_CODE_LINES,
    ) -> list[tuple[Path, Path]]:
    """Export every markdown file under path to HTML.

    Output mirrors the source tree below `path`:
      output_dir / <relative source dir> / <slug>.html

    `title` overrides each document's own title (frontmatter, first heading, or stem).
    Returns (source_path, html_path) pairs.
    """
    root = Path(path)
    output_dir.mkdir(parents=True, exist_ok=True)
    results = []
    for p in discover_files(root):
        try:
            doc = parse_file(p)
            html = export(doc.markdown, title or doc.title, include_footnotes, max_code_lines)
            dest_dir = output_dir / p.parent.relative_to(root) if root.is_dir() else output_dir
            dest_dir.mkdir(parents=True, exist_ok=True)
            out_file = dest_dir / f"{doc.slug}.html"
            out_file.write_text(html, encoding='utf-8')
        except Exception as e:
            raise RuntimeError(f"Failed to export {p}: {e}") from e
        logger.info("Exported %s -> %s", p, out_file)
        results.append((p, out_file))
    return results
