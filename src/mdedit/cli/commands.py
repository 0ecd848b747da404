"""CLI command implementations"""

import json
from pathlib import Path
from typing import Annotated, Optional

import typer

from mdedit.config import Settings, load_config
from mdedit.core.highlight import highlight
from mdedit.core.outline import character_count, outline, reading_time, word_count
from mdedit.core.parse import parse_file
from mdedit.core.pipeline import run_export, run_parse
from mdedit.logging_config import configure_logging


def _fail(msg: str, cause: Exception = None) -> None:
    """Print a user-friendly error to stderr and exit 1."""
    typer.echo(f"Error: {msg}", err=True)
    if cause:
        typer.echo(f"  {cause}", err=True)
    raise typer.Exit(1)


def _settings(overrides: dict = None) -> Settings:
    """Load config with standard CLI error handling."""
    try:
        return load_config(overrides=overrides)
    except ValueError as e:
        _fail(str(e))


def _read(path: Path) -> str:
    """Markdown body of a single file (frontmatter removed), or exit 1."""
    if not path.is_file():
        _fail(f"Not a file: {path}")
    try:
        return parse_file(path).markdown
    except (OSError, UnicodeDecodeError, ValueError) as e:
        _fail(f"Could not read {path}", e)


def main_callback(
    log_level: Annotated[Optional[str], typer.Option("--log-level", help="DEBUG, INFO, WARNING, ...")] = None,
    ):
    """Markdown parsing, highlighting, and sanitized HTML export."""
    settings = _settings(overrides={"log_level": log_level})
    configure_logging(settings.log_level)


def parse_cmd(
    path: Annotated[Path, typer.Argument(help="Markdown file to parse")],
    max_code_lines: Annotated[Optional[int], typer.Option("--max-code-lines", help="Lines kept per code fence")] = None,
    ):
    """Print the block sequence and footnote definitions as JSON."""
    settings = _settings(overrides={"max_code_lines": max_code_lines})
    if not path.is_file():
        _fail(f"Not a file: {path}")
    try:
        data = run_parse(path, settings.max_code_lines)
    except (OSError, UnicodeDecodeError, ValueError) as e:
        _fail(f"Could not parse {path}", e)
    typer.echo(json.dumps(data, indent=2, ensure_ascii=False))


def export_cmd(
    path: Annotated[str, typer.Argument(help="File or directory to export")],
    out: Annotated[Optional[str], typer.Option("--out-dir", help="Output directory")] = None,
    title: Annotated[Optional[str], typer.Option("--title", help="HTML title for every exported document")] = None,
    no_footnotes: Annotated[bool, typer.Option("--no-footnotes", help="Omit the footnotes section")] = False,
    ):
    """Write a standalone, sanitized HTML document per markdown file."""
    settings = _settings(overrides={"output_dir": out, "include_footnotes": False if no_footnotes else None})
    output_dir = Path(settings.output_dir)
    try:
        results = run_export(
            path, output_dir, title, settings.include_footnotes, settings.max_code_lines,
        )
    except RuntimeError as e:
        _fail(str(e))
    if not results:
        typer.echo(f"No markdown files found at {path}.")
        raise typer.Exit(1)
    for src, html_path in results:
        typer.echo(f"  {src} -> {html_path}")
    typer.echo(f"Exported {len(results)} document(s) to {output_dir}/")


def highlight_cmd(
    path: Annotated[Path, typer.Argument(help="Markdown file to highlight")],
    theme: Annotated[Optional[str], typer.Option("--theme", help="dark or light")] = None,
    ):
    """Print one `start end role color` line per highlighted range."""
    settings = _settings(overrides={"theme": theme})
    text = _read(path)
    for span in highlight(text, settings.theme):
        typer.echo(f"{span.start}\t{span.end}\t{span.role.value}\t{span.color}")


def outline_cmd(
    path: Annotated[Path, typer.Argument(help="Markdown file to outline")],
    ):
    """Print the heading outline with anchors, then document statistics."""
    text = _read(path)
    for entry in outline(text):
        typer.echo(f"{'  ' * (entry.level - 1)}{entry.text}  #{entry.slug}")
    typer.echo(
        f"{word_count(text)} words, {character_count(text)} characters, {reading_time(text)}"
    )
