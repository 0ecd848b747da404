"""Line-oriented block parser: markdown text to an ordered list of typed blocks"""

import logging
import re
from typing import Optional

from mdedit.core.models import (
    Block,
    Blockquote,
    Callout,
    CalloutKind,
    CodeBlock,
    FootnoteRef,
    Heading,
    HorizontalRule,
    Image,
    ListItem,
    Paragraph,
    Table,
    TaskItem,
)


logger = logging.getLogger(__name__)

MAX_CODE_LINES = 10_000
FENCE = "```"

CALLOUT_RE = re.compile(r'^\[!(\w+)\]')
ORDERED_ITEM_RE = re.compile(r'^(\d{1,4})\.\s(.*)$')
FOOTNOTE_DEF_RE = re.compile(r'^\[\^\w+\]:')
TASK_PREFIXES = {"- [ ] ": False, "- [x] ": True, "- [X] ": True}
BULLETS = ("- ", "* ", "+ ")


def split_lines(markdown: str) -> list[str]:
    """Normalize CRLF/CR line endings and split on newline."""
    return markdown.replace("\r\n", "\n").replace("\r", "\n").split("\n")


# --- line predicates ---

def is_table_row(line: str) -> bool:
    trimmed = line.strip()
    return len(trimmed) > 1 and trimmed.startswith("|") and trimmed.endswith("|")


def is_table_separator(line: str) -> bool:
    """True for `|---|:--:|` style rows: only dashes, pipes, colons and spaces, with a dash."""
    trimmed = line.strip()
    if not (len(trimmed) > 1 and trimmed.startswith("|") and trimmed.endswith("|")):
        return False
    inner = trimmed[1:-1]
    return "-" in inner and all(c in "-|: " for c in inner)


def parse_table_cells(line: str) -> list[str]:
    trimmed = line.strip()
    if trimmed.startswith("|"):
        trimmed = trimmed[1:]
    if trimmed.endswith("|"):
        trimmed = trimmed[:-1]
    return [cell.strip() for cell in trimmed.split("|")]


def strip_blockquote_prefix(line: str) -> str:
    if line.startswith("> "):
        return line[2:]
    if line.startswith(">"):
        return line[1:]
    return line


def parse_callout_start(line: str) -> Optional[CalloutKind]:
    """Return the callout kind for a `> [!TAG]` line, or None."""
    if not line.startswith(">"):
        return None
    m = CALLOUT_RE.match(strip_blockquote_prefix(line))
    return CalloutKind.from_tag(m.group(1)) if m else None


def parse_image(line: str) -> Optional[tuple[str, str]]:
    """Return (alt, source) for a whole-line `![alt](source)`, else None."""
    trimmed = line.strip()
    if not trimmed.startswith("![") or not trimmed.endswith(")"):
        return None
    sep = trimmed.find("](")
    if sep == -1:
        return None
    return trimmed[2:sep], trimmed[sep + 2:-1]


def parse_heading(line: str) -> Optional[tuple[int, str]]:
    """Return (level, text) for `# ` .. `###### ` prefixed lines, else None."""
    for level in range(6, 0, -1):
        prefix = "#" * level + " "
        if line.startswith(prefix):
            return level, line[len(prefix):]
    return None


def is_horizontal_rule(line: str) -> bool:
    trimmed = line.strip()
    if len(trimmed) < 3:
        return False
    return any(trimmed == ch * len(trimmed) for ch in "-*_")


def parse_task_item(line: str) -> Optional[tuple[str, bool]]:
    """Return (text, checked) for `- [ ] ` / `- [x] ` lines, else None."""
    trimmed = line.strip(" \t")
    for prefix, checked in TASK_PREFIXES.items():
        if trimmed.startswith(prefix):
            return trimmed[len(prefix):], checked
    return None


def parse_unordered_list_item(line: str) -> Optional[tuple[str, int]]:
    """Return (text, indent) for bullet lines; each tab or pair of spaces is one level."""
    indent = 0
    i = 0
    while i < len(line) and line[i] in " \t":
        if line[i] == "\t":
            indent += 1
        elif line[i + 1:i + 2] == " ":
            indent += 1
            i += 2
            continue
        i += 1
    rest = line[i:]
    if rest.startswith(BULLETS):
        return rest[2:], indent
    return None


def parse_ordered_list_item(line: str) -> Optional[tuple[int, str]]:
    """Return (number, text) for `12. text` lines, else None."""
    m = ORDERED_ITEM_RE.match(line.strip())
    if not m:
        return None
    return int(m.group(1)), m.group(2)


def is_footnote_definition(line: str) -> bool:
    return FOOTNOTE_DEF_RE.match(line.strip()) is not None


# --- multi-line constructs ---

def _take_table(lines: list[str], i: int) -> tuple[Table, int]:
    """Consume header, separator, and following rows starting at i."""
    headers = parse_table_cells(lines[i])
    i += 2
    rows = []
    while i < len(lines) and is_table_row(lines[i]):
        rows.append(tuple(parse_table_cells(lines[i])))
        i += 1
    return Table(headers=tuple(headers), rows=tuple(rows)), i


def _take_quoted(lines: list[str], i: int) -> tuple[list[str], int]:
    """Collect consecutive `>` lines from i, prefix stripped."""
    quoted = []
    while i < len(lines) and lines[i].startswith(">"):
        quoted.append(strip_blockquote_prefix(lines[i]))
        i += 1
    return quoted, i


def _single_line_block(line: str) -> Block:
    """Classify a line that opens no multi-line construct."""
    if (image := parse_image(line)) is not None:
        return Image(alt=image[0], source=image[1])
    if (heading := parse_heading(line)) is not None:
        return Heading(text=heading[1], level=heading[0])
    if is_horizontal_rule(line):
        return HorizontalRule()
    if (task := parse_task_item(line)) is not None:
        return TaskItem(text=task[0], checked=task[1])
    if (item := parse_unordered_list_item(line)) is not None:
        return ListItem(text=item[0], ordered=False, number=0, indent=item[1])
    if (num := parse_ordered_list_item(line)) is not None:
        return ListItem(text=num[1], ordered=True, number=num[0], indent=0)
    if is_footnote_definition(line):
        return FootnoteRef(id="", text="")
    return Paragraph(text=line)


def parse_blocks(markdown: str, max_code_lines: int = MAX_CODE_LINES) -> list[Block]:
    """Parse markdown into an ordered list of blocks; never raises."""
    lines = split_lines(markdown)
    blocks: list[Block] = []
    in_fence = False
    code: list[str] = []
    language = ""
    dropped = 0
    i = 0

    while i < len(lines):
        line = lines[i]

        if line.startswith(FENCE):
            if in_fence:
                if dropped:
                    logger.debug("Code fence truncated at %d lines (%d dropped)", max_code_lines, dropped)
                blocks.append(CodeBlock(code="\n".join(code), language=language))
                code, language, dropped = [], "", 0
            else:
                language = line[len(FENCE):].strip()
            in_fence = not in_fence
            i += 1
            continue

        if in_fence:
            if len(code) < max_code_lines:
                code.append(line)
            else:
                dropped += 1
            i += 1
            continue

        if is_table_row(line) and i + 1 < len(lines) and is_table_separator(lines[i + 1]):
            table, i = _take_table(lines, i)
            blocks.append(table)
            continue

        if (kind := parse_callout_start(line)) is not None:
            body, i = _take_quoted(lines, i + 1)
            blocks.append(Callout(callout=kind, lines=tuple(body)))
            continue

        if line.startswith(">"):
            quoted, i = _take_quoted(lines, i)
            blocks.append(Blockquote(lines=tuple(quoted)))
            continue

        blocks.append(_single_line_block(line))
        i += 1

    if in_fence:
        logger.debug("Unterminated code fence closed at end of input (%d lines)", len(code))
        blocks.append(CodeBlock(code="\n".join(code), language=language))

    return blocks
