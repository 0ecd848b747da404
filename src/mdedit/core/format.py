"""Markdown snippet builders for editor actions, and task checkbox toggling.

All functions are pure string transforms; empty input is replaced by a
placeholder so the inserted snippet is always visible and selectable.
"""

import re


def _wrap(text: str, prefix: str, suffix: str, placeholder: str) -> str:
    return f"{prefix}{text or placeholder}{suffix}"


def _prefix_lines(text: str, prefix: str, placeholder: str) -> str:
    if not text:
        return prefix + placeholder
    return "\n".join(prefix + line for line in text.split("\n"))


def bold(text: str) -> str:
    return _wrap(text, "**", "**", "bold text")


def italic(text: str) -> str:
    return _wrap(text, "*", "*", "italic text")


def inline_code(text: str) -> str:
    return _wrap(text, "`", "`", "code")


def strikethrough(text: str) -> str:
    return _wrap(text, "~~", "~~", "strikethrough text")


def highlight_text(text: str) -> str:
    return _wrap(text, "==", "==", "highlighted")


def heading(text: str, level: int = 1) -> str:
    """Prefix text with 1-6 '#' characters; out-of-range levels are clamped."""
    level = min(max(level, 1), 6)
    return "#" * level + " " + (text or "Heading")


def fenced_code_block(text: str, language: str = "") -> str:
    return f"```{language}\n{text or 'code here'}\n```"


def blockquote(text: str) -> str:
    return _prefix_lines(text, "> ", "blockquote")


def link(label: str, url: str = "url") -> str:
    return f"[{label or 'link text'}]({url})"


def image(alt: str = "alt text", url: str = "image-url") -> str:
    return f"![{alt}]({url})"


def horizontal_rule() -> str:
    return "---"


def unordered_list(text: str) -> str:
    return _prefix_lines(text, "- ", "list item")


def ordered_list(text: str) -> str:
    parts = text.split("\n") if text else ["list item"]
    return "\n".join(f"{n}. {part}" for n, part in enumerate(parts, start=1))


def task_list(text: str) -> str:
    return _prefix_lines(text, "- [ ] ", "task")


def table(columns: int = 2, rows: int = 1) -> str:
    """Empty pipe table skeleton with numbered column headers and cells."""
    columns, rows = max(columns, 1), max(rows, 0)
    header = "| " + " | ".join(f"Column {c}" for c in range(1, columns + 1)) + " |"
    separator = "|" + "|".join("----------" for _ in range(columns)) + "|"
    body = [
        "| " + " | ".join(f"Cell {r * columns + c}" for c in range(1, columns + 1)) + " |"
        for r in range(rows)
    ]
    return "\n".join([header, separator, *body])


def toggle_task(markdown: str, text: str) -> str:
    """Flip the first task item whose text is `text`; unchanged if none matches."""
    unchecked = re.search(rf'- \[ \] {re.escape(text)}(?=\r?$)', markdown, re.MULTILINE)
    if unchecked:
        return f"{markdown[:unchecked.start()]}- [x] {text}{markdown[unchecked.end():]}"
    checked = re.search(rf'- \[[xX]\] {re.escape(text)}(?=\r?$)', markdown, re.MULTILINE)
    if checked:
        return f"{markdown[:checked.start()]}- [ ] {text}{markdown[checked.end():]}"
    return markdown
