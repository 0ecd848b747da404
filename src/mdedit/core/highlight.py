"""Regex tagging of raw markdown for live editor coloring.

No block tree is built. Each pattern in `PATTERNS` is run over the whole text
and every match becomes a span; spans are returned in pattern order, so a
consumer applying them in sequence lets later patterns override earlier ones
where they overlap. Fenced code is tagged first and later matches that begin
inside a fence are discarded, so fence interiors stay code.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional


class Role(str, Enum):
    heading     = "heading"
    bold        = "bold"
    italic      = "italic"
    code        = "code"
    link        = "link"
    blockquote  = "blockquote"
    punctuation = "punctuation"


@dataclass(frozen=True)
class Theme:
    heading:     str
    bold:        str
    italic:      str
    code:        str
    link:        str
    blockquote:  str
    punctuation: str

    def color(self, role: Role) -> str:
        return getattr(self, role.value)


THEMES: dict[str, Theme] = {
    "dark": Theme(
        heading="#66ccff", bold="#ffd98c", italic="#a6f2a6", code="#ffa68c",
        link="#73bfff", blockquote="#a6a6a6", punctuation="#999999",
    ),
    "light": Theme(
        heading="#0d4db3", bold="#8c2e00", italic="#26661a", code="#a61a0d",
        link="#1a59bf", blockquote="#595959", punctuation="#666666",
    ),
}


@dataclass(frozen=True)
class HighlightSpan:
    start: int          # character offsets into the source, end exclusive
    end: int
    role: Role
    color: str


PATTERNS: tuple[tuple[re.Pattern, Role], ...] = (
    (re.compile(r'^```[\s\S]*?^```[ \t]*$', re.MULTILINE), Role.code),
    (re.compile(r'^#{1,6}[ \t]+.*$', re.MULTILINE), Role.heading),
    (re.compile(r'\*\*(?!\s)(.+?)(?<!\s)\*\*|__(?!\s)(.+?)(?<!\s)__'), Role.bold),
    (re.compile(
        r'(?<!\*)\*(?!\*)(?!\s)(.+?)(?<!\s)(?<!\*)\*(?!\*)'
        r'|(?<!_)_(?!_)(?!\s)(.+?)(?<!\s)(?<!_)_(?!_)'
    ), Role.italic),
    (re.compile(r'`[^`\n]+`'), Role.code),
    (re.compile(r'!\[[^\]]*\]\([^)]+\)'), Role.link),
    (re.compile(r'\[[^\]]+\]\([^)]+\)'), Role.link),
    (re.compile(r'^>.*$', re.MULTILINE), Role.blockquote),
    (re.compile(r'^(\*{3,}|-{3,}|_{3,})[ \t]*$', re.MULTILINE), Role.punctuation),
)


def get_theme(name: str) -> Theme:
    try:
        return THEMES[name]
    except KeyError:
        raise ValueError(f"Unknown theme {name!r}; expected one of {sorted(THEMES)}") from None


def highlight(text: str, theme: str = "dark") -> list[HighlightSpan]:
    """Tag ranges of `text` with semantic roles, in pattern precedence order."""
    palette = get_theme(theme)
    spans = []
    fences: list[tuple[int, int]] = []
    for n, (pattern, role) in enumerate(PATTERNS):
        for m in pattern.finditer(text):
            if n == 0:
                fences.append(m.span())
            elif any(start <= m.start() < end for start, end in fences):
                continue
            if m.end() > m.start():
                spans.append(HighlightSpan(m.start(), m.end(), role, palette.color(role)))
    return spans


def resolve_roles(text: str, spans: list[HighlightSpan]) -> list[Optional[Role]]:
    """Final role per character after applying spans in order (last writer wins)."""
    roles: list[Optional[Role]] = [None] * len(text)
    for span in spans:
        for i in range(span.start, min(span.end, len(text))):
            roles[i] = span.role
    return roles
