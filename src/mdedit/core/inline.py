"""Inline extensions engine on top of markdown-it's inline parser.

markdown-it handles the baseline syntax (emphasis, strikethrough, code, links,
images). Four extra inline rules run ahead of strikethrough, in this order:
highlight `==x==`, superscript `^x^`, subscript `~x~` and footnote references
`[^id]`. A core rule then turns bare http(s) URLs outside links into links.

The resulting token stream is flattened into styled runs here (rich-text
viewers) and rendered to escaped HTML by `mdedit.core.export`, so both outputs
follow the same recognition rules.
"""

import re
from dataclasses import dataclass, field
from typing import Optional

from markdown_it import MarkdownIt
from markdown_it.rules_core import StateCore
from markdown_it.rules_inline import StateInline
from markdown_it.token import Token


MAX_INLINE_DEPTH = 32

FOOTNOTE_REF_RE = re.compile(r'\[\^(\w+)\]')
BARE_URL_RE = re.compile(r'(?<![("\[])https?://[^\s)\]>"\']+')

STYLE_NAMES = {"strong": "bold", "em": "italic", "s": "strike", "mark": "highlight"}

SUPERSCRIPT = str.maketrans({
    "0": "⁰", "1": "¹", "2": "²", "3": "³", "4": "⁴",
    "5": "⁵", "6": "⁶", "7": "⁷", "8": "⁸", "9": "⁹",
    "+": "⁺", "-": "⁻", "=": "⁼", "(": "⁽", ")": "⁾",
    "n": "ⁿ", "i": "ⁱ",
})

SUBSCRIPT = str.maketrans({
    "0": "₀", "1": "₁", "2": "₂", "3": "₃", "4": "₄",
    "5": "₅", "6": "₆", "7": "₇", "8": "₈", "9": "₉",
    "+": "₊", "-": "₋", "=": "₌", "(": "₍", ")": "₎",
})


def to_superscript(text: str) -> str:
    return text.translate(SUPERSCRIPT)


def to_subscript(text: str) -> str:
    return text.translate(SUBSCRIPT)


@dataclass(frozen=True)
class StyledRun:
    """A maximal run of text sharing the same inline attributes."""
    text: str
    styles: frozenset = field(default_factory=frozenset)
    link: Optional[str] = None
    image: bool = False


# --- inline rules ---

def _highlight(state: StateInline, silent: bool) -> bool:
    """`==text==` with its content tokenized again between mark tokens."""
    start = state.pos
    if not state.src.startswith("==", start):
        return False
    end = state.src.find("==", start + 3, state.posMax)
    if end == -1:
        return False
    if not silent:
        state.push("mark_open", "mark", 1).markup = "=="
        old_max = state.posMax
        state.pos, state.posMax = start + 2, end
        state.md.inline.tokenize(state)
        state.posMax = old_max
        state.push("mark_close", "mark", -1).markup = "=="
    state.pos = end + 2
    return True


def _superscript(state: StateInline, silent: bool) -> bool:
    start = state.pos
    src = state.src
    if src[start] != "^" or src[start + 1:start + 2] == "^":
        return False
    end = src.find("^", start + 2, state.posMax)
    if end == -1:
        return False
    if not silent:
        state.push("text", "", 0).content = to_superscript(src[start + 1:end])
    state.pos = end + 1
    return True


def _subscript(state: StateInline, silent: bool) -> bool:
    """A single `~text~`; tildes next to another `~` are left to strikethrough."""
    start = state.pos
    src = state.src
    if src[start] != "~" or src[start + 1:start + 2] == "~" or src[start - 1:start] == "~":
        return False
    end = src.find("~", start + 2, state.posMax)
    if end == -1 or src[end + 1:end + 2] == "~":
        return False
    if not silent:
        state.push("text", "", 0).content = to_subscript(src[start + 1:end])
    state.pos = end + 1
    return True


def _footnote_ref(state: StateInline, silent: bool) -> bool:
    m = FOOTNOTE_REF_RE.match(state.src, state.pos, state.posMax)
    if not m or state.linkLevel > 0:
        return False
    if state.pos == 0 and state.src.startswith(":", m.end()):
        return False                        # definition line
    if not silent:
        token = state.push("footnote_ref", "", 0)
        token.content = to_superscript(m.group(1))
        token.attrSet("href", f"#fn-{m.group(1)}")
        token.meta = {"id": m.group(1)}
    state.pos = m.end()
    return True


# --- core rules ---

def _link_tokens(text: str) -> list[Token]:
    tokens = []
    pos = 0
    for m in BARE_URL_RE.finditer(text):
        if m.start() > pos:
            tokens.append(Token("text", "", 0, content=text[pos:m.start()]))
        opener = Token("link_open", "a", 1, markup="linkify", info="auto")
        opener.attrSet("href", m.group(0))
        tokens += [
            opener,
            Token("text", "", 0, content=m.group(0)),
            Token("link_close", "a", -1, markup="linkify", info="auto"),
        ]
        pos = m.end()
    if pos < len(text):
        tokens.append(Token("text", "", 0, content=text[pos:]))
    return tokens


def _bare_autolinks(state: StateCore) -> None:
    """Wrap http(s) URLs found in text tokens that are not already inside a link."""
    for block in state.tokens:
        if block.type != "inline" or not block.children:
            continue
        children = []
        in_link = 0
        for token in block.children:
            if token.type == "link_open":
                in_link += 1
            elif token.type == "link_close":
                in_link -= 1
            if token.type == "text" and not in_link and BARE_URL_RE.search(token.content):
                children.extend(_link_tokens(token.content))
            else:
                children.append(token)
        block.children = children


def _make_parser() -> MarkdownIt:
    """CommonMark inline parser with strikethrough, raw HTML off, and the extension rules."""
    md = MarkdownIt("commonmark", options_update={"html": False, "maxNesting": MAX_INLINE_DEPTH})
    md.enable("strikethrough")
    md.inline.ruler.before("strikethrough", "highlight", _highlight)
    md.inline.ruler.before("strikethrough", "superscript", _superscript)
    md.inline.ruler.before("strikethrough", "subscript", _subscript)
    md.inline.ruler.before("strikethrough", "footnote_ref", _footnote_ref)
    md.core.ruler.push("bare_autolinks", _bare_autolinks)
    # Every target is parsed as a link; unsafe ones are dropped at render time.
    md.validateLink = lambda url: True
    return md


MD = _make_parser()


def parse_inline(text: str) -> list[Token]:
    """Parse a single line, paragraph, or cell into a flat inline token stream."""
    tokens = MD.parseInline(text)
    return (tokens[0].children or []) if tokens else []


# --- rich text ---

def _runs(tokens: list[Token]) -> list[StyledRun]:
    runs: list[StyledRun] = []
    styles: list[str] = []
    links: list[str] = []
    for token in tokens:
        active = frozenset(styles)
        link = links[-1] if links else None
        if token.type == "text":
            runs.append(StyledRun(token.content, active, link))
        elif token.type in ("softbreak", "hardbreak"):
            runs.append(StyledRun("\n", active, link))
        elif token.type == "code_inline":
            runs.append(StyledRun(token.content, active | {"code"}, link))
        elif token.type == "footnote_ref":
            runs.append(StyledRun(token.content, active | {"footnote"}, token.attrGet("href")))
        elif token.type == "image":
            alt = "".join(run.text for run in _runs(token.children or []))
            runs.append(StyledRun(alt, active, token.attrGet("src"), image=True))
        elif token.type == "link_open":
            links.append(token.attrGet("href"))
        elif token.type == "link_close":
            links.pop()
        elif token.nesting == 1:
            styles.append(STYLE_NAMES.get(token.tag, token.tag))
        elif token.nesting == -1:
            styles.pop()
    return runs


def render_inline(text: str) -> list[StyledRun]:
    """Render inline markdown to styled runs, merging neighbours with equal attributes."""
    merged: list[StyledRun] = []
    for run in _runs(parse_inline(text)):
        if not run.text and not run.image:
            continue
        prev = merged[-1] if merged else None
        if prev and not run.image and not prev.image and (prev.styles, prev.link) == (run.styles, run.link):
            merged[-1] = StyledRun(prev.text + run.text, run.styles, run.link)
        else:
            merged.append(run)
    return merged


def plain_text(text: str) -> str:
    """Inline markdown reduced to its visible characters."""
    return "".join(run.text for run in render_inline(text))
