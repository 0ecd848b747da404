"""HTML export: blocks to a standalone, sanitized HTML document.

Every piece of document text is escaped before it is placed in markup, link
and image targets go through `is_safe_url`, and fence language tags are
reduced to `[A-Za-z0-9_-]` before they reach a class attribute.
"""

import logging
import re
from typing import Iterable, Optional

from markdown_it.renderer import RendererHTML

from mdedit.core.extract.blocks import MAX_CODE_LINES, parse_blocks
from mdedit.core.extract.footnotes import collect_footnote_definitions
from mdedit.core.inline import MD, parse_inline
from mdedit.core.models import (
    Block,
    Blockquote,
    Callout,
    CodeBlock,
    FootnoteDef,
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

DEFAULT_TITLE = "Markdown Export"

# Order matters: '&' must be replaced before the entities that contain it are produced.
HTML_ESCAPES = (
    ("&", "&amp;"),
    ("<", "&lt;"),
    (">", "&gt;"),
    ('"', "&quot;"),
    ("'", "&#39;"),
)

BLOCKED_SCHEMES = ("javascript:", "vbscript:", "data:")
_URL_LEADING_NOISE = "".join(chr(c) for c in range(0x21))
_URL_EMBEDDED_NOISE_RE = re.compile(r'[\t\n\r]')
_LANGUAGE_RE = re.compile(r'[^A-Za-z0-9_-]')


def html_escape(text: str) -> str:
    for char, entity in HTML_ESCAPES:
        text = text.replace(char, entity)
    return text


def sanitize_language(tag: str) -> str:
    """Keep only letters, digits, '-' and '_' of a fence language tag."""
    return _LANGUAGE_RE.sub("", tag)


def is_safe_url(url: str) -> bool:
    """False for javascript:, vbscript: and data: targets (any case, leading blanks ignored)."""
    normalized = _URL_EMBEDDED_NOISE_RE.sub("", url).lstrip(_URL_LEADING_NOISE).lower()
    return not normalized.startswith(BLOCKED_SCHEMES)


# --- inline ---

class SafeHTMLRenderer(RendererHTML):
    """Inline renderer: `html_escape` for all text, `<del>` for strikethrough,
    and link or image targets with a blocked scheme reduced to their label or alt text.
    """

    def text(self, tokens, idx, options, env):
        return html_escape(tokens[idx].content)

    def code_inline(self, tokens, idx, options, env):
        return f"<code>{html_escape(tokens[idx].content)}</code>"

    def s_open(self, tokens, idx, options, env):
        return "<del>"

    def s_close(self, tokens, idx, options, env):
        return "</del>"

    def footnote_ref(self, tokens, idx, options, env):
        token = tokens[idx]
        return f'<a class="footnote-ref" href="{html_escape(token.attrGet("href"))}">{html_escape(token.content)}</a>'

    def link_open(self, tokens, idx, options, env):
        href = tokens[idx].attrGet("href") or ""
        if not is_safe_url(href):
            logger.debug("Dropped link target with blocked scheme: %.40r", href)
            return ""
        return f'<a href="{html_escape(href)}">'

    def link_close(self, tokens, idx, options, env):
        opener = next(t for t in reversed(tokens[:idx]) if t.type == "link_open")
        return "</a>" if is_safe_url(opener.attrGet("href") or "") else ""

    def image(self, tokens, idx, options, env):
        token = tokens[idx]
        alt = self.renderInlineAsText(token.children or [], options, env)
        return _image_html(alt, token.attrGet("src") or "")


_RENDERER = SafeHTMLRenderer()


def render_inline_html(text: str) -> str:
    """Inline markdown to escaped HTML markup."""
    return _RENDERER.renderInline(parse_inline(text), MD.options, {})


def _image_html(alt: str, source: str) -> str:
    if not is_safe_url(source):
        logger.debug("Dropped image source with blocked scheme: %.40r", source)
        return html_escape(alt)
    return f'<img src="{html_escape(source)}" alt="{html_escape(alt)}">'


# --- blocks ---

def _code_html(block: CodeBlock) -> str:
    language = sanitize_language(block.language)
    attr = f' class="language-{language}"' if language else ""
    return f"<pre><code{attr}>{html_escape(block.code)}</code></pre>"


def _paragraphs_html(lines: Iterable[str]) -> list[str]:
    return [f"<p>{render_inline_html(line)}</p>" for line in lines if line.strip()]


def _callout_html(block: Callout) -> str:
    kind = block.callout
    body = "".join(_paragraphs_html(block.lines))
    return (
        f'<blockquote class="callout callout-{kind.name}" style="border-color: {kind.color}">'
        f'<p class="callout-title">{html_escape(kind.value)}</p>{body}</blockquote>'
    )


def _table_html(block: Table) -> str:
    width = len(block.headers)
    head = "".join(f"<th>{render_inline_html(h)}</th>" for h in block.headers)
    body = []
    for row in block.rows:
        cells = "".join(
            f"<td>{render_inline_html(row[i]) if i < len(row) else ''}</td>" for i in range(width)
        )
        body.append(f"<tr>{cells}</tr>")
    return (
        f"<table>\n<thead>\n<tr>{head}</tr>\n</thead>\n"
        f"<tbody>\n" + "".join(f"{r}\n" for r in body) + "</tbody>\n</table>"
    )


def _task_html(block: TaskItem) -> str:
    checked = " checked" if block.checked else ""
    return f'<p><input type="checkbox"{checked} disabled> {render_inline_html(block.text)}</p>'


def _list_html(items: list[ListItem]) -> str:
    """Render a run of list items as nested <ul>/<ol> elements keyed on indent depth."""
    out: list[str] = []
    stack: list[str] = []
    for item in items:
        tag = "ol" if item.ordered else "ul"
        depth = min(item.indent, len(stack))
        while len(stack) > depth + 1:
            out.append(f"</li></{stack.pop()}>")
        if len(stack) == depth + 1:
            if stack[-1] == tag:
                out.append("</li>")
            else:
                out.append(f"</li></{stack.pop()}>")
        if len(stack) == depth:
            start = f' start="{item.number}"' if item.ordered and item.number != 1 else ""
            out.append(f"<{tag}{start}>")
            stack.append(tag)
        out.append(f"<li>{render_inline_html(item.text)}")
    while stack:
        out.append(f"</li></{stack.pop()}>")
    return "".join(out)


def _block_html(block: Block) -> Optional[str]:
    if isinstance(block, Heading):
        return f"<h{block.level}>{render_inline_html(block.text)}</h{block.level}>"
    if isinstance(block, CodeBlock):
        return _code_html(block)
    if isinstance(block, Callout):
        return _callout_html(block)
    if isinstance(block, Blockquote):
        return f"<blockquote>{''.join(_paragraphs_html(block.lines))}</blockquote>"
    if isinstance(block, HorizontalRule):
        return "<hr>"
    if isinstance(block, TaskItem):
        return _task_html(block)
    if isinstance(block, Table):
        return _table_html(block)
    if isinstance(block, Image):
        return f"<figure>{_image_html(block.alt, block.source)}</figure>"
    if isinstance(block, Paragraph) and block.text.strip():
        return f"<p>{render_inline_html(block.text)}</p>"
    return None     # blank paragraphs and FootnoteRef placeholders


def render_html(blocks: list[Block]) -> str:
    """Render a block sequence to body markup (no document skeleton)."""
    html: list[str] = []
    i = 0
    while i < len(blocks):
        if isinstance(blocks[i], ListItem):
            j = i
            while j < len(blocks) and isinstance(blocks[j], ListItem):
                j += 1
            html.append(_list_html(blocks[i:j]))
            i = j
            continue
        if (rendered := _block_html(blocks[i])) is not None:
            html.append(rendered)
        i += 1
    return "\n".join(html)


def render_footnotes(defs: list[FootnoteDef]) -> str:
    """Footnote definitions as an end-of-document section with `fn-{id}` anchors."""
    if not defs:
        return ""
    items = "\n".join(
        f'<li id="fn-{html_escape(d.id)}"><span class="footnote-id">{html_escape(d.id)}.</span> '
        f'{render_inline_html(d.text)}</li>'
        for d in defs
    )
    return f'<section class="footnotes">\n<ol>\n{items}\n</ol>\n</section>'


def export(
    markdown: str,
    title: str = DEFAULT_TITLE,
    include_footnotes: bool = True,
    max_code_lines: int = MAX_CODE_LINES,
    ) -> str:
    """Render markdown to a complete, self-contained HTML document."""
    body = render_html(parse_blocks(markdown, max_code_lines))
    if include_footnotes:
        footnotes = render_footnotes(collect_footnote_definitions(markdown))
        if footnotes:
            body = f"{body}\n{footnotes}"
    return _DOCUMENT.format(title=html_escape(title), css=CSS, body=body)


_DOCUMENT = """\
<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="UTF-8">
<meta name="viewport" content="width=device-width, initial-scale=1.0">
<title>{title}</title>
<style>
{css}
</style>
</head>
<body>
<article>
{body}
</article>
</body>
</html>
"""

CSS = """\
:root { color-scheme: light dark; }
body {
    font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', system-ui, sans-serif;
    max-width: 800px;
    margin: 40px auto;
    padding: 0 20px;
    line-height: 1.6;
    color: #1d1d1f;
    background: #fff;
}
@media (prefers-color-scheme: dark) {
    body { color: #f5f5f7; background: #1d1d1f; }
    pre, code, th { background: #2d2d2f; }
    blockquote, hr, table, th, td { border-color: #48484a; }
    mark { background: rgba(255, 230, 0, 0.3); }
}
h1, h2, h3, h4, h5, h6 { margin-top: 1.5em; margin-bottom: 0.5em; }
h1 { font-size: 2em; }
h2 { font-size: 1.5em; }
h3 { font-size: 1.25em; }
pre { background: #f5f5f7; border-radius: 8px; padding: 16px; overflow-x: auto; }
code {
    font-family: 'SF Mono', Menlo, Consolas, monospace;
    font-size: 0.9em;
    background: #f5f5f7;
    padding: 2px 6px;
    border-radius: 4px;
}
pre code { background: none; padding: 0; }
blockquote { border-left: 3px solid #d1d1d6; margin-left: 0; padding-left: 16px; color: #636366; }
blockquote.callout { border-left-width: 4px; color: inherit; }
.callout-title { font-weight: 600; }
table { border-collapse: collapse; width: 100%; margin: 1em 0; }
th, td { border: 1px solid #d1d1d6; padding: 8px 12px; text-align: left; }
th { font-weight: 600; background: #f5f5f7; }
mark { background: rgba(255, 230, 0, 0.4); padding: 2px 4px; border-radius: 2px; }
hr { border: none; border-top: 1px solid #d1d1d6; margin: 2em 0; }
figure { margin: 1em 0; }
img { max-width: 100%; border-radius: 8px; }
a { color: #007aff; }
a.footnote-ref { text-decoration: none; }
del { color: #8e8e93; }
input[type="checkbox"] { margin-right: 8px; }
.footnotes { border-top: 1px solid #d1d1d6; margin-top: 2em; font-size: 0.9em; }
.footnotes ol { list-style: none; padding-left: 0; }
.footnote-id { font-weight: 600; }"""
