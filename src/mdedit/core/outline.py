"""Document outline and reading statistics"""

from dataclasses import dataclass

from mdedit.core.extract.blocks import parse_blocks
from mdedit.core.models import Heading
from mdedit.core.utils.slug import heading_slug


WORDS_PER_MINUTE = 238


@dataclass(frozen=True)
class OutlineEntry:
    level: int
    text:  str
    slug:  str


def outline(markdown: str) -> list[OutlineEntry]:
    """Headings in document order; lines inside code fences are not headings."""
    return [
        OutlineEntry(level=b.level, text=b.text, slug=heading_slug(b.text))
        for b in parse_blocks(markdown)
        if isinstance(b, Heading)
    ]


def word_count(markdown: str) -> int:
    return len(markdown.split())


def character_count(markdown: str) -> int:
    return len(markdown)


def reading_time(markdown: str) -> str:
    minutes = max(1, word_count(markdown) // WORDS_PER_MINUTE)
    return f"{minutes} min read"
