"""Footnote definition collection, independent of block parsing"""

import re

from mdedit.core.extract.blocks import split_lines
from mdedit.core.models import FootnoteDef


FOOTNOTE_DEF_RE = re.compile(r'^\[\^(\w+)\]:\s*(.+)$')


def collect_footnote_definitions(markdown: str) -> list[FootnoteDef]:
    """Return `[^id]: text` definitions in document order; repeated ids are kept."""
    matches = (FOOTNOTE_DEF_RE.match(line) for line in split_lines(markdown))
    return [FootnoteDef(id=m.group(1), text=m.group(2)) for m in matches if m]
