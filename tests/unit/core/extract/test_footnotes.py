"""Unit tests for core/extract/footnotes.py"""

from mdedit.core.extract.blocks import parse_blocks
from mdedit.core.extract.footnotes import collect_footnote_definitions
from mdedit.core.models import FootnoteDef, FootnoteRef


def test_collects_definitions_in_order():
    md = "Text[^a] and[^1].\n\n[^1]: First.\n[^a]:   Second"
    assert collect_footnote_definitions(md) == [
        FootnoteDef(id="1", text="First."),
        FootnoteDef(id="a", text="Second"),
    ]


def test_repeated_ids_not_deduplicated():
    md = "[^1]: one\n[^1]: again"
    assert [d.text for d in collect_footnote_definitions(md)] == ["one", "again"]


def test_definition_must_start_the_line():
    """Indented or mid-line definitions are not collected."""
    assert collect_footnote_definitions("see [^1]: not a def\n  [^2]: indented") == []


def test_definition_text_does_not_continue_onto_next_line():
    """An empty definition does not capture the following line."""
    assert collect_footnote_definitions("[^1]:\nnext line") == []


def test_parser_and_collector_agree_on_placeholder_count(sample_md):
    """Each collected definition has a matching inert placeholder block."""
    defs = collect_footnote_definitions(sample_md)
    refs = [b for b in parse_blocks(sample_md) if isinstance(b, FootnoteRef)]
    assert len(defs) == len(refs) == 1
    assert refs[0] == FootnoteRef(id="", text="")


def test_whitespace_only_definition_is_collected():
    """Trailing whitespace after the colon still counts as definition text."""
    assert collect_footnote_definitions("[^1]: ") == [FootnoteDef(id="1", text=" ")]
