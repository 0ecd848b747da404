"""Unit tests for core/extract/blocks.py"""

import pytest

from mdedit.core.extract.blocks import (
    is_horizontal_rule,
    is_table_row,
    is_table_separator,
    parse_blocks,
    parse_heading,
    parse_image,
    parse_table_cells,
    parse_unordered_list_item,
)
from mdedit.core.models import (
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


# --- headings ---

@pytest.mark.parametrize("level", range(1, 7))
def test_heading_levels(level):
    """One to six hashes followed by a space produce a heading of that level."""
    assert parse_blocks("#" * level + " T") == [Heading(text="T", level=level)]


@pytest.mark.parametrize("line", ["####### T", "#T", "##NoSpace", " # indented"])
def test_non_headings_fall_through_to_paragraph(line):
    """Seven hashes, a missing space, or leading indentation is not a heading."""
    assert parse_blocks(line) == [Paragraph(text=line)]


def test_parse_heading_prefers_longest_prefix():
    """parse_heading reports the full hash run, not a shorter prefix."""
    assert parse_heading("### Deep") == (3, "Deep")
    assert parse_heading("plain") is None


# --- fenced code ---

def test_fenced_code_block():
    """A closed fence yields one CodeBlock with its language tag."""
    assert parse_blocks("```swift\nlet x = 1\n```") == [CodeBlock(code="let x = 1", language="swift")]


def test_fence_language_trimmed_and_interior_verbatim():
    """The language is trimmed; fence interiors are not parsed as blocks."""
    blocks = parse_blocks("```  py  \n# not a heading\n  - nor a list\n```")
    assert blocks == [CodeBlock(code="# not a heading\n  - nor a list", language="py")]


def test_unterminated_fence_still_emits_code_block():
    """An unclosed fence at end of input emits whatever was buffered."""
    assert parse_blocks("intro\n```py\na\nb") == [
        Paragraph(text="intro"),
        CodeBlock(code="a\nb", language="py"),
    ]


def test_fence_buffer_capped_at_ten_thousand_lines():
    """Lines beyond 10,000 inside one fence are dropped."""
    md = "```\n" + "\n".join(f"line {n}" for n in range(10_500)) + "\n```"
    blocks = parse_blocks(md)
    assert len(blocks) == 1
    lines = blocks[0].code.split("\n")
    assert len(lines) == 10_000
    assert lines[-1] == "line 9999"


def test_fence_cap_is_configurable():
    """max_code_lines bounds the buffer and parsing resumes after the fence."""
    blocks = parse_blocks("```\na\nb\nc\nd\n```\nafter", max_code_lines=2)
    assert blocks == [CodeBlock(code="a\nb", language=""), Paragraph(text="after")]


# --- tables ---

@pytest.mark.parametrize("line,expected", [
    ("|x|", True),
    ("  | a | b |  ", True),
    ("|", False),
    ("| a | b", False),
    ("a | b |", False),
])
def test_is_table_row(line, expected):
    assert is_table_row(line) is expected


@pytest.mark.parametrize("line,expected", [
    ("|---|---|", True),
    ("| :-- | :-: | --: |", True),
    ("| : | : |", False),
    ("| a | - |", False),
])
def test_is_table_separator(line, expected):
    assert is_table_separator(line) is expected


def test_parse_table_cells_trims_each_cell():
    assert parse_table_cells("|  a | b  |c|") == ["a", "b", "c"]


def test_table_with_separator():
    """Header, separator, and data rows become one Table; widths are not reconciled."""
    md = "| A | B |\n|---|:-:|\n| 1 | 2 |\n| 3 |\nafter"
    assert parse_blocks(md) == [
        Table(headers=("A", "B"), rows=(("1", "2"), ("3",))),
        Paragraph(text="after"),
    ]


def test_pipe_line_without_separator_is_paragraph():
    """A lone pipe-delimited line is not a table."""
    assert parse_blocks("| a |\nnext") == [Paragraph(text="| a |"), Paragraph(text="next")]


def test_table_takes_precedence_over_paragraph_rows():
    """Two data rows after the separator produce two table rows."""
    blocks = parse_blocks("|h|\n|-|\n|r1|\n|r2|")
    assert blocks == [Table(headers=("h",), rows=(("r1",), ("r2",)))]


# --- callouts and blockquotes ---

def test_callout_collects_following_quoted_lines():
    """`> [!NOTE]` starts a callout; later `>` lines form its body."""
    md = "> [!note]\n> Body line\n>second\nafter"
    assert parse_blocks(md) == [
        Callout(callout=CalloutKind.note, lines=("Body line", "second")),
        Paragraph(text="after"),
    ]


@pytest.mark.parametrize("tag,kind", [
    ("NOTE", CalloutKind.note),
    ("Tip", CalloutKind.tip),
    ("important", CalloutKind.important),
    ("WARNING", CalloutKind.warning),
    ("caution", CalloutKind.caution),
])
def test_callout_tags_case_insensitive(tag, kind):
    blocks = parse_blocks(f"> [!{tag}]\n> text")
    assert blocks == [Callout(callout=kind, lines=("text",))]


def test_unknown_callout_tag_falls_back_to_blockquote():
    """An unrecognized tag keeps its literal text as the first quote line."""
    assert parse_blocks("> [!FOO]\n> body") == [Blockquote(lines=("[!FOO]", "body"))]


def test_blockquote_strips_one_marker_and_one_space():
    assert parse_blocks(">a\n>  b\n> c") == [Blockquote(lines=("a", " b", "c"))]


# --- single-line blocks ---

def test_image_line():
    assert parse_blocks("![alt text](img/a.png)") == [Image(alt="alt text", source="img/a.png")]


def test_image_keeps_path_untouched():
    """Path checks belong to the loader; the parser reports the source verbatim."""
    assert parse_image("![img](../../etc/passwd)") == ("img", "../../etc/passwd")


def test_image_with_trailing_text_is_paragraph():
    line = "![a](b.png) caption"
    assert parse_blocks(line) == [Paragraph(text=line)]


@pytest.mark.parametrize("line", ["---", "***", "___", "  -----  "])
def test_horizontal_rule(line):
    assert parse_blocks(line) == [HorizontalRule()]


@pytest.mark.parametrize("line", ["--", "-*-", "- - -"])
def test_not_horizontal_rule(line):
    assert not is_horizontal_rule(line)


def test_task_items():
    """Task prefixes produce TaskItems with the checked flag."""
    assert parse_blocks("- [ ] Task one\n- [x] Task two\n- [X] Task three") == [
        TaskItem(text="Task one", checked=False),
        TaskItem(text="Task two", checked=True),
        TaskItem(text="Task three", checked=True),
    ]


@pytest.mark.parametrize("line,expected", [
    ("- a", ("a", 0)),
    ("* b", ("b", 0)),
    ("+ c", ("c", 0)),
    ("  - d", ("d", 1)),
    ("\t- e", ("e", 1)),
    ("    * f", ("f", 2)),
    ("-no space", None),
])
def test_parse_unordered_list_item(line, expected):
    assert parse_unordered_list_item(line) == expected


def test_ordered_list_items():
    assert parse_blocks("1. one\n12. twelve") == [
        ListItem(text="one", ordered=True, number=1, indent=0),
        ListItem(text="twelve", ordered=True, number=12, indent=0),
    ]


def test_ordered_list_limited_to_four_digits():
    assert parse_blocks("12345. x") == [Paragraph(text="12345. x")]


def test_footnote_definition_placeholder():
    """Definition lines become inert, empty FootnoteRef placeholders."""
    assert parse_blocks("[^1]: A note") == [FootnoteRef(id="", text="")]


def test_blank_lines_are_kept_as_paragraphs():
    assert parse_blocks("a\n\nb") == [Paragraph(text="a"), Paragraph(text=""), Paragraph(text="b")]


def test_crlf_line_endings_normalized():
    assert parse_blocks("# A\r\nB\r\n") == [Heading(text="A", level=1), Paragraph(text="B"), Paragraph(text="")]


def test_every_line_consumed_once(sample_md):
    """Single-line blocks plus multi-line constructs account for every source line."""
    blocks = parse_blocks(sample_md)
    kinds = [b.kind for b in blocks]
    assert kinds.count("code") == 1
    assert kinds.count("table") == 1
    assert kinds.count("callout") == 1
    assert kinds.count("blockquote") == 1
    assert kinds.count("footnote_ref") == 1
    assert blocks[-1] == Paragraph(text="")


def test_rule_precedence_hr_before_list():
    """`---` is a rule and `- [ ] x` a task, never plain list items."""
    assert parse_blocks("---\n- [ ] x\n- y") == [
        HorizontalRule(),
        TaskItem(text="x", checked=False),
        ListItem(text="y", ordered=False, number=0, indent=0),
    ]


def test_blocks_are_immutable():
    block = parse_blocks("# T")[0]
    with pytest.raises(Exception):
        block.text = "changed"
