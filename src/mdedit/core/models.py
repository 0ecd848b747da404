"""Document model: typed blocks, callout kinds, footnotes, and parsed files"""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Annotated, Any, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter


class CalloutKind(str, Enum):
    """GitHub-style alert tags accepted in `> [!TAG]` callouts."""
    note      = "Note"
    tip       = "Tip"
    important = "Important"
    warning   = "Warning"
    caution   = "Caution"

    @classmethod
    def from_tag(cls, tag: str) -> Optional["CalloutKind"]:
        """Case-insensitive lookup of a callout tag; None when unknown."""
        lower = tag.lower()
        return next((k for k in cls if k.value.lower() == lower), None)

    @property
    def icon(self) -> str:
        return _CALLOUT_ICONS[self]

    @property
    def color(self) -> str:
        return _CALLOUT_COLORS[self]


_CALLOUT_ICONS = {
    CalloutKind.note:      "info",
    CalloutKind.tip:       "lightbulb",
    CalloutKind.important: "exclamation",
    CalloutKind.warning:   "warning",
    CalloutKind.caution:   "flame",
}

_CALLOUT_COLORS = {
    CalloutKind.note:      "#0969da",
    CalloutKind.tip:       "#1a7f37",
    CalloutKind.important: "#8250df",
    CalloutKind.warning:   "#bf8700",
    CalloutKind.caution:   "#cf222e",
}


class _Block(BaseModel):
    model_config = ConfigDict(frozen=True)


class Heading(_Block):
    kind: Literal["heading"] = "heading"
    text: str
    level: int = Field(ge=1, le=6)


class CodeBlock(_Block):
    kind: Literal["code"] = "code"
    code: str
    language: str = ""


class Blockquote(_Block):
    kind: Literal["blockquote"] = "blockquote"
    lines: tuple[str, ...]


class Callout(_Block):
    kind: Literal["callout"] = "callout"
    callout: CalloutKind
    lines: tuple[str, ...]


class HorizontalRule(_Block):
    kind: Literal["hr"] = "hr"


class ListItem(_Block):
    kind: Literal["list_item"] = "list_item"
    text: str
    ordered: bool = False
    number: int = 0
    indent: int = 0                 # nesting depth, not raw spaces


class TaskItem(_Block):
    kind: Literal["task_item"] = "task_item"
    text: str
    checked: bool = False


class Table(_Block):
    kind: Literal["table"] = "table"
    headers: tuple[str, ...]
    rows: tuple[tuple[str, ...], ...] = ()     # row widths are not reconciled with headers


class Image(_Block):
    kind: Literal["image"] = "image"
    alt: str
    source: str


class FootnoteRef(_Block):
    """Inert placeholder for a footnote definition line; content comes from the collector."""
    kind: Literal["footnote_ref"] = "footnote_ref"
    id: str = ""
    text: str = ""


class Paragraph(_Block):
    kind: Literal["paragraph"] = "paragraph"
    text: str


Block = Annotated[
    Union[
        Heading, CodeBlock, Blockquote, Callout, HorizontalRule, ListItem,
        TaskItem, Table, Image, FootnoteRef, Paragraph,
    ],
    Field(discriminator="kind"),
]

BlockList = TypeAdapter(list[Block])


class FootnoteDef(BaseModel):
    """A `[^id]: text` definition collected from the raw document."""
    model_config = ConfigDict(frozen=True)
    id: str
    text: str


@dataclass
class ParsedDoc:
    """A markdown file loaded from disk; not part of the pure core."""
    path:        Path
    slug:        str
    markdown:    str            # body only (frontmatter stripped)
    frontmatter: dict[str, Any]
    title:       str
