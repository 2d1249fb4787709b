from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal, Union, get_args

from .entities import EntityTable

StructuralStyle = Literal[
    "header-one",
    "header-two",
    "header-three",
    "header-four",
    "header-five",
    "header-six",
    "blockquote",
    "unordered-list-item",
    "ordered-list-item",
    "code-block",
]

STRUCTURAL_STYLES: frozenset[str] = frozenset(get_args(StructuralStyle))


@dataclass(frozen=True)
class InlineStyleRange:
    offset: int
    length: int
    style: str


@dataclass(frozen=True)
class EntityRange:
    offset: int
    length: int
    key: str


@dataclass(frozen=True)
class TextBlock:
    key: str
    text: str
    style: StructuralStyle | None = None
    inline_style_ranges: tuple[InlineStyleRange, ...] = ()
    entity_ranges: tuple[EntityRange, ...] = ()


@dataclass(frozen=True)
class ImageBlock:
    key: str
    url: str = ""
    media_id: str | None = None


@dataclass(frozen=True)
class VideoBlock:
    key: str
    url: str = ""
    media_id: str | None = None


@dataclass(frozen=True)
class EmbeddedPostBlock:
    key: str
    post_id: str


@dataclass(frozen=True)
class DividerBlock:
    key: str


@dataclass(frozen=True)
class UnknownBlock:
    key: str


Block = Union[TextBlock, ImageBlock, VideoBlock, EmbeddedPostBlock, DividerBlock, UnknownBlock]


@dataclass(frozen=True)
class MediaRecord:
    media_id: str
    resolved_url: str | None = None


@dataclass(frozen=True)
class Document:
    """A parsed article: title, blocks in document order, and its entity table."""

    title: str
    blocks: tuple[Block, ...] = ()
    cover_image: str | None = None
    entity_table: EntityTable = field(default_factory=EntityTable)
