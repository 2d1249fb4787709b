from __future__ import annotations

from typing import Any, Mapping, Sequence

from .document import (
    STRUCTURAL_STYLES,
    Block,
    DividerBlock,
    Document,
    EmbeddedPostBlock,
    EntityRange,
    ImageBlock,
    InlineStyleRange,
    TextBlock,
    UnknownBlock,
    VideoBlock,
)
from .entities import Entity, EntityTable, entity_key

ATOMIC_BLOCK_TYPE = "atomic"
UNSTYLED_BLOCK_TYPE = "unstyled"

IMAGE_MEDIA_CATEGORIES = frozenset({"DraftTweetImage"})
VIDEO_MEDIA_CATEGORIES = frozenset({"DraftTweetGif", "DraftTweetVideo"})


def _coerce_str(value: Any) -> str | None:
    if isinstance(value, str):
        s = value.strip()
        return s if s else None
    return None


def _coerce_id(value: Any) -> str | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, str):
        v = value.strip()
        return v if v else None
    if isinstance(value, int):
        return str(value)
    return None


def _coerce_non_negative_int(value: Any) -> int | None:
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    return value if value >= 0 else None


def _inline_style_ranges(raw: Any) -> tuple[InlineStyleRange, ...]:
    if not isinstance(raw, list):
        return ()

    out: list[InlineStyleRange] = []
    for item in raw:
        if not isinstance(item, Mapping):
            continue
        offset = _coerce_non_negative_int(item.get("offset"))
        length = _coerce_non_negative_int(item.get("length"))
        style = item.get("style")
        if offset is None or length is None or not isinstance(style, str):
            continue
        out.append(InlineStyleRange(offset=offset, length=length, style=style))
    return tuple(out)


def _entity_ranges(raw: Any) -> tuple[EntityRange, ...]:
    if not isinstance(raw, list):
        return ()

    out: list[EntityRange] = []
    for item in raw:
        if not isinstance(item, Mapping):
            continue
        offset = _coerce_non_negative_int(item.get("offset"))
        length = _coerce_non_negative_int(item.get("length"))
        key = entity_key(item.get("key"))
        if offset is None or length is None or key is None:
            continue
        out.append(EntityRange(offset=offset, length=length, key=key))
    return tuple(out)


def _first_entity_key(raw: Any) -> str | None:
    if not isinstance(raw, list) or not raw:
        return None
    first = raw[0]
    if not isinstance(first, Mapping):
        return None
    return entity_key(first.get("key"))


def parse_atomic_entity(block_key: str, entity: Entity) -> Block:
    """Map the governing entity of an atomic block to a block variant."""
    data = entity.data

    if entity.type == "MEDIA":
        items = data.get("mediaItems")
        if isinstance(items, list) and items and isinstance(items[0], Mapping):
            item = items[0]
            category = item.get("mediaCategory")
            media_id = _coerce_id(item.get("mediaId"))
            if category in IMAGE_MEDIA_CATEGORIES:
                return ImageBlock(key=block_key, url="", media_id=media_id)
            if category in VIDEO_MEDIA_CATEGORIES:
                return VideoBlock(key=block_key, url="", media_id=media_id)

    elif entity.type == "TWEMOJI":
        url = _coerce_str(data.get("url"))
        if url:
            return ImageBlock(key=block_key, url=url)

    elif entity.type == "DIVIDER":
        return DividerBlock(key=block_key)

    elif entity.type == "TWEET":
        post_id = _coerce_id(data.get("tweetId"))
        if post_id:
            return EmbeddedPostBlock(key=block_key, post_id=post_id)

    return UnknownBlock(key=block_key)


def parse_blocks(raw_blocks: Sequence[Any], entity_table: EntityTable) -> tuple[Block, ...]:
    """
    Classify raw content-state blocks into block variants, in document order.

    Atomic blocks without a resolvable governing entity are dropped.
    """
    blocks: list[Block] = []

    for raw in raw_blocks:
        if not isinstance(raw, Mapping):
            continue

        key = raw.get("key")
        block_key = key if isinstance(key, str) else str(key or "")
        block_type = raw.get("type")

        if block_type == ATOMIC_BLOCK_TYPE:
            ekey = _first_entity_key(raw.get("entityRanges"))
            entity = entity_table.get(ekey) if ekey is not None else None
            if entity is None:
                continue
            blocks.append(parse_atomic_entity(block_key, entity))
            continue

        text = raw.get("text")
        style = block_type if block_type in STRUCTURAL_STYLES else None
        blocks.append(
            TextBlock(
                key=block_key,
                text=text if isinstance(text, str) else "",
                style=style,
                inline_style_ranges=_inline_style_ranges(raw.get("inlineStyleRanges")),
                entity_ranges=_entity_ranges(raw.get("entityRanges")),
            )
        )

    return tuple(blocks)


def cover_image_url(cover_media: Any) -> str | None:
    if not isinstance(cover_media, Mapping):
        return None
    info = cover_media.get("media_info")
    if not isinstance(info, Mapping):
        return None
    return _coerce_str(info.get("original_img_url"))


def parse_article(result: Mapping[str, Any]) -> Document:
    """
    Parse an article result ({title, content_state, cover_media, ...}) into a Document.

    A missing or block-less content state yields a Document with no blocks.
    """
    title = result.get("title")
    title = title if isinstance(title, str) else ""
    cover = cover_image_url(result.get("cover_media"))

    content_state = result.get("content_state")
    if not isinstance(content_state, Mapping):
        return Document(title=title, cover_image=cover)

    table = EntityTable.from_raw(content_state.get("entityMap"))
    raw_blocks = content_state.get("blocks")
    if not isinstance(raw_blocks, list):
        return Document(title=title, cover_image=cover, entity_table=table)

    return Document(
        title=title,
        blocks=parse_blocks(raw_blocks, table),
        cover_image=cover,
        entity_table=table,
    )
