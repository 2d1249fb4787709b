from __future__ import annotations

from dataclasses import replace
from typing import Any, Iterable, Mapping, Sequence

from .document import Document, ImageBlock, MediaRecord, VideoBlock

STREAMING_MANIFEST_CONTENT_TYPE = "application/x-mpegURL"


def _coerce_url(value: Any) -> str | None:
    if isinstance(value, str):
        s = value.strip()
        return s if s else None
    return None


def media_records_from_raw(raw: Any) -> tuple[MediaRecord, ...]:
    """
    Read an article's flat media table ([{media_id, media_info: {original_img_url}}]).

    Entries without a usable media id are skipped.
    """
    if not isinstance(raw, list):
        return ()

    out: list[MediaRecord] = []
    for item in raw:
        if not isinstance(item, Mapping):
            continue
        media_id = item.get("media_id")
        if isinstance(media_id, int) and not isinstance(media_id, bool):
            media_id = str(media_id)
        if not isinstance(media_id, str) or not media_id.strip():
            continue
        info = item.get("media_info")
        url = _coerce_url(info.get("original_img_url")) if isinstance(info, Mapping) else None
        out.append(MediaRecord(media_id=media_id.strip(), resolved_url=url))
    return tuple(out)


def _url_index(records: Iterable[MediaRecord]) -> dict[str, str]:
    index: dict[str, str] = {}
    for record in records:
        if record.resolved_url and record.media_id not in index:
            index[record.media_id] = record.resolved_url
    return index


def resolve_media_urls(document: Document, records: Sequence[MediaRecord]) -> Document:
    """
    Return a new Document with image/video blocks' URLs filled in from the media table.

    The media id is kept on each block; unmatched blocks keep their empty URL.
    """
    index = _url_index(records)
    if not index:
        return document

    blocks = []
    for block in document.blocks:
        if isinstance(block, (ImageBlock, VideoBlock)) and block.media_id and not block.url:
            url = index.get(block.media_id)
            if url:
                block = replace(block, url=url)
        blocks.append(block)

    return replace(document, blocks=tuple(blocks))


def _bitrate(variant: Mapping[str, Any]) -> int | None:
    value = variant.get("bitrate")
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return int(value) if value > 0 else None


def select_video_variant(
    variants: Sequence[Any],
    *,
    excluded_content_types: Iterable[str] = (STREAMING_MANIFEST_CONTENT_TYPE,),
) -> str | None:
    """
    Pick the highest-bitrate variant URL, skipping streaming manifests.

    Falls back to the first variant when none declares a bitrate (e.g. GIFs).
    """
    excluded = set(excluded_content_types)
    candidates = [v for v in variants if isinstance(v, Mapping)]

    best_url: str | None = None
    best_rate = -1
    for variant in candidates:
        if variant.get("content_type") in excluded:
            continue
        rate = _bitrate(variant)
        url = _coerce_url(variant.get("url"))
        if rate is None or url is None:
            continue
        if rate > best_rate:
            best_rate = rate
            best_url = url

    if best_url is None and candidates:
        best_url = _coerce_url(candidates[0].get("url"))
    return best_url


def extract_media_urls(
    media_entities: Sequence[Any],
    *,
    excluded_content_types: Iterable[str] = (STREAMING_MANIFEST_CONTENT_TYPE,),
) -> tuple[list[str], list[str]]:
    """Split a standard post's media entities into (image URLs, video URLs)."""
    excluded = tuple(excluded_content_types)
    images: list[str] = []
    videos: list[str] = []

    for entity in media_entities:
        if not isinstance(entity, Mapping):
            continue
        kind = entity.get("type")
        if kind == "photo":
            url = _coerce_url(entity.get("media_url_https"))
            if url:
                images.append(url)
        elif kind in ("video", "animated_gif"):
            info = entity.get("video_info")
            variants = info.get("variants") if isinstance(info, Mapping) else None
            url = select_video_variant(
                variants if isinstance(variants, list) else [],
                excluded_content_types=excluded,
            )
            if url:
                videos.append(url)

    return images, videos
