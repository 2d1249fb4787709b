from __future__ import annotations

import re
from typing import Any, Mapping, Sequence
from urllib.parse import urlsplit

from .schema import UrlEntity

_NUMERIC_ID_RE = re.compile(r"^\d+$")
_PATH_ID_RE = re.compile(r"(?:status|article)/(\d+)")


def expand_urls(
    text: str,
    url_entities: Sequence[UrlEntity],
    media_entities: Sequence[Any] = (),
    *,
    strip_media_links: bool = True,
) -> str:
    """
    Replace shortened links in text with their expanded targets.

    Media short links point back at the post's own attachments, which are
    reported separately, so they are removed from the text when requested.
    """
    out = text or ""

    pairs = [(e.url, e.expanded_url) for e in url_entities if e.url and e.expanded_url]
    for short, expanded in sorted(pairs, key=lambda p: len(p[0]), reverse=True):
        out = out.replace(short, expanded)

    if strip_media_links:
        stripped = False
        for media in media_entities:
            if not isinstance(media, Mapping):
                continue
            short = media.get("url")
            if isinstance(short, str) and short and short in out:
                out = out.replace(short, "")
                stripped = True
        if stripped:
            out = out.rstrip()

    return out


def extract_post_id(id_or_url: str) -> str:
    """
    Extract a post id from a bare numeric id, a status/article URL, or a path.

    Raises ValueError when no id can be found.
    """
    value = (id_or_url or "").strip()
    if _NUMERIC_ID_RE.fullmatch(value):
        return value

    parts = urlsplit(value)
    if parts.scheme and parts.netloc:
        segments = [s for s in parts.path.split("/") if s]
        for marker in ("status", "article"):
            if marker in segments:
                idx = segments.index(marker)
                if idx + 1 < len(segments) and _NUMERIC_ID_RE.fullmatch(segments[idx + 1]):
                    return segments[idx + 1]
        raise ValueError(f"Invalid post id or URL: {id_or_url!r}")

    match = _PATH_ID_RE.search(value)
    if match:
        return match.group(1)

    raise ValueError(f"Invalid post id or URL: {id_or_url!r}")
