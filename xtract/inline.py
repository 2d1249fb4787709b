from __future__ import annotations

from typing import Sequence

from .document import EntityRange, InlineStyleRange
from .entities import Entity, EntityTable

BOLD = "BOLD"
ITALIC = "ITALIC"
LINK_ENTITY_TYPE = "LINK"

_BOLD_MARK = "**"
_ITALIC_MARK = "*"


def _unit_starts(text: str) -> tuple[list[int], int]:
    # Range offsets count UTF-16 code units; astral characters take two.
    starts: list[int] = []
    pos = 0
    for ch in text:
        starts.append(pos)
        pos += 2 if ord(ch) > 0xFFFF else 1
    return starts, pos


def _covered(offset: int, length: int, size: int) -> range:
    return range(max(offset, 0), max(min(offset + length, size), 0))


def _link_url(entity: Entity) -> str:
    url = entity.data.get("url")
    return url if isinstance(url, str) else ""


def _style_transition(was_bold: bool, was_italic: bool, is_bold: bool, is_italic: bool) -> str:
    # Fixed order: bold-close, italic-close, italic-open, bold-open.
    out = ""
    if was_bold and not is_bold:
        out += _BOLD_MARK
    if was_italic and not is_italic:
        out += _ITALIC_MARK
    if is_italic and not was_italic:
        out += _ITALIC_MARK
    if is_bold and not was_bold:
        out += _BOLD_MARK
    return out


def render_inline(
    text: str,
    style_ranges: Sequence[InlineStyleRange] = (),
    entity_ranges: Sequence[EntityRange] = (),
    entity_table: EntityTable | None = None,
) -> str:
    """
    Render a text block's inline styles and link entities as Markdown.

    Each character collects the styles covering it and at most one link entity
    (the last applied range wins). Markup is emitted before a character whenever
    its annotation differs from the previous one. Links are outermost: active
    styles are closed before a link boundary and reopened inside the next span.
    Ranges reaching past the end of the text are clipped.
    """
    if not text:
        return ""

    starts, size = _unit_starts(text)

    styles: list[set[str]] = [set() for _ in range(size)]
    for sr in style_ranges:
        for i in _covered(sr.offset, sr.length, size):
            styles[i].add(sr.style)

    links: list[str | None] = [None] * size
    urls: dict[str, str] = {}
    if entity_table is not None:
        for er in entity_ranges:
            entity = entity_table.get(er.key)
            if entity is None or entity.type != LINK_ENTITY_TYPE:
                continue
            urls[er.key] = _link_url(entity)
            for i in _covered(er.offset, er.length, size):
                links[i] = er.key

    parts: list[str] = []
    bold = italic = False
    link: str | None = None

    for ch, unit in zip(text, starts):
        active = styles[unit]
        is_bold = BOLD in active
        is_italic = ITALIC in active
        current_link = links[unit]

        if current_link != link:
            parts.append(_style_transition(bold, italic, False, False))
            bold = italic = False
            if link is not None:
                parts.append(f"]({urls[link]})")
            if current_link is not None:
                parts.append("[")
            link = current_link

        parts.append(_style_transition(bold, italic, is_bold, is_italic))
        bold, italic = is_bold, is_italic
        parts.append(ch)

    parts.append(_style_transition(bold, italic, False, False))
    if link is not None:
        parts.append(f"]({urls[link]})")

    return "".join(parts)
