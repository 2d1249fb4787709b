from __future__ import annotations

from .document import (
    Block,
    DividerBlock,
    Document,
    EmbeddedPostBlock,
    ImageBlock,
    TextBlock,
    UnknownBlock,
    VideoBlock,
)
from .entities import EntityTable
from .inline import render_inline

UNRESOLVED = "Unresolved"
DIVIDER_MARK = "---"
BLOCK_SEPARATOR = "\n\n"
EMBEDDED_POST_URL = "https://x.com/i/status/{post_id}"

_LINE_PREFIXES: dict[str, str] = {
    "header-one": "# ",
    "header-two": "## ",
    "header-three": "### ",
    "header-four": "#### ",
    "header-five": "##### ",
    "header-six": "###### ",
    "blockquote": "> ",
    "unordered-list-item": "- ",
    # Ordered items are not numbered; every item renders as "1.".
    "ordered-list-item": "1. ",
}


def apply_block_style(text: str, style: str | None) -> str:
    if style is None:
        return text
    if style == "code-block":
        return f"```\n{text}\n```"
    prefix = _LINE_PREFIXES.get(style)
    return f"{prefix}{text}" if prefix else text


def render_block(block: Block, entity_table: EntityTable | None = None) -> str:
    if isinstance(block, TextBlock):
        text = render_inline(
            block.text,
            block.inline_style_ranges,
            block.entity_ranges,
            entity_table,
        )
        return apply_block_style(text, block.style)
    if isinstance(block, ImageBlock):
        return f"![Image]({block.url or UNRESOLVED})"
    if isinstance(block, VideoBlock):
        return f"[Video: {block.url or UNRESOLVED}]"
    if isinstance(block, EmbeddedPostBlock):
        return f"[Post: {EMBEDDED_POST_URL.format(post_id=block.post_id)}]"
    if isinstance(block, DividerBlock):
        return DIVIDER_MARK
    if isinstance(block, UnknownBlock):
        return ""
    raise TypeError(f"Unhandled block variant: {type(block).__name__}")


def render_article(document: Document) -> str:
    """Render the title, a blank line, then every block joined by blank lines."""
    body = BLOCK_SEPARATOR.join(
        render_block(block, document.entity_table) for block in document.blocks
    )
    return f"{document.title}{BLOCK_SEPARATOR}{body}"


def collect_images(document: Document) -> list[str]:
    """Cover image first, then resolved inline image URLs in document order."""
    images: list[str] = []
    if document.cover_image:
        images.append(document.cover_image)
    for block in document.blocks:
        if isinstance(block, ImageBlock) and block.url:
            images.append(block.url)
    return images
