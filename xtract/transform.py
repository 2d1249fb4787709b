from __future__ import annotations

from typing import Any, Iterable

from .article import collect_images, render_article
from .blocks import parse_article
from .config_schema import TransformConfig
from .errors import QuoteDepthError
from .media import extract_media_urls, media_records_from_raw, resolve_media_urls
from .post import Author, AuthorStats, NormalizedPost, PostStats
from .run_log import EventSink
from .schema import ArticlePost, RawPost, StandardPost, validate_post
from .urls import expand_urls


def _dedupe_terms(values: Iterable[str]) -> tuple[str, ...]:
    out: list[str] = []
    seen: set[str] = set()
    for item in values:
        term = (item or "").strip().lstrip("#").strip()
        if not term:
            continue
        key = term.casefold()
        if key in seen:
            continue
        seen.add(key)
        out.append(term)
    return tuple(out)


def _parse_views(post: RawPost) -> int | None:
    count = post.views.count if post.views is not None else None
    if count is None:
        return None
    c = count.strip()
    return int(c) if c.isdigit() else None


def _post_stats(post: RawPost) -> PostStats:
    legacy = post.legacy
    return PostStats(
        likes=legacy.favorite_count,
        reposts=legacy.retweet_count,
        replies=legacy.reply_count,
        views=_parse_views(post),
    )


def _author(post: RawPost) -> Author:
    user = post.core.user_results.result
    legacy = user.legacy
    return Author(
        name=user.core.name,
        screen_name=user.core.screen_name,
        avatar=legacy.profile_image_url_https,
        banner=legacy.profile_banner_url,
        is_blue_verified=user.is_blue_verified,
        description=legacy.description,
        location=legacy.location,
        url=legacy.url,
        joined=legacy.created_at,
        stats=AuthorStats(
            followers=legacy.followers_count or 0,
            following=legacy.friends_count or 0,
            posts=legacy.statuses_count or 0,
            listed=legacy.listed_count or 0,
            media=legacy.media_count or 0,
        ),
    )


def _standard_body(post: StandardPost, cfg: TransformConfig) -> tuple[str, list[str], list[str]]:
    note = post.note_tweet.note_tweet_results.result if post.note_tweet is not None else None
    text = (note.text if note is not None else None) or post.legacy.full_text

    entities = post.legacy.entities
    if cfg.urls.expand:
        note_urls = note.entity_set.urls if note is not None else []
        text = expand_urls(
            text,
            note_urls or entities.urls,
            entities.media,
            strip_media_links=cfg.urls.strip_media_links,
        )

    images, videos = extract_media_urls(
        entities.media,
        excluded_content_types=cfg.media.excluded_video_content_types,
    )
    return text, images, videos


def _article_body(post: ArticlePost, cfg: TransformConfig) -> tuple[str, list[str], list[str]]:
    result = post.article.article_results.result

    document = parse_article(result.model_dump())
    records = media_records_from_raw(result.media_entities)
    if records:
        document = resolve_media_urls(document, records)

    text = render_article(document)
    if cfg.urls.expand:
        entities = post.legacy.entities
        text = expand_urls(
            text,
            entities.urls,
            entities.media,
            strip_media_links=cfg.urls.strip_media_links,
        )

    return text, collect_images(document), []


def _quoted_post(
    post: RawPost,
    *,
    depth: int,
    cfg: TransformConfig,
    logger: EventSink | None,
) -> NormalizedPost | None:
    if not cfg.quotes.enabled or post.quoted_status_result is None:
        return None

    raw_quoted = post.quoted_status_result.result
    if not raw_quoted or not raw_quoted.get("rest_id"):
        return None

    quoted_id = str(raw_quoted.get("rest_id"))
    try:
        return _transform(raw_quoted, depth=depth + 1, cfg=cfg, logger=logger)
    except QuoteDepthError as e:
        if logger is not None:
            logger.warning(
                "quoted_post_depth_exceeded",
                post_id=post.rest_id,
                quoted_post_id=quoted_id,
                max_depth=cfg.quotes.max_depth,
                message=str(e),
            )
        return None
    except Exception as e:
        if logger is not None:
            logger.exception(
                "quoted_post_failed",
                exc=e,
                post_id=post.rest_id,
                quoted_post_id=quoted_id,
            )
        return None


def _transform(
    raw: Any,
    *,
    depth: int,
    cfg: TransformConfig,
    logger: EventSink | None,
) -> NormalizedPost:
    if depth > cfg.quotes.max_depth:
        raise QuoteDepthError(
            f"Quote nesting depth {depth} exceeds max_depth={cfg.quotes.max_depth}"
        )

    post = validate_post(raw)

    if isinstance(post, ArticlePost):
        text, images, videos = _article_body(post, cfg)
        kind, encoding = "article", "markdown"
    elif isinstance(post, StandardPost):
        text, images, videos = _standard_body(post, cfg)
        kind, encoding = "post", "text"
    else:
        raise TypeError(f"Unhandled post variant: {type(post).__name__}")

    return NormalizedPost(
        id=post.rest_id,
        kind=kind,
        text_encoding=encoding,
        text=text,
        created_at=post.legacy.created_at,
        author=_author(post),
        stats=_post_stats(post),
        images=tuple(images),
        videos=tuple(videos),
        hashtags=_dedupe_terms(h.text for h in post.legacy.entities.hashtags),
        quoted_post=_quoted_post(post, depth=depth, cfg=cfg, logger=logger),
    )


def transform_post(
    raw: Any,
    *,
    config: TransformConfig | None = None,
    logger: EventSink | None = None,
) -> NormalizedPost:
    """
    Transform one raw post (standard or article) into a NormalizedPost.

    Quoted posts are transformed recursively; a quoted post that fails, or that
    nests deeper than quotes.max_depth, is logged and omitted. Raises
    PostShapeError when the top-level value matches neither post shape.
    """
    cfg = config or TransformConfig()
    return _transform(raw, depth=0, cfg=cfg, logger=logger)
