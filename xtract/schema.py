from __future__ import annotations

from typing import Any, Mapping, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .errors import PostShapeError


class _Passthrough(BaseModel):
    model_config = ConfigDict(extra="allow", frozen=True)


class UserLegacy(_Passthrough):
    profile_image_url_https: str | None = None
    profile_banner_url: str | None = None
    followers_count: int | None = None
    friends_count: int | None = None
    statuses_count: int | None = None
    listed_count: int | None = None
    media_count: int | None = None
    description: str | None = None
    url: str | None = None
    location: str | None = None
    created_at: str | None = None


class UserCore(_Passthrough):
    name: str
    screen_name: str


class UserResult(_Passthrough):
    is_blue_verified: bool | None = None
    legacy: UserLegacy = Field(default_factory=UserLegacy)
    core: UserCore


class UserResults(_Passthrough):
    result: UserResult


class PostCore(_Passthrough):
    user_results: UserResults


class UrlEntity(_Passthrough):
    url: str
    expanded_url: str
    display_url: str | None = None
    indices: tuple[int, int] | None = None


class HashtagEntity(_Passthrough):
    text: str
    indices: tuple[int, int] | None = None


class PostEntities(_Passthrough):
    media: list[dict[str, Any]] = Field(default_factory=list)
    urls: list[UrlEntity] = Field(default_factory=list)
    hashtags: list[HashtagEntity] = Field(default_factory=list)
    user_mentions: list[dict[str, Any]] = Field(default_factory=list)


class LegacyPost(_Passthrough):
    full_text: str
    created_at: str
    favorite_count: int
    retweet_count: int
    reply_count: int
    entities: PostEntities = Field(default_factory=PostEntities)


class Views(_Passthrough):
    count: str | None = None


class QuotedStatus(_Passthrough):
    # Validated lazily so a malformed quote cannot fail the quoting post.
    result: dict[str, Any] | None = None


class NoteEntitySet(_Passthrough):
    urls: list[UrlEntity] = Field(default_factory=list)


class NoteResult(_Passthrough):
    text: str | None = None
    entity_set: NoteEntitySet = Field(default_factory=NoteEntitySet)


class NoteResults(_Passthrough):
    result: NoteResult | None = None


class NoteTweet(_Passthrough):
    note_tweet_results: NoteResults


class ArticleResult(_Passthrough):
    title: str
    content_state: Any = None
    cover_media: Any = None
    media_entities: Any = None


class ArticleResults(_Passthrough):
    result: ArticleResult


class Article(_Passthrough):
    article_results: ArticleResults


class _BasePost(_Passthrough):
    rest_id: str
    core: PostCore
    legacy: LegacyPost
    views: Views | None = None
    quoted_status_result: QuotedStatus | None = None


class StandardPost(_BasePost):
    note_tweet: NoteTweet | None = None


class ArticlePost(_BasePost):
    article: Article


RawPost = Union[StandardPost, ArticlePost]


def is_article(raw: Mapping[str, Any]) -> bool:
    return bool(raw.get("article"))


def validate_post(raw: Any) -> RawPost:
    """
    Validate a raw post into the standard or article shape.

    The article shape is selected by a non-empty "article" field. Raises
    PostShapeError with one line per failing field.
    """
    if not isinstance(raw, Mapping):
        raise PostShapeError(f"Post must be a mapping/object, got {type(raw).__name__}")

    model: type[StandardPost] | type[ArticlePost] = ArticlePost if is_article(raw) else StandardPost
    try:
        return model.model_validate(dict(raw))
    except ValidationError as e:
        raise PostShapeError(_format_validation_errors(e, model.__name__)) from e


def _format_validation_errors(err: ValidationError, shape: str) -> str:
    lines: list[str] = [f"Post does not match the {shape} shape:"]
    for item in err.errors():
        loc = ".".join(str(part) for part in item.get("loc", [])) or "<root>"
        msg = item.get("msg", "invalid value")
        lines.append(f"- {loc}: {msg}")
    return "\n".join(lines)
