from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Literal, Sequence

PostKind = Literal["post", "article"]
TextEncoding = Literal["text", "markdown"]


@dataclass(frozen=True)
class AuthorStats:
    followers: int = 0
    following: int = 0
    posts: int = 0
    listed: int = 0
    media: int = 0


@dataclass(frozen=True)
class Author:
    name: str
    screen_name: str
    avatar: str | None = None
    banner: str | None = None
    is_blue_verified: bool | None = None
    description: str | None = None
    location: str | None = None
    url: str | None = None
    joined: str | None = None
    stats: AuthorStats = field(default_factory=AuthorStats)


@dataclass(frozen=True)
class PostStats:
    likes: int = 0
    reposts: int = 0
    replies: int = 0
    views: int | None = None


@dataclass(frozen=True)
class NormalizedPost:
    """A post flattened to text plus metadata; quoted posts nest by value."""

    id: str
    kind: PostKind
    text_encoding: TextEncoding
    text: str
    created_at: str
    author: Author
    stats: PostStats = field(default_factory=PostStats)
    images: Sequence[str] = ()
    videos: Sequence[str] = ()
    hashtags: Sequence[str] = ()
    quoted_post: "NormalizedPost | None" = None


def _drop_none(values: dict[str, Any]) -> dict[str, Any]:
    return {k: v for k, v in values.items() if v is not None}


def post_to_dict(post: NormalizedPost) -> dict[str, Any]:
    """JSON-ready view with camelCase keys; absent optional fields are omitted."""
    author = post.author
    out: dict[str, Any] = {
        "id": post.id,
        "type": post.kind,
        "textType": post.text_encoding,
        "text": post.text,
        "createdAt": post.created_at,
        "author": _drop_none(
            {
                "name": author.name,
                "screenName": author.screen_name,
                "avatar": author.avatar,
                "banner": author.banner,
                "isBlueVerified": author.is_blue_verified,
                "description": author.description,
                "location": author.location,
                "url": author.url,
                "joined": author.joined,
                "stats": {
                    "followers": author.stats.followers,
                    "following": author.stats.following,
                    "posts": author.stats.posts,
                    "listed": author.stats.listed,
                    "media": author.stats.media,
                },
            }
        ),
        "stats": _drop_none(
            {
                "likes": post.stats.likes,
                "reposts": post.stats.reposts,
                "replies": post.stats.replies,
                "views": post.stats.views,
            }
        ),
        "images": list(post.images),
        "videos": list(post.videos),
        "hashtags": list(post.hashtags),
    }
    if post.quoted_post is not None:
        out["quotedPost"] = post_to_dict(post.quoted_post)
    return out
