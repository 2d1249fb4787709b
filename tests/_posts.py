# tests/_posts.py
from __future__ import annotations

from typing import Any


def user(name: str = "Jack", screen_name: str = "jack") -> dict[str, Any]:
    return {
        "user_results": {
            "result": {
                "is_blue_verified": True,
                "core": {"name": name, "screen_name": screen_name},
                "legacy": {
                    "profile_image_url_https": "https://pbs/avatar.jpg",
                    "followers_count": 10,
                    "friends_count": 2,
                    "statuses_count": 99,
                    "description": "bio",
                    "created_at": "Tue Mar 21 20:50:14 +0000 2006",
                },
            }
        }
    }


def legacy(text: str = "hello", **entities: Any) -> dict[str, Any]:
    return {
        "full_text": text,
        "created_at": "Wed Jan 01 00:00:00 +0000 2025",
        "favorite_count": 5,
        "retweet_count": 3,
        "reply_count": 1,
        "entities": dict(entities),
    }


def standard_post(rest_id: str = "1", text: str = "hello", **extra: Any) -> dict[str, Any]:
    post: dict[str, Any] = {
        "rest_id": rest_id,
        "core": user(),
        "legacy": legacy(text),
        "views": {"count": "1234"},
    }
    post.update(extra)
    return post


def article_post(rest_id: str = "2", **extra: Any) -> dict[str, Any]:
    post: dict[str, Any] = {
        "rest_id": rest_id,
        "core": user("Writer", "writer"),
        "legacy": legacy("https://t.co/article"),
        "article": {
            "article_results": {
                "result": {
                    "title": "T",
                    "cover_media": {"media_info": {"original_img_url": "http://x/cover.png"}},
                    "content_state": {
                        "blocks": [
                            {
                                "key": "a",
                                "text": "Hello",
                                "type": "unstyled",
                                "depth": 0,
                                "inlineStyleRanges": [{"offset": 0, "length": 5, "style": "BOLD"}],
                                "entityRanges": [],
                                "data": {},
                            },
                            {
                                "key": "b",
                                "text": " ",
                                "type": "atomic",
                                "depth": 0,
                                "inlineStyleRanges": [],
                                "entityRanges": [{"offset": 0, "length": 1, "key": 0}],
                                "data": {},
                            },
                        ],
                        "entityMap": [
                            {
                                "key": "0",
                                "value": {
                                    "type": "MEDIA",
                                    "mutability": "IMMUTABLE",
                                    "data": {
                                        "mediaItems": [
                                            {"mediaCategory": "DraftTweetImage", "mediaId": "m1"}
                                        ]
                                    },
                                },
                            }
                        ],
                    },
                    "media_entities": [
                        {"media_id": "m1", "media_info": {"original_img_url": "http://x/i.png"}}
                    ],
                }
            }
        },
    }
    post.update(extra)
    return post


def quoting(post: dict[str, Any], quoted: Any) -> dict[str, Any]:
    out = dict(post)
    out["quoted_status_result"] = {"result": quoted}
    return out
