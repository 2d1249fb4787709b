# tests/test_urls.py
from __future__ import annotations

import unittest

from xtract.schema import UrlEntity
from xtract.urls import expand_urls, extract_post_id


class TestExpandUrls(unittest.TestCase):
    def test_replaces_short_links(self) -> None:
        text = "read https://t.co/abc and https://t.co/abc again"
        out = expand_urls(
            text,
            [UrlEntity(url="https://t.co/abc", expanded_url="https://example.com/post")],
        )
        self.assertEqual(out, "read https://example.com/post and https://example.com/post again")

    def test_strips_media_links(self) -> None:
        text = "look at this https://t.co/media1"
        media = [{"url": "https://t.co/media1", "type": "photo"}]

        self.assertEqual(expand_urls(text, [], media), "look at this")
        self.assertEqual(expand_urls(text, [], media, strip_media_links=False), text)

    def test_empty_text(self) -> None:
        self.assertEqual(expand_urls("", []), "")


class TestExtractPostId(unittest.TestCase):
    def test_accepts_ids_and_urls(self) -> None:
        self.assertEqual(extract_post_id("123456"), "123456")
        self.assertEqual(extract_post_id("https://twitter.com/user/status/123456"), "123456")
        self.assertEqual(extract_post_id("https://x.com/user/status/123456?s=20"), "123456")
        self.assertEqual(
            extract_post_id("https://x.com/i/article/1863039430268506540"),
            "1863039430268506540",
        )
        self.assertEqual(extract_post_id("user/status/987"), "987")

    def test_rejects_invalid_input(self) -> None:
        with self.assertRaises(ValueError):
            extract_post_id("invalid")
        with self.assertRaises(ValueError):
            extract_post_id("https://google.com")


if __name__ == "__main__":
    unittest.main()
