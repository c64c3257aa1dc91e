"""Unit tests for chapter sampling and deep-link building."""

import random

import pytest

from yt_digest.core.chapters import build_chapters, build_youtube_url, trim_text
from yt_digest.core.ir import CaptionItem

BASE = "https://youtube.com/watch?v=abc"


def _items(count, spacing=7.5):
    return [CaptionItem(start=i * spacing + 0.4, text="caption {}".format(i)) for i in range(count)]


class TestBuildChapters:

    def test_empty(self):
        assert build_chapters([], BASE) == []

    def test_hundred_items_bounded_and_ordered(self):
        items = _items(100)
        chapters = build_chapters(items, BASE)
        assert 0 < len(chapters) <= 15
        starts = [chapter.start for chapter in chapters]
        assert starts == sorted(starts)
        assert chapters[0].start == int(items[0].start)

    @pytest.mark.parametrize("count", [1, 3, 8, 9, 15, 16, 29, 30, 31, 250, 1000])
    def test_count_bounds(self, count):
        chapters = build_chapters(_items(count), BASE)
        assert len(chapters) <= 15
        assert len(chapters) >= min(count, 8)

    def test_few_items_all_kept(self):
        chapters = build_chapters(_items(5), BASE)
        assert [chapter.title for chapter in chapters] == ["caption {}".format(i) for i in range(5)]

    def test_unsorted_input_is_sorted(self):
        items = _items(40)
        shuffled = list(items)
        random.Random(7).shuffle(shuffled)
        chapters = build_chapters(shuffled, BASE)
        starts = [chapter.start for chapter in chapters]
        assert starts == sorted(starts)
        assert chapters[0].start == 0

    def test_input_not_reordered(self):
        items = [CaptionItem(start=9, text="b"), CaptionItem(start=1, text="a")]
        build_chapters(items, BASE)
        assert [item.text for item in items] == ["b", "a"]

    def test_chapter_fields(self):
        items = [CaptionItem(start=65.9, text="  Second\n\ttopic  ")]
        chapter = build_chapters(items, BASE)[0]
        assert chapter.start == 65
        assert chapter.title == "Second topic"
        assert "t=65s" in chapter.url


class TestTrimText:

    def test_collapses_whitespace(self):
        assert trim_text("a \n\n b\t c") == "a b c"

    def test_exactly_max_is_kept(self):
        text = "x" * 110
        assert trim_text(text) == text

    def test_long_text_ellipsized(self):
        trimmed = trim_text("y" * 200)
        assert len(trimmed) == 110
        assert trimmed.endswith("…")


class TestBuildYoutubeUrl:

    def test_sets_t_parameter(self):
        url = build_youtube_url(BASE, 65)
        assert "t=65s" in url
        assert "v=abc" in url

    def test_overwrites_existing_t(self):
        url = build_youtube_url("https://www.youtube.com/watch?v=abc&t=10s", 20.7)
        assert url.count("t=") == 1
        assert url.endswith("t=20s")

    def test_short_link(self):
        assert build_youtube_url("https://youtu.be/abc", 3) == "https://youtu.be/abc?t=3s"

    def test_bare_id_fallback(self):
        assert build_youtube_url("abc", 65) == "https://www.youtube.com/watch?v=abc&t=65s"

    def test_fallback_encodes_id(self):
        url = build_youtube_url("a b/c", 1)
        assert url == "https://www.youtube.com/watch?v=a%20b%2Fc&t=1s"

    def test_negative_seconds_clamped(self):
        assert build_youtube_url("abc", -4).endswith("t=0s")

    def test_unparseable_base_falls_back(self):
        url = build_youtube_url("http://[abc", 5)
        assert url == "https://www.youtube.com/watch?v=http%3A%2F%2F%5Babc&t=5s"

    def test_chapters_with_unparseable_base(self):
        chapters = build_chapters(_items(3), "http://[abc")
        assert [chapter.url.endswith("t={}s".format(chapter.start)) for chapter in chapters] == [True] * 3
