"""Chapter list derivation from timed caption items.

WHY: A transcript of a long video has hundreds of caption fragments —
far too many to navigate. A short, evenly spaced list of timestamps
with a line of text each lets the reader jump straight into the video.

HOW: Sort the items by start, pick a stride so roughly 8–15 items are
visited, and turn each visited item into a Chapter with a trimmed
title and a ``t=<seconds>s`` deep link.

RULES:
- Never more than CHAPTER_MAX_COUNT (15) chapters
- At least min(len(items), 8) chapters when items exist
- Chapter starts are non-decreasing
- Titles are whitespace-collapsed and at most 110 characters
- The caller's list is not reordered (sorted() makes a copy)
"""

from __future__ import annotations

import math
from typing import List, Sequence
from urllib.parse import parse_qsl, quote, urlencode, urlsplit, urlunsplit

from yt_digest.config import (
    CHAPTER_MAX_COUNT,
    CHAPTER_MIN_TARGET,
    CHAPTER_TITLE_MAX_LEN,
    WATCH_URL_TEMPLATE,
)
from yt_digest.core.ir import CaptionItem, Chapter

ELLIPSIS = "…"


def trim_text(text: str, max_len: int = CHAPTER_TITLE_MAX_LEN) -> str:
    """Collapse whitespace runs and cut to ``max_len`` chars, ending in an ellipsis."""
    cleaned = " ".join(text.split())
    if len(cleaned) <= max_len:
        return cleaned
    return cleaned[: max_len - 1] + ELLIPSIS


def build_youtube_url(base: str, seconds: float) -> str:
    """Return ``base`` with its ``t`` query parameter set to ``<seconds>s``.

    When ``base`` is not an absolute URL (or does not parse at all) it is
    taken to be a bare video ID and a canonical watch URL is synthesized
    around it.
    """
    t = max(0, math.floor(seconds))
    try:
        parts = urlsplit(base.strip())
    except ValueError:
        parts = None
    if parts is None or not parts.scheme or not parts.netloc:
        return WATCH_URL_TEMPLATE.format(video_id=quote(base, safe=""), seconds=t)

    query = [(key, value) for key, value in parse_qsl(parts.query, keep_blank_values=True) if key != "t"]
    query.append(("t", "{}s".format(t)))
    return urlunsplit(parts._replace(query=urlencode(query)))


def build_chapters(items: Sequence[CaptionItem], base_url: str) -> List[Chapter]:
    """Sample caption items down to an evenly spaced chapter list.

    Args:
        items: Caption items in any order.
        base_url: The video URL (or bare video ID) chapters link into.

    Returns:
        Up to 15 chapters ordered by start; [] for no items.
    """
    if not items:
        return []

    ordered = sorted(items, key=lambda item: item.start)
    target = min(CHAPTER_MAX_COUNT, max(CHAPTER_MIN_TARGET, len(ordered)))
    step = max(1, len(ordered) // target)

    chapters: List[Chapter] = []
    for item in ordered[::step]:
        if len(chapters) >= CHAPTER_MAX_COUNT:
            break
        chapters.append(
            Chapter(
                start=max(0, math.floor(item.start)),
                title=trim_text(item.text),
                url=build_youtube_url(base_url, item.start),
            )
        )
    return chapters
