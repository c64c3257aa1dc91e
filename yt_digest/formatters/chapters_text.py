"""Chapter list formatter — clock, title and deep link per chapter.

WHY: The chapter list is the navigable part of the digest. In a text
file it reads like a YouTube description's chapter block, with the
link on the following line so it stays clickable in most viewers.

HOW: Derives caption items from the raw payload, samples them with
build_chapters(), and renders each as two lines:

    1:05  Welcome to the course
    https://www.youtube.com/watch?v=abc&t=65s

RULES:
- Chapters separated by a blank line
- Clock rendered with format_clock (M:SS or H:MM:SS)
- No caption timing in the payload → no file
"""

from __future__ import annotations

from typing import List

from yt_digest.core.chapters import build_chapters
from yt_digest.core.extractor import extract_caption_items
from yt_digest.core.ir import Chapter, Digest
from yt_digest.core.timecode import format_clock
from yt_digest.formatters.base import BaseFormatter, FormatterOutput


def digest_chapters(digest: Digest) -> List[Chapter]:
    """Derive the chapter list for a digest from its raw captions payload."""
    return build_chapters(extract_caption_items(digest.result.raw), digest.source_url)


def render_chapter(chapter: Chapter) -> str:
    return "{}  {}\n{}".format(format_clock(chapter.start), chapter.title, chapter.url)


class ChaptersTextFormatter(BaseFormatter):
    """Writes the sampled chapter list with clickable links."""

    @property
    def name(self) -> str:
        return "Chapters"

    @property
    def suffix(self) -> str:
        return "-chapters.txt"

    def format(self, digest: Digest) -> List[FormatterOutput]:
        chapters = digest_chapters(digest)
        if not chapters:
            return []
        content = "\n\n".join(render_chapter(chapter) for chapter in chapters) + "\n"
        return [FormatterOutput(suffix=self.suffix, content=content, media_type="text/plain")]
