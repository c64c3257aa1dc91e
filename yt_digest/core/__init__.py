"""Core derivation package — caption discovery, chapters, display text.

Everything here is synchronous, pure, and free of I/O: functions take
values already fetched by the api package and return new values.
"""

from yt_digest.core.chapters import build_chapters, build_youtube_url, trim_text
from yt_digest.core.display import format_transcript_for_display
from yt_digest.core.extractor import extract_caption_items
from yt_digest.core.ir import CaptionItem, Chapter, Digest, Question, TranscriptResult
from yt_digest.core.timecode import format_clock, parse_timecode, pick_seconds

__all__ = [
    "CaptionItem",
    "Chapter",
    "Digest",
    "Question",
    "TranscriptResult",
    "build_chapters",
    "build_youtube_url",
    "extract_caption_items",
    "format_clock",
    "format_transcript_for_display",
    "parse_timecode",
    "pick_seconds",
    "trim_text",
]
