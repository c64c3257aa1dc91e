"""Display transcript formatter — the reflowed transcript as a .txt file.

RULES:
- Content is exactly format_transcript_for_display(transcript) plus a
  trailing newline
- Empty transcripts produce no file
"""

from __future__ import annotations

from typing import List

from yt_digest.core.display import format_transcript_for_display
from yt_digest.core.ir import Digest
from yt_digest.formatters.base import BaseFormatter, FormatterOutput


class TranscriptTextFormatter(BaseFormatter):
    """Writes the human-readable transcript."""

    @property
    def name(self) -> str:
        return "Transcript Text"

    @property
    def suffix(self) -> str:
        return "-transcript.txt"

    def format(self, digest: Digest) -> List[FormatterOutput]:
        text = format_transcript_for_display(digest.result.transcript)
        if not text:
            return []
        return [FormatterOutput(suffix=self.suffix, content=text + "\n", media_type="text/plain")]
