"""Transcript reflow for human reading.

WHY: The transcript string arrives either as SRT (index, time range,
text lines) or as loose text where timecodes are glued into run-on
lines ("0:05 Hello 0:09 and welcome"). Neither reads well in a text
panel or a saved .txt file.

HOW: Normalize line endings, then choose a strategy:
  SRT   — per block: keep the time-range line, drop index lines, join
          the caption lines into one line.
  Loose — per line: drop stray index lines, keep ``-->`` lines, and
          split lines that start with a timecode at every timecode.
          A number right after a bare timecode is caption text
          ("0:05 42"), not an index, and is kept.

RULES:
- Pure: same input, same output; formatting already-formatted text
  returns it unchanged
- Never raises; empty or blank input yields ""
- The input string is not modified
"""

from __future__ import annotations

import re
from typing import List

SRT_SEPARATOR = "-->"

_TIMECODE_RE = re.compile(r"\d{1,2}:\d{2}(?::\d{2})?(?:[.,]\d{1,3})?")
_LEADING_SEPARATORS_RE = re.compile(r"^[\s\-–—|]+")
_BLOCK_SPLIT_RE = re.compile(r"\n{2,}")
_INDEX_LINE_RE = re.compile(r"^\d+$")


def normalize_transcript(text: str) -> str:
    """Turn escaped and Windows/Mac line endings into ``\\n`` and trim.

    Literal backslash sequences (``\\r\\n``, ``\\n``, ``\\t``) come from
    payloads that were JSON-encoded twice; they are only unescaped when
    a literal ``\\n`` is present.
    """
    text = text.strip()
    if "\\n" in text:
        text = text.replace("\\r\\n", "\n").replace("\\n", "\n").replace("\\t", " ")
    return text.replace("\r\n", "\n").replace("\r", "\n").strip()


def split_line_by_timecode(line: str) -> List[str]:
    """Split a line starting with a timecode into timecode/text segments.

    ``"0:05 Hello 0:09 - world"`` becomes ``["0:05", "Hello", "0:09", "world"]``.
    Lines that do not start with a timecode come back as ``[line]``.
    """
    matches = list(_TIMECODE_RE.finditer(line))
    if not matches or matches[0].start() != 0:
        return [line]

    segments: List[str] = []
    for i, match in enumerate(matches):
        end = matches[i + 1].start() if i + 1 < len(matches) else len(line)
        rest = _LEADING_SEPARATORS_RE.sub("", line[match.end():end]).strip()
        segments.append(match.group(0))
        if rest:
            segments.append(rest)
    return segments


def _format_srt(text: str) -> str:
    output: List[str] = []
    for block in _BLOCK_SPLIT_RE.split(text):
        lines = [line.strip() for line in block.split("\n") if line.strip()]
        if not lines:
            continue
        time_index = next(
            (i for i, line in enumerate(lines) if SRT_SEPARATOR in line), None
        )
        if time_index is None:
            output.extend([" ".join(lines), ""])
            continue
        caption = " ".join(
            line for line in lines[time_index + 1:] if not _INDEX_LINE_RE.match(line)
        ).strip()
        output.append(lines[time_index])
        if caption:
            output.append(caption)
        output.append("")
    return "\n".join(output).strip()


def _format_loose(text: str) -> str:
    output: List[str] = []
    for line in text.split("\n"):
        stripped = line.strip()
        if not stripped:
            output.append("")
        elif _INDEX_LINE_RE.match(stripped) and not (
            output and _TIMECODE_RE.fullmatch(output[-1])
        ):
            continue
        elif SRT_SEPARATOR in stripped:
            output.append(stripped)
        else:
            output.extend(split_line_by_timecode(stripped))
    return "\n".join(output).strip()


def format_transcript_for_display(transcript: str) -> str:
    """Reflow a transcript (SRT or loose text) into readable display text."""
    normalized = normalize_transcript(transcript or "")
    if not normalized:
        return ""
    if SRT_SEPARATOR in normalized:
        return _format_srt(normalized)
    return _format_loose(normalized)
