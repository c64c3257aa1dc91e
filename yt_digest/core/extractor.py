"""Caption item discovery across captions payloads of unknown shape.

WHY: The captions API has no stable schema. Depending on the video and
the upstream's mood, timing data arrives as a top-level array, under
``subtitles`` or ``events``, wrapped in ``data``/``result``/``response``,
or only as an SRT string. Chapters need timed items regardless.

HOW: Two discovery passes, each an ordered table of probes tried in
priority order with bounded recursion into wrapper fields:
  1. Structured — find an array of caption-like entries; map each entry
     through the start/duration/text alias tables.
  2. SRT — find a string containing ``-->`` and parse its blocks.
The first pass that yields at least one item wins.

RULES:
- Never raises; returns [] when nothing usable is found
- Recursion into wrapper fields stops after MAX_DEPTH levels
- First matching field wins; no further search after a match
- Entries without a resolvable start or non-empty text are dropped
- Negative starts are clamped to 0.0
- The raw payload is never mutated
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, List, Optional, Tuple

from yt_digest.core.ir import CaptionItem
from yt_digest.core.timecode import parse_timecode, pick_seconds

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Field alias tables (priority order)
# ---------------------------------------------------------------------------

CAPTION_ARRAY_KEYS = ("subtitles", "captions", "items", "fragments", "segments", "events")
SRT_STRING_KEYS = ("srt", "subtitle", "subtitles", "captions", "caption")
WRAPPER_KEYS = ("data", "result", "response")
MAX_DEPTH = 3

START_KEYS = ("start", "startTime", "t", "offset", "begin", "s", "ts")
DURATION_KEYS = ("dur", "duration", "d")
TEXT_KEYS = ("text", "caption", "line", "content", "body")

SRT_SEPARATOR = "-->"

# Relaxed on purpose: accepts MM:SS,mmm as well as HH:MM:SS,mmm.
_SRT_TIMECODE_RE = re.compile(r"\d{1,2}:\d{2}(?::\d{2})?(?:[.,]\d+)?")
_BLANK_LINES_RE = re.compile(r"\n[ \t]*\n")
_INDEX_LINE_RE = re.compile(r"^\d+$")


@dataclass(frozen=True)
class SchemaGuess:
    """Where in the payload the caption data was found.

    RULES:
    - kind: "array" (structured entries) or "srt" (SubRip text)
    - path: keys followed from the payload root, () for the root itself
    - value: the list or string found at that path
    """

    kind: str
    path: Tuple[str, ...]
    value: Any


# ---------------------------------------------------------------------------
# Bounded search
# ---------------------------------------------------------------------------


def _search(
    node: Any,
    probe: Callable[[Any], Optional[Tuple[Tuple[str, ...], Any]]],
    depth: int = MAX_DEPTH,
    path: Tuple[str, ...] = (),
) -> Optional[Tuple[Tuple[str, ...], Any]]:
    """Apply ``probe`` to ``node``, then to its wrapper fields, depth-first.

    ``depth`` is the number of wrapper levels still allowed below ``node``.
    """
    if node is None:
        return None
    found = probe(node)
    if found is not None:
        keys, value = found
        return path + keys, value
    if depth <= 0 or not isinstance(node, dict):
        return None
    for key in WRAPPER_KEYS:
        nested = node.get(key)
        if nested is None or nested is node:
            continue
        found = _search(nested, probe, depth - 1, path + (key,))
        if found is not None:
            return found
    return None


def _probe_caption_array(node: Any) -> Optional[Tuple[Tuple[str, ...], Any]]:
    if isinstance(node, list):
        return (), node
    if isinstance(node, dict):
        for key in CAPTION_ARRAY_KEYS:
            value = node.get(key)
            if isinstance(value, list):
                return (key,), value
    return None


def _probe_srt_string(node: Any) -> Optional[Tuple[Tuple[str, ...], Any]]:
    if isinstance(node, str):
        return ((), node) if SRT_SEPARATOR in node else None
    if isinstance(node, dict):
        for key in SRT_STRING_KEYS:
            value = node.get(key)
            if isinstance(value, str) and SRT_SEPARATOR in value:
                return (key,), value
    return None


def find_caption_array(raw: Any) -> Optional[SchemaGuess]:
    """Locate the first array of caption-like entries in ``raw``."""
    found = _search(raw, _probe_caption_array)
    if found is None:
        return None
    return SchemaGuess(kind="array", path=found[0], value=found[1])


def find_srt_string(raw: Any) -> Optional[SchemaGuess]:
    """Locate the first SRT-looking string (one containing ``-->``) in ``raw``."""
    found = _search(raw, _probe_srt_string)
    if found is None:
        return None
    return SchemaGuess(kind="srt", path=found[0], value=found[1])


# ---------------------------------------------------------------------------
# Entry mapping
# ---------------------------------------------------------------------------


def _pick_field(entry: Any, keys: Tuple[str, ...]) -> Optional[float]:
    if not isinstance(entry, dict):
        return None
    for key in keys:
        seconds = pick_seconds(entry.get(key))
        if seconds is not None:
            return seconds
    return None


def pick_text(entry: Any) -> str:
    """Return the stripped caption text of an entry, or "" when it has none.

    A plain string entry is its own text.
    """
    if isinstance(entry, dict):
        for key in TEXT_KEYS:
            value = entry.get(key)
            if isinstance(value, str) and value.strip():
                return value.strip()
    if isinstance(entry, str):
        return entry.strip()
    return ""


def _entry_to_item(entry: Any) -> Optional[CaptionItem]:
    start = _pick_field(entry, START_KEYS)
    text = pick_text(entry)
    if start is None or not text:
        return None
    return CaptionItem(
        start=max(0.0, start),
        text=text,
        duration=_pick_field(entry, DURATION_KEYS),
    )


# ---------------------------------------------------------------------------
# SRT parsing
# ---------------------------------------------------------------------------


def parse_srt(text: str) -> List[CaptionItem]:
    """Parse SubRip text into caption items, one per valid block.

    HOW: Split on blank lines; in each block take the first line holding
    ``-->``, read the first timecode on it, and join the following
    non-index lines as the caption text.

    RULES:
    - Blocks without a ``-->`` line or a readable timecode are skipped
    - Blocks whose text is empty are skipped
    - Block order is preserved
    """
    normalized = text.replace("\r\n", "\n").replace("\r", "\n")
    items: List[CaptionItem] = []
    for block in _BLANK_LINES_RE.split(normalized):
        lines = [line.strip() for line in block.split("\n") if line.strip()]
        time_index = next(
            (i for i, line in enumerate(lines) if SRT_SEPARATOR in line), None
        )
        if time_index is None:
            continue
        match = _SRT_TIMECODE_RE.search(lines[time_index])
        start = parse_timecode(match.group(0)) if match else None
        if start is None:
            logger.debug("Skipping SRT block without timecode: %r", lines[time_index])
            continue
        caption = " ".join(
            line for line in lines[time_index + 1:] if not _INDEX_LINE_RE.match(line)
        ).strip()
        if not caption:
            continue
        items.append(CaptionItem(start=start, text=caption))
    return items


# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------


def extract_caption_items(raw: Any) -> List[CaptionItem]:
    """Discover and normalize timed caption items in a captions payload.

    Args:
        raw: The decoded JSON payload (dict, list, scalar or None), or a
             raw SRT string.

    Returns:
        Caption items in payload order (not sorted). Empty when neither
        structured entries nor an SRT string yield anything.
    """
    guess = find_caption_array(raw)
    if guess is not None:
        items = [item for item in map(_entry_to_item, guess.value) if item is not None]
        dropped = len(guess.value) - len(items)
        if dropped:
            logger.debug(
                "Dropped %d of %d caption entries at %s",
                dropped, len(guess.value), "/".join(guess.path) or "<root>",
            )
        if items:
            return items

    guess = find_srt_string(raw)
    if guess is not None:
        return parse_srt(guess.value)

    logger.debug("No caption data found in payload of type %s", type(raw).__name__)
    return []
