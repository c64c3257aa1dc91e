"""Shared test fixtures for the yt_digest test suite.

WHY: The captions API has no stable schema, so the extractor and the
chapter builder must be tested against the payload shapes actually
seen upstream. Centralizing those golden payloads here keeps every test
module working from the same data.

HOW: Pytest fixtures provide payloads in each known shape (top-level
array, keyed array, wrapped array, SRT string, wrapped SRT string) and a
Digest built from one of them.

RULES:
- Payload fixtures return fresh copies; tests may not share mutations
- SAMPLE_SRT has three blocks starting at 1.0, 4.5 and 3723.25 seconds
"""

import copy
from typing import Any, Dict, List

import pytest

from yt_digest.core.ir import Digest, Question, TranscriptResult


# ---------------------------------------------------------------------------
# Golden payloads
# ---------------------------------------------------------------------------

SAMPLE_SRT = (
    "1\n"
    "00:00:01,000 --> 00:00:04,000\n"
    "Hello and welcome\n"
    "to the course\n"
    "\n"
    "2\n"
    "00:00:04,500 --> 00:00:07,000\n"
    "Today we talk about sorting\n"
    "\n"
    "3\n"
    "01:02:03,250 --> 01:02:05,000\n"
    "Thanks for watching\n"
)

SEGMENT_ENTRIES: List[Dict[str, Any]] = [
    {"start": 0.0, "dur": 2.5, "text": "Intro music"},
    {"startTime": "0:03", "duration": "1.5", "caption": "Welcome back"},
    {"offset": "12.75", "d": 3, "line": "  First topic  "},
    {"t": "00:01:05", "content": "Second topic"},
]

WATCH_URL = "https://www.youtube.com/watch?v=1gI65iIxbXI"


@pytest.fixture
def sample_srt() -> str:
    return SAMPLE_SRT


@pytest.fixture
def segment_entries() -> List[Dict[str, Any]]:
    return copy.deepcopy(SEGMENT_ENTRIES)


@pytest.fixture
def keyed_payload() -> Dict[str, Any]:
    """Entries under a known array key at the top level."""
    return {"videoId": "1gI65iIxbXI", "events": copy.deepcopy(SEGMENT_ENTRIES)}


@pytest.fixture
def wrapped_payload() -> Dict[str, Any]:
    """Entries under data → result → segments (two wrapper levels)."""
    return {"data": {"result": {"segments": copy.deepcopy(SEGMENT_ENTRIES)}}}


@pytest.fixture
def srt_payload() -> Dict[str, Any]:
    """The shape returned with format_subtitle=srt: SRT text under a key."""
    return {"srt": SAMPLE_SRT, "language": "en"}


@pytest.fixture
def wrapped_srt_payload() -> Dict[str, Any]:
    return {"response": {"subtitle": SAMPLE_SRT}}


@pytest.fixture
def sample_questions() -> List[Question]:
    return [
        Question(
            question="What is being sorted?",
            options=["Numbers", "Colours", "Nothing"],
            correct=0,
        ),
        Question(
            question="How does the video end?",
            options=["Abruptly", "With thanks", "With a quiz"],
            correct=1,
        ),
    ]


@pytest.fixture
def sample_digest(srt_payload, sample_questions) -> Digest:
    return Digest(
        source_url=WATCH_URL,
        video_id="1gI65iIxbXI",
        result=TranscriptResult(transcript=SAMPLE_SRT, raw=srt_payload),
        summary="A short course on sorting.\nIt ends with thanks.",
        questions=sample_questions,
    )
