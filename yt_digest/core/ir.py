"""Intermediate representation dataclasses for fetched and derived digests.

WHY: The captions API returns a payload of unknown shape, and the UI,
CLI and formatters each need different views of it: timed caption
items, navigable chapters, generated questions. The IR gives every
consumer a single, well-typed form, decoupling fetching from deriving
and formatting.

HOW: Five dataclasses:
  CaptionItem      — one timed caption fragment (immutable)
  Chapter          — a sampled navigation marker with a deep link
  TranscriptResult — what the captions fetch returned (text + raw payload)
  Question         — one multiple-choice comprehension question
  Digest           — everything known about one video, handed to formatters

RULES:
- All times are in float seconds, except Chapter.start (whole seconds)
- CaptionItem.text is never empty and start is never negative
- CaptionItem order is not guaranteed; sort before sampling
- raw payloads are read-only and never mutated
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class CaptionItem:
    """A single timed caption fragment.

    RULES:
    - start: float seconds, >= 0
    - text: stripped, non-empty
    - duration: float seconds or None when the source omits it
    """

    start: float
    text: str
    duration: float | None = None


@dataclass
class Chapter:
    """A navigation marker derived from one sampled CaptionItem.

    RULES:
    - start: whole seconds, floor of the caption start, >= 0
    - title: whitespace-collapsed, at most 110 characters
    - url: absolute URL carrying a ``t=<start>s`` query parameter
    """

    start: int
    title: str
    url: str

    def to_dict(self) -> dict:
        return {"start": self.start, "title": self.title, "url": self.url}


@dataclass
class TranscriptResult:
    """The captions-fetch result: a transcript string plus the raw payload.

    WHY: The transcript string feeds the display formatter and the LLM;
    the raw payload is the only place timing information survives, so
    the chapter builder needs it too.
    """

    transcript: str
    raw: Any = None


@dataclass
class Question:
    """A multiple-choice question with exactly three options.

    RULES:
    - options: three strings
    - correct: index of the right option, 0, 1 or 2
    """

    question: str
    options: list[str]
    correct: int

    def to_dict(self) -> dict:
        return {
            "question": self.question,
            "options": list(self.options),
            "correct": self.correct,
        }


@dataclass
class Digest:
    """Everything known about one video, as consumed by the formatters.

    HOW: Built incrementally by the CLI or server — the transcript result
    first, then the optional summary and questions.

    RULES:
    - source_url: the URL (or bare video ID) the user supplied
    - video_id: used for output file naming
    - summary: None until summarization ran
    - questions: empty until question generation ran
    """

    source_url: str
    video_id: str
    result: TranscriptResult
    summary: str | None = None
    detail: str = "short"
    questions: list[Question] = field(default_factory=list)
