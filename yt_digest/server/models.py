"""Pydantic request/response models for the HTTP API.

WHY: The FastAPI endpoints need typed schemas for request validation,
response serialization, and automatic OpenAPI documentation. Pydantic
models enforce field types at runtime and generate JSON Schema that
appears in the /docs UI.

HOW: Each endpoint pair (request + response) has its own model. The
DetailLevel enum is the closed set of summary detail levels.

RULES:
- All models use Field(description=...) for OpenAPI documentation
- DetailLevel values match config.DETAIL_LEVELS keys exactly
- youtube_url must be an absolute http(s) URL
- transcript bodies must be non-empty strings
"""

from __future__ import annotations

from enum import Enum
from typing import Any, List, Optional

from pydantic import AnyHttpUrl, BaseModel, Field


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------


class DetailLevel(str, Enum):
    """Summary verbosity levels accepted by the summarizer."""

    short = "short"
    medium = "medium"
    long = "long"


# ---------------------------------------------------------------------------
# Shared models
# ---------------------------------------------------------------------------


class ChapterModel(BaseModel):
    """One navigable chapter."""

    start: int = Field(description="Chapter start in whole seconds.", ge=0)
    title: str = Field(description="Short chapter title (max 110 chars).")
    url: str = Field(description="Deep link into the video at the chapter start.")


class QuestionModel(BaseModel):
    """A three-option multiple-choice question."""

    question: str = Field(description="Question text.")
    options: List[str] = Field(description="Exactly three answer options.", min_length=3, max_length=3)
    correct: int = Field(description="Index of the correct option (0, 1 or 2).", ge=0, le=2)


# ---------------------------------------------------------------------------
# Request models
# ---------------------------------------------------------------------------


class DownloadRequest(BaseModel):
    """Fetch captions for a video, then summarize them."""

    youtube_url: AnyHttpUrl = Field(description="YouTube video URL (watch, youtu.be, shorts or embed).")
    detail: Optional[DetailLevel] = Field(default=None, description="Summary detail level. Defaults to 'short'.")


class SummarizeRequest(BaseModel):
    """Summarize an already fetched transcript."""

    transcript: str = Field(description="Transcript text.", min_length=1)
    detail: Optional[DetailLevel] = Field(default=None, description="Summary detail level. Defaults to 'short'.")


class QuestionsRequest(BaseModel):
    """Generate comprehension questions for a transcript."""

    transcript: str = Field(description="Transcript text.", min_length=1)


class ChaptersRequest(BaseModel):
    """Derive chapters from a raw captions payload (no upstream calls)."""

    raw: Any = Field(default=None, description="Raw captions payload as returned by /api/download.")
    youtube_url: str = Field(description="Video URL or bare video ID the chapter links point into.", min_length=1)


class DisplayRequest(BaseModel):
    """Reflow a transcript for display (no upstream calls)."""

    transcript: str = Field(description="Transcript text, SRT or loose.")


# ---------------------------------------------------------------------------
# Response models
# ---------------------------------------------------------------------------


class DownloadResponse(BaseModel):
    """Everything the UI renders after a link is submitted.

    RULES:
    - raw is passed through untouched so clients can re-derive chapters
    - chapters is [] when the payload carries no timing data
    """

    transcript: str = Field(description="Transcript text as picked from the captions payload.")
    raw: Any = Field(default=None, description="Raw captions payload.")
    summary: str = Field(description="AI summary at the requested detail level.")
    display_transcript: str = Field(description="Transcript reflowed for reading.")
    chapters: List[ChapterModel] = Field(description="Up to 15 evenly spaced chapters.")


class SummarizeResponse(BaseModel):
    summary: str = Field(description="AI summary at the requested detail level.")


class QuestionsResponse(BaseModel):
    questions: List[QuestionModel] = Field(description="Validated comprehension questions.")


class ChaptersResponse(BaseModel):
    chapters: List[ChapterModel] = Field(description="Up to 15 evenly spaced chapters.")


class DisplayResponse(BaseModel):
    display_transcript: str = Field(description="Transcript reflowed for reading.")


class FormatInfo(BaseModel):
    """Description of an available output format."""

    key: str = Field(description="Format identifier used in CLI flags.")
    name: str = Field(description="Human-readable format name.")
    suffix: str = Field(description="File suffix produced (e.g. '-chapters.txt').")


class ErrorResponse(BaseModel):
    """Standard error response body.

    RULES:
    - detail is always a human-readable error message
    """

    detail: str = Field(description="Human-readable error description.")


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(description="Service health status.", json_schema_extra={"example": "ok"})
    version: str = Field(description="API version string.", json_schema_extra={"example": "0.1.0"})
