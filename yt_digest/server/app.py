"""FastAPI application with digest API routes and OpenAPI docs.

WHY: The web UI (and curl, and anything else) needs an HTTP API to turn
a YouTube link into a transcript, summary, chapters and questions.
FastAPI provides request validation and automatic OpenAPI docs.

HOW: A single FastAPI app exposes the routes grouped by tags. Upstream
routes (/api/download, /api/summarize, /api/questions) open the async
API clients per request; derivation routes (/api/chapters,
/api/display) call the pure core directly.

RULES:
- Request validation errors are FastAPI's default 422
- Missing API keys → 500; upstream failures → 502; empty transcript → 400
- Error responses use the ErrorResponse schema
- Nothing is persisted between requests
"""

from __future__ import annotations

import logging
from typing import List

from fastapi import FastAPI, HTTPException

from yt_digest import __version__
from yt_digest.api.captions import CaptionsAPIError, CaptionsClient
from yt_digest.api.gemini import GeminiAPIError, GeminiClient, QuestionFormatError
from yt_digest.config import DEFAULT_DETAIL_LEVEL
from yt_digest.core.chapters import build_chapters
from yt_digest.core.display import format_transcript_for_display
from yt_digest.core.extractor import extract_caption_items
from yt_digest.core.ir import Chapter
from yt_digest.formatters import FORMATTERS
from yt_digest.server.models import (
    ChapterModel,
    ChaptersRequest,
    ChaptersResponse,
    DisplayRequest,
    DisplayResponse,
    DownloadRequest,
    DownloadResponse,
    ErrorResponse,
    FormatInfo,
    HealthResponse,
    QuestionModel,
    QuestionsRequest,
    QuestionsResponse,
    SummarizeRequest,
    SummarizeResponse,
)

logger = logging.getLogger(__name__)

app = FastAPI(
    title="YouTube Digest API",
    description=(
        "Turn a YouTube link into a transcript, an AI summary at a chosen "
        "detail level, multiple-choice comprehension questions, and a list "
        "of clickable chapters."
    ),
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
)

_UPSTREAM_ERRORS = {
    500: {"model": ErrorResponse, "description": "API key not configured"},
    502: {"model": ErrorResponse, "description": "Captions or LLM service failed"},
}


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _open_captions_client() -> CaptionsClient:
    """Create a CaptionsClient, turning a missing key into a 500."""
    try:
        return CaptionsClient()
    except ValueError as exc:
        raise HTTPException(status_code=500, detail=str(exc))


def _open_gemini_client() -> GeminiClient:
    """Create a GeminiClient, turning a missing key into a 500."""
    try:
        return GeminiClient()
    except ValueError as exc:
        raise HTTPException(status_code=500, detail=str(exc))


def _resolve_detail(detail) -> str:  # noqa: ANN001
    return detail.value if detail is not None else DEFAULT_DETAIL_LEVEL


def _chapters_to_models(chapters: List[Chapter]) -> List[ChapterModel]:
    return [ChapterModel(**chapter.to_dict()) for chapter in chapters]


async def _summarize(transcript: str, detail: str) -> str:
    """Run the summarizer, mapping failures to HTTP errors."""
    try:
        async with _open_gemini_client() as client:
            return await client.summarize_transcript(transcript, detail)
    except GeminiAPIError as exc:
        logger.exception("Summarization failed")
        raise HTTPException(status_code=502, detail=str(exc))
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc))


# ---------------------------------------------------------------------------
# Endpoints: Digest
# ---------------------------------------------------------------------------


@app.post(
    "/api/download",
    response_model=DownloadResponse,
    tags=["digest"],
    summary="Fetch captions and summarize",
    description=(
        "Fetch the captions for a YouTube video, summarize them at the "
        "requested detail level, and derive display text and chapters."
    ),
    responses={400: {"model": ErrorResponse, "description": "Empty transcript"}, **_UPSTREAM_ERRORS},
)
async def download(body: DownloadRequest) -> DownloadResponse:
    youtube_url = str(body.youtube_url)
    detail = _resolve_detail(body.detail)

    try:
        async with _open_captions_client() as client:
            result = await client.fetch_transcript(youtube_url)
    except CaptionsAPIError as exc:
        logger.exception("Captions fetch failed for %s", youtube_url)
        raise HTTPException(status_code=502, detail=str(exc))

    summary = await _summarize(result.transcript, detail)
    chapters = build_chapters(extract_caption_items(result.raw), youtube_url)

    return DownloadResponse(
        transcript=result.transcript,
        raw=result.raw,
        summary=summary,
        display_transcript=format_transcript_for_display(result.transcript),
        chapters=_chapters_to_models(chapters),
    )


@app.post(
    "/api/summarize",
    response_model=SummarizeResponse,
    tags=["digest"],
    summary="Summarize a transcript",
    description="Re-summarize an already fetched transcript, e.g. after the user changes the detail level.",
    responses={400: {"model": ErrorResponse, "description": "Empty transcript"}, **_UPSTREAM_ERRORS},
)
async def summarize(body: SummarizeRequest) -> SummarizeResponse:
    summary = await _summarize(body.transcript, _resolve_detail(body.detail))
    return SummarizeResponse(summary=summary)


@app.post(
    "/api/questions",
    response_model=QuestionsResponse,
    tags=["digest"],
    summary="Generate comprehension questions",
    description="Generate 5-10 three-option multiple-choice questions about the transcript.",
    responses={400: {"model": ErrorResponse, "description": "Empty transcript"}, **_UPSTREAM_ERRORS},
)
async def questions(body: QuestionsRequest) -> QuestionsResponse:
    try:
        async with _open_gemini_client() as client:
            generated = await client.generate_questions(body.transcript)
    except (GeminiAPIError, QuestionFormatError) as exc:
        logger.exception("Question generation failed")
        raise HTTPException(status_code=502, detail=str(exc))
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc))

    return QuestionsResponse(questions=[QuestionModel(**q.to_dict()) for q in generated])


# ---------------------------------------------------------------------------
# Endpoints: Derivation (no upstream calls)
# ---------------------------------------------------------------------------


@app.post(
    "/api/chapters",
    response_model=ChaptersResponse,
    tags=["derive"],
    summary="Derive chapters from a captions payload",
    description=(
        "Discover timed captions in a raw payload of any shape and sample "
        "them into at most 15 chapters with deep links."
    ),
)
async def chapters(body: ChaptersRequest) -> ChaptersResponse:
    derived = build_chapters(extract_caption_items(body.raw), body.youtube_url)
    return ChaptersResponse(chapters=_chapters_to_models(derived))


@app.post(
    "/api/display",
    response_model=DisplayResponse,
    tags=["derive"],
    summary="Reflow a transcript for reading",
)
async def display(body: DisplayRequest) -> DisplayResponse:
    return DisplayResponse(display_transcript=format_transcript_for_display(body.transcript))


# ---------------------------------------------------------------------------
# Endpoints: Formats & health
# ---------------------------------------------------------------------------


@app.get(
    "/formats",
    response_model=List[FormatInfo],
    tags=["formats"],
    summary="List available output formats",
)
async def list_formats() -> List[FormatInfo]:
    result = []
    for key, formatter_cls in sorted(FORMATTERS.items()):
        formatter = formatter_cls()
        result.append(FormatInfo(key=key, name=formatter.name, suffix=formatter.suffix))
    return result


@app.get(
    "/health",
    response_model=HealthResponse,
    tags=["health"],
    summary="Health check",
    description="Liveness check for load balancers and orchestrators.",
)
async def health_check() -> HealthResponse:
    return HealthResponse(status="ok", version=__version__)


def run_api():
    """Entry point for the yt-digest-api console script."""
    import uvicorn

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    uvicorn.run(app, host="0.0.0.0", port=8000)
