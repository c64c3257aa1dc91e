"""Upstream API client package — captions fetch and LLM generation.

WHY: The core derivation code must stay free of I/O. Everything that
talks to the network lives here, behind two async clients.

HOW: Uses httpx.AsyncClient for non-blocking HTTP. CaptionsClient talks
to the RapidAPI captions service; GeminiClient talks to Gemini.

RULES:
- All HTTP calls go through these clients (no direct httpx usage elsewhere)
- Keys come from config (.env), never from call sites
- Failures raise typed exceptions; nothing here retries
"""

from yt_digest.api.captions import CaptionsAPIError, CaptionsClient, pick_transcript, pick_video_id
from yt_digest.api.gemini import GeminiAPIError, GeminiClient, QuestionFormatError, parse_questions

__all__ = [
    "CaptionsAPIError",
    "CaptionsClient",
    "GeminiAPIError",
    "GeminiClient",
    "QuestionFormatError",
    "parse_questions",
    "pick_transcript",
    "pick_video_id",
]
