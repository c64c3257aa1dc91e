"""Async HTTP client for Gemini summaries and comprehension questions.

WHY: Summaries at three detail levels and multiple-choice questions are
the two things the user asks the LLM for. Both are single
generateContent calls; the interesting part is turning the loosely
formatted model output into something the UI can trust.

HOW: GeminiClient wraps httpx.AsyncClient with the API key header.
summarize_transcript() returns the joined candidate text.
generate_questions() asks for a bare JSON array and runs the reply
through parse_questions(), which strips markdown fences and validates
the array against QUESTIONS_SCHEMA with jsonschema.

RULES:
- Always use the async context manager (async with GeminiClient() as client:)
- Empty transcripts are rejected before any request (ValueError)
- Unknown detail levels fall back to "short"
- Non-2xx responses raise GeminiAPIError; no automatic retry
- Invalid question JSON raises QuestionFormatError
"""

from __future__ import annotations

import json
import logging
import re
from typing import Any, List

import httpx
import jsonschema

from yt_digest.config import (
    DETAIL_LEVELS,
    GEMINI_BASE_URL,
    GEMINI_MODEL,
    HTTP_TIMEOUT_S,
    load_gemini_key,
)
from yt_digest.core.ir import Question

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

_SUMMARY_TEMPERATURE = 0.2
_QUESTIONS_TEMPERATURE = 0.3
_QUESTIONS_MAX_TOKENS = 2000

_FENCE_OPEN_RE = re.compile(r"^\s*```(?:json)?\s*", re.IGNORECASE)
_FENCE_CLOSE_RE = re.compile(r"```\s*$")

QUESTIONS_SCHEMA: dict = {
    "type": "array",
    "items": {
        "type": "object",
        "required": ["question", "options", "correct"],
        "properties": {
            "question": {"type": "string", "minLength": 1},
            "options": {
                "type": "array",
                "items": {"type": "string"},
                "minItems": 3,
                "maxItems": 3,
            },
            "correct": {"type": "integer", "minimum": 0, "maximum": 2},
        },
    },
}

_QUESTIONS_PROMPT = """Based on the provided video transcript, generate 5-10 review questions \
on the topic of the video to check how well the new knowledge was retained. Each question \
must have 3 answer options, exactly one of which is correct. The questions should be varied \
and cover the key points of the transcript.

Return only a plain JSON array of objects, without markdown. Each object has the fields:
- question: string with the question text
- options: array of 3 answer option strings
- correct: number (index of the correct answer: 0, 1 or 2)

Example:
[
  {
    "question": "What main principle is discussed in the video?",
    "options": ["Principle A", "Principle B", "Principle C"],
    "correct": 1
  }
]

Transcript:
"""


class GeminiAPIError(Exception):
    """Raised when the Gemini API fails or returns no usable text.

    RULES:
    - status_code is 0 for transport failures and empty responses
    """

    def __init__(self, status_code: int, message: str) -> None:
        self.status_code = status_code
        self.message = message
        super().__init__(f"Gemini API error {status_code}: {message}")


class QuestionFormatError(ValueError):
    """Raised when the model's question output is not a valid question array."""


# ---------------------------------------------------------------------------
# Response helpers
# ---------------------------------------------------------------------------


def resolve_detail(detail: str | None) -> str:
    """Return ``detail`` if it is a known level, else "short"."""
    return detail if detail in DETAIL_LEVELS else "short"


def extract_text(data: Any, separator: str = "\n") -> str:
    """Join the text parts of the first candidate in a generateContent response."""
    try:
        parts = data["candidates"][0]["content"]["parts"]
    except (KeyError, IndexError, TypeError):
        return ""
    if not isinstance(parts, list):
        return ""
    texts = [part.get("text") for part in parts if isinstance(part, dict)]
    return separator.join(text for text in texts if isinstance(text, str) and text).strip()


def parse_questions(text: str) -> List[Question]:
    """Parse and validate the model's JSON question array.

    RULES:
    - Leading ```json / ``` and trailing ``` fences are removed
    - Every item needs a non-empty question, exactly 3 string options,
      and an integer correct index in 0..2
    - Any violation raises QuestionFormatError
    """
    cleaned = _FENCE_CLOSE_RE.sub("", _FENCE_OPEN_RE.sub("", text, count=1)).strip()
    try:
        data = json.loads(cleaned)
    except ValueError as exc:
        raise QuestionFormatError("Failed to parse questions: {}".format(exc)) from exc
    try:
        jsonschema.validate(instance=data, schema=QUESTIONS_SCHEMA)
    except jsonschema.ValidationError as exc:
        raise QuestionFormatError(
            "Failed to parse questions: invalid question format ({})".format(exc.message)
        ) from exc
    return [
        Question(
            question=item["question"],
            options=list(item["options"]),
            correct=int(item["correct"]),
        )
        for item in data
    ]


# ---------------------------------------------------------------------------
# Client
# ---------------------------------------------------------------------------


class GeminiClient:
    """Async client for the Gemini generateContent endpoint.

    RULES:
    - api_key defaults to load_gemini_key() from .env
    - model defaults to GEMINI_MODEL from config
    - transport is for tests (httpx.MockTransport)
    """

    def __init__(
        self,
        api_key: str | None = None,
        model: str | None = None,
        base_url: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._api_key = api_key or load_gemini_key()
        self._model = model or GEMINI_MODEL
        self._base_url = (base_url or GEMINI_BASE_URL).rstrip("/")
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> GeminiClient:
        self._client = httpx.AsyncClient(
            base_url=self._base_url,
            headers={
                "content-type": "application/json",
                "x-goog-api-key": self._api_key,
            },
            timeout=httpx.Timeout(HTTP_TIMEOUT_S, connect=15.0),
            transport=self._transport,
        )
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:  # noqa: ANN001
        if self._client:
            await self._client.aclose()
            self._client = None

    def _ensure_client(self) -> httpx.AsyncClient:
        """Return the active httpx client, raising if not in context manager."""
        if self._client is None:
            raise RuntimeError(
                "GeminiClient must be used as an async context manager: "
                "async with GeminiClient() as client: ..."
            )
        return self._client

    async def _generate(self, parts: List[str], temperature: float, max_tokens: int) -> dict:
        client = self._ensure_client()
        body = {
            "contents": [{"parts": [{"text": text} for text in parts]}],
            "generationConfig": {
                "temperature": temperature,
                "maxOutputTokens": max_tokens,
            },
        }
        path = "/models/{}:generateContent".format(self._model)
        try:
            resp = await client.post(path, json=body)
        except httpx.HTTPError as exc:
            raise GeminiAPIError(0, "fetch failed: {}".format(exc)) from exc

        if not resp.is_success:
            raise GeminiAPIError(resp.status_code, resp.text)
        try:
            return resp.json()
        except ValueError as exc:
            raise GeminiAPIError(resp.status_code, "response is not JSON") from exc

    async def summarize_transcript(self, transcript: str, detail: str = "short") -> str:
        """Summarize a transcript at the requested detail level.

        Args:
            transcript: Transcript text (SRT or loose).
            detail: "short", "medium" or "long".

        Returns:
            The summary text.

        Raises:
            ValueError: If the transcript is empty.
            GeminiAPIError: On HTTP failure or an empty model reply.
        """
        if not transcript.strip():
            raise ValueError("Transcript is empty, cannot summarize")

        level = DETAIL_LEVELS[resolve_detail(detail)]
        data = await self._generate(
            [
                "{} If the transcript is incomplete, say that there is little data, "
                "but try anyway.".format(level["instruction"]),
                "Transcript:\n{}".format(transcript),
            ],
            temperature=_SUMMARY_TEMPERATURE,
            max_tokens=level["max_tokens"],
        )
        text = extract_text(data, separator="\n")
        if not text:
            raise GeminiAPIError(0, "Gemini response missing text")
        logger.info("Summarized transcript (%s, %d chars)", resolve_detail(detail), len(text))
        return text

    async def generate_questions(self, transcript: str) -> List[Question]:
        """Generate 5–10 three-option comprehension questions for a transcript.

        Raises:
            ValueError: If the transcript is empty.
            GeminiAPIError: On HTTP failure or an empty model reply.
            QuestionFormatError: If the reply is not a valid question array.
        """
        if not transcript.strip():
            raise ValueError("Transcript is empty, cannot generate questions")

        data = await self._generate(
            [_QUESTIONS_PROMPT + transcript],
            temperature=_QUESTIONS_TEMPERATURE,
            max_tokens=_QUESTIONS_MAX_TOKENS,
        )
        text = extract_text(data, separator="")
        if not text:
            raise GeminiAPIError(0, "Gemini response missing text")
        questions = parse_questions(text)
        logger.info("Generated %d questions", len(questions))
        return questions
