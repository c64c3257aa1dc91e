"""Async HTTP client for the RapidAPI YouTube captions service.

WHY: Everything downstream needs the captions for a video: the display
formatter needs the transcript text, the chapter builder needs the raw
payload with timing data, the LLM needs the text again. This module
hides the RapidAPI details behind one call that returns both.

HOW: Uses httpx.AsyncClient for non-blocking HTTP. CaptionsClient is an
async context manager — enter it to get a client carrying the RapidAPI
headers, exit to close the connection pool. fetch_transcript() resolves
the video ID, GETs the payload, and picks the transcript text out of it.

RULES:
- Always use the async context manager (async with CaptionsClient() as client:)
- Subtitles are requested as SRT inside a JSON answer
- Non-2xx responses raise CaptionsAPIError; no automatic retry
- The raw payload is returned untouched for the core extractor
"""

from __future__ import annotations

import json
import logging
import re
from collections.abc import Callable
from typing import Any
from urllib.parse import quote, urlsplit

import httpx

from yt_digest.config import (
    HTTP_TIMEOUT_S,
    RAPIDAPI_YT_HOST,
    RAPIDAPI_YT_PATH,
    load_rapidapi_key,
)
from yt_digest.core.extractor import find_srt_string
from yt_digest.core.ir import TranscriptResult

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

_VIDEO_ID_RE = re.compile(r"(?:v=|youtu\.be/|youtube\.com/shorts/|embed/)([a-zA-Z0-9_-]{6,})")

_TRANSCRIPT_KEYS = ("transcript", "caption", "captions", "text", "answer")
_NESTED_KEYS = ("data", "result")
_MAX_NESTING = 3
_PREVIEW_MAX_CHARS = 5000

_DEFAULT_QUERY = {"format_subtitle": "srt", "format_answer": "json"}


class CaptionsAPIError(Exception):
    """Raised when the captions API cannot be reached or returns an error.

    RULES:
    - status_code is 0 for transport failures (DNS, timeout, refused)
    - message is the response body text or the transport error
    """

    def __init__(self, status_code: int, message: str) -> None:
        self.status_code = status_code
        self.message = message
        super().__init__(f"Captions API error {status_code}: {message}")


# ---------------------------------------------------------------------------
# Payload helpers
# ---------------------------------------------------------------------------


def pick_video_id(url: str) -> str:
    """Extract the video ID from a YouTube URL, or return the input as-is.

    RULES:
    - watch?v=, youtu.be/, shorts/ and embed/ forms are recognised
    - Other absolute URLs fall back to their last path segment
    - Anything else is assumed to already be a bare video ID
    """
    url = url.strip()
    match = _VIDEO_ID_RE.search(url)
    if match:
        return match.group(1)
    parts = urlsplit(url)
    if parts.scheme and parts.netloc:
        segments = [segment for segment in parts.path.split("/") if segment]
        if segments:
            return segments[-1]
    return url


def _join_entries(entries: list) -> str:
    lines = []
    for entry in entries:
        if isinstance(entry, str):
            lines.append(entry)
        elif isinstance(entry, dict):
            for key in ("text", "caption"):
                if isinstance(entry.get(key), str):
                    lines.append(entry[key])
                    break
    return "\n".join(line for line in lines if line)


def _find_transcript(payload: Any, depth: int) -> str:
    if not isinstance(payload, dict):
        return ""
    for key in _TRANSCRIPT_KEYS:
        value = payload.get(key)
        if isinstance(value, str) and value.strip():
            return value.strip()
        if isinstance(value, list):
            joined = _join_entries(value)
            if joined.strip():
                return joined
    if depth <= 0:
        return ""
    for key in _NESTED_KEYS:
        nested = payload.get(key)
        if nested is not None and nested is not payload:
            found = _find_transcript(nested, depth - 1)
            if found:
                return found
    return ""


def pick_transcript(payload: Any) -> str:
    """Pick the transcript text out of a captions payload.

    HOW: Probe the known text fields (strings win outright, arrays are
    joined line by line), then the ``data``/``result`` wrappers, then any
    SRT string the extractor can find. When nothing matches, fall back
    to a pretty-printed preview so the user sees what came back.

    RULES:
    - None or empty payloads return ""
    - The preview is capped at 5000 characters
    """
    if not payload:
        return ""
    found = _find_transcript(payload, _MAX_NESTING)
    if found:
        return found
    srt = find_srt_string(payload)
    if srt is not None:
        return srt.value.strip()
    logger.warning("No transcript field in captions payload; using JSON preview")
    try:
        preview = json.dumps(payload, indent=2, ensure_ascii=False)
    except (TypeError, ValueError):
        return ""
    if len(preview) > _PREVIEW_MAX_CHARS:
        return preview[:_PREVIEW_MAX_CHARS] + "\n..."
    return preview


# ---------------------------------------------------------------------------
# Client
# ---------------------------------------------------------------------------


class CaptionsClient:
    """Async client for the YouTube captions API on RapidAPI.

    HOW: Wraps httpx.AsyncClient with the RapidAPI key/host headers.
    Use as an async context manager so the connection pool is closed.

    RULES:
    - api_key defaults to load_rapidapi_key() from .env
    - host defaults to RAPIDAPI_YT_HOST from config
    - path overrides the per-video /download-all/{id} path when set
    - transport is for tests (httpx.MockTransport)
    """

    def __init__(
        self,
        api_key: str | None = None,
        host: str | None = None,
        path: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._api_key = api_key or load_rapidapi_key()
        self._host = host or RAPIDAPI_YT_HOST
        self._path = path if path is not None else RAPIDAPI_YT_PATH
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> CaptionsClient:
        self._client = httpx.AsyncClient(
            base_url="https://{}".format(self._host),
            headers={
                "content-type": "application/json",
                "x-rapidapi-key": self._api_key,
                "x-rapidapi-host": self._host,
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
                "CaptionsClient must be used as an async context manager: "
                "async with CaptionsClient() as client: ..."
            )
        return self._client

    def _request_path(self, video_id: str) -> str:
        if self._path:
            return self._path
        return "/download-all/{}".format(quote(video_id, safe=""))

    async def fetch_transcript(
        self,
        youtube_url: str,
        on_status: Callable[[str], None] | None = None,
    ) -> TranscriptResult:
        """Fetch captions for a video and return transcript text plus raw payload.

        Args:
            youtube_url: A YouTube URL in any supported form, or a bare ID.
            on_status: Optional callback for status updates.

        Returns:
            TranscriptResult with the picked transcript and the raw payload.

        Raises:
            CaptionsAPIError: On transport failure, non-2xx status, or a
                              response body that is not JSON.
        """
        client = self._ensure_client()
        video_id = pick_video_id(youtube_url)
        path = self._request_path(video_id)
        if on_status:
            on_status("Fetching captions for {}...".format(video_id))

        try:
            resp = await client.get(path, params=_DEFAULT_QUERY)
        except httpx.HTTPError as exc:
            raise CaptionsAPIError(0, "request to {}{} failed: {}".format(self._host, path, exc)) from exc

        if not resp.is_success:
            raise CaptionsAPIError(resp.status_code, resp.text)

        try:
            data = resp.json()
        except ValueError as exc:
            raise CaptionsAPIError(resp.status_code, "response is not JSON") from exc

        logger.info("Fetched captions payload for %s", video_id)
        return TranscriptResult(transcript=pick_transcript(data), raw=data)
