"""Tests for the FastAPI digest API.

WHY: Validates that every endpoint behaves correctly — happy paths,
validation errors, and upstream failures mapped to the right status.

HOW: FastAPI TestClient for synchronous in-process testing. The
CaptionsClient and GeminiClient classes are patched in the app module;
their async context managers hand back mocks with AsyncMock methods.

RULES:
- The captions API and Gemini are never called
- Each test configures its own upstream mocks
- Derivation endpoints (/api/chapters, /api/display) run unpatched
"""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from fastapi.testclient import TestClient

from yt_digest.api.captions import CaptionsAPIError
from yt_digest.api.gemini import GeminiAPIError, QuestionFormatError
from yt_digest.core.ir import TranscriptResult
from yt_digest.server.app import app

WATCH_URL = "https://www.youtube.com/watch?v=1gI65iIxbXI"


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def captions_cls():
    with patch("yt_digest.server.app.CaptionsClient") as cls:
        yield cls


@pytest.fixture
def gemini_cls():
    with patch("yt_digest.server.app.GeminiClient") as cls:
        yield cls


def _bind(cls, **methods):
    """Make ``async with cls() as c`` yield a mock with the given async methods."""
    instance = MagicMock()
    for name, mock in methods.items():
        setattr(instance, name, mock)
    cls.return_value.__aenter__.return_value = instance
    cls.return_value.__aexit__.return_value = False
    return instance


# ---------------------------------------------------------------------------
# POST /api/download
# ---------------------------------------------------------------------------


class TestDownload:

    def test_happy_path(self, client, captions_cls, gemini_cls, sample_srt, srt_payload):
        captions = _bind(captions_cls, fetch_transcript=AsyncMock(
            return_value=TranscriptResult(transcript=sample_srt, raw=srt_payload)
        ))
        gemini = _bind(gemini_cls, summarize_transcript=AsyncMock(return_value="Sorting, briefly."))

        resp = client.post("/api/download", json={"youtube_url": WATCH_URL, "detail": "medium"})

        assert resp.status_code == 200
        body = resp.json()
        assert body["summary"] == "Sorting, briefly."
        assert body["transcript"] == sample_srt
        assert body["raw"] == srt_payload
        assert body["display_transcript"].startswith("00:00:01,000 --> 00:00:04,000\n")
        assert [c["start"] for c in body["chapters"]] == [1, 4, 3723]
        assert body["chapters"][0]["url"] == WATCH_URL + "&t=1s"
        captions.fetch_transcript.assert_awaited_once_with(WATCH_URL)
        gemini.summarize_transcript.assert_awaited_once_with(sample_srt, "medium")

    def test_default_detail_is_short(self, client, captions_cls, gemini_cls):
        _bind(captions_cls, fetch_transcript=AsyncMock(
            return_value=TranscriptResult(transcript="hello", raw={})
        ))
        gemini = _bind(gemini_cls, summarize_transcript=AsyncMock(return_value="S"))

        resp = client.post("/api/download", json={"youtube_url": WATCH_URL})

        assert resp.status_code == 200
        assert resp.json()["chapters"] == []
        gemini.summarize_transcript.assert_awaited_once_with("hello", "short")

    def test_invalid_url(self, client):
        resp = client.post("/api/download", json={"youtube_url": "not a url"})
        assert resp.status_code == 422

    def test_invalid_detail(self, client):
        resp = client.post("/api/download", json={"youtube_url": WATCH_URL, "detail": "huge"})
        assert resp.status_code == 422

    def test_captions_failure(self, client, captions_cls):
        _bind(captions_cls, fetch_transcript=AsyncMock(side_effect=CaptionsAPIError(429, "quota")))
        resp = client.post("/api/download", json={"youtube_url": WATCH_URL})
        assert resp.status_code == 502
        assert "quota" in resp.json()["detail"]

    def test_missing_captions_key(self, client, captions_cls):
        captions_cls.side_effect = ValueError("RapidAPI API key not configured.")
        resp = client.post("/api/download", json={"youtube_url": WATCH_URL})
        assert resp.status_code == 500
        assert "not configured" in resp.json()["detail"]

    def test_empty_transcript(self, client, captions_cls, gemini_cls):
        _bind(captions_cls, fetch_transcript=AsyncMock(
            return_value=TranscriptResult(transcript="", raw=None)
        ))
        _bind(gemini_cls, summarize_transcript=AsyncMock(
            side_effect=ValueError("Transcript is empty, cannot summarize")
        ))
        resp = client.post("/api/download", json={"youtube_url": WATCH_URL})
        assert resp.status_code == 400


# ---------------------------------------------------------------------------
# POST /api/summarize and /api/questions
# ---------------------------------------------------------------------------


class TestSummarize:

    def test_happy_path(self, client, gemini_cls):
        gemini = _bind(gemini_cls, summarize_transcript=AsyncMock(return_value="Long summary"))
        resp = client.post("/api/summarize", json={"transcript": "text", "detail": "long"})
        assert resp.status_code == 200
        assert resp.json() == {"summary": "Long summary"}
        gemini.summarize_transcript.assert_awaited_once_with("text", "long")

    def test_empty_transcript_rejected(self, client):
        resp = client.post("/api/summarize", json={"transcript": ""})
        assert resp.status_code == 422

    def test_upstream_failure(self, client, gemini_cls):
        _bind(gemini_cls, summarize_transcript=AsyncMock(side_effect=GeminiAPIError(503, "busy")))
        resp = client.post("/api/summarize", json={"transcript": "text"})
        assert resp.status_code == 502


class TestQuestions:

    def test_happy_path(self, client, gemini_cls, sample_questions):
        _bind(gemini_cls, generate_questions=AsyncMock(return_value=sample_questions))
        resp = client.post("/api/questions", json={"transcript": "text"})
        assert resp.status_code == 200
        questions = resp.json()["questions"]
        assert len(questions) == 2
        assert questions[1]["correct"] == 1
        assert questions[0]["options"] == ["Numbers", "Colours", "Nothing"]

    def test_invalid_model_output(self, client, gemini_cls):
        _bind(gemini_cls, generate_questions=AsyncMock(
            side_effect=QuestionFormatError("Failed to parse questions")
        ))
        resp = client.post("/api/questions", json={"transcript": "text"})
        assert resp.status_code == 502
        assert "Failed to parse questions" in resp.json()["detail"]

    def test_missing_gemini_key(self, client, gemini_cls):
        gemini_cls.side_effect = ValueError("Gemini API key not configured.")
        resp = client.post("/api/questions", json={"transcript": "text"})
        assert resp.status_code == 500


# ---------------------------------------------------------------------------
# Derivation endpoints
# ---------------------------------------------------------------------------


class TestChapters:

    def test_from_keyed_payload(self, client, keyed_payload):
        resp = client.post("/api/chapters", json={"raw": keyed_payload, "youtube_url": "1gI65iIxbXI"})
        assert resp.status_code == 200
        chapters = resp.json()["chapters"]
        assert [c["start"] for c in chapters] == [0, 3, 12, 65]
        assert chapters[3]["url"] == "https://www.youtube.com/watch?v=1gI65iIxbXI&t=65s"
        assert chapters[2]["title"] == "First topic"

    def test_no_payload(self, client):
        resp = client.post("/api/chapters", json={"raw": None, "youtube_url": WATCH_URL})
        assert resp.status_code == 200
        assert resp.json() == {"chapters": []}


class TestDisplay:

    def test_loose_text(self, client):
        resp = client.post("/api/display", json={"transcript": "0:05 Hello 0:09 world"})
        assert resp.json() == {"display_transcript": "0:05\nHello\n0:09\nworld"}


class TestFormatsAndHealth:

    def test_formats(self, client):
        resp = client.get("/formats")
        assert resp.status_code == 200
        keys = [f["key"] for f in resp.json()]
        assert keys == sorted(["transcript_text", "chapters", "summary_html", "questions_json"])

    def test_health(self, client):
        resp = client.get("/health")
        assert resp.json() == {"status": "ok", "version": "0.1.0"}
