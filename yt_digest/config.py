"""Configuration constants, detail levels, and .env loading.

WHY: Centralizes all configurable values so they are easy to find,
update, and override. Upstream hosts, model names, summary detail
levels and the chapter tuning constants are plain data structures —
not buried in logic.

HOW: python-dotenv loads the .env file on import. Constants are defined
as module-level dicts, tuples, and strings. The load_*_key() functions
provide a clear error when a key is missing.

RULES:
- API keys are loaded from .env via python-dotenv, never hardcoded
- All upstream defaults can be overridden via environment variables
- DETAIL_LEVELS keys are the only accepted summary detail levels
"""

from __future__ import annotations

import os

from dotenv import load_dotenv

# Load .env from the project root (where the script is run from)
load_dotenv()

# ---------------------------------------------------------------------------
# Captions API (RapidAPI)
# ---------------------------------------------------------------------------

RAPIDAPI_YT_HOST = os.getenv(
    "RAPIDAPI_YT_HOST",
    "youtube-captions-transcript-subtitles-video-combiner.p.rapidapi.com",
)
RAPIDAPI_YT_PATH = os.getenv("RAPIDAPI_YT_PATH", "")
"""Optional fixed request path; empty means /download-all/{video_id}."""

HTTP_TIMEOUT_S = float(os.getenv("HTTP_TIMEOUT_S", "60"))

# ---------------------------------------------------------------------------
# LLM API (Gemini)
# ---------------------------------------------------------------------------

GEMINI_BASE_URL = os.getenv(
    "GEMINI_BASE_URL", "https://generativelanguage.googleapis.com/v1beta"
)
GEMINI_MODEL = os.getenv("GEMINI_MODEL", "gemini-2.5-flash-lite")

DETAIL_LEVELS: dict[str, dict] = {
    "short": {
        "instruction": "Summarize very briefly: 1-2 sentences, only the main point, no details.",
        "max_tokens": 120,
    },
    "medium": {
        "instruction": "Write a brief description: 3-4 sentences, to the point, nothing extra.",
        "max_tokens": 220,
    },
    "long": {
        "instruction": (
            "Write a more detailed summary: 5-7 sentences, keep the structure "
            "and the key points."
        ),
        "max_tokens": 360,
    },
}

DEFAULT_DETAIL_LEVEL = os.getenv("DEFAULT_DETAIL_LEVEL", "short")

# ---------------------------------------------------------------------------
# Chapter tuning
# ---------------------------------------------------------------------------

CHAPTER_MIN_TARGET = 8
CHAPTER_MAX_COUNT = 15
CHAPTER_TITLE_MAX_LEN = 110
WATCH_URL_TEMPLATE = "https://www.youtube.com/watch?v={video_id}&t={seconds}s"


def _load_key(name: str, service: str) -> str:
    key = os.getenv(name, "").strip()
    if not key:
        raise ValueError(
            "{} API key not configured. "
            "Add {} to the .env file in the app folder.".format(service, name)
        )
    return key


def load_rapidapi_key() -> str:
    """Load the RapidAPI key used by the captions client.

    RULES:
    - Raises ValueError if RAPIDAPI_KEY is missing or empty
    - Never returns a default/placeholder value
    """
    return _load_key("RAPIDAPI_KEY", "RapidAPI")


def load_gemini_key() -> str:
    """Load the Gemini API key used for summaries and questions.

    RULES:
    - Raises ValueError if GEMINI_API_KEY is missing or empty
    """
    return _load_key("GEMINI_API_KEY", "Gemini")
