"""YouTube digest — transcripts, chapters, summaries and quizzes for a video link.

WHY: A pasted YouTube link should turn into something readable: a clean
transcript, a short list of clickable chapters, an AI summary at a
chosen detail level, and a handful of comprehension questions.

HOW: Three-stage pipeline — fetch (captions API + LLM clients), derive
(core normalization and chapter building), format (pluggable
formatters). The core never performs I/O and never raises on malformed
captions payloads.

RULES:
- All formatters consume the same Digest IR
- Core functions are pure: same input, same output
- Upstream failures surface as typed exceptions from the api package
"""

__version__ = "0.1.0"
