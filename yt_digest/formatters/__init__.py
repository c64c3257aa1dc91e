"""Output formatter registry — pluggable format hub.

WHY: The CLI and HTTP layers need a single lookup to find the right
formatter by name. A central dict makes it trivial to add new formats:
create the formatter class, import it here, add one line.

HOW: FORMATTERS maps string keys to formatter *classes* (not instances).
Callers instantiate as needed: ``formatter = FORMATTERS["chapters"]()``.

RULES:
- Keys are snake_case identifiers (used in CLI flags and API requests)
- Values are BaseFormatter subclasses (not instances)
- Every formatter listed here must be importable without side effects
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from yt_digest.formatters.chapters_text import ChaptersTextFormatter
from yt_digest.formatters.questions_json import QuestionsJSONFormatter
from yt_digest.formatters.summary_html import SummaryHTMLFormatter
from yt_digest.formatters.transcript_text import TranscriptTextFormatter

if TYPE_CHECKING:
    from yt_digest.formatters.base import BaseFormatter

FORMATTERS: dict[str, type[BaseFormatter]] = {
    "transcript_text": TranscriptTextFormatter,
    "chapters": ChaptersTextFormatter,
    "summary_html": SummaryHTMLFormatter,
    "questions_json": QuestionsJSONFormatter,
}
