"""Comprehension question formatter — validated JSON array.

HOW: Serializes the digest's questions and re-validates the result
against QUESTIONS_SCHEMA with jsonschema before returning, so a saved
file can always be loaded back by parse_questions().

RULES:
- Pretty-printed (indent 2), non-ASCII kept as-is
- No questions → no file
"""

from __future__ import annotations

import json
from typing import List

import jsonschema

from yt_digest.api.gemini import QUESTIONS_SCHEMA
from yt_digest.core.ir import Digest
from yt_digest.formatters.base import BaseFormatter, FormatterOutput


class QuestionsJSONFormatter(BaseFormatter):
    """Writes the generated questions as JSON."""

    @property
    def name(self) -> str:
        return "Questions JSON"

    @property
    def suffix(self) -> str:
        return "-questions.json"

    def format(self, digest: Digest) -> List[FormatterOutput]:
        """Serialize the questions.

        Raises:
            jsonschema.ValidationError: If a question was built by hand
                with the wrong number of options or a bad index.
        """
        if not digest.questions:
            return []
        data = [question.to_dict() for question in digest.questions]
        jsonschema.validate(instance=data, schema=QUESTIONS_SCHEMA)
        content = json.dumps(data, indent=2, ensure_ascii=False) + "\n"
        return [FormatterOutput(suffix=self.suffix, content=content, media_type="application/json")]
