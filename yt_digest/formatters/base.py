"""Abstract base formatter and output container.

WHY: Every output format consumes the same Digest IR but produces
different file content. This base class enforces a consistent interface
so the CLI and HTTP layers can work with any formatter generically.

HOW: BaseFormatter is an ABC with two requirements — a ``name`` property
and a ``format()`` method. FormatterOutput is a plain dataclass that
bundles a file suffix with its content and MIME type.

RULES:
- Subclasses MUST implement ``name`` (human-readable) and ``format()``
- ``format()`` returns a list — empty when the digest lacks the data
  the format needs (e.g. no summary yet)
- ``suffix`` starts with a hyphen, e.g. ``"-chapters.txt"``
- The caller is responsible for prepending the video ID stem
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from yt_digest.core.ir import Digest


@dataclass
class FormatterOutput:
    """One output file produced by a formatter.

    Attributes:
        suffix: File suffix appended to the video ID stem,
                e.g. ``"-transcript.txt"`` → ``"dQw4w9WgXcQ-transcript.txt"``.
        content: The file content.
        media_type: MIME type for the content, e.g. ``"text/html"``.
    """

    suffix: str
    content: str
    media_type: str


class BaseFormatter(ABC):
    """Abstract base for all output formatters.

    To add a new output format:
    1. Create a new file in formatters/
    2. Subclass BaseFormatter
    3. Implement format() and name
    4. Register in FORMATTERS dict in formatters/__init__.py
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable format name, e.g. 'Chapters'."""

    @property
    @abstractmethod
    def suffix(self) -> str:
        """File suffix this formatter writes, e.g. '-chapters.txt'."""

    @abstractmethod
    def format(self, digest: Digest) -> list[FormatterOutput]:
        """Convert the Digest IR into zero or more output files."""
