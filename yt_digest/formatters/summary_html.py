"""Printable HTML summary formatter.

WHY: Users want to keep or print the summary. A small self-contained
HTML page prints cleanly from any browser ("Save as PDF") without a
PDF library.

HOW: Fills a fixed template with the title, the source URL and the
summary text in a ``<pre>`` block so line breaks survive.

RULES:
- Every interpolated value is HTML-escaped (quotes included)
- No summary → no file
"""

from __future__ import annotations

import html
from typing import List

from yt_digest.core.ir import Digest
from yt_digest.formatters.base import BaseFormatter, FormatterOutput

DEFAULT_TITLE = "YouTube Summary"

_TEMPLATE = """<!doctype html>
<html lang="en">
  <head>
    <meta charset="utf-8" />
    <title>{title}</title>
    <style>
      body {{ font-family: "Inter", "Segoe UI", Arial, sans-serif; margin: 32px; color: #0f172a; }}
      h1 {{ font-size: 22px; margin: 0 0 6px; }}
      .meta {{ font-size: 12px; color: #475569; margin-bottom: 16px; word-break: break-all; }}
      pre {{ white-space: pre-wrap; font-family: "JetBrains Mono", "Courier New", monospace; font-size: 12px; line-height: 1.6; }}
    </style>
  </head>
  <body>
    <h1>{title}</h1>
    <div class="meta">{url}</div>
    <pre>{body}</pre>
  </body>
</html>
"""


def build_summary_html(title: str, source_url: str, text: str) -> str:
    """Render the printable page for a summary."""
    return _TEMPLATE.format(
        title=html.escape(title, quote=True),
        url=html.escape(source_url, quote=True),
        body=html.escape(text, quote=True),
    )


class SummaryHTMLFormatter(BaseFormatter):
    """Writes the summary as a printable HTML page."""

    @property
    def name(self) -> str:
        return "Summary HTML"

    @property
    def suffix(self) -> str:
        return "-summary.html"

    def format(self, digest: Digest) -> List[FormatterOutput]:
        summary = (digest.summary or "").strip()
        if not summary:
            return []
        page = build_summary_html(DEFAULT_TITLE, digest.source_url, summary)
        return [FormatterOutput(suffix=self.suffix, content=page, media_type="text/html")]
