"""Command-line interface for the YouTube digest pipeline.

WHY: Users want a digest of a video without opening the web UI, and
scripts want the output files. The CLI wires together the captions
fetch, the optional summary and questions, and the pluggable
formatters behind a single command.

HOW: Uses argparse to accept the URL, detail level, question toggle,
format selection and output directory. Runs the async pipeline via
asyncio.run(). Status messages go to stderr; output files are saved to
--output-dir (default: current directory) as {video_id}{suffix}.

RULES:
- Positional argument: YouTube URL or bare video ID
- --formats: comma-separated formatter keys (default: all registered)
- Formatters with nothing to write (no summary, no questions) are skipped
- Output naming: {video_id}{suffix}, numeric suffix for conflicts
- Status output goes to stderr (not stdout)
- Exit code 1 on any error, 130 on Ctrl-C
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import List, Optional

from yt_digest.api.captions import CaptionsClient, pick_video_id
from yt_digest.api.gemini import GeminiClient
from yt_digest.config import DEFAULT_DETAIL_LEVEL, DETAIL_LEVELS
from yt_digest.core.ir import Digest
from yt_digest.formatters import FORMATTERS
from yt_digest.formatters.base import FormatterOutput

logger = logging.getLogger(__name__)


def _status(msg: str) -> None:
    """Print a status message to stderr, flushed immediately."""
    print(msg, file=sys.stderr, flush=True)


def _fail(msg: str) -> None:
    print("Error: {}".format(msg), file=sys.stderr)
    sys.exit(1)


def _save_output(output: FormatterOutput, stem: str, output_dir: Path) -> Path:
    """Save a formatter output file, avoiding name conflicts.

    RULES:
    - Base filename: {stem}{suffix}
    - On conflict: {stem}{suffix_base}-2{ext}, -3, ... until free
    """
    target = output_dir / "{}{}".format(stem, output.suffix)
    if target.exists():
        suffix_path = Path(output.suffix)
        base, ext = suffix_path.stem, suffix_path.suffix
        counter = 2
        while target.exists():
            target = output_dir / "{}{}-{}{}".format(stem, base, counter, ext)
            counter += 1
    target.write_text(output.content, encoding="utf-8")
    return target


def _parse_formats(value: Optional[str]) -> List[str]:
    if not value:
        return list(FORMATTERS.keys())
    keys = [key.strip() for key in value.split(",") if key.strip()]
    for key in keys:
        if key not in FORMATTERS:
            available = ", ".join(sorted(FORMATTERS.keys()))
            _fail("Unknown format '{}'. Available formats: {}".format(key, available))
    return keys


async def _build_digest(args: argparse.Namespace) -> Digest:
    """Fetch captions and run the requested LLM steps."""
    async with CaptionsClient() as captions:
        result = await captions.fetch_transcript(args.url, on_status=_status)

    digest = Digest(
        source_url=args.url,
        video_id=pick_video_id(args.url),
        result=result,
        detail=args.detail,
    )
    if not result.transcript.strip():
        _status("  Captions payload has no transcript text.")
        return digest

    if args.summary or args.questions:
        async with GeminiClient() as gemini:
            if args.summary:
                _status("Summarizing ({})...".format(args.detail))
                digest.summary = await gemini.summarize_transcript(result.transcript, args.detail)
            if args.questions:
                _status("Generating questions...")
                digest.questions = await gemini.generate_questions(result.transcript)
                _status("  {} questions".format(len(digest.questions)))
    return digest


async def _run_pipeline(args: argparse.Namespace) -> None:
    """Run the digest pipeline end to end and save the requested formats."""
    output_dir = Path(args.output_dir).resolve() if args.output_dir else Path.cwd()
    if not output_dir.is_dir():
        _fail("Output directory does not exist: {}".format(output_dir))

    format_keys = _parse_formats(args.formats)

    try:
        digest = await _build_digest(args)
    except Exception as e:
        # Missing API keys, upstream HTTP errors, invalid question output
        logger.debug("Pipeline failed", exc_info=True)
        _fail(str(e))

    _status("Formatting output...")
    saved_files: List[Path] = []
    for key in format_keys:
        formatter = FORMATTERS[key]()
        outputs = formatter.format(digest)
        if not outputs:
            _status("  {}: nothing to write".format(formatter.name))
            continue
        for output in outputs:
            saved_path = _save_output(output, digest.video_id, output_dir)
            saved_files.append(saved_path)
            _status("  Saved: {}".format(saved_path.name))

    _status("")
    _status("Done! Saved {} file(s) to {}".format(len(saved_files), output_dir))


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="yt_digest",
        description="Fetch a YouTube video's transcript and produce a readable "
                    "transcript, chapters, an AI summary and comprehension questions.",
    )

    parser.add_argument(
        "url",
        help="YouTube URL (watch, youtu.be, shorts, embed) or bare video ID.",
    )

    parser.add_argument(
        "--detail",
        choices=sorted(DETAIL_LEVELS.keys()),
        default=DEFAULT_DETAIL_LEVEL if DEFAULT_DETAIL_LEVEL in DETAIL_LEVELS else "short",
        help="Summary detail level (default: %(default)s).",
    )

    parser.add_argument(
        "--summary",
        action=argparse.BooleanOptionalAction,
        default=True,
        help="Generate an AI summary (default: %(default)s).",
    )

    parser.add_argument(
        "--questions",
        action="store_true",
        help="Also generate multiple-choice comprehension questions.",
    )

    parser.add_argument(
        "--formats",
        default=None,
        help="Comma-separated list of output formats. "
             "Available: {}. Default: all.".format(", ".join(sorted(FORMATTERS.keys()))),
    )

    parser.add_argument(
        "--output-dir",
        default=None,
        help="Directory to save output files (default: current directory).",
    )

    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging.",
    )

    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """Entry point for ``python -m yt_digest`` and the yt-digest script.

    RULES:
    - argv=None means use sys.argv (normal CLI invocation)
    - Explicit argv is for testing
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    try:
        asyncio.run(_run_pipeline(args))
    except KeyboardInterrupt:
        _status("\nCancelled by user.")
        sys.exit(130)


if __name__ == "__main__":
    main()
