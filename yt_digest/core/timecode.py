"""Conversions between seconds and textual timecodes.

WHY: Caption payloads carry times in every imaginable form — float
seconds, numeric strings, ``MM:SS``, ``HH:MM:SS,mmm``. Chapters and the
display formatter need one tolerant reader and one stable writer.

HOW: parse_timecode splits on colons and left-pads to three parts;
pick_seconds dispatches on the value's type; format_clock renders a
compact clock.

RULES:
- One timecode grammar for the whole package: ``[[H:]M:]S[.,frac]``
- Missing higher units are zero ("05" is five seconds)
- Unparseable input returns None, never raises
- Digit-group underscores ("1_000") are not numbers here
- format_clock floors and clamps negatives to zero
"""

from __future__ import annotations

import math
from typing import Any, Optional


def parse_timecode(text: str) -> Optional[float]:
    """Parse ``H:MM:SS``, ``MM:SS`` or ``SS`` with optional fraction into seconds.

    A ``,`` fraction separator (SRT style) is treated like ``.``.
    Returns None when any component or the total is not a finite number.
    """
    if not isinstance(text, str):
        return None
    parts = text.strip().replace(",", ".").split(":")
    if len(parts) > 3:
        return None

    values = []
    for part in parts:
        if "_" in part:
            return None
        try:
            value = float(part)
        except ValueError:
            return None
        if not math.isfinite(value):
            return None
        values.append(value)

    while len(values) < 3:
        values.insert(0, 0.0)
    hours, minutes, seconds = values
    total = hours * 3600 + minutes * 60 + seconds
    return total if math.isfinite(total) else None


def format_clock(seconds: float) -> str:
    """Render seconds as ``H:MM:SS`` (with hours) or ``M:SS`` (without)."""
    total = max(0, math.floor(seconds))
    hours, rest = divmod(total, 3600)
    minutes, secs = divmod(rest, 60)
    if hours > 0:
        return "{}:{:02d}:{:02d}".format(hours, minutes, secs)
    return "{}:{:02d}".format(minutes, secs)


def pick_seconds(value: Any) -> Optional[float]:
    """Coerce a caption time field into seconds.

    Accepts a finite number, a colon-delimited timecode string, or a
    plain numeric string. Anything else (None, bool, free text) is None.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value) if math.isfinite(value) else None
    if isinstance(value, str):
        if ":" in value:
            return parse_timecode(value)
        if "_" in value:
            return None
        try:
            number = float(value)
        except ValueError:
            return None
        return number if math.isfinite(number) else None
    return None
