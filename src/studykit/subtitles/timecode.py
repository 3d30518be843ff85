"""Timestamp helpers for model-produced "HH:MM:SS" time codes."""

from __future__ import annotations

import re

_FRACTION_RE = re.compile(r"[,.](\d+)$")


def parse_timestamp(text: str) -> float:
    """Convert a time code to seconds.

    Accepts "HH:MM:SS", "MM:SS" or "SS", each optionally followed by a
    ",mmm" or ".mmm" fraction.

    Raises:
        ValueError: If the text is not a time code.
    """
    value = text.strip()
    fraction = 0.0
    match = _FRACTION_RE.search(value)
    if match:
        digits = match.group(1)
        fraction = int(digits) / (10 ** len(digits))
        value = value[: match.start()]

    parts = value.split(":")
    if not 1 <= len(parts) <= 3 or not all(p.strip().isdigit() for p in parts):
        raise ValueError(f"Invalid timestamp: '{text}'")

    seconds = 0
    for part in parts:
        seconds = seconds * 60 + int(part)
    return seconds + fraction


def normalize_srt_timestamp(text: str) -> str:
    """Append a ",000" millisecond part unless the time code already has one."""
    return text if "," in text else f"{text},000"


def format_timestamp(seconds: float) -> str:
    """Format seconds as HH:MM:SS for display."""
    total = int(seconds)
    h, rem = divmod(total, 3600)
    m, s = divmod(rem, 60)
    return f"{h:02d}:{m:02d}:{s:02d}"
