"""Subtitle conversion utilities.

SRT files are written verbatim by ``studykit.subtitles.srt``. This module
handles the other formats through pysubs2:
- Saving study kit subtitles as VTT, ASS or plain text
- A bilingual VTT with the original at the bottom and the translation on top
"""

from __future__ import annotations

from pathlib import Path

import pysubs2

from studykit.core.models import Subtitle
from studykit.subtitles.srt import SubtitleMode, save_srt, subtitle_lines


def save_subtitles(
    subtitles: list[Subtitle],
    path: Path,
    mode: SubtitleMode = SubtitleMode.BILINGUAL,
    fmt: str = "srt",
) -> Path:
    """Save study kit subtitles to a subtitle file.

    Args:
        subtitles: Subtitles to save.
        path: Output file path.
        mode: Which text to include (bilingual, original, translated).
        fmt: Format — "srt", "vtt", "ass", or "txt".

    Returns:
        The path the file was written to.
    """
    path = Path(path)
    mode = SubtitleMode(mode)

    if fmt == "srt":
        return save_srt(subtitles, path, mode)

    path.parent.mkdir(parents=True, exist_ok=True)
    if fmt == "txt":
        text = "\n".join(
            line for sub in subtitles for line in subtitle_lines(sub, mode) if line.strip()
        )
        path.write_text(text, encoding="utf-8")
        return path

    subs = pysubs2.SSAFile()
    for sub in subtitles:
        subs.events.append(
            pysubs2.SSAEvent(
                start=pysubs2.make_time(s=sub.start),
                end=pysubs2.make_time(s=sub.end),
                text="\\N".join(subtitle_lines(sub, mode)),
            )
        )
    subs.save(str(path), format_=fmt)
    return path


def save_bilingual_vtt(subtitles: list[Subtitle], path: Path) -> Path:
    """Save bilingual subtitles as a single VTT with positioning.

    Original text at bottom (line:85%), translated text at top (line:5%).
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    lines = ["WEBVTT", ""]
    for i, sub in enumerate(subtitles, 1):
        start = _format_vtt_time(sub.start)
        end = _format_vtt_time(sub.end)

        # Original at bottom
        lines.append(str(i * 2 - 1))
        lines.append(f"{start} --> {end} line:85%")
        lines.append(sub.text_original)
        lines.append("")

        # Translation at top
        lines.append(str(i * 2))
        lines.append(f"{start} --> {end} line:5%")
        lines.append(sub.text_translated)
        lines.append("")

    path.write_text("\n".join(lines), encoding="utf-8")
    return path


def _format_vtt_time(seconds: float) -> str:
    """Format seconds as VTT timestamp (HH:MM:SS.mmm)."""
    total_ms = int(round(seconds * 1000))
    h, rem = divmod(total_ms, 3_600_000)
    m, rem = divmod(rem, 60_000)
    s, ms = divmod(rem, 1000)
    return f"{h:02d}:{m:02d}:{s:02d}.{ms:03d}"
