"""SRT export of study kit subtitles.

Each block is ``<index>\\n<start> --> <end>\\n<text line(s)>\\n\\n``. The
model's time codes are written as-is, only gaining a ",000" millisecond
part when they have none.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path

from studykit.core.models import Subtitle
from studykit.subtitles.timecode import normalize_srt_timestamp


class SubtitleMode(str, Enum):
    BILINGUAL = "bilingual"
    ORIGINAL = "original"
    TRANSLATED = "translated"


def subtitle_lines(sub: Subtitle, mode: SubtitleMode) -> list[str]:
    """Text lines shown for a subtitle in the given mode."""
    if mode == SubtitleMode.BILINGUAL:
        return [sub.text_original, sub.text_translated]
    if mode == SubtitleMode.ORIGINAL:
        return [sub.text_original]
    return [sub.text_translated]


def build_srt(subtitles: list[Subtitle], mode: SubtitleMode = SubtitleMode.BILINGUAL) -> str:
    """Render subtitles as SRT text, numbered from 1 in list order."""
    mode = SubtitleMode(mode)
    blocks = []
    for index, sub in enumerate(subtitles, 1):
        start = normalize_srt_timestamp(sub.start_time)
        end = normalize_srt_timestamp(sub.end_time)
        text = "\n".join(subtitle_lines(sub, mode))
        blocks.append(f"{index}\n{start} --> {end}\n{text}\n\n")
    return "".join(blocks)


def srt_filename(stem: str, mode: SubtitleMode) -> str:
    return f"{stem}_{SubtitleMode(mode).value}.srt"


def save_srt(
    subtitles: list[Subtitle],
    path: Path,
    mode: SubtitleMode = SubtitleMode.BILINGUAL,
) -> Path:
    """Write an SRT file, creating parent directories as needed."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(build_srt(subtitles, mode), encoding="utf-8")
    return path
