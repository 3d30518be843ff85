"""Tests for subtitle converter."""

from pathlib import Path

import pysubs2
import pytest

from studykit.subtitles.converter import _format_vtt_time, save_bilingual_vtt, save_subtitles
from studykit.subtitles.srt import SubtitleMode, build_srt


def test_save_vtt_loads_back(tmp_path: Path, kit):
    """VTT output is readable by pysubs2 with matching timings."""
    vtt_path = save_subtitles(kit.subtitles, tmp_path / "test.vtt", SubtitleMode.ORIGINAL, "vtt")
    loaded = pysubs2.load(str(vtt_path))
    assert len(loaded) == len(kit.subtitles)
    assert loaded[0].text == "Good morning."
    assert loaded[1].start == 2500
    assert loaded[1].end == 4000


def test_save_bilingual_ass_keeps_both_lines(tmp_path: Path, kit):
    ass_path = save_subtitles(kit.subtitles, tmp_path / "test.ass", fmt="ass")
    loaded = pysubs2.load(str(ass_path))
    assert loaded[0].text == "Good morning.\\NChào buổi sáng."


def test_save_srt_delegates_to_srt_writer(tmp_path: Path, kit):
    path = save_subtitles(kit.subtitles, tmp_path / "test.srt", SubtitleMode.TRANSLATED)
    assert path.read_text(encoding="utf-8") == build_srt(kit.subtitles, SubtitleMode.TRANSLATED)


def test_save_txt(tmp_path: Path, kit):
    txt_path = save_subtitles(kit.subtitles, tmp_path / "test.txt", SubtitleMode.ORIGINAL, "txt")
    lines = txt_path.read_text(encoding="utf-8").splitlines()
    assert lines == ["Good morning.", "How are you?", "Fine, thanks."]


def test_save_txt_skips_empty(tmp_path: Path, kit):
    """TXT output omits blank lines."""
    from studykit.core.models import Subtitle

    subs = [*kit.subtitles[:1], Subtitle(9, "00:00:08", "00:00:09", "  ", "")]
    txt_path = save_subtitles(subs, tmp_path / "test.txt", SubtitleMode.BILINGUAL, "txt")
    assert len(txt_path.read_text(encoding="utf-8").splitlines()) == 2


def test_bilingual_vtt_positions(tmp_path: Path, kit):
    path = save_bilingual_vtt(kit.subtitles, tmp_path / "bilingual.vtt")
    content = path.read_text(encoding="utf-8")
    assert content.startswith("WEBVTT")
    assert "00:00:01.000 --> 00:00:02.000 line:85%\nGood morning." in content
    assert "00:00:01.000 --> 00:00:02.000 line:5%\nChào buổi sáng." in content
    # Two cues per subtitle
    assert content.count(" --> ") == 2 * len(kit.subtitles)


@pytest.mark.parametrize(
    "seconds, expected",
    [(0, "00:00:00.000"), (2.5, "00:00:02.500"), (3723.004, "01:02:03.004")],
)
def test_format_vtt_time(seconds, expected):
    assert _format_vtt_time(seconds) == expected
