"""Tests for SRT export."""

from studykit.core.models import Subtitle
from studykit.subtitles.srt import SubtitleMode, build_srt, save_srt, srt_filename


class TestBuildSrt:
    def test_bilingual_block_layout(self, kit):
        srt = build_srt(kit.subtitles[:1], SubtitleMode.BILINGUAL)
        assert srt == "1\n00:00:01,000 --> 00:00:02,000\nGood morning.\nChào buổi sáng.\n\n"

    def test_original_has_no_translation(self, kit):
        srt = build_srt(kit.subtitles, SubtitleMode.ORIGINAL)
        blocks = srt.strip().split("\n\n")
        assert len(blocks) == len(kit.subtitles)
        for sub in kit.subtitles:
            assert sub.text_original in srt
            assert sub.text_translated not in srt

    def test_translated_only(self, kit):
        srt = build_srt(kit.subtitles, SubtitleMode.TRANSLATED)
        assert "Bạn khỏe không?" in srt
        assert "How are you?" not in srt

    def test_existing_milliseconds_kept(self, kit):
        srt = build_srt(kit.subtitles, SubtitleMode.ORIGINAL)
        assert "00:00:02,500 --> 00:00:04,000" in srt

    def test_numbered_in_list_order(self):
        subs = [
            Subtitle(10, "00:00:05", "00:00:06", "b", "B"),
            Subtitle(3, "00:00:01", "00:00:02", "a", "A"),
        ]
        blocks = build_srt(subs, "original").strip().split("\n\n")
        assert blocks[0].startswith("1\n00:00:05,000")
        assert blocks[1].startswith("2\n00:00:01,000")

    def test_empty(self):
        assert build_srt([]) == ""


def test_srt_filename():
    assert srt_filename("lesson", SubtitleMode.BILINGUAL) == "lesson_bilingual.srt"
    assert srt_filename("lesson", "translated") == "lesson_translated.srt"


def test_save_srt_creates_parents(tmp_path, kit):
    path = save_srt(kit.subtitles, tmp_path / "out" / "kit.srt", SubtitleMode.ORIGINAL)
    assert path.read_text(encoding="utf-8") == build_srt(kit.subtitles, SubtitleMode.ORIGINAL)
