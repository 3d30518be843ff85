"""Tests for study kit exports: subtitles, source copy, dub track, mux command."""

import asyncio
import shlex

import numpy as np
import pytest
import soundfile as sf

from studykit.core.config import DubConfig
from studykit.core.errors import ExportInProgressError
from studykit.export.media import StudyKitExporter, build_mux_command, export_source
from studykit.subtitles.srt import SubtitleMode


@pytest.fixture
def exporter(tmp_path, small_media, kit):
    return StudyKitExporter(small_media, kit, tmp_path / "out")


class TestExportSubtitles:
    @pytest.mark.parametrize("mode", list(SubtitleMode))
    def test_srt_names(self, exporter, mode):
        path = exporter.export_subtitles(mode)
        assert path.name == f"lesson_{mode.value}.srt"
        assert path.is_file()

    def test_other_format(self, exporter):
        path = exporter.export_subtitles(SubtitleMode.TRANSLATED, fmt="vtt")
        assert path.name == "lesson_translated.vtt"
        assert "Bạn khỏe không?" in path.read_text(encoding="utf-8")

    def test_original_only_text(self, exporter, kit):
        content = exporter.export_subtitles(SubtitleMode.ORIGINAL).read_text(encoding="utf-8")
        assert all(sub.text_translated not in content for sub in kit.subtitles)


class TestExportSource:
    def test_byte_identical_copy(self, tmp_path, small_media):
        small_media.path.write_bytes(bytes(range(256)) * 4)
        dest = export_source(small_media, tmp_path / "copy")
        assert dest.name == "lesson.one.mp4"
        assert dest.read_bytes() == small_media.path.read_bytes()

    def test_same_directory_is_noop(self, small_media):
        dest = export_source(small_media, small_media.path.parent)
        assert dest == small_media.path.parent / small_media.name
        assert dest.read_bytes() == b"\x00" * 100

    def test_exporter_copies_source(self, exporter, small_media):
        assert exporter.export_source().read_bytes() == small_media.path.read_bytes()


class TestMuxCommand:
    def test_command_shape(self, tmp_path):
        command = build_mux_command(tmp_path / "in.mp4", tmp_path / "dub.wav", tmp_path / "o.mp4")
        args = shlex.split(command)
        assert args[0] == "ffmpeg"
        assert args[args.index("-map") + 1] == "0:v:0"
        assert "1:a:0" in args
        assert args[args.index("-c:v") + 1] == "copy"
        assert args[args.index("-c:a") + 1] == "aac"
        assert "-shortest" in args
        assert args[-1] == str(tmp_path / "o.mp4")

    def test_paths_with_spaces_are_quoted(self, tmp_path):
        video = tmp_path / "my video.mp4"
        command = build_mux_command(video, tmp_path / "dub.wav", tmp_path / "out.mp4")
        assert shlex.split(command)[2] == str(video)

    def test_exporter_defaults(self, exporter):
        args = shlex.split(exporter.mux_command())
        assert args[2] == str(exporter.output_dir / "lesson.one.mp4")
        assert args[4] == str(exporter.output_dir / "lesson_dub.wav")
        assert args[-1] == str(exporter.output_dir / "lesson_dubbed.mp4")


class TestExportDub:
    def test_writes_wav(self, exporter, kit):
        async def synthesize(text):
            return np.full(2400, 0.5, dtype=np.float32)

        path = asyncio.run(exporter.export_dub(synthesize, DubConfig()))
        assert path == exporter.dub_path()
        info = sf.info(str(path))
        assert info.samplerate == 24000
        assert info.channels == 1
        assert info.subtype == "PCM_16"
        # Last subtitle ends at 7 s, plus a 2 s trailing margin
        assert info.frames == 9 * 24000

    def test_exporting_flag_during_dub(self, exporter):
        seen = []

        async def synthesize(text):
            seen.append(exporter.exporting)
            return np.zeros(10, dtype=np.float32)

        asyncio.run(exporter.export_dub(synthesize, DubConfig()))
        assert seen and all(seen)
        assert not exporter.exporting

    def test_concurrent_export_rejected(self, exporter):
        errors = []

        async def synthesize(text):
            try:
                exporter.export_subtitles()
            except ExportInProgressError as e:
                errors.append(e)
            return np.zeros(10, dtype=np.float32)

        asyncio.run(exporter.export_dub(synthesize, DubConfig()))
        assert len(errors) == 3

    def test_flag_cleared_after_failure(self, exporter):
        with pytest.raises(RuntimeError):
            with exporter._exclusive():
                raise RuntimeError("boom")
        assert not exporter.exporting
