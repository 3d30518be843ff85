"""Export helpers: subtitles, source media copy, dub track, mux command.

``StudyKitExporter`` ties a media file and its study kit to an output
directory. Only one export runs at a time; starting another while one is
in progress raises ExportInProgressError.
"""

from __future__ import annotations

import shlex
import shutil
from contextlib import contextmanager
from pathlib import Path

from studykit.ai.tts import TTS_SAMPLE_RATE
from studykit.audio.dubbing import Synthesizer, render_dub_track
from studykit.audio.render import write_wav
from studykit.core.cancellation import CancelToken
from studykit.core.config import DubConfig
from studykit.core.errors import ExportInProgressError
from studykit.core.events import DubProgressCallback
from studykit.core.models import MediaFile, ProcessedData
from studykit.subtitles.converter import save_subtitles
from studykit.subtitles.srt import SubtitleMode, srt_filename
from studykit.utils.console import console


def export_source(media: MediaFile, output_dir: Path) -> Path:
    """Copy the original media, byte for byte, under its original name."""
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    dest = output_dir / media.name
    if dest.resolve() != media.path.resolve():
        shutil.copyfile(media.path, dest)
    return dest


def build_mux_command(video: Path, audio: Path, output: Path) -> str:
    """Build an ffmpeg command that replaces a video's audio with the dub track.

    The command is only produced for the user to run; it is never executed here.
    """
    cmd = [
        "ffmpeg",
        "-i",
        str(video),
        "-i",
        str(audio),
        "-map",
        "0:v:0",
        "-map",
        "1:a:0",
        "-c:v",
        "copy",
        "-c:a",
        "aac",
        "-shortest",
        str(output),
    ]
    return shlex.join(cmd)


class StudyKitExporter:
    """Writes exports for one media file and its study kit."""

    def __init__(self, media: MediaFile, data: ProcessedData, output_dir: Path) -> None:
        self.media = media
        self.data = data
        self.output_dir = Path(output_dir)
        self._exporting = False

    @property
    def exporting(self) -> bool:
        return self._exporting

    @contextmanager
    def _exclusive(self):
        if self._exporting:
            raise ExportInProgressError()
        self._exporting = True
        try:
            yield
        finally:
            self._exporting = False

    def export_subtitles(
        self, mode: SubtitleMode = SubtitleMode.BILINGUAL, fmt: str = "srt"
    ) -> Path:
        """Save subtitles as ``<stem>_<mode>.<fmt>``."""
        mode = SubtitleMode(mode)
        with self._exclusive():
            name = srt_filename(self.media.stem, mode)
            if fmt != "srt":
                name = name[: -len(".srt")] + f".{fmt}"
            path = save_subtitles(self.data.subtitles, self.output_dir / name, mode, fmt=fmt)
        console.print(f"[green]Saved:[/green] {path}")
        return path

    def export_source(self) -> Path:
        with self._exclusive():
            path = export_source(self.media, self.output_dir)
        console.print(f"[green]Saved:[/green] {path}")
        return path

    def dub_path(self) -> Path:
        return self.output_dir / f"{self.media.stem}_dub.wav"

    async def export_dub(
        self,
        synthesize: Synthesizer,
        config: DubConfig,
        on_progress: DubProgressCallback | None = None,
        cancel: CancelToken | None = None,
    ) -> Path:
        """Render the dub track for all subtitles and save it as WAV."""
        with self._exclusive():
            samples = await render_dub_track(
                self.data.subtitles,
                synthesize,
                config,
                on_progress=on_progress,
                cancel=cancel,
            )
            path = write_wav(self.dub_path(), samples, TTS_SAMPLE_RATE)
        console.print(f"[green]Saved:[/green] {path}")
        return path

    def mux_command(self, audio: Path | None = None, video: Path | None = None) -> str:
        """ffmpeg command overlaying the dub track onto the video.

        Defaults to the exported copy of the source and the exported dub track.
        """
        video = video or self.output_dir / self.media.name
        audio = audio or self.dub_path()
        output = self.output_dir / f"{self.media.stem}_dubbed{self.media.path.suffix or '.mp4'}"
        return build_mux_command(video, audio, output)
