"""Shared data models for StudyKit."""

from __future__ import annotations

import mimetypes
from dataclasses import asdict, dataclass, field
from pathlib import Path

from studykit.subtitles.timecode import parse_timestamp


@dataclass(frozen=True)
class Subtitle:
    """One transcript line with its translation.

    Timestamps are kept as the text the model returned ("HH:MM:SS",
    sometimes with ",mmm").
    """

    id: int
    start_time: str
    end_time: str
    text_original: str
    text_translated: str

    @property
    def start(self) -> float:
        """Start offset in seconds."""
        return parse_timestamp(self.start_time)

    @property
    def end(self) -> float:
        """End offset in seconds."""
        return parse_timestamp(self.end_time)


@dataclass(frozen=True)
class Note:
    """A study note anchored to a (free text) timestamp."""

    timestamp: str
    title: str
    content: str


@dataclass(frozen=True)
class Flashcard:
    """A vocabulary flashcard."""

    id: str
    term: str
    definition: str
    context: str


@dataclass(frozen=True)
class ProcessedData:
    """The complete study kit produced from a single AI response."""

    subtitles: list[Subtitle] = field(default_factory=list)
    notes: list[Note] = field(default_factory=list)
    flashcards: list[Flashcard] = field(default_factory=list)

    @property
    def duration(self) -> float:
        """End time of the last subtitle in seconds, 0.0 if there are none."""
        if not self.subtitles:
            return 0.0
        return max(sub.end for sub in self.subtitles)

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> ProcessedData:
        """Rebuild a kit saved with to_dict (e.g. a workspace kit.json)."""
        return cls(
            subtitles=[Subtitle(**sub) for sub in data.get("subtitles", [])],
            notes=[Note(**note) for note in data.get("notes", [])],
            flashcards=[Flashcard(**card) for card in data.get("flashcards", [])],
        )


@dataclass
class ProcessingOptions:
    """User-selected options for one processing run."""

    source_language: str = "auto"
    target_language: str = "vi"
    generate_notes: bool = True
    generate_flashcards: bool = True

    @property
    def auto_detect(self) -> bool:
        return self.source_language.lower() in ("auto", "auto detect")


@dataclass
class MediaFile:
    """A local video/audio file selected for processing."""

    path: Path
    mime_type: str
    size: int

    @property
    def name(self) -> str:
        return self.path.name

    @property
    def stem(self) -> str:
        """File name up to the first dot, used to name exports."""
        return self.path.name.split(".")[0]

    @classmethod
    def from_path(cls, path: Path) -> MediaFile:
        path = Path(path)
        if not path.is_file():
            raise FileNotFoundError(f"File not found: {path}")
        mime_type, _ = mimetypes.guess_type(path.name)
        return cls(
            path=path,
            mime_type=mime_type or "application/octet-stream",
            size=path.stat().st_size,
        )
