"""Offline mono audio rendering and WAV encoding."""

from __future__ import annotations

import math
from pathlib import Path

import numpy as np
import soundfile as sf


class OfflineRenderer:
    """A fixed-length mono timeline that clips are mixed into.

    The buffer covers ``duration`` seconds at ``sample_rate``; anything
    scheduled past the end is cut off.
    """

    def __init__(self, duration: float, sample_rate: int = 24000) -> None:
        self.sample_rate = sample_rate
        self.frames = max(0, math.ceil(duration * sample_rate))
        self._buffer = np.zeros(self.frames, dtype=np.float32)

    @property
    def duration(self) -> float:
        return self.frames / self.sample_rate

    def schedule(self, clip: np.ndarray, offset: float) -> None:
        """Mix ``clip`` into the timeline starting at ``offset`` seconds."""
        start = max(0, int(round(offset * self.sample_rate)))
        if start >= self.frames or clip.size == 0:
            return
        end = min(self.frames, start + clip.shape[0])
        self._buffer[start:end] += clip[: end - start].astype(np.float32)

    def render(self) -> np.ndarray:
        """Return the mixed timeline, clipped to [-1, 1]."""
        return np.clip(self._buffer, -1.0, 1.0)


def write_wav(path: Path, samples: np.ndarray, sample_rate: int = 24000) -> Path:
    """Write float samples as a 16-bit PCM mono WAV file."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    sf.write(str(path), samples, sample_rate, subtype="PCM_16", format="WAV")
    return path
