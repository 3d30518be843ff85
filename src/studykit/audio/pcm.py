"""Raw PCM decoding."""

from __future__ import annotations

import numpy as np

PCM16_SCALE = 32768.0


def decode_pcm16(data: bytes, channels: int = 1) -> np.ndarray:
    """Decode little-endian 16-bit PCM into float32 samples in [-1, 1).

    Args:
        data: Raw interleaved PCM bytes. A trailing odd byte is ignored.
        channels: Number of interleaved channels.

    Returns:
        A 1-D array for mono input, otherwise shape (frames, channels).
    """
    usable = len(data) - len(data) % (2 * channels)
    samples = np.frombuffer(data[:usable], dtype="<i2").astype(np.float32) / PCM16_SCALE
    if channels == 1:
        return samples
    return samples.reshape(-1, channels)
