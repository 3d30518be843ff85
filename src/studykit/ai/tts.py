"""Remote speech synthesis via the Gemini TTS model."""

from __future__ import annotations

import base64

import numpy as np
from google.genai import types

from studykit.audio.pcm import decode_pcm16
from studykit.core.config import GeminiConfig
from studykit.core.errors import SynthesisError

# Gemini TTS returns 16-bit mono PCM at this rate
TTS_SAMPLE_RATE = 24000


def _first_audio_bytes(response) -> bytes | None:
    """Pull the first inline audio payload out of a generate_content response."""
    for candidate in getattr(response, "candidates", None) or []:
        content = getattr(candidate, "content", None)
        for part in getattr(content, "parts", None) or []:
            inline = getattr(part, "inline_data", None)
            if inline is not None and inline.data:
                data = inline.data
                # Some transports hand back base64 text instead of raw bytes
                return base64.b64decode(data) if isinstance(data, str) else data
    return None


async def synthesize_speech(client, text: str, voice: str, config: GeminiConfig) -> np.ndarray:
    """Synthesize ``text`` with a prebuilt voice.

    Returns:
        Mono float32 samples at TTS_SAMPLE_RATE.

    Raises:
        SynthesisError: If the response carries no audio.
    """
    response = await client.aio.models.generate_content(
        model=config.tts_model,
        contents=text,
        config=types.GenerateContentConfig(
            response_modalities=["AUDIO"],
            speech_config=types.SpeechConfig(
                voice_config=types.VoiceConfig(
                    prebuilt_voice_config=types.PrebuiltVoiceConfig(voice_name=voice),
                )
            ),
        ),
    )
    data = _first_audio_bytes(response)
    if not data:
        raise SynthesisError()
    return decode_pcm16(data)
