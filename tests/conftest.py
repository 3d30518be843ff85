"""Shared test fixtures, including an in-memory stand-in for the Gemini client."""

import json
from types import SimpleNamespace

import numpy as np
import pytest

from studykit.core.config import GeminiConfig, StudyKitConfig
from studykit.core.models import Flashcard, MediaFile, Note, ProcessedData, Subtitle

COMPACT_RESPONSE = {
    "subs": [
        {
            "i": 1,
            "s": "00:00:01",
            "e": "00:00:03",
            "en": "Hello everyone.",
            "vi": "Xin chào mọi người.",
        },
        {
            "i": 2,
            "s": "00:00:03",
            "e": "00:00:06",
            "en": "Welcome back.",
            "vi": "Chào mừng trở lại.",
        },
    ],
    "nts": [{"ts": "00:00:01", "ti": "Greeting", "co": "The speaker greets the audience."}],
    "cards": [{"id": "c1", "t": "welcome", "d": "chào mừng", "c": "Welcome back."}],
}


def text_response(payload, finish_reason="STOP", block_reason=None):
    """A generate_content response carrying JSON text."""
    text = payload if isinstance(payload, str) else json.dumps(payload)
    return SimpleNamespace(
        text=text,
        candidates=[SimpleNamespace(finish_reason=finish_reason, content=None)],
        prompt_feedback=SimpleNamespace(block_reason=block_reason),
    )


def audio_response(samples: np.ndarray):
    """A TTS response carrying 16-bit PCM for the given float samples."""
    pcm = (np.clip(samples, -1.0, 0.99997) * 32768).astype("<i2").tobytes()
    part = SimpleNamespace(inline_data=SimpleNamespace(data=pcm, mime_type="audio/L16;rate=24000"))
    return SimpleNamespace(
        text=None,
        candidates=[SimpleNamespace(finish_reason="STOP", content=SimpleNamespace(parts=[part]))],
        prompt_feedback=None,
    )


class FakeFiles:
    def __init__(self, client):
        self._client = client
        self.states = ["ACTIVE"]
        self.on_get = None
        self.upload_result = SimpleNamespace(
            uri="https://generativelanguage.googleapis.com/v1beta/files/abc", name="files/abc"
        )

    async def upload(self, file, config=None):
        self._client.calls.append(("upload", file))
        return self.upload_result

    async def get(self, name):
        self._client.calls.append(("get", name))
        count = sum(1 for call in self._client.calls if call[0] == "get")
        if self.on_get:
            self.on_get(count)
        state = self.states[min(count, len(self.states)) - 1]
        return SimpleNamespace(name=name, state=state)

    async def delete(self, name):
        self._client.calls.append(("delete", name))


class FakeModels:
    def __init__(self, client):
        self._client = client
        self.response = text_response(COMPACT_RESPONSE)
        self.error = None
        self.tts = None  # callable(text) -> response

    async def generate_content(self, model, contents, config=None):
        self._client.calls.append(("generate", model))
        self._client.requests.append({"model": model, "contents": contents, "config": config})
        if self.tts is not None and config is not None and config.response_modalities:
            return self.tts(contents)
        if self.error is not None:
            raise self.error
        return self.response


class FakeClient:
    """Records every call made through ``client.aio``."""

    def __init__(self):
        self.calls = []
        self.requests = []
        self.aio = SimpleNamespace(files=FakeFiles(self), models=FakeModels(self))

    @property
    def files(self) -> FakeFiles:
        return self.aio.files

    @property
    def models(self) -> FakeModels:
        return self.aio.models


@pytest.fixture
def fake_client() -> FakeClient:
    return FakeClient()


@pytest.fixture
def config(tmp_path) -> StudyKitConfig:
    return StudyKitConfig(
        api_key="test-key",
        gemini=GeminiConfig(inline_size_limit=1024, poll_interval=0.0, poll_max_attempts=3),
        workspace_dir=tmp_path / "workspace",
    )


@pytest.fixture
def small_media(tmp_path) -> MediaFile:
    path = tmp_path / "lesson.one.mp4"
    path.write_bytes(b"\x00" * 100)
    return MediaFile.from_path(path)


@pytest.fixture
def large_media(tmp_path) -> MediaFile:
    path = tmp_path / "lecture.mp4"
    path.write_bytes(b"\x01" * 4096)
    return MediaFile.from_path(path)


@pytest.fixture
def kit() -> ProcessedData:
    return ProcessedData(
        subtitles=[
            Subtitle(1, "00:00:01", "00:00:02", "Good morning.", "Chào buổi sáng."),
            Subtitle(2, "00:00:02,500", "00:00:04", "How are you?", "Bạn khỏe không?"),
            Subtitle(3, "00:00:05", "00:00:07", "Fine, thanks.", "Khỏe, cảm ơn."),
        ],
        notes=[Note("00:00:01", "Greetings", "Common morning greetings.")],
        flashcards=[Flashcard("f1", "morning", "buổi sáng", "Good morning.")],
    )
