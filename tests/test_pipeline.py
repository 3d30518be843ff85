"""End-to-end pipeline tests with a fake Gemini client."""

import asyncio
import json
import shlex

import numpy as np
import pytest
import soundfile as sf

from conftest import COMPACT_RESPONSE, audio_response, text_response
from studykit.core.config import StudyKitConfig
from studykit.core.errors import MalformedResponseError, MissingCredentialsError
from studykit.core.models import ProcessingOptions
from studykit.core.pipeline import run_pipeline
from studykit.utils.paths import load_kit


def _run(config, media, client, dub=False, events=None):
    on_event = events.append if events is not None else None
    return asyncio.run(
        run_pipeline(
            media.path, config, ProcessingOptions(), dub=dub, on_event=on_event, client=client
        )
    )


def test_writes_kit_and_subtitles(config, fake_client, small_media):
    workspace = _run(config, small_media, fake_client)

    assert workspace.parent.parent == config.workspace_dir
    data, source = load_kit(workspace)
    assert len(data.subtitles) == 2
    assert source == small_media.path.resolve()
    for name in (
        "lesson_bilingual.srt",
        "lesson_original.srt",
        "lesson_translated.srt",
        "lesson_bilingual.vtt",
        "metadata.json",
    ):
        assert (workspace / name).is_file(), name
    assert not (workspace / "lesson_dub.wav").exists()

    original = (workspace / "lesson_original.srt").read_text(encoding="utf-8")
    assert original.startswith("1\n00:00:01,000 --> 00:00:03,000\nHello everyone.\n\n")
    assert "Xin chào" not in original


def test_dub_track_and_mux_command(config, fake_client, small_media):
    fake_client.models.tts = lambda text: audio_response(np.full(2400, 0.5, dtype=np.float32))
    events = []
    workspace = _run(config, small_media, fake_client, dub=True, events=events)

    info = sf.info(str(workspace / "lesson_dub.wav"))
    assert info.samplerate == 24000
    assert info.channels == 1
    # Last subtitle ends at 6 s, plus the trailing margin
    assert info.frames == 8 * 24000

    tts_requests = [r for r in fake_client.requests if r["model"] == config.gemini.tts_model]
    assert [r["contents"] for r in tts_requests] == [
        "Xin chào mọi người.",
        "Chào mừng trở lại.",
    ]

    command = (workspace / "mux_command.txt").read_text(encoding="utf-8").strip()
    args = shlex.split(command)
    assert args[2] == str(small_media.path.resolve())
    assert args[4] == str(workspace / "lesson_dub.wav")

    dub_events = [e for e in events if e.stage == "dub"]
    assert dub_events[-1].progress == 1.0
    assert events[-1].data == {"workspace": str(workspace)}

    meta = json.loads((workspace / "metadata.json").read_text(encoding="utf-8"))
    assert meta["voice"] == config.dub.voice
    assert meta["files"]["lesson_dub.wav"]["type"] == "dub_audio"


def test_bad_time_code_writes_nothing(config, fake_client, small_media):
    payload = json.loads(json.dumps(COMPACT_RESPONSE))
    payload["subs"][0]["e"] = "00:00:03:500"
    fake_client.models.response = text_response(payload)

    with pytest.raises(MalformedResponseError):
        _run(config, small_media, fake_client)
    assert not config.workspace_dir.exists()


def test_missing_credentials_stop_before_network(tmp_path, small_media, monkeypatch):
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)
    monkeypatch.delenv("API_KEY", raising=False)
    config = StudyKitConfig(api_key=None, workspace_dir=tmp_path / "ws")
    with pytest.raises(MissingCredentialsError):
        asyncio.run(run_pipeline(small_media.path, config, ProcessingOptions()))
    assert not (tmp_path / "ws").exists()


def test_missing_media(config, fake_client, tmp_path):
    with pytest.raises(FileNotFoundError):
        asyncio.run(
            run_pipeline(tmp_path / "nope.mp4", config, ProcessingOptions(), client=fake_client)
        )
    assert fake_client.calls == []
