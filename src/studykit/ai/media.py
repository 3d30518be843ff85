"""Media preparation: inline bytes for small files, Files API for large ones."""

from __future__ import annotations

import asyncio
from pathlib import Path

from google.genai import types

from studykit.core.cancellation import CancelToken, cancellable_sleep, run_cancellable
from studykit.core.config import GeminiConfig
from studykit.core.errors import PollTimeoutError, UploadFailedError
from studykit.core.events import EventCallback, PipelineEvent
from studykit.core.models import MediaFile
from studykit.utils.console import console

# Progress window covered by polling, in percent of the whole run
_POLL_START_PCT = 40
_POLL_SPAN_PCT = 35


def _emit(
    on_event: EventCallback | None, stage: str, progress: float, message: str, **data: object
) -> None:
    if on_event:
        on_event(PipelineEvent(stage=stage, progress=progress, message=message, data=data or None))


def _state_name(state: object) -> str:
    """Normalise a file state (enum or plain string) to its name, e.g. "ACTIVE"."""
    if state is None:
        return "STATE_UNSPECIFIED"
    name = getattr(state, "name", None) or str(state)
    return name.rsplit(".", 1)[-1].upper()


async def read_media_bytes(path: Path, cancel: CancelToken | None = None) -> bytes:
    """Read a file off the event loop thread."""
    return await run_cancellable(asyncio.to_thread(Path(path).read_bytes), cancel)


async def wait_for_file_active(
    client,
    file_name: str,
    config: GeminiConfig,
    on_event: EventCallback | None = None,
    cancel: CancelToken | None = None,
) -> None:
    """Poll an uploaded file until Gemini reports it ACTIVE.

    Makes at most ``config.poll_max_attempts`` state checks, waiting
    ``config.poll_interval`` seconds between them.

    Raises:
        UploadFailedError: If the remote side reports FAILED.
        PollTimeoutError: If the file is still not ready after the last attempt.
        ProcessingCancelledError: If the token fires while polling.
    """
    console.print(f"[dim]Waiting for file {file_name} to become active...[/dim]")
    max_attempts = config.poll_max_attempts

    for attempt in range(max_attempts):
        if cancel is not None:
            cancel.raise_if_cancelled()

        remote = await run_cancellable(client.aio.files.get(name=file_name), cancel)
        state = _state_name(remote.state)
        console.print(f"[dim]File state: {state}[/dim]")

        if state == "ACTIVE":
            return
        if state == "FAILED":
            raise UploadFailedError("File processing failed on Gemini server.")

        progress = (_POLL_START_PCT + attempt * _POLL_SPAN_PCT // max_attempts) / 100
        _emit(
            on_event,
            "poll",
            progress,
            f"Google is processing the media... (State: {state})",
            state=state,
            attempt=attempt + 1,
        )
        await cancellable_sleep(config.poll_interval, cancel)

    raise PollTimeoutError()


async def prepare_media_part(
    client,
    media: MediaFile,
    config: GeminiConfig,
    on_event: EventCallback | None = None,
    cancel: CancelToken | None = None,
) -> tuple[types.Part, str | None]:
    """Turn a local file into a content part for generation.

    Files below ``config.inline_size_limit`` are sent inline; larger ones
    are uploaded and polled until active.

    Returns:
        Tuple of (part, uploaded file name or None for inline media).
    """
    if media.size < config.inline_size_limit:
        _emit(on_event, "prepare", 0.30, "Optimizing small file...")
        data = await read_media_bytes(media.path, cancel)
        return types.Part.from_bytes(data=data, mime_type=media.mime_type), None

    _emit(on_event, "upload", 0.10, "Uploading large file to Gemini...")
    uploaded = await run_cancellable(
        client.aio.files.upload(
            file=str(media.path),
            config=types.UploadFileConfig(display_name=media.name, mime_type=media.mime_type),
        ),
        cancel,
    )
    if not uploaded.uri or not uploaded.name:
        raise UploadFailedError()

    _emit(on_event, "upload", 0.40, "File uploaded. Waiting for processing...")
    await wait_for_file_active(client, uploaded.name, config, on_event=on_event, cancel=cancel)
    part = types.Part.from_uri(file_uri=uploaded.uri, mime_type=media.mime_type)
    return part, uploaded.name
