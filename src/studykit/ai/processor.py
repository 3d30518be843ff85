"""Study kit generation: media in, ProcessedData out."""

from __future__ import annotations

from google.genai import types

from studykit.ai.client import create_client, translate_error
from studykit.ai.media import prepare_media_part
from studykit.ai.prompts import build_prompt
from studykit.ai.schema import COMPACT_SCHEMA, parse_response_text
from studykit.core.cancellation import CancelToken, run_cancellable
from studykit.core.config import StudyKitConfig
from studykit.core.errors import (
    ContentBlockedError,
    EmptyResponseError,
    ProcessingCancelledError,
    ResponseTruncatedError,
)
from studykit.core.events import EventCallback, PipelineEvent
from studykit.core.models import MediaFile, ProcessedData, ProcessingOptions
from studykit.utils.console import console

_BLOCKED_REASONS = {"SAFETY", "PROHIBITED_CONTENT", "BLOCKLIST", "SPII"}


def _reason_name(reason: object) -> str | None:
    if reason is None:
        return None
    return (getattr(reason, "name", None) or str(reason)).rsplit(".", 1)[-1].upper()


def check_response(response) -> str:
    """Return the response text, rejecting blocked, truncated or empty output.

    A transcript cut off at the output token limit is treated as a failure:
    a partial study kit is never returned.
    """
    feedback = getattr(response, "prompt_feedback", None)
    if feedback is not None and _reason_name(getattr(feedback, "block_reason", None)):
        raise ContentBlockedError()

    candidates = getattr(response, "candidates", None) or []
    if candidates:
        finish = _reason_name(getattr(candidates[0], "finish_reason", None))
        if finish in _BLOCKED_REASONS:
            raise ContentBlockedError()
        if finish == "MAX_TOKENS":
            raise ResponseTruncatedError()

    text = response.text
    if not text:
        raise EmptyResponseError()
    return text


class StudyKitProcessor:
    """Drives Gemini to build a study kit for one media file.

    The credential comes from the config passed in here; without one
    (and without an injected client) construction fails with
    MissingCredentialsError.
    """

    def __init__(self, config: StudyKitConfig, client=None) -> None:
        self.config = config
        self.client = client if client is not None else create_client(config.api_key)

    async def process(
        self,
        media: MediaFile,
        options: ProcessingOptions,
        on_event: EventCallback | None = None,
        cancel: CancelToken | None = None,
    ) -> ProcessedData:
        """Generate subtitles, notes and flashcards for a media file.

        Args:
            media: The local file to analyse.
            options: Languages and which extras to generate.
            on_event: Optional callback receiving progress events.
            cancel: Optional token; firing it aborts any in-flight step.

        Returns:
            The complete study kit.

        Raises:
            StudyKitError: One of the user-facing failures in studykit.core.errors.
        """

        def emit(stage: str, progress: float, message: str) -> None:
            if on_event:
                on_event(PipelineEvent(stage=stage, progress=progress, message=message))

        if cancel is not None:
            cancel.raise_if_cancelled()

        gemini = self.config.gemini
        uploaded_name = None
        try:
            media_part, uploaded_name = await prepare_media_part(
                self.client, media, gemini, on_event=on_event, cancel=cancel
            )

            emit("generate", 0.80, "AI is analyzing FULL content (Deep Processing)...")
            response = await run_cancellable(
                self.client.aio.models.generate_content(
                    model=gemini.model,
                    contents=[media_part, build_prompt(options)],
                    config=types.GenerateContentConfig(
                        response_mime_type="application/json",
                        response_schema=COMPACT_SCHEMA,
                        max_output_tokens=gemini.max_output_tokens,
                    ),
                ),
                cancel,
            )
            data = parse_response_text(check_response(response))
        except ProcessingCancelledError:
            raise
        except Exception as e:
            console.print(f"[red]Gemini processing error:[/red] {e}")
            mapped = translate_error(e)
            if mapped is e:
                raise
            raise mapped from e
        finally:
            if uploaded_name and not (cancel is not None and cancel.cancelled):
                await self._delete_remote(uploaded_name)

        emit("generate", 1.0, f"Study kit ready: {len(data.subtitles)} subtitles")
        return data

    async def _delete_remote(self, name: str) -> None:
        """Remove an uploaded file.

        Skipped after a cancellation; Gemini expires uploads on its own.
        """
        try:
            await self.client.aio.files.delete(name=name)
        except Exception as e:
            console.print(f"[yellow]Could not delete remote file {name}:[/yellow] {e}")
