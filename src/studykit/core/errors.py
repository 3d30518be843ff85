"""Error types surfaced to StudyKit callers.

Every AI-facing failure is re-raised at the processor boundary as one of
these, each carrying a fixed user-facing message. ``category`` groups them
by cause:

- ``cancelled``: the user aborted; callers should not report an error.
- ``configuration``: missing or invalid credential, blocks every AI call.
- ``transient``: quota or overload; the user should retry later.
- ``content``: the request itself cannot succeed (safety, length).
- ``remote``: the remote side failed to prepare the media.
"""

from __future__ import annotations


class StudyKitError(Exception):
    """Base class for StudyKit errors."""

    category = "remote"
    default_message = "Processing failed."

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)

    @property
    def message(self) -> str:
        return str(self)


class ProcessingCancelledError(StudyKitError):
    category = "cancelled"
    default_message = "Processing cancelled by user."


class MissingCredentialsError(StudyKitError):
    category = "configuration"
    default_message = (
        "API Key is missing. Set GEMINI_API_KEY in your environment or .env file."
    )


class InvalidCredentialsError(StudyKitError):
    category = "configuration"
    default_message = "Invalid API Key."


class UploadFailedError(StudyKitError):
    default_message = "Upload failed."


class PollTimeoutError(StudyKitError):
    default_message = "File upload timed out."


class QuotaExceededError(StudyKitError):
    category = "transient"
    default_message = "API Quota Exceeded. Please try again later."


class ServiceOverloadedError(StudyKitError):
    category = "transient"
    default_message = "Server overloaded. Try again shortly."


class ContentBlockedError(StudyKitError):
    category = "content"
    default_message = "Content blocked by safety filters."


class ContextExceededError(StudyKitError):
    category = "content"
    default_message = "File too long (Context Exceeded)."


class ResponseTruncatedError(StudyKitError):
    category = "content"
    default_message = (
        "The transcript exceeded the response limit and was cut off. "
        "Try a shorter file or disable notes/flashcards."
    )


class EmptyResponseError(StudyKitError):
    default_message = "No response from AI"


class MalformedResponseError(StudyKitError):
    category = "content"
    default_message = "The AI response did not match the expected format."


class SynthesisError(StudyKitError):
    default_message = "No audio data generated"


class ExportInProgressError(StudyKitError):
    category = "transient"
    default_message = "An export is already in progress."
