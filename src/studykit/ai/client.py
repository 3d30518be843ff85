"""Gemini client construction and error translation."""

from __future__ import annotations

from google import genai
from google.genai import errors as genai_errors

from studykit.core.errors import (
    ContentBlockedError,
    ContextExceededError,
    InvalidCredentialsError,
    MissingCredentialsError,
    QuotaExceededError,
    ServiceOverloadedError,
    StudyKitError,
)


def create_client(api_key: str | None) -> genai.Client:
    """Build a Gemini client for the given key.

    Raises:
        MissingCredentialsError: If no key is configured.
    """
    if not api_key:
        raise MissingCredentialsError()
    return genai.Client(api_key=api_key)


def translate_error(error: Exception) -> Exception:
    """Map a raw SDK/transport error onto a StudyKit error.

    Returns the error unchanged when it is already a StudyKit error or
    matches no known failure.
    """
    if isinstance(error, StudyKitError):
        return error

    code = error.code if isinstance(error, genai_errors.APIError) else None
    message = str(error)
    lowered = message.lower()

    if code == 429 or "429" in message or "resource_exhausted" in lowered:
        return QuotaExceededError()
    if code == 503 or "503" in message or "overloaded" in lowered:
        return ServiceOverloadedError()
    if "SAFETY" in message:
        return ContentBlockedError()
    if (code == 400 or "400" in message) and ("context" in lowered or "token" in lowered):
        return ContextExceededError()
    if code in (401, 403) or "403" in message or "api key not valid" in lowered:
        return InvalidCredentialsError()
    return error
