"""Compact response schema and its expansion into the study kit model.

The model is asked for short field names to save output tokens on long
transcripts:

    subs:  i (id), s (start), e (end), en (original), vi (translation)
    nts:   ts (timestamp), ti (title), co (content)
    cards: id, t (term), d (definition), c (context)

``en``/``vi`` are positional names (original/translated) and keep their
spelling whatever the actual languages are.
"""

from __future__ import annotations

import json
import uuid

from studykit.core.errors import MalformedResponseError
from studykit.core.models import Flashcard, Note, ProcessedData, Subtitle
from studykit.subtitles.timecode import parse_timestamp


def _object(properties: dict[str, str]) -> dict:
    return {
        "type": "OBJECT",
        "properties": {name: {"type": kind} for name, kind in properties.items()},
        "required": list(properties),
    }


COMPACT_SCHEMA: dict = {
    "type": "OBJECT",
    "properties": {
        "subs": {
            "type": "ARRAY",
            "items": _object(
                {"i": "INTEGER", "s": "STRING", "e": "STRING", "en": "STRING", "vi": "STRING"}
            ),
        },
        "nts": {
            "type": "ARRAY",
            "items": _object({"ts": "STRING", "ti": "STRING", "co": "STRING"}),
        },
        "cards": {
            "type": "ARRAY",
            "items": _object({"id": "STRING", "t": "STRING", "d": "STRING", "c": "STRING"}),
        },
    },
    "required": ["subs", "nts", "cards"],
}


def _field(item: dict, key: str, section: str, index: int):
    try:
        return item[key]
    except (KeyError, TypeError):
        raise MalformedResponseError(
            f"The AI response is missing '{key}' in {section}[{index}]."
        ) from None


def _integer(item: dict, key: str, section: str, index: int) -> int:
    value = _field(item, key, section, index)
    try:
        return int(value)
    except (TypeError, ValueError):
        raise MalformedResponseError(
            f"The AI response has a non-integer '{key}' in {section}[{index}]: {value!r}."
        ) from None


def _timestamp(item: dict, key: str, section: str, index: int) -> str:
    value = str(_field(item, key, section, index))
    try:
        parse_timestamp(value)
    except ValueError:
        raise MalformedResponseError(
            f"The AI response has an invalid time code '{key}' in {section}[{index}]: {value!r}."
        ) from None
    return value


def _section(raw: dict, key: str) -> list:
    value = raw.get(key)
    if not isinstance(value, list):
        raise MalformedResponseError(f"The AI response is missing the '{key}' array.")
    return value


def expand_compact(raw: dict) -> ProcessedData:
    """Map a compact ``subs/nts/cards`` payload onto ProcessedData.

    Every field is renamed, nothing is dropped. Flashcards without an id
    get a generated one.

    Raises:
        MalformedResponseError: If a section or a required field is missing,
            or a subtitle has a non-integer id or an invalid time code.
    """
    if not isinstance(raw, dict):
        raise MalformedResponseError()

    subtitles = [
        Subtitle(
            id=_integer(s, "i", "subs", n),
            start_time=_timestamp(s, "s", "subs", n),
            end_time=_timestamp(s, "e", "subs", n),
            text_original=_field(s, "en", "subs", n),
            text_translated=_field(s, "vi", "subs", n),
        )
        for n, s in enumerate(_section(raw, "subs"))
    ]
    notes = [
        Note(
            timestamp=_field(note, "ts", "nts", n),
            title=_field(note, "ti", "nts", n),
            content=_field(note, "co", "nts", n),
        )
        for n, note in enumerate(_section(raw, "nts"))
    ]
    flashcards = [
        Flashcard(
            term=_field(card, "t", "cards", n),
            definition=_field(card, "d", "cards", n),
            context=_field(card, "c", "cards", n),
            id=str(card.get("id") or uuid.uuid4().hex),
        )
        for n, card in enumerate(_section(raw, "cards"))
    ]
    return ProcessedData(subtitles=subtitles, notes=notes, flashcards=flashcards)


def parse_response_text(text: str) -> ProcessedData:
    """Parse the model's JSON text and expand it.

    Raises:
        MalformedResponseError: If the text is not valid JSON or misses fields.
    """
    try:
        raw = json.loads(text)
    except json.JSONDecodeError as e:
        raise MalformedResponseError(
            f"The AI response is not valid JSON ({e.msg} at position {e.pos})."
        ) from e
    return expand_compact(raw)
