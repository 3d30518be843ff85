"""studykit process command — media file to study kit workspace."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated, Optional

import typer

from studykit.cli.utils import run_cancellable_command, validate_or_exit
from studykit.core.config import load_config
from studykit.utils.console import console


def process(
    media: Annotated[
        Path,
        typer.Argument(help="Video or audio file to turn into a study kit."),
    ],
    source: Annotated[
        Optional[str],
        typer.Option("--from", "-s", help="Source language code, or 'auto' to detect."),
    ] = None,
    to: Annotated[
        Optional[str],
        typer.Option("--to", "-t", help="Translation language code (see 'studykit languages')."),
    ] = None,
    notes: Annotated[
        Optional[bool],
        typer.Option("--notes/--no-notes", help="Generate study notes."),
    ] = None,
    flashcards: Annotated[
        Optional[bool],
        typer.Option("--flashcards/--no-flashcards", help="Generate flashcards."),
    ] = None,
    dub: Annotated[
        bool,
        typer.Option("--dub", help="Also render a translated dub track (one TTS call per line)."),
    ] = False,
    voice: Annotated[
        Optional[str],
        typer.Option("--voice", help="Gemini voice for the dub track (see 'studykit voices')."),
    ] = None,
    model: Annotated[
        Optional[str],
        typer.Option("--model", "-m", help="Gemini model for study kit generation."),
    ] = None,
    api_key: Annotated[
        Optional[str],
        typer.Option("--api-key", help="Gemini API key (defaults to GEMINI_API_KEY)."),
    ] = None,
) -> None:
    """Transcribe, translate and summarise a media file with Gemini.

    Writes kit.json, SRT files (bilingual, original, translated), a bilingual
    VTT and, with --dub, a WAV dub track plus an ffmpeg mux command.
    """
    from studykit.core.languages import validate_language, validate_voice
    from studykit.core.models import ProcessingOptions
    from studykit.core.pipeline import run_pipeline

    if not media.is_file():
        console.print(f"[red]File not found:[/red] {media}")
        raise typer.Exit(1)

    if source is not None:
        source = validate_or_exit(validate_language, source, allow_auto=True)
    if to is not None:
        validate_or_exit(validate_language, to)
    if voice is not None:
        voice = validate_or_exit(validate_voice, voice)

    overrides: dict[str, object] = {
        "study.source_language": source,
        "study.target_language": to,
        "study.generate_notes": notes,
        "study.generate_flashcards": flashcards,
        "dub.voice": voice,
        "gemini.model": model,
        "api_key": api_key,
    }
    config = load_config(**overrides)

    options = ProcessingOptions(
        source_language=config.study.source_language,
        target_language=config.study.target_language,
        generate_notes=config.study.generate_notes,
        generate_flashcards=config.study.generate_flashcards,
    )

    def _on_event(event) -> None:
        # Dub progress has its own progress bar
        if event.stage != "dub":
            console.print(f"[dim]{event.percent:3d}% {event.message}[/dim]")

    run_cancellable_command(
        lambda cancel: run_pipeline(
            media,
            config,
            options,
            dub=dub,
            on_event=_on_event,
            cancel=cancel,
        )
    )
