"""studykit dub command — render the translated dub track for a saved kit."""

from __future__ import annotations

from functools import partial
from pathlib import Path
from typing import Annotated, Optional

import typer

from studykit.cli.export import _resolve_media
from studykit.cli.utils import run_cancellable_command, validate_or_exit
from studykit.core.config import load_config
from studykit.utils.console import console
from studykit.utils.paths import load_kit


def dub(
    kit: Annotated[
        Path,
        typer.Argument(help="Workspace directory or kit.json file."),
    ],
    voice: Annotated[
        Optional[str],
        typer.Option("--voice", help="Gemini voice (see 'studykit voices')."),
    ] = None,
    concurrency: Annotated[
        Optional[int],
        typer.Option("--concurrency", "-j", min=1, help="Parallel TTS requests (default 1)."),
    ] = None,
    output: Annotated[
        Optional[Path],
        typer.Option("--output", "-o", help="Output directory (defaults to the kit's directory)."),
    ] = None,
    media: Annotated[
        Optional[Path],
        typer.Option("--media", help="Source media path, if it moved since processing."),
    ] = None,
    api_key: Annotated[
        Optional[str],
        typer.Option("--api-key", help="Gemini API key (defaults to GEMINI_API_KEY)."),
    ] = None,
) -> None:
    """Synthesize every translated line and mix them into one WAV track.

    Lines that fail to synthesize are skipped and left silent. Prints an
    ffmpeg command that puts the track onto the video.
    """
    from studykit.ai.client import create_client
    from studykit.ai.tts import synthesize_speech
    from studykit.core.errors import StudyKitError
    from studykit.core.languages import validate_voice
    from studykit.export.media import StudyKitExporter

    if voice is not None:
        voice = validate_or_exit(validate_voice, voice)

    try:
        data, kit_source = load_kit(kit)
    except FileNotFoundError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)

    if not data.subtitles:
        console.print("[yellow]The kit has no subtitles to dub.[/yellow]")
        raise typer.Exit(1)

    config = load_config(**{"dub.voice": voice, "dub.concurrency": concurrency, "api_key": api_key})
    try:
        client = create_client(config.api_key)
    except StudyKitError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)

    media_file = _resolve_media(kit_source, media)
    output_dir = output or (kit if kit.is_dir() else kit.parent)
    exporter = StudyKitExporter(media_file, data, output_dir)
    synthesize = partial(synthesize_speech, client, voice=config.dub.voice, config=config.gemini)

    console.print(
        f"[bold]Dubbing {len(data.subtitles)} lines[/bold] with voice {config.dub.voice}"
    )
    dub_path = run_cancellable_command(
        lambda cancel: exporter.export_dub(synthesize, config.dub, cancel=cancel)
    )
    console.print(f"[bold]Mux with:[/bold] {exporter.mux_command(dub_path, video=media_file.path)}")
