"""studykit speak command — read a transcript line aloud with local TTS."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated, Optional

import typer

from studykit.core.config import load_config
from studykit.utils.console import console
from studykit.utils.paths import load_kit


def speak(
    kit: Annotated[
        Path,
        typer.Argument(help="Workspace directory or kit.json file."),
    ],
    line: Annotated[
        int,
        typer.Argument(help="Subtitle id to read."),
    ],
    translated: Annotated[
        bool,
        typer.Option("--translated/--original", help="Read the translation or the original."),
    ] = True,
    language: Annotated[
        Optional[str],
        typer.Option("--lang", "-l", help="Language/locale for the voice (e.g. vi, en-US)."),
    ] = None,
) -> None:
    """Speak one subtitle line with the system's speech engine.

    Waits until the line has actually been spoken.
    """
    from studykit.speech.local import LocalSpeaker

    try:
        data, _ = load_kit(kit)
    except FileNotFoundError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)

    sub = next((s for s in data.subtitles if s.id == line), None)
    if sub is None:
        console.print(f"[red]No subtitle with id {line}.[/red]")
        raise typer.Exit(1)

    config = load_config()
    if language is None:
        language = config.study.target_language if translated else "en"
        if not translated and config.study.source_language != "auto":
            language = config.study.source_language
    text = sub.text_translated if translated else sub.text_original

    with LocalSpeaker(config.speech) as speaker:
        task = speaker.speak(text, language)
        try:
            with console.status(f"Speaking ({task.locale}): {text}"):
                task.wait()
        except KeyboardInterrupt:
            task.cancel()
            raise typer.Exit(130)

    if task.error is not None:
        console.print(f"[red]Speech failed:[/red] {task.error}")
        raise typer.Exit(1)
