"""studykit export command — subtitle files and source media from a saved kit."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated, Optional

import typer

from studykit.core.models import MediaFile
from studykit.export.media import StudyKitExporter
from studykit.subtitles.srt import SubtitleMode
from studykit.utils.console import console
from studykit.utils.paths import load_kit

FORMATS = ("srt", "vtt", "ass", "txt")


def _resolve_media(kit_source: Path | None, media: Path | None) -> MediaFile:
    path = media or kit_source
    if path is None:
        console.print("[red]The kit does not record its source media; pass --media.[/red]")
        raise typer.Exit(1)
    try:
        return MediaFile.from_path(path)
    except FileNotFoundError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)


def export(
    kit: Annotated[
        Path,
        typer.Argument(help="Workspace directory or kit.json file."),
    ],
    mode: Annotated[
        SubtitleMode,
        typer.Option("--mode", help="Subtitle text: bilingual, original or translated."),
    ] = SubtitleMode.BILINGUAL,
    fmt: Annotated[
        str,
        typer.Option("--format", "-f", help="Output format: srt, vtt, ass, txt."),
    ] = "srt",
    output: Annotated[
        Optional[Path],
        typer.Option("--output", "-o", help="Output directory (defaults to the kit's directory)."),
    ] = None,
    source: Annotated[
        bool,
        typer.Option("--source", help="Also copy the original media file."),
    ] = False,
    media: Annotated[
        Optional[Path],
        typer.Option("--media", help="Source media path, if it moved since processing."),
    ] = None,
) -> None:
    """Export subtitles (and optionally the source media) from a study kit."""
    if fmt not in FORMATS:
        console.print(f"[red]Unknown format:[/red] {fmt}. Choose from: {', '.join(FORMATS)}")
        raise typer.Exit(1)

    try:
        data, kit_source = load_kit(kit)
    except FileNotFoundError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)

    media_file = _resolve_media(kit_source, media)
    output_dir = output or (kit if kit.is_dir() else kit.parent)
    exporter = StudyKitExporter(media_file, data, output_dir)

    exporter.export_subtitles(mode, fmt=fmt)
    if source:
        exporter.export_source()
