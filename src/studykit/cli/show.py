"""studykit show command — print a saved study kit."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer
from rich.table import Table

from studykit.utils.console import console
from studykit.utils.paths import load_kit

SECTIONS = ("transcript", "notes", "flashcards")


def show(
    kit: Annotated[
        Path,
        typer.Argument(help="Workspace directory or kit.json file."),
    ],
    section: Annotated[
        str,
        typer.Option("--section", "-S", help="What to show: transcript, notes, flashcards, all."),
    ] = "all",
) -> None:
    """Show the transcript, notes and flashcards of a study kit."""
    if section != "all" and section not in SECTIONS:
        choices = ", ".join(SECTIONS)
        console.print(f"[red]Unknown section:[/red] {section}. Choose from: all, {choices}")
        raise typer.Exit(1)

    try:
        data, _ = load_kit(kit)
    except FileNotFoundError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)

    if section in ("all", "transcript"):
        table = Table(title=f"Transcript ({len(data.subtitles)} lines)")
        table.add_column("#", justify="right", style="dim")
        table.add_column("Start", style="cyan", no_wrap=True)
        table.add_column("Original")
        table.add_column("Translation", style="italic magenta")
        for sub in data.subtitles:
            table.add_row(str(sub.id), sub.start_time, sub.text_original, sub.text_translated)
        console.print(table)

    if section in ("all", "notes"):
        table = Table(title=f"Notes ({len(data.notes)})")
        table.add_column("Time", style="cyan", no_wrap=True)
        table.add_column("Title", style="bold")
        table.add_column("Content")
        for note in data.notes:
            table.add_row(note.timestamp, note.title, note.content)
        console.print(table)

    if section in ("all", "flashcards"):
        table = Table(title=f"Flashcards ({len(data.flashcards)})")
        table.add_column("Term", style="bold")
        table.add_column("Definition")
        table.add_column("Context", style="dim")
        for card in data.flashcards:
            table.add_row(card.term, card.definition, card.context)
        console.print(table)
