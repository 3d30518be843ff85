"""studykit languages / voices commands — list supported languages and voices."""

from __future__ import annotations

from rich.table import Table

from studykit.core.languages import GEMINI_VOICES, LANGUAGES, speech_locale
from studykit.utils.console import console


def languages() -> None:
    """List language codes accepted by --from and --to."""
    table = Table(title=f"Supported Languages ({len(LANGUAGES)})")
    table.add_column("Code", style="bold cyan", width=5)
    table.add_column("Language", width=20)
    table.add_column("Speech locale", width=14)

    for code in sorted(LANGUAGES):
        table.add_row(code, LANGUAGES[code].title(), speech_locale(code))

    console.print(table)
    console.print("\n[dim]Use --from auto to let Gemini detect the source language.[/dim]")


def voices() -> None:
    """List the prebuilt Gemini voices available for dubbing."""
    table = Table(title=f"Gemini Voices ({len(GEMINI_VOICES)})")
    table.add_column("Voice", style="bold cyan")
    table.add_column("Style")

    for name, style in GEMINI_VOICES.items():
        table.add_row(name, style)

    console.print(table)
