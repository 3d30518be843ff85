"""StudyKit CLI entry point."""

from typing import Annotated, Optional

import typer
from dotenv import load_dotenv

from studykit import __version__
from studykit.cli.dub import dub
from studykit.cli.export import export
from studykit.cli.languages import languages, voices
from studykit.cli.process import process
from studykit.cli.show import show
from studykit.cli.speak import speak

app = typer.Typer(
    name="studykit",
    help="StudyKit — Bilingual subtitles, notes and flashcards from any video.",
    no_args_is_help=True,
)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"studykit {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        Optional[bool],
        typer.Option(
            "--version",
            "-V",
            callback=_version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = None,
) -> None:
    """StudyKit — Bilingual subtitles, notes and flashcards from any video."""
    # Load .env file for GEMINI_API_KEY
    # Existing env vars win over .env values
    load_dotenv(override=False)


app.command("process")(process)
app.command("show")(show)
app.command("export")(export)
app.command("dub")(dub)
app.command("speak")(speak)
app.command("languages")(languages)
app.command("voices")(voices)
