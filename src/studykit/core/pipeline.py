"""Pipeline orchestrator — process, save exports, optionally dub."""

from __future__ import annotations

from functools import partial
from pathlib import Path

from studykit.core.cancellation import CancelToken
from studykit.core.config import StudyKitConfig
from studykit.core.events import EventCallback, PipelineEvent
from studykit.core.models import MediaFile, ProcessingOptions
from studykit.utils.console import console
from studykit.utils.paths import create_workspace, save_kit, save_metadata, workspace_paths


async def run_pipeline(
    media_path: Path,
    config: StudyKitConfig,
    options: ProcessingOptions,
    dub: bool = False,
    on_event: EventCallback | None = None,
    cancel: CancelToken | None = None,
    client=None,
) -> Path:
    """Run the full processing pipeline.

    Args:
        media_path: Local video or audio file.
        config: Full application config.
        options: Languages and extras to generate.
        dub: Whether to render the translated dub track.
        on_event: Optional callback for streaming progress events.
        cancel: Optional token; firing it aborts the run.
        client: Optional pre-built Gemini client (defaults to one built from config).

    Returns:
        Path to the workspace directory.
    """
    from studykit.ai.processor import StudyKitProcessor
    from studykit.export.media import StudyKitExporter
    from studykit.subtitles.converter import save_bilingual_vtt
    from studykit.subtitles.srt import SubtitleMode

    def emit(stage: str, progress: float, message: str, data: dict | None = None) -> None:
        if on_event:
            on_event(PipelineEvent(stage=stage, progress=progress, message=message, data=data))

    # Step 1: Resolve input and check credentials before touching the network
    media = MediaFile.from_path(Path(media_path))
    processor = StudyKitProcessor(config, client=client)

    # Step 2: Generate the study kit
    console.print(f"[bold]Processing:[/bold] {media.name} ({media.size / (1024 * 1024):.1f} MB)")
    data = await processor.process(media, options, on_event=on_event, cancel=cancel)
    console.print(
        f"[green]Study kit:[/green] {len(data.subtitles)} subtitles, "
        f"{len(data.notes)} notes, {len(data.flashcards)} flashcards"
    )

    # Step 3: Create workspace and save the kit
    emit("save", 0.0, "Saving study kit...")
    workspace = create_workspace(media.path.stem, base_dir=config.workspace_dir)
    paths = workspace_paths(workspace, media.stem)
    console.print(f"[bold]Workspace:[/bold] {workspace}")
    save_kit(data, paths["kit"], source=media.path)
    console.print(f"[green]Saved:[/green] {paths['kit']}")

    # Step 4: Subtitle exports
    exporter = StudyKitExporter(media, data, workspace)
    for mode in SubtitleMode:
        exporter.export_subtitles(mode)
    save_bilingual_vtt(data.subtitles, paths["bilingual_vtt"])
    console.print(f"[green]Saved:[/green] {paths['bilingual_vtt']}")

    # Step 5: Optional dub track
    if dub:
        from studykit.ai.tts import synthesize_speech

        emit("dub", 0.0, "Generating dub track...")

        def _on_dub_progress(completed: int, total: int) -> None:
            emit("dub", completed / total, f"Dubbing ({completed}/{total})...")

        synthesize = partial(
            synthesize_speech,
            processor.client,
            voice=config.dub.voice,
            config=config.gemini,
        )
        dub_path = await exporter.export_dub(
            synthesize, config.dub, on_progress=_on_dub_progress, cancel=cancel
        )
        command = exporter.mux_command(dub_path, video=media.path.resolve())
        paths["mux_command"].write_text(command + "\n", encoding="utf-8")
        console.print(f"[bold]Mux with:[/bold] {command}")
        emit("dub", 1.0, "Dub track ready")

    # Step 6: Save metadata
    save_metadata(
        workspace,
        source=media.path.resolve(),
        source_size=media.size,
        mime_type=media.mime_type,
        source_language=options.source_language,
        target_language=options.target_language,
        generate_notes=options.generate_notes,
        generate_flashcards=options.generate_flashcards,
        model=config.gemini.model,
        tts_model=config.gemini.tts_model if dub else None,
        voice=config.dub.voice if dub else None,
    )

    emit("save", 1.0, "Done", data={"workspace": str(workspace)})
    console.print(f"\n[bold green]Done![/bold green] Workspace: {workspace}")
    return workspace
