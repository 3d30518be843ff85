"""Dub track assembly: one synthesized clip per subtitle line.

Lines are synthesized by a bounded pool of workers (``DubConfig.concurrency``,
one by default, which keeps remote calls strictly sequential and in subtitle
order) and mixed into a single offline timeline at each line's start time.
A line that fails to synthesize is reported and left silent.
"""

from __future__ import annotations

import asyncio
from typing import Awaitable, Callable

import numpy as np
from rich.progress import BarColumn, Progress, SpinnerColumn, TextColumn

from studykit.ai.tts import TTS_SAMPLE_RATE
from studykit.audio.render import OfflineRenderer
from studykit.core.cancellation import CancelToken, run_cancellable
from studykit.core.config import DubConfig
from studykit.core.errors import ProcessingCancelledError
from studykit.core.events import DubProgressCallback
from studykit.core.models import Subtitle
from studykit.utils.console import console

Synthesizer = Callable[[str], Awaitable[np.ndarray]]


def dub_duration(subtitles: list[Subtitle], trailing_margin: float) -> float:
    """Length of the dub track: last subtitle end plus a trailing margin."""
    last_end = max((sub.end for sub in subtitles), default=0.0)
    return last_end + trailing_margin


async def render_dub_track(
    subtitles: list[Subtitle],
    synthesize: Synthesizer,
    config: DubConfig,
    on_progress: DubProgressCallback | None = None,
    cancel: CancelToken | None = None,
) -> np.ndarray:
    """Synthesize every translated line and mix the clips into one track.

    Args:
        subtitles: Lines to dub; each clip starts at the line's start time.
        synthesize: Coroutine function turning text into mono samples at
            ``TTS_SAMPLE_RATE``.
        config: Dub settings (voice, margin, worker count).
        on_progress: Receives (completed, total) after every line,
            including failed and blank ones.
        cancel: Optional token; firing it stops all workers.

    Returns:
        The rendered mono track as float32 samples.
    """
    renderer = OfflineRenderer(
        dub_duration(subtitles, config.trailing_margin),
        sample_rate=TTS_SAMPLE_RATE,
    )
    total = len(subtitles)
    completed = 0
    failed = 0
    pending = iter(subtitles)

    with Progress(
        SpinnerColumn(),
        TextColumn("[bold blue]{task.description}"),
        BarColumn(),
        TextColumn("{task.completed}/{task.total} lines"),
        console=console,
    ) as progress:
        task = progress.add_task("Generating dub track", total=total)

        async def worker() -> None:
            nonlocal completed, failed
            # Workers share one iterator, so each line is taken exactly once
            for sub in pending:
                text = sub.text_translated.strip()
                if text:
                    try:
                        clip = await run_cancellable(synthesize(text), cancel)
                        renderer.schedule(clip, sub.start)
                    except ProcessingCancelledError:
                        raise
                    except Exception as e:
                        failed += 1
                        console.print(
                            f"[yellow]Dub failed for line {sub.id}, skipping:[/yellow] {e}"
                        )
                completed += 1
                progress.advance(task)
                if on_progress:
                    on_progress(completed, total)

        workers = [asyncio.ensure_future(worker()) for _ in range(max(1, config.concurrency))]
        try:
            await asyncio.gather(*workers)
        except BaseException:
            for w in workers:
                w.cancel()
            await asyncio.gather(*workers, return_exceptions=True)
            raise

    if failed:
        console.print(f"[yellow]{failed}/{total} lines could not be dubbed.[/yellow]")
    console.print(f"[green]Dub track rendered:[/green] {renderer.duration:.1f}s")
    return renderer.render()
