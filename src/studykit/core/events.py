"""Pipeline event system for streaming progress to external consumers.

Provides a lightweight callback mechanism that the processor and pipeline
emit events through. Consumers (CLI status line, tests) register a callback
to receive real-time updates without modifying processing logic.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable


@dataclass
class PipelineEvent:
    """A progress event emitted during processing.

    Attributes:
        stage: Stage name (prepare, upload, poll, generate, dub, save).
        progress: Overall progress, 0.0 to 1.0.
        message: Human-readable status message.
        data: Optional payload (e.g. remote file state, file paths).
    """

    stage: str
    progress: float
    message: str
    data: dict | None = field(default=None)

    @property
    def percent(self) -> int:
        return int(round(self.progress * 100))


EventCallback = Callable[[PipelineEvent], None]

DubProgressCallback = Callable[[int, int], None]
"""Receives (lines completed, total lines) after each dubbed line."""
