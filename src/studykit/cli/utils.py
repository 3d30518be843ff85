"""Shared CLI utilities."""

from __future__ import annotations

import asyncio
import signal
from typing import Awaitable, Callable, TypeVar

import typer

from studykit.core.cancellation import CancelToken
from studykit.core.errors import ProcessingCancelledError, StudyKitError
from studykit.utils.console import console

T = TypeVar("T")

# Conventional exit status for a run interrupted with Ctrl+C
EXIT_CANCELLED = 130


def run_cancellable_command(make_coro: Callable[[CancelToken], Awaitable[T]]) -> T:
    """Run an async command, turning Ctrl+C into a cooperative cancellation.

    StudyKit errors are printed and converted to a non-zero exit; a
    cancellation exits quietly.
    """

    async def _main() -> T:
        cancel = CancelToken()
        loop = asyncio.get_running_loop()
        try:
            loop.add_signal_handler(signal.SIGINT, cancel.cancel)
        except (NotImplementedError, RuntimeError):
            pass  # Windows: Ctrl+C raises KeyboardInterrupt instead
        try:
            return await make_coro(cancel)
        finally:
            try:
                loop.remove_signal_handler(signal.SIGINT)
            except (NotImplementedError, RuntimeError):
                pass

    try:
        return asyncio.run(_main())
    except (ProcessingCancelledError, KeyboardInterrupt):
        console.print("[dim]Cancelled.[/dim]")
        raise typer.Exit(EXIT_CANCELLED)
    except StudyKitError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)


def validate_or_exit(validator: Callable[..., T], *args: object, **kwargs: object) -> T:
    """Call a validator, printing its ValueError and exiting on failure."""
    try:
        return validator(*args, **kwargs)
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)
