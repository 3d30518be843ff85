"""Cooperative cancellation for in-flight AI work.

A ``CancelToken`` is shared by everything started for one user action.
Each suspension point (file read, poll wait, network call) goes through
``run_cancellable`` or ``cancellable_sleep`` so that firing the token
rejects the pending operation right away.
"""

from __future__ import annotations

import asyncio
import inspect
from typing import Awaitable, TypeVar

from studykit.core.errors import ProcessingCancelledError

T = TypeVar("T")


class CancelToken:
    """A one-shot cancellation signal bound to asyncio."""

    def __init__(self) -> None:
        self._event = asyncio.Event()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def cancel(self) -> None:
        self._event.set()

    def raise_if_cancelled(self) -> None:
        if self._event.is_set():
            raise ProcessingCancelledError()

    async def wait(self) -> None:
        await self._event.wait()


def _discard(awaitable: Awaitable) -> None:
    """Close an awaitable that will never be awaited."""
    if inspect.iscoroutine(awaitable):
        awaitable.close()
    elif isinstance(awaitable, asyncio.Future):
        awaitable.cancel()


async def run_cancellable(awaitable: Awaitable[T], cancel: CancelToken | None = None) -> T:
    """Await an operation, aborting it as soon as the token fires.

    If the token is already set the operation is never started.

    Raises:
        ProcessingCancelledError: If the token fires before the operation ends.
    """
    if cancel is None:
        return await awaitable
    if cancel.cancelled:
        _discard(awaitable)
        raise ProcessingCancelledError()

    task = asyncio.ensure_future(awaitable)
    waiter = asyncio.ensure_future(cancel.wait())
    try:
        await asyncio.wait({task, waiter}, return_when=asyncio.FIRST_COMPLETED)
    except asyncio.CancelledError:
        task.cancel()
        raise
    finally:
        waiter.cancel()

    if task.done():
        return task.result()

    task.cancel()
    # Let the operation unwind; its own outcome no longer matters
    await asyncio.gather(task, return_exceptions=True)
    raise ProcessingCancelledError()


async def cancellable_sleep(seconds: float, cancel: CancelToken | None = None) -> None:
    """Sleep for ``seconds``, waking early with an error if the token fires."""
    await run_cancellable(asyncio.sleep(seconds), cancel)
