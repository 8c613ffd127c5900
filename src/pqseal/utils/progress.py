"""Progress indicator for long-running operations."""

from __future__ import annotations

import asyncio
import contextlib
import itertools
from collections.abc import Awaitable
from typing import TextIO, TypeVar

from ..constants import DEFAULT_PROGRESS_INTERVAL_MS

T = TypeVar("T")

SPINNER_FRAMES = "|/-\\"


async def spin(
    message: str,
    stream: TextIO,
    interval_ms: int = DEFAULT_PROGRESS_INTERVAL_MS,
) -> None:
    """Render a spinner on ``stream`` until cancelled.

    Args:
        message: Text shown next to the spinner.
        stream: Output stream, usually stderr.
        interval_ms: Refresh interval in milliseconds.
    """
    try:
        for frame in itertools.cycle(SPINNER_FRAMES):
            stream.write(f"\r{frame} {message}")
            stream.flush()
            await asyncio.sleep(interval_ms / 1000)
    finally:
        stream.write("\r" + " " * (len(message) + 2) + "\r")
        stream.flush()


async def with_progress(
    awaitable: Awaitable[T],
    message: str,
    stream: TextIO,
    interval_ms: int = DEFAULT_PROGRESS_INTERVAL_MS,
) -> T:
    """Await ``awaitable`` while a spinner runs on ``stream``.

    Args:
        awaitable: The work to wait for.
        message: Text shown next to the spinner.
        stream: Output stream, usually stderr.
        interval_ms: Refresh interval in milliseconds.

    Returns:
        The result of ``awaitable``.
    """
    spinner = asyncio.create_task(spin(message, stream, interval_ms))
    try:
        return await awaitable
    finally:
        spinner.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await spinner
