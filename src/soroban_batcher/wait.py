"""Cooperative poll-and-sleep helper."""

from __future__ import annotations

import asyncio
import time
from typing import Awaitable, Callable, TypeVar

T = TypeVar("T")


async def wait_until(
    fn: Callable[[], Awaitable[T]],
    predicate: Callable[[T], bool] = bool,
    poll_interval: float = 0.5,
    timeout: float | None = None,
    error_with: str = "Timed out",
) -> T:
    """Await ``fn()`` every ``poll_interval`` seconds until ``predicate`` holds.

    Returns the first value that satisfies the predicate. Exceptions raised by
    ``fn`` propagate immediately. With ``timeout=None`` there is no retry cap,
    the caller is parked until the predicate holds.
    """
    deadline = None if timeout is None else time.monotonic() + timeout
    while True:
        value = await fn()
        if predicate(value):
            return value
        if deadline is not None and time.monotonic() + poll_interval > deadline:
            raise TimeoutError(error_with)
        await asyncio.sleep(poll_interval)
