"""Cooperative polling helper."""

from __future__ import annotations

import pytest

from soroban_batcher.wait import wait_until


async def test_wait_until_returns_first_matching_value():
    values = iter([1, 2, 3, 4])

    async def next_value():
        return next(values)

    assert await wait_until(next_value, lambda v: v >= 3, poll_interval=0.0) == 3


async def test_wait_until_times_out():
    async def never():
        return False

    with pytest.raises(TimeoutError, match="still waiting"):
        await wait_until(never, poll_interval=0.01, timeout=0.05, error_with="still waiting")


async def test_wait_until_propagates_errors():
    calls = 0

    async def flaky():
        nonlocal calls
        calls += 1
        raise ConnectionError("down")

    with pytest.raises(ConnectionError):
        await wait_until(flaky, poll_interval=0.0)
    assert calls == 1
