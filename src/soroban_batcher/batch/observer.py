"""Block observer - polls the node for block height and detects boundaries."""

from __future__ import annotations

import logging

from soroban_batcher.errors import BatcherError, NodeUnavailable
from soroban_batcher.interfaces.provider import Provider
from soroban_batcher.wait import wait_until

log = logging.getLogger(__name__)

DEFAULT_POLL_INTERVAL = 0.5  # seconds


class BlockObserver:
    """Reads block height through a Provider.

    Waiting is a fixed-interval poll with no backoff and no retry ceiling:
    if the node never produces a block, ``wait_for_height_increase`` never
    returns.
    """

    def __init__(
        self,
        provider: Provider,
        poll_interval: float = DEFAULT_POLL_INTERVAL,
    ) -> None:
        self._provider = provider
        self._poll_interval = poll_interval

    @property
    def poll_interval(self) -> float:
        return self._poll_interval

    async def current_height(self) -> int:
        """Return the node's current block height."""
        try:
            height = await self._provider.current_block_height()
        except BatcherError:
            raise
        except Exception as exc:
            raise NodeUnavailable("current_block_height", str(exc)) from exc
        log.debug("Observed block height %d", height)
        return height

    async def has_advanced(self, baseline: int) -> int | None:
        """Single check: the new height if it exceeds ``baseline``, else None."""
        height = await self.current_height()
        if height > baseline:
            return height
        return None

    async def wait_for_height_increase(self, baseline: int) -> int:
        """Block until an observed height is strictly greater than ``baseline``."""
        log.debug("Waiting for block height above %d", baseline)
        height = await wait_until(
            self.current_height,
            lambda h: h > baseline,
            poll_interval=self._poll_interval,
        )
        log.info("Block height advanced %d -> %d", baseline, height)
        return height
