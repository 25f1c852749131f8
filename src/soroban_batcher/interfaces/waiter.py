"""ConfirmationWaiter protocol - blocks until a transaction is included."""

from __future__ import annotations

from typing import Protocol


class ConfirmationWaiter(Protocol):
    async def wait(self, tx_hash: str) -> None:
        """Return once ``tx_hash`` is included; raise ConfirmationTimeout otherwise."""
        ...
