"""Provider protocol - read-only node queries used by the batch core."""

from __future__ import annotations

from typing import Protocol


class Provider(Protocol):
    """Node RPC capability. Encoding and transport timeouts are its concern."""

    async def current_block_height(self) -> int:
        """Return the latest block height known to the node."""
        ...

    async def get_nonce(self, address: str, block: str = "pending") -> int:
        """Return the nonce the next transaction from ``address`` must carry."""
        ...

    async def get_block_transaction_count(self, height: int) -> int:
        """Return the number of transactions included in block ``height``."""
        ...

    async def close(self) -> None:
        ...
