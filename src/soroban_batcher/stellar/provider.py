"""Soroban RPC provider - ledger height, account sequence and ledger tx counts."""

from __future__ import annotations

import logging

from stellar_sdk import SorobanServerAsync
from stellar_sdk.exceptions import AccountNotFoundException, BaseRequestError

from soroban_batcher.errors import AccountNotFound, NodeUnavailable

log = logging.getLogger(__name__)

# getTransactions page size (the RPC caps it at 200)
_TX_PAGE_LIMIT = 200

_NONCE_BLOCKS = ("pending", "latest")


class SorobanProvider:
    """Implements the Provider protocol on top of SorobanServerAsync.

    A Stellar ledger plays the role of a block and the account sequence
    number plays the role of the nonce. Soroban RPC has no separate pending
    state, so "pending" and "latest" read the same ledger entry.
    """

    def __init__(
        self,
        rpc_url: str,
        server: SorobanServerAsync | None = None,
    ) -> None:
        self._rpc_url = rpc_url
        self._server = server or SorobanServerAsync(rpc_url)

    @property
    def server(self) -> SorobanServerAsync:
        """The underlying RPC client, shared with the account and waiter."""
        return self._server

    async def close(self) -> None:
        """Close the underlying aiohttp session."""
        await self._server.close()

    async def current_block_height(self) -> int:
        try:
            latest = await self._server.get_latest_ledger()
        except BaseRequestError as exc:
            raise NodeUnavailable("get_latest_ledger", str(exc)) from exc
        return latest.sequence

    async def get_nonce(self, address: str, block: str = "pending") -> int:
        """Return the sequence number the next transaction from ``address`` needs."""
        if block not in _NONCE_BLOCKS:
            raise ValueError(f"unsupported block selector for nonce: {block!r}")
        try:
            account = await self._server.load_account(address)
        except AccountNotFoundException as exc:
            raise AccountNotFound(address) from exc
        except BaseRequestError as exc:
            raise NodeUnavailable("load_account", str(exc)) from exc
        return account.sequence + 1

    async def get_block_transaction_count(self, height: int) -> int:
        """Count transactions (successful and failed) applied in ledger ``height``."""
        count = 0
        try:
            response = await self._server.get_transactions(
                start_ledger=height, limit=_TX_PAGE_LIMIT,
            )
            while True:
                for tx in response.transactions:
                    if tx.ledger > height:
                        return count
                    if tx.ledger == height:
                        count += 1
                if len(response.transactions) < _TX_PAGE_LIMIT:
                    return count
                log.debug("Ledger %d: %d txs so far, fetching next page", height, count)
                response = await self._server.get_transactions(
                    cursor=response.cursor, limit=_TX_PAGE_LIMIT,
                )
        except BaseRequestError as exc:
            raise NodeUnavailable("get_transactions", str(exc)) from exc
