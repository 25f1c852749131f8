"""Confirmation waiter - polls getTransaction until a hash is included."""

from __future__ import annotations

import logging

from stellar_sdk import SorobanServerAsync
from stellar_sdk.exceptions import BaseRequestError
from stellar_sdk.soroban_rpc import GetTransactionStatus

from soroban_batcher.errors import ConfirmationTimeout, NodeUnavailable, SubmissionRejected
from soroban_batcher.wait import wait_until

log = logging.getLogger(__name__)


class SorobanConfirmationWaiter:
    """Implements the ConfirmationWaiter protocol against Soroban RPC."""

    def __init__(
        self,
        server: SorobanServerAsync,
        timeout: float = 30,
        poll_interval: float = 1.0,
    ) -> None:
        self._server = server
        self._timeout = timeout
        self._poll_interval = poll_interval

    async def wait(self, tx_hash: str) -> None:
        try:
            response = await wait_until(
                lambda: self._server.get_transaction(tx_hash),
                lambda r: r.status != GetTransactionStatus.NOT_FOUND,
                poll_interval=self._poll_interval,
                timeout=self._timeout,
            )
        except TimeoutError as exc:
            raise ConfirmationTimeout(tx_hash, self._timeout) from exc
        except BaseRequestError as exc:
            raise NodeUnavailable("get_transaction", str(exc)) from exc

        if response.status == GetTransactionStatus.FAILED:
            raise SubmissionRejected(f"transaction {tx_hash} failed in ledger {response.ledger}")
        log.debug("tx %s included in ledger %s", tx_hash[:16], response.ledger)
