"""Transaction submitter - dispatches one signed call with an explicit nonce."""

from __future__ import annotations

import logging

from soroban_batcher.errors import NodeUnavailable
from soroban_batcher.interfaces.account import Account
from soroban_batcher.interfaces.waiter import ConfirmationWaiter
from soroban_batcher.models.records import Call, SubmissionResult

log = logging.getLogger(__name__)


class TransactionSubmitter:
    """Sends calls through an Account, one at a time, never retrying.

    A rejection surfaces as SubmissionRejected from the account adapter and
    aborts the batch. Inclusion is awaited separately through the
    ConfirmationWaiter, only when the caller asks for it.
    """

    def __init__(
        self,
        account: Account,
        waiter: ConfirmationWaiter | None = None,
    ) -> None:
        self._account = account
        self._waiter = waiter

    @property
    def address(self) -> str:
        return self._account.address

    async def submit(self, call: Call, nonce: int) -> SubmissionResult:
        """Dispatch ``call`` with ``nonce`` and return once the node accepts it."""
        log.info("Nonce before tx: %d", nonce)
        try:
            tx_hash = await self._account.execute(call, nonce)
        except OSError as exc:
            raise NodeUnavailable("execute", str(exc)) from exc

        log.info(
            "Dispatched %s on %s (nonce=%d, tx=%s)",
            call.selector,
            call.target[:12],
            nonce,
            tx_hash[:16] if tx_hash else "?",
        )
        return SubmissionResult(tx_hash=tx_hash, nonce=nonce)

    async def wait_for_confirmation(self, result: SubmissionResult) -> None:
        """Block until the transaction in ``result`` is included."""
        if self._waiter is None:
            raise RuntimeError("no confirmation waiter configured")
        log.debug("Waiting for confirmation of %s", result.tx_hash[:16])
        await self._waiter.wait(result.tx_hash)
        log.info("Confirmed tx %s (nonce=%d)", result.tx_hash[:16], result.nonce)
