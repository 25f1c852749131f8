"""Error taxonomy for batch runs. Every error here is fatal to the current batch."""

from __future__ import annotations


class BatcherError(Exception):
    """Base class for all soroban_batcher errors."""


class NodeUnavailable(BatcherError):
    """Transport or connection failure while talking to the node RPC."""

    def __init__(self, operation: str, detail: str = "") -> None:
        self.operation = operation
        self.detail = detail
        msg = f"node unavailable during {operation}"
        if detail:
            msg = f"{msg}: {detail}"
        super().__init__(msg)


class SubmissionRejected(BatcherError):
    """The node refused a transaction (simulation failure, bad sequence, ...)."""

    def __init__(self, reason: str, nonce: int | None = None) -> None:
        self.reason = reason
        self.nonce = nonce
        if nonce is None:
            super().__init__(f"submission rejected: {reason}")
        else:
            super().__init__(f"submission rejected (nonce {nonce}): {reason}")


class ConfirmationTimeout(BatcherError):
    """A submitted transaction was not included within the waiter's bound."""

    def __init__(self, tx_hash: str, timeout: float) -> None:
        self.tx_hash = tx_hash
        self.timeout = timeout
        super().__init__(f"transaction {tx_hash} not confirmed after {timeout:g}s")


class AccountNotFound(BatcherError):
    """The signing account does not exist on the network."""

    def __init__(self, address: str) -> None:
        self.address = address
        super().__init__(f"account not found: {address}")
