"""Soroban signing account - builds, simulates, signs and sends invoke transactions."""

from __future__ import annotations

import logging

from stellar_sdk import Account as StellarAccount
from stellar_sdk import Keypair, SorobanServerAsync, TransactionBuilder
from stellar_sdk.exceptions import BaseRequestError, PrepareTransactionException
from stellar_sdk.soroban_rpc import SendTransactionStatus

from soroban_batcher.errors import NodeUnavailable, SubmissionRejected
from soroban_batcher.models.records import Call

log = logging.getLogger(__name__)

DEFAULT_BASE_FEE = 100  # stroops
DEFAULT_TX_TIMEOUT = 300  # seconds of validity for each envelope


class SorobanAccount:
    """Implements the Account protocol for a Stellar keypair.

    The nonce override becomes the transaction's sequence number. Stellar's
    TransactionBuilder bumps the source account sequence by one when building,
    so the source is created at ``nonce - 1``.
    """

    def __init__(
        self,
        server: SorobanServerAsync,
        keypair: Keypair,
        network_passphrase: str,
        base_fee: int = DEFAULT_BASE_FEE,
        tx_timeout: int = DEFAULT_TX_TIMEOUT,
    ) -> None:
        self._server = server
        self._keypair = keypair
        self._public_key = keypair.public_key
        self._network_passphrase = network_passphrase
        self._base_fee = base_fee
        self._tx_timeout = tx_timeout

    @property
    def address(self) -> str:
        return self._public_key

    async def execute(self, call: Call, nonce: int) -> str:
        """Invoke ``call`` with sequence number ``nonce``. Returns the tx hash."""
        source = StellarAccount(self._public_key, nonce - 1)
        tx = (
            TransactionBuilder(
                source_account=source,
                network_passphrase=self._network_passphrase,
                base_fee=self._base_fee,
            )
            .append_invoke_contract_function_op(
                contract_id=call.target,
                function_name=call.selector,
                parameters=list(call.args),
            )
            .set_timeout(self._tx_timeout)
            .build()
        )

        try:
            tx = await self._server.prepare_transaction(tx)
        except PrepareTransactionException as exc:
            log.warning("Simulation of %s failed (nonce=%d): %s", call.selector, nonce, exc)
            raise SubmissionRejected(f"simulation_failed: {exc}", nonce) from exc
        except BaseRequestError as exc:
            raise NodeUnavailable("prepare_transaction", str(exc)) from exc

        tx.sign(self._keypair)

        try:
            response = await self._server.send_transaction(tx)
        except BaseRequestError as exc:
            raise NodeUnavailable("send_transaction", str(exc)) from exc

        if response.status != SendTransactionStatus.PENDING:
            reason = response.status.value.lower()
            if response.error_result_xdr:
                reason = f"{reason}: {response.error_result_xdr}"
            log.error(
                "send_transaction returned %s for nonce %d (tx=%s)",
                response.status.value, nonce, response.hash[:16],
            )
            raise SubmissionRejected(reason, nonce)

        return response.hash
