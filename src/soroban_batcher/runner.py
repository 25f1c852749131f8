"""Batch runner - wires config, Stellar collaborators, coordinator and history store."""

from __future__ import annotations

import logging
import random

from stellar_sdk import Keypair

from soroban_batcher.batch.coordinator import BatchCoordinator
from soroban_batcher.batch.observer import BlockObserver
from soroban_batcher.batch.submitter import TransactionSubmitter
from soroban_batcher.errors import BatcherError
from soroban_batcher.interfaces.store import BatchStore
from soroban_batcher.models.config import BatcherConfig
from soroban_batcher.models.records import BatchReport, Call
from soroban_batcher.stellar.account import SorobanAccount
from soroban_batcher.stellar.args import parse_args
from soroban_batcher.stellar.provider import SorobanProvider
from soroban_batcher.stellar.waiter import SorobanConfirmationWaiter
from soroban_batcher.storage.sqlite import SQLiteBatchStore

log = logging.getLogger(__name__)


class BatchRunner:
    """Runs one batch against a Soroban RPC node and records the outcome.

    Components are public attributes so they can be swapped before ``run()``.
    """

    def __init__(self, cfg: BatcherConfig, record_history: bool = True) -> None:
        problems = cfg.validate()
        if problems:
            raise ValueError("invalid configuration: " + "; ".join(problems))
        self._cfg = cfg

        keypair = Keypair.from_secret(cfg.keypair_secret)

        self.provider = SorobanProvider(cfg.rpc_url)
        self.account = SorobanAccount(
            self.provider.server, keypair, cfg.network_passphrase, cfg.base_fee,
        )
        self.waiter = SorobanConfirmationWaiter(
            self.provider.server,
            timeout=cfg.confirmation_timeout,
            poll_interval=cfg.poll_interval,
        )
        self.store: BatchStore | None = (
            SQLiteBatchStore(cfg.db_path) if record_history else None
        )
        self.rng = random.Random(cfg.seed)
        self.coordinator: BatchCoordinator | None = None
        self.last_batch_id: int | None = None

    def build_call(self) -> Call:
        return Call(
            target=self._cfg.call.contract_id,
            selector=self._cfg.call.function,
            args=parse_args(self._cfg.call.args),
        )

    def build_coordinator(self) -> BatchCoordinator:
        return BatchCoordinator(
            provider=self.provider,
            submitter=TransactionSubmitter(self.account, self.waiter),
            observer=BlockObserver(self.provider, self._cfg.poll_interval),
            rng=self.rng,
            min_target=self._cfg.min_target,
            max_target=self._cfg.max_target,
            await_confirmation=self._cfg.await_confirmation,
        )

    async def run(self) -> BatchReport:
        """Run a single batch. Errors are recorded, then re-raised."""
        log.info("Starting batch run")
        log.info("  Account: %s", self.account.address)
        log.info("  RPC: %s", self._cfg.rpc_url)
        log.info("  Call: %s.%s", self._cfg.call.contract_id, self._cfg.call.function)
        log.info("  Targets: [%d, %d]", self._cfg.min_target, self._cfg.max_target)

        call = self.build_call()
        self.coordinator = self.build_coordinator()

        if self.store:
            await self.store.initialize()
        try:
            try:
                report = await self.coordinator.run(call)
            except BatcherError as exc:
                log.error("Batch aborted: %s", exc)
                state = self.coordinator.state
                if self.store and state is not None:
                    self.last_batch_id = await self.store.save_failure(state, str(exc))
                raise

            if self.store:
                self.last_batch_id = await self.store.save_report(report)
                log.info("Recorded batch #%d", self.last_batch_id)
            return report
        finally:
            await self.provider.close()
            if self.store:
                await self.store.close()


async def run_batch(cfg: BatcherConfig, record_history: bool = True) -> BatchReport:
    """Entry point for running one batch."""
    runner = BatchRunner(cfg, record_history=record_history)
    return await runner.run()
