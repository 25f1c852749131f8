"""Batch coordinator - the state machine that drives one batch.

Phases:
    awaiting_clean_block -> submitting -> awaiting_boundary -> verifying -> done

The batch starts on a block boundary, submits between ``min_target`` and
``max_target`` transactions with sequential nonces, stops at the first of
{target reached, new block observed}, waits out the current block if needed
and finally reads the transaction count of the block that received the
submissions.
"""

from __future__ import annotations

import logging
import random
import time
from datetime import datetime, timezone

from soroban_batcher.batch.nonce import NonceTracker
from soroban_batcher.batch.observer import BlockObserver
from soroban_batcher.batch.submitter import TransactionSubmitter
from soroban_batcher.errors import BatcherError, NodeUnavailable
from soroban_batcher.interfaces.provider import Provider
from soroban_batcher.models.records import BatchPhase, BatchReport, BatchState, Call

log = logging.getLogger(__name__)

DEFAULT_MIN_TARGET = 3
DEFAULT_MAX_TARGET = 10


class BatchCoordinator:
    """Runs a single-task, strictly serialized submission batch.

    The random target count comes from the injected ``rng`` so that runs can
    be reproduced with a seeded ``random.Random``.
    """

    def __init__(
        self,
        provider: Provider,
        submitter: TransactionSubmitter,
        observer: BlockObserver,
        rng: random.Random | None = None,
        min_target: int = DEFAULT_MIN_TARGET,
        max_target: int = DEFAULT_MAX_TARGET,
        await_confirmation: bool = False,
    ) -> None:
        if min_target < 1 or min_target > max_target:
            raise ValueError(f"invalid target range [{min_target}, {max_target}]")
        self._provider = provider
        self._submitter = submitter
        self._observer = observer
        self._rng = rng or random.Random()
        self._min_target = min_target
        self._max_target = max_target
        self._await_confirmation = await_confirmation
        self._tracker = NonceTracker()
        self._state: BatchState | None = None

    @property
    def state(self) -> BatchState | None:
        """State of the current (or last) batch. None before the first run."""
        return self._state

    @property
    def tracker(self) -> NonceTracker:
        return self._tracker

    def choose_target(self) -> int:
        """Draw the target transaction count, inclusive on both ends."""
        return self._rng.randint(self._min_target, self._max_target)

    async def run(self, call: Call) -> BatchReport:
        """Run one batch to completion. Any error aborts the whole batch."""
        started_at = datetime.now(timezone.utc).isoformat()
        start = time.monotonic()

        self._tracker = NonceTracker()
        state = BatchState(target_count=self.choose_target())
        self._state = state
        log.info(
            "Starting batch: target=%d call=%s.%s",
            state.target_count, call.target[:12], call.selector,
        )

        # Start on a block boundary, never mid-block
        initial = await self._observer.current_height()
        state.start_height = await self._observer.wait_for_height_increase(initial)
        state.sync_height = state.start_height

        self._enter(BatchPhase.SUBMITTING)
        self._tracker.initialize(await self._read_nonce())
        await self._submit_until_boundary(call)

        self._enter(BatchPhase.AWAITING_BOUNDARY)
        if not state.boundary_seen:
            state.sync_height = await self._observer.wait_for_height_increase(
                state.sync_height
            )

        self._enter(BatchPhase.VERIFYING)
        block_tx_count = await self._block_tx_count(state.sync_height)
        log.info(
            "Block %d contains %d transactions (%d submitted by this batch)",
            state.sync_height, block_tx_count, state.submitted_count,
        )

        self._enter(BatchPhase.DONE)
        return BatchReport(
            submitted_count=state.submitted_count,
            block_tx_count=block_tx_count,
            target_count=state.target_count,
            start_height=state.start_height,
            verified_height=state.sync_height,
            nonces=list(state.nonces),
            tx_hashes=list(state.tx_hashes),
            stopped_early=state.boundary_seen,
            started_at=started_at,
            completed_at=datetime.now(timezone.utc).isoformat(),
            duration_ms=int((time.monotonic() - start) * 1000),
        )

    async def _submit_until_boundary(self, call: Call) -> None:
        """Submit until the target is reached or a new block shows up.

        A height increase seen after a submission wins over reaching the
        target in the same step.
        """
        state = self._require_state()
        while True:
            nonce = self._tracker.next()
            result = await self._submitter.submit(call, nonce)
            state.submitted_count += 1
            state.nonces.append(result.nonce)
            state.tx_hashes.append(result.tx_hash)
            log.info("Nonce after tx: %d", self._tracker.peek)

            if self._await_confirmation:
                await self._submitter.wait_for_confirmation(result)

            new_height = await self._observer.has_advanced(state.sync_height)
            if new_height is not None:
                log.info(
                    "New block %d observed after %d/%d submissions, stopping",
                    new_height, state.submitted_count, state.target_count,
                )
                state.sync_height = new_height
                state.boundary_seen = True
                return

            if state.submitted_count >= state.target_count:
                log.info("Target of %d submissions reached", state.target_count)
                return

    async def _read_nonce(self) -> int:
        address = self._submitter.address
        try:
            nonce = await self._provider.get_nonce(address, "pending")
        except BatcherError:
            raise
        except Exception as exc:
            raise NodeUnavailable("get_nonce", str(exc)) from exc
        log.info("Starting nonce for %s: %d", address[:12], nonce)
        return nonce

    async def _block_tx_count(self, height: int) -> int:
        try:
            return await self._provider.get_block_transaction_count(height)
        except BatcherError:
            raise
        except Exception as exc:
            raise NodeUnavailable("get_block_transaction_count", str(exc)) from exc

    def _enter(self, phase: BatchPhase) -> None:
        state = self._require_state()
        log.info("Batch phase: %s -> %s", state.phase.value, phase.value)
        state.phase = phase

    def _require_state(self) -> BatchState:
        if self._state is None:
            raise RuntimeError("no batch in progress")
        return self._state
