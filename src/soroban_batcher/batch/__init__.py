"""Nonce-sequenced batch submission with block-boundary synchronization."""

from soroban_batcher.batch.coordinator import BatchCoordinator
from soroban_batcher.batch.nonce import NonceTracker
from soroban_batcher.batch.observer import BlockObserver
from soroban_batcher.batch.submitter import TransactionSubmitter

__all__ = ["BatchCoordinator", "NonceTracker", "BlockObserver", "TransactionSubmitter"]
