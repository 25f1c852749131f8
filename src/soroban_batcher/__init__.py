"""Nonce-sequenced Soroban transaction batches synchronized to ledger boundaries."""

__version__ = "0.1.0"
