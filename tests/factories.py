"""Synthetic data factories for testing."""

from __future__ import annotations

import random

from soroban_batcher.batch.coordinator import DEFAULT_MAX_TARGET, DEFAULT_MIN_TARGET
from soroban_batcher.models.records import BatchReport, Call

from tests.conftest import CONTRACT_ID


def make_call(
    target: str = CONTRACT_ID,
    selector: str = "increase_balance",
    args: tuple = (80,),
) -> Call:
    return Call(target=target, selector=selector, args=args)


def seed_for_target(
    target: int,
    min_target: int = DEFAULT_MIN_TARGET,
    max_target: int = DEFAULT_MAX_TARGET,
) -> int:
    """Find a seed whose first draw in [min_target, max_target] is ``target``."""
    for seed in range(10_000):
        if random.Random(seed).randint(min_target, max_target) == target:
            return seed
    raise AssertionError(f"no seed found for target {target}")


def make_report(
    submitted_count: int = 3,
    block_tx_count: int = 5,
    target_count: int = 3,
    start_height: int = 101,
    verified_height: int = 102,
    first_nonce: int = 42,
    stopped_early: bool = False,
) -> BatchReport:
    nonces = list(range(first_nonce, first_nonce + submitted_count))
    return BatchReport(
        submitted_count=submitted_count,
        block_tx_count=block_tx_count,
        target_count=target_count,
        start_height=start_height,
        verified_height=verified_height,
        nonces=nonces,
        tx_hashes=[f"mock_tx_{n:08d}" for n in nonces],
        stopped_early=stopped_early,
        started_at="2025-01-01T00:00:00+00:00",
        completed_at="2025-01-01T00:00:10+00:00",
        duration_ms=10_000,
    )
