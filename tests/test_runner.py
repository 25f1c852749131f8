"""BatchRunner wiring: mocked collaborators, real history store."""

from __future__ import annotations

import pytest

from soroban_batcher.errors import SubmissionRejected
from soroban_batcher.runner import BatchRunner
from soroban_batcher.storage.sqlite import SQLiteBatchStore

from tests.conftest import TEST_PUBLIC, make_test_config
from tests.factories import seed_for_target
from tests.mocks import MockAccount, MockProvider, MockWaiter


def make_runner(tmp_path, provider, account, target=3, **overrides) -> BatchRunner:
    cfg = make_test_config(
        db_path=str(tmp_path / "history.db"), seed=seed_for_target(target), **overrides,
    )
    runner = BatchRunner(cfg)
    runner.provider = provider
    runner.account = account
    runner.waiter = MockWaiter()
    return runner


async def _history(tmp_path):
    store = SQLiteBatchStore(str(tmp_path / "history.db"))
    await store.initialize()
    try:
        batches = await store.get_reports()
        subs = {b.id: await store.get_submissions(b.id) for b in batches}
        return batches, subs
    finally:
        await store.close()


async def test_run_records_report(tmp_path, mock_account):
    provider = MockProvider([100, 101, 101, 101, 101, 102], nonce=30, block_tx_counts={102: 6})
    runner = make_runner(tmp_path, provider, mock_account, target=3)

    report = await runner.run()

    assert report.submitted_count == 3
    assert report.block_tx_count == 6
    assert provider.closed
    batches, subs = await _history(tmp_path)
    assert len(batches) == 1
    assert batches[0].id == runner.last_batch_id
    assert batches[0].status == "done"
    assert [s.nonce for s in subs[batches[0].id]] == [30, 31, 32]


async def test_run_records_failure_and_reraises(tmp_path):
    account = MockAccount(address=TEST_PUBLIC, reject_at={2})
    provider = MockProvider([100, 101], nonce=50)
    runner = make_runner(tmp_path, provider, account, target=5)

    with pytest.raises(SubmissionRejected):
        await runner.run()

    assert provider.closed
    batches, subs = await _history(tmp_path)
    assert batches[0].status == "failed"
    assert batches[0].submitted_count == 1
    assert [s.nonce for s in subs[batches[0].id]] == [50]


async def test_run_without_history(tmp_path, mock_account):
    cfg = make_test_config(db_path=str(tmp_path / "history.db"), seed=seed_for_target(3))
    runner = BatchRunner(cfg, record_history=False)
    runner.provider = MockProvider([100, 101, 102])
    runner.account = mock_account

    report = await runner.run()

    assert report.submitted_count == 1
    assert runner.store is None
    assert not (tmp_path / "history.db").exists()


async def test_confirmation_flag_reaches_coordinator(tmp_path, mock_account):
    provider = MockProvider([100, 101, 102])
    runner = make_runner(tmp_path, provider, mock_account, await_confirmation=True)

    report = await runner.run()

    assert runner.waiter.waited == report.tx_hashes


def test_call_built_from_config(tmp_path):
    runner = BatchRunner(make_test_config(db_path=str(tmp_path / "h.db")))

    call = runner.build_call()

    assert call.selector == "increase_balance"
    assert len(call.args) == 1


def test_invalid_config_rejected():
    with pytest.raises(ValueError, match="min_target"):
        BatchRunner(make_test_config(min_target=8, max_target=4))
