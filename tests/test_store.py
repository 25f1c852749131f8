"""Run history persistence."""

from __future__ import annotations

from soroban_batcher.models.records import BatchState

from tests.factories import make_report


async def test_save_and_list_report(store):
    report = make_report(submitted_count=3, block_tx_count=7, first_nonce=42)

    batch_id = await store.save_report(report)

    batches = await store.get_reports()
    assert [b.id for b in batches] == [batch_id]
    b = batches[0]
    assert b.status == "done"
    assert b.submitted_count == 3
    assert b.block_tx_count == 7
    assert b.verified_height == 102
    assert b.stopped_early is False
    assert b.error is None


async def test_submissions_keep_nonce_order(store):
    batch_id = await store.save_report(make_report(submitted_count=4, first_nonce=9))

    subs = await store.get_submissions(batch_id)

    assert [s.nonce for s in subs] == [9, 10, 11, 12]
    assert [s.position for s in subs] == [0, 1, 2, 3]
    assert subs[0].tx_hash == "mock_tx_00000009"


async def test_save_failure_records_partial_batch(store):
    state = BatchState(
        target_count=5,
        submitted_count=1,
        start_height=101,
        sync_height=101,
        nonces=[50],
        tx_hashes=["mock_tx_00000050"],
    )

    batch_id = await store.save_failure(state, "submission rejected (nonce 51): bad seq")

    b = (await store.get_reports())[0]
    assert b.id == batch_id
    assert b.status == "failed"
    assert b.submitted_count == 1
    assert b.block_tx_count is None
    assert "nonce 51" in b.error
    assert [s.nonce for s in await store.get_submissions(batch_id)] == [50]


async def test_reports_newest_first_and_limited(store):
    ids = [await store.save_report(make_report()) for _ in range(4)]

    batches = await store.get_reports(limit=2)

    assert [b.id for b in batches] == [ids[3], ids[2]]
