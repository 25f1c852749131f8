"""Nonce tracker: initialization and post-increment handout."""

from __future__ import annotations

import pytest

from soroban_batcher.batch.nonce import NonceTracker


def test_tracker_post_increments():
    tracker = NonceTracker()
    tracker.initialize(41)

    assert tracker.next() == 41
    assert tracker.next() == 42
    assert tracker.peek == 43


def test_tracker_initialize_only_once():
    tracker = NonceTracker()
    tracker.initialize(0)

    with pytest.raises(RuntimeError):
        tracker.initialize(5)


def test_tracker_requires_initialize():
    tracker = NonceTracker()
    assert not tracker.initialized

    with pytest.raises(RuntimeError):
        tracker.next()
    with pytest.raises(RuntimeError):
        _ = tracker.peek


def test_tracker_rejects_negative_start():
    with pytest.raises(ValueError):
        NonceTracker().initialize(-1)
