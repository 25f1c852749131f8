"""Shared fixtures for soroban_batcher tests."""

from __future__ import annotations

import pytest
from pytest_metadata.plugin import metadata_key

from soroban_batcher.models.config import BatcherConfig, CallConfig
from soroban_batcher.storage.sqlite import SQLiteBatchStore

from tests.mocks import MockAccount, MockWaiter

TEST_SECRET = "SBWVJTD3F5ETMVWCNI7MM4HUAPUSCUXXMUEJZJTPRWRJGXW2BF4SVQTK"
TEST_PUBLIC = "GDNAG4KFFVF5HCSGRWZIXZNL2SR2KBGJSHW2A6FI6DZI62XF6IBLO4GD"

CONTRACT_ID = "CCEDYFIHUCJFITWEOT7BWUO2HBQQ72L244ZXQ4YNOC6FYRDN3MKDQFK7"


def pytest_configure(config):
    """Add network info to the pytest-metadata Environment table."""
    meta = config.stash.setdefault(metadata_key, {})
    meta["Network"] = "Stellar Testnet (mocked)"
    meta["Contract"] = CONTRACT_ID
    meta["Account"] = TEST_PUBLIC


def make_test_config(**overrides) -> BatcherConfig:
    """Build a BatcherConfig suitable for testing."""
    defaults = dict(
        poll_interval=0.0,
        min_target=3,
        max_target=10,
        seed=None,
        await_confirmation=False,
        confirmation_timeout=1,
        rpc_url="https://soroban-testnet.stellar.org",
        network_passphrase="Test SDF Network ; September 2015",
        keypair_secret=TEST_SECRET,
        call=CallConfig(
            contract_id=CONTRACT_ID,
            function="increase_balance",
            args=["u32:80"],
        ),
        db_path=":memory:",
    )
    defaults.update(overrides)
    return BatcherConfig(**defaults)


@pytest.fixture
def test_config():
    """Default BatcherConfig for tests."""
    return make_test_config()


@pytest.fixture
async def store():
    """Initialized in-memory SQLiteBatchStore."""
    s = SQLiteBatchStore(":memory:")
    await s.initialize()
    yield s
    await s.close()


@pytest.fixture
def events():
    """Shared, ordered log of provider/account interactions."""
    return []


@pytest.fixture
def mock_account(events):
    return MockAccount(address=TEST_PUBLIC, events=events)


@pytest.fixture
def mock_waiter():
    return MockWaiter()
