"""Protocol interfaces for all soroban_batcher collaborators."""

from soroban_batcher.interfaces.account import Account
from soroban_batcher.interfaces.provider import Provider
from soroban_batcher.interfaces.store import BatchStore
from soroban_batcher.interfaces.waiter import ConfirmationWaiter

__all__ = [
    "Account",
    "Provider",
    "BatchStore",
    "ConfirmationWaiter",
]
