"""Stellar/Soroban collaborators for the batch core."""

from soroban_batcher.stellar.account import SorobanAccount
from soroban_batcher.stellar.args import parse_arg, parse_args
from soroban_batcher.stellar.provider import SorobanProvider
from soroban_batcher.stellar.waiter import SorobanConfirmationWaiter

__all__ = [
    "SorobanAccount",
    "SorobanProvider",
    "SorobanConfirmationWaiter",
    "parse_arg",
    "parse_args",
]
