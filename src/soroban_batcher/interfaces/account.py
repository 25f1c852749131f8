"""Account protocol - a signing account that can execute a call at a given nonce."""

from __future__ import annotations

from typing import Protocol

from soroban_batcher.models.records import Call


class Account(Protocol):
    """External signing capability. Signing internals are not our concern."""

    @property
    def address(self) -> str:
        ...

    async def execute(self, call: Call, nonce: int) -> str:
        """Sign and dispatch ``call`` using ``nonce``. Returns the tx hash."""
        ...
