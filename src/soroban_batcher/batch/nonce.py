"""Nonce tracker - in-memory counter of the next nonce to use."""

from __future__ import annotations


class NonceTracker:
    """Hands out strictly sequential nonces for one account.

    The counter advances as soon as a nonce is handed out, whether or not the
    transaction using it is ever accepted. There is no rollback.
    """

    def __init__(self) -> None:
        self._next: int | None = None

    @property
    def initialized(self) -> bool:
        return self._next is not None

    @property
    def peek(self) -> int:
        """The nonce the next call to ``next()`` will return."""
        if self._next is None:
            raise RuntimeError("nonce tracker not initialized")
        return self._next

    def initialize(self, value: int) -> None:
        """Set the starting nonce. Allowed exactly once."""
        if self._next is not None:
            raise RuntimeError("nonce tracker already initialized")
        if value < 0:
            raise ValueError(f"nonce must be non-negative, got {value}")
        self._next = value

    def next(self) -> int:
        """Return the current nonce and advance by one."""
        if self._next is None:
            raise RuntimeError("nonce tracker not initialized")
        value = self._next
        self._next = value + 1
        return value
