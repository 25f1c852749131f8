"""Batch state and result records."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class BatchPhase(str, Enum):
    """States of the batch coordinator, in the order they are visited."""

    AWAITING_CLEAN_BLOCK = "awaiting_clean_block"
    SUBMITTING = "submitting"
    AWAITING_BOUNDARY = "awaiting_boundary"
    VERIFYING = "verifying"
    DONE = "done"


@dataclass(frozen=True)
class Call:
    """A contract invocation reused verbatim for every transaction in a batch."""

    target: str  # contract address
    selector: str  # function name
    args: tuple[Any, ...] = ()


@dataclass
class SubmissionResult:
    """Outcome of a single dispatch. Never persisted."""

    tx_hash: str
    nonce: int
    accepted: bool = True


@dataclass
class BatchState:
    """Mutable state of one batch, owned by the BatchCoordinator."""

    target_count: int
    submitted_count: int = 0
    start_height: int | None = None  # first height after the clean-block wait
    sync_height: int | None = None  # re-recorded when the boundary is crossed
    phase: BatchPhase = BatchPhase.AWAITING_CLEAN_BLOCK
    boundary_seen: bool = False
    nonces: list[int] = field(default_factory=list)
    tx_hashes: list[str] = field(default_factory=list)


@dataclass
class BatchReport:
    """Exit value of a completed batch."""

    submitted_count: int
    block_tx_count: int
    target_count: int
    start_height: int
    verified_height: int
    nonces: list[int] = field(default_factory=list)
    tx_hashes: list[str] = field(default_factory=list)
    stopped_early: bool = False
    started_at: str = ""  # ISO 8601
    completed_at: str = ""
    duration_ms: int = 0


@dataclass
class BatchRecord:
    """A batch run as persisted in the history store."""

    id: int
    status: str  # "done" | "failed"
    submitted_count: int
    target_count: int
    block_tx_count: int | None
    start_height: int | None
    verified_height: int | None
    stopped_early: bool
    error: str | None
    duration_ms: int
    created_at: str


@dataclass
class SubmissionRecord:
    """One dispatched transaction as persisted in the history store."""

    batch_id: int
    position: int
    nonce: int
    tx_hash: str
