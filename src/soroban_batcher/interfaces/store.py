"""BatchStore protocol - persists the history of batch runs."""

from __future__ import annotations

from typing import Protocol

from soroban_batcher.models.records import (
    BatchRecord,
    BatchReport,
    BatchState,
    SubmissionRecord,
)


class BatchStore(Protocol):
    """Run history for finished and aborted batches."""

    async def initialize(self) -> None:
        ...

    async def close(self) -> None:
        ...

    async def save_report(self, report: BatchReport) -> int:
        """Persist a completed batch and its submissions. Returns the batch id."""
        ...

    async def save_failure(self, state: BatchState, error: str) -> int:
        """Persist an aborted batch with whatever it submitted before failing."""
        ...

    async def get_reports(self, limit: int = 20) -> list[BatchRecord]:
        ...

    async def get_submissions(self, batch_id: int) -> list[SubmissionRecord]:
        ...
