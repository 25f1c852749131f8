"""SQLite implementation of the BatchStore protocol."""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path

import aiosqlite

from soroban_batcher.models.records import (
    BatchRecord,
    BatchReport,
    BatchState,
    SubmissionRecord,
)

SCHEMA = """
-- One row per batch run, finished or aborted
CREATE TABLE IF NOT EXISTS batches (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    status TEXT NOT NULL,
    submitted_count INTEGER NOT NULL,
    target_count INTEGER NOT NULL,
    block_tx_count INTEGER,
    start_height INTEGER,
    verified_height INTEGER,
    stopped_early INTEGER NOT NULL DEFAULT 0,
    error TEXT,
    duration_ms INTEGER NOT NULL DEFAULT 0,
    created_at TEXT NOT NULL DEFAULT (datetime('now'))
);

-- Nonce log: one row per dispatched transaction
CREATE TABLE IF NOT EXISTS submissions (
    batch_id INTEGER NOT NULL REFERENCES batches(id),
    position INTEGER NOT NULL,
    nonce INTEGER NOT NULL,
    tx_hash TEXT NOT NULL,
    PRIMARY KEY (batch_id, position)
);
CREATE INDEX IF NOT EXISTS idx_submissions_nonce ON submissions(nonce);
"""


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


class SQLiteBatchStore:
    """SQLite-backed run history."""

    def __init__(self, db_path: str) -> None:
        self._db_path = db_path
        self._db: aiosqlite.Connection | None = None

    async def initialize(self) -> None:
        Path(self._db_path).parent.mkdir(parents=True, exist_ok=True)
        self._db = await aiosqlite.connect(self._db_path)
        self._db.row_factory = aiosqlite.Row
        await self._db.executescript(SCHEMA)
        await self._db.commit()

    async def close(self) -> None:
        if self._db:
            await self._db.close()
            self._db = None

    @property
    def db(self) -> aiosqlite.Connection:
        assert self._db is not None, "Store not initialized. Call initialize() first."
        return self._db

    # ── Writes ─────────────────────────────────────────────

    async def save_report(self, report: BatchReport) -> int:
        cur = await self.db.execute(
            "INSERT INTO batches"
            " (status, submitted_count, target_count, block_tx_count, start_height,"
            "  verified_height, stopped_early, duration_ms, created_at)"
            " VALUES ('done', ?, ?, ?, ?, ?, ?, ?, ?)",
            (
                report.submitted_count, report.target_count, report.block_tx_count,
                report.start_height, report.verified_height, int(report.stopped_early),
                report.duration_ms, report.completed_at or _now(),
            ),
        )
        batch_id = cur.lastrowid
        await self._save_submissions(batch_id, report.nonces, report.tx_hashes)
        await self.db.commit()
        return batch_id

    async def save_failure(self, state: BatchState, error: str) -> int:
        cur = await self.db.execute(
            "INSERT INTO batches"
            " (status, submitted_count, target_count, start_height, verified_height,"
            "  stopped_early, error, created_at)"
            " VALUES ('failed', ?, ?, ?, NULL, ?, ?, ?)",
            (
                state.submitted_count, state.target_count, state.start_height,
                int(state.boundary_seen), error, _now(),
            ),
        )
        batch_id = cur.lastrowid
        await self._save_submissions(batch_id, state.nonces, state.tx_hashes)
        await self.db.commit()
        return batch_id

    async def _save_submissions(
        self, batch_id: int, nonces: list[int], tx_hashes: list[str]
    ) -> None:
        await self.db.executemany(
            "INSERT INTO submissions (batch_id, position, nonce, tx_hash) VALUES (?, ?, ?, ?)",
            [
                (batch_id, i, nonce, tx_hash)
                for i, (nonce, tx_hash) in enumerate(zip(nonces, tx_hashes))
            ],
        )

    # ── Reads ──────────────────────────────────────────────

    async def get_reports(self, limit: int = 20) -> list[BatchRecord]:
        async with self.db.execute(
            "SELECT * FROM batches ORDER BY id DESC LIMIT ?", (limit,)
        ) as cur:
            return [_row_to_batch(row) async for row in cur]

    async def get_submissions(self, batch_id: int) -> list[SubmissionRecord]:
        async with self.db.execute(
            "SELECT * FROM submissions WHERE batch_id=? ORDER BY position", (batch_id,)
        ) as cur:
            return [
                SubmissionRecord(
                    batch_id=row["batch_id"],
                    position=row["position"],
                    nonce=row["nonce"],
                    tx_hash=row["tx_hash"],
                )
                async for row in cur
            ]


def _row_to_batch(row: aiosqlite.Row) -> BatchRecord:
    return BatchRecord(
        id=row["id"],
        status=row["status"],
        submitted_count=row["submitted_count"],
        target_count=row["target_count"],
        block_tx_count=row["block_tx_count"],
        start_height=row["start_height"],
        verified_height=row["verified_height"],
        stopped_early=bool(row["stopped_early"]),
        error=row["error"],
        duration_ms=row["duration_ms"],
        created_at=row["created_at"],
    )
