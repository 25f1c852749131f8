"""Data models for the soroban_batcher package."""

from soroban_batcher.models.config import BatcherConfig, CallConfig
from soroban_batcher.models.records import (
    BatchPhase,
    BatchRecord,
    BatchReport,
    BatchState,
    Call,
    SubmissionRecord,
    SubmissionResult,
)

__all__ = [
    "BatcherConfig", "CallConfig",
    "BatchPhase", "BatchRecord", "BatchReport", "BatchState",
    "Call", "SubmissionRecord", "SubmissionResult",
]
